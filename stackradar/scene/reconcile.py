from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Sequence, TypeVar
from stackradar import logging as slog
from stackradar.scene.node import SceneNode

T = TypeVar("T")


@dataclass
class ReconcileResult:
    added: List[SceneNode] = field(default_factory=list)
    updated: List[SceneNode] = field(default_factory=list)
    removed: List[SceneNode] = field(default_factory=list)
    nodes: List[SceneNode] = field(default_factory=list)

    @property
    def counts(self) -> Dict[str, int]:
        return {"added": len(self.added), "updated": len(self.updated), "removed": len(self.removed)}


def reconcile(
    parent: SceneNode,
    items: Sequence[T],
    *,
    cls: str,
    tag: str,
    key: Callable[[T, int], str],
    apply: Callable[[SceneNode, T, int], None],
    layer: str = "",
) -> ReconcileResult:
    """
    Diff `items` against the `cls` children of `parent`, matched by key.
      - unmatched items get a new node (added)
      - matched nodes are kept and re-applied (updated)
      - nodes whose key is gone are detached (removed)
    `apply` writes the item's attributes onto its node in both the add and update case.
    Afterwards the `cls` children follow `items` order.
    """
    previous: Dict[str, SceneNode] = {}
    for node in parent.select_all(cls):
        previous[node.key] = node

    result = ReconcileResult()
    seen = set()
    for i, item in enumerate(items):
        k = key(item, i)
        if k in seen:
            raise ValueError(f"Duplicate key {k!r} in '{cls}' layer")
        seen.add(k)

        node = previous.pop(k, None)
        if node is None:
            node = parent.append(SceneNode(tag, key=k, cls=cls))
            result.added.append(node)
        else:
            result.updated.append(node)
        apply(node, item, i)
        result.nodes.append(node)

    for node in previous.values():
        parent.remove(node)
        result.removed.append(node)

    parent.reorder(cls, result.nodes)

    c = result.counts
    slog.log_layer(layer or cls, c["added"], c["updated"], c["removed"])
    return result
