from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple
from stackradar.interfaces import Viewport


@dataclass(frozen=True)
class Transition:
    prop: str
    target: float
    duration_ms: int


class SceneNode:
    """
    One drawable element (svg, g, line, text, polygon, circle, rect).
    `key` identifies the node among siblings of the same class for reconciliation;
    `handlers` maps pointer events to callables; `state` is per-node interaction state.
    """

    def __init__(
        self,
        tag: str,
        *,
        key: Optional[str] = None,
        cls: Optional[str] = None,
        attrs: Optional[Dict[str, Any]] = None,
        text: Optional[str] = None,
    ):
        self.tag = tag
        self.key = key
        self.cls = cls
        self.attrs: Dict[str, Any] = dict(attrs or {})
        self.style: Dict[str, Any] = {}
        self.text = text
        self.title: Optional[str] = None
        self.transition: Optional[Transition] = None
        self.children: List[SceneNode] = []
        self.handlers: Dict[str, Callable[[SceneNode], Any]] = {}
        self.state: Dict[str, Any] = {}
        self.parent: Optional[SceneNode] = None

    def __repr__(self) -> str:
        return f"SceneNode({self.tag}.{self.cls or ''}#{self.key or ''})"

    # --------------------------- tree ---------------------------

    def append(self, child: "SceneNode") -> "SceneNode":
        child.parent = self
        self.children.append(child)
        return child

    def remove(self, child: "SceneNode") -> None:
        self.children.remove(child)
        child.parent = None

    def clear(self) -> None:
        for ch in self.children:
            ch.parent = None
        self.children = []

    def select_all(self, cls: str) -> List["SceneNode"]:
        """Direct children carrying class `cls`, in document order."""
        return [ch for ch in self.children if ch.cls == cls]

    def select(self, cls: str) -> Optional["SceneNode"]:
        """First descendant (depth-first) carrying class `cls`."""
        for node in self.walk():
            if node is not self and node.cls == cls:
                return node
        return None

    def child(self, cls: str, key: str) -> Optional["SceneNode"]:
        for ch in self.children:
            if ch.cls == cls and ch.key == key:
                return ch
        return None

    def reorder(self, cls: str, ordered: List["SceneNode"]) -> None:
        """Put the `cls` children into `ordered` order, leaving other children in place."""
        slots = [i for i, ch in enumerate(self.children) if ch.cls == cls]
        if len(slots) != len(ordered):
            raise ValueError(f"reorder: {len(slots)} '{cls}' children but {len(ordered)} nodes given")
        for i, node in zip(slots, ordered):
            self.children[i] = node

    def walk(self) -> Iterator["SceneNode"]:
        yield self
        for ch in self.children:
            yield from ch.walk()

    # --------------------------- attributes & events ---------------------------

    def set(self, **attrs: Any) -> "SceneNode":
        for k, v in attrs.items():
            self.attrs[k.replace("_", "-")] = v
        return self

    def on(self, event: str, handler: Optional[Callable[["SceneNode"], Any]]) -> "SceneNode":
        if handler is None:
            self.handlers.pop(event, None)
        else:
            self.handlers[event] = handler
        return self

    def dispatch(self, event: str) -> Any:
        handler = self.handlers.get(event)
        if handler is None:
            return None
        return handler(self)

    def snapshot(self) -> Tuple[Any, ...]:
        """Structural fingerprint (tag/class/key/attributes/children) used to compare renders."""
        return (
            self.tag,
            self.cls,
            self.key,
            tuple(sorted((k, repr(v)) for k, v in self.attrs.items())),
            tuple(sorted((k, repr(v)) for k, v in self.style.items())),
            self.text,
            self.title,
            tuple(ch.snapshot() for ch in self.children),
        )


class SceneHandle:
    """
    The drawing surface owned by the host. Layout code only reaches the scene
    through the handle passed into each update.
    """

    VISUAL_CLASS = "radarChart"

    def __init__(self, root: SceneNode):
        self.root = root
        self.main = self._group(root, "main")
        self.segments = self._group(root, "segments")
        self.axis = self._group(root, "axis")
        self.chart = self._group(root, "chart")
        self.legend = self._group(root, "legend")

    @staticmethod
    def _group(root: SceneNode, cls: str) -> SceneNode:
        node = root.select(cls)
        if node is None:
            raise ValueError(f"Scene root has no '{cls}' group; use attach_surface()")
        return node

    def resize(self, viewport: Viewport) -> None:
        self.root.set(width=viewport.width, height=viewport.height)
        self.main.set(transform=f"translate({viewport.width / 2:g},{viewport.height / 2:g})")

    def clear(self) -> None:
        for group in (self.segments, self.axis, self.chart, self.legend):
            group.clear()

    def layer_nodes(self) -> Dict[str, int]:
        return {
            "segments": len(self.segments.children),
            "axis": len(self.axis.children),
            "chart": len(self.chart.children),
            "legend": len(self.legend.children),
        }


def attach_surface(viewport: Optional[Viewport] = None) -> SceneHandle:
    """Create an empty radar scene: svg > (g.main > g.segments, g.axis, g.chart), g.legend."""
    root = SceneNode("svg", cls=SceneHandle.VISUAL_CLASS, attrs={"xmlns": "http://www.w3.org/2000/svg"})
    main = root.append(SceneNode("g", cls="main"))
    for cls in ("segments", "axis", "chart"):
        main.append(SceneNode("g", cls=cls))
    root.append(SceneNode("g", cls="legend"))

    handle = SceneHandle(root)
    if viewport is not None:
        handle.resize(viewport)
    return handle
