from __future__ import annotations
from typing import Dict, List, Sequence, Tuple
from stackradar.layout.geometry import LayoutParameters, point_on_axis
from stackradar.scene.node import SceneHandle, SceneNode
from stackradar.scene.reconcile import ReconcileResult, reconcile

AXIS_NODE = "axisNode"
AXIS_LABEL = "axisLabel"


def axis_keys(categories: Sequence[str]) -> List[str]:
    """One key per category label; repeated labels get an occurrence suffix."""
    seen: Dict[str, int] = {}
    keys: List[str] = []
    for label in categories:
        n = seen.get(label, 0)
        seen[label] = n + 1
        keys.append(label if n == 0 else f"{label}\x1f{n}")
    return keys


def label_position(index: int, layout: LayoutParameters, offset_x: float, offset_y: float) -> Tuple[float, float]:
    """Spoke end pushed outward along the spoke's sin/cos so the text clears it."""
    sx, sy = point_on_axis(index, 1.0, layout.angular_step)
    return (layout.radius * sx + offset_x * sx, layout.radius * sy + offset_y * sy)


def draw_axes(handle: SceneHandle, categories: Sequence[str], layout: LayoutParameters) -> ReconcileResult:
    keys = axis_keys(categories)
    items = list(zip(keys, categories))

    def apply(node: SceneNode, item: Tuple[str, str], i: int) -> None:
        x2, y2 = point_on_axis(i, layout.radius, layout.angular_step)
        node.set(label=item[1], x1=0, y1=0, x2=x2, y2=y2)

    return reconcile(
        handle.axis, items,
        cls=AXIS_NODE, tag="line",
        key=lambda item, _i: item[0],
        apply=apply,
        layer="axes",
    )


def draw_axis_labels(
    handle: SceneHandle,
    categories: Sequence[str],
    layout: LayoutParameters,
    *,
    offset_x: float = 20,
    offset_y: float = 10,
    shift_y: float = -10,
) -> ReconcileResult:
    keys = axis_keys(categories)
    items = list(zip(keys, categories))

    def apply(node: SceneNode, item: Tuple[str, str], i: int) -> None:
        x, y = label_position(i, layout, offset_x, offset_y)
        node.set(x=x, y=y, text_anchor="middle", dy="1.5em", transform=f"translate(0,{shift_y:g})")
        node.text = item[1]

    return reconcile(
        handle.axis, items,
        cls=AXIS_LABEL, tag="text",
        key=lambda item, _i: item[0],
        apply=apply,
        layer="labels",
    )
