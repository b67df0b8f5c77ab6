from __future__ import annotations
from dataclasses import dataclass
from typing import List
from stackradar.layout.geometry import LayoutParameters, point_on_axis
from stackradar.scene.node import SceneHandle, SceneNode
from stackradar.scene.reconcile import ReconcileResult, reconcile

SEGMENT_NODE = "segmentNode"


@dataclass(frozen=True)
class RingSegment:
    level: int
    index: int
    x1: float
    y1: float
    x2: float
    y2: float


def ring_segments(layout: LayoutParameters, levels: int) -> List[RingSegment]:
    """
    levels-1 concentric rings at radius·(level+1)/levels, each made of one
    segment per category joining axis i to axis i+1. Data values play no part.
    """
    out: List[RingSegment] = []
    step = layout.angular_step
    for level in range(levels - 1):
        level_radius = layout.radius * ((level + 1) / levels)
        for i in range(layout.category_count):
            x1, y1 = point_on_axis(i, level_radius, step)
            x2, y2 = point_on_axis(i + 1, level_radius, step)
            out.append(RingSegment(level, i, x1, y1, x2, y2))
    return out


def _apply_segment(node: SceneNode, seg: RingSegment, _i: int) -> None:
    node.set(x1=seg.x1, y1=seg.y1, x2=seg.x2, y2=seg.y2)


def draw_rings(handle: SceneHandle, layout: LayoutParameters, levels: int) -> ReconcileResult:
    return reconcile(
        handle.segments,
        ring_segments(layout, levels),
        cls=SEGMENT_NODE,
        tag="line",
        key=lambda seg, _i: f"{seg.level}-{seg.index}",
        apply=_apply_segment,
        layer="rings",
    )
