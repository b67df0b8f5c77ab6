from __future__ import annotations
from typing import List, Sequence, Tuple
from stackradar.interfaces import SeriesPoint
from stackradar.layout.geometry import LayoutParameters
from stackradar.rendering.hover import HoverController
from stackradar.scene.node import SceneHandle, SceneNode
from stackradar.scene.reconcile import ReconcileResult, reconcile

CHART_NODE = "chartNode"
CHART_POLYGON = "chartPolygon"
CHART_DOT = "chartDot"


def polygon_points(points: Sequence[SeriesPoint], layout: LayoutParameters) -> List[Tuple[float, float]]:
    """Vertices at the top of each stacked point, one per category."""
    return [layout.point(p.category_index, p.top) for p in points]


def format_points(coords: Sequence[Tuple[float, float]]) -> str:
    return " ".join(f"{x:.2f},{y:.2f}" for x, y in coords)


def marker_title(point: SeriesPoint, series_name: str) -> str:
    return f"{point.label or point.category_index}: {series_name} = {point.raw_value:.6g}"


def draw_chart(
    handle: SceneHandle,
    series: Sequence[Sequence[SeriesPoint]],
    names: Sequence[str],
    layout: LayoutParameters,
    hover: HoverController,
    *,
    dot_radius: float = 5,
) -> ReconcileResult:
    """
    One g.chartNode per series (keyed by series identity) holding a closed
    polygon and one marker per category. Later series enclose earlier ones.
    """

    def apply_series(group: SceneNode, points: Sequence[SeriesPoint], j: int) -> None:
        coords = polygon_points(points, layout)
        color = points[0].color
        identity = points[0].identity
        name = names[j] if j < len(names) else str(identity)

        def apply_polygon(node: SceneNode, _item: Sequence[SeriesPoint], _i: int) -> None:
            hover.bind(node, identity)
            node.set(points=format_points(coords))
            node.style = {"fill": color, "opacity": hover.resting_opacity(node)}

        reconcile(
            group, [points],
            cls=CHART_POLYGON, tag="polygon",
            key=lambda _item, _i: "polygon",
            apply=apply_polygon,
            layer=f"polygon[{j}]",
        )

        def apply_dot(node: SceneNode, p: SeriesPoint, k: int) -> None:
            cx, cy = coords[k]
            node.set(r=dot_radius, cx=cx, cy=cy)
            node.style = {"fill": p.color}
            node.title = marker_title(p, name)

        reconcile(
            group, list(points),
            cls=CHART_DOT, tag="circle",
            key=lambda p, _k: str(p.category_index),
            apply=apply_dot,
            layer=f"dots[{j}]",
        )

    return reconcile(
        handle.chart,
        list(series),
        cls=CHART_NODE, tag="g",
        key=lambda points, _j: points[0].identity.key,
        apply=apply_series,
        layer="chart",
    )
