# stackradar/radar.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, Optional
from stackradar import logging as slog
from stackradar.config import RadarConfig
from stackradar.interfaces import (
    Animator,
    ChartData,
    ColorAssigner,
    EmptyInputError,
    LegendRenderer,
    SelectionManager,
    TabularSnapshot,
    Viewport,
    animation_duration,
)
from stackradar.layout.converter import convert
from stackradar.layout.geometry import LayoutParameters, compute_layout
from stackradar.layout.stacking import StackResult, stack_series
from stackradar.palette import ColorPalette
from stackradar.rendering.axes import draw_axes, draw_axis_labels
from stackradar.rendering.chart import draw_chart
from stackradar.rendering.hover import HoverController
from stackradar.rendering.legend import SceneLegend
from stackradar.rendering.rings import draw_rings
from stackradar.scene.node import SceneHandle
from stackradar.scene.reconcile import ReconcileResult


@dataclass
class UpdateResult:
    data: ChartData
    stacked: StackResult
    layout: LayoutParameters
    layers: Dict[str, ReconcileResult] = field(default_factory=dict)


class RadarChart:
    """
    Stacked radar chart.

    Every `update` converts the snapshot, stacks the series, derives the
    layout for the viewport and reconciles all layers of the scene behind
    `handle`: guide rings, axis spokes, axis labels, stacked polygons with
    markers, and the legend. Nothing but configuration and collaborators is
    kept between updates; callers must not overlap update calls.
    """

    def __init__(
        self,
        config: Optional[RadarConfig] = None,
        *,
        colors: Optional[ColorAssigner] = None,
        selection_manager: Optional[SelectionManager] = None,
        legend: Optional[LegendRenderer] = None,
        animator: Optional[Animator] = None,
    ):
        self.config = config or RadarConfig()
        self.colors = colors or ColorPalette(self.config.palette)
        self.legend = legend or SceneLegend()
        self.animator = animator if animator is not None else Animator(self.config.animation_ms)
        self.hover = HoverController(
            selection_manager,
            base_opacity=self.config.base_opacity,
            highlight_opacity=self.config.highlight_opacity,
        )

    def clear(self, handle: SceneHandle) -> None:
        handle.clear()
        self.legend.clear(handle)

    def update(
        self,
        handle: SceneHandle,
        snapshot: TabularSnapshot,
        viewport: Viewport,
        *,
        suppress_animations: bool = False,
    ) -> Optional[UpdateResult]:
        """
        Returns None when there is nothing to draw (empty input or a viewport
        smaller than the margins); the scene is cleared in that case.
        ShapeMismatchError / InvalidValueError propagate before the scene is touched.
        """
        try:
            data = convert(snapshot, self.colors)
        except EmptyInputError as e:
            slog.log_info(f"Clearing radar scene: {e}")
            self.clear(handle)
            return None

        stacked = stack_series(data.series)
        layout = compute_layout(len(data.categories), stacked.max_total, viewport, self.config.margin)
        if layout is None:
            slog.log_info(f"Clearing radar scene: viewport {viewport.width}x{viewport.height} leaves no drawing area")
            self.clear(handle)
            return None

        slog.log_debug(
            f"radar update: {len(data.categories)} categor(ies), {len(stacked.series)} series, "
            f"radius={layout.radius:g}, max_total={stacked.max_total:g}"
        )

        self.hover.duration_ms = animation_duration(self.animator, suppress_animations)

        self.legend.draw_legend(data.legend, viewport, handle)
        handle.resize(viewport)

        cfg = self.config
        layers: Dict[str, ReconcileResult] = {}
        layers["rings"] = draw_rings(handle, layout, cfg.segment_levels)
        layers["axes"] = draw_axes(handle, data.categories, layout)
        layers["labels"] = draw_axis_labels(
            handle, data.categories, layout,
            offset_x=cfg.label_offset_x, offset_y=cfg.label_offset_y, shift_y=cfg.label_shift_y,
        )
        layers["chart"] = draw_chart(
            handle, stacked.series, [e.label for e in data.legend.entries], layout, self.hover,
            dot_radius=cfg.dot_radius,
        )

        return UpdateResult(data=data, stacked=stacked, layout=layout, layers=layers)
