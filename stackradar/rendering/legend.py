from __future__ import annotations
from typing import Tuple
from stackradar.interfaces import LegendData, LegendEntry, LegendRenderer, Viewport
from stackradar.scene.node import SceneHandle, SceneNode
from stackradar.scene.reconcile import reconcile

LEGEND_TITLE = "legendTitle"
LEGEND_SWATCH = "legendSwatch"
LEGEND_TEXT = "legendText"


class SceneLegend(LegendRenderer):
    """
    Legend drawn into the scene's legend group along the top edge:
    title first, then one swatch + label per series, wrapping to new rows
    when the viewport is too narrow.
    """

    def __init__(self, *, item_width: float = 120, row_height: float = 18, pad: float = 10):
        self.item_width = item_width
        self.row_height = row_height
        self.pad = pad

    def _slot(self, i: int, viewport: Viewport) -> Tuple[float, float]:
        per_row = max(1, int((viewport.width - 2 * self.pad) // self.item_width))
        row, col = divmod(i, per_row)
        x = self.pad + col * self.item_width
        y = self.pad + (row + 1) * self.row_height
        return x, y

    def draw_legend(self, legend: LegendData, viewport: Viewport, surface: SceneHandle) -> None:
        group = surface.legend

        def apply_title(node: SceneNode, title: str, _i: int) -> None:
            node.set(x=self.pad, y=self.pad + 6)
            node.text = title

        reconcile(
            group, [legend.title] if legend.title else [],
            cls=LEGEND_TITLE, tag="text",
            key=lambda _t, _i: "title",
            apply=apply_title,
            layer="legend title",
        )

        def apply_swatch(node: SceneNode, entry: LegendEntry, i: int) -> None:
            x, y = self._slot(i, viewport)
            node.set(x=x, y=y, width=14, height=8)
            node.style = {"fill": entry.color}

        def apply_text(node: SceneNode, entry: LegendEntry, i: int) -> None:
            x, y = self._slot(i, viewport)
            node.set(x=x + 20, y=y + 8)
            node.text = entry.label

        reconcile(
            group, legend.entries,
            cls=LEGEND_SWATCH, tag="rect",
            key=lambda e, _i: e.identity.key,
            apply=apply_swatch,
            layer="legend swatches",
        )
        reconcile(
            group, legend.entries,
            cls=LEGEND_TEXT, tag="text",
            key=lambda e, _i: e.identity.key,
            apply=apply_text,
            layer="legend labels",
        )

    def clear(self, surface: SceneHandle) -> None:
        surface.legend.clear()
