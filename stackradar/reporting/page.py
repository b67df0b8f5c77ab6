from __future__ import annotations
from typing import List, Optional
from dominate import document, tags
from dominate.util import raw
from stackradar.interfaces import SeriesPoint
from stackradar.radar import UpdateResult

_STYLE = """
body { font-family: sans-serif; margin: 24px; color: #2b2b2b; }
.radar-container { display: inline-block; }
svg.radarChart .segmentNode { stroke: #c8c8c8; stroke-width: 1; }
svg.radarChart .axisNode { stroke: #9a9a9a; stroke-width: 1; }
svg.radarChart .axisLabel { font-size: 12px; fill: #555; }
svg.radarChart .chartPolygon { stroke: #ffffff; stroke-width: 1; }
svg.radarChart .legendTitle { font-size: 12px; font-weight: 600; }
svg.radarChart .legendText { font-size: 12px; }
.radar-table { border-collapse: collapse; margin-top: 16px; }
.radar-table th, .radar-table td { border: 1px solid #ddd; padding: 4px 10px; text-align: right; }
.radar-table th:first-child, .radar-table td:first-child { text-align: left; }
"""


def _fmt_num(v: float) -> str:
    s = f"{v:.6g}"
    if s.endswith(".0"):
        s = s[:-2]
    return s


def render_data_table(result: UpdateResult) -> tags.table:
    """Per-category values of every series plus the stacked total."""
    series: List[List[SeriesPoint]] = result.stacked.series
    names = [e.label for e in result.data.legend.entries]
    title = result.data.legend.title or "Category"

    table = tags.table(_class="radar-table")
    with table:
        with tags.tr():
            tags.th(title)
            for name in names:
                tags.th(name)
            tags.th("Total")
        for k, category in enumerate(result.data.categories):
            with tags.tr():
                tags.td(category)
                for points in series:
                    tags.td(_fmt_num(points[k].raw_value))
                tags.td(_fmt_num(series[-1][k].top if series else 0.0))
    return table


def render_page(svg_markup: str, result: Optional[UpdateResult], *, title: str = "Radar chart") -> str:
    doc = document(title=title)

    with doc.head:
        tags.style(raw(_STYLE))

    with doc:
        tags.h2(title)
        container = tags.div(_class="radar-container")
        container.add(raw(svg_markup))
        if result is not None:
            render_data_table(result)
        else:
            tags.p("No data to display.")

    return str(doc)
