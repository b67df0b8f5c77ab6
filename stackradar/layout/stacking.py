from __future__ import annotations
from dataclasses import dataclass, replace
from typing import List, Sequence
from stackradar.interfaces import SeriesPoint, ShapeMismatchError


@dataclass(frozen=True)
class StackResult:
    series: List[List[SeriesPoint]]
    max_total: float


def stack_series(series: Sequence[Sequence[SeriesPoint]]) -> StackResult:
    """
    Bottom-up accumulation per category: series 0 sits on 0, series j on the
    sum of series 0..j-1 at the same category. Returns new points.
    """
    if not series:
        return StackResult(series=[], max_total=0.0)

    width = len(series[0])
    for j, points in enumerate(series):
        if len(points) != width:
            raise ShapeMismatchError(
                f"Series #{j} has {len(points)} point(s), expected {width} (one per category)"
            )

    baselines = [0.0] * width
    stacked: List[List[SeriesPoint]] = []
    for points in series:
        layer: List[SeriesPoint] = []
        for k, p in enumerate(points):
            layer.append(replace(p, stacked_baseline=baselines[k]))
            baselines[k] += p.raw_value
        stacked.append(layer)

    max_total = max(baselines) if baselines else 0.0
    return StackResult(series=stacked, max_total=max_total)
