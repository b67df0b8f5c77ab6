from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional, Tuple
from stackradar.interfaces import Margin, Viewport

TAU = 2 * math.pi


def angular_step(category_count: int) -> float:
    if category_count < 1:
        raise ValueError(f"angular_step needs at least one category, got {category_count}")
    return TAU / category_count


def point_on_axis(index: float, distance: float, step: float) -> Tuple[float, float]:
    """
    (distance·sin(index·step), distance·cos(index·step)).
    Axes, guide rings and chart points all go through here so they stay aligned.
    """
    a = index * step
    return (distance * math.sin(a), distance * math.cos(a))


class LinearScale:
    """Linear map [0, domain_max] -> [0, range_max]; an empty domain maps everything to 0."""

    def __init__(self, domain_max: float, range_max: float):
        self.domain_max = float(domain_max)
        self.range_max = float(range_max)

    def __call__(self, value: float) -> float:
        if self.domain_max <= 0:
            return 0.0
        return (float(value) / self.domain_max) * self.range_max

    def __repr__(self) -> str:
        return f"LinearScale([0, {self.domain_max:g}] -> [0, {self.range_max:g}])"


def chart_radius(viewport: Viewport, margin: Margin) -> float:
    width = viewport.width - margin.left - margin.right
    height = viewport.height - margin.top - margin.bottom
    return min(width, height) / 2


@dataclass(frozen=True)
class LayoutParameters:
    category_count: int
    angular_step: float
    radius: float
    value_scale: LinearScale

    def point(self, index: float, value: float) -> Tuple[float, float]:
        """Chart-space position of a value on axis `index`."""
        return point_on_axis(index, self.value_scale(value), self.angular_step)


def compute_layout(
    category_count: int,
    max_total: float,
    viewport: Viewport,
    margin: Margin,
) -> Optional[LayoutParameters]:
    """Returns None when there is nothing drawable (no categories or no positive radius)."""
    if category_count < 1:
        return None
    radius = chart_radius(viewport, margin)
    if not radius > 0:
        return None
    return LayoutParameters(
        category_count=category_count,
        angular_step=angular_step(category_count),
        radius=radius,
        value_scale=LinearScale(max_total, radius),
    )
