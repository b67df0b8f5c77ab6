# stackradar/interfaces.py
from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, List, Optional, Sequence

if TYPE_CHECKING:
    from stackradar.scene.node import SceneHandle


# --------------------------- errors ---------------------------

class RadarError(Exception):
    """Base class for every condition raised by the layout engine."""


class EmptyInputError(RadarError):
    """No categories or no series; the chart renders nothing."""


class ShapeMismatchError(RadarError, ValueError):
    """A series does not provide exactly one value per category."""


class InvalidValueError(RadarError, ValueError):
    """A value is missing, non-numeric, non-finite or negative."""


# --------------------------- geometry inputs ---------------------------

@dataclass(frozen=True)
class Viewport:
    width: float
    height: float


@dataclass(frozen=True)
class Margin:
    top: float = 50
    bottom: float = 50
    left: float = 100
    right: float = 100


# --------------------------- data model ---------------------------

@dataclass(frozen=True)
class SelectionId:
    key: str

    def __str__(self) -> str:
        return self.key


@dataclass(frozen=True)
class SeriesPoint:
    category_index: int
    raw_value: float
    color: str
    identity: SelectionId
    stacked_baseline: float = 0.0
    label: Optional[str] = None

    @property
    def top(self) -> float:
        return self.stacked_baseline + self.raw_value


@dataclass(frozen=True)
class LegendEntry:
    label: str
    color: str
    identity: SelectionId


@dataclass(frozen=True)
class LegendData:
    title: str
    entries: List[LegendEntry] = field(default_factory=list)


@dataclass(frozen=True)
class SeriesInput:
    display_name: str
    values: Sequence[Optional[float]]


@dataclass(frozen=True)
class TabularSnapshot:
    """One fully-resolved update: C category labels and S value series."""
    categories: Sequence[str]
    series: Sequence[SeriesInput]
    category_display_name: str = ""


@dataclass(frozen=True)
class ChartData:
    categories: List[str]
    series: List[List[SeriesPoint]]
    legend: LegendData


ColorAssigner = Callable[[int], str]


# --------------------------- collaborators ---------------------------

class SelectionManager(ABC):
    """
    External selection-state owner.
    `select` is awaited by the hover controller before the opacity
    transition of the hovered polygon is applied.
    """

    @abstractmethod
    async def select(self, identity: SelectionId, multi: bool = False) -> List[SelectionId]:
        ...


class LegendRenderer(ABC):
    @abstractmethod
    def draw_legend(self, legend: LegendData, viewport: Viewport, surface: "SceneHandle") -> None:
        ...

    @abstractmethod
    def clear(self, surface: "SceneHandle") -> None:
        ...


@dataclass(frozen=True)
class Animator:
    duration_ms: int = 250


def animation_duration(animator: Optional[Animator], suppress: bool = False) -> int:
    """0 when animations are suppressed for this update or no animator is configured."""
    if animator is None or suppress:
        return 0
    return max(0, int(animator.duration_ms))
