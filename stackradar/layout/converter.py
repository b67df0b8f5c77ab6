from __future__ import annotations
import math
from typing import Any, Dict, List
from stackradar.interfaces import (
    ChartData,
    ColorAssigner,
    EmptyInputError,
    InvalidValueError,
    LegendData,
    LegendEntry,
    SeriesPoint,
    ShapeMismatchError,
    TabularSnapshot,
)
from stackradar.selection import series_identity


def _coerce_value(v: Any, *, series_name: str, index: int) -> float:
    if v is None:
        raise InvalidValueError(f"Series '{series_name}' has no value at category #{index}")
    if isinstance(v, bool):
        raise InvalidValueError(f"Series '{series_name}' value at category #{index} is not a number: {v!r}")
    try:
        fv = float(v)
    except (TypeError, ValueError):
        raise InvalidValueError(
            f"Series '{series_name}' value at category #{index} is not a number: {v!r}"
        ) from None
    if not math.isfinite(fv):
        raise InvalidValueError(f"Series '{series_name}' value at category #{index} is not finite: {v!r}")
    if fv < 0:
        raise InvalidValueError(f"Series '{series_name}' value at category #{index} is negative: {v!r}")
    return fv


def convert(snapshot: TabularSnapshot, colors: ColorAssigner) -> ChartData:
    """
    Normalize a tabular snapshot into S series of C points plus one legend entry
    per series. Baselines are left at 0 (see stacking.stack_series).
    Raises EmptyInputError, ShapeMismatchError or InvalidValueError.
    """
    categories = [str(c) for c in (snapshot.categories or [])]
    series_in = list(snapshot.series or [])
    if not categories or not series_in:
        raise EmptyInputError(
            f"Nothing to draw: {len(categories)} categor(ies), {len(series_in)} series"
        )

    empty = [s.display_name for s in series_in if not s.values]
    if empty:
        raise EmptyInputError(f"Nothing to draw: series {empty} have no values")

    n = len(categories)
    for s in series_in:
        if len(s.values) != n:
            raise ShapeMismatchError(
                f"Series '{s.display_name}' has {len(s.values)} value(s) for {n} categor(ies)"
            )

    occurrences: Dict[str, int] = {}
    series_out: List[List[SeriesPoint]] = []
    entries: List[LegendEntry] = []

    for i, s in enumerate(series_in):
        name = str(s.display_name)
        color = colors(i)
        seen = occurrences.get(name, 0)
        occurrences[name] = seen + 1
        identity = series_identity(name, seen)

        entries.append(LegendEntry(label=name, color=color, identity=identity))
        series_out.append([
            SeriesPoint(
                category_index=k,
                raw_value=_coerce_value(v, series_name=name, index=k),
                color=color,
                identity=identity,
                label=categories[k],
            )
            for k, v in enumerate(s.values)
        ])

    legend = LegendData(title=snapshot.category_display_name or "", entries=entries)
    return ChartData(categories=categories, series=series_out, legend=legend)
