# stackradar/ingest.py
from __future__ import annotations
import json
from typing import Any, Dict, List, Optional, Tuple
from stackradar import logging as slog
from stackradar.interfaces import SeriesInput, TabularSnapshot, Viewport


class SnapshotParser:
    """
    Parse a snapshot JSON file:
      {
        "category_name": "Skill",                      (optional)
        "categories": ["A", "B", ...],
        "series": [{"name": "...", "values": [...]}, ...],
        "viewport": {"width": 400, "height": 400}       (optional)
      }
    Structure is checked here (KeyError / TypeError); value counts and value
    types are left to the converter so the chart decides how to report them.
    """

    def parse(self, json_path: str) -> Tuple[TabularSnapshot, Optional[Viewport]]:
        with open(json_path, "r", encoding="utf-8") as f:
            raw = json.load(f)
        return self.parse_obj(raw)

    def parse_obj(self, raw: Any) -> Tuple[TabularSnapshot, Optional[Viewport]]:
        if not isinstance(raw, dict):
            raise TypeError(f"Snapshot root must be an object, got {type(raw).__name__}")

        for key in ("categories", "series"):
            if key not in raw:
                raise KeyError(f"Missing section: '{key}'")

        categories = raw["categories"]
        if not isinstance(categories, list):
            raise TypeError(f"'categories' must be a list, got {type(categories).__name__}")

        entries = raw["series"]
        if not isinstance(entries, list):
            raise TypeError(f"'series' must be a list, got {type(entries).__name__}")

        series: List[SeriesInput] = []
        for idx, entry in enumerate(entries):
            if not isinstance(entry, dict):
                raise TypeError(f"Series #{idx} is not an object")
            if "name" not in entry:
                raise KeyError(f"Series #{idx} missing required field 'name'")
            if "values" not in entry:
                raise KeyError(f"Series #{idx} missing required field 'values'")
            values = entry["values"]
            if not isinstance(values, list):
                raise TypeError(f"Series #{idx} 'values' must be a list, got {type(values).__name__}")
            series.append(SeriesInput(display_name=str(entry["name"]), values=list(values)))

        snapshot = TabularSnapshot(
            categories=[str(c) for c in categories],
            series=series,
            category_display_name=str(raw.get("category_name") or ""),
        )
        slog.log_debug(f"snapshot: {len(snapshot.categories)} categor(ies), {len(series)} series")
        return snapshot, self._viewport(raw.get("viewport"))

    @staticmethod
    def _viewport(raw: Optional[Dict[str, Any]]) -> Optional[Viewport]:
        if raw is None:
            return None
        if not isinstance(raw, dict):
            raise TypeError(f"'viewport' must be an object, got {type(raw).__name__}")
        for key in ("width", "height"):
            if key not in raw:
                raise KeyError(f"Viewport missing required field '{key}'")
            if isinstance(raw[key], bool) or not isinstance(raw[key], (int, float)):
                raise TypeError(f"Viewport '{key}' must be a number")
        return Viewport(width=float(raw["width"]), height=float(raw["height"]))
