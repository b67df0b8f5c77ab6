from __future__ import annotations
import math
from copy import deepcopy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
import yaml
from stackradar import logging as slog
from stackradar.interfaces import Margin

_SUPPORTED_CONFIG_VERSIONS = {"1.0"}

# camelCase spellings accepted next to the snake_case keys
_ALIASES = {
    "segmentLevels": "segment_levels",
    "baseOpacity": "base_opacity",
    "highlightOpacity": "highlight_opacity",
    "dotRadius": "dot_radius",
    "labelOffset": "label_offset",
    "durationMs": "duration_ms",
}

_KNOWN_KEYS = {
    "layout": {"margin", "segment_levels", "label_offset"},
    "style": {"base_opacity", "highlight_opacity", "dot_radius", "palette"},
    "animation": {"duration_ms"},
}

_DEFAULTS: Dict[str, Any] = {
    "layout": {
        "margin": {"top": 50, "bottom": 50, "left": 100, "right": 100},
        "segment_levels": 6,
        "label_offset": {"x": 20, "y": 10, "shift_y": -10},
    },
    "style": {
        "base_opacity": 0.5,
        "highlight_opacity": 1.0,
        "dot_radius": 5,
        "palette": None,
    },
    "animation": {
        "duration_ms": 250,
    },
}


@dataclass(frozen=True)
class RadarConfig:
    margin: Margin = field(default_factory=Margin)
    segment_levels: int = 6
    base_opacity: float = 0.5
    highlight_opacity: float = 1.0
    dot_radius: float = 5
    label_offset_x: float = 20
    label_offset_y: float = 10
    label_shift_y: float = -10
    animation_ms: int = 250
    palette: Optional[Tuple[str, ...]] = None

    @property
    def ring_count(self) -> int:
        return max(0, self.segment_levels - 1)


def _deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """Deep-merge dicts with 'explicit null clears default' semantics."""
    out = deepcopy(base) if base else {}
    for k, v in (override or {}).items():
        if v is None:
            out[k] = None
        elif isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _canonical_keys(d: Dict[str, Any]) -> Dict[str, Any]:
    return {_ALIASES.get(k, k): v for k, v in (d or {}).items()}


class ConfigLoader:
    """
    Loads a YAML chart configuration:
      config_version: "1.0"
      layout:
        margin: { top, bottom, left, right }
        segment_levels: int            (guide rings = segment_levels - 1)
        label_offset: { x, y, shift_y }
      style:
        base_opacity: 0..1
        highlight_opacity: 0..1
        dot_radius: >= 0
        palette: [ "#rrggbb", ... ] | null
      animation:
        duration_ms: >= 0

    camelCase option names (segmentLevels, baseOpacity, dotRadius) are accepted.
    Missing options fall back to the defaults; explicit null restores a default.
    """

    def __init__(self, yaml_path: Optional[str] = None, *, strict: bool = True):
        self.yaml_path = yaml_path
        self.strict = strict

    def _warn_or_raise(self, msg: str, *, fatal: bool = False) -> None:
        if fatal or self.strict:
            slog.log_err(msg)
            raise ValueError(msg)
        slog.log_warn(msg)

    def _number(self, value: Any, name: str, *, minimum: float = 0.0, maximum: Optional[float] = None) -> float:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            self._warn_or_raise(f"Option '{name}' must be a number, got {value!r}.", fatal=True)
        fv = float(value)
        if not math.isfinite(fv) or fv < minimum or (maximum is not None and fv > maximum):
            bounds = f"[{minimum}, {maximum}]" if maximum is not None else f">= {minimum}"
            self._warn_or_raise(f"Option '{name}' must be {bounds}, got {value!r}.", fatal=True)
        return fv

    def _normalize_margin(self, raw: Any) -> Margin:
        if not isinstance(raw, dict):
            self._warn_or_raise("layout.margin must be a mapping.", fatal=True)
        vals = {}
        for side in ("top", "bottom", "left", "right"):
            vals[side] = self._number(raw.get(side, getattr(Margin(), side)), f"layout.margin.{side}")
        extra = set(raw) - set(vals)
        if extra:
            self._warn_or_raise(f"layout.margin has unknown keys: {sorted(extra)}")
        return Margin(**vals)

    def _normalize_palette(self, raw: Any) -> Optional[Tuple[str, ...]]:
        if raw is None:
            return None
        if not isinstance(raw, list) or not raw:
            self._warn_or_raise("style.palette must be a non-empty list of colors or null.", fatal=True)
        colors: List[str] = []
        for item in raw:
            s = str(item or "").strip()
            if not s:
                self._warn_or_raise("style.palette entries must be non-empty strings.", fatal=True)
            colors.append(s)
        return tuple(colors)

    def _check_unknown(self, bucket: str, values: Dict[str, Any]) -> None:
        unknown = set(values) - _KNOWN_KEYS[bucket]
        if unknown:
            self._warn_or_raise(f"{bucket} has unknown options: {sorted(unknown)}")

    def from_mapping(self, raw: Dict[str, Any]) -> RadarConfig:
        raw = raw or {}
        if not isinstance(raw, dict):
            self._warn_or_raise("Configuration root must be a mapping.", fatal=True)

        unknown_buckets = set(raw) - set(_KNOWN_KEYS) - {"config_version"}
        if unknown_buckets:
            self._warn_or_raise(f"Unknown configuration sections: {sorted(unknown_buckets)}")

        merged: Dict[str, Any] = {}
        for bucket in _KNOWN_KEYS:
            section = raw.get(bucket) or {}
            if not isinstance(section, dict):
                self._warn_or_raise(f"Section '{bucket}' must be a mapping.", fatal=True)
            section = _canonical_keys(section)
            self._check_unknown(bucket, section)
            # explicit null restores the default
            section = {k: v for k, v in section.items() if v is not None or k == "palette"}
            merged[bucket] = _deep_merge(_DEFAULTS[bucket], section)

        layout = merged["layout"]
        style = merged["style"]
        animation = merged["animation"]

        levels = layout.get("segment_levels")
        if isinstance(levels, bool) or not isinstance(levels, int) or levels < 1:
            self._warn_or_raise(f"layout.segment_levels must be an integer >= 1, got {levels!r}.", fatal=True)

        label_offset = layout.get("label_offset") or {}
        if not isinstance(label_offset, dict):
            self._warn_or_raise("layout.label_offset must be a mapping.", fatal=True)

        duration = animation.get("duration_ms")
        if isinstance(duration, bool) or not isinstance(duration, int) or duration < 0:
            self._warn_or_raise(f"animation.duration_ms must be an integer >= 0, got {duration!r}.", fatal=True)

        return RadarConfig(
            margin=self._normalize_margin(layout.get("margin")),
            segment_levels=levels,
            base_opacity=self._number(style.get("base_opacity"), "style.base_opacity", maximum=1.0),
            highlight_opacity=self._number(style.get("highlight_opacity"), "style.highlight_opacity", maximum=1.0),
            dot_radius=self._number(style.get("dot_radius"), "style.dot_radius"),
            label_offset_x=self._number(label_offset.get("x", 20), "layout.label_offset.x"),
            label_offset_y=self._number(label_offset.get("y", 10), "layout.label_offset.y"),
            label_shift_y=self._number(label_offset.get("shift_y", -10), "layout.label_offset.shift_y", minimum=-math.inf),
            animation_ms=duration,
            palette=self._normalize_palette(style.get("palette")),
        )

    def load(self) -> RadarConfig:
        if not self.yaml_path:
            raise ValueError("ConfigLoader.load() requires a yaml_path")
        with open(self.yaml_path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}

        if not isinstance(raw, dict):
            self._warn_or_raise("Configuration root must be a mapping.", fatal=True)

        version = str(raw.get("config_version", "")).strip()
        if version not in _SUPPORTED_CONFIG_VERSIONS:
            self._warn_or_raise(
                f"Unsupported or missing config_version '{version}'. Supported: {sorted(_SUPPORTED_CONFIG_VERSIONS)}",
                fatal=True,
            )

        return self.from_mapping(raw)
