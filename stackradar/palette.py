from __future__ import annotations
from typing import Optional, Sequence

# Series colors, assigned by series index and cycled when exhausted
_DEFAULT_COLORS = (
    "#01b8aa",  # teal
    "#374649",  # charcoal
    "#fd625e",  # red
    "#f2c80f",  # yellow
    "#5f6b6d",  # gray
    "#8ad4eb",  # light blue
    "#fe9666",  # orange
    "#a66999",  # purple
)


class ColorPalette:
    """Maps a series index to a color; usable directly as the converter's color assigner."""

    def __init__(self, colors: Optional[Sequence[str]] = None):
        self.colors = tuple(colors or _DEFAULT_COLORS)
        if not self.colors:
            raise ValueError("ColorPalette needs at least one color")

    def color_for(self, index: int) -> str:
        return self.colors[index % len(self.colors)]

    def __call__(self, index: int) -> str:
        return self.color_for(index)
