from __future__ import annotations

from .axes import draw_axes, draw_axis_labels
from .chart import draw_chart
from .hover import HoverController, HoverState
from .legend import SceneLegend
from .rings import draw_rings
