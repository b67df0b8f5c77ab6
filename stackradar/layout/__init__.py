from __future__ import annotations

from .converter import convert
from .geometry import LayoutParameters, LinearScale, angular_step, compute_layout, point_on_axis
from .stacking import StackResult, stack_series
