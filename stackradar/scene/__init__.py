from __future__ import annotations

from .node import SceneHandle, SceneNode, Transition, attach_surface
from .reconcile import ReconcileResult, reconcile
from .svg import to_svg
