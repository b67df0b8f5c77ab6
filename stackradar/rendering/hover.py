from __future__ import annotations
import asyncio
from enum import Enum
from typing import Optional, Set
from stackradar import logging as slog
from stackradar.interfaces import SelectionId, SelectionManager
from stackradar.scene.node import SceneNode, Transition


class HoverState(Enum):
    IDLE = "idle"
    HIGHLIGHTED = "highlighted"


class HoverController:
    """
    Pointer interaction for chart polygons.

    Each pointer event runs two stages in order:
      1. a selection request for the polygon's series identity is awaited
      2. the opacity transition for the new hover state is applied

    Stage 2 runs whether stage 1 succeeded or failed. The node's hover state
    only changes in stage 2, so a re-render while a request is pending keeps
    the previous opacity. Events are numbered per node; when a later event has
    arrived by the time an earlier request resolves, the earlier transition is
    dropped, so the latest hover state always wins.
    """

    def __init__(
        self,
        selection_manager: Optional[SelectionManager],
        *,
        base_opacity: float = 0.5,
        highlight_opacity: float = 1.0,
        duration_ms: int = 0,
    ):
        self.selection_manager = selection_manager
        self.base_opacity = base_opacity
        self.highlight_opacity = highlight_opacity
        self.duration_ms = duration_ms
        self._pending: Set["asyncio.Task[bool]"] = set()

    def bind(self, node: SceneNode, identity: SelectionId) -> None:
        node.state["identity"] = identity
        node.state.setdefault("hover_state", HoverState.IDLE)
        node.on("pointerenter", self.pointer_enter)
        node.on("pointerleave", self.pointer_leave)

    def target_opacity(self, state: HoverState) -> float:
        return self.highlight_opacity if state is HoverState.HIGHLIGHTED else self.base_opacity

    def resting_opacity(self, node: SceneNode) -> float:
        return self.target_opacity(node.state.get("hover_state", HoverState.IDLE))

    def pointer_enter(self, node: SceneNode) -> "asyncio.Task[bool]":
        return self._schedule(node, HoverState.HIGHLIGHTED)

    def pointer_leave(self, node: SceneNode) -> "asyncio.Task[bool]":
        return self._schedule(node, HoverState.IDLE)

    def _schedule(self, node: SceneNode, state: HoverState) -> "asyncio.Task[bool]":
        # must be called from the host's event loop
        loop = asyncio.get_running_loop()
        seq = int(node.state.get("hover_seq", 0)) + 1
        node.state["hover_seq"] = seq
        task = loop.create_task(self._select_then_transition(node, state, seq))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _select_then_transition(self, node: SceneNode, state: HoverState, seq: int) -> bool:
        identity: Optional[SelectionId] = node.state.get("identity")
        if self.selection_manager is not None and identity is not None:
            try:
                await self.selection_manager.select(identity)
            except Exception as e:
                slog.log_warn(f"Selection request for series {identity} failed: {e}")

        if node.state.get("hover_seq") != seq:
            slog.log_debug(f"hover #{seq} on {node!r} superseded")
            return False

        node.state["hover_state"] = state
        apply_transition(node, Transition("opacity", self.target_opacity(state), self.duration_ms))
        return True


def apply_transition(node: SceneNode, transition: Transition) -> None:
    node.style[transition.prop] = transition.target
    node.transition = transition
