# stackradar/tests/test_hover.py
from __future__ import annotations
import asyncio
import pytest
from stackradar.config import RadarConfig
from stackradar.interfaces import Animator, SelectionId, animation_duration
from stackradar.rendering.hover import HoverController, HoverState
from stackradar.scene.node import SceneNode
from stackradar.selection import InMemorySelectionManager
from utility import GatedSelectionManager, RecordingSelectionManager, make_snapshot, polygon_of, render

SNAP = make_snapshot(["A", "B", "C"], [1, 2, 3], [3, 2, 1], names=["first", "second"])


# pointer-enter: one selection call with the series identity, then opacity goes to 1.0.
def test_enter_highlights_after_selection():
    async def scenario():
        sm = RecordingSelectionManager()
        handle, _chart, res = render(SNAP, selection_manager=sm)
        poly = polygon_of(handle, 1)
        applied = await poly.dispatch("pointerenter")
        assert applied is True
        assert sm.calls == [res.data.legend.entries[1].identity]
        assert poly.style["opacity"] == 1.0
        assert poly.state["hover_state"] is HoverState.HIGHLIGHTED

    asyncio.run(scenario())


# pointer-leave: issues one more selection call and restores the base opacity.
def test_leave_restores_base_opacity():
    async def scenario():
        sm = RecordingSelectionManager()
        handle, _chart, _ = render(SNAP, selection_manager=sm)
        poly = polygon_of(handle, 0)
        await poly.dispatch("pointerenter")
        await poly.dispatch("pointerleave")
        assert len(sm.calls) == 2
        assert poly.style["opacity"] == 0.5
        assert poly.state["hover_state"] is HoverState.IDLE

    asyncio.run(scenario())


# ordering: the transition is not applied until the selection request resolves.
def test_transition_waits_for_selection():
    async def scenario():
        sm = GatedSelectionManager()
        handle, _chart, _ = render(SNAP, selection_manager=sm)
        poly = polygon_of(handle, 0)
        task = poly.dispatch("pointerenter")
        await asyncio.sleep(0)
        assert len(sm.calls) == 1
        assert poly.style["opacity"] == 0.5
        assert not task.done()

        sm.resolve(0)
        assert await task is True
        assert poly.style["opacity"] == 1.0

    asyncio.run(scenario())


# ordering: a re-render while the selection request is pending keeps the base opacity.
def test_update_during_pending_selection_keeps_base_opacity():
    async def scenario():
        sm = GatedSelectionManager()
        handle, chart, _ = render(SNAP, selection_manager=sm)
        poly = polygon_of(handle, 0)
        task = poly.dispatch("pointerenter")
        await asyncio.sleep(0)
        render(SNAP, handle=handle, chart=chart)
        assert polygon_of(handle, 0) is poly
        assert poly.style["opacity"] == 0.5
        assert poly.state["hover_state"] is HoverState.IDLE

        sm.resolve(0)
        assert await task is True
        assert poly.style["opacity"] == 1.0
        assert poly.state["hover_state"] is HoverState.HIGHLIGHTED

    asyncio.run(scenario())


# a fired-and-forgotten hover task is held by the controller until it finishes.
def test_controller_holds_pending_tasks():
    async def scenario():
        sm = GatedSelectionManager()
        handle, chart, _ = render(SNAP, selection_manager=sm)
        task = polygon_of(handle, 0).dispatch("pointerenter")
        await asyncio.sleep(0)
        assert task in chart.hover._pending

        sm.resolve(0)
        await task
        await asyncio.sleep(0)
        assert not chart.hover._pending

    asyncio.run(scenario())


# ordering: a failed selection request still applies the transition.
def test_transition_applied_when_selection_fails():
    async def scenario():
        sm = GatedSelectionManager()
        handle, _chart, _ = render(SNAP, selection_manager=sm)
        poly = polygon_of(handle, 0)
        task = poly.dispatch("pointerenter")
        await asyncio.sleep(0)
        sm.reject(0)
        assert await task is True
        assert poly.style["opacity"] == 1.0

    asyncio.run(scenario())


# rapid enter/leave/enter: only the latest target is applied, whatever order the acks arrive in.
@pytest.mark.parametrize("ack_order", [(0, 1, 2), (2, 1, 0), (1, 2, 0)])
def test_latest_hover_wins(ack_order):
    async def scenario():
        sm = GatedSelectionManager()
        handle, _chart, _ = render(SNAP, selection_manager=sm)
        poly = polygon_of(handle, 0)
        tasks = [
            poly.dispatch("pointerenter"),
            poly.dispatch("pointerleave"),
            poly.dispatch("pointerenter"),
        ]
        await asyncio.sleep(0)
        assert len(sm.calls) == 3
        for i in ack_order:
            sm.resolve(i)
        results = await asyncio.gather(*tasks)
        assert results == [False, False, True]
        assert poly.style["opacity"] == 1.0

    asyncio.run(scenario())


# duration: transitions use the animator duration unless animations are suppressed.
@pytest.mark.parametrize("suppress,expected", [(False, 400), (True, 0)])
def test_transition_duration(suppress: bool, expected: int):
    async def scenario():
        handle, _chart, _ = render(
            SNAP,
            config=RadarConfig(animation_ms=400),
            selection_manager=RecordingSelectionManager(),
            suppress_animations=suppress,
        )
        poly = polygon_of(handle, 0)
        await poly.dispatch("pointerenter")
        assert poly.transition is not None
        assert poly.transition.prop == "opacity"
        assert poly.transition.duration_ms == expected

    asyncio.run(scenario())


# animation_duration: no animator or suppressed animations mean an instant transition.
def test_animation_duration_policy():
    assert animation_duration(None) == 0
    assert animation_duration(Animator(300), suppress=True) == 0
    assert animation_duration(Animator(300)) == 300


# hover outside an event loop is a host error, not a silent no-op.
def test_hover_requires_running_loop():
    controller = HoverController(RecordingSelectionManager())
    node = SceneNode("polygon")
    controller.bind(node, SelectionId("x"))
    with pytest.raises(RuntimeError):
        node.dispatch("pointerenter")


# a hovered polygon keeps its highlight across a re-render.
def test_highlight_survives_update():
    async def scenario():
        sm = RecordingSelectionManager()
        handle, chart, _ = render(SNAP, selection_manager=sm)
        poly = polygon_of(handle, 0)
        await poly.dispatch("pointerenter")
        render(SNAP, handle=handle, chart=chart)
        assert polygon_of(handle, 0) is poly
        assert poly.style["opacity"] == 1.0

    asyncio.run(scenario())


# InMemorySelectionManager: single-select toggles; multi-select accumulates; listeners are notified.
def test_in_memory_selection_manager():
    seen = []

    async def scenario():
        sm = InMemorySelectionManager(on_change=seen.append)
        a, b = SelectionId("a"), SelectionId("b")
        assert await sm.select(a) == [a]
        assert await sm.select(b) == [b]
        assert await sm.select(b) == []
        assert await sm.select(a, multi=True) == [a]
        assert await sm.select(b, multi=True) == [a, b]
        assert await sm.select(a, multi=True) == [b]
        sm.clear()
        assert sm.selected == []

    asyncio.run(scenario())
    assert len(seen) == 7
    assert seen[-1] == []


# hover with the in-memory manager: enter selects the series, leave clears it again.
def test_hover_drives_in_memory_selection():
    async def scenario():
        sm = InMemorySelectionManager()
        handle, _chart, res = render(SNAP, selection_manager=sm)
        poly = polygon_of(handle, 0)
        await poly.dispatch("pointerenter")
        assert sm.selected == [res.data.legend.entries[0].identity]
        await poly.dispatch("pointerleave")
        assert sm.selected == []

    asyncio.run(scenario())
