"""Tests for timers, the stagger scheduler and SVG animation export."""

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

import pytest

from graphpaper import AnimationScheduler, HostElement, LoopTimer, VirtualTimer, create_chart
from graphpaper.surface.scene import SceneSurface


# ---------------------------------------------------------------------------
# Timers
# ---------------------------------------------------------------------------

class TestVirtualTimer:
    def test_runs_in_due_order(self):
        timer = VirtualTimer()
        order = []
        timer.call_later(200, lambda: order.append("c"))
        timer.call_later(0, lambda: order.append("a"))
        timer.call_later(100, lambda: order.append("b"))

        assert timer.advance(150) == 2
        assert order == ["a", "b"]
        assert timer.now() == 150
        assert timer.pending == 1

        assert timer.flush() == 1
        assert order == ["a", "b", "c"]
        assert timer.now() == 200

    def test_ties_keep_scheduling_order(self):
        timer = VirtualTimer()
        order = []
        for name in "xyz":
            timer.call_later(10, lambda name=name: order.append(name))
        timer.flush()
        assert order == ["x", "y", "z"]

    def test_clock_reads_due_time_inside_callbacks(self):
        timer = VirtualTimer()
        seen = []
        timer.call_later(30, lambda: seen.append(timer.now()))
        timer.advance(100)
        assert seen == [30]

    def test_flush_with_nothing_queued(self):
        assert VirtualTimer().flush() == 0


class TestLoopTimer:
    @pytest.mark.asyncio
    async def test_fires_on_running_loop(self):
        fired = asyncio.Event()
        LoopTimer().call_later(1, fired.set)
        await asyncio.wait_for(fired.wait(), timeout=1)
        assert fired.is_set()

    def test_runs_immediately_without_loop(self):
        callback = MagicMock()
        LoopTimer().call_later(500, callback)
        callback.assert_called_once_with()


# ---------------------------------------------------------------------------
# Scheduler
# ---------------------------------------------------------------------------

class TestAnimationScheduler:
    @pytest.mark.parametrize("mode,expected", [
        ("none", False),
        ("", False),
        (None, False),
        ("ease-in", True),
        ("linear", True),
    ])
    def test_enabled(self, mode, expected):
        assert AnimationScheduler.enabled(mode) is expected

    def test_delay_grows_with_index(self):
        delays = [AnimationScheduler.delay_for(i, 1000) for i in range(4)]
        assert delays == [0, 100, 200, 300]

    def test_stagger_schedules_and_animates(self):
        timer = VirtualTimer()
        shape = MagicMock()
        shape.removed = False

        delay = AnimationScheduler(timer).stagger(
            shape, 2, {"r": 5}, easing="ease-out", duration_ms=400,
        )
        assert delay == 80
        shape.animate.assert_not_called()

        timer.flush()
        shape.animate.assert_called_once_with({"r": 5}, 400, "ease-out")

    def test_removed_shape_is_left_alone(self):
        timer = VirtualTimer()
        surface = SceneSurface(100, 100)
        circle = surface.circle(10, 10, 0)
        AnimationScheduler(timer).stagger(circle, 1, {"r": 5}, easing="linear", duration_ms=100)

        surface.clear()
        timer.flush()
        assert circle.animations == []
        assert circle.get("r") == 0


# ---------------------------------------------------------------------------
# SVG export
# ---------------------------------------------------------------------------

class TestAnimationExport:
    def _animated_bars(self):
        timer = VirtualTimer()
        surface = SceneSurface(300, 200, clock=timer.now)
        chart = create_chart(HostElement(), 300, 200, surface=surface, timer=timer)
        chart.attr({"animate": "ease-out", "animateTime": 1000})
        chart.draw({"type": "bar", "x": "d", "y": "v", "data": [{"d": "a", "v": 1}, {"d": "b", "v": 2}]})
        timer.flush()
        return chart, surface

    def test_begin_offsets_follow_stagger(self):
        _, surface = self._animated_bars()
        begins = [r.animations[0].begin_ms for r in surface.find("rect")]
        assert begins == [0, 100]

    def test_svg_starts_collapsed_and_animates(self):
        chart, surface = self._animated_bars()
        svg = surface.to_svg()
        assert svg.count('<animate attributeName="height"') == 2
        assert 'begin="100ms"' in svg
        assert 'dur="1000ms"' in svg
        assert 'calcMode="spline"' in svg
        # the rect itself is written at its starting height
        assert 'height="0"' in svg

    def test_linear_easing_has_no_spline(self):
        timer = VirtualTimer()
        surface = SceneSurface(100, 100, clock=timer.now)
        circle = surface.circle(50, 50, 0)
        circle.animate({"r": 10}, 250, "linear")
        svg = circle.to_svg()
        assert 'calcMode="linear"' in svg
        assert 'from="0" to="10"' in svg
