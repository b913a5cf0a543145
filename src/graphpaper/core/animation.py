"""Staggered entry animations.

Shapes are created at a degenerate geometry (zero height, zero radius,
unit-radius sector) and each one's transition to its final geometry is
scheduled ``index * animateTime / 10`` ms after drawing starts, giving a
cascade across the dataset. Scheduling is fire-and-forget; timers are
never cancelled, so a callback that fires after a redraw finds its shape
removed and does nothing.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from typing import Any, Callable, Mapping, Protocol

from ..surface.base import ShapeHandle

logger = logging.getLogger(__name__)

NO_ANIMATION = "none"


# ---------------------------------------------------------------------------
# Timers
# ---------------------------------------------------------------------------

class Timer(Protocol):
    def call_later(self, delay_ms: float, callback: Callable[[], Any]) -> None: ...


class LoopTimer:
    """Schedules callbacks on the running asyncio event loop.

    Outside a running loop (a plain synchronous ``draw``) there is nothing
    to schedule on, so the callback runs at once and shapes land directly
    on their final geometry.
    """

    def call_later(self, delay_ms: float, callback: Callable[[], Any]) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop; running %.0fms timer immediately", delay_ms)
            callback()
            return
        loop.call_later(delay_ms / 1000.0, callback)


class VirtualTimer:
    """A manually advanced clock.

    Callbacks run in due-time order (ties in scheduling order) when the
    clock is moved past them with ``advance`` or ``flush``. ``now`` is the
    current virtual time in ms.
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._queue: list[tuple[float, int, Callable[[], Any]]] = []
        self._seq = itertools.count()

    def now(self) -> float:
        return self._now

    @property
    def pending(self) -> int:
        return len(self._queue)

    def call_later(self, delay_ms: float, callback: Callable[[], Any]) -> None:
        heapq.heappush(self._queue, (self._now + max(delay_ms, 0.0), next(self._seq), callback))

    def advance(self, ms: float) -> int:
        """Move the clock forward by *ms*; return the number of callbacks run."""
        deadline = self._now + ms
        ran = 0
        while self._queue and self._queue[0][0] <= deadline:
            due, _, callback = heapq.heappop(self._queue)
            self._now = due
            callback()
            ran += 1
        self._now = deadline
        return ran

    def flush(self) -> int:
        """Run everything queued, however far in the future."""
        if not self._queue:
            return 0
        return self.advance(max(due for due, _, _ in self._queue) - self._now)


# ---------------------------------------------------------------------------
# Scheduler
# ---------------------------------------------------------------------------

class AnimationScheduler:
    """Decides when each shape's entry transition starts."""

    def __init__(self, timer: Timer) -> None:
        self.timer = timer

    @staticmethod
    def enabled(mode: Any) -> bool:
        return bool(mode) and mode != NO_ANIMATION

    @staticmethod
    def delay_for(index: int, duration_ms: float) -> float:
        return index * duration_ms / 10

    def stagger(
        self,
        shape: ShapeHandle,
        index: int,
        target: Mapping[str, Any],
        *,
        easing: str,
        duration_ms: float,
    ) -> float:
        """Schedule *shape*'s transition to *target*; return the delay in ms."""
        delay = self.delay_for(index, duration_ms)
        target = dict(target)

        def _run() -> None:
            if shape.removed:
                logger.debug("Skipping animation of removed %s #%d", getattr(shape, "kind", "shape"), index)
                return
            shape.animate(target, duration_ms, easing)

        self.timer.call_later(delay, _run)
        return delay
