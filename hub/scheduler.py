"""
Cooperative virtual-time scheduler.

Games never sleep or spawn threads. Every periodic activity (countdown,
spawner, elapsed timer), every per-frame simulation step and every delayed
action (mismatch reveal, level advance) is a callback registered here and
fired from advance(), which the host loop calls with the wall-clock time
that passed since the previous frame. Tests drive the same scheduler with
exact millisecond steps.

Usage:
    scheduler = Scheduler()
    countdown = scheduler.every(1000, on_second)
    scheduler.each_frame(on_frame)
    scheduler.after(700, hide_cards)

    # Host loop
    while running:
        scheduler.advance(clock.tick(60))

    countdown.cancel()  # idempotent

Ordering:
    Callbacks fire in due-time order; callbacks due at the same instant fire
    in the order they were (re)scheduled. Nothing should rely on the
    relative order of independent timers.
"""

import heapq
import itertools
from typing import Callable, List, Optional, Set, Tuple

from hub.logging import get_logger

log = get_logger('scheduler')

DEFAULT_FRAME_MS = 1000.0 / 60.0


class TimerHandle:
    """A scheduled callback. Cancelling is idempotent and final."""

    def __init__(
        self,
        scheduler: 'Scheduler',
        callback: Callable[[], None],
        due_ms: float,
        interval_ms: Optional[float] = None,
        label: str = '',
    ):
        self._scheduler = scheduler
        self.callback = callback
        self.due_ms = due_ms
        self.interval_ms = interval_ms
        self.label = label or getattr(callback, '__name__', 'callback')
        self.cancelled = False

    @property
    def repeating(self) -> bool:
        return self.interval_ms is not None

    @property
    def active(self) -> bool:
        return not self.cancelled

    def cancel(self) -> None:
        """Stop this timer. Safe to call any number of times."""
        if not self.cancelled:
            self.cancelled = True
            self._scheduler._forget(self)

    def __repr__(self) -> str:
        kind = f"every {self.interval_ms:.1f}ms" if self.repeating else "once"
        state = "cancelled" if self.cancelled else f"due {self.due_ms:.1f}"
        return f"TimerHandle({self.label}, {kind}, {state})"


class Scheduler:
    """
    Single-threaded scheduler over a virtual millisecond clock.

    Args:
        frame_ms: Interval of each_frame() callbacks
        start_ms: Initial value of the virtual clock
    """

    def __init__(self, frame_ms: float = DEFAULT_FRAME_MS, start_ms: float = 0.0):
        if frame_ms <= 0:
            raise ValueError(f"frame_ms must be positive, got {frame_ms}")
        self.frame_ms = frame_ms
        self._now = float(start_ms)
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._live: Set[TimerHandle] = set()
        self._seq = itertools.count()

    @property
    def now_ms(self) -> float:
        """Current virtual time in milliseconds."""
        return self._now

    @property
    def pending(self) -> int:
        """Number of timers that have not fired (one-shot) or been cancelled."""
        return len(self._live)

    def _push(self, handle: TimerHandle) -> TimerHandle:
        heapq.heappush(self._queue, (handle.due_ms, next(self._seq), handle))
        self._live.add(handle)
        return handle

    def _forget(self, handle: TimerHandle) -> None:
        self._live.discard(handle)

    def every(self, interval_ms: float, callback: Callable[[], None], label: str = '') -> TimerHandle:
        """Call callback every interval_ms, first after one interval."""
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms}")
        return self._push(TimerHandle(self, callback, self._now + interval_ms, interval_ms, label))

    def after(self, delay_ms: float, callback: Callable[[], None], label: str = '') -> TimerHandle:
        """Call callback once, delay_ms from now."""
        return self._push(TimerHandle(self, callback, self._now + max(delay_ms, 0.0), None, label))

    def each_frame(self, callback: Callable[[], None], label: str = '') -> TimerHandle:
        """Call callback once per simulation frame."""
        return self.every(self.frame_ms, callback, label or 'frame')

    def cancel(self, handle: Optional[TimerHandle]) -> None:
        """Cancel a timer; None and already-cancelled handles are ignored."""
        if handle is not None:
            handle.cancel()

    def advance(self, ms: float) -> int:
        """
        Move the clock forward by ms, firing every callback that falls due.

        Callbacks scheduled while advancing also fire in this call when they
        fall due before the new time.

        Returns:
            Number of callbacks invoked
        """
        if ms < 0:
            raise ValueError(f"Cannot advance by negative time {ms}")
        target = self._now + ms
        fired = 0

        while self._queue and self._queue[0][0] <= target:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled or due != handle.due_ms:
                continue

            self._now = due
            if handle.repeating:
                handle.due_ms = due + handle.interval_ms
                heapq.heappush(self._queue, (handle.due_ms, next(self._seq), handle))
            else:
                self._live.discard(handle)
                handle.cancelled = True

            handle.callback()
            fired += 1

        self._now = target
        return fired

    def clear(self) -> None:
        """Cancel everything."""
        for handle in list(self._live):
            handle.cancel()
        self._queue.clear()
        log.debug("Scheduler cleared at %.1fms", self._now)
