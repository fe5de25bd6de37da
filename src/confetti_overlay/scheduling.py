"""
Cooperative callback scheduling driven by the host's main loop.

Nothing here spawns threads: the host calls ``FrameRequests.run_frame()`` once
per display refresh and ``TimerQueue.run_due(now)`` once per loop iteration,
so every callback runs on the host thread between other application code.
"""
from __future__ import annotations

import heapq
import itertools
from typing import Callable, Protocol

Callback = Callable[[], None]


class FrameScheduler(Protocol):
    # False when callbacks fire on a fixed delay instead of display frames.
    frame_synced: bool

    def schedule(self, callback: Callback) -> int: ...

    def cancel(self, handle: int) -> None: ...


class FrameRequests:
    """Run-once callbacks for the next display frame."""

    frame_synced = True

    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._pending: dict[int, Callback] = {}

    def schedule(self, callback: Callback) -> int:
        handle = next(self._ids)
        self._pending[handle] = callback
        return handle

    def cancel(self, handle: int) -> None:
        self._pending.pop(handle, None)

    def pending(self) -> int:
        return len(self._pending)

    def run_frame(self) -> int:
        """Run callbacks requested before this frame. Returns how many ran."""
        batch = self._pending
        self._pending = {}
        for callback in batch.values():
            callback()
        return len(batch)


class TimerQueue:
    """One-shot delayed callbacks keyed on a millisecond clock."""

    def __init__(self, clock: Callable[[], float]) -> None:
        self.clock = clock
        self._ids = itertools.count(1)
        self._last_handle = 0
        self._heap: list[tuple[float, int, Callback]] = []
        self._cancelled: set[int] = set()

    def call_later(self, delay_ms: float, callback: Callback) -> int:
        handle = next(self._ids)
        self._last_handle = handle
        due = self.clock() + max(0.0, float(delay_ms))
        heapq.heappush(self._heap, (due, handle, callback))
        return handle

    def cancel(self, handle: int) -> None:
        if any(entry[1] == handle for entry in self._heap):
            self._cancelled.add(handle)

    def pending(self) -> int:
        return len(self._heap) - len(self._cancelled)

    def run_due(self, now: float | None = None) -> int:
        """Run every callback due at ``now`` in due order. Returns how many ran."""
        if now is None:
            now = self.clock()
        # Timers added by the callbacks below wait for the next call.
        cutoff = self._last_handle
        deferred: list[tuple[float, int, Callback]] = []
        ran = 0
        while self._heap and self._heap[0][0] <= now:
            entry = heapq.heappop(self._heap)
            _, handle, callback = entry
            if handle > cutoff:
                deferred.append(entry)
                continue
            if handle in self._cancelled:
                self._cancelled.discard(handle)
                continue
            callback()
            ran += 1
        for entry in deferred:
            heapq.heappush(self._heap, entry)
        return ran


class TimerFrameScheduler:
    """Frame scheduling for hosts without frame sync: a fixed delay per frame."""

    frame_synced = False

    def __init__(self, timers: TimerQueue, interval: Callable[[], float]) -> None:
        self.timers = timers
        self.interval = interval

    def schedule(self, callback: Callback) -> int:
        return self.timers.call_later(self.interval(), callback)

    def cancel(self, handle: int) -> None:
        self.timers.cancel(handle)
