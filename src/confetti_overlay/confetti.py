from __future__ import annotations

import logging
import random
from typing import Callable

from .canvas import Surface
from .config import ConfettiSettings
from .loop import AnimationLoop
from .particles import spawn_particles
from .scheduling import FrameScheduler, TimerFrameScheduler, TimerQueue
from .simulation import SimulationState, now_ms

_log = logging.getLogger(__name__)


class Confetti:
    """
    Start, stop, pause and clear a field of falling confetti.

    The surface comes from ``surface_factory`` on the first ``start`` and is
    reused afterwards. Without a ``frame_scheduler`` the loop runs on the timer
    queue at ``settings.frame_interval``.
    """

    def __init__(
        self,
        surface_factory: Callable[[], Surface],
        settings: ConfettiSettings | None = None,
        frame_scheduler: FrameScheduler | None = None,
        timers: TimerQueue | None = None,
        clock: Callable[[], float] | None = None,
        rng: random.Random | None = None,
    ) -> None:
        self.surface_factory = surface_factory
        self.settings = settings or ConfettiSettings()
        self.clock = clock or now_ms
        self.timers = timers or TimerQueue(self.clock)
        self.frame_scheduler = frame_scheduler
        self.rng = rng or random.Random()
        self.surface: Surface | None = None
        self.state: SimulationState | None = None
        self.loop: AnimationLoop | None = None

    @property
    def particle_count(self) -> int:
        return len(self.state.particles) if self.state is not None else 0

    def _frames(self) -> FrameScheduler:
        if self.frame_scheduler is not None:
            return self.frame_scheduler
        _log.debug("no frame scheduler, falling back to %s ms timers", self.settings.frame_interval)
        return TimerFrameScheduler(self.timers, lambda: self.settings.frame_interval)

    def _ensure_loop(self) -> AnimationLoop:
        if self.surface is None:
            self.surface = self.surface_factory()
        if self.state is None:
            self.state = SimulationState(last_frame_time=self.clock(), rng=self.rng)
        if self.loop is None:
            self.loop = AnimationLoop(self.state, self.settings, self.surface, self._frames(), self.clock)
        return self.loop

    def start(self, timeout: float | None = None, minimum: int | None = None, maximum: int | None = None) -> None:
        loop = self._ensure_loop()
        state = loop.state
        surface = loop.surface
        added = spawn_particles(state, self.settings, surface.width, surface.height, minimum, maximum)
        state.streaming = True
        state.paused = False
        loop.ensure_running()
        _log.debug("start: +%d particles (%d total)", added, len(state.particles))
        if timeout:
            # Overlapping timeouts are not cancelled; the earliest one stops streaming.
            self.timers.call_later(timeout, self.stop)

    def stop(self) -> None:
        if self.state is not None and self.state.streaming:
            self.state.streaming = False
            _log.debug("stop: draining %d particles", len(self.state.particles))

    def toggle(self) -> None:
        if self.is_running():
            self.stop()
        else:
            self.start()

    def pause(self) -> None:
        if self.state is not None:
            self.state.paused = True

    def resume(self) -> None:
        if self.state is None:
            return
        self.state.paused = False
        if self.loop is not None:
            self.loop.ensure_running()

    def toggle_pause(self) -> None:
        if self.is_paused():
            self.resume()
        else:
            self.pause()

    def remove(self) -> None:
        self.stop()
        if self.state is not None:
            self.state.paused = False
            self.state.particles.clear()
            if self.loop is not None:
                self.loop.cancel()
                self.loop.surface.clear(self.loop.surface.width, self.loop.surface.height)
            _log.debug("remove: confetti cleared")

    def is_paused(self) -> bool:
        return self.state is not None and self.state.paused

    def is_running(self) -> bool:
        return self.state is not None and self.state.streaming
