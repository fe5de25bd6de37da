from __future__ import annotations

import logging
from typing import Callable

from .canvas import Surface
from .config import ConfettiSettings
from .render import draw_particles
from .scheduling import FrameScheduler
from .simulation import SimulationState, update_particles

_log = logging.getLogger(__name__)


class AnimationLoop:
    """
    Self-rescheduling frame loop throttled to ``settings.frame_interval``.

    Idle: no frame pending. Running: one frame pending. Paused: the pause flag
    is set and the next tick dropped its handle without rescheduling.
    """

    def __init__(
        self,
        state: SimulationState,
        settings: ConfettiSettings,
        surface: Surface,
        frames: FrameScheduler,
        clock: Callable[[], float],
    ) -> None:
        self.state = state
        self.settings = settings
        self.surface = surface
        self.frames = frames
        self.clock = clock
        self.frames_drawn = 0

    @property
    def is_scheduled(self) -> bool:
        return self.state.scheduled_handle is not None

    def ensure_running(self) -> None:
        if not self.is_scheduled:
            self._schedule()

    def cancel(self) -> None:
        if self.is_scheduled:
            self.frames.cancel(self.state.scheduled_handle)
            self.state.scheduled_handle = None

    def _schedule(self) -> None:
        self.state.scheduled_handle = self.frames.schedule(self.tick)

    def tick(self) -> None:
        state = self.state
        state.scheduled_handle = None
        if state.paused:
            return
        width, height = self.surface.width, self.surface.height
        if not state.particles:
            self.surface.clear(width, height)
            _log.debug("no confetti left, loop idle")
            return

        now = self.clock()
        delta = now - state.last_frame_time
        interval = self.settings.frame_interval
        # Fixed-delay timers already pace the loop; only display frames need throttling.
        if not self.frames.frame_synced or delta > interval:
            self.surface.clear(width, height)
            update_particles(state, self.settings, width, height)
            draw_particles(self.surface, state.particles, self.settings.gradient)
            state.last_frame_time = now - (delta % interval) if interval > 0 else now
            self.frames_drawn += 1
        self._schedule()
