from __future__ import annotations

import logging
import math
import random
import time
from dataclasses import dataclass, field
from typing import Any

from . import config
from .config import ConfettiSettings
from .particles import Particle, reset_particle

_log = logging.getLogger(__name__)


def now_ms() -> float:
    return time.perf_counter() * 1000.0


@dataclass
class SimulationState:
    """Everything the frame loop, simulator and control API share."""

    particles: list[Particle] = field(default_factory=list)
    wave_angle: float = 0.0
    last_frame_time: float = field(default_factory=now_ms)
    streaming: bool = False
    paused: bool = False
    scheduled_handle: Any = None
    rng: random.Random = field(default_factory=random.Random)


def _out_of_bounds(particle: Particle, width: float, height: float) -> bool:
    return (
        particle.x > width + config.BOUNDS_MARGIN_X
        or particle.x < -config.BOUNDS_MARGIN_X
        or particle.y > height
    )


def update_particles(state: SimulationState, settings: ConfettiSettings, width: float, height: float) -> int:
    """
    Advance every particle by one frame.

    Particles leaving the surface are recycled above it while streaming and the
    store is not over ``max_count``; otherwise they are dropped. Returns the
    number of particles removed.
    """
    state.wave_angle += config.WAVE_STEP
    sway = math.sin(state.wave_angle) - config.SWAY_BIAS
    fall = math.cos(state.wave_angle)

    particles = state.particles
    removed = 0
    i = 0
    while i < len(particles):
        p = particles[i]
        if not state.streaming and p.y < config.DRAIN_THRESHOLD_Y:
            # Still waiting above the surface; flush it out instead of letting it fall in.
            p.y = height + config.DRAIN_OFFSET_Y
        else:
            p.tilt_angle += p.tilt_angle_increment
            p.x += sway
            p.y += (fall + p.diameter + settings.speed) * config.FALL_SCALE
            p.tilt = math.sin(p.tilt_angle) * config.TILT_AMPLITUDE

        if _out_of_bounds(p, width, height):
            if state.streaming and len(particles) <= settings.max_count:
                reset_particle(p, width, height, settings.alpha, state.rng)
            else:
                del particles[i]
                removed += 1
                continue
        i += 1

    if removed:
        _log.debug("removed %d particles, %d left", removed, len(particles))
    return removed
