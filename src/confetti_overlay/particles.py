"""Confetti particle records and the spawn policy that grows the store."""
from __future__ import annotations

import math
import random
from dataclasses import dataclass
from typing import TYPE_CHECKING

from . import config

if TYPE_CHECKING:
    from .config import ConfettiSettings
    from .simulation import SimulationState


@dataclass
class Particle:
    color_primary: str
    color_secondary: str
    x: float
    y: float
    diameter: float
    tilt: float
    tilt_angle_increment: float
    tilt_angle: float


def format_color(rgb: tuple, alpha: float) -> str:
    """Build a canvas style ``rgba(r,g,b,a)`` string, alpha in plain decimal form."""
    r, g, b = rgb[:3]
    # Fixed point: exponents such as 1e-05 are not valid in rgba().
    text = f"{alpha:.6f}".rstrip("0").rstrip(".")
    return f"rgba({r},{g},{b},{text or '0'})"


def _pick_color(rng: random.Random, alpha: float) -> str:
    return format_color(rng.choice(config.CONFETTI_COLORS), alpha)


def reset_particle(
    particle: Particle,
    width: float,
    height: float,
    alpha: float,
    rng: random.Random,
) -> Particle:
    """Give ``particle`` fresh random attributes somewhere above the surface."""
    particle.color_primary = _pick_color(rng, alpha)
    particle.color_secondary = _pick_color(rng, alpha)
    particle.x = rng.random() * width
    particle.y = rng.random() * height - height
    particle.diameter = rng.random() * config.DIAMETER_SPAN + config.DIAMETER_MIN
    particle.tilt = rng.random() * config.TILT_SEED_SPAN + config.TILT_SEED_MIN
    particle.tilt_angle_increment = rng.random() * config.TILT_INCREMENT_SPAN + config.TILT_INCREMENT_MIN
    particle.tilt_angle = rng.random() * config.TILT_ANGLE_SPAN
    return particle


def new_particle(width: float, height: float, alpha: float, rng: random.Random) -> Particle:
    blank = Particle(
        color_primary="",
        color_secondary="",
        x=0.0,
        y=0.0,
        diameter=config.DIAMETER_MIN,
        tilt=0.0,
        tilt_angle_increment=config.TILT_INCREMENT_MIN,
        tilt_angle=0.0,
    )
    return reset_particle(blank, width, height, alpha, rng)


def resolve_spawn_target(
    count: int,
    max_count: int,
    minimum: int | None,
    maximum: int | None,
    rng: random.Random,
) -> int:
    """
    Population the store should grow to for one ``start`` call.

    - no bounds: ``max_count``
    - a single bound (or two equal ones): ``count`` plus that bound
    - two different bounds: ``count`` plus a random whole amount between them

    Zero counts as "not given".
    """
    if minimum and maximum:
        if minimum == maximum:
            return count + maximum
        if minimum > maximum:
            minimum, maximum = maximum, minimum
        return count + math.floor(rng.uniform(minimum, maximum))
    if minimum:
        return count + minimum
    if maximum:
        return count + maximum
    return max_count


def spawn_particles(
    state: "SimulationState",
    settings: "ConfettiSettings",
    width: float,
    height: float,
    minimum: int | None = None,
    maximum: int | None = None,
) -> int:
    """Append fresh particles until the store reaches its target. Never shrinks."""
    target = resolve_spawn_target(len(state.particles), settings.max_count, minimum, maximum, state.rng)
    added = 0
    while len(state.particles) < target:
        state.particles.append(new_particle(width, height, settings.alpha, state.rng))
        added += 1
    return added
