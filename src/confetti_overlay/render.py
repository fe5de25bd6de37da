from __future__ import annotations

from typing import Iterable

from .canvas import Surface
from .particles import Particle


def draw_particles(surface: Surface, particles: Iterable[Particle], gradient: bool = False) -> None:
    """Stroke one tilted line per particle. The caller clears the surface first."""
    for p in particles:
        surface.begin_path()
        surface.line_width = p.diameter
        x2 = p.x + p.tilt
        x = x2 + p.diameter / 2
        y2 = p.y + p.tilt + p.diameter / 2

        if gradient:
            style = surface.create_linear_gradient(x, p.y, x2, y2)
            style.add_color_stop(0, p.color_primary)
            style.add_color_stop(1.0, p.color_secondary)
            surface.stroke_style = style
        else:
            surface.stroke_style = p.color_primary

        surface.move_to(x, p.y)
        surface.line_to(x2, y2)
        surface.stroke()
