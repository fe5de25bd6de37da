"""Drawing surface the confetti renderer paints on, plus a pygame implementation."""
from __future__ import annotations

import re
from typing import Protocol, Union

import pygame

from . import config

RGBA = tuple[int, int, int, int]

_RGBA_RE = re.compile(
    r"^\s*rgba?\(\s*(\d{1,3})\s*,\s*(\d{1,3})\s*,\s*(\d{1,3})\s*(?:,\s*([0-9]*\.?[0-9]+)\s*)?\)\s*$"
)


def parse_rgba(color: str) -> RGBA:
    """Parse ``rgba(r,g,b,a)`` / ``rgb(r,g,b)`` into a pygame colour tuple."""
    match = _RGBA_RE.match(color)
    if match is None:
        raise ValueError(f"not an rgb/rgba colour: {color!r}")
    r, g, b = (min(255, int(match.group(i))) for i in (1, 2, 3))
    alpha = float(match.group(4)) if match.group(4) is not None else 1.0
    alpha = max(0.0, min(1.0, alpha))
    return (r, g, b, int(round(alpha * 255)))


def _lerp_color(a: RGBA, b: RGBA, t: float) -> RGBA:
    t = max(0.0, min(1.0, t))
    return tuple(int(round(a[i] + (b[i] - a[i]) * t)) for i in range(4))  # type: ignore[return-value]


class LinearGradient:
    def __init__(self, x0: float, y0: float, x1: float, y1: float) -> None:
        self.start = (x0, y0)
        self.end = (x1, y1)
        self.stops: list[tuple[float, str]] = []

    def add_color_stop(self, offset: float, color: str) -> None:
        self.stops.append((max(0.0, min(1.0, float(offset))), color))
        self.stops.sort(key=lambda stop: stop[0])

    def color_at(self, t: float) -> RGBA:
        """Colour at ``t`` in [0, 1] along the gradient axis."""
        if not self.stops:
            return (0, 0, 0, 0)
        parsed = [(offset, parse_rgba(color)) for offset, color in self.stops]
        if t <= parsed[0][0]:
            return parsed[0][1]
        for (lo, lo_color), (hi, hi_color) in zip(parsed, parsed[1:]):
            if t <= hi:
                span = hi - lo
                return _lerp_color(lo_color, hi_color, (t - lo) / span if span else 1.0)
        return parsed[-1][1]


StrokeStyle = Union[str, LinearGradient]


class Surface(Protocol):
    width: int
    height: int
    line_width: float
    stroke_style: StrokeStyle

    def clear(self, width: float, height: float) -> None: ...

    def begin_path(self) -> None: ...

    def move_to(self, x: float, y: float) -> None: ...

    def line_to(self, x: float, y: float) -> None: ...

    def stroke(self) -> None: ...

    def create_linear_gradient(self, x0: float, y0: float, x1: float, y1: float) -> LinearGradient: ...


class PygameCanvas:
    """
    Canvas-like drawing on a transparent pygame layer the size of the window.

    The host blits ``layer`` over its background each frame and calls
    ``resize`` when the window size changes.
    """

    def __init__(self, width: int, height: int) -> None:
        self.width = int(width)
        self.height = int(height)
        self.layer = pygame.Surface((self.width, self.height), pygame.SRCALPHA)
        self.line_width: float = 1.0
        self.stroke_style: StrokeStyle = "rgba(0,0,0,1)"
        self._path: list[list[tuple[float, float]]] = []

    def resize(self, width: int, height: int) -> None:
        self.width = max(1, int(width))
        self.height = max(1, int(height))
        self.layer = pygame.Surface((self.width, self.height), pygame.SRCALPHA)

    def clear(self, width: float, height: float) -> None:
        self.layer.fill((0, 0, 0, 0), pygame.Rect(0, 0, int(width), int(height)))

    def begin_path(self) -> None:
        self._path = []

    def move_to(self, x: float, y: float) -> None:
        self._path.append([(x, y)])

    def line_to(self, x: float, y: float) -> None:
        if not self._path:
            self._path.append([(x, y)])
        else:
            self._path[-1].append((x, y))

    def create_linear_gradient(self, x0: float, y0: float, x1: float, y1: float) -> LinearGradient:
        return LinearGradient(x0, y0, x1, y1)

    def stroke(self) -> None:
        width = max(1, int(round(self.line_width)))
        for points in self._path:
            for start, end in zip(points, points[1:]):
                if isinstance(self.stroke_style, LinearGradient):
                    self._stroke_gradient(start, end, width, self.stroke_style)
                else:
                    self._stroke_segment(start, end, width, parse_rgba(self.stroke_style))

    def _stroke_segment(self, start: tuple, end: tuple, width: int, color: RGBA) -> None:
        if color[3] == 0:
            return
        pygame.draw.line(self.layer, color, start, end, width)

    def _stroke_gradient(self, start: tuple, end: tuple, width: int, gradient: LinearGradient) -> None:
        gx0, gy0 = gradient.start
        gx1, gy1 = gradient.end
        axis_x, axis_y = gx1 - gx0, gy1 - gy0
        axis_len_sq = axis_x * axis_x + axis_y * axis_y
        slices = config.GRADIENT_SLICES
        for n in range(slices):
            t0 = n / slices
            t1 = (n + 1) / slices
            a = (start[0] + (end[0] - start[0]) * t0, start[1] + (end[1] - start[1]) * t0)
            b = (start[0] + (end[0] - start[0]) * t1, start[1] + (end[1] - start[1]) * t1)
            mid_x = (a[0] + b[0]) / 2
            mid_y = (a[1] + b[1]) / 2
            if axis_len_sq:
                t = ((mid_x - gx0) * axis_x + (mid_y - gy0) * axis_y) / axis_len_sq
            else:
                t = 0.0
            self._stroke_segment(a, b, width, gradient.color_at(t))
