from __future__ import annotations

import random

import pytest

from confetti_overlay.canvas import LinearGradient
from confetti_overlay.config import ConfettiSettings
from confetti_overlay.confetti import Confetti
from confetti_overlay.scheduling import FrameRequests, TimerQueue


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms


class RecordingSurface:
    """Canvas stand-in that records every drawing call."""

    def __init__(self, width: int = 400, height: int = 300) -> None:
        self.width = width
        self.height = height
        self.line_width = 1.0
        self.stroke_style = "rgba(0,0,0,1)"
        self.calls: list[tuple] = []
        self.gradients: list[LinearGradient] = []

    def clear(self, width, height) -> None:
        self.calls.append(("clear", width, height))

    def begin_path(self) -> None:
        self.calls.append(("begin_path",))

    def move_to(self, x, y) -> None:
        self.calls.append(("move_to", x, y))

    def line_to(self, x, y) -> None:
        self.calls.append(("line_to", x, y))

    def stroke(self) -> None:
        self.calls.append(("stroke", self.line_width, self.stroke_style))

    def create_linear_gradient(self, x0, y0, x1, y1) -> LinearGradient:
        gradient = LinearGradient(x0, y0, x1, y1)
        self.gradients.append(gradient)
        self.calls.append(("create_linear_gradient", x0, y0, x1, y1))
        return gradient

    def names(self) -> list[str]:
        return [call[0] for call in self.calls]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def surface() -> RecordingSurface:
    return RecordingSurface()


@pytest.fixture
def frames() -> FrameRequests:
    return FrameRequests()


@pytest.fixture
def timers(clock) -> TimerQueue:
    return TimerQueue(clock)


@pytest.fixture
def make_confetti(surface, frames, timers, clock):
    def _make(settings: ConfettiSettings | None = None, use_frames: bool = True, seed: int = 7) -> Confetti:
        return Confetti(
            surface_factory=lambda: surface,
            settings=settings or ConfettiSettings(),
            frame_scheduler=frames if use_frames else None,
            timers=timers,
            clock=clock,
            rng=random.Random(seed),
        )

    return _make
