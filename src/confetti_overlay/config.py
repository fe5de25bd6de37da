from __future__ import annotations

import math
from dataclasses import dataclass
from pathlib import Path

import pygame

ROOT_DIR = Path(__file__).resolve().parents[2]

LOGS_DIR = ROOT_DIR / "logs"

# ---------------------------------------------------------------------------
# Display
# ---------------------------------------------------------------------------
WINDOW_SIZE = (1280, 720)
FPS = 60
WINDOW_TITLE = "Confetti"
BACKGROUND_COLOR = (12, 12, 24)

# ---------------------------------------------------------------------------
# Confetti defaults (runtime values live in ConfettiSettings)
# ---------------------------------------------------------------------------
MAX_COUNT = 150
SPEED = 2
FRAME_INTERVAL_MS = 15
ALPHA = 1.0
GRADIENT = False

# Burst started by the host "burst" key: extra particles and auto-stop delay.
BURST_MIN = 10
BURST_MAX = 30
BURST_TIMEOUT_MS = 3000

# ---------------------------------------------------------------------------
# Particle motion
# ---------------------------------------------------------------------------
DIAMETER_MIN = 5.0
DIAMETER_SPAN = 10.0
TILT_SEED_MIN = -10.0
TILT_SEED_SPAN = 10.0
TILT_INCREMENT_MIN = 0.05
TILT_INCREMENT_SPAN = 0.07
TILT_ANGLE_SPAN = math.pi
TILT_AMPLITUDE = 15.0

WAVE_STEP = 0.01
SWAY_BIAS = 0.5
FALL_SCALE = 0.5

# Particles above this line are flushed out when streaming stops.
DRAIN_THRESHOLD_Y = -15.0
DRAIN_OFFSET_Y = 100.0
# Horizontal slack before a particle counts as off-surface.
BOUNDS_MARGIN_X = 20.0

# ---------------------------------------------------------------------------
# Color Palette
# ---------------------------------------------------------------------------
CONFETTI_COLORS = [
    (30, 144, 255),   # dodger blue
    (107, 142, 35),   # olive drab
    (255, 215, 0),    # gold
    (255, 192, 203),  # pink
    (106, 90, 205),   # slate blue
    (173, 216, 230),  # light blue
    (238, 130, 238),  # violet
    (152, 251, 152),  # pale green
    (70, 130, 180),   # steel blue
    (244, 164, 96),   # sandy brown
    (210, 105, 30),   # chocolate
    (220, 20, 60),    # crimson
]

# Slices used to approximate a linear gradient along one stroke.
GRADIENT_SLICES = 8

# ---------------------------------------------------------------------------
# Host keys
# ---------------------------------------------------------------------------
HOST_KEYS = {
    "toggle": pygame.K_SPACE,
    "pause": pygame.K_p,
    "remove": pygame.K_r,
    "burst": pygame.K_b,
    "gradient": pygame.K_g,
    "quit": (pygame.K_q, pygame.K_ESCAPE),
}

# ---------------------------------------------------------------------------
# Diagnostics
# ---------------------------------------------------------------------------
# Verbose logging of the control API and the frame loop.
DEBUG = False
# Append every host command to logs/session_log.jsonl.
SESSION_LOG_ENABLED = False


@dataclass
class ConfettiSettings:
    """Runtime knobs. Read at point of use, so edits apply on the next frame."""

    max_count: int = MAX_COUNT
    speed: float = SPEED
    frame_interval: float = FRAME_INTERVAL_MS
    alpha: float = ALPHA
    gradient: bool = GRADIENT
