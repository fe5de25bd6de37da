from __future__ import annotations

import argparse
import logging
import sys

import pygame

from . import config
from .canvas import PygameCanvas
from .confetti import Confetti
from .config import ConfettiSettings
from .input import HostAction, InputManager
from .logging_jsonl import SessionLogger
from .scheduling import FrameRequests, TimerQueue
from .simulation import now_ms


def _setup_logging(debug: bool) -> None:
    # Quiet by default; the frame loop logs at DEBUG only.
    if not debug:
        return
    logging.basicConfig(
        level=logging.DEBUG,
        format="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        force=True,
    )


def _create_screen() -> pygame.Surface:
    """Resizable window first, plain window if the driver refuses."""
    try:
        return pygame.display.set_mode(config.WINDOW_SIZE, pygame.RESIZABLE)
    except pygame.error:
        return pygame.display.set_mode(config.WINDOW_SIZE)


def _positive_int(value: str) -> int:
    number = int(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {value}")
    return number


def _unit_float(value: str) -> float:
    number = float(value)
    if not 0.0 <= number <= 1.0:
        raise argparse.ArgumentTypeError(f"expected a value between 0 and 1, got {value}")
    return number


def _parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="confetti-overlay")
    parser.add_argument("--max-count", type=_positive_int, default=config.MAX_COUNT)
    parser.add_argument("--speed", type=float, default=config.SPEED)
    parser.add_argument(
        "--frame-interval",
        type=_positive_int,
        default=config.FRAME_INTERVAL_MS,
        help="Minimum milliseconds between simulated frames.",
    )
    parser.add_argument("--alpha", type=_unit_float, default=config.ALPHA)
    parser.add_argument("--gradient", action="store_true", default=config.GRADIENT)
    parser.add_argument("--timeout", type=_positive_int, default=None, help="Stop adding confetti after this many ms.")
    parser.add_argument("--min", dest="minimum", type=_positive_int, default=None)
    parser.add_argument("--max", dest="maximum", type=_positive_int, default=None)
    parser.add_argument(
        "--no-frame-sync",
        action="store_true",
        help="Drive the animation from fixed-delay timers instead of display frames.",
    )
    parser.add_argument("--debug", action="store_true", default=config.DEBUG)
    parser.add_argument("--session-log", action="store_true", default=config.SESSION_LOG_ENABLED)
    return parser.parse_args(argv)


def _handle_action(action: HostAction, confetti: Confetti) -> bool:
    """Apply a host command. Returns False when the host should quit."""
    if action.action == "quit":
        return False
    if action.action == "toggle":
        confetti.toggle()
    elif action.action == "pause":
        confetti.toggle_pause()
    elif action.action == "remove":
        confetti.remove()
    elif action.action == "burst":
        confetti.start(timeout=config.BURST_TIMEOUT_MS, minimum=config.BURST_MIN, maximum=config.BURST_MAX)
    elif action.action == "gradient":
        confetti.settings.gradient = not confetti.settings.gradient
    return True


def main() -> None:
    args = _parse_args(sys.argv[1:])
    _setup_logging(args.debug)
    log = logging.getLogger(__name__)

    pygame.init()
    screen = _create_screen()
    pygame.display.set_caption(config.WINDOW_TITLE)
    clock = pygame.time.Clock()

    settings = ConfettiSettings(
        max_count=args.max_count,
        speed=args.speed,
        frame_interval=args.frame_interval,
        alpha=args.alpha,
        gradient=args.gradient,
    )
    canvas = PygameCanvas(*screen.get_size())
    frames = None if args.no_frame_sync else FrameRequests()
    timers = TimerQueue(now_ms)
    confetti = Confetti(
        surface_factory=lambda: canvas,
        settings=settings,
        frame_scheduler=frames,
        timers=timers,
        clock=now_ms,
    )
    session_log = SessionLogger() if args.session_log else None
    input_manager = InputManager()

    confetti.start(timeout=args.timeout, minimum=args.minimum, maximum=args.maximum)
    if session_log is not None:
        session_log.log_command("start", particles=confetti.particle_count)
    log.debug("confetti started (frame_sync=%s)", frames is not None)

    running = True
    while running:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                running = False
            elif event.type == pygame.VIDEORESIZE:
                # pygame 2 resizes the display surface itself; the canvas only tracks the new size.
                screen = pygame.display.get_surface()
                canvas.resize(event.w, event.h)
            elif event.type == pygame.KEYDOWN:
                action = input_manager.handle_key(event.key)
                if action is None:
                    continue
                running = _handle_action(action, confetti)
                if session_log is not None:
                    session_log.log_command(
                        action.action,
                        particles=confetti.particle_count,
                        running=confetti.is_running(),
                        paused=confetti.is_paused(),
                    )

        timers.run_due()
        if frames is not None:
            frames.run_frame()

        screen.fill(config.BACKGROUND_COLOR)
        screen.blit(canvas.layer, (0, 0))
        pygame.display.flip()
        clock.tick(config.FPS)

    pygame.quit()


if __name__ == "__main__":
    main()
