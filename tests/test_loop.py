import random

from confetti_overlay.config import ConfettiSettings
from confetti_overlay.loop import AnimationLoop
from confetti_overlay.particles import spawn_particles
from confetti_overlay.scheduling import TimerFrameScheduler
from confetti_overlay.simulation import SimulationState


def _loop(surface, frames, clock, settings=None, count=10):
    settings = settings or ConfettiSettings(max_count=count)
    state = SimulationState(last_frame_time=clock(), rng=random.Random(0), streaming=True)
    spawn_particles(state, settings, surface.width, surface.height)
    return AnimationLoop(state, settings, surface, frames, clock)


def test_tick_waits_for_the_frame_interval(surface, frames, clock):
    loop = _loop(surface, frames, clock)
    loop.ensure_running()

    clock.advance(10)
    frames.run_frame()
    assert loop.frames_drawn == 0
    assert loop.state.wave_angle == 0.0
    assert surface.calls == []
    assert loop.is_scheduled

    clock.advance(10)
    frames.run_frame()
    assert loop.frames_drawn == 1
    assert surface.calls[0] == ("clear", surface.width, surface.height)
    assert surface.names().count("stroke") == 10
    assert loop.is_scheduled


def test_last_frame_time_rebases_on_the_interval(surface, frames, clock):
    loop = _loop(surface, frames, clock)
    start = clock()
    loop.ensure_running()

    clock.advance(40)
    frames.run_frame()
    # 40 ms elapsed with a 15 ms interval: keep the 10 ms remainder.
    assert loop.state.last_frame_time == start + 30


def test_zero_interval_draws_every_tick(surface, frames, clock):
    settings = ConfettiSettings(max_count=3, frame_interval=0)
    loop = _loop(surface, frames, clock, settings=settings)
    loop.ensure_running()
    for _ in range(3):
        clock.advance(1)
        frames.run_frame()
    assert loop.frames_drawn == 3
    assert loop.state.last_frame_time == clock()


def test_empty_store_idles_the_loop(surface, frames, clock):
    loop = _loop(surface, frames, clock)
    loop.state.particles.clear()
    loop.ensure_running()

    frames.run_frame()

    assert surface.calls == [("clear", surface.width, surface.height)]
    assert not loop.is_scheduled
    assert frames.pending() == 0


def test_paused_tick_drops_the_handle(surface, frames, clock):
    loop = _loop(surface, frames, clock)
    loop.ensure_running()
    loop.state.paused = True

    clock.advance(100)
    frames.run_frame()

    assert not loop.is_scheduled
    assert frames.pending() == 0
    assert loop.frames_drawn == 0


def test_ensure_running_keeps_a_single_pending_frame(surface, frames, clock):
    loop = _loop(surface, frames, clock)
    loop.ensure_running()
    loop.ensure_running()
    assert frames.pending() == 1

    loop.cancel()
    assert frames.pending() == 0
    assert not loop.is_scheduled


def test_tick_reads_surface_size_each_frame(surface, frames, clock):
    loop = _loop(surface, frames, clock)
    loop.ensure_running()
    surface.width, surface.height = 800, 600

    clock.advance(20)
    frames.run_frame()

    assert surface.calls[0] == ("clear", 800, 600)


def test_timer_fallback_uses_the_frame_interval(surface, timers, clock):
    settings = ConfettiSettings(max_count=5, frame_interval=25)
    fallback = TimerFrameScheduler(timers, lambda: settings.frame_interval)
    loop = _loop(surface, fallback, clock, settings=settings)
    loop.ensure_running()

    clock.advance(24)
    assert timers.run_due() == 0
    clock.advance(2)
    assert timers.run_due() == 1
    assert loop.frames_drawn == 1
    assert timers.pending() == 1


def test_timer_fallback_skips_the_throttle(surface, timers, clock):
    settings = ConfettiSettings(max_count=5, frame_interval=20)
    fallback = TimerFrameScheduler(timers, lambda: settings.frame_interval)
    loop = _loop(surface, fallback, clock, settings=settings)
    loop.ensure_running()

    for _ in range(10):
        clock.advance(20)
        assert timers.run_due() == 1
    assert loop.frames_drawn == 10


def test_display_frames_stay_throttled_at_the_interval(surface, frames, clock):
    settings = ConfettiSettings(max_count=5, frame_interval=20)
    loop = _loop(surface, frames, clock, settings=settings)
    loop.ensure_running()

    clock.advance(20)
    frames.run_frame()
    assert loop.frames_drawn == 0
