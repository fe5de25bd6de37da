from confetti_overlay.scheduling import FrameRequests, TimerQueue


def test_frame_requests_run_once_per_frame():
    frames = FrameRequests()
    seen = []

    def again():
        seen.append("again")
        frames.schedule(again)

    frames.schedule(again)
    assert frames.run_frame() == 1
    assert seen == ["again"]
    assert frames.pending() == 1
    frames.run_frame()
    assert seen == ["again", "again"]


def test_frame_request_cancel():
    frames = FrameRequests()
    handle = frames.schedule(lambda: None)
    frames.cancel(handle)
    frames.cancel(handle)
    assert frames.run_frame() == 0


def test_timers_fire_in_due_order(clock):
    timers = TimerQueue(clock)
    fired = []
    timers.call_later(30, lambda: fired.append("late"))
    timers.call_later(10, lambda: fired.append("early"))
    cancelled = timers.call_later(20, lambda: fired.append("cancelled"))
    timers.cancel(cancelled)

    clock.advance(15)
    assert timers.run_due() == 1
    clock.advance(20)
    timers.run_due()
    assert fired == ["early", "late"]
    assert timers.pending() == 0


def test_zero_delay_timers_added_while_running_wait(clock):
    timers = TimerQueue(clock)
    count = []

    def rearm():
        count.append(1)
        timers.call_later(0, rearm)

    timers.call_later(0, rearm)
    assert timers.run_due() == 1
    assert timers.run_due() == 1
    assert len(count) == 2


def test_negative_delay_is_due_now(clock):
    timers = TimerQueue(clock)
    fired = []
    timers.call_later(-50, lambda: fired.append(True))
    assert timers.run_due() == 1
    assert fired == [True]
