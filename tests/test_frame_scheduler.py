from frame_scheduler import FrameScheduler


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def test_ticks_with_elapsed_time():
    clock = FakeClock()
    seen = []
    sched = FrameScheduler(seen.append, time_source=clock)
    assert not sched.pump()

    sched.start()
    clock.now = 0.016
    assert sched.pump()
    clock.now = 0.040
    assert sched.pump()
    assert seen == [0.016, 0.040 - 0.016]
    assert sched.frames == 2


def test_stop_inside_tick_suppresses_next():
    clock = FakeClock()
    calls = []

    def on_tick(dt):
        calls.append(dt)
        sched.stop()

    sched = FrameScheduler(on_tick, time_source=clock)
    sched.start()
    assert sched.pump()
    assert not sched.has_pending_tick
    assert not sched.pump()
    assert len(calls) == 1


def test_toggle_pauses_and_resumes_without_a_jump():
    clock = FakeClock()
    seen = []
    sched = FrameScheduler(seen.append, time_source=clock)
    sched.start()
    clock.now = 0.01
    sched.pump()
    sched.toggle()
    assert not sched.is_playing
    clock.now = 5.0
    assert not sched.pump()
    sched.toggle()
    clock.now = 5.02
    sched.pump()
    assert seen[-1] == 5.02 - 5.0


def test_dt_is_clamped():
    clock = FakeClock()
    seen = []
    sched = FrameScheduler(seen.append, time_source=clock, max_dt=0.05)
    sched.start()
    clock.now = 2.0
    sched.pump()
    assert seen == [0.05]
