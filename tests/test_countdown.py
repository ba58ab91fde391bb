"""
Tests for the per-question countdown
"""

import asyncio
import threading

from app.domain.countdown import Countdown, ThreadScheduler


class Recorder:
    def __init__(self):
        self.ticks = []
        self.expired = []

    def on_tick(self, generation, remaining):
        self.ticks.append((generation, remaining))

    def on_expire(self, generation):
        self.expired.append(generation)


class TestCountdown:
    def make_countdown(self, scheduler, duration=30):
        self.recorder = Recorder()
        return Countdown(
            on_tick=self.recorder.on_tick,
            on_expire=self.recorder.on_expire,
            scheduler=scheduler,
            duration=duration,
        )

    def test_ticks_once_per_second(self, scheduler):
        countdown = self.make_countdown(scheduler)
        countdown.start(1)

        scheduler.advance(3)

        assert countdown.remaining == 27
        assert self.recorder.ticks == [(1, 29), (1, 28), (1, 27)]
        assert countdown.running

    def test_expires_at_zero(self, scheduler):
        countdown = self.make_countdown(scheduler)
        countdown.start(1)

        scheduler.advance(30)

        assert countdown.remaining == 0
        assert self.recorder.expired == [1]
        assert not countdown.running
        assert scheduler.pending == []

    def test_cancel_is_idempotent(self, scheduler):
        countdown = self.make_countdown(scheduler)
        countdown.start(1)

        countdown.cancel()
        countdown.cancel()
        scheduler.advance(60)

        assert self.recorder.ticks == []
        assert self.recorder.expired == []

    def test_stale_tick_is_ignored(self, scheduler):
        countdown = self.make_countdown(scheduler)
        countdown.start(1)
        stale = scheduler.handles[0]

        countdown.start(2)
        stale.callback()

        assert self.recorder.ticks == []
        assert countdown.remaining == 30

    def test_restart_resets_remaining(self, scheduler):
        countdown = self.make_countdown(scheduler)
        countdown.start(1)
        scheduler.advance(12)

        countdown.start(2)

        assert countdown.remaining == 30
        assert len(scheduler.pending) == 1

    def test_warning_in_last_ten_seconds(self, scheduler):
        countdown = self.make_countdown(scheduler)
        countdown.start(1)

        scheduler.advance(19)
        assert not countdown.is_warning

        scheduler.advance(1)
        assert countdown.is_warning

    def test_runs_on_asyncio_loop(self):
        recorder = Recorder()

        async def run():
            done = asyncio.Event()

            def on_expire(generation):
                recorder.on_expire(generation)
                done.set()

            countdown = Countdown(
                on_tick=recorder.on_tick,
                on_expire=on_expire,
                duration=3,
                interval=0.01,
            )
            countdown.start(5)
            await asyncio.wait_for(done.wait(), timeout=2)

        asyncio.run(run())

        assert recorder.ticks == [(5, 2), (5, 1), (5, 0)]
        assert recorder.expired == [5]

    def test_runs_on_timer_threads_without_loop(self):
        recorder = Recorder()
        done = threading.Event()

        def on_expire(generation):
            recorder.on_expire(generation)
            done.set()

        countdown = Countdown(
            on_tick=recorder.on_tick,
            on_expire=on_expire,
            duration=3,
            interval=0.01,
        )
        countdown.start(7)

        assert done.wait(timeout=2)
        assert isinstance(countdown._scheduler, ThreadScheduler)
        assert recorder.ticks == [(7, 2), (7, 1), (7, 0)]
        assert recorder.expired == [7]
        assert not countdown.running
