"""
Tests for the fixed-rate frame loop: delay computation, overrun handling
and start / stop behaviour.
"""

import asyncio

import pytest

from conftest import wait_until
from engine.tick_scheduler import TickScheduler


async def _noop():
    pass


class FakeClock:
    """Each frame reads the clock twice; the second read advances by `frame_cost`"""

    def __init__(self, frame_cost: float):
        self.now = 0.0
        self.frame_cost = frame_cost
        self._reads = 0

    def __call__(self) -> float:
        self._reads += 1
        if self._reads % 2 == 0:
            self.now += self.frame_cost
        return self.now


class TestNextDelay:

    @pytest.mark.parametrize("elapsed, expected", [
        (0.0, 0.05),
        (0.02, 0.03),
        (0.05, 0.0),
        (0.08, 0.0),
    ])
    def test_drift_compensation(self, elapsed, expected):
        scheduler = TickScheduler(0.05, _noop)
        assert scheduler.next_delay(elapsed) == pytest.approx(expected)

    def test_continuous_mode_has_no_delay(self):
        scheduler = TickScheduler(0.05, _noop, is_continuous=lambda: True)
        assert scheduler.next_delay(0.01) == 0.0


class TestLoop:

    async def test_frames_run_at_interval(self):
        frames = []

        async def frame():
            frames.append(asyncio.get_running_loop().time())

        scheduler = TickScheduler(0.01, frame)
        scheduler.start()
        await wait_until(lambda: len(frames) >= 5)
        scheduler.stop()

        # generous bounds, CI machines are slow
        span = frames[4] - frames[0]
        assert 0.03 <= span <= 0.5

    async def test_overrun_sets_lagging(self):
        scheduler = TickScheduler(0.01, _noop, clock=FakeClock(frame_cost=0.05))

        scheduler.start()
        await wait_until(lambda: scheduler.frames >= 3)
        scheduler.stop()

        assert scheduler.lagging
        assert scheduler.overruns >= 3
        assert scheduler.last_elapsed_s == pytest.approx(0.05)

    async def test_recovers_after_overrun(self):
        scheduler = TickScheduler(0.001, _noop, clock=FakeClock(frame_cost=0.0))
        scheduler.lagging = True

        scheduler.start()
        await wait_until(lambda: scheduler.frames >= 2)
        scheduler.stop()

        assert not scheduler.lagging
        assert scheduler.overruns == 0

    async def test_stop_is_idempotent_and_final(self):
        frames = []

        async def frame():
            frames.append(1)

        scheduler = TickScheduler(0.001, frame)
        scheduler.start()
        await wait_until(lambda: len(frames) >= 2)

        scheduler.stop()
        scheduler.stop()
        count = len(frames)
        await asyncio.sleep(0.02)

        assert len(frames) == count
        assert not scheduler.running

    async def test_stop_from_inside_frame(self):
        scheduler = None
        frames = []

        async def frame():
            frames.append(1)
            scheduler.stop()

        scheduler = TickScheduler(0.001, frame)
        scheduler.start()
        await asyncio.sleep(0.02)

        assert frames == [1]

    async def test_continuous_mode_runs_many_frames(self):
        scheduler = TickScheduler(10.0, _noop, is_continuous=lambda: True)

        scheduler.start()
        await asyncio.sleep(0.02)
        scheduler.stop()

        assert scheduler.frames > 5

    async def test_failing_frame_does_not_kill_loop(self):
        calls = []

        async def frame():
            calls.append(1)
            raise RuntimeError("device write failed")

        scheduler = TickScheduler(0.001, frame)
        scheduler.start()
        await wait_until(lambda: len(calls) >= 3)
        scheduler.stop()

        assert scheduler.frames >= 3
