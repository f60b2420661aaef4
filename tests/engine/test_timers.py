"""
Tests for OneShotTimer and PeriodicTimer cancel / replace semantics.
"""

import asyncio

from conftest import wait_until
from engine.timers import OneShotTimer, PeriodicTimer


class Counter:
    def __init__(self):
        self.calls = 0

    async def __call__(self):
        self.calls += 1


class TestOneShotTimer:

    async def test_fires_once(self):
        counter = Counter()
        timer = OneShotTimer("t")

        timer.schedule(0.001, counter)
        await wait_until(lambda: counter.calls == 1)
        await asyncio.sleep(0.01)

        assert counter.calls == 1
        assert not timer.pending

    async def test_reschedule_replaces_pending_callback(self):
        first, second = Counter(), Counter()
        timer = OneShotTimer("t")

        timer.schedule(0.01, first)
        timer.schedule(0.001, second)
        await asyncio.sleep(0.03)

        assert first.calls == 0
        assert second.calls == 1

    async def test_cancel(self):
        counter = Counter()
        timer = OneShotTimer("t")

        timer.schedule(0.005, counter)
        assert timer.pending
        timer.cancel()
        timer.cancel()
        await asyncio.sleep(0.02)

        assert counter.calls == 0
        assert not timer.pending

    async def test_callback_can_reschedule_itself(self):
        timer = OneShotTimer("t")
        calls = []

        async def again():
            calls.append(len(calls))
            if len(calls) < 3:
                timer.schedule(0, again)

        timer.schedule(0, again)
        await wait_until(lambda: len(calls) == 3)
        await asyncio.sleep(0.01)

        assert calls == [0, 1, 2]

    async def test_failing_callback_does_not_raise(self):
        timer = OneShotTimer("t")

        async def boom():
            raise RuntimeError("boom")

        timer.schedule(0, boom)
        await asyncio.sleep(0.01)

        assert not timer.pending


class TestPeriodicTimer:

    async def test_repeats_until_stopped(self):
        counter = Counter()
        timer = PeriodicTimer("p", 0.001, counter)

        timer.start()
        await wait_until(lambda: counter.calls >= 3)
        timer.stop()
        calls = counter.calls
        await asyncio.sleep(0.01)

        assert counter.calls == calls
        assert not timer.running

    async def test_stop_from_inside_callback(self):
        calls = []

        async def step():
            calls.append(1)
            if len(calls) == 2:
                timer.stop()

        timer = PeriodicTimer("p", 0.001, step)
        timer.start()
        await wait_until(lambda: not timer.running)
        await asyncio.sleep(0.01)

        assert len(calls) == 2

    async def test_restart_keeps_single_loop(self):
        counter = Counter()
        timer = PeriodicTimer("p", 0.005, counter)

        timer.start()
        timer.start()
        timer.start()
        await asyncio.sleep(0.012)
        timer.stop()

        # one loop at 5 ms -> at most 2-3 calls, three loops would give ~6
        assert counter.calls <= 3
