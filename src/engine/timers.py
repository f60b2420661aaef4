"""
Cancellable timers on top of asyncio tasks

OneShotTimer  - one pending callback at a time, cancel-and-replace
PeriodicTimer - repeating callback until stopped

Both own exactly one task handle. cancel()/stop() are idempotent, and a
callback may reschedule or stop its own timer without cancelling itself.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.RENDER_ENGINE)

TimerCallback = Callable[[], Awaitable[None]]


def _cancel_task(task: Optional[asyncio.Task]) -> None:
    """Cancel a task unless it is finished or is the one currently running."""
    if task is None or task.done():
        return
    if task is asyncio.current_task():
        # Running callback finishes on its own; it is already detached
        return
    task.cancel()


class OneShotTimer:
    """
    Single-shot timer with cancel-and-replace semantics

    Example:
        debounce = OneShotTimer("door-debounce")
        debounce.schedule(10.0, self._start_fade)   # (re)start
        debounce.cancel()                            # no-op if not pending
    """

    def __init__(self, name: str):
        self.name = name
        self._task: Optional[asyncio.Task] = None

    @property
    def pending(self) -> bool:
        """True while a callback is waiting or running"""
        return self._task is not None and not self._task.done()

    def schedule(self, delay: float, callback: TimerCallback) -> None:
        """Replace any pending callback with `callback` after `delay` seconds"""
        _cancel_task(self._task)
        self._task = asyncio.get_running_loop().create_task(
            self._run(max(0.0, delay), callback),
            name=f"timer:{self.name}",
        )
        self._task.add_done_callback(self._on_done)

    def cancel(self) -> None:
        task, self._task = self._task, None
        _cancel_task(task)

    async def _run(self, delay: float, callback: TimerCallback) -> None:
        # sleep(0) still yields, so a frame never recurses synchronously
        await asyncio.sleep(delay)
        await callback()

    def _on_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log.error(f"Timer '{self.name}' callback failed", exception=exc)


class PeriodicTimer:
    """
    Repeating timer: callback every `interval` seconds until stopped

    Example:
        fade = PeriodicTimer("door-fade", 0.1, self._fade_step)
        fade.start()
        ...
        fade.stop()    # safe from inside _fade_step too
    """

    def __init__(self, name: str, interval: float, callback: TimerCallback):
        self.name = name
        self.interval = interval
        self._callback = callback
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """(Re)start from a fresh interval"""
        _cancel_task(self._task)
        self._task = asyncio.get_running_loop().create_task(
            self._loop(),
            name=f"timer:{self.name}",
        )
        self._task.add_done_callback(self._on_done)

    def stop(self) -> None:
        task, self._task = self._task, None
        _cancel_task(task)

    async def _loop(self) -> None:
        me = asyncio.current_task()
        while self._task is me:
            await asyncio.sleep(self.interval)
            if self._task is not me:
                return
            await self._callback()

    def _on_done(self, task: asyncio.Task) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            log.error(f"Periodic timer '{self.name}' stopped by error", exception=exc)
