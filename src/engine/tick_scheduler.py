"""
TickScheduler: fixed-rate evaluate-and-push loop with drift compensation.

Each frame:
  1. start = clock()
  2. run the frame callback (change evaluation + device push)
  3. elapsed = clock() - start
  4. overrun (elapsed > interval): warn, next frame immediately (catch-up, not skip)
  5. otherwise next frame after interval - elapsed, or immediately when the
     current mode wants continuous output (audio modes)

Exactly one frame is ever pending; the next one is always scheduled through
the timer, never by a synchronous call.
"""

from __future__ import annotations

import time
from typing import Awaitable, Callable

from engine.timers import OneShotTimer
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.RENDER_ENGINE)


class TickScheduler:
    """
    Frame loop owning a single OneShotTimer.

    Example:
        scheduler = TickScheduler(
            interval_s=0.05,
            on_frame=controller.run_frame,
            is_continuous=lambda: controller.get_mode().is_audio,
        )
        scheduler.start()   # on device connect
        scheduler.stop()    # on device disconnect
    """

    def __init__(
        self,
        interval_s: float,
        on_frame: Callable[[], Awaitable[None]],
        is_continuous: Callable[[], bool] = lambda: False,
        clock: Callable[[], float] = time.perf_counter,
    ):
        """
        Args:
            interval_s: Nominal frame interval (e.g. 0.05 = 20 Hz)
            on_frame: Coroutine function run once per frame
            is_continuous: True -> schedule next frame immediately
            clock: Monotonic clock in seconds (injectable for tests)
        """
        self.interval_s = interval_s
        self._on_frame = on_frame
        self._is_continuous = is_continuous
        self._clock = clock
        self._timer = OneShotTimer("tick")
        self._active = False

        # Metrics
        self.frames = 0
        self.overruns = 0
        self.lagging = False
        self.last_elapsed_s = 0.0

        log.debug("TickScheduler initialized", interval_ms=f"{interval_s * 1000:.0f}")

    @property
    def running(self) -> bool:
        return self._active

    def start(self, delay_s: float = 0.0) -> None:
        """Start (or restart) the loop; clears any lagging state."""
        self._active = True
        self.lagging = False
        self._timer.schedule(delay_s, self._tick)
        log.info("Tick loop started", fps=f"{1 / self.interval_s:.0f}")

    def stop(self) -> None:
        """Cancel the pending frame. No-op when not running."""
        if not self._active:
            return
        self._active = False
        self._timer.cancel()
        log.info("Tick loop stopped", frames=self.frames, overruns=self.overruns)

    def next_delay(self, elapsed_s: float) -> float:
        """Delay before the next frame given this frame's processing time"""
        if elapsed_s > self.interval_s:
            return 0.0
        if self._is_continuous():
            return 0.0
        return self.interval_s - elapsed_s

    async def _tick(self) -> None:
        start = self._clock()
        try:
            await self._on_frame()
        except Exception as e:
            # A failed push must not kill the loop; next frame retries
            log.error("Frame failed", exception=e)

        elapsed = self._clock() - start
        self.frames += 1
        self.last_elapsed_s = elapsed

        if not self._active:
            return

        if elapsed > self.interval_s:
            self.overruns += 1
            self.lagging = True
            log.warn(
                "Server is lagging!",
                elapsed_ms=f"{elapsed * 1000:.1f}",
                interval_ms=f"{self.interval_s * 1000:.1f}",
            )
        else:
            self.lagging = False

        self._timer.schedule(self.next_delay(elapsed), self._tick)
