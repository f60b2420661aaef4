"""
DoorTransitionController - door-open override and fade-back

Open   -> full white immediately, mode Door (pre-door mode/colour captured once)
Close  -> debounce timer; a re-open inside the window cancels it
Expiry -> periodic fade from white, one unit per channel per step, down to
          the captured colour; then the captured mode is restored

The whole episode is abandoned by any explicit mode change (cancel()).
"""

import asyncio
from typing import Optional

from controllers.light_output import LightOutput
from controllers.mode_state_machine import ModeStateMachine
from engine.timers import OneShotTimer, PeriodicTimer
from models.color import Color, ColorState
from models.config import TimingConfig
from models.domain.mode import DoorEpisode, FadeCursor
from models.enums import ControllerMode
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.DOOR)


class DoorTransitionController:

    def __init__(
        self,
        modes: ModeStateMachine,
        colors: ColorState,
        output: LightOutput,
        timing: TimingConfig,
        lock: asyncio.Lock,
    ):
        """
        Args:
            lock: Controller lock; fade steps take it like any frame does
        """
        self.modes = modes
        self.colors = colors
        self.output = output
        self.debounce_s = timing.door_debounce_s
        self._lock = lock

        self.episode: Optional[DoorEpisode] = None
        self._cursor: Optional[FadeCursor] = None

        self._debounce = OneShotTimer("door-debounce")
        self._fade = PeriodicTimer("door-fade", timing.fade_step_s, self._fade_step)

    @property
    def debounce_pending(self) -> bool:
        return self._debounce.pending

    @property
    def fading(self) -> bool:
        return self._fade.running

    # ------------------------------------------------------------------
    # Sensor edges (caller holds the controller lock)
    # ------------------------------------------------------------------

    async def on_door(self, level: bool) -> None:
        if self.modes.get_mode() is ControllerMode.MANUAL_LOCKED:
            log.debug("Door edge ignored in ManualLocked", open=level)
            return

        if level:
            await self._on_open()
        else:
            self._on_close()

    async def _on_open(self) -> None:
        self._debounce.cancel()
        self._stop_fade()

        if self.episode is None:
            self.episode = DoorEpisode(
                restore_mode=self.modes.get_mode(),
                restore_color=self.colors.target,
            )
        self.episode.door_open = True

        log.info(
            "Door opened",
            restore_mode=self.episode.restore_mode.value,
            restore_color=str(self.episode.restore_color),
        )

        white = Color.white()
        self.modes.enter_override()
        await self.output.push(white, broadcast=False)
        await self.output.announce(ControllerMode.DOOR, white)

    def _on_close(self) -> None:
        if self.modes.get_mode() is not ControllerMode.DOOR or self.episode is None:
            log.debug("Door closed outside the override, ignored")
            return

        self.episode.door_open = False
        self._stop_fade()
        self._debounce.schedule(self.debounce_s, self._start_fade)
        log.info("Door closed, fade-back pending", delay_s=self.debounce_s)

    # ------------------------------------------------------------------
    # Fade-back
    # ------------------------------------------------------------------

    async def _start_fade(self) -> None:
        if self.episode is None:
            return
        self._cursor = FadeCursor()
        self._fade.start()
        log.info("Fade-back started", target=str(self.episode.restore_color))

    async def _fade_step(self) -> None:
        async with self._lock:
            episode, cursor = self.episode, self._cursor
            if episode is None or cursor is None:
                self._fade.stop()
                return

            target = episode.restore_color
            color = cursor.step_towards(target)
            await self.output.push(color)

            if cursor.reached(target):
                self._stop_fade()
                self.episode = None
                await self.modes.restore(episode.restore_mode)
                log.info("Fade-back finished", mode=episode.restore_mode.value)

    def _stop_fade(self) -> None:
        self._fade.stop()
        self._cursor = None

    # ------------------------------------------------------------------
    # Interruptions
    # ------------------------------------------------------------------

    def cancel(self) -> Optional[ControllerMode]:
        """
        Abandon the episode (explicit mode change).

        Returns:
            The mode Door would have restored, None if no episode was running
        """
        self._debounce.cancel()
        self._stop_fade()
        episode, self.episode = self.episode, None
        if episode is None:
            return None
        log.debug("Door episode abandoned", restore_mode=episode.restore_mode.value)
        return episode.restore_mode

    async def on_device_disconnect(self) -> None:
        """Timers stop with the device; a closed-door episode ends right away"""
        self._debounce.cancel()
        self._stop_fade()

        episode = self.episode
        if episode is None or episode.door_open:
            return

        self.episode = None
        log.info("Device lost during fade-back, restoring mode", mode=episode.restore_mode.value)
        await self.modes.restore(episode.restore_mode)
