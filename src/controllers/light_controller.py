"""
Light Controller (Main Dispatcher)

Owns the fixture's state and coordinates:
- ModeStateMachine (current/previous mode, persistence)
- DoorTransitionController (door override and fade-back)
- ChangeEvaluator + TickScheduler (per-frame device writes)
- connect intro sequence

Every inbound command and every frame runs under one asyncio.Lock, so a
frame never observes a half-applied command.
"""

import asyncio
from typing import Any, Dict, Optional, Union

from animations.autopilot import AutoPilot
from audio.analyser_interface import IAudioAnalyser
from controllers.change_evaluator import ChangeEvaluator
from controllers.door_transition_controller import DoorTransitionController
from controllers.light_output import LightOutput
from controllers.mode_state_machine import ModeStateMachine
from engine.tick_scheduler import TickScheduler
from engine.timers import OneShotTimer
from hardware.light.device_interface import ILightDevice
from models.color import Color, ColorState
from models.config import TimingConfig
from models.enums import ClientType, ControllerMode
from models.events import DoorEvent, Event, EventType
from services.event_bus import EventBus
from services.settings_service import SettingsService
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.LIFECYCLE)

INTRO_SEQUENCE = (Color.red(), Color.green(), Color.blue(), Color.black())


class LightController:
    """
    Example:
        controller = LightController(device, event_bus, settings, config.timing,
                                     autopilot, analyser)
        await controller.setup()
        await controller.set_rgb(10, 20, 30)           # -> Manual
        await controller.set_mode("AutoPilot")
        controller.destroy()
    """

    def __init__(
        self,
        device: ILightDevice,
        event_bus: EventBus,
        settings: SettingsService,
        timing: TimingConfig,
        autopilot: AutoPilot,
        audio: IAudioAnalyser,
        initial_mode: Optional[ControllerMode] = None,
    ):
        self.device = device
        self.event_bus = event_bus
        self.settings = settings
        self.timing = timing

        self._lock = asyncio.Lock()
        self.colors = ColorState()
        self.output = LightOutput(device, event_bus, self.colors)

        self.modes = ModeStateMachine(
            initial_mode or settings.settings.controller_mode,
            self.output,
            settings,
        )
        self.door = DoorTransitionController(self.modes, self.colors, self.output, timing, self._lock)
        self.modes.cancel_override = self.door.cancel

        self.evaluator = ChangeEvaluator(self.modes, self.colors, self.output, autopilot, audio)
        self.scheduler = TickScheduler(
            interval_s=timing.frame_interval_s,
            on_frame=self.run_frame,
            is_continuous=lambda: self.modes.get_mode().is_audio,
        )
        self._intro = OneShotTimer("connect-intro")
        self._subscribed = False

    # ------------------------------------------------------------------
    # LIFECYCLE
    # ------------------------------------------------------------------

    async def setup(self) -> None:
        """Subscribe to device / sensor / transport events"""
        if not self._subscribed:
            self.event_bus.subscribe(EventType.DEVICE_CONNECTED, self._on_device_connected)
            self.event_bus.subscribe(EventType.DEVICE_DISCONNECTED, self._on_device_disconnected)
            self.event_bus.subscribe(EventType.DOOR_CHANGED, self._on_door_changed)
            self.event_bus.subscribe(EventType.ALL_CLIENTS_DISCONNECTED, self._on_all_clients_disconnected)
            self._subscribed = True

        log.info("LightController ready", mode=self.modes.get_mode().value)

        if self.device.connected:
            await self.on_connect()

    def destroy(self) -> None:
        """Stop every timer and detach from the bus. Idempotent."""
        self.scheduler.stop()
        self._intro.cancel()
        self.door.cancel()

        if self._subscribed:
            self.event_bus.unsubscribe(EventType.DEVICE_CONNECTED, self._on_device_connected)
            self.event_bus.unsubscribe(EventType.DEVICE_DISCONNECTED, self._on_device_disconnected)
            self.event_bus.unsubscribe(EventType.DOOR_CHANGED, self._on_door_changed)
            self.event_bus.unsubscribe(EventType.ALL_CLIENTS_DISCONNECTED, self._on_all_clients_disconnected)
            self._subscribed = False

        log.info("LightController destroyed")

    # ------------------------------------------------------------------
    # FRAME
    # ------------------------------------------------------------------

    async def run_frame(self) -> None:
        async with self._lock:
            await self.evaluator.evaluate()

    # ------------------------------------------------------------------
    # COMMANDS
    # ------------------------------------------------------------------

    async def set_mode(self, mode: Union[ControllerMode, str]) -> ControllerMode:
        """
        Explicit mode change.

        Raises:
            InvalidModeError: unknown mode or Door
        """
        async with self._lock:
            await self.modes.set_mode(mode)
            return self.modes.get_mode()

    def get_mode(self) -> ControllerMode:
        return self.modes.get_mode()

    async def set_rgb(self, r, g, b, client_type: ClientType = ClientType.CLIENT) -> Color:
        """
        Remote colour command; also switches mode by client kind
        (remote clients -> Manual, internal clients -> AudioRaw).

        Channels are clamped to 0-255.
        """
        color = Color.from_rgb(r, g, b)
        mode = ControllerMode.AUDIO_RAW if client_type is ClientType.INTERNAL else ControllerMode.MANUAL

        async with self._lock:
            await self.modes.set_mode(mode)
            self.colors.target = color

        log.debug("Target colour set", color=str(color), client=client_type.value)
        return color

    def get_rgb(self) -> Color:
        return self.colors.target

    async def on_all_clients_disconnected(self) -> None:
        async with self._lock:
            await self.modes.on_all_clients_disconnected()

    async def on_door(self, level: bool) -> None:
        async with self._lock:
            await self.door.on_door(level)

    # ------------------------------------------------------------------
    # DEVICE CONNECTIVITY
    # ------------------------------------------------------------------

    async def on_connect(self) -> None:
        """Play the intro sequence, then (re)start the tick loop"""
        self.scheduler.stop()
        log.info("Device connected, playing intro")
        self._intro.schedule(0, self._play_intro)

    async def on_disconnect(self) -> None:
        self.scheduler.stop()
        self._intro.cancel()
        log.warn("Device disconnected")

        async with self._lock:
            await self.door.on_device_disconnect()

    async def _play_intro(self) -> None:
        for color in INTRO_SEQUENCE:
            await asyncio.sleep(self.timing.intro_step_s)
            await self.device.set_rgb(color)

        await asyncio.sleep(self.timing.intro_step_s)
        async with self._lock:
            final = Color.white() if self.modes.get_mode() is ControllerMode.DOOR else self.colors.target
            await self.output.push(final, broadcast=False)

        self.scheduler.start()

    # ------------------------------------------------------------------
    # STATUS
    # ------------------------------------------------------------------

    def get_status(self) -> Dict[str, Any]:
        episode = self.door.episode
        return {
            "mode": self.modes.get_mode().value,
            "previous_mode": self.modes.previous.value,
            "target": self.colors.target.to_dict(),
            "last_pushed": self.colors.last_pushed.to_dict(),
            "device_connected": self.device.connected,
            "door": {
                "open": episode.door_open if episode else False,
                "restore_mode": episode.restore_mode.value if episode else None,
                "debounce_pending": self.door.debounce_pending,
                "fading": self.door.fading,
            },
            "tick": {
                "running": self.scheduler.running,
                "lagging": self.scheduler.lagging,
                "frames": self.scheduler.frames,
                "overruns": self.scheduler.overruns,
            },
        }

    # ------------------------------------------------------------------
    # EVENT BUS SUBSCRIPTIONS
    # ------------------------------------------------------------------

    async def _on_device_connected(self, event: Event) -> None:
        await self.on_connect()

    async def _on_device_disconnected(self, event: Event) -> None:
        await self.on_disconnect()

    async def _on_door_changed(self, event: DoorEvent) -> None:
        await self.on_door(event.level)

    async def _on_all_clients_disconnected(self, event: Event) -> None:
        await self.on_all_clients_disconnected()
