"""
LightOutput - the one place that writes to the device and announces colours

Keeps ColorState.last_pushed in step with what the device really received
and mirrors every change onto the EventBus for transport listeners.
"""

from typing import Optional

from hardware.light.device_interface import ILightDevice
from models.color import Color, ColorState
from models.enums import ControllerMode
from models.events import ColorChangedEvent, ModeChangedEvent
from services.event_bus import EventBus
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.COLOR)


class LightOutput:

    def __init__(self, device: ILightDevice, event_bus: EventBus, colors: ColorState):
        self.device = device
        self.event_bus = event_bus
        self.colors = colors

    async def push(self, color: Color, broadcast: bool = True) -> bool:
        """
        Unconditional device write.

        Skipped (returns False) while the device is disconnected; the colour
        is still broadcast so listeners see the intended state.
        """
        written = False
        if self.device.connected:
            await self.device.set_rgb(color)
            self.colors.mark_pushed(color)
            written = True
        else:
            log.debug("Device disconnected, write skipped", color=str(color))

        if broadcast:
            await self.broadcast_color(color)
        return written

    async def try_push(self, color: Color) -> bool:
        """Rate-limited write; a refused sample is dropped silently"""
        if not self.device.set_if_possible(color):
            return False
        self.colors.mark_pushed(color)
        await self.broadcast_color(color)
        return True

    async def broadcast_color(self, color: Color) -> None:
        await self.event_bus.publish(ColorChangedEvent(color))

    async def broadcast_mode(self, mode: ControllerMode) -> None:
        await self.event_bus.publish(ModeChangedEvent(mode))

    async def announce(self, mode: ControllerMode, color: Optional[Color] = None) -> None:
        """mode-update followed by rgb-update"""
        await self.broadcast_mode(mode)
        if color is not None:
            await self.broadcast_color(color)
