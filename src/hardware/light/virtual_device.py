"""
VirtualLightDevice - in-memory fixture

Used on development machines and in tests. Records every write, applies the
same admission window as the hardware driver for set_if_possible(), and can
simulate connect / disconnect / door edges by publishing events.
"""

from __future__ import annotations

import time
from typing import Callable, List, Optional, Tuple

from hardware.light.device_interface import ILightDevice
from models.color import Color
from models.errors import DeviceUnavailableError
from models.events import DeviceConnectedEvent, DeviceDisconnectedEvent, DoorEvent, EventSource
from services.event_bus import EventBus
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)


class VirtualLightDevice(ILightDevice):

    def __init__(
        self,
        event_bus: EventBus,
        min_write_interval_s: float = 0.0,
        connected: bool = False,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.event_bus = event_bus
        self.min_write_interval_s = min_write_interval_s
        self._connected = connected
        self._clock = clock
        self._last_write: Optional[float] = None

        self.color = Color.black()
        self.writes: List[Tuple[float, Color]] = []   # (timestamp, colour)
        self.refused = 0

    @property
    def connected(self) -> bool:
        return self._connected

    # === ILightDevice ===

    async def set_rgb(self, color: Color) -> None:
        if not self._connected:
            raise DeviceUnavailableError("Virtual light is disconnected")
        self._write(color)

    def set_if_possible(self, color: Color) -> bool:
        if not self._connected:
            return False
        now = self._clock()
        if self._last_write is not None and now - self._last_write < self.min_write_interval_s:
            self.refused += 1
            return False
        self._write(color)
        return True

    async def turn_off(self) -> None:
        if self._connected:
            self._write(Color.black())

    async def start(self) -> None:
        await self.connect()

    async def stop(self) -> None:
        await self.turn_off()
        await self.disconnect()

    # === Simulation helpers ===

    async def connect(self) -> None:
        self._connected = True
        log.info("Virtual light connected")
        await self.event_bus.publish(DeviceConnectedEvent())

    async def disconnect(self) -> None:
        self._connected = False
        log.info("Virtual light disconnected")
        await self.event_bus.publish(DeviceDisconnectedEvent())

    async def door(self, level: bool) -> None:
        """Simulate the fixture's own door contact"""
        await self.event_bus.publish(DoorEvent(level, source=EventSource.DEVICE))

    @property
    def pushed_colors(self) -> List[Color]:
        return [c for _, c in self.writes]

    def _write(self, color: Color) -> None:
        self._last_write = self._clock()
        self.color = color
        self.writes.append((self._last_write, color))
