"""
DoorSensor Component - Hardware Abstraction Layer

Reed switch on a GPIO input with contact debouncing. Publishes a DoorEvent
on every stable edge; the controller applies its own, much longer,
close-debounce on top.
"""

from __future__ import annotations

import asyncio
import time
from typing import Callable, Optional

from hardware.gpio.gpio_manager_interface import IGPIOManager
from models.config import DoorSensorConfig
from models.enums import GPIOPullMode
from models.events import DoorEvent
from services.event_bus import EventBus
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.DOOR)


class DoorSensor:
    """
    Polled door contact

    Args:
        gpio_manager: GPIO abstraction (hardware or mock)
        config: Pin, polling interval, contact debounce, open level
        event_bus: Where DoorEvents are published

    Example:
        sensor = DoorSensor(gpio, config.door_sensor, bus)
        create_tracked_task(sensor.run(), category=TaskCategory.INPUT, description="Door sensor")
    """

    def __init__(
        self,
        gpio_manager: IGPIOManager,
        config: DoorSensorConfig,
        event_bus: EventBus,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.gpio = gpio_manager
        self.config = config
        self.event_bus = event_bus
        self._clock = clock

        self.gpio.register_input(config.gpio_pin, "DoorSensor", GPIOPullMode.PULL_UP)

        self.is_open: bool = self._read_open()
        self._candidate: Optional[bool] = None
        self._candidate_since = 0.0

    def _read_open(self) -> bool:
        return self.gpio.read(self.config.gpio_pin) == self.config.open_level

    async def poll_once(self) -> Optional[bool]:
        """
        Sample the pin once.

        Returns:
            New door state if a debounced edge was published, else None
        """
        raw = self._read_open()
        now = self._clock()

        if raw == self.is_open:
            self._candidate = None
            return None

        if self._candidate != raw:
            self._candidate = raw
            self._candidate_since = now

        if now - self._candidate_since < self.config.contact_debounce_s:
            return None

        self.is_open = raw
        self._candidate = None
        log.info("Door opened" if raw else "Door closed", pin=self.config.gpio_pin)
        await self.event_bus.publish(DoorEvent(raw))
        return raw

    async def run(self) -> None:
        """Poll until cancelled; announces an already-open door at startup"""
        if self.is_open:
            await self.event_bus.publish(DoorEvent(True))

        while True:
            await self.poll_once()
            await asyncio.sleep(self.config.poll_interval_s)
