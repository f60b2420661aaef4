# hardware/light/ws281x_device.py
"""
WS281xLightDevice - rpi_ws281x driven fixture
=============================================
The whole strip shows one colour. The strip is always "connected" once
begin() succeeded; start() announces it on the event bus.

Features:
- Color order remapping (RGB/GRB/BRG/...)
- WS2811 minimum frame time honoured by set_if_possible()
"""

from __future__ import annotations

import time
from typing import Optional

from rpi_ws281x import PixelStrip, Color as WS281xColor, ws

from hardware.light.device_interface import ILightDevice
from models.color import Color
from models.config import DeviceConfig
from models.events import DeviceConnectedEvent, DeviceDisconnectedEvent
from services.event_bus import EventBus
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)


# Color order channel mapping
COLOR_ORDER_MAP = {
    "RGB": (0, 1, 2),
    "RBG": (0, 2, 1),
    "GRB": (1, 0, 2),
    "GBR": (1, 2, 0),
    "BRG": (2, 0, 1),
    "BGR": (2, 1, 0),
}

# WS2811 needs 2.7ms DMA + 50us reset for 90 pixels
MIN_FRAME_TIME_S = 0.00275

FREQUENCY_HZ = 800_000
DMA_CHANNEL = 10


class WS281xLightDevice(ILightDevice):

    def __init__(self, config: DeviceConfig, event_bus: EventBus) -> None:
        self.config = config
        self.event_bus = event_bus

        order = config.color_order.upper()
        if order not in COLOR_ORDER_MAP:
            raise ValueError(f"Unsupported color order: {config.color_order}")
        self._order_map = COLOR_ORDER_MAP[order]

        # Colour reordering is done by us, the strip itself is driven as RGB
        self._strip = PixelStrip(
            config.led_count,
            config.gpio_pin,
            FREQUENCY_HZ,
            DMA_CHANNEL,
            False,
            config.brightness,
            0,
            ws.WS2811_STRIP_RGB,
        )
        self._strip.begin()
        self._connected = True
        self._last_show: Optional[float] = None
        self._min_interval = max(MIN_FRAME_TIME_S, config.min_write_interval_s)

        log.info(
            "WS281x light initialized",
            gpio=config.gpio_pin,
            count=config.led_count,
            order=order,
        )

    @property
    def connected(self) -> bool:
        return self._connected

    async def start(self) -> None:
        await self.event_bus.publish(DeviceConnectedEvent())

    async def stop(self) -> None:
        await self.turn_off()
        self._connected = False
        await self.event_bus.publish(DeviceDisconnectedEvent())

    # ==================== ILightDevice ====================

    async def set_rgb(self, color: Color) -> None:
        self._show(color)

    def set_if_possible(self, color: Color) -> bool:
        if self._last_show is not None and time.perf_counter() - self._last_show < self._min_interval:
            return False
        self._show(color)
        return True

    async def turn_off(self) -> None:
        self._show(Color.black())

    def _show(self, color: Color) -> None:
        rgb = color.to_rgb()
        native = WS281xColor(*(rgb[i] for i in self._order_map))
        for i in range(self.config.led_count):
            self._strip.setPixelColor(i, native)
        self._strip.show()
        self._last_show = time.perf_counter()
