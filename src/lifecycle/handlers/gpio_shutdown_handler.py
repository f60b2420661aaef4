from __future__ import annotations

from typing import TYPE_CHECKING

from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from hardware.gpio.gpio_manager_interface import IGPIOManager

log = get_logger().for_category(LogCategory.SHUTDOWN)


class GPIOShutdownHandler(IShutdownHandler):
    """Last step: the door input and WS281x pin are handed back to the OS"""

    def __init__(self, gpio_manager: "IGPIOManager"):
        self.gpio_manager = gpio_manager

    @property
    def shutdown_priority(self) -> int:
        return 10

    async def shutdown(self) -> None:
        owners = self.gpio_manager.get_registry()
        log.info("Releasing GPIO", pins=", ".join(f"{pin}={name}" for pin, name in sorted(owners.items())) or "none")
        self.gpio_manager.cleanup()
