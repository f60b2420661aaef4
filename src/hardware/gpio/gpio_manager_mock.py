from typing import Dict

from hardware.gpio.gpio_manager_interface import IGPIOManager, PinOwnership
from models.enums import GPIOPullMode
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)


class MockGPIOManager(IGPIOManager):
    """
    Pin levels kept in a dict. Used off-Pi and in tests, where set_level()
    plays the part of the reed switch.
    """

    def __init__(self):
        self._pins = PinOwnership()
        self._levels: Dict[int, int] = {}
        log.info("Mock GPIO manager initialized")

    def register_input(self, pin: int, component: str, pull_mode: GPIOPullMode = GPIOPullMode.PULL_UP) -> None:
        self._pins.claim(pin, component, "input")
        # idle level follows the pull resistor unless a test already set one
        self._levels.setdefault(pin, int(pull_mode == GPIOPullMode.PULL_UP))

    def register_ws281x(self, pin: int, component: str) -> None:
        self._pins.claim(pin, component, "ws281x")

    def read(self, pin: int) -> int:
        return self._levels.get(pin, 0)

    def set_level(self, pin: int, value: int) -> None:
        self._levels[pin] = 1 if value else 0

    def cleanup(self) -> None:
        released = self._pins.release_all()
        self._levels.clear()
        log.info("Mock GPIO released", pins=released)

    def get_registry(self) -> Dict[int, str]:
        return self._pins.snapshot()
