"""
RPi.GPIO backend (BCM numbering).

Only the door input is actually configured through RPi.GPIO; the WS281x pin
is driven by rpi_ws281x over PWM/DMA and is just claimed here.
"""

from typing import Dict

from hardware.gpio.gpio_manager_interface import IGPIOManager, PinOwnership
from models.enums import GPIOPullMode
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)


class HardwareGPIOManager(IGPIOManager):

    def __init__(self):
        try:
            import RPi.GPIO as GPIO
        except ImportError as e:
            raise RuntimeError("RPi.GPIO not available") from e

        self._gpio = GPIO
        self._pins = PinOwnership()
        self._pulls = {
            GPIOPullMode.PULL_UP: GPIO.PUD_UP,
            GPIOPullMode.PULL_DOWN: GPIO.PUD_DOWN,
            GPIOPullMode.NO_PULL: GPIO.PUD_OFF,
        }

        GPIO.setmode(GPIO.BCM)
        GPIO.setwarnings(False)
        log.info("GPIO initialized", mode="BCM")

    def register_input(self, pin: int, component: str, pull_mode: GPIOPullMode = GPIOPullMode.PULL_UP) -> None:
        self._pins.claim(pin, component, "input")
        self._gpio.setup(pin, self._gpio.IN, pull_up_down=self._pulls[pull_mode])
        log.info("Input pin configured", pin=pin, component=component, pull=pull_mode.name)

    def register_ws281x(self, pin: int, component: str) -> None:
        self._pins.claim(pin, component, "ws281x")
        log.info("WS281x data pin reserved", pin=pin, component=component)

    def read(self, pin: int) -> int:
        return 1 if self._gpio.input(pin) else 0

    def cleanup(self) -> None:
        released = self._pins.release_all()
        self._gpio.cleanup()
        log.info("GPIO cleaned up", pins=released)

    def get_registry(self) -> Dict[int, str]:
        return self._pins.snapshot()
