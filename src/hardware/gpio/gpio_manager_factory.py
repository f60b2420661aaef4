from runtime.runtime_info import RuntimeInfo
from hardware.gpio.gpio_manager_interface import IGPIOManager
from hardware.gpio.gpio_manager_mock import MockGPIOManager
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)


def create_gpio_manager() -> IGPIOManager:
    """RPi.GPIO on a Raspberry Pi, in-memory mock everywhere else"""
    if RuntimeInfo.is_raspberry_pi() and RuntimeInfo.has_gpio():
        from hardware.gpio.gpio_manager_hardware import HardwareGPIOManager
        return HardwareGPIOManager()

    log.warn("RPi.GPIO unavailable, using mock GPIO")
    return MockGPIOManager()
