from typing import Optional

from hardware.gpio.gpio_manager_interface import IGPIOManager
from hardware.light.device_interface import ILightDevice
from hardware.light.virtual_device import VirtualLightDevice
from models.config import DeviceConfig
from models.enums import DeviceType
from runtime.runtime_info import RuntimeInfo
from services.event_bus import EventBus
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.HARDWARE)


def create_light_device(
    config: DeviceConfig,
    event_bus: EventBus,
    gpio_manager: Optional[IGPIOManager] = None,
) -> ILightDevice:
    """
    Factory that never crashes the app on a PC: falls back to the
    virtual light when rpi_ws281x is missing.

    The WS281x data pin is registered with `gpio_manager` (when given) so a
    door sensor on the same pin is caught at startup.
    """
    if config.type == DeviceType.WS281X:
        if RuntimeInfo.is_raspberry_pi() and RuntimeInfo.has_ws281x():
            from hardware.light.ws281x_device import WS281xLightDevice
            if gpio_manager is not None:
                gpio_manager.register_ws281x(config.gpio_pin, "LightDevice")
            return WS281xLightDevice(config, event_bus)
        log.warn("rpi_ws281x unavailable, falling back to virtual light")

    return VirtualLightDevice(event_bus, min_write_interval_s=config.min_write_interval_s)
