"""
Hardware Layer

Low-level hardware access only:

- GPIO (IGPIOManager: RPi.GPIO or mock)
- Light fixture drivers (ILightDevice: WS281x or virtual)
- Door reed switch (DoorSensor)
"""
from .gpio import IGPIOManager, MockGPIOManager, create_gpio_manager
from .light import ILightDevice, VirtualLightDevice, create_light_device
from .input import DoorSensor

__all__ = [
    "IGPIOManager",
    "MockGPIOManager",
    "create_gpio_manager",
    "ILightDevice",
    "VirtualLightDevice",
    "create_light_device",
    "DoorSensor",
]
