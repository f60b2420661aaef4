from .device_interface import ILightDevice
from .virtual_device import VirtualLightDevice
from .device_factory import create_light_device

__all__ = [
    "ILightDevice",
    "VirtualLightDevice",
    "create_light_device",
]
