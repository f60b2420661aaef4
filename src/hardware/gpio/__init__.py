from .gpio_manager_interface import IGPIOManager
from .gpio_manager_mock import MockGPIOManager
from .gpio_manager_factory import create_gpio_manager


__all__ = [
    "IGPIOManager",
    "MockGPIOManager",
    "create_gpio_manager",
]
