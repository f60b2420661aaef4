from .light_controller_shutdown_handler import LightControllerShutdownHandler
from .api_server_shutdown_handler import APIServerShutdownHandler
from .task_cancellation_handler import TaskCancellationHandler
from .gpio_shutdown_handler import GPIOShutdownHandler

__all__ = [
    "LightControllerShutdownHandler",
    "APIServerShutdownHandler",
    "TaskCancellationHandler",
    "GPIOShutdownHandler",
]
