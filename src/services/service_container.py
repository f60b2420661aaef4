"""Service Container - Dependency injection container for all core services"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

from models.config import AppConfig
from services.event_bus import EventBus
from services.settings_service import SettingsService

if TYPE_CHECKING:
    from controllers.light_controller import LightController
    from hardware.light.device_interface import ILightDevice


@dataclass
class ServiceContainer:
    """
    Everything the API layer (HTTP routes, Socket.IO handlers) needs.

    Usage:
        services = ServiceContainer(
            config=config,
            event_bus=event_bus,
            settings=settings_service,
            device=device,
            controller=light_controller,
        )
        app = create_app(services)
    """

    config: AppConfig
    event_bus: EventBus
    settings: SettingsService
    device: "ILightDevice"
    controller: "LightController"
