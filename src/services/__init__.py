"""Services layer"""

from .event_bus import EventBus
from .settings_service import SettingsService
from .service_container import ServiceContainer

__all__ = [
    "EventBus",
    "SettingsService",
    "ServiceContainer",
]
