"""
EventBus middleware. Each function takes an event and returns it
(possibly replaced) or None to drop it.
"""

from enum import Enum

from models.events import Event, EventType
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.EVENT)

# Emitted every frame in audio modes
_PER_FRAME = {EventType.COLOR_CHANGED}


def log_middleware(event: Event) -> Event:
    """event_bus.add_middleware(log_middleware)"""
    emit = log.debug if event.type in _PER_FRAME else log.info
    payload = ", ".join(f"{k}={v.value if isinstance(v, Enum) else v}" for k, v in event.data.items())
    emit(f"{event.type.name} <- {event.source.name if event.source else '-'}", payload=payload or "-")
    return event
