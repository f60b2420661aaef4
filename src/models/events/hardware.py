"""Device and sensor events (connect / disconnect / door edges)"""

from dataclasses import dataclass

from models.events.base import Event
from models.events.types import EventType
from models.events.sources import EventSource


@dataclass(init=False)
class DeviceConnectedEvent(Event):
    """Light device reports itself connected"""

    def __init__(self):
        super().__init__(
            type=EventType.DEVICE_CONNECTED,
            source=EventSource.DEVICE,
        )


@dataclass(init=False)
class DeviceDisconnectedEvent(Event):
    """Light device reports itself disconnected"""

    def __init__(self):
        super().__init__(
            type=EventType.DEVICE_DISCONNECTED,
            source=EventSource.DEVICE,
        )


@dataclass(init=False)
class DoorEvent(Event):
    """Door sensor edge"""
    level: bool

    def __init__(self, level: bool, source: EventSource = EventSource.DOOR_SENSOR):
        """
        Args:
            level: True = door opened, False = door closed
            source: DOOR_SENSOR for the GPIO reed switch, DEVICE when the
                    fixture reports the edge itself
        """
        super().__init__(
            type=EventType.DOOR_CHANGED,
            source=source,
        )
        self.level = level
