"""
Event system for the fixture controller

Device edges flow in, controller state broadcasts flow out.
"""

# Event type, base class, and sources
from models.events.types import EventType
from models.events.base import Event
from models.events.sources import EventSource

# Device / sensor events
from models.events.hardware import (
    DeviceConnectedEvent,
    DeviceDisconnectedEvent,
    DoorEvent,
)

# Controller / transport events
from models.events.light import (
    ModeChangedEvent,
    ColorChangedEvent,
    AllClientsDisconnectedEvent,
)

__all__ = [
    # Type, base, and sources
    "EventType",
    "Event",
    "EventSource",

    # Device
    "DeviceConnectedEvent",
    "DeviceDisconnectedEvent",
    "DoorEvent",

    # Controller / transport
    "ModeChangedEvent",
    "ColorChangedEvent",
    "AllClientsDisconnectedEvent",
]
