"""Controller state events, fanned out to transport clients"""

from dataclasses import dataclass

from models.color import Color
from models.enums import ControllerMode
from models.events.base import Event
from models.events.types import EventType
from models.events.sources import EventSource


@dataclass(init=False)
class ModeChangedEvent(Event):
    """Broadcast as `mode-update`"""
    mode: ControllerMode

    def __init__(self, mode: ControllerMode):
        super().__init__(
            type=EventType.MODE_CHANGED,
            source=EventSource.CONTROLLER,
        )
        self.mode = mode


@dataclass(init=False)
class ColorChangedEvent(Event):
    """Broadcast as `rgb-update`"""
    color: Color

    def __init__(self, color: Color):
        super().__init__(
            type=EventType.COLOR_CHANGED,
            source=EventSource.CONTROLLER,
        )
        self.color = color


@dataclass(init=False)
class AllClientsDisconnectedEvent(Event):
    """Last authenticated transport client left"""

    def __init__(self):
        super().__init__(
            type=EventType.ALL_CLIENTS_DISCONNECTED,
            source=EventSource.TRANSPORT,
        )
