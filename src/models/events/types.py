from enum import Enum, auto


class EventType(Enum):
    # Device / sensor edges
    DEVICE_CONNECTED = auto()
    DEVICE_DISCONNECTED = auto()
    DOOR_CHANGED = auto()

    # Controller state (broadcast to clients)
    MODE_CHANGED = auto()
    COLOR_CHANGED = auto()

    # Transport
    ALL_CLIENTS_DISCONNECTED = auto()
