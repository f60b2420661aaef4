from enum import Enum, auto


class EventSource(Enum):
    """Event source identifiers for application events"""
    DEVICE = auto()             # Light device driver
    DOOR_SENSOR = auto()        # Door reed switch
    CONTROLLER = auto()         # LightController (mode / colour broadcasts)
    TRANSPORT = auto()          # Socket.IO client bookkeeping
