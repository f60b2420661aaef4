"""
Enums for the fixture controller state machine
"""

from enum import Enum, auto

from models.errors import InvalidModeError


class ControllerMode(Enum):
    """
    Operating modes of the light fixture

    The value is the wire name used by clients and the settings file.

    AUTO_PILOT: Colour pulled from the autonomous pattern generator
    MANUAL: Colour set by a remote client
    PATTERN: Colour set by a client-side pattern player
    AUDIO: Colour derived from live audio every frame
    AUDIO_RAW: Colour streamed by an internal audio client
    MANUAL_FORCE: Manual that client-side automation must not override
    MANUAL_LOCKED: Manual, door sensor ignored
    DOOR: Transient override while the door is open (internal only)
    """
    AUTO_PILOT = "AutoPilot"
    MANUAL = "Manual"
    PATTERN = "Pattern"
    AUDIO = "Audio"
    AUDIO_RAW = "AudioRaw"
    MANUAL_FORCE = "ManualForce"
    MANUAL_LOCKED = "ManualLocked"
    DOOR = "Door"

    @property
    def is_audio(self) -> bool:
        return self in (ControllerMode.AUDIO, ControllerMode.AUDIO_RAW)

    @property
    def is_selectable(self) -> bool:
        """Door is entered by the sensor only, never by a client"""
        return self is not ControllerMode.DOOR

    @classmethod
    def parse(cls, value) -> "ControllerMode":
        """
        Parse a mode from its wire name (or pass a member through)

        Raises:
            InvalidModeError: value is not one of the defined modes
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            for member in cls:
                if member.value == value:
                    return member
        raise InvalidModeError(value)


class ClientType(Enum):
    """Authenticated transport client kinds"""
    CLIENT = "client"       # Remote / UI client
    INTERNAL = "internal"   # Privileged process (audio bridge etc.)


class DeviceType(Enum):
    """Light device driver selection"""
    VIRTUAL = "virtual"
    WS281X = "ws281x"


class GPIOPullMode(Enum):
    """GPIO pull-up/down resistor configuration"""
    PULL_UP = auto()     # Internal pull-up resistor (pin reads HIGH when open)
    PULL_DOWN = auto()   # Internal pull-down resistor (pin reads LOW when open)
    NO_PULL = auto()     # No pull resistor (floating)


class LogLevel(Enum):
    """Log severity levels"""
    DEBUG = auto()
    INFO = auto()
    WARN = auto()
    ERROR = auto()


class LogCategory(Enum):
    """Log categories for grouping related events"""
    CONFIG = auto()      # Configuration loading, validation
    HARDWARE = auto()    # GPIO, door sensor, light device
    STATE = auto()       # Mode switches, settings
    COLOR = auto()       # Colour pushes
    TRANSITION = auto()  # Door fade-back
    DOOR = auto()        # Door edges and override
    EVENT = auto()       # Event bus events and handling
    RENDER_ENGINE = auto()  # Tick scheduler
    AUDIO = auto()
    AUTOPILOT = auto()

    API = auto()
    SOCKETIO = auto()

    SHUTDOWN = auto()
    LIFECYCLE = auto()
    TASK = auto()
    SYSTEM = auto()      # Startup, shutdown, errors

    GENERAL = auto()    # Default general category
