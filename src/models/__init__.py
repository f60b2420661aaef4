"""
Models package - Data models for the fixture controller
"""

from .enums import ControllerMode, ClientType, DeviceType, LogLevel, LogCategory
from .color import Color, ColorState
from .errors import (
    DomainError,
    InvalidModeError,
    InvalidPayloadError,
    UnauthenticatedError,
    DeviceUnavailableError,
)

__all__ = [
    'ControllerMode',
    'ClientType',
    'DeviceType',
    'LogLevel',
    'LogCategory',
    'Color',
    'ColorState',
    'DomainError',
    'InvalidModeError',
    'InvalidPayloadError',
    'UnauthenticatedError',
    'DeviceUnavailableError',
]
