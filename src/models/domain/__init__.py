"""Domain models - State objects"""

from models.domain.application import LightSettings
from models.domain.mode import ModeRecord, DoorEpisode, FadeCursor

__all__ = [
    "LightSettings",
    "ModeRecord",
    "DoorEpisode",
    "FadeCursor",
]
