"""Mode record and door episode domain models"""

from dataclasses import dataclass
from typing import Optional

from models.color import Color
from models.enums import ControllerMode


@dataclass
class ModeRecord:
    """
    Current and previous controller mode

    `previous` changes only on a real transition (current != requested).
    """

    current: ControllerMode
    previous: ControllerMode

    @classmethod
    def starting_in(cls, mode: ControllerMode) -> "ModeRecord":
        return cls(current=mode, previous=mode)


@dataclass
class DoorEpisode:
    """
    What to return to once the door override ends

    Captured once when Door is entered from a non-Door mode; a re-open during
    the same episode (e.g. while fading back) keeps the original capture.
    """

    restore_mode: ControllerMode
    restore_color: Color
    door_open: bool = True


@dataclass
class FadeCursor:
    """Per-channel position of a running fade-back"""

    r: int = 255
    g: int = 255
    b: int = 255

    def step_towards(self, target: Color) -> Color:
        """Move each channel one unit towards target and return the result"""
        if self.r > target.r:
            self.r -= 1
        if self.g > target.g:
            self.g -= 1
        if self.b > target.b:
            self.b -= 1
        return Color(self.r, self.g, self.b)

    def reached(self, target: Optional[Color]) -> bool:
        if target is None:
            return True
        return (self.r, self.g, self.b) == target.to_rgb()
