"""
Color model - 8-bit RGB triple and the controller's colour state

Every external write goes through Color.from_rgb(), which clamps each
channel to 0-255.
"""

from dataclasses import dataclass, field
from typing import Dict, Tuple


def clamp_channel(value) -> int:
    """Clamp a single channel value to 0-255"""
    return max(0, min(255, int(value)))


@dataclass(frozen=True)
class Color:
    """
    Immutable RGB colour

    Examples:
        color = Color.from_rgb(300, -5, 128)   # -> Color(255, 0, 128)
        r, g, b = color.to_rgb()
    """

    r: int = 0
    g: int = 0
    b: int = 0

    # === CONSTRUCTORS ===

    @classmethod
    def from_rgb(cls, r, g, b) -> 'Color':
        """
        Create from raw channel values, clamping each to 0-255

        Args:
            r, g, b: Channel values (any int/float, clamped)

        Returns:
            Color with channels in range
        """
        return cls(clamp_channel(r), clamp_channel(g), clamp_channel(b))

    @classmethod
    def from_dict(cls, data: Dict) -> 'Color':
        return cls.from_rgb(data.get("r", 0), data.get("g", 0), data.get("b", 0))

    @classmethod
    def white(cls) -> 'Color':
        return cls(255, 255, 255)

    @classmethod
    def black(cls) -> 'Color':
        return cls(0, 0, 0)

    @classmethod
    def red(cls) -> 'Color':
        return cls(255, 0, 0)

    @classmethod
    def green(cls) -> 'Color':
        return cls(0, 255, 0)

    @classmethod
    def blue(cls) -> 'Color':
        return cls(0, 0, 255)

    # === CONVERSION ===

    def to_rgb(self) -> Tuple[int, int, int]:
        return (self.r, self.g, self.b)

    def to_dict(self) -> Dict[str, int]:
        """Wire format used by rgb-update / rgb-status"""
        return {"r": self.r, "g": self.g, "b": self.b}

    def __str__(self) -> str:
        return f"RGB({self.r},{self.g},{self.b})"


@dataclass
class ColorState:
    """
    Target colour and the colour last confirmed on the device

    Initial values make the very first frame push (target black,
    last pushed white).
    """

    target: Color = field(default_factory=Color.black)
    last_pushed: Color = field(default_factory=Color.white)

    def is_dirty(self) -> bool:
        """True if any channel of target differs from last pushed"""
        return self.target != self.last_pushed

    def mark_pushed(self, color: Color) -> None:
        self.last_pushed = color
