from typing import Protocol

from models.color import Color


class IAudioAnalyser(Protocol):
    """Source of the per-frame colour in Audio mode"""

    def get_rgb(self) -> Color:
        """Colour for the most recent audio block"""
        ...
