"""
AutoPilot - autonomous pattern generator

Crossfades through a palette of colours on a fixed cycle. The controller
reads `scheduler.state` every frame while in AutoPilot mode; nothing here
talks to the device directly.
"""

import time
from typing import Callable, List, Sequence

from models.color import Color
from models.config import AutoPilotConfig
from utils.colors import AUTOPILOT_PALETTE, lerp_color
from utils.logger import get_category_logger, LogCategory

log = get_category_logger(LogCategory.AUTOPILOT)


class PatternScheduler:
    """
    Time-driven palette walk

    The cycle period is split evenly between palette entries; inside each
    segment the colour moves linearly towards the next entry.
    """

    def __init__(
        self,
        palette: Sequence[Color],
        cycle_period_s: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        if not palette:
            raise ValueError("AutoPilot palette must not be empty")
        self.palette: List[Color] = list(palette)
        self.cycle_period_s = cycle_period_s
        self._clock = clock
        self._start_time = clock()

    @property
    def state(self) -> Color:
        """Colour at the current instant"""
        if len(self.palette) == 1 or self.cycle_period_s <= 0:
            return self.palette[0]

        segment = self.cycle_period_s / len(self.palette)
        elapsed = (self._clock() - self._start_time) % self.cycle_period_s
        index = int(elapsed // segment)
        t = (elapsed - index * segment) / segment

        current = self.palette[index]
        following = self.palette[(index + 1) % len(self.palette)]
        return lerp_color(current, following, t)

    def reset(self) -> None:
        self._start_time = self._clock()


class AutoPilot:
    """Owner of the pattern scheduler; one per fixture"""

    def __init__(
        self,
        config: AutoPilotConfig,
        palette: Sequence[Color] = AUTOPILOT_PALETTE,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.scheduler = PatternScheduler(palette, config.cycle_period_s, clock)
        log.debug(
            "AutoPilot initialized",
            colors=len(self.scheduler.palette),
            cycle_s=config.cycle_period_s,
        )
