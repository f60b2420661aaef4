"""
Tests for the AutoPilot palette walk.
"""

import pytest

from animations.autopilot import AutoPilot, PatternScheduler
from models.color import Color
from models.config import AutoPilotConfig
from utils.colors import lerp_color


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def scheduler(clock):
    palette = [Color(0, 0, 0), Color(200, 100, 0)]
    return PatternScheduler(palette, cycle_period_s=10.0, clock=clock)


def test_starts_on_first_entry(scheduler):
    assert scheduler.state == Color(0, 0, 0)


def test_blends_inside_segment(scheduler, clock):
    clock.now = 2.5
    assert scheduler.state == Color(100, 50, 0)


def test_wraps_back_to_first_entry(scheduler, clock):
    clock.now = 7.5
    assert scheduler.state == Color(100, 50, 0)

    clock.now = 10.0
    assert scheduler.state == Color(0, 0, 0)


def test_reset_restarts_cycle(scheduler, clock):
    clock.now = 5.0
    scheduler.reset()
    assert scheduler.state == Color(0, 0, 0)


def test_single_colour_palette_is_static(clock):
    scheduler = PatternScheduler([Color(9, 9, 9)], cycle_period_s=10.0, clock=clock)
    clock.now = 3.3
    assert scheduler.state == Color(9, 9, 9)


def test_empty_palette_rejected():
    with pytest.raises(ValueError):
        PatternScheduler([], cycle_period_s=1.0)


def test_autopilot_uses_config_period(clock):
    autopilot = AutoPilot(AutoPilotConfig(cycle_period_s=60.0), clock=clock)

    assert autopilot.scheduler.cycle_period_s == 60.0
    assert autopilot.scheduler.state == autopilot.scheduler.palette[0]


@pytest.mark.parametrize("t, expected", [
    (-1.0, Color(0, 0, 0)),
    (0.5, Color(128, 128, 128)),
    (2.0, Color(255, 255, 255)),
])
def test_lerp_color_clamps_position(t, expected):
    assert lerp_color(Color.black(), Color.white(), t) == expected
