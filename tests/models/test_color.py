"""
Tests for Color, ColorState, FadeCursor and ControllerMode parsing.
"""

from dataclasses import FrozenInstanceError

import pytest

from models.color import Color, ColorState, clamp_channel
from models.domain.mode import FadeCursor
from models.enums import ControllerMode
from models.errors import InvalidModeError


class TestColor:

    def test_from_rgb_clamps_each_channel(self):
        assert Color.from_rgb(300, -5, 128) == Color(255, 0, 128)

    def test_from_rgb_truncates_floats(self):
        assert Color.from_rgb(12.9, 0.2, 254.99) == Color(12, 0, 254)

    def test_clamp_boundaries(self):
        assert clamp_channel(0) == 0
        assert clamp_channel(255) == 255
        assert clamp_channel(256) == 255
        assert clamp_channel(-1) == 0

    def test_wire_format(self):
        color = Color(10, 20, 30)
        assert color.to_dict() == {"r": 10, "g": 20, "b": 30}
        assert Color.from_dict({"r": 10, "g": 20, "b": 30}) == color
        assert str(color) == "RGB(10,20,30)"

    def test_colors_are_immutable(self):
        with pytest.raises(FrozenInstanceError):
            Color(1, 2, 3).r = 5  # type: ignore


class TestColorState:

    def test_initial_state_is_dirty(self):
        """Black target vs. white last-pushed: the first frame always writes"""
        state = ColorState()
        assert state.target == Color.black()
        assert state.last_pushed == Color.white()
        assert state.is_dirty()

    def test_mark_pushed_clears_dirty(self):
        state = ColorState(target=Color(10, 20, 30))
        state.mark_pushed(Color(10, 20, 30))
        assert not state.is_dirty()

    def test_single_channel_difference_is_dirty(self):
        state = ColorState(target=Color(10, 20, 31), last_pushed=Color(10, 20, 30))
        assert state.is_dirty()


class TestFadeCursor:

    def test_steps_each_channel_down_by_one(self):
        cursor = FadeCursor()
        assert cursor.step_towards(Color(0, 254, 255)) == Color(254, 254, 255)
        assert cursor.step_towards(Color(0, 254, 255)) == Color(253, 254, 255)

    def test_reached_after_enough_steps(self):
        target = Color(250, 253, 255)
        cursor = FadeCursor()
        for _ in range(5):
            cursor.step_towards(target)
        assert cursor.reached(target)

    def test_fade_to_black_takes_255_steps(self):
        cursor = FadeCursor()
        steps = 0
        while not cursor.reached(Color.black()):
            cursor.step_towards(Color.black())
            steps += 1
        assert steps == 255


class TestControllerMode:

    @pytest.mark.parametrize("name", ["AutoPilot", "Manual", "Pattern", "Audio", "AudioRaw", "ManualForce", "ManualLocked"])
    def test_parse_selectable_modes(self, name):
        mode = ControllerMode.parse(name)
        assert mode.value == name
        assert mode.is_selectable

    def test_door_is_not_selectable(self):
        assert not ControllerMode.parse("Door").is_selectable

    def test_parse_unknown_raises(self):
        with pytest.raises(InvalidModeError) as exc_info:
            ControllerMode.parse("Disco")
        assert exc_info.value.code == "INVALID_MODE"
        assert exc_info.value.status_code == 422

    def test_parse_is_case_sensitive(self):
        with pytest.raises(InvalidModeError):
            ControllerMode.parse("manual")

    def test_audio_modes(self):
        assert ControllerMode.AUDIO.is_audio
        assert ControllerMode.AUDIO_RAW.is_audio
        assert not ControllerMode.MANUAL.is_audio
