"""
Tests for SettingsService persistence of the selected mode.
"""

import asyncio
import json

import pytest

from conftest import wait_until
from models.enums import ControllerMode
from services.settings_service import SettingsService


@pytest.fixture
def path(tmp_path):
    return tmp_path / "state" / "settings.json"


async def test_missing_file_gives_defaults(path):
    service = SettingsService(path)

    settings = await service.load()

    assert settings.controller_mode is ControllerMode.AUTO_PILOT
    assert not path.exists()


async def test_flush_writes_file(path):
    service = SettingsService(path, save_delay=10)
    service.save_mode(ControllerMode.PATTERN)

    await service.flush()

    assert json.loads(path.read_text()) == {"controller_mode": "Pattern", "save_on_change": True}


async def test_round_trip(path):
    writer = SettingsService(path)
    writer.save_mode(ControllerMode.MANUAL_LOCKED)
    await writer.flush()

    reader = SettingsService(path)
    settings = await reader.load()

    assert settings.controller_mode is ControllerMode.MANUAL_LOCKED


@pytest.mark.parametrize("content", [
    "{not json",
    json.dumps({"controller_mode": "Disco"}),
])
async def test_unreadable_file_gives_defaults(path, content):
    path.parent.mkdir(parents=True)
    path.write_text(content)

    settings = await SettingsService(path).load()

    assert settings.controller_mode is ControllerMode.AUTO_PILOT


async def test_stored_door_mode_falls_back(path):
    path.parent.mkdir(parents=True)
    path.write_text(json.dumps({"controller_mode": "Door"}))

    settings = await SettingsService(path).load()

    assert settings.controller_mode is ControllerMode.AUTO_PILOT


async def test_door_is_never_saved(path):
    service = SettingsService(path, save_delay=0.001)

    service.save_mode(ControllerMode.DOOR)
    await asyncio.sleep(0.01)

    assert service.settings.controller_mode is ControllerMode.AUTO_PILOT
    assert not path.exists()


async def test_rapid_changes_are_written_once(path):
    service = SettingsService(path, save_delay=0.01)

    service.save_mode(ControllerMode.MANUAL)
    service.save_mode(ControllerMode.PATTERN)
    service.save_mode(ControllerMode.AUDIO)
    await wait_until(path.exists)
    await asyncio.sleep(0.01)

    assert json.loads(path.read_text())["controller_mode"] == "Audio"


async def test_save_on_change_disabled(path):
    service = SettingsService(path, save_delay=0.001)
    service.settings.save_on_change = False

    service.save_mode(ControllerMode.MANUAL)
    await asyncio.sleep(0.01)

    assert service.settings.controller_mode is ControllerMode.MANUAL
    assert not path.exists()
