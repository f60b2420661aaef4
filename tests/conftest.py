"""
Shared fixtures: a connected virtual light, fast timings and a fully wired
LightController whose autopilot and audio sources are plain stand-ins.
"""

import asyncio
import time
from typing import Callable, List

import pytest

from controllers.light_controller import LightController
from hardware.light.virtual_device import VirtualLightDevice
from models.color import Color
from models.config import TimingConfig
from models.enums import ControllerMode
from models.events import Event, EventType
from services.event_bus import EventBus
from services.settings_service import SettingsService


class StubScheduler:
    def __init__(self, color: Color):
        self.state = color


class StubAutoPilot:
    """AutoPilot with a fixed, test-controlled colour"""

    def __init__(self, color: Color = Color(1, 2, 3)):
        self.scheduler = StubScheduler(color)


class StubAnalyser:
    def __init__(self, color: Color = Color(40, 50, 60)):
        self.color = color

    def get_rgb(self) -> Color:
        return self.color


class EventRecorder:
    """Collects published events of the given types"""

    def __init__(self, bus: EventBus, *types: EventType):
        self.events: List[Event] = []
        for event_type in types:
            bus.subscribe(event_type, self._record)

    def _record(self, event: Event) -> None:
        self.events.append(event)

    def of(self, event_type: EventType) -> List[Event]:
        return [e for e in self.events if e.type == event_type]

    def clear(self) -> None:
        self.events.clear()


async def wait_until(predicate: Callable[[], bool], timeout: float = 2.0, step: float = 0.002) -> None:
    """Poll `predicate` on the running loop; fail the test on timeout"""
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            pytest.fail("condition not reached in time")
        await asyncio.sleep(step)


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def timing():
    return TimingConfig(
        frame_interval_s=0.01,
        door_debounce_s=0.03,
        fade_step_s=0.001,
        intro_step_s=0.001,
    )


@pytest.fixture
def device(event_bus):
    return VirtualLightDevice(event_bus, connected=True)


@pytest.fixture
def settings(tmp_path):
    return SettingsService(tmp_path / "settings.json", save_delay=0.01)


@pytest.fixture
def autopilot():
    return StubAutoPilot()


@pytest.fixture
def analyser():
    return StubAnalyser()


@pytest.fixture
async def make_controller(device, event_bus, settings, timing, autopilot, analyser):
    """Factory so tests can pick the starting mode; every controller is destroyed afterwards"""
    created = []

    def _make(initial_mode: ControllerMode = ControllerMode.MANUAL) -> LightController:
        controller = LightController(
            device=device,
            event_bus=event_bus,
            settings=settings,
            timing=timing,
            autopilot=autopilot,
            audio=analyser,
            initial_mode=initial_mode,
        )
        created.append(controller)
        return controller

    yield _make

    for controller in created:
        controller.destroy()


@pytest.fixture
async def controller(make_controller):
    """Manual-mode controller, not set up (no intro, no tick loop)"""
    return make_controller(ControllerMode.MANUAL)
