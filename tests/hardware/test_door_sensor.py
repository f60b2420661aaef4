"""
Tests for the polled door contact with contact debouncing.
"""

import asyncio

import pytest

from conftest import EventRecorder, wait_until
from hardware.gpio.gpio_manager_mock import MockGPIOManager
from hardware.input.door_sensor import DoorSensor
from models.config import DoorSensorConfig
from models.events import EventSource, EventType

PIN = 17


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def gpio():
    return MockGPIOManager()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def config():
    return DoorSensorConfig(enabled=True, gpio_pin=PIN, poll_interval_s=0.001, contact_debounce_s=0.05, open_level=1)


@pytest.fixture
def recorder(event_bus):
    return EventRecorder(event_bus, EventType.DOOR_CHANGED)


@pytest.fixture
def sensor(gpio, config, event_bus, clock):
    gpio.set_level(PIN, 0)
    return DoorSensor(gpio, config, event_bus, clock=clock)


async def test_initial_state_from_pin(sensor, gpio):
    assert sensor.is_open is False
    assert gpio.get_registry() == {PIN: "DoorSensor"}


async def test_edge_published_after_debounce(sensor, gpio, clock, recorder):
    gpio.set_level(PIN, 1)

    assert await sensor.poll_once() is None
    clock.now = 0.04
    assert await sensor.poll_once() is None
    clock.now = 0.06
    assert await sensor.poll_once() is True

    assert sensor.is_open
    assert [e.level for e in recorder.events] == [True]
    assert recorder.events[0].source is EventSource.DOOR_SENSOR


async def test_bounce_is_ignored(sensor, gpio, clock, recorder):
    gpio.set_level(PIN, 1)
    await sensor.poll_once()
    clock.now = 0.02
    gpio.set_level(PIN, 0)
    await sensor.poll_once()
    clock.now = 0.1
    await sensor.poll_once()

    assert not sensor.is_open
    assert recorder.events == []


async def test_close_edge(sensor, gpio, clock, recorder):
    gpio.set_level(PIN, 1)
    await sensor.poll_once()
    clock.now = 0.1
    await sensor.poll_once()

    gpio.set_level(PIN, 0)
    clock.now = 0.2
    await sensor.poll_once()
    clock.now = 0.3
    assert await sensor.poll_once() is False

    assert [e.level for e in recorder.events] == [True, False]


async def test_inverted_open_level(gpio, event_bus, clock, recorder):
    config = DoorSensorConfig(enabled=True, gpio_pin=PIN, contact_debounce_s=0.0, open_level=0)
    gpio.set_level(PIN, 0)

    sensor = DoorSensor(gpio, config, event_bus, clock=clock)

    assert sensor.is_open


async def test_run_announces_open_door_and_polls(gpio, config, event_bus, recorder):
    gpio.set_level(PIN, 1)
    sensor = DoorSensor(gpio, config, event_bus)

    task = asyncio.create_task(sensor.run())
    await wait_until(lambda: len(recorder.events) == 1)

    gpio.set_level(PIN, 0)
    await wait_until(lambda: len(recorder.events) == 2)
    task.cancel()
    await asyncio.gather(task, return_exceptions=True)

    assert [e.level for e in recorder.events] == [True, False]


def test_pin_cannot_be_registered_twice(sensor, gpio, config, event_bus):
    with pytest.raises(ValueError):
        DoorSensor(gpio, config, event_bus)
