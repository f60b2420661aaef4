"""
HTTP API tests against a real controller on a disconnected virtual light.
"""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import set_service_container
from api.main import create_app
from conftest import StubAnalyser, StubAutoPilot
from controllers.light_controller import LightController
from hardware.light.virtual_device import VirtualLightDevice
from models.config import AppConfig, TimingConfig
from models.enums import ClientType, ControllerMode
from services.event_bus import EventBus
from services.service_container import ServiceContainer
from services.settings_service import SettingsService

CLIENT = {"Authorization": "Bearer tok"}
INTERNAL = {"Authorization": "Bearer int"}


@pytest.fixture
def services(tmp_path):
    bus = EventBus()
    device = VirtualLightDevice(bus)
    settings = SettingsService(tmp_path / "settings.json", save_delay=0)
    controller = LightController(
        device=device,
        event_bus=bus,
        settings=settings,
        timing=TimingConfig(),
        autopilot=StubAutoPilot(),
        audio=StubAnalyser(),
        initial_mode=ControllerMode.AUTO_PILOT,
    )
    return ServiceContainer(
        config=AppConfig(tokens={"tok": ClientType.CLIENT, "int": ClientType.INTERNAL}),
        event_bus=bus,
        settings=settings,
        device=device,
        controller=controller,
    )


@pytest.fixture
def client(services):
    with TestClient(create_app(services)) as test_client:
        yield test_client
    set_service_container(None)


class TestAuth:

    def test_missing_header(self, client):
        response = client.get("/api/v1/light/mode")
        assert response.status_code == 401

    def test_malformed_header(self, client):
        response = client.get("/api/v1/light/mode", headers={"Authorization": "tok"})
        assert response.status_code == 401

    def test_unknown_token(self, client):
        response = client.get("/api/v1/light/mode", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_health_needs_no_token(self, client):
        response = client.get("/api/v1/system/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "healthy",
            "device_connected": False,
            "tick_running": False,
            "lagging": False,
        }


class TestMode:

    def test_get_mode(self, client):
        response = client.get("/api/v1/light/mode", headers=CLIENT)

        assert response.status_code == 200
        assert response.json() == {"mode": "AutoPilot", "previous_mode": "AutoPilot"}

    def test_set_mode(self, client):
        response = client.put("/api/v1/light/mode", json={"mode": "ManualLocked"}, headers=CLIENT)

        assert response.status_code == 200
        assert response.json() == {"mode": "ManualLocked", "previous_mode": "AutoPilot"}

    @pytest.mark.parametrize("mode", ["Disco", "Door", "manual"])
    def test_rejected_modes(self, client, mode):
        response = client.put("/api/v1/light/mode", json={"mode": mode}, headers=CLIENT)

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "INVALID_MODE"
        assert client.get("/api/v1/light/mode", headers=CLIENT).json()["mode"] == "AutoPilot"

    def test_missing_body_field(self, client):
        response = client.put("/api/v1/light/mode", json={}, headers=CLIENT)

        assert response.status_code == 422
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    def test_list_modes_excludes_door(self, client):
        modes = client.get("/api/v1/light/modes", headers=CLIENT).json()["modes"]

        assert "Door" not in modes
        assert modes[0] == "AutoPilot"
        assert len(modes) == 7


class TestRGB:

    def test_set_rgb_clamps_and_switches_to_manual(self, client):
        response = client.put("/api/v1/light/rgb", json={"r": 300, "g": -1, "b": 5}, headers=CLIENT)

        assert response.status_code == 200
        assert response.json() == {"r": 255, "g": 0, "b": 5}
        assert client.get("/api/v1/light/rgb", headers=CLIENT).json() == {"r": 255, "g": 0, "b": 5}
        assert client.get("/api/v1/light/mode", headers=CLIENT).json()["mode"] == "Manual"

    def test_internal_token_switches_to_audio_raw(self, client):
        client.put("/api/v1/light/rgb", json={"r": 1, "g": 2, "b": 3}, headers=INTERNAL)

        assert client.get("/api/v1/light/mode", headers=INTERNAL).json()["mode"] == "AudioRaw"

    def test_non_numeric_channel(self, client):
        response = client.put("/api/v1/light/rgb", json={"r": "red", "g": 0, "b": 0}, headers=CLIENT)
        assert response.status_code == 422


class TestStatus:

    def test_status_snapshot(self, client):
        client.put("/api/v1/light/rgb", json={"r": 10, "g": 20, "b": 30}, headers=CLIENT)

        status = client.get("/api/v1/light/status", headers=CLIENT).json()

        assert status["mode"] == "Manual"
        assert status["previous_mode"] == "AutoPilot"
        assert status["target"] == {"r": 10, "g": 20, "b": 30}
        assert status["device_connected"] is False
        assert status["door"] == {"open": False, "restore_mode": None, "debounce_pending": False, "fading": False}
        assert status["tick"]["running"] is False

    def test_tasks_endpoint(self, client):
        response = client.get("/api/v1/system/tasks")

        assert response.status_code == 200
        assert set(response.json()) == {"summary", "active", "failed"}


def test_container_not_initialized():
    set_service_container(None)
    with TestClient(create_app()) as client:
        assert client.get("/api/v1/system/health").status_code == 503
