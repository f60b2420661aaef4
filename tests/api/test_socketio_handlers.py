"""
Socket.IO handler tests with a recording stand-in for AsyncServer.
"""

import pytest
from socketio import AsyncServer
from socketio.exceptions import ConnectionRefusedError

from api.socketio.registry import register_socketio
from models.color import Color
from models.config import AppConfig
from models.enums import ClientType, ControllerMode
from services.service_container import ServiceContainer

ENVIRON = {"REMOTE_ADDR": "10.0.0.5"}


class FakeSio:
    """Records registered handlers and emitted messages"""

    def __init__(self):
        self.handlers = {}
        self.emitted = []

    def on(self, event, handler):
        self.handlers[event] = handler

    async def emit(self, event, data=None, to=None):
        self.emitted.append((event, data, to))


@pytest.fixture
def sio():
    return FakeSio()


@pytest.fixture
def handlers(sio, controller, device, event_bus, settings):
    services = ServiceContainer(
        config=AppConfig(tokens={"tok": ClientType.CLIENT, "int": ClientType.INTERNAL}),
        event_bus=event_bus,
        settings=settings,
        device=device,
        controller=controller,
    )
    return register_socketio(sio, services)


async def test_all_events_registered(sio, handlers):
    assert set(sio.handlers) == {"connect", "disconnect", "rgb-set", "mode-set", "mode-get", "rgb-status"}


class TestConnect:

    @pytest.mark.parametrize("auth", [None, {}, {"token": "bad"}, "tok"])
    async def test_bad_token_is_refused(self, handlers, auth):
        with pytest.raises(ConnectionRefusedError):
            await handlers.on_connect("s1", ENVIRON, auth)
        assert handlers.clients == {}

    async def test_connect_sends_current_state(self, sio, handlers, controller):
        await controller.set_rgb(1, 2, 3)
        sio.emitted.clear()

        await handlers.on_connect("s1", ENVIRON, {"token": "tok"})

        assert handlers.clients == {"s1": ClientType.CLIENT}
        assert sio.emitted == [
            ("mode-update", "Manual", "s1"),
            ("rgb-update", {"r": 1, "g": 2, "b": 3}, "s1"),
        ]

    async def test_last_disconnect_returns_to_autopilot(self, handlers, controller):
        await controller.setup()
        await handlers.on_connect("s1", ENVIRON, {"token": "tok"})
        await handlers.on_connect("s2", ENVIRON, {"token": "int"})

        await handlers.on_disconnect("s1")
        assert controller.get_mode() is ControllerMode.MANUAL

        await handlers.on_disconnect("s2")
        assert controller.get_mode() is ControllerMode.AUTO_PILOT

    async def test_unknown_sid_disconnect_is_ignored(self, handlers, controller, event_bus):
        await controller.setup()

        await handlers.on_disconnect("ghost")

        assert controller.get_mode() is ControllerMode.MANUAL


class TestCommands:

    async def test_rgb_set_by_client(self, handlers, controller):
        await handlers.on_connect("s1", ENVIRON, {"token": "tok"})

        ack = await handlers.on_rgb_set("s1", {"r": 300, "g": 2, "b": 3})

        assert ack == {"rgb": {"r": 255, "g": 2, "b": 3}}
        assert controller.get_mode() is ControllerMode.MANUAL

    async def test_rgb_set_by_internal_client(self, handlers, controller):
        await handlers.on_connect("s1", ENVIRON, {"token": "int"})

        ack = await handlers.on_rgb_set("s1", [1, 2, 3])

        assert ack == {"rgb": {"r": 1, "g": 2, "b": 3}}
        assert controller.get_mode() is ControllerMode.AUDIO_RAW

    @pytest.mark.parametrize("payload", [
        None, "red", [1, 2], {"r": "x", "g": 0, "b": 0},
        {"r": float("inf"), "g": 0, "b": 0}, [0, float("nan"), 0],
    ])
    async def test_rgb_set_bad_payload(self, handlers, controller, payload):
        await handlers.on_connect("s1", ENVIRON, {"token": "tok"})

        ack = await handlers.on_rgb_set("s1", payload)

        assert ack["error"]["code"] == "INVALID_PAYLOAD"
        assert controller.get_rgb() == Color.black()

    async def test_rgb_set_as_three_arguments(self, handlers, controller):
        await handlers.on_connect("s1", ENVIRON, {"token": "tok"})

        ack = await handlers.on_rgb_set("s1", 7, 8, 9)

        assert ack == {"rgb": {"r": 7, "g": 8, "b": 9}}
        assert controller.get_rgb() == Color(7, 8, 9)

    async def test_unauthenticated_sid(self, handlers):
        for call in (handlers.on_rgb_set, handlers.on_mode_set, handlers.on_mode_get, handlers.on_rgb_status):
            ack = await call("ghost", {"r": 1, "g": 1, "b": 1, "mode": "Manual"})
            assert ack["error"]["code"] == "UNAUTHENTICATED"

    @pytest.mark.parametrize("payload", ["Pattern", {"mode": "Pattern"}])
    async def test_mode_set(self, handlers, controller, payload):
        await handlers.on_connect("s1", ENVIRON, {"token": "tok"})

        assert await handlers.on_mode_set("s1", payload) == {"mode": "Pattern"}
        assert controller.get_mode() is ControllerMode.PATTERN

    @pytest.mark.parametrize("payload", ["Door", "Disco", None])
    async def test_mode_set_invalid(self, handlers, controller, payload):
        await handlers.on_connect("s1", ENVIRON, {"token": "tok"})

        ack = await handlers.on_mode_set("s1", payload)

        assert ack["error"]["code"] == "INVALID_MODE"
        assert controller.get_mode() is ControllerMode.MANUAL

    async def test_queries(self, handlers, controller):
        await handlers.on_connect("s1", ENVIRON, {"token": "tok"})
        await controller.set_rgb(4, 5, 6)

        assert await handlers.on_mode_get("s1") == {"mode": "Manual"}
        assert await handlers.on_rgb_status("s1") == {"rgb": {"r": 4, "g": 5, "b": 6}}


class TestBroadcaster:

    async def test_state_changes_reach_every_client(self, sio, handlers, controller):
        await controller.on_door(True)

        assert ("mode-update", "Door", None) in sio.emitted
        assert ("rgb-update", {"r": 255, "g": 255, "b": 255}, None) in sio.emitted

    async def test_mode_change_broadcast(self, sio, handlers, controller):
        await controller.set_mode("AutoPilot")

        assert sio.emitted == [("mode-update", "AutoPilot", None)]


class TestAsyncServerDispatch:
    """Handlers registered on a real python-socketio server"""

    @pytest.fixture
    def server(self, controller, device, event_bus, settings):
        sio = AsyncServer(async_mode="asgi")
        services = ServiceContainer(
            config=AppConfig(tokens={"tok": ClientType.CLIENT}),
            event_bus=event_bus,
            settings=settings,
            device=device,
            controller=controller,
        )
        return sio, register_socketio(sio, services)

    async def test_rgb_set_spread_arguments(self, server, controller):
        sio, handlers = server
        await handlers.on_connect("s1", ENVIRON, {"token": "tok"})

        ack = await sio._trigger_event("rgb-set", "/", "s1", 10, 20, 30)

        assert ack == {"rgb": {"r": 10, "g": 20, "b": 30}}
        assert controller.get_rgb() == Color(10, 20, 30)

    async def test_rgb_set_single_object(self, server, controller):
        sio, handlers = server
        await handlers.on_connect("s1", ENVIRON, {"token": "tok"})

        ack = await sio._trigger_event("rgb-set", "/", "s1", {"r": 1, "g": 2, "b": 3})

        assert ack == {"rgb": {"r": 1, "g": 2, "b": 3}}
