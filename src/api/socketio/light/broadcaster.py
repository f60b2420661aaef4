from socketio import AsyncServer

from models.events import ColorChangedEvent, EventType, ModeChangedEvent
from services.service_container import ServiceContainer


def register_light_broadcaster(sio: AsyncServer, services: ServiceContainer) -> None:
    """Fan controller state changes out to every connected client"""
    bus = services.event_bus

    async def on_mode_changed(event: ModeChangedEvent):
        await sio.emit("mode-update", event.mode.value)

    async def on_color_changed(event: ColorChangedEvent):
        await sio.emit("rgb-update", event.color.to_dict())

    bus.subscribe(EventType.MODE_CHANGED, on_mode_changed)  # type: ignore
    bus.subscribe(EventType.COLOR_CHANGED, on_color_changed)  # type: ignore
