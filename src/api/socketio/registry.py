from socketio import AsyncServer

from api.socketio.light.broadcaster import register_light_broadcaster
from api.socketio.light.handlers import LightSocketHandlers
from services.service_container import ServiceContainer


def register_socketio(sio: AsyncServer, services: ServiceContainer) -> LightSocketHandlers:
    handlers = LightSocketHandlers(sio, services)
    handlers.register()
    register_light_broadcaster(sio, services)
    return handlers
