"""
Socket.IO command handlers for the light controller

Connect requires `auth={"token": "..."}`; the token decides the client kind.
Commands answer through the acknowledgement:

    rgb-set    r, g, b | {"r", "g", "b"} | [r, g, b] -> {"rgb": {...}} | {"error": {...}}
    mode-set   "Manual" | {"mode": "Manual"} -> {"mode": "Manual"} | {"error": {...}}
    mode-get                     -> {"mode": "..."}
    rgb-status                   -> {"rgb": {...}}

When the last authenticated client leaves, AllClientsDisconnectedEvent is
published on the bus.
"""

from typing import Any, Dict, Optional, Tuple

from socketio import AsyncServer
from socketio.exceptions import ConnectionRefusedError

from api.middleware.auth import resolve_token
from models.enums import ClientType
from models.errors import DomainError, InvalidPayloadError, UnauthenticatedError
from models.events import AllClientsDisconnectedEvent
from services.service_container import ServiceContainer
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SOCKETIO)


class LightSocketHandlers:

    def __init__(self, sio: AsyncServer, services: ServiceContainer):
        self.sio = sio
        self.services = services
        self.clients: Dict[str, ClientType] = {}

    def register(self) -> None:
        self.sio.on("connect", self.on_connect)
        self.sio.on("disconnect", self.on_disconnect)
        self.sio.on("rgb-set", self.on_rgb_set)
        self.sio.on("mode-set", self.on_mode_set)
        self.sio.on("mode-get", self.on_mode_get)
        self.sio.on("rgb-status", self.on_rgb_status)

    # === Connection ===

    async def on_connect(self, sid: str, environ: dict, auth: Optional[Any] = None) -> None:
        token = auth.get("token") if isinstance(auth, dict) else None
        client_type = resolve_token(self.services.config.tokens, token)
        if client_type is None:
            log.warn("Connection refused: bad token", sid=sid, ip=environ.get("REMOTE_ADDR", "unknown"))
            raise ConnectionRefusedError("authentication failed")

        self.clients[sid] = client_type
        log.info("Client connected", sid=sid, client=client_type.value, clients=len(self.clients))

        controller = self.services.controller
        await self.sio.emit("mode-update", controller.get_mode().value, to=sid)
        await self.sio.emit("rgb-update", controller.get_rgb().to_dict(), to=sid)

    async def on_disconnect(self, sid: str, reason: Optional[Any] = None) -> None:
        if self.clients.pop(sid, None) is None:
            return
        log.info("Client disconnected", sid=sid, clients=len(self.clients))

        if not self.clients:
            await self.services.event_bus.publish(AllClientsDisconnectedEvent())

    # === Commands ===

    async def on_rgb_set(self, sid: str, *args: Any) -> Dict[str, Any]:
        try:
            client_type = self._client(sid)
            r, g, b = self._rgb_from(args)
            color = await self.services.controller.set_rgb(r, g, b, client_type)
        except DomainError as e:
            return {"error": e.to_dict()}
        return {"rgb": color.to_dict()}

    async def on_mode_set(self, sid: str, data: Any = None) -> Dict[str, Any]:
        mode = data.get("mode") if isinstance(data, dict) else data
        try:
            self._client(sid)
            current = await self.services.controller.set_mode(mode)
        except DomainError as e:
            return {"error": e.to_dict()}
        return {"mode": current.value}

    async def on_mode_get(self, sid: str, data: Any = None) -> Dict[str, Any]:
        try:
            self._client(sid)
        except DomainError as e:
            return {"error": e.to_dict()}
        return {"mode": self.services.controller.get_mode().value}

    async def on_rgb_status(self, sid: str, data: Any = None) -> Dict[str, Any]:
        try:
            self._client(sid)
        except DomainError as e:
            return {"error": e.to_dict()}
        return {"rgb": self.services.controller.get_rgb().to_dict()}

    # === Helpers ===

    def _client(self, sid: str) -> ClientType:
        client_type = self.clients.get(sid)
        if client_type is None:
            raise UnauthenticatedError()
        return client_type

    @staticmethod
    def _rgb_from(args: Tuple[Any, ...]) -> Tuple[int, int, int]:
        """Accepts emit("rgb-set", r, g, b), a single {r, g, b} or a single [r, g, b]"""
        data = args[0] if len(args) == 1 else args
        if isinstance(data, dict):
            values = (data.get("r"), data.get("g"), data.get("b"))
        elif isinstance(data, (list, tuple)) and len(data) == 3:
            values = tuple(data)
        else:
            raise InvalidPayloadError("Expected {r, g, b} or [r, g, b]")

        try:
            r, g, b = (int(v) for v in values)
        except (TypeError, ValueError, OverflowError):
            raise InvalidPayloadError(f"Channel values must be finite numbers, got {values}")
        return r, g, b
