"""
Authentication for the HTTP API

Clients send "Authorization: Bearer <token>". The token is looked up in the
configured token table, which also decides the client kind:

    client   -> remote UI; colour commands switch to Manual
    internal -> privileged process (audio bridge); colour commands switch to AudioRaw

Socket.IO connections use the same table (see api/socketio/light/handlers.py).
"""

from typing import Dict, Optional

from fastapi import Depends, Header, HTTPException, status

from api.dependencies import get_service_container
from models.enums import ClientType
from services.service_container import ServiceContainer


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(status.HTTP_401_UNAUTHORIZED, detail, headers={"WWW-Authenticate": "Bearer"})


def resolve_token(tokens: Dict[str, ClientType], token: Optional[str]) -> Optional[ClientType]:
    """Client kind for `token`, None if unknown or empty"""
    if not token:
        return None
    return tokens.get(token)


async def get_client_type(
    authorization: Optional[str] = Header(None),
    services: ServiceContainer = Depends(get_service_container),
) -> ClientType:
    """Route dependency: 401 unless the bearer token is in the token table"""
    if not authorization:
        raise _unauthorized("Missing Authorization header")

    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise _unauthorized("Expected: Authorization: Bearer <token>")

    client_type = resolve_token(services.config.tokens, token.strip())
    if client_type is None:
        raise _unauthorized("Unknown token")
    return client_type
