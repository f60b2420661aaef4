"""
API Layer

HTTP (FastAPI) and Socket.IO interfaces to the light controller.

Structure:
- routes/     : Endpoint handlers
- schemas/    : Pydantic request/response models
- middleware/ : Auth dependency, error handling
- socketio/   : Socket.IO server, command handlers, broadcaster
"""

from api.main import create_app

__all__ = ["create_app"]
