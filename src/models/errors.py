"""
Domain errors

Raised by the controller core and rendered by the API layer
(FastAPI exception handlers, Socket.IO acknowledgements).
"""

from typing import Optional


class DomainError(Exception):
    """Base class for domain-specific errors"""
    def __init__(
        self,
        code: str,
        message: str,
        details: Optional[dict] = None,
        status_code: int = 400
    ):
        self.code = code
        self.message = message
        self.details = details or {}
        self.status_code = status_code
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"code": self.code, "message": self.message, "details": self.details}


class InvalidModeError(DomainError):
    """Requested mode is not a defined (or not a selectable) controller mode"""
    def __init__(self, mode, reason: str = "does not exist"):
        super().__init__(
            code="INVALID_MODE",
            message=f"Mode {mode!r} {reason}",
            details={"mode": str(mode)},
            status_code=422
        )


class UnauthenticatedError(DomainError):
    """Client did not authenticate (or used an unknown token)"""
    def __init__(self, message: str = "Client is not authenticated"):
        super().__init__(
            code="UNAUTHENTICATED",
            message=message,
            status_code=401
        )


class DeviceUnavailableError(DomainError):
    """Light device or its driver is unavailable"""
    def __init__(self, message: str):
        super().__init__(
            code="DEVICE_UNAVAILABLE",
            message=message,
            status_code=503
        )


class InvalidPayloadError(DomainError):
    """Transport message body has the wrong shape"""
    def __init__(self, message: str):
        super().__init__(
            code="INVALID_PAYLOAD",
            message=message,
            status_code=422
        )
