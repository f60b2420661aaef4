"""
Error body returned by every failing HTTP route:

    {"error": {"code": "INVALID_MODE", "message": "...", "details": {...}, "timestamp": "..."},
     "request_id": "6f1c0c1e-..."}

Socket.IO acks carry the same `error` object, without the envelope.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    code: str = Field(description="Stable machine-readable code, e.g. INVALID_MODE")
    message: str
    details: Optional[Dict[str, Any]] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class FieldError(BaseModel):
    field: str = Field(description="Dotted path inside the request body")
    message: str
    type: str


class ErrorResponse(BaseModel):
    error: ErrorDetail
    request_id: Optional[str] = None

    model_config = {
        "json_schema_extra": {
            "example": {
                "error": {
                    "code": "INVALID_MODE",
                    "message": "Mode 'Disco' does not exist",
                    "details": {"mode": "Disco"},
                    "timestamp": "2026-01-12T10:30:00Z",
                },
                "request_id": "6f1c0c1e-...",
            }
        }
    }


class ValidationErrorResponse(ErrorResponse):
    validation_errors: List[FieldError] = Field(default_factory=list)
