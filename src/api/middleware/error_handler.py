"""
Exception -> JSON mapping for the HTTP API

    RequestValidationError  422 VALIDATION_ERROR (one FieldError per problem)
    DomainError             exc.status_code, exc.code (InvalidModeError -> 422 INVALID_MODE)
    anything else           500 INTERNAL_SERVER_ERROR

Each response carries a fresh request_id that is also written to the log.
"""

import uuid

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from api.schemas.error import ErrorDetail, ErrorResponse, FieldError, ValidationErrorResponse
from models.errors import DomainError
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)


def _json(status_code: int, body: ErrorResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def _field_errors(exc: RequestValidationError):
    for error in exc.errors():
        # loc starts with "body" / "query" / "path"
        yield FieldError(
            field=".".join(str(part) for part in error["loc"][1:]),
            message=error["msg"],
            type=error["type"],
        )


def register_exception_handlers(app: FastAPI) -> None:

    @app.exception_handler(RequestValidationError)
    async def on_validation_error(request: Request, exc: RequestValidationError):
        request_id = str(uuid.uuid4())
        fields = list(_field_errors(exc))
        log.warn("Request rejected", path=request.url.path, request_id=request_id,
                 fields=", ".join(f.field or "<body>" for f in fields))

        return _json(status.HTTP_422_UNPROCESSABLE_ENTITY, ValidationErrorResponse(
            error=ErrorDetail(
                code="VALIDATION_ERROR",
                message="Request validation failed",
                details={"error_count": len(fields)},
            ),
            validation_errors=fields,
            request_id=request_id,
        ))

    @app.exception_handler(DomainError)
    async def on_domain_error(request: Request, exc: DomainError):
        request_id = str(uuid.uuid4())
        log.warn(f"{exc.code}: {exc.message}", path=request.url.path, request_id=request_id)

        return _json(exc.status_code, ErrorResponse(
            error=ErrorDetail(code=exc.code, message=exc.message, details=exc.details),
            request_id=request_id,
        ))

    @app.exception_handler(Exception)
    async def on_unexpected_error(request: Request, exc: Exception):
        request_id = str(uuid.uuid4())
        log.error("Unhandled error in route", exception=exc, path=request.url.path, request_id=request_id)

        return _json(status.HTTP_500_INTERNAL_SERVER_ERROR, ErrorResponse(
            error=ErrorDetail(
                code="INTERNAL_SERVER_ERROR",
                message="Unexpected error while handling the request",
                details={"request_id": request_id},
            ),
            request_id=request_id,
        ))
