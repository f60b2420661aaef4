"""
FastAPI Application Factory

Assembles the HTTP side of the controller:
- CORS
- exception handlers (DomainError -> JSON ErrorResponse)
- routers under /api/v1 (light, system)

main_asyncio.py wraps the result with the Socket.IO ASGI app; tests use
create_app() directly with a test ServiceContainer.
"""

from typing import List, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.dependencies import set_service_container
from api.middleware.error_handler import register_exception_handlers
from api.routes import light, system
from services.service_container import ServiceContainer
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)


def create_app(
    services: Optional[ServiceContainer] = None,
    title: str = "Light Fixture Controller",
    version: str = "1.0.0",
    docs_enabled: bool = True,
    cors_origins: Optional[List[str]] = None,
) -> FastAPI:
    """
    Args:
        services: Container used by every endpoint (may be set later via
                  api.dependencies.set_service_container)
        cors_origins: Allowed origins (default: all)
    """
    app = FastAPI(
        title=title,
        description="REST API for the RGB light fixture controller",
        version=version,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )
    log.info(f"Creating FastAPI app: {title} v{version}")

    if services is not None:
        set_service_container(services)

    cors_origins = cors_origins or ["*"]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    app.include_router(light.router, prefix="/api/v1")
    app.include_router(system.router, prefix="/api/v1")
    log.debug("Routes registered: light (/api/v1/light), system (/api/v1/system)")

    @app.get("/", include_in_schema=False)
    async def root():
        return JSONResponse({
            "message": title,
            "docs": "/docs",
            "health": "/api/v1/system/health",
        })

    return app
