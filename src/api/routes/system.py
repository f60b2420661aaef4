"""
System endpoints - health and task introspection
"""

from typing import Any, Dict

from fastapi import APIRouter, Depends

from api.dependencies import get_service_container
from lifecycle.task_registry import TaskRegistry
from services.service_container import ServiceContainer

router = APIRouter(prefix="/system", tags=["System"])


@router.get("/health", summary="Health check")
async def health(services: ServiceContainer = Depends(get_service_container)) -> Dict[str, Any]:
    """
    Unauthenticated liveness probe.

    `lagging` mirrors the tick loop's overrun flag.
    """
    scheduler = services.controller.scheduler
    return {
        "status": "healthy",
        "device_connected": services.device.connected,
        "tick_running": scheduler.running,
        "lagging": scheduler.lagging,
    }


@router.get("/tasks")
async def get_tasks() -> Dict[str, Any]:
    """Tracked background tasks"""
    registry = TaskRegistry.instance()
    return {
        "summary": registry.summary(),
        "active": [r.as_dict() for r in registry.active()],
        "failed": [r.as_dict() for r in registry.failed()],
    }
