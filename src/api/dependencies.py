"""
Route access to the running ServiceContainer.

create_app(services) installs the container; routes pull it with
Depends(get_service_container). Until main_asyncio has wired the controller
every route answers 503.
"""

from typing import Optional

from fastapi import HTTPException, status

from services.service_container import ServiceContainer

_services: Optional[ServiceContainer] = None


def set_service_container(services: Optional[ServiceContainer]) -> None:
    global _services
    _services = services


async def get_service_container() -> ServiceContainer:
    if _services is None:
        raise HTTPException(status.HTTP_503_SERVICE_UNAVAILABLE, "Light controller is still starting")
    return _services
