"""
Light Endpoints - HTTP routes for mode and colour control

All endpoints require a bearer token (see api/middleware/auth.py).
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_service_container
from api.middleware.auth import get_client_type
from api.schemas.light import (
    LightStatusResponse,
    ModeListResponse,
    ModeRequest,
    ModeResponse,
    RGBRequest,
    RGBResponse,
)
from models.enums import ClientType, ControllerMode
from services.service_container import ServiceContainer
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)

router = APIRouter(
    prefix="/light",
    tags=["Light"],
    dependencies=[Depends(get_client_type)],
)


def _mode_response(services: ServiceContainer) -> ModeResponse:
    controller = services.controller
    return ModeResponse(
        mode=controller.get_mode().value,
        previous_mode=controller.modes.previous.value,
    )


@router.get("/mode", response_model=ModeResponse, summary="Get controller mode")
async def get_mode(services: ServiceContainer = Depends(get_service_container)) -> ModeResponse:
    return _mode_response(services)


@router.put(
    "/mode",
    response_model=ModeResponse,
    summary="Set controller mode",
    description="Door cannot be selected; unknown modes are rejected with 422 INVALID_MODE",
)
async def set_mode(
    request: ModeRequest,
    services: ServiceContainer = Depends(get_service_container),
) -> ModeResponse:
    await services.controller.set_mode(request.mode)
    return _mode_response(services)


@router.get("/modes", response_model=ModeListResponse, summary="List selectable modes")
async def list_modes() -> ModeListResponse:
    return ModeListResponse(modes=[m.value for m in ControllerMode if m.is_selectable])


@router.get("/rgb", response_model=RGBResponse, summary="Get target colour")
async def get_rgb(services: ServiceContainer = Depends(get_service_container)) -> RGBResponse:
    return RGBResponse.from_color(services.controller.get_rgb())


@router.put(
    "/rgb",
    response_model=RGBResponse,
    summary="Set target colour",
    description="Switches to Manual (client tokens) or AudioRaw (internal tokens). Channels are clamped to 0-255.",
)
async def set_rgb(
    request: RGBRequest,
    client_type: ClientType = Depends(get_client_type),
    services: ServiceContainer = Depends(get_service_container),
) -> RGBResponse:
    color = await services.controller.set_rgb(request.r, request.g, request.b, client_type)
    return RGBResponse.from_color(color)


@router.get("/status", response_model=LightStatusResponse, summary="Controller snapshot")
async def get_status(services: ServiceContainer = Depends(get_service_container)) -> LightStatusResponse:
    return LightStatusResponse(**services.controller.get_status())
