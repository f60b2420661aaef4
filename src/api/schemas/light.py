"""
Light schemas - Pydantic models for mode / colour requests and responses
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from models.color import Color


class ModeRequest(BaseModel):
    """Request to switch controller mode"""
    mode: str = Field(
        description="Wire name of the mode, e.g. 'AutoPilot', 'Manual', 'ManualLocked'",
        examples=["Manual"],
    )


class ModeResponse(BaseModel):
    mode: str = Field(description="Current controller mode")
    previous_mode: str = Field(description="Mode before the last explicit change")


class RGBRequest(BaseModel):
    """
    Target colour. Values outside 0-255 are clamped, not rejected.
    """
    r: int = Field(description="Red channel")
    g: int = Field(description="Green channel")
    b: int = Field(description="Blue channel")


class RGBResponse(BaseModel):
    r: int = Field(ge=0, le=255)
    g: int = Field(ge=0, le=255)
    b: int = Field(ge=0, le=255)

    @classmethod
    def from_color(cls, color: Color) -> "RGBResponse":
        return cls(r=color.r, g=color.g, b=color.b)


class DoorStatus(BaseModel):
    open: bool
    restore_mode: Optional[str] = None
    debounce_pending: bool
    fading: bool


class TickStatus(BaseModel):
    running: bool
    lagging: bool = Field(description="Last frame exceeded the frame interval")
    frames: int
    overruns: int


class LightStatusResponse(BaseModel):
    """Full controller snapshot"""
    mode: str
    previous_mode: str
    target: RGBResponse
    last_pushed: RGBResponse
    device_connected: bool
    door: DoorStatus
    tick: TickStatus


class ModeListResponse(BaseModel):
    modes: List[str] = Field(description="Modes a client may select")
