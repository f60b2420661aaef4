"""
ILightDevice Protocol
=====================
Contract the controller needs from a light fixture driver.

Edges (connect, disconnect, door) are not callbacks on the device: drivers
publish DeviceConnectedEvent / DeviceDisconnectedEvent / DoorEvent on the
EventBus and the controller subscribes there.
"""

from __future__ import annotations
from typing import Protocol

from models.color import Color


class ILightDevice(Protocol):
    """
    All implementations must provide:
    - connected: current link state
    - set_rgb: guaranteed push (awaits the write)
    - set_if_possible: non-blocking push that may be refused (rate limit, busy link)
    - turn_off: best-effort blackout on shutdown
    """

    @property
    def connected(self) -> bool:
        ...

    async def set_rgb(self, color: Color) -> None:
        """Push colour to the fixture; returns once written."""
        ...

    def set_if_possible(self, color: Color) -> bool:
        """
        Push colour only if the device can take it right now.

        Returns:
            True if the colour was written, False if refused
        """
        ...

    async def turn_off(self) -> None:
        ...

    async def start(self) -> None:
        """Bring the link up and announce it (DeviceConnectedEvent)."""
        ...

    async def stop(self) -> None:
        """Black out, drop the link and announce it (DeviceDisconnectedEvent)."""
        ...
