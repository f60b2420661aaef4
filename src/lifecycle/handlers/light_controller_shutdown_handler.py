from __future__ import annotations

from typing import TYPE_CHECKING

from lifecycle.shutdown_protocol import IShutdownHandler
from utils.logger import get_logger, LogCategory

if TYPE_CHECKING:
    from controllers.light_controller import LightController
    from hardware.light.device_interface import ILightDevice
    from services.settings_service import SettingsService

log = get_logger().for_category(LogCategory.SHUTDOWN)


class LightControllerShutdownHandler(IShutdownHandler):
    """
    Stops the tick loop and door timers, writes pending settings and
    blanks the fixture.

    Priority: 100 (runs first, so no frame is pushed after the blank)
    """

    def __init__(self, controller: "LightController", device: "ILightDevice", settings: "SettingsService"):
        self.controller = controller
        self.device = device
        self.settings = settings

    @property
    def shutdown_priority(self) -> int:
        return 100

    async def shutdown(self) -> None:
        log.info("Stopping light controller...")
        self.controller.destroy()

        try:
            await self.settings.flush()
        except OSError as e:
            log.error("Could not write settings on shutdown", exception=e)

        if self.device.connected:
            await self.device.turn_off()
        await self.device.stop()
        log.info("Fixture blanked")
