"""
ModeStateMachine - current/previous controller mode

Explicit transitions (set_mode) are validated, persisted and broadcast.
The Door override is entered and left through enter_override()/restore(),
which never touch `previous` and never persist.
"""

from typing import Callable, Optional, Union

from models.domain.mode import ModeRecord
from models.enums import ControllerMode
from models.errors import InvalidModeError
from services.settings_service import SettingsService
from controllers.light_output import LightOutput
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.STATE)

# Modes dropped back to AutoPilot once nobody is left to drive them
_CLIENT_DRIVEN_MODES = (ControllerMode.MANUAL, ControllerMode.MANUAL_FORCE)


class ModeStateMachine:

    def __init__(
        self,
        initial: ControllerMode,
        output: LightOutput,
        settings: Optional[SettingsService] = None,
    ):
        """
        Args:
            initial: Mode restored from settings (Door is never accepted here)
            output: Used to broadcast mode-update
            settings: Persistence for explicit transitions (None = don't persist)
        """
        if not initial.is_selectable:
            initial = ControllerMode.AUTO_PILOT
        self.record = ModeRecord.starting_in(initial)
        self.output = output
        self.settings = settings

        # Abandons a running Door episode; returns the mode it would have restored
        self.cancel_override: Callable[[], Optional[ControllerMode]] = lambda: None

    @property
    def previous(self) -> ControllerMode:
        return self.record.previous

    def get_mode(self) -> ControllerMode:
        return self.record.current

    async def set_mode(self, requested: Union[ControllerMode, str]) -> bool:
        """
        Explicit mode change from a client or an internal rule.

        Always abandons pending Door timers. Returns True if the mode actually
        changed; an unchanged mode is neither persisted nor broadcast.

        Raises:
            InvalidModeError: unknown mode, or Door (only the sensor enters Door)
        """
        mode = ControllerMode.parse(requested)
        if not mode.is_selectable:
            raise InvalidModeError(mode.value, "cannot be selected directly")

        restore_mode = self.cancel_override()
        current = self.record.current

        if mode is current:
            log.debug("Mode unchanged", mode=mode.value)
            return False

        if current is ControllerMode.DOOR and restore_mode is not None:
            self.record.previous = restore_mode
        else:
            self.record.previous = current
        self.record.current = mode

        log.info("Mode changed", mode=mode.value, previous=self.record.previous.value)

        if self.settings:
            self.settings.save_mode(mode)
        await self.output.broadcast_mode(mode)
        return True

    def enter_override(self) -> None:
        """Switch to Door; caller broadcasts"""
        if self.record.current is not ControllerMode.DOOR:
            log.info("Door override engaged", interrupted=self.record.current.value)
        self.record.current = ControllerMode.DOOR

    async def restore(self, mode: ControllerMode) -> None:
        """Leave the Door override for `mode` and broadcast it"""
        self.record.current = mode
        log.info("Mode restored", mode=mode.value)
        await self.output.broadcast_mode(mode)

    async def on_all_clients_disconnected(self) -> bool:
        if self.record.current not in _CLIENT_DRIVEN_MODES:
            return False
        log.info("No clients left, returning to AutoPilot", mode=self.record.current.value)
        return await self.set_mode(ControllerMode.AUTO_PILOT)
