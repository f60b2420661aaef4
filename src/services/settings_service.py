"""Settings service - Persists the last selected controller mode"""

import asyncio
import json
from copy import deepcopy
from pathlib import Path
from typing import Optional

import aiofiles

from models.domain.application import LightSettings
from models.enums import ControllerMode
from models.errors import DomainError
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.STATE)


class SettingsService:
    """
    Async JSON persistence of LightSettings.

    - load() reads settings.json, falling back to LightSettings() defaults
    - save_mode() updates the in-memory settings and queues a debounced save
    - flush() writes pending changes immediately (shutdown)

    File format:
    {
        "controller_mode": "AutoPilot",
        "save_on_change": true
    }
    """

    def __init__(self, path: Path, save_delay: float = 0.5):
        """
        Args:
            path: settings.json location
            save_delay: Debounce window; rapid mode changes are written once
        """
        self.path = Path(path)
        self.settings = LightSettings()

        self._save_task: Optional[asyncio.Task] = None
        self._save_delay = save_delay

    # === Load ===

    async def load(self) -> LightSettings:
        """Load settings; defaults on first run or unreadable file"""
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                content = await f.read()
            self.settings = LightSettings.from_dict(json.loads(content))
            log.info("Settings loaded", path=str(self.path), mode=self.settings.controller_mode.value)
        except FileNotFoundError:
            self.settings = deepcopy(LightSettings())
            log.info("No settings file, using defaults", path=str(self.path))
        except (ValueError, DomainError) as ex:
            self.settings = deepcopy(LightSettings())
            log.warn("Loading settings failed, using defaults", exception=ex)
        return self.settings

    # === Save ===

    def save_mode(self, mode: ControllerMode) -> None:
        """Record a confirmed mode transition and persist it asynchronously"""
        if not mode.is_selectable:
            return
        self.settings.controller_mode = mode
        self._queue_save()

    async def flush(self) -> None:
        """Cancel the debounce and write right now"""
        if self._save_task and not self._save_task.done():
            self._save_task.cancel()
        self._save_task = None
        await self._write()

    def _queue_save(self) -> None:
        """
        Queue a debounced save.

        Cancels any pending save task and schedules a new one.
        """
        if self._save_task and not self._save_task.done():
            self._save_task.cancel()
            log.debug("Cancelled previous pending save")

        self._save_task = asyncio.create_task(self._debounced_save())

    async def _debounced_save(self) -> None:
        await asyncio.sleep(self._save_delay)

        if not self.settings.save_on_change:
            log.debug("Auto-save disabled, skipping settings save")
            return

        try:
            await self._write()
        except OSError as e:
            log.error("Failed to save settings", exception=e)

    async def _write(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(self.path, "w", encoding="utf-8") as f:
            await f.write(json.dumps(self.settings.to_dict(), indent=2))
        log.debug("Settings saved", mode=self.settings.controller_mode.value)
