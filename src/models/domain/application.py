"""Application settings domain model"""

from dataclasses import dataclass

from models.enums import ControllerMode


@dataclass
class LightSettings:
    """
    Persisted settings (settings.json)

    Only the last selected controller mode survives a restart. Door is never
    stored: the override is transient and is not a user selection.

    Default values defined here are the single source of truth used by
    SettingsService when the file is missing or unreadable.
    """

    controller_mode: ControllerMode = ControllerMode.AUTO_PILOT

    # === System Configuration ===
    save_on_change: bool = True  # Persist after every confirmed mode transition

    def to_dict(self) -> dict:
        return {
            "controller_mode": self.controller_mode.value,
            "save_on_change": self.save_on_change,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LightSettings":
        mode = ControllerMode.parse(data.get("controller_mode", cls.controller_mode.value))
        if not mode.is_selectable:
            mode = cls.controller_mode
        return cls(
            controller_mode=mode,
            save_on_change=bool(data.get("save_on_change", True)),
        )
