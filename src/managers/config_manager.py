"""
Config Manager

Loads config.yaml (optionally split via `include:`) into a typed AppConfig.
Falls back to factory_defaults.yaml when the main config cannot be read.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from models.config import (
    ApiConfig,
    AppConfig,
    AutoPilotConfig,
    DeviceConfig,
    DoorSensorConfig,
    TimingConfig,
)
from models.enums import ClientType, DeviceType, LogLevel
from utils.enum_helper import EnumHelper
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.CONFIG)

SRC_DIR = Path(__file__).parent.parent


class ConfigManager:
    """
    Main configuration manager with include system support

    Example:
        config_manager = ConfigManager()
        config = config_manager.load()

        config.timing.frame_interval_s     # 0.05
        config.tokens["s3cret"]            # ClientType.CLIENT
    """

    def __init__(self, config_path="config/config.yaml", defaults_path="config/factory_defaults.yaml"):
        """
        Args:
            config_path: Path to main config.yaml (relative paths resolve against src/)
            defaults_path: Path to factory defaults fallback
        """
        self.config_path = self._resolve(config_path)
        self.factory_defaults_path = self._resolve(defaults_path)
        self.data: Dict[str, Any] = {}
        self.config: Optional[AppConfig] = None

    @staticmethod
    def _resolve(path) -> Path:
        path = Path(path)
        return path if path.is_absolute() else SRC_DIR / path

    def load(self) -> AppConfig:
        """
        Process:
        1. Load main config.yaml
        2. If it has an 'include:' list, load and merge those files
        3. Fall back to factory_defaults.yaml on a missing or broken file
        4. Build typed AppConfig

        Raises:
            ValueError: a value is present but invalid (bad enum, wrong type)
        """
        try:
            main_config = self._read_yaml(self.config_path)
            if "include" in main_config:
                log.info("Using include-based configuration")
                self.data = self._load_with_includes(main_config["include"], self.config_path.parent)
            else:
                self.data = main_config
        except (OSError, yaml.YAMLError) as ex:
            log.error("Failed to load config.yaml", error=str(ex), error_type=type(ex).__name__)
            log.warn("Falling back to factory defaults")
            self.data = self._read_yaml(self.factory_defaults_path)

        self.config = self.build(self.data)
        log.info(
            "Configuration loaded",
            device=self.config.device.type.value,
            door_sensor=self.config.door_sensor.enabled,
            tokens=len(self.config.tokens),
        )
        return self.config

    @staticmethod
    def _read_yaml(path: Path) -> Dict[str, Any]:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f) or {}

    def _load_with_includes(self, include_list: List[str], config_dir: Path) -> Dict[str, Any]:
        merged: Dict[str, Any] = {}
        for filename in include_list:
            file_data = self._read_yaml(config_dir / filename)
            merged.update(file_data)
            log.info(f"Loaded {filename}", keys=str(list(file_data.keys())))
        return merged

    # ===== Typed config =====

    @classmethod
    def build(cls, data: Dict[str, Any]) -> AppConfig:
        """Raw YAML dict -> AppConfig (missing keys take dataclass defaults)"""
        timing = data.get("timing") or {}
        device = data.get("device") or {}
        door = data.get("door_sensor") or {}
        api = data.get("api") or {}
        autopilot = data.get("autopilot") or {}

        return AppConfig(
            timing=TimingConfig(
                frame_interval_s=float(timing.get("frame_interval_s", TimingConfig.frame_interval_s)),
                door_debounce_s=float(timing.get("door_debounce_s", TimingConfig.door_debounce_s)),
                fade_step_s=float(timing.get("fade_step_s", TimingConfig.fade_step_s)),
                intro_step_s=float(timing.get("intro_step_s", TimingConfig.intro_step_s)),
            ),
            device=DeviceConfig(
                type=EnumHelper.from_string(DeviceType, device.get("type", DeviceType.VIRTUAL)),
                gpio_pin=int(device.get("gpio_pin", DeviceConfig.gpio_pin)),
                led_count=int(device.get("led_count", DeviceConfig.led_count)),
                color_order=str(device.get("color_order", DeviceConfig.color_order)).upper(),
                brightness=int(device.get("brightness", DeviceConfig.brightness)),
                min_write_interval_s=float(device.get("min_write_interval_s", DeviceConfig.min_write_interval_s)),
            ),
            door_sensor=DoorSensorConfig(
                enabled=bool(door.get("enabled", DoorSensorConfig.enabled)),
                gpio_pin=int(door.get("gpio_pin", DoorSensorConfig.gpio_pin)),
                poll_interval_s=float(door.get("poll_interval_s", DoorSensorConfig.poll_interval_s)),
                contact_debounce_s=float(door.get("contact_debounce_s", DoorSensorConfig.contact_debounce_s)),
                open_level=int(door.get("open_level", DoorSensorConfig.open_level)),
            ),
            api=ApiConfig(
                host=str(api.get("host", ApiConfig.host)),
                port=int(api.get("port", ApiConfig.port)),
                cors_origins=list(api.get("cors_origins") or ["*"]),
            ),
            autopilot=AutoPilotConfig(
                cycle_period_s=float(autopilot.get("cycle_period_s", AutoPilotConfig.cycle_period_s)),
            ),
            tokens=cls._parse_tokens(data.get("tokens") or {}),
            settings_path=str(data.get("settings_path", AppConfig.settings_path)),
            log_level=EnumHelper.from_string(LogLevel, data.get("log_level", LogLevel.INFO)),
        )

    @staticmethod
    def _parse_tokens(raw: Dict[str, Any]) -> Dict[str, ClientType]:
        """
        tokens:
          "<token>": client | internal
        """
        tokens = {}
        for token, kind in raw.items():
            tokens[str(token)] = EnumHelper.from_string(ClientType, kind)
        if not tokens:
            log.warn("No auth tokens configured, every client will be refused")
        return tokens
