"""
Configuration models

Typed view over config.yaml, built by ConfigManager.
"""

from dataclasses import dataclass, field
from typing import Dict, List

from models.enums import ClientType, DeviceType, LogLevel


@dataclass(frozen=True)
class TimingConfig:
    """Scheduler and animation timing (seconds)"""
    frame_interval_s: float = 0.05     # 20 Hz tick
    door_debounce_s: float = 10.0      # close -> fade-back delay
    fade_step_s: float = 0.1           # one unit per channel per step
    intro_step_s: float = 0.5          # connect sequence hold per colour


@dataclass(frozen=True)
class DeviceConfig:
    """Light device driver"""
    type: DeviceType = DeviceType.VIRTUAL
    gpio_pin: int = 18
    led_count: int = 30
    color_order: str = "GRB"
    brightness: int = 255
    min_write_interval_s: float = 0.02  # admission window for set_if_possible


@dataclass(frozen=True)
class DoorSensorConfig:
    """Reed switch on a GPIO input"""
    enabled: bool = False
    gpio_pin: int = 17
    poll_interval_s: float = 0.02      # 50 Hz polling
    contact_debounce_s: float = 0.05   # ignore contact bounce shorter than this
    open_level: int = 1                # pin level that means "door open" (pull-up + NC reed)


@dataclass(frozen=True)
class ApiConfig:
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class AutoPilotConfig:
    cycle_period_s: float = 120.0      # one full palette cycle


@dataclass(frozen=True)
class AppConfig:
    """Whole application configuration"""
    timing: TimingConfig = field(default_factory=TimingConfig)
    device: DeviceConfig = field(default_factory=DeviceConfig)
    door_sensor: DoorSensorConfig = field(default_factory=DoorSensorConfig)
    api: ApiConfig = field(default_factory=ApiConfig)
    autopilot: AutoPilotConfig = field(default_factory=AutoPilotConfig)
    tokens: Dict[str, ClientType] = field(default_factory=dict)
    settings_path: str = "state/settings.json"
    log_level: LogLevel = LogLevel.INFO
