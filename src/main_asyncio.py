"""
main_asyncio.py: application entry point for the light fixture controller
-------------------------------------------------------------------------

Responsible for:
- loading configuration and persisted settings
- wiring device, door sensor, controller and API (Dependency Injection)
- starting the async main loop
- graceful shutdown on Ctrl+C, SIGTERM or a failed critical task
"""

import asyncio
import sys
from pathlib import Path

# Set UTF-8 encoding for output before logging starts (Raspberry Pi consoles)
if hasattr(sys.stdout, 'reconfigure') and sys.stdout.encoding != 'UTF-8':
    sys.stdout.reconfigure(encoding='utf-8')  # type: ignore

from animations.autopilot import AutoPilot
from api.main import create_app
from api.socketio.registry import register_socketio
from api.socketio.server import create_socketio_server, wrap_app_with_socketio
from audio.spectrum_analyser import SpectrumAudioAnalyser
from controllers.light_controller import LightController
from hardware.gpio.gpio_manager_factory import create_gpio_manager
from hardware.input.door_sensor import DoorSensor
from hardware.light.device_factory import create_light_device
from lifecycle import ShutdownCoordinator, TaskCategory, create_tracked_task
from lifecycle.api_server_wrapper import APIServerWrapper
from lifecycle.handlers import (
    APIServerShutdownHandler,
    GPIOShutdownHandler,
    LightControllerShutdownHandler,
    TaskCancellationHandler,
)
from managers import ConfigManager
from models.enums import LogCategory
from services import EventBus, ServiceContainer, SettingsService
from services.middleware import log_middleware
from utils.logger import configure_logger, get_logger

log = get_logger().for_category(LogCategory.SYSTEM)

SRC_DIR = Path(__file__).resolve().parent


async def main():
    """Main async entry point (dependency injection and event loop startup)."""

    log.info("Starting light fixture controller...")

    # ========================================================================
    # 1. CONFIGURATION
    # ========================================================================

    config = ConfigManager().load()
    configure_logger(config.log_level)

    event_bus = EventBus()
    event_bus.add_middleware(log_middleware)

    settings_path = Path(config.settings_path)
    if not settings_path.is_absolute():
        settings_path = SRC_DIR / settings_path
    settings = SettingsService(settings_path)
    await settings.load()

    # ========================================================================
    # 2. HARDWARE
    # ========================================================================

    gpio_manager = create_gpio_manager()
    device = create_light_device(config.device, event_bus, gpio_manager)

    door_sensor = None
    if config.door_sensor.enabled:
        door_sensor = DoorSensor(gpio_manager, config.door_sensor, event_bus)

    # ========================================================================
    # 3. CONTROLLER
    # ========================================================================

    controller = LightController(
        device=device,
        event_bus=event_bus,
        settings=settings,
        timing=config.timing,
        autopilot=AutoPilot(config.autopilot),
        audio=SpectrumAudioAnalyser(),
    )
    await controller.setup()

    services = ServiceContainer(
        config=config,
        event_bus=event_bus,
        settings=settings,
        device=device,
        controller=controller,
    )

    # ========================================================================
    # 4. API (FastAPI + Socket.IO)
    # ========================================================================

    app = create_app(services, cors_origins=config.api.cors_origins)
    sio = create_socketio_server(config.api.cors_origins)
    register_socketio(sio, services)

    api_wrapper = APIServerWrapper(
        wrap_app_with_socketio(app, sio),
        host=config.api.host,
        port=config.api.port,
    )
    api_task = create_tracked_task(
        api_wrapper.start(),
        category=TaskCategory.API,
        description="FastAPI/Socket.IO Server",
    )

    # ========================================================================
    # 5. DEVICE + SENSORS
    # ========================================================================

    # Connecting publishes DeviceConnectedEvent -> intro -> tick loop
    await device.start()

    if door_sensor is not None:
        create_tracked_task(
            door_sensor.run(),
            category=TaskCategory.INPUT,
            description="Door sensor polling",
        )

    # ========================================================================
    # 6. SHUTDOWN COORDINATOR
    # ========================================================================

    coordinator = ShutdownCoordinator()
    coordinator.register(LightControllerShutdownHandler(controller, device, settings))
    coordinator.register(APIServerShutdownHandler(api_wrapper))
    coordinator.register(TaskCancellationHandler(exclude=[api_task]))
    coordinator.register(GPIOShutdownHandler(gpio_manager))

    coordinator.setup_signal_handlers(asyncio.get_running_loop())

    log.info("Application initialized. Waiting for exit signal...")
    await coordinator.wait_for_shutdown()
    await coordinator.shutdown_all()
    log.info("Shut down cleanly.")


# ---------------------------------------------------------------------------
# ENTRY POINT
# ---------------------------------------------------------------------------

def run():
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        log.info("Keyboard interrupt received")


if __name__ == "__main__":
    run()
