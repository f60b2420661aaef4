"""
Shutdown coordinator that orchestrates graceful shutdown of all components.

Waits for SIGINT/SIGTERM (or a failed critical task), then runs the
registered shutdown handlers in priority order, each under its own timeout.
"""

import asyncio
import signal
from typing import List, Optional, Set

from lifecycle.shutdown_protocol import IShutdownHandler
from lifecycle.task_registry import TaskCategory, TaskRegistry
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.SHUTDOWN)

# A failure in any of these ends the process
CRITICAL_CATEGORIES: Set[TaskCategory] = {
    TaskCategory.API,
    TaskCategory.HARDWARE,
    TaskCategory.INPUT,
}


class ShutdownCoordinator:
    """
    Example:
        coordinator = ShutdownCoordinator()
        coordinator.register(LightControllerShutdownHandler(controller, device))
        coordinator.register(APIServerShutdownHandler(api_wrapper))
        coordinator.register(GPIOShutdownHandler(gpio_manager))

        coordinator.setup_signal_handlers(loop)
        await coordinator.wait_for_shutdown()
        await coordinator.shutdown_all()
    """

    def __init__(self, timeout_per_handler: float = 5.0, total_timeout: float = 15.0):
        self._handlers: List[IShutdownHandler] = []
        self._shutdown_event = asyncio.Event()
        self._timeout_per_handler = timeout_per_handler
        self._total_timeout = total_timeout
        self.reason: Optional[str] = None

    def register(self, handler: IShutdownHandler) -> None:
        if not hasattr(handler, "shutdown_priority") or not hasattr(handler, "shutdown"):
            raise ValueError(f"Handler {handler} does not implement IShutdownHandler")
        self._handlers.append(handler)
        log.debug(f"Registered shutdown handler: {handler.__class__.__name__}")

    def setup_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        """Install SIGINT (Ctrl+C) and SIGTERM handlers"""
        for sig in (signal.SIGINT, signal.SIGTERM):
            loop.add_signal_handler(sig, lambda s=sig: self.request_shutdown(s.name))
        log.info("Signal handlers installed (SIGINT, SIGTERM)")

    def request_shutdown(self, reason: str) -> None:
        if self.reason is None:
            self.reason = reason
        log.info(f"Shutdown requested: {reason}")
        self._shutdown_event.set()

    async def wait_for_shutdown(self, poll_interval: float = 0.5) -> None:
        """
        Return once shutdown was requested or a critical task failed.

        Critical tasks that finish cleanly are not a reason to stop.
        """
        registry = TaskRegistry.instance()

        while not self._shutdown_event.is_set():
            for record in registry.failed():
                if record.category in CRITICAL_CATEGORIES:
                    log.error(f"Critical task failed: {record.description} ({record.category.name})")
                    self.request_shutdown(f"Task failure: {record.description}")
                    return

            try:
                await asyncio.wait_for(self._shutdown_event.wait(), timeout=poll_interval)
            except asyncio.TimeoutError:
                continue

    async def shutdown_all(self) -> None:
        """Run handlers highest priority first; one failing handler does not stop the rest"""
        log.info(f"Initiating graceful shutdown (reason: {self.reason or 'UNKNOWN'})")

        loop = asyncio.get_running_loop()
        start = loop.time()

        for handler in sorted(self._handlers, key=lambda h: h.shutdown_priority, reverse=True):
            name = handler.__class__.__name__

            elapsed = loop.time() - start
            if elapsed > self._total_timeout:
                log.error(f"Total shutdown timeout exceeded ({elapsed:.1f}s > {self._total_timeout}s)")
                break

            try:
                log.debug(f"Shutting down {name} (priority={handler.shutdown_priority})...")
                await asyncio.wait_for(handler.shutdown(), timeout=self._timeout_per_handler)
                log.debug(f"{name} shutdown complete")
            except asyncio.TimeoutError:
                log.error(f"{name} shutdown timeout ({self._timeout_per_handler}s)")
            except Exception as e:
                log.error(f"Error shutting down {name}", exception=e)

        log.info("Shutdown sequence complete")
