from __future__ import annotations

import asyncio
from typing import Any, Optional

import uvicorn

from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.API)


class APIServerWrapper:
    """
    Runs uvicorn inside our event loop without its own signal handlers,
    so the ShutdownCoordinator stays in charge of stopping.

      - start() launches uvicorn.Server.serve() in the background and blocks
        until stop() is called. Schedule it with create_tracked_task().
      - stop() asks uvicorn to exit, then cancels the serve task if it hangs.
    """

    def __init__(self, app: Any, host: str = "0.0.0.0", port: int = 8000, log_level: str = "info"):
        """
        Args:
            app: ASGI application (FastAPI app wrapped by socketio.ASGIApp)
        """
        self.app = app
        self.host = host
        self.port = port
        self.log_level = log_level
        self._server: Optional[uvicorn.Server] = None
        self._serve_task: Optional[asyncio.Task] = None
        self._stop_event = asyncio.Event()

    def _create_server(self) -> uvicorn.Server:
        config = uvicorn.Config(
            app=self.app,
            host=self.host,
            port=self.port,
            loop="asyncio",
            log_level=self.log_level,
            access_log=False,
            server_header=False,
        )
        server = uvicorn.Server(config)
        server.install_signal_handlers = lambda: None  # type: ignore
        return server

    async def start(self, *, wait_started_timeout: float = 5.0) -> None:
        if self.is_running:
            raise RuntimeError("API server already started")

        self._server = self._create_server()
        self._stop_event.clear()

        log.info("Launching API server", url=f"http://{self.host}:{self.port}")
        self._serve_task = asyncio.create_task(self._server.serve(), name="uvicorn.serve")
        await self._wait_started(self._server, self._serve_task, wait_started_timeout)

        try:
            await self._stop_event.wait()
        except asyncio.CancelledError:
            await self.stop()
            raise

    async def _wait_started(self, server: uvicorn.Server, task: asyncio.Task, timeout: float) -> None:
        """Poll server.started; raise if serve() ends first (port already bound)"""
        loop = asyncio.get_running_loop()
        deadline = loop.time() + timeout
        while not task.done() and loop.time() < deadline:
            if server.started:
                log.info("API server listening", port=self.port)
                return
            await asyncio.sleep(0.05)

        if task.done() and not task.cancelled():
            exc = task.exception()
            raise exc if exc is not None else RuntimeError(f"API server exited during startup (port {self.port} in use?)")

    async def stop(self, *, shutdown_timeout: float = 2.0) -> None:
        self._stop_event.set()

        server, task = self._server, self._serve_task
        self._server = None
        self._serve_task = None

        if server is None or task is None or task.done():
            log.debug("API server stop() called but server was not running")
            return

        log.info("Stopping API server...")
        server.should_exit = True
        server.force_exit = True

        try:
            await asyncio.wait_for(asyncio.shield(task), timeout=shutdown_timeout)
        except asyncio.TimeoutError:
            log.warn("API server did not exit in time, cancelling serve task")
            task.cancel()
            await asyncio.gather(task, return_exceptions=True)

        log.info("API server stopped and port released")

    @property
    def is_running(self) -> bool:
        return self._serve_task is not None and not self._serve_task.done()
