"""
Server lifecycle: bind, serve until the shutdown conduit fires, drain, exit.

uvicorn's own run()/serve() installs its signal handlers; here the loop's
SIGTERM/SIGINT handlers feed the ShutdownController instead, so OS signals and
POST /shutdown end up on the same path. Draining is bounded by
SHUTDOWN_TIMEOUT_SECONDS and exceeding it is fatal.
"""
import asyncio
import logging
import signal
from typing import List, Optional
import uvicorn
from fastapi import FastAPI
from probe_service.core.config import Settings, settings as default_settings
from probe_service.core.errors import (
    ProbeServiceError,
    ServerStartupError,
    ShutdownForcedError,
    ShutdownTimeoutError,
)
from probe_service.core.logging import setup_logging
from probe_service.services.shutdown import ShutdownController, shutdown_controller

logger = logging.getLogger(__name__)

HANDLED_SIGNALS = (signal.SIGTERM, signal.SIGINT)


def _install_signal_handlers(
    loop: asyncio.AbstractEventLoop,
    controller: ShutdownController,
    server: Optional[uvicorn.Server] = None,
) -> List[int]:
    def on_signal(name: str):
        if controller.trigger(name) or server is None:
            return
        # Second signal while draining: stop waiting for in-flight requests
        logger.warning("Termination signal received again, forcing exit", extra={"signal": name})
        server.force_exit = True

    installed = []
    for sig in HANDLED_SIGNALS:
        try:
            loop.add_signal_handler(sig, on_signal, sig.name)
        except (NotImplementedError, OSError, RuntimeError):
            # Not available on Windows or outside the main thread
            logger.warning("Signal handler not installed", extra={"signal": sig.name})
            continue
        installed.append(sig)
    return installed


def _remove_signal_handlers(loop: asyncio.AbstractEventLoop, installed: List[int]):
    for sig in installed:
        loop.remove_signal_handler(sig)


async def _exit_when_triggered(server: uvicorn.Server, controller: ShutdownController):
    reason = await controller.wait()
    logger.info("Stopping listener", extra={"reason": reason})
    server.should_exit = True


async def drain(server: uvicorn.Server, timeout: float):
    """Close listeners and wait for in-flight requests, at most `timeout` seconds."""
    logger.info("Draining in-flight requests", extra={"timeout_seconds": timeout})
    loop = asyncio.get_running_loop()
    deadline = loop.time() + timeout
    task = asyncio.ensure_future(server.shutdown())
    try:
        # Server.shutdown() can keep waiting on open connections after
        # force_exit is set, so watch for it here too
        while not task.done() and not server.force_exit:
            remaining = deadline - loop.time()
            if remaining <= 0:
                server.force_exit = True
                raise ShutdownTimeoutError(
                    f"In-flight requests did not complete within {timeout}s"
                )
            await asyncio.wait({task}, timeout=min(0.1, remaining))
    finally:
        if not task.done():
            task.cancel()
    if server.force_exit:
        raise ShutdownForcedError("Forced exit before in-flight requests completed")
    task.result()
    logger.info("Server stopped cleanly")


async def serve(app: FastAPI, settings: Settings, controller: ShutdownController = shutdown_controller):
    """Run the HTTP listener until the controller is triggered, then drain."""
    config = uvicorn.Config(
        app,
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
    )
    server = uvicorn.Server(config)
    config.load()
    server.lifespan = config.lifespan_class(config)

    loop = asyncio.get_running_loop()
    installed = _install_signal_handlers(loop, controller, server)
    try:
        try:
            await server.startup()
        except SystemExit as e:
            # uvicorn exits on bind errors after logging the OSError
            raise ServerStartupError(
                f"Server failed to start on {settings.HOST}:{settings.PORT}"
            ) from e
        if server.should_exit:
            raise ServerStartupError("Server failed to start: application startup failed")

        logger.info("Server listening on :%s", settings.PORT, extra={"host": settings.HOST, "port": settings.PORT})

        watcher = asyncio.create_task(_exit_when_triggered(server, controller))
        try:
            await server.main_loop()
        finally:
            watcher.cancel()

        await drain(server, settings.SHUTDOWN_TIMEOUT_SECONDS)
    finally:
        _remove_signal_handlers(loop, installed)


def run(settings: Optional[Settings] = None, app: Optional[FastAPI] = None) -> int:
    """Blocking entry point. Returns the process exit code."""
    settings = settings or default_settings
    setup_logging(settings)
    if app is None:
        from probe_service.main import create_app
        app = create_app(settings)

    try:
        asyncio.run(serve(app, settings))
    except ProbeServiceError as e:
        logger.critical(str(e), extra={"error": type(e).__name__, "port": settings.PORT})
        return 1
    return 0
