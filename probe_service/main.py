import os
from typing import Optional
from fastapi import FastAPI
from probe_service.api import health, root, shutdown
from probe_service.core.config import Settings, settings as default_settings
from probe_service.core.logging import setup_logging
from probe_service.services.liveness import LivenessState
import logging

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the service; optional routes follow the feature switches in settings."""
    settings = settings or default_settings
    setup_logging(settings)

    app = FastAPI(title=settings.APP_NAME)
    app.state.settings = settings
    app.state.liveness_toggle_enabled = settings.LIVENESS_TOGGLE_ENABLED
    app.state.liveness = LivenessState()

    @app.on_event("startup")
    async def startup_event():
        logger.info(
            "Starting service",
            extra={
                "env": settings.ENV,
                "pid": os.getpid(),
                "liveness_toggle": settings.LIVENESS_TOGGLE_ENABLED,
                "shutdown_endpoint": settings.SHUTDOWN_ENDPOINT_ENABLED,
            },
        )

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("Shutting down service", extra={"env": settings.ENV, "pid": os.getpid()})

    app.include_router(root.router)
    app.include_router(health.router)
    if settings.LIVENESS_TOGGLE_ENABLED:
        app.include_router(health.toggle_router)
    if settings.SHUTDOWN_ENDPOINT_ENABLED:
        app.include_router(shutdown.router)
    return app


app = create_app()
