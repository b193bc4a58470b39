import logging
from fastapi import APIRouter, Request
from probe_service.services.shutdown import shutdown_controller

router = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/shutdown")
async def shutdown(request: Request):
    """
    Acknowledge immediately, then terminate gracefully.

    The termination signal is sent after SHUTDOWN_DELAY_SECONDS so this
    response reaches the client before the listener stops accepting
    connections. Repeated calls are acknowledged but schedule nothing new.
    """
    delay = request.app.state.settings.SHUTDOWN_DELAY_SECONDS
    scheduled = shutdown_controller.schedule_signal(delay)
    logger.info(
        "Shutdown requested over HTTP",
        extra={"client": request.client.host if request.client else None, "scheduled": scheduled},
    )
    return {"message": "shutting down", "delay_seconds": delay, "scheduled": scheduled}
