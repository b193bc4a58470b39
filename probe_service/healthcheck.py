"""
Health check mode: probe the liveness endpoint of a running instance.

Meant for container HEALTHCHECK instructions, where the image carries no curl.
"""
import logging
from typing import Optional
import httpx
from probe_service.core.config import Settings
from probe_service.core.errors import HealthCheckError

logger = logging.getLogger(__name__)

LIVENESS_PATH = "/health/liveness"


def liveness_url(settings: Settings) -> str:
    return f"http://{settings.HEALTHCHECK_HOST}:{settings.PORT}{LIVENESS_PATH}"


def check_liveness(
    settings: Settings,
    url: Optional[str] = None,
    transport: Optional[httpx.BaseTransport] = None,
) -> int:
    """
    GET the liveness endpoint once.

    Returns the status code (200); raises HealthCheckError on a transport
    failure or any other status code. No retries.
    """
    url = url or liveness_url(settings)
    try:
        with httpx.Client(timeout=httpx.Timeout(settings.HEALTHCHECK_TIMEOUT_SECONDS), transport=transport) as client:
            response = client.get(url)
    except httpx.HTTPError as e:
        raise HealthCheckError(f"Health check request failed: {e}") from e

    if response.status_code != 200:
        raise HealthCheckError(f"Health check failed: {url} returned {response.status_code}")

    logger.info("Health check passed", extra={"url": url, "status_code": response.status_code})
    return response.status_code


def run_healthcheck(settings: Settings, url: Optional[str] = None) -> int:
    """CLI wrapper around check_liveness: 0 when healthy, 1 otherwise."""
    try:
        check_liveness(settings, url=url)
    except HealthCheckError as e:
        logger.critical(str(e), extra={"url": url or liveness_url(settings)})
        return 1
    return 0
