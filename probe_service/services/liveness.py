"""
Liveness flag owned by each app instance (app.state.liveness).

GET /health/liveness reports the flag, POST /health/liveness/toggle flips it.
Access goes through the methods below only.
"""
import logging
import threading

logger = logging.getLogger(__name__)


class LivenessState:
    """Lock-guarded boolean telling the orchestrator whether we are alive."""

    def __init__(self, alive: bool = True):
        self._lock = threading.Lock()
        self._alive = alive

    def is_alive(self) -> bool:
        with self._lock:
            return self._alive

    def toggle(self) -> bool:
        """Flip the flag and return the new value."""
        with self._lock:
            self._alive = not self._alive
            alive = self._alive
        logger.info("Liveness toggled", extra={"alive": alive})
        return alive

    def set(self, alive: bool):
        with self._lock:
            self._alive = alive

