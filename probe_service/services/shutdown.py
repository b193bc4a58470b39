"""
Single termination conduit for the server.

Two sources feed it:
- OS signals (SIGTERM/SIGINT), registered on the event loop by server.serve()
- POST /shutdown, which schedules a delayed SIGTERM to this very process,
  so the HTTP response goes out before the listener starts closing

The server awaits wait() exactly once; only the first trigger counts.
"""
import asyncio
import logging
import os
import signal
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def send_sigterm_to_self():
    """Default signaller: deliver SIGTERM to the current process."""
    os.kill(os.getpid(), signal.SIGTERM)


class ShutdownController:
    """One-shot shutdown trigger shared by signal handlers and the HTTP route."""

    def __init__(self, signaller: Optional[Callable[[], None]] = None):
        self._default_signaller = signaller or send_sigterm_to_self
        self._signaller = self._default_signaller
        self._event = asyncio.Event()
        self._reason: Optional[str] = None
        self._timer: Optional[asyncio.TimerHandle] = None
        self._signal_sent = False

    @property
    def is_triggered(self) -> bool:
        return self._event.is_set()

    @property
    def reason(self) -> Optional[str]:
        return self._reason

    @property
    def is_pending(self) -> bool:
        """True from scheduling the delayed signal until shutdown is triggered."""
        if self._event.is_set():
            return False
        if self._signal_sent:
            return True
        return self._timer is not None and not self._timer.cancelled()

    def trigger(self, reason: str) -> bool:
        """
        Start the shutdown sequence.

        Returns True for the first call, False if shutdown was already triggered.
        """
        if self._event.is_set():
            logger.debug("Shutdown already triggered", extra={"reason": reason, "first_reason": self._reason})
            return False
        self._reason = reason
        self._event.set()
        if self._timer is not None:
            # Shutdown is already under way; the delayed signal would be a second one
            self._timer.cancel()
            self._timer = None
        logger.info("Shutdown triggered", extra={"reason": reason})
        return True

    async def wait(self) -> str:
        """Block until triggered; returns the reason of the first trigger."""
        await self._event.wait()
        return self._reason

    def schedule_signal(self, delay: float) -> bool:
        """
        Send the termination signal to ourselves after `delay` seconds.

        Must be called from a running event loop. Returns False if a signal is
        already pending, already sent, or shutdown has already been triggered.
        Only one self-signal is ever sent per run.
        """
        if self._event.is_set() or self._signal_sent or self.is_pending:
            return False
        loop = asyncio.get_running_loop()
        self._timer = loop.call_later(delay, self._fire)
        logger.info("Shutdown signal scheduled", extra={"delay_seconds": delay})
        return True

    def _fire(self):
        self._timer = None
        if self._event.is_set():
            return
        self._signal_sent = True
        logger.info("Sending termination signal to self", extra={"pid": os.getpid()})
        self._signaller()

    def set_signaller(self, signaller: Callable[[], None]):
        self._signaller = signaller

    def reset(self):
        """Clear all state so the controller can drive another server run."""
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._signal_sent = False
        self._reason = None
        self._event = asyncio.Event()
        self._signaller = self._default_signaller


# Global instance
shutdown_controller = ShutdownController()
