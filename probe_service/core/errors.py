"""Fatal error types. Each one ends the process with a non-zero exit code."""


class ProbeServiceError(Exception):
    """Base class for fatal service errors."""


class ServerStartupError(ProbeServiceError):
    """The listener could not start (e.g. port already in use)."""


class ShutdownTimeoutError(ProbeServiceError):
    """In-flight requests did not drain within the shutdown timeout."""


class HealthCheckError(ProbeServiceError):
    """The liveness endpoint was unreachable or did not answer 200."""


class ShutdownForcedError(ProbeServiceError):
    """A second termination signal arrived while draining; in-flight requests were abandoned."""
