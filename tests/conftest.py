"""Pytest fixtures for probe-service tests."""

import socket

import pytest
from fastapi.testclient import TestClient

from probe_service.core.config import Settings
from probe_service.main import create_app
from probe_service.services.shutdown import shutdown_controller


def free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture(autouse=True)
def reset_global_state():
    """The shutdown conduit is process-wide; start every test clean."""
    shutdown_controller.reset()
    yield
    shutdown_controller.reset()


@pytest.fixture
def signals_sent(reset_global_state):
    """Replace the self-SIGTERM with a recorder so no test signals the test process."""
    sent = []
    shutdown_controller.set_signaller(lambda: sent.append("SIGTERM"))
    return sent


@pytest.fixture
def settings() -> Settings:
    return Settings(
        _env_file=None,
        HOST="127.0.0.1",
        PORT=free_port(),
        ENV_VAR_NAME="PROBE_SERVICE_TEST_ENV",
        SHUTDOWN_DELAY_SECONDS=0.2,
        SHUTDOWN_TIMEOUT_SECONDS=2.0,
        HEALTHCHECK_TIMEOUT_SECONDS=1.0,
    )


@pytest.fixture
def client(settings: Settings):
    with TestClient(create_app(settings)) as c:
        yield c
