import logging
import sys
from typing import Optional
from pythonjsonlogger import jsonlogger
from probe_service.core.config import Settings, settings as default_settings

_HANDLER_NAME = "probe-service-json"


def setup_logging(settings: Optional[Settings] = None):
    settings = settings or default_settings
    root_logger = logging.getLogger()
    root_logger.setLevel(settings.LOG_LEVEL.upper())

    # Called from both the CLI and the app factory; install the handler once
    if any(h.get_name() == _HANDLER_NAME for h in root_logger.handlers):
        return

    log_handler = logging.StreamHandler(sys.stdout)
    log_handler.set_name(_HANDLER_NAME)

    formatter = jsonlogger.JsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s"
    )

    log_handler.setFormatter(formatter)
    root_logger.addHandler(log_handler)
