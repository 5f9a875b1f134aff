"""
Logging setup for the assessment form service.

Configures the ``assessment_forms`` logger from LoggingSettings. Only the
service layer (app lifespan, routers) logs; domain and application code
raise typed errors instead.
"""

import json
import logging

from .config import LoggingSettings

LOGGER_NAME = "assessment_forms"

TEXT_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class JsonFormatter(logging.Formatter):
    """One JSON object per log line."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload)


def configure_logging(log_settings: LoggingSettings) -> logging.Logger:
    """Attach handlers to the service logger. Safe to call more than once."""
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(log_settings.level)

    formatter: logging.Formatter
    if log_settings.format == "json":
        formatter = JsonFormatter()
    else:
        formatter = logging.Formatter(TEXT_FORMAT)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)

    if log_settings.file_path:
        file_handler = logging.FileHandler(log_settings.file_path)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
