"""Structured JSON logging for the API process."""

import json
import logging
import sys
from datetime import datetime, timezone


class StructuredFormatter(logging.Formatter):
    """Render log records as single-line JSON documents."""

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": self.service_name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__ if record.exc_info[0] else None,
                "message": str(record.exc_info[1]) if record.exc_info[1] else None,
                "traceback": self.formatException(record.exc_info),
            }

        # Fields passed as extra={"extra_<name>": ...} are lifted to the top level
        for key, value in record.__dict__.items():
            if key.startswith("extra_"):
                log_data[key.removeprefix("extra_")] = value

        return json.dumps(log_data, default=str)


def configure_logging(service_name: str, level: str = "INFO") -> None:
    """Install the JSON handler on the root logger.

    Args:
        service_name: Value of the ``service`` field on every record
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(StructuredFormatter(service_name))

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    for existing in list(root_logger.handlers):
        if isinstance(existing.formatter, StructuredFormatter):
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)

    # Silence noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
