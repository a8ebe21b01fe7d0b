"""
Logging Configuration

Provides:
- CustomJsonFormatter: one JSON object per log record, carrying the invocation context
- setup_logging: YAML based logging initialization
"""

import json
import logging
import logging.config
import os
import string
from datetime import datetime, timezone

import yaml

from . import request_context

_STANDARD_ATTRS = {
    "args",
    "asctime",
    "created",
    "exc_info",
    "exc_text",
    "filename",
    "funcName",
    "levelname",
    "levelno",
    "lineno",
    "module",
    "msecs",
    "message",
    "msg",
    "name",
    "pathname",
    "process",
    "processName",
    "relativeCreated",
    "stack_info",
    "taskName",
    "thread",
    "threadName",
}


class CustomJsonFormatter(logging.Formatter):
    """
    JSON Formatter for runtime logs.

    Fields:
      - _time: ISO8601 timestamp (millisecond precision)
      - level: Log level
      - logger: Logger name (e.g. lambda_runtime.runtime_client)
      - message: Log message
      - aws_request_id: Request ID of the invocation being processed
      - trace_id: X-Ray trace header of the invocation being processed
    """

    def format(self, record: logging.LogRecord) -> str:
        request_id = getattr(record, "aws_request_id", None) or request_context.get_request_id()
        trace_id = getattr(record, "trace_id", None) or request_context.get_trace_id()

        log_data = {
            "_time": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(
                timespec="milliseconds"
            ),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if request_id:
            log_data["aws_request_id"] = request_id
        if trace_id:
            log_data["trace_id"] = trace_id

        # Include extra fields
        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS and not key.startswith("_") and key not in log_data:
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging(config_path: str, log_level: str = None) -> None:
    """
    Load the YAML config, substitute environment variables, and initialize logging.

    Args:
        config_path: Path of the logging YAML file
        log_level: Value for ${LOG_LEVEL}; falls back to the environment, then INFO
    """
    level = (log_level or os.environ.get("LOG_LEVEL") or "INFO").upper()

    if not os.path.exists(config_path):
        logging.basicConfig(level=level)
        return

    with open(config_path, "r", encoding="utf-8") as f:
        # Supports ${LOG_LEVEL} format.
        template = string.Template(f.read())

    mapping = os.environ.copy()
    mapping["LOG_LEVEL"] = level

    content = template.safe_substitute(mapping)
    config = yaml.safe_load(content)
    logging.config.dictConfig(config)
