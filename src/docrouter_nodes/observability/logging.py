"""Structured JSON logging with node execution context."""
import logging
import sys
from typing import Any, TextIO

from pythonjsonlogger import jsonlogger

from docrouter_nodes.config import get_settings

CONTEXT_FIELDS = ("node_type", "operation", "item_index", "organization_id")


class NodeContextFilter(logging.Filter):
    """Add node execution context to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Add default context fields if not present."""
        for field in CONTEXT_FIELDS:
            if not hasattr(record, field):
                setattr(record, field, None)
        return True


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with standardized field names."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        """Add custom fields to the log record."""
        super().add_fields(log_record, record, message_dict)

        if "timestamp" not in log_record:
            log_record["timestamp"] = self.formatTime(record, self.datefmt)

        log_record["level"] = record.levelname
        log_record["logger"] = record.name

        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_record[field] = value
            else:
                log_record.pop(field, None)


def setup_logging(stream: TextIO | None = None) -> None:
    """Configure logging for node execution (JSON unless disabled).

    Args:
        stream: Where log lines go (stdout by default)
    """
    settings = get_settings()

    handler = logging.StreamHandler(stream or sys.stdout)

    if settings.log_json:
        formatter: logging.Formatter = CustomJsonFormatter(
            "%(timestamp)s %(level)s %(name)s %(message)s",
            datefmt="%Y-%m-%dT%H:%M:%S",
        )
    else:
        formatter = logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")
    handler.setFormatter(formatter)

    handler.addFilter(NodeContextFilter())

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(settings.log_level)

    # Reduce noise from third-party libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def node_context(
    node_type: str | None = None,
    operation: str | None = None,
    item_index: int | None = None,
    organization_id: str | None = None,
    **kwargs: Any,
) -> dict[str, Any]:
    """
    Create an extra dict with node context for logging.

    Returns:
        Dict to pass as extra parameter to logger methods
    """
    extra = kwargs.copy()
    if node_type:
        extra["node_type"] = node_type
    if operation:
        extra["operation"] = operation
    if item_index is not None:
        extra["item_index"] = item_index
    if organization_id:
        extra["organization_id"] = organization_id
    return extra
