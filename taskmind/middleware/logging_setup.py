"""
Logging configuration and setup.
"""
import logging
import sys
from typing import Optional, TextIO

from taskmind.monitoring import get_request_id

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(request_id)s] - %(message)s'


class RequestIDFilter(logging.Filter):
    """Logging filter to add request ID to log records."""

    def filter(self, record):
        """Add request_id to log record, taken from the request context when available."""
        if not hasattr(record, 'request_id'):
            record.request_id = get_request_id() or '-'
        return True


class SafeFormatter(logging.Formatter):
    """Safe formatter that handles missing request_id gracefully."""

    def format(self, record):
        """Format log record, handling missing request_id."""
        if not hasattr(record, 'request_id'):
            record.request_id = '-'
        return super().format(record)


def setup_logging(level: str = "INFO", stream: Optional[TextIO] = None) -> None:
    """
    Configure root logging with request IDs.

    Args:
        level: Log level name
        stream: Output stream; stdio transport passes stderr so stdout stays protocol-only
    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.addFilter(RequestIDFilter())
    handler.setFormatter(SafeFormatter(LOG_FORMAT))

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
