"""Logging configuration for the service."""

import logging
import sys

from accesscontrol.config import Settings
from accesscontrol.request_context import get_correlation_id

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - [%(correlation_id)s] %(message)s"


class CorrelationIdFilter(logging.Filter):
    """Adds ``correlation_id`` to every record ("-" outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id() or "-"
        return True


def setup_logging(settings: Settings) -> None:
    """Configure root logging to stdout.

    DEBUG when settings.debug is set, otherwise settings.log_level.
    """
    level = logging.DEBUG if settings.debug else getattr(
        logging, settings.log_level.upper(), logging.INFO
    )
    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())
    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=[handler], force=True)
