"""Logging infrastructure.

Basic usage:
    from terra_client.infra.logging import set_log_context, setup_logging
    import logging

    setup_logging()
    logger = logging.getLogger(__name__)

    set_log_context(tenant_id="t-1")
    logger.info("Fetching reminders")  # Includes tenant_id
"""

from terra_client.infra.logging.config import configure_logging, setup_logging, shutdown
from terra_client.infra.logging.context import (
    ContextInjectingFilter,
    clear_log_context,
    get_log_context,
    remove_from_log_context,
    set_log_context,
)
from terra_client.infra.logging.formatters import JSONFormatter

__all__ = [
    "ContextInjectingFilter",
    "JSONFormatter",
    "clear_log_context",
    "configure_logging",
    "get_log_context",
    "remove_from_log_context",
    "set_log_context",
    "setup_logging",
    "shutdown",
]
