"""Structured logging infrastructure.

This package provides centralized logging configuration and utilities
for the translation extractor using structlog.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_logger(): Get a logger instance with a specific name
    - get_module_logger(): Get a logger for the calling module
    - bind_run_context(): Context manager for run-scoped logging
    - get_run_id(): Get current run ID from context
    - clear_run_context(): Clear all run context

Formatters:
    - add_app_info(): Processor to add app name/version
    - truncate_large_values(): Processor to limit string lengths

Example:
    from infrastructure.logging import (
        configure_logging,
        get_module_logger,
        bind_run_context,
    )

    # At CLI startup
    configure_logging()

    # In a module
    logger = get_module_logger()
    logger.info("module_initialized")

    # Around one extraction run
    with bind_run_context():
        logger.info("extraction_started")
"""

# Core logging setup
from infrastructure.logging.setup import (
    configure_logging,
    get_logger,
    get_module_logger,
)

# Run context binding
from infrastructure.logging.context import (
    bind_run_context,
    get_run_id,
    clear_run_context,
)

# Log formatters/processors
from infrastructure.logging.formatters import (
    add_app_info,
    truncate_large_values,
)

__all__ = [
    # Setup
    "configure_logging",
    "get_logger",
    "get_module_logger",
    # Context
    "bind_run_context",
    "get_run_id",
    "clear_run_context",
    # Formatters
    "add_app_info",
    "truncate_large_values",
]
