"""Run context binding for structured logging.

This module provides utilities for binding run-scoped context to logs,
so every entry written during one extraction run carries the same run ID
and run metadata.

Usage:
    from infrastructure.logging import bind_run_context

    with bind_run_context(output_count=2):
        # All logs within this block will include the context
        logger.info("extraction_started")

Dependencies:
    - structlog.contextvars
"""

import uuid
from contextlib import contextmanager
from typing import Any, Generator, Optional

import structlog


@contextmanager
def bind_run_context(
    run_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[None, None, None]:
    """Bind run-scoped context to all logs within the context manager.

    Args:
        run_id: Unique run identifier. Auto-generated if not provided.
        **extra_context: Additional key-value pairs to include in logs.
            None values are skipped.

    Yields:
        None - context is automatically bound to structlog's context vars.

    Example:
        with bind_run_context(input_count=len(inputs), replace=True):
            task.execute()
    """
    context: dict[str, Any] = {"run_id": run_id or str(uuid.uuid4())}
    context.update({k: v for k, v in extra_context.items() if v is not None})

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_run_id() -> Optional[str]:
    """Get the current run ID from the logging context.

    Returns:
        The run ID if set, None otherwise.
    """
    ctx = structlog.contextvars.get_contextvars()
    return ctx.get("run_id")


def clear_run_context() -> None:
    """Clear all run-scoped context from the logging context."""
    structlog.contextvars.clear_contextvars()
