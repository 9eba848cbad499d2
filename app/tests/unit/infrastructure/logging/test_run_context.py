"""Unit tests for infrastructure.logging.context module.

Tests cover:
- bind_run_context() context manager
- get_run_id()
- clear_run_context()
- Context cleanup on exit and on error
"""

import uuid

import pytest
import structlog

from infrastructure.logging.context import bind_run_context, clear_run_context, get_run_id


@pytest.mark.unit
class TestBindRunContext:
    """Test suite for bind_run_context context manager."""

    def test_auto_generates_run_id(self):
        """Run ID is a fresh UUID if not provided."""
        with bind_run_context():
            run_id = get_run_id()
            assert run_id is not None
            uuid.UUID(run_id)

    def test_uses_provided_run_id(self):
        """Provided run ID is used instead of generating one."""
        with bind_run_context(run_id="run-123"):
            assert get_run_id() == "run-123"

    def test_binds_extra_context(self):
        """Extra keyword arguments are bound to context."""
        with bind_run_context(input_count=2, output_count=1):
            ctx = structlog.contextvars.get_contextvars()
            assert ctx["input_count"] == 2
            assert ctx["output_count"] == 1

    def test_skips_none_values(self):
        """None values are not bound."""
        with bind_run_context(cache_file=None):
            assert "cache_file" not in structlog.contextvars.get_contextvars()

    def test_unbinds_on_exit(self):
        """Context is removed after the block."""
        with bind_run_context(run_id="run-123", input_count=2):
            pass

        ctx = structlog.contextvars.get_contextvars()
        assert "run_id" not in ctx
        assert "input_count" not in ctx

    def test_unbinds_on_error(self):
        """Context is removed even if the block raises."""
        with pytest.raises(RuntimeError):
            with bind_run_context(run_id="run-123"):
                raise RuntimeError("boom")

        assert get_run_id() is None

    def test_keeps_unrelated_context(self):
        """Only the keys bound by the block are removed."""
        structlog.contextvars.bind_contextvars(outer="value")

        with bind_run_context(run_id="run-123"):
            pass

        assert structlog.contextvars.get_contextvars() == {"outer": "value"}


@pytest.mark.unit
class TestRunContextHelpers:
    """Test suite for get_run_id and clear_run_context."""

    def test_get_run_id_without_context(self):
        """No run ID outside a run."""
        assert get_run_id() is None

    def test_clear_run_context(self):
        """All context variables are cleared."""
        structlog.contextvars.bind_contextvars(run_id="run-123", other="x")

        clear_run_context()

        assert structlog.contextvars.get_contextvars() == {}
