"""Unit tests for infrastructure.logging.formatters module."""

import pytest

from infrastructure.logging.formatters import add_app_info, truncate_large_values


@pytest.mark.unit
class TestAddAppInfo:
    """Test suite for add_app_info processor factory."""

    def test_adds_name_and_version(self):
        """Processor adds app_name and app_version to event dict."""
        processor = add_app_info("translation-extract", "1.0.0")

        result = processor(None, "info", {"event": "extraction_started"})

        assert result == {
            "event": "extraction_started",
            "app_name": "translation-extract",
            "app_version": "1.0.0",
        }

    def test_unknown_version(self):
        """Default version is 'unknown' if not provided."""
        result = add_app_info("translation-extract")(None, "info", {"event": "x"})

        assert result["app_version"] == "unknown"


@pytest.mark.unit
class TestTruncateLargeValues:
    """Test suite for truncate_large_values processor factory."""

    def test_truncates_long_strings(self):
        """Strings over the limit are cut and annotated."""
        processor = truncate_large_values(max_length=10)

        result = processor(None, "debug", {"event": "x", "source": "a" * 25})

        assert result["source"] == "a" * 10 + "...[truncated, 25 chars total]"

    def test_keeps_short_strings_and_other_types(self):
        """Short strings and non-strings are untouched."""
        processor = truncate_large_values(max_length=10)
        event_dict = {"event": "short", "count": 12345678901234, "keys": ["a" * 50]}

        result = processor(None, "debug", dict(event_dict))

        assert result == event_dict

    def test_default_limit(self):
        """The default limit is 500 characters."""
        processor = truncate_large_values()

        result = processor(None, "info", {"ok": "a" * 500, "long": "b" * 501})

        assert result["ok"] == "a" * 500
        assert result["long"].startswith("b" * 500 + "...[truncated")
