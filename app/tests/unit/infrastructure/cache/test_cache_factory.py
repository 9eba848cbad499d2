"""Unit tests for infrastructure.cache.factory."""

import pytest

from infrastructure.cache import FileCache, NullCache, create_cache


@pytest.mark.unit
class TestCreateCache:
    """Test suite for create_cache."""

    def test_no_path_returns_null_cache(self, monkeypatch):
        """Caching is disabled without a cache file."""
        monkeypatch.setattr("infrastructure.cache.factory.settings.cache.file", "")

        assert isinstance(create_cache(None, "1"), NullCache)

    def test_path_returns_file_cache(self, tmp_path):
        """A cache file enables the file cache."""
        cache = create_cache(str(tmp_path / "i18n"), "1.0.0")

        assert isinstance(cache, FileCache)
        assert cache.version == "1.0.0"
        assert str(cache.store_path).startswith(str(tmp_path / "i18n"))

    def test_settings_fallback(self, monkeypatch, tmp_path):
        """The configured cache file is used when none is passed."""
        monkeypatch.setattr(
            "infrastructure.cache.factory.settings.cache.file", str(tmp_path / "default")
        )

        cache = create_cache(None, "1")

        assert isinstance(cache, FileCache)
        assert str(cache.store_path).startswith(str(tmp_path / "default"))
