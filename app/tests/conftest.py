"""Shared fixtures for the translation extractor test suite."""

import sys
from pathlib import Path

import pytest

# Make the application root importable when pytest is run without the
# project configuration (e.g. from inside app/).
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import structlog  # noqa: E402

from infrastructure.configuration import Settings  # noqa: E402
from tests.factories.i18n import make_translation_set  # noqa: E402


@pytest.fixture(autouse=True)
def clear_log_context():
    """Keep run context from leaking between tests."""
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def test_settings():
    """Settings built from defaults only, ignoring the environment file."""
    return Settings(_env_file=None)


@pytest.fixture
def sample_translations():
    """Small translation set with a translated and an untranslated key."""
    return make_translation_set(
        {"home.title": "Home", "home.subtitle": ""},
        source_file="src/app/home.component.html",
    )


@pytest.fixture
def write_files(tmp_path):
    """Write a mapping of relative paths to contents below tmp_path.

    Returns:
        Function taking the mapping and returning tmp_path.
    """

    def _write(files):
        for relative, contents in files.items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(contents, encoding="utf-8")
        return tmp_path

    return _write
