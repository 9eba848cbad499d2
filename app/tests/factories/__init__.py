"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    make_entry,
    make_translation_set,
)

__all__ = [
    "make_entry",
    "make_translation_set",
]
