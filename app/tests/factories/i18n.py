"""Test data factories for translation sets.

Provides deterministic builders for:
- TranslationEntry
- TranslationSet
"""

from typing import Dict, Iterable, Optional

from infrastructure.i18n import TranslationEntry, TranslationSet


def make_entry(value: Optional[str] = "", source_files: Iterable[str] = ()) -> TranslationEntry:
    """Create a TranslationEntry instance.

    Args:
        value: Translation value ('' for untranslated, None for null).
        source_files: Files that produced the key.

    Returns:
        TranslationEntry instance.
    """
    return TranslationEntry(value=value, source_files=tuple(source_files))


def make_translation_set(
    values: Optional[Dict[str, Optional[str]]] = None,
    source_file: Optional[str] = None,
) -> TranslationSet:
    """Create a TranslationSet from a key to value mapping.

    Args:
        values: Keys and values, in order. Defaults to two untranslated keys.
        source_file: Source file recorded on every entry.

    Returns:
        TranslationSet instance.
    """
    if values is None:
        values = {"app.title": "", "app.description": ""}
    sources = (source_file,) if source_file else ()
    return TranslationSet.from_flat_mapping(values, source_files=sources)
