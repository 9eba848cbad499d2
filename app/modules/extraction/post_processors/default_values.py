"""Default value strategies for untranslated keys.

An untranslated key has the empty string as its value. The "initial"
strategies only fill in keys that are new in this run; a key already in
the previous output keeps its empty value so that a deliberate blank is
not overwritten on every run.
"""

from abc import abstractmethod
from typing import Optional

from infrastructure.i18n import TranslationEntry, TranslationSet
from modules.extraction.post_processors.base import PostProcessor


class KeyAsDefaultValuePostProcessor(PostProcessor):
    """Use the key itself as the value of every untranslated key."""

    name = "key_as_default_value"

    def process(
        self,
        draft: TranslationSet,
        extracted: TranslationSet,
        existing: TranslationSet,
    ) -> TranslationSet:
        def fill(key: str, entry: TranslationEntry) -> TranslationEntry:
            return entry.with_value(key) if entry.value == "" else entry

        return draft.map(fill)


class _NewKeyDefaultValuePostProcessor(PostProcessor):
    """Fill untranslated keys absent from the previous output."""

    @abstractmethod
    def default_for(self, key: str) -> Optional[str]:
        """Value given to a new untranslated key.

        Args:
            key: The translation key.

        Returns:
            Replacement value, possibly None.
        """
        pass

    def process(
        self,
        draft: TranslationSet,
        extracted: TranslationSet,
        existing: TranslationSet,
    ) -> TranslationSet:
        def fill(key: str, entry: TranslationEntry) -> TranslationEntry:
            if entry.value == "" and key not in existing:
                return entry.with_value(self.default_for(key))
            return entry

        return draft.map(fill)


class KeyAsInitialDefaultValuePostProcessor(_NewKeyDefaultValuePostProcessor):
    """Use the key as the value of new untranslated keys."""

    name = "key_as_initial_default_value"

    def default_for(self, key: str) -> Optional[str]:
        return key


class NullAsDefaultValuePostProcessor(_NewKeyDefaultValuePostProcessor):
    """Mark new untranslated keys with None instead of ''."""

    name = "null_as_default_value"

    def default_for(self, key: str) -> Optional[str]:
        return None


class StringAsDefaultValuePostProcessor(_NewKeyDefaultValuePostProcessor):
    """Use a fixed string as the value of new untranslated keys.

    Args:
        default_value: Value given to each new key.
    """

    name = "string_as_default_value"

    def __init__(self, default_value: str):
        self.default_value = default_value

    def default_for(self, key: str) -> Optional[str]:
        return self.default_value

    def __repr__(self) -> str:
        return f"StringAsDefaultValuePostProcessor(default_value={self.default_value!r})"
