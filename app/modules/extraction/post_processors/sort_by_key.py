"""Sort keys, optionally with locale-aware collation."""

from typing import Optional, Union

from infrastructure.i18n import SortSensitivity, TranslationSet, collation_key
from modules.extraction.post_processors.base import PostProcessor


class SortByKeyPostProcessor(PostProcessor):
    """Reorder the draft by key.

    Args:
        sensitivity: Collation strength name or SortSensitivity. None
            sorts by code point.

    Raises:
        ValueError: If sensitivity is not a known name.
    """

    name = "sort_by_key"

    def __init__(self, sensitivity: Optional[Union[str, SortSensitivity]] = None):
        self.sensitivity = SortSensitivity.from_string(sensitivity)

    def process(
        self,
        draft: TranslationSet,
        extracted: TranslationSet,
        existing: TranslationSet,
    ) -> TranslationSet:
        return draft.sort(collation_key(self.sensitivity))

    def __repr__(self) -> str:
        return f"SortByKeyPostProcessor(sensitivity={self.sensitivity.value!r})"
