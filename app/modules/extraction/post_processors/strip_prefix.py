"""Remove a common prefix from keys."""

from infrastructure.i18n import TranslationSet
from modules.extraction.post_processors.base import PostProcessor


class StripPrefixPostProcessor(PostProcessor):
    """Strip a case-insensitive literal prefix from every key that has it.

    When two keys strip to the same key, the later one wins.

    Args:
        prefix: Prefix to remove, e.g. "APP.".
    """

    name = "strip_prefix"

    def __init__(self, prefix: str):
        self.prefix = prefix

    def process(
        self,
        draft: TranslationSet,
        extracted: TranslationSet,
        existing: TranslationSet,
    ) -> TranslationSet:
        return draft.strip_key_prefix(self.prefix)

    def __repr__(self) -> str:
        return f"StripPrefixPostProcessor(prefix={self.prefix!r})"
