"""Drop keys that are no longer found in the sources."""

from infrastructure.i18n import TranslationSet
from modules.extraction.post_processors.base import PostProcessor


class PurgeObsoleteKeysPostProcessor(PostProcessor):
    """Keep only keys extracted in this run."""

    name = "purge_obsolete_keys"

    def process(
        self,
        draft: TranslationSet,
        extracted: TranslationSet,
        existing: TranslationSet,
    ) -> TranslationSet:
        return draft.intersect(extracted)
