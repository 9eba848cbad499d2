"""Gettext catalog codec built on polib."""

from typing import Optional

import polib

from infrastructure.i18n.codecs.base import TranslationCodec
from infrastructure.i18n.exceptions import CodecError
from infrastructure.i18n.models import TranslationEntry, TranslationSet

PO_METADATA = {
    "MIME-Version": "1.0",
    "Content-Type": "text/plain; charset=utf-8",
    "Content-Transfer-Encoding": "8bit",
}


class PoCodec(TranslationCodec):
    """Gettext catalog output with one entry per key.

    The key is the msgid, the value the msgstr. Source files are kept as
    "#:" reference comments when source_locations is enabled, and are read
    back from them on parse.

    Attributes:
        source_locations: Whether to write reference comments.
    """

    extension = "po"

    def __init__(self, source_locations: bool = True):
        self.source_locations = source_locations

    def parse(self, text: str, source: Optional[str] = None) -> TranslationSet:
        try:
            catalog = polib.pofile(text)
        except (OSError, ValueError) as e:
            raise CodecError(f"Invalid PO catalog in {source or 'document'}: {e}", source) from e

        entries = {}
        for entry in catalog:
            if not entry.msgid or entry.obsolete:
                continue
            entries[entry.msgid] = TranslationEntry(
                value=entry.msgstr,
                source_files=tuple(path for path, _line in entry.occurrences),
            )
        return TranslationSet(entries)

    def compile(self, translations: TranslationSet) -> str:
        catalog = polib.POFile()
        catalog.metadata = dict(PO_METADATA)
        for key, entry in translations.entries.items():
            occurrences = (
                [(path, "") for path in entry.source_files]
                if self.source_locations
                else []
            )
            catalog.append(
                polib.POEntry(msgid=key, msgstr=entry.value or "", occurrences=occurrences)
            )
        return str(catalog)
