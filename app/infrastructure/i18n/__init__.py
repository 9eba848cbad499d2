"""i18n system - translation data model and output formats.

Provides the immutable translation set used by the extraction engine,
locale-aware key ordering, and the codecs that read and write output files.

Main components:
- models: TranslationEntry, TranslationSet
- collation: SortSensitivity and collation_key for sorting keys
- codecs: TranslationCodec, JsonCodec, NamespacedJsonCodec, PoCodec
- factory: OutputFormat and create_codec
- exceptions: TranslationError, CodecError, UnknownFormatError
"""

from infrastructure.i18n.codecs import (
    JsonCodec,
    NamespacedJsonCodec,
    PoCodec,
    TranslationCodec,
)
from infrastructure.i18n.collation import SortSensitivity, collation_key
from infrastructure.i18n.exceptions import (
    CodecError,
    TranslationError,
    UnknownFormatError,
)
from infrastructure.i18n.factory import OutputFormat, create_codec
from infrastructure.i18n.models import TranslationEntry, TranslationSet

__all__ = [
    "TranslationEntry",
    "TranslationSet",
    "SortSensitivity",
    "collation_key",
    "TranslationCodec",
    "JsonCodec",
    "NamespacedJsonCodec",
    "PoCodec",
    "OutputFormat",
    "create_codec",
    "TranslationError",
    "CodecError",
    "UnknownFormatError",
]
