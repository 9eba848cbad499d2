"""Factory functions for creating i18n components.

Provides the lookup from a configured output format name to a codec
instance.
"""

from enum import Enum
from typing import Union

import structlog

from infrastructure.i18n.codecs import (
    JsonCodec,
    NamespacedJsonCodec,
    PoCodec,
    TranslationCodec,
)
from infrastructure.i18n.exceptions import UnknownFormatError

logger = structlog.get_logger()


class OutputFormat(str, Enum):
    """Supported output formats."""

    JSON = "json"
    NAMESPACED_JSON = "namespaced-json"
    POT = "pot"


def create_codec(
    output_format: Union[OutputFormat, str] = OutputFormat.JSON,
    indentation: str = "\t",
    po_source_locations: bool = True,
    delimiter: str = ".",
) -> TranslationCodec:
    """Create the codec for an output format.

    Args:
        output_format: Format name or OutputFormat (default: json)
        indentation: Indentation for the JSON formats (default: tab)
        po_source_locations: Whether gettext output lists source files
        delimiter: Key segment separator for namespaced JSON

    Returns:
        TranslationCodec: Codec for the format

    Raises:
        UnknownFormatError: If the format name is not supported

    Usage:
        codec = create_codec("namespaced-json", indentation="  ")
        text = codec.compile(translations)
    """
    try:
        fmt = OutputFormat(output_format)
    except ValueError as e:
        raise UnknownFormatError(f"Unknown output format: {output_format}") from e

    if fmt is OutputFormat.NAMESPACED_JSON:
        codec: TranslationCodec = NamespacedJsonCodec(
            indentation=indentation, delimiter=delimiter
        )
    elif fmt is OutputFormat.POT:
        codec = PoCodec(source_locations=po_source_locations)
    else:
        codec = JsonCodec(indentation=indentation)

    logger.debug("codec_created", format=fmt.value, codec=type(codec).__name__)
    return codec
