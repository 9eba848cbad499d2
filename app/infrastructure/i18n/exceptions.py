"""Exceptions raised by the i18n data model and output codecs."""

from typing import Optional


class TranslationError(Exception):
    """Base exception for translation data errors.

    Example:
        try:
            codec.parse(text)
        except TranslationError as e:
            logger.error("translation_error", error=str(e))
    """

    pass


class CodecError(TranslationError):
    """Text could not be parsed by an output codec.

    Attributes:
        source: Name of the parsed document (usually a file path).
    """

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source


class UnknownFormatError(TranslationError):
    """Requested output format has no codec."""

    pass
