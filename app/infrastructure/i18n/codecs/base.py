"""Output codec interface.

Defines the narrow contract between the extraction engine and the on-disk
translation formats.
"""

from abc import ABC, abstractmethod
from typing import Optional

from infrastructure.i18n.models import TranslationSet


class TranslationCodec(ABC):
    """Abstract base for output codecs.

    Implementations turn a TranslationSet into file contents and parse an
    existing output file back into a TranslationSet.

    Attributes:
        extension: File extension used when the output path is a directory.
    """

    extension: str = ""

    @abstractmethod
    def parse(self, text: str, source: Optional[str] = None) -> TranslationSet:
        """Parse file contents into a translation set.

        Args:
            text: File contents.
            source: Name of the document, used in error messages.

        Returns:
            Parsed TranslationSet.

        Raises:
            CodecError: If the text is not valid for this format.
        """
        pass

    @abstractmethod
    def compile(self, translations: TranslationSet) -> str:
        """Serialize a translation set to file contents.

        Args:
            translations: Set to serialize.

        Returns:
            File contents.
        """
        pass
