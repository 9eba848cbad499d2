"""Extractor interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from infrastructure.i18n import TranslationSet
from modules.extraction.template import TemplateParser, extract_inline_template, is_component_path
from modules.extraction.template.nodes import Node


class Extractor(ABC):
    """Finds translation keys in one source file.

    Attributes:
        name: Short identifier used in logs.
    """

    name: str = "extractor"

    @abstractmethod
    def extract(self, source: str, file_path: str) -> Optional[TranslationSet]:
        """Extract translation keys from a file.

        Args:
            source: File contents.
            file_path: Path recorded as the keys' source file.

        Returns:
            TranslationSet of found keys (possibly empty), or None if the
            extractor does not apply to this file.
        """
        pass


class TemplateExtractor(Extractor):
    """Base for extractors that work on component templates.

    Markup files are parsed as a whole; component scripts contribute their
    inline `template:` string.
    """

    def __init__(self, template_parser: Optional[TemplateParser] = None):
        self.template_parser = template_parser or TemplateParser()

    def parse_template(self, source: str, file_path: str) -> Optional[List[Node]]:
        """Parse the template of a file.

        Returns:
            Template nodes, or None for a script without an inline template.
        """
        if is_component_path(file_path):
            source = extract_inline_template(source)
            if not source:
                return None
        return self.template_parser.parse(source)
