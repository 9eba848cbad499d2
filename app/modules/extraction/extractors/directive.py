"""Directive-style extraction: `<p translate>Key</p>`, `translate="key"`."""

import re
from typing import List, Optional, Sequence

from infrastructure.configuration import settings
from infrastructure.i18n import TranslationSet
from modules.extraction.extractors.base import TemplateExtractor
from modules.extraction.resolvers import resolve_literal_strings
from modules.extraction.template import TemplateParser, iter_nodes
from modules.extraction.template.nodes import Element, Text

WHITESPACE = re.compile(r"\s+")


class DirectiveExtractor(TemplateExtractor):
    """Collect keys from elements carrying a translate attribute.

    Per element, the first source that applies wins:

    1. a plain attribute value: `<p translate="home.title">`
    2. a bound value: `<p [translate]="'home.' + 'title'">`, resolved statically
    3. the element's own text, trimmed with whitespace runs collapsed

    Nested elements carrying the attribute are handled on their own, and
    their text never leaks into the parent's key.

    Example:
        >>> DirectiveExtractor().extract("<p translate>Hello</p>", "a.html").keys()
        ['Hello']
    """

    name = "directive"

    def __init__(
        self,
        attribute_names: Optional[Sequence[str]] = None,
        template_parser: Optional[TemplateParser] = None,
    ):
        super().__init__(template_parser)
        names = attribute_names if attribute_names is not None else settings.extraction.attribute_names
        self.attribute_names = frozenset(name.lower() for name in names)

    def extract(self, source: str, file_path: str) -> Optional[TranslationSet]:
        nodes = self.parse_template(source, file_path)
        if nodes is None:
            return None

        translations = TranslationSet()
        for node in iter_nodes(nodes):
            if isinstance(node, Element):
                translations = translations.add_keys(self._element_keys(node), file_path)
        return translations

    def _element_keys(self, element: Element) -> List[str]:
        for attribute in element.attributes:
            if attribute.name.lower() in self.attribute_names and attribute.value:
                return [attribute.value]

        bindings = [b for b in element.inputs if b.name.lower() in self.attribute_names]
        if bindings:
            return [
                key
                for binding in bindings
                for key in resolve_literal_strings(binding.value)
                if key
            ]

        if not any(a.name.lower() in self.attribute_names for a in element.attributes):
            return []

        text = "".join(child.value for child in element.children if isinstance(child, Text))
        key = WHITESPACE.sub(" ", text).strip()
        return [key] if key else []

