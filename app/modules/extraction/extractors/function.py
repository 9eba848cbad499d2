"""Named marker function extraction: `_('key')`."""

from typing import Optional, Pattern, Union

from infrastructure.i18n import TranslationSet
from modules.extraction.extractors.base import Extractor
from modules.extraction.resolvers import resolve_literal_strings
from modules.extraction.typescript import is_script_path, parse_source
from modules.extraction.typescript.queries import (
    find_function_calls,
    find_named_import,
    first_argument,
)


class FunctionExtractor(Extractor):
    """Collect the first argument of calls to a marker function.

    Without a module pattern the function is a global and every direct call
    `name(...)` counts. With a pattern the function must be imported from a
    matching module; calls then go through the local (possibly aliased)
    name, and files without the import are not applicable.

    Args:
        function_name: Marker function name.
        module_pattern: Exact module name, or compiled regex searched in
            import sources.
    """

    name = "function"

    def __init__(
        self,
        function_name: str,
        module_pattern: Optional[Union[str, Pattern[str]]] = None,
    ):
        self.function_name = function_name
        self.module_pattern = module_pattern

    def local_name(self, root) -> Optional[str]:
        """Name the marker is called by in this file, or None if not imported."""
        if self.module_pattern is None:
            return self.function_name
        found = find_named_import(root, self.function_name, self.module_pattern)
        return found[1] if found else None

    def extract(self, source: str, file_path: str) -> Optional[TranslationSet]:
        if not is_script_path(file_path):
            return None
        root = parse_source(source, file_path)
        local_name = self.local_name(root)
        if local_name is None:
            return None
        return self.collect(root, local_name, file_path)

    def collect(self, root, local_name: str, file_path: str) -> TranslationSet:
        """Keys passed to calls of local_name anywhere in the tree."""
        translations = TranslationSet()
        for call in find_function_calls(root, local_name):
            argument = first_argument(call)
            if argument is None:
                continue
            keys = [key for key in resolve_literal_strings(argument) if key]
            translations = translations.add_keys(keys, file_path)
        return translations
