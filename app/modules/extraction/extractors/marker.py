"""Marker import extraction: `marker('key')` and `_('key')`."""

import re
from typing import Optional

from infrastructure.configuration import settings
from infrastructure.i18n import TranslationSet
from modules.extraction.extractors.base import Extractor
from modules.extraction.extractors.function import FunctionExtractor
from modules.extraction.typescript import is_script_path, parse_source


class MarkerExtractor(Extractor):
    """Collect keys marked with the stock marker functions.

    Applies to files importing `marker` from a module matching the marker
    package name, or `_` from the core translation module. The marker
    import wins when a file has both.
    """

    name = "marker"

    def __init__(self):
        extraction = settings.extraction
        self.markers = [
            FunctionExtractor(
                extraction.marker_import, re.compile(extraction.marker_module_pattern)
            ),
            FunctionExtractor(extraction.core_marker_import, extraction.core_marker_module),
        ]

    def extract(self, source: str, file_path: str) -> Optional[TranslationSet]:
        if not is_script_path(file_path):
            return None
        root = parse_source(source, file_path)
        for marker in self.markers:
            local_name = marker.local_name(root)
            if local_name is not None:
                return marker.collect(root, local_name, file_path)
        return None
