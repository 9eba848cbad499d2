"""Extractors: each finds translation keys in one kind of source construct."""

from modules.extraction.extractors.base import Extractor, TemplateExtractor
from modules.extraction.extractors.directive import DirectiveExtractor
from modules.extraction.extractors.function import FunctionExtractor
from modules.extraction.extractors.marker import MarkerExtractor
from modules.extraction.extractors.pipe import PipeExtractor
from modules.extraction.extractors.service import ServiceExtractor

__all__ = [
    "Extractor",
    "TemplateExtractor",
    "DirectiveExtractor",
    "PipeExtractor",
    "MarkerExtractor",
    "FunctionExtractor",
    "ServiceExtractor",
]
