"""Post-processors: ordered transforms from the merge draft to the final output."""

from modules.extraction.post_processors.base import PostProcessor
from modules.extraction.post_processors.default_values import (
    KeyAsDefaultValuePostProcessor,
    KeyAsInitialDefaultValuePostProcessor,
    NullAsDefaultValuePostProcessor,
    StringAsDefaultValuePostProcessor,
)
from modules.extraction.post_processors.purge import PurgeObsoleteKeysPostProcessor
from modules.extraction.post_processors.sort_by_key import SortByKeyPostProcessor
from modules.extraction.post_processors.sort_by_original_order import (
    SortByOriginalOrderPostProcessor,
)
from modules.extraction.post_processors.strip_prefix import StripPrefixPostProcessor

__all__ = [
    "PostProcessor",
    "PurgeObsoleteKeysPostProcessor",
    "KeyAsDefaultValuePostProcessor",
    "KeyAsInitialDefaultValuePostProcessor",
    "NullAsDefaultValuePostProcessor",
    "StringAsDefaultValuePostProcessor",
    "StripPrefixPostProcessor",
    "SortByKeyPostProcessor",
    "SortByOriginalOrderPostProcessor",
]
