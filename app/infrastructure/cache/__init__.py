"""Content-addressed extraction cache.

Main components:
- base: ExtractionCache interface and CacheError
- file_cache: FileCache persisted as a JSON document
- null_cache: NullCache used when caching is disabled
- key_builder: FingerprintBuilder for cache lookups
- factory: create_cache
"""

from infrastructure.cache.base import CacheError, CacheResult, ExtractionCache
from infrastructure.cache.factory import create_cache
from infrastructure.cache.file_cache import FileCache
from infrastructure.cache.key_builder import FingerprintBuilder
from infrastructure.cache.null_cache import NullCache

__all__ = [
    "CacheError",
    "CacheResult",
    "ExtractionCache",
    "FileCache",
    "NullCache",
    "FingerprintBuilder",
    "create_cache",
]
