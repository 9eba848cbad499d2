"""Extraction cache factory."""

from typing import Optional

from infrastructure.cache.base import ExtractionCache
from infrastructure.cache.file_cache import FileCache
from infrastructure.cache.null_cache import NullCache
from infrastructure.configuration import settings
from infrastructure.logging import get_module_logger

logger = get_module_logger()


def create_cache(cache_file: Optional[str], version: str) -> ExtractionCache:
    """Create the cache for one extraction run.

    Args:
        cache_file: Cache path prefix. Falls back to settings.cache.file;
            caching is disabled when both are empty.
        version: Tool version and configuration marker.

    Returns:
        FileCache when a path is configured, NullCache otherwise.
    """
    path = cache_file or settings.cache.file
    if not path:
        logger.debug("initialized_extraction_cache", backend="null")
        return NullCache()

    cache = FileCache(path, version=version)
    logger.debug(
        "initialized_extraction_cache",
        backend="file",
        path=str(cache.store_path),
    )
    return cache
