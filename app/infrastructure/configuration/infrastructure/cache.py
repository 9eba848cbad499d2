"""Extraction cache infrastructure settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings


class CacheSettings(InfrastructureSettings):
    """Extraction cache configuration.

    Environment Variables:
        EXTRACT_CACHE_FILE: Default cache path prefix (empty disables caching)
        EXTRACT_CACHE_SUFFIX: Fixed marker appended to the cache path

    Example:
        ```python
        from infrastructure.configuration import settings

        store = f"{cache_file}{settings.cache.suffix}"
        ```
    """

    file: str = Field(default="", alias="EXTRACT_CACHE_FILE")
    suffix: str = Field(
        default="-ngx-translate-extract-cache.json",
        alias="EXTRACT_CACHE_SUFFIX",
    )
