"""Infrastructure configuration module - public API.

This module provides centralized configuration management for the
translation extractor using Pydantic BaseSettings with domain-based
organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    ExtractionSettings: Extractor names and patterns (for testing)
    CacheSettings: Cache store settings (for testing)

Example:
    ```python
    from infrastructure.configuration import settings

    # Access settings
    service_type = settings.extraction.service_type
    cache_suffix = settings.cache.suffix
    ```
"""

from infrastructure.configuration.features import ExtractionSettings
from infrastructure.configuration.infrastructure import CacheSettings
from infrastructure.configuration.settings import Settings, settings

__all__ = ["settings", "Settings", "ExtractionSettings", "CacheSettings"]
