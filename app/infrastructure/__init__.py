"""Infrastructure modules for the translation extractor.

Centralized infrastructure components:
- configuration: Settings management (settings, ExtractionSettings, CacheSettings)
- logging: Structured logging (configure_logging, get_module_logger)
- i18n: Translation set data model, collation and output codecs
- cache: Content-addressed extraction cache
"""

# Configuration
from infrastructure.configuration import settings

__all__ = ["settings"]
