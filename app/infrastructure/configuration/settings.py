"""Translation extractor configuration settings - main aggregator."""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Feature settings
from infrastructure.configuration.features import ExtractionSettings

# Infrastructure settings
from infrastructure.configuration.infrastructure import CacheSettings

LOG_FORMATS = ("console", "json")


class Settings(BaseSettings):
    """Translation extractor configuration settings - main aggregator.

    Aggregates all domain-specific settings into a single configuration object.
    Settings are organized by concern:

    - **Features**: What the extractors look for (pipe names, service type, etc.)
    - **Infrastructure**: Core system configurations (cache store)

    Environment Variables:
        LOG_LEVEL: Logging level (DEBUG, INFO, WARNING, ERROR)
        LOG_FORMAT: Log renderer, "console" or "json"

    Example:
        ```python
        from infrastructure.configuration import settings

        pipe_names = settings.extraction.pipe_names
        suffix = settings.cache.suffix

        if settings.json_logs:
            # Machine readable output...
        ```
    """

    # Application-level settings
    LOG_LEVEL: str = "WARNING"
    LOG_FORMAT: str = "console"

    # Feature settings
    extraction: ExtractionSettings

    # Infrastructure settings
    cache: CacheSettings

    @field_validator("LOG_FORMAT")
    @classmethod
    def _validate_log_format(cls, v: str) -> str:
        """Reject unknown log renderers."""
        value = v.lower()
        if value not in LOG_FORMATS:
            raise ValueError(f"LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}")
        return value

    @property
    def json_logs(self) -> bool:
        """Check if logs should be rendered as JSON.

        Returns:
            True if LOG_FORMAT is "json", False otherwise.
        """
        return self.LOG_FORMAT == "json"

    def __init__(self, **kwargs):
        """Initialize Settings with automatic subsettings instantiation.

        Args:
            **kwargs: Optional overrides for specific settings sections.
        """
        settings_map = {
            # Features
            "extraction": ExtractionSettings,
            # Infrastructure
            "cache": CacheSettings,
        }

        for setting_name, setting_class in settings_map.items():
            if setting_name not in kwargs:
                kwargs[setting_name] = setting_class()

        super().__init__(**kwargs)

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )


# Create the singleton settings instance
settings = Settings()
