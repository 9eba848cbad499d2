"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.extraction import ExtractionSettings

__all__ = ["ExtractionSettings"]
