"""Extraction feature settings."""

from typing import List

from pydantic import Field

from infrastructure.configuration.base import FeatureSettings


class ExtractionSettings(FeatureSettings):
    """Names and patterns the extractors look for in source files.

    Environment Variables:
        EXTRACT_PIPE_NAMES: JSON list of translate pipe names
        EXTRACT_ATTRIBUTE_NAMES: JSON list of translate attribute names
        EXTRACT_SERVICE_TYPE: Type name of the translation service
        EXTRACT_SERVICE_METHODS: JSON list of service methods that take a key
        EXTRACT_INJECT_FUNCTION: Name of the dependency injection helper
        EXTRACT_MARKER_IMPORT: Imported name of the marker function
        EXTRACT_MARKER_MODULE_PATTERN: Regex matched against the marker module
        EXTRACT_CORE_MARKER_IMPORT: Marker name exported by the core module
        EXTRACT_CORE_MARKER_MODULE: Core module exporting the marker
        EXTRACT_DEFAULT_PATTERNS: JSON list of patterns appended to input dirs
        EXTRACT_PROJECT_CONFIG_FILE: Project configuration file holding baseUrl

    Example:
        ```python
        from infrastructure.configuration import settings

        if "translate" in settings.extraction.pipe_names:
            ...
        ```
    """

    pipe_names: List[str] = Field(
        default=["translate", "marker"],
        alias="EXTRACT_PIPE_NAMES",
    )
    attribute_names: List[str] = Field(
        default=["translate", "marker"],
        alias="EXTRACT_ATTRIBUTE_NAMES",
    )
    service_type: str = Field(default="TranslateService", alias="EXTRACT_SERVICE_TYPE")
    service_methods: List[str] = Field(
        default=["get", "instant", "stream"],
        alias="EXTRACT_SERVICE_METHODS",
    )
    inject_function: str = Field(default="inject", alias="EXTRACT_INJECT_FUNCTION")
    marker_import: str = Field(default="marker", alias="EXTRACT_MARKER_IMPORT")
    marker_module_pattern: str = Field(
        default="ngx-translate-extract-marker",
        alias="EXTRACT_MARKER_MODULE_PATTERN",
    )
    core_marker_import: str = Field(default="_", alias="EXTRACT_CORE_MARKER_IMPORT")
    core_marker_module: str = Field(
        default="@ngx-translate/core",
        alias="EXTRACT_CORE_MARKER_MODULE",
    )
    default_patterns: List[str] = Field(
        default=["/**/*.html", "/**/*.ts"],
        alias="EXTRACT_DEFAULT_PATTERNS",
    )
    project_config_file: str = Field(
        default="tsconfig.json",
        alias="EXTRACT_PROJECT_CONFIG_FILE",
    )
