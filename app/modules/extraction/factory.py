"""Build an ExtractTask from user options."""

import json
from typing import List, Optional, Sequence

from pydantic import BaseModel, Field, field_validator, model_validator

from infrastructure.cache import create_cache
from infrastructure.configuration import settings
from infrastructure.i18n import OutputFormat, SortSensitivity, create_codec
from infrastructure.logging import get_module_logger
from modules.extraction import __version__
from modules.extraction.extractors import (
    DirectiveExtractor,
    Extractor,
    FunctionExtractor,
    MarkerExtractor,
    PipeExtractor,
    ServiceExtractor,
)
from modules.extraction.paths import normalize_paths
from modules.extraction.post_processors import (
    KeyAsDefaultValuePostProcessor,
    KeyAsInitialDefaultValuePostProcessor,
    NullAsDefaultValuePostProcessor,
    PostProcessor,
    PurgeObsoleteKeysPostProcessor,
    SortByKeyPostProcessor,
    SortByOriginalOrderPostProcessor,
    StringAsDefaultValuePostProcessor,
    StripPrefixPostProcessor,
)
from modules.extraction.property_resolver import ResolverContext
from modules.extraction.task import ExtractTask

logger = get_module_logger()


class ExtractOptions(BaseModel):
    """Validated options of one extraction run."""

    input: List[str] = Field(..., min_length=1, description="Input paths or glob patterns")
    output: List[str] = Field(..., min_length=1, description="Output files or directories")
    format: OutputFormat = Field(default=OutputFormat.JSON, description="Output format")
    format_indentation: str = Field(default="\t", description="JSON indentation")
    replace: bool = Field(default=False, description="Ignore current output contents")
    sort: bool = Field(default=False, description="Sort keys")
    sort_original_order: bool = Field(
        default=False, description="Keep the order of the existing output"
    )
    sort_sensitivity: Optional[SortSensitivity] = Field(
        default=None, description="Collation strength for sorting"
    )
    po_source_locations: bool = Field(default=True, description="Write #: references")
    clean: bool = Field(default=False, description="Remove keys no longer found")
    cache_file: Optional[str] = Field(default=None, description="Cache path prefix")
    marker: Optional[str] = Field(default=None, description="Custom marker function")
    key_as_default_value: bool = False
    key_as_initial_default_value: bool = False
    null_as_default_value: bool = False
    string_as_default_value: Optional[str] = None
    strip_prefix: Optional[str] = None
    patterns: Optional[List[str]] = Field(
        default=None, description="Patterns appended to input directories"
    )

    @field_validator("sort_sensitivity", mode="before")
    @classmethod
    def validate_sort_sensitivity(cls, v):
        """Accept sensitivity names in any case."""
        if v is None or isinstance(v, SortSensitivity):
            return v
        return SortSensitivity.from_string(v)

    @model_validator(mode="after")
    def validate_exclusive_options(self):
        """Reject option combinations that contradict each other."""
        defaults = [
            name
            for name, enabled in (
                ("key_as_default_value", self.key_as_default_value),
                ("key_as_initial_default_value", self.key_as_initial_default_value),
                ("null_as_default_value", self.null_as_default_value),
                ("string_as_default_value", self.string_as_default_value is not None),
            )
            if enabled
        ]
        if len(defaults) > 1:
            raise ValueError(f"Options cannot be combined: {', '.join(defaults)}")
        if self.sort and self.sort_original_order:
            raise ValueError("Options cannot be combined: sort, sort_original_order")
        return self


def build_extractors(
    marker: Optional[str] = None, context: Optional[ResolverContext] = None
) -> List[Extractor]:
    """Extractors of a run: pipe, directive, service and one marker extractor."""
    extractors: List[Extractor] = [
        PipeExtractor(),
        DirectiveExtractor(),
        ServiceExtractor(context=context),
    ]
    if marker:
        extractors.append(FunctionExtractor(marker))
    else:
        extractors.append(MarkerExtractor())
    return extractors


def build_post_processors(options: ExtractOptions) -> List[PostProcessor]:
    """Post-processors in run order: purge, default value, strip prefix, sort."""
    processors: List[PostProcessor] = []
    if options.clean:
        processors.append(PurgeObsoleteKeysPostProcessor())

    if options.key_as_default_value:
        processors.append(KeyAsDefaultValuePostProcessor())
    elif options.key_as_initial_default_value:
        processors.append(KeyAsInitialDefaultValuePostProcessor())
    elif options.null_as_default_value:
        processors.append(NullAsDefaultValuePostProcessor())
    elif options.string_as_default_value is not None:
        processors.append(StringAsDefaultValuePostProcessor(options.string_as_default_value))

    if options.strip_prefix:
        processors.append(StripPrefixPostProcessor(options.strip_prefix))

    if options.sort:
        processors.append(SortByKeyPostProcessor(options.sort_sensitivity))
    elif options.sort_original_order:
        processors.append(SortByOriginalOrderPostProcessor(options.sort_sensitivity))
    return processors


def cache_version(extractors: Sequence[Extractor] = (), marker: Optional[str] = None) -> str:
    """Marker mixed into cache keys.

    Combines the tool version, the extractors of the run, the custom marker
    name and the extraction settings, so changing any of them invalidates
    cached results.
    """
    config = json.dumps(
        {
            "extractors": [extractor.name for extractor in extractors],
            "marker": marker,
            "settings": settings.extraction.model_dump(),
        },
        sort_keys=True,
    )
    return f"{__version__}:{config}"


def create_extract_task(options: ExtractOptions) -> ExtractTask:
    """Create a fully configured task.

    Args:
        options: Validated run options.

    Returns:
        ExtractTask ready to execute.
    """
    inputs = normalize_paths(options.input, options.patterns)
    outputs = normalize_paths(options.output, [])
    extractors = build_extractors(options.marker, ResolverContext())

    task = (
        ExtractTask(inputs, outputs, replace=options.replace)
        .set_extractors(extractors)
        .set_post_processors(build_post_processors(options))
        .set_codec(
            create_codec(
                options.format,
                indentation=options.format_indentation,
                po_source_locations=options.po_source_locations,
            )
        )
        .set_cache(create_cache(options.cache_file, cache_version(extractors, options.marker)))
    )
    logger.debug(
        "extract_task_created",
        inputs=inputs,
        outputs=outputs,
        post_processors=[processor.name for processor in task.post_processors],
    )
    return task
