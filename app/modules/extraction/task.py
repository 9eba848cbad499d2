"""Extract task: scan inputs, merge with existing output, write results.

One run reads every input file once, merges the keys found by all
extractors, then for each output target merges them with what the target
already contains, runs the post-processors and writes the result. All
targets are computed before the first one is written, and the cache is
persisted last.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from infrastructure.cache import CacheResult, ExtractionCache, FingerprintBuilder, NullCache
from infrastructure.i18n import CodecError, TranslationCodec, TranslationEntry, TranslationSet
from infrastructure.logging import bind_run_context, get_module_logger
from modules.extraction.exceptions import ExtractionError, OutputParseError, OutputWriteError
from modules.extraction.extractors import Extractor
from modules.extraction.paths import get_files, resolve_output_path
from modules.extraction.post_processors import PostProcessor

logger = get_module_logger()

FINGERPRINT_NAMESPACE = "extract-v1"

ACTION_CREATED = "created"
ACTION_MERGED = "merged"
ACTION_REPLACED = "replaced"


@dataclass(frozen=True)
class OutputResult:
    """Outcome for one output target.

    Attributes:
        path: File written.
        action: "created", "merged" or "replaced".
        count: Number of keys written.
    """

    path: str
    action: str
    count: int


def merge_with_existing(
    extracted: TranslationSet, existing: TranslationSet
) -> TranslationSet:
    """Build the merge draft.

    Values already in the output win, so translations survive a run.
    Source files come from this run for every key found in it.
    """

    def fresh_sources(key: str, entry: TranslationEntry) -> TranslationEntry:
        found = extracted.get(key)
        if found is None:
            return entry
        return TranslationEntry(value=entry.value, source_files=found.source_files)

    return extracted.union(existing).map(fresh_sources)


class ExtractTask:
    """Configurable extraction run.

    Example:
        task = (
            ExtractTask(["src/**/*.html"], ["src/i18n/en.json"])
            .set_extractors([PipeExtractor(), DirectiveExtractor()])
            .set_post_processors([SortByKeyPostProcessor()])
            .set_codec(JsonCodec())
        )
        results = task.execute()

    Args:
        inputs: Absolute or relative glob patterns.
        outputs: Output files or directories.
        replace: Ignore the current contents of the outputs.
    """

    def __init__(self, inputs: Sequence[str], outputs: Sequence[str], replace: bool = False):
        self.inputs = [os.path.abspath(pattern) for pattern in inputs]
        self.outputs = [os.path.abspath(output) for output in outputs]
        self.replace = replace
        self.extractors: List[Extractor] = []
        self.post_processors: List[PostProcessor] = []
        self.codec: Optional[TranslationCodec] = None
        self.cache: ExtractionCache = NullCache()
        self._fingerprints = FingerprintBuilder(FINGERPRINT_NAMESPACE)

    def set_extractors(self, extractors: Sequence[Extractor]) -> "ExtractTask":
        self.extractors = list(extractors)
        return self

    def set_post_processors(self, post_processors: Sequence[PostProcessor]) -> "ExtractTask":
        self.post_processors = list(post_processors)
        return self

    def set_codec(self, codec: TranslationCodec) -> "ExtractTask":
        self.codec = codec
        return self

    def set_cache(self, cache: ExtractionCache) -> "ExtractTask":
        self.cache = cache
        return self

    def execute(self) -> List[OutputResult]:
        """Run the extraction for every output.

        Returns:
            One OutputResult per output, in output order.

        Raises:
            ExtractionError: If no codec is configured or an input file
                cannot be read.
            OutputParseError: If an existing output cannot be parsed.
            OutputWriteError: If an output cannot be written.
            CacheError: If the cache cannot be persisted.
        """
        if self.codec is None:
            raise ExtractionError("No output codec configured")

        with bind_run_context(input_count=len(self.inputs), output_count=len(self.outputs)):
            logger.info(
                "extraction_started",
                extractors=[extractor.name for extractor in self.extractors],
                post_processors=[processor.name for processor in self.post_processors],
                codec=type(self.codec).__name__,
            )
            extracted = self.extract()
            logger.info("strings_found", key_count=extracted.count())

            planned = [self._prepare_output(output, extracted) for output in self.outputs]
            results = [self._write_output(path, final, action) for path, final, action in planned]

            self.cache.persist()
            logger.info("extraction_finished", outputs=len(results), **self.cache.get_stats())
            return results

    def extract(self) -> TranslationSet:
        """Extract keys from every input file.

        Files are visited in input order, then sorted path order within a
        pattern. A key found in several files lists all of them.
        """
        extracted = TranslationSet()
        file_count = 0
        for pattern in self.inputs:
            for file_path in get_files(pattern):
                extracted = extracted.merge(self.extract_file(pattern, file_path))
                file_count += 1
        logger.debug("input_files_scanned", file_count=file_count)
        return extracted

    def extract_file(self, pattern: str, file_path: str) -> TranslationSet:
        """Keys of one file from all extractors, through the cache."""
        try:
            contents = Path(file_path).read_text(encoding="utf-8", errors="replace")
        except OSError as e:
            raise ExtractionError(f"Failed to read input file {file_path}: {e}") from e

        fingerprint = self._fingerprints.build(
            pattern=pattern, path=file_path, contents=contents
        )
        results = self.cache.get(fingerprint, lambda: self._run_extractors(contents, file_path))

        translations = TranslationSet()
        for result in results:
            translations = translations.union(TranslationSet.from_dict(result))
        return translations

    def process(
        self,
        draft: TranslationSet,
        extracted: TranslationSet,
        existing: TranslationSet,
    ) -> TranslationSet:
        """Run the draft through the post-processors in order."""
        for processor in self.post_processors:
            draft = processor.process(draft, extracted, existing)
        return draft

    def _run_extractors(self, contents: str, file_path: str) -> CacheResult:
        results: CacheResult = []
        for extractor in self.extractors:
            translations = extractor.extract(contents, file_path)
            if translations is None or translations.is_empty():
                continue
            results.append(translations.to_dict())
        logger.debug("file_extracted", file_path=file_path, result_count=len(results))
        return results

    def _prepare_output(
        self, output: str, extracted: TranslationSet
    ) -> Tuple[str, TranslationSet, str]:
        path = resolve_output_path(output, self.codec.extension)
        exists = os.path.isfile(path)

        existing = TranslationSet()
        if exists and not self.replace:
            existing = self._read_existing(path)

        draft = merge_with_existing(extracted, existing)
        final = self.process(draft, extracted, existing)

        if not exists:
            action = ACTION_CREATED
        elif self.replace:
            action = ACTION_REPLACED
        else:
            action = ACTION_MERGED
        return path, final, action

    def _read_existing(self, path: str) -> TranslationSet:
        try:
            text = Path(path).read_text(encoding="utf-8")
            existing = self.codec.parse(text, source=path)
        except (OSError, UnicodeDecodeError, CodecError) as e:
            logger.error("existing_output_unreadable", path=path, error=str(e))
            raise OutputParseError(path, e) from e
        logger.debug("existing_output_loaded", path=path, key_count=existing.count())
        return existing

    def _write_output(self, path: str, translations: TranslationSet, action: str) -> OutputResult:
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "w", encoding="utf-8", newline="\n") as f:
                f.write(self.codec.compile(translations))
        except OSError as e:
            logger.error("output_write_failed", path=path, error=str(e))
            raise OutputWriteError(path, e) from e

        logger.info("output_written", path=path, action=action, key_count=translations.count())
        return OutputResult(path=path, action=action, count=translations.count())
