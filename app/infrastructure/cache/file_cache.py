"""JSON file backed extraction cache."""

import hashlib
import json
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional

from infrastructure.cache.base import CacheError, CacheResult, ExtractionCache
from infrastructure.configuration import settings
from infrastructure.logging import get_module_logger

logger = get_module_logger()


def _sha256(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()


class FileCache(ExtractionCache):
    """Content-addressed cache persisted as one JSON document.

    The store maps sha256(version_hash + fingerprint) to the stored result.
    It is read lazily on the first get() and written once by persist().
    Only entries looked up during the run are written back, so entries for
    deleted or changed files drop out on their own.

    Attributes:
        store_path: Path of the JSON store (cache path plus fixed suffix).
        version: Tool version and configuration string mixed into every key.

    Example:
        >>> cache = FileCache(".cache/i18n", version="1.0.0")
        >>> result = cache.get(fingerprint, lambda: extract(contents))
        >>> cache.persist()
    """

    def __init__(self, cache_file: str, version: str, suffix: Optional[str] = None):
        """Initialize the cache.

        Args:
            cache_file: Cache path prefix chosen by the user.
            version: Tool version and configuration marker.
            suffix: Store file suffix. Defaults to settings.cache.suffix.
        """
        if suffix is None:
            suffix = settings.cache.suffix
        self.store_path = Path(f"{cache_file}{suffix}")
        self.version = version
        self._cached: Optional[Dict[str, CacheResult]] = None
        self._original: Optional[str] = None
        self._version_hash = ""
        self._touched: Dict[str, CacheResult] = {}
        self._hits = 0
        self._misses = 0

    def get(self, fingerprint: str, compute: Callable[[], CacheResult]) -> CacheResult:
        self._ensure_loaded()
        key = _sha256(f"{self._version_hash}{fingerprint}")

        if key in self._cached:
            self._hits += 1
            self._touched[key] = self._cached[key]
            return self._cached[key]

        self._misses += 1
        result = compute()
        self._touched[key] = result
        return result

    def persist(self) -> None:
        self._ensure_loaded()
        contents = json.dumps(
            {key: self._touched[key] for key in sorted(self._touched)},
            indent=2,
            ensure_ascii=False,
        )
        if contents == self._original:
            logger.debug("cache_unchanged", path=str(self.store_path))
            return

        tmp_path = self.store_path.with_name(f"{self.store_path.name}~{_sha256(contents)}")
        try:
            self.store_path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(contents, encoding="utf-8")
            os.replace(tmp_path, self.store_path)
        except OSError as e:
            raise CacheError(
                f"Failed to write cache file {self.store_path}: {e}",
                path=str(self.store_path),
            ) from e

        self._original = contents
        logger.info(
            "cache_persisted",
            path=str(self.store_path),
            entry_count=len(self._touched),
        )

    def get_stats(self) -> Dict[str, Any]:
        return {
            "backend": "file",
            "path": str(self.store_path),
            "hits": self._hits,
            "misses": self._misses,
            "entries": len(self._touched),
        }

    def _ensure_loaded(self) -> None:
        if self._cached is not None:
            return

        self._version_hash = _sha256(self.version)
        try:
            self._original = self.store_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            self._original = None
            self._cached = {}
            logger.debug("cache_not_found", path=str(self.store_path))
            return
        except OSError as e:
            logger.warning("cache_unreadable", path=str(self.store_path), error=str(e))
            self._original = None
            self._cached = {}
            return

        try:
            data = json.loads(self._original)
        except json.JSONDecodeError as e:
            logger.warning("cache_corrupt", path=str(self.store_path), error=str(e))
            data = None

        self._cached = data if isinstance(data, dict) else {}
        logger.debug("cache_loaded", path=str(self.store_path), entry_count=len(self._cached))
