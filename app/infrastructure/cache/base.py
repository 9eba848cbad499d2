"""Extraction cache abstract base class."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

CacheResult = List[Dict[str, Any]]


class CacheError(Exception):
    """The cache store could not be written.

    Attributes:
        path: Store path that failed.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class ExtractionCache(ABC):
    """Abstract base class for extraction cache implementations.

    Memoizes "file fingerprint -> extraction result" across runs. Results
    are JSON-serializable lists, one item per extractor that produced
    keys for the file.
    """

    @abstractmethod
    def get(self, fingerprint: str, compute: Callable[[], CacheResult]) -> CacheResult:
        """Get the cached result for a fingerprint, computing it on a miss.

        Args:
            fingerprint: Identity of the input, derived from its full contents.
            compute: Called only on a miss to produce the result.

        Returns:
            Cached or freshly computed result.
        """
        pass

    @abstractmethod
    def persist(self) -> None:
        """Write entries used during this run to the backing store.

        Raises:
            CacheError: If the store cannot be written.
        """
        pass

    @abstractmethod
    def get_stats(self) -> Dict[str, Any]:
        """Get cache statistics.

        Returns:
            Dict with cache statistics (implementation-specific).
        """
        pass
