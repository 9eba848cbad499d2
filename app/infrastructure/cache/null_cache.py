"""Cache variant used when caching is disabled."""

from typing import Any, Callable, Dict

from infrastructure.cache.base import CacheResult, ExtractionCache


class NullCache(ExtractionCache):
    """Always misses and never writes anything."""

    def __init__(self):
        self._computed = 0

    def get(self, fingerprint: str, compute: Callable[[], CacheResult]) -> CacheResult:
        self._computed += 1
        return compute()

    def persist(self) -> None:
        return None

    def get_stats(self) -> Dict[str, Any]:
        return {"backend": "null", "hits": 0, "misses": self._computed}
