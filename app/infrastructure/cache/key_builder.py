"""Fingerprint builder for extraction cache lookups."""

import hashlib
from typing import Any


class FingerprintBuilder:
    """Build deterministic fingerprints for cache lookups.

    A fingerprint covers everything that determines a file's extraction
    result: a schema marker, the enumeration pattern, the file path and
    the full file contents. Any change to one of them produces a new
    fingerprint.

    Example:
        >>> builder = FingerprintBuilder(namespace="extract")
        >>> builder.build(pattern="src/**/*.ts", path="src/app.ts", contents="...")
        'extract:9b74c9897bac770ffc029102a200c5de...'
    """

    def __init__(self, namespace: str):
        """Initialize fingerprint builder.

        Args:
            namespace: Schema marker, changed whenever the result format changes.
        """
        self.namespace = namespace

    def build(self, **components: Any) -> str:
        """Build a fingerprint from components.

        Args:
            **components: Fingerprint components (pattern, path, contents, ...)

        Returns:
            Fingerprint string
        """
        sorted_components = sorted(components.items())

        key_parts = [self.namespace]
        key_parts.extend(f"{k}={v}" for k, v in sorted_components)
        key_string = "|".join(str(part) for part in key_parts)

        key_hash = hashlib.sha256(key_string.encode("utf-8")).hexdigest()

        return f"{self.namespace}:{key_hash}"
