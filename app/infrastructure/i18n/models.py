"""Translation models for the extraction engine.

Defines the immutable translation set and its entries. Every operation
returns a new set; the receiver is never modified, so the extracted,
existing and draft sets of one run can be shared freely between
post-processors.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import (
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Tuple,
)


@dataclass(frozen=True)
class TranslationEntry:
    """A key's current value plus the files that contributed it.

    Attributes:
        value: Known translation. Empty string means "not yet translated",
            None is an explicit empty marker written by null defaults.
        source_files: Files that produced the key, in insertion order.
            Duplicates are allowed.
    """

    value: Optional[str] = ""
    source_files: Tuple[str, ...] = field(default_factory=tuple)

    def with_value(self, value: Optional[str]) -> "TranslationEntry":
        """Return a copy of this entry with a different value."""
        return TranslationEntry(value=value, source_files=self.source_files)

    def with_source(self, source_file: Optional[str]) -> "TranslationEntry":
        """Return a copy of this entry with one more source file.

        Args:
            source_file: File to append. None leaves the sources unchanged.

        Returns:
            New TranslationEntry.
        """
        if source_file is None:
            return self
        return TranslationEntry(
            value=self.value, source_files=self.source_files + (source_file,)
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize entry for the cache store.

        Returns:
            Dict with "value" and "sourceFiles" keys.
        """
        return {"value": self.value, "sourceFiles": list(self.source_files)}

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TranslationEntry":
        """Deserialize an entry written by to_dict()."""
        return cls(
            value=data.get("value", ""),
            source_files=tuple(data.get("sourceFiles") or ()),
        )


class TranslationSet:
    """Immutable mapping from translation key to TranslationEntry.

    Keys are unique. Insertion order is kept for serialization but is
    ignored by equality.

    Example:
        >>> extracted = TranslationSet().add_keys(["home.title"], "home.html")
        >>> existing = TranslationSet.from_flat_mapping({"home.title": "Home"})
        >>> draft = extracted.union(existing)
        >>> draft.to_flat_mapping()
        {'home.title': 'Home'}
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Optional[Mapping[str, TranslationEntry]] = None):
        """Initialize the set from a mapping of entries.

        Args:
            entries: Key to entry mapping. Copied, so later changes to the
                argument do not leak into the set.
        """
        self._entries: Mapping[str, TranslationEntry] = MappingProxyType(
            dict(entries or {})
        )

    @property
    def entries(self) -> Mapping[str, TranslationEntry]:
        """Read-only view of the entries."""
        return self._entries

    def add(
        self, key: str, value: Optional[str] = "", source_file: Optional[str] = None
    ) -> "TranslationSet":
        """Add a key, or record another source file for an existing key.

        An existing key keeps its value; only the source list grows.

        Args:
            key: Translation key.
            value: Value for a new key.
            source_file: File the key was found in.

        Returns:
            New TranslationSet.
        """
        entries = dict(self._entries)
        if key in entries:
            entries[key] = entries[key].with_source(source_file)
        else:
            sources = (source_file,) if source_file is not None else ()
            entries[key] = TranslationEntry(value=value, source_files=sources)
        return TranslationSet(entries)

    def add_keys(
        self, keys: Iterable[str], source_file: Optional[str] = None
    ) -> "TranslationSet":
        """Add each absent key with an empty value.

        Keys already in the set are left as they are.

        Args:
            keys: Translation keys.
            source_file: File the keys were found in.

        Returns:
            New TranslationSet.
        """
        entries = dict(self._entries)
        sources = (source_file,) if source_file is not None else ()
        for key in keys:
            if key not in entries:
                entries[key] = TranslationEntry(value="", source_files=sources)
        return TranslationSet(entries)

    def remove(self, key: str) -> "TranslationSet":
        """Return a new set without the given key."""
        return TranslationSet({k: v for k, v in self._entries.items() if k != key})

    def union(self, other: "TranslationSet") -> "TranslationSet":
        """Right-biased merge: entries of other win on key collision."""
        entries = dict(self._entries)
        entries.update(other.entries)
        return TranslationSet(entries)

    def merge(self, other: "TranslationSet") -> "TranslationSet":
        """Union that also accumulates source files of colliding keys.

        Values are right-biased exactly like union(). The source files of
        a colliding key are the receiver's followed by other's, so merging
        per-file results in traversal order records every contributing
        file in that order.

        Args:
            other: Set merged over the receiver.

        Returns:
            New TranslationSet.
        """
        entries = dict(self._entries)
        for key, entry in other.entries.items():
            current = entries.get(key)
            if current is None:
                entries[key] = entry
            else:
                entries[key] = TranslationEntry(
                    value=entry.value,
                    source_files=current.source_files + entry.source_files,
                )
        return TranslationSet(entries)

    def intersect(self, other: "TranslationSet") -> "TranslationSet":
        """Keep only keys present in other, with the receiver's entries."""
        return TranslationSet(
            {k: v for k, v in self._entries.items() if k in other}
        )

    def filter(
        self, predicate: Callable[[str, TranslationEntry], bool]
    ) -> "TranslationSet":
        """Keep entries for which predicate(key, entry) is true."""
        return TranslationSet(
            {k: v for k, v in self._entries.items() if predicate(k, v)}
        )

    def map(
        self, transform: Callable[[str, TranslationEntry], TranslationEntry]
    ) -> "TranslationSet":
        """Replace every entry with transform(key, entry)."""
        return TranslationSet({k: transform(k, v) for k, v in self._entries.items()})

    def sort(
        self,
        key: Optional[Callable[[str], Any]] = None,
        reverse: bool = False,
    ) -> "TranslationSet":
        """Return a new set with keys reordered.

        Args:
            key: Sort key applied to translation keys. Plain code point
                order when omitted. See infrastructure.i18n.collation for
                locale-aware variants.
            reverse: Sort descending.

        Returns:
            New TranslationSet.
        """
        ordered = sorted(self._entries, key=key, reverse=reverse)
        return TranslationSet({k: self._entries[k] for k in ordered})

    def strip_key_prefix(self, prefix: str) -> "TranslationSet":
        """Remove a case-insensitive literal prefix from matching keys.

        Keys that do not start with the prefix are kept unchanged. When
        two keys strip to the same key, the one that comes later wins.

        Args:
            prefix: Literal prefix to remove.

        Returns:
            New TranslationSet.
        """
        lowered = prefix.lower()
        entries: Dict[str, TranslationEntry] = {}
        for key, entry in self._entries.items():
            if prefix and key.lower().startswith(lowered):
                key = key[len(prefix):]
            entries[key] = entry
        return TranslationSet(entries)

    def get(
        self, key: str, default: Optional[TranslationEntry] = None
    ) -> Optional[TranslationEntry]:
        """Get the entry for key, or default."""
        return self._entries.get(key, default)

    def has(self, key: str) -> bool:
        """Check whether key is in the set."""
        return key in self._entries

    def keys(self) -> List[str]:
        """Keys in set order."""
        return list(self._entries)

    def count(self) -> int:
        """Number of keys in the set."""
        return len(self._entries)

    def is_empty(self) -> bool:
        """Check whether the set has no keys."""
        return not self._entries

    def to_flat_mapping(self) -> Dict[str, Optional[str]]:
        """Project to a plain key to value mapping, dropping source files."""
        return {k: v.value for k, v in self._entries.items()}

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        """Serialize the set for the cache store."""
        return {k: v.to_dict() for k, v in self._entries.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, Any]]) -> "TranslationSet":
        """Deserialize a set written by to_dict()."""
        return cls({k: TranslationEntry.from_dict(v) for k, v in data.items()})

    @classmethod
    def from_flat_mapping(
        cls,
        mapping: Mapping[str, Optional[str]],
        source_files: Iterable[str] = (),
    ) -> "TranslationSet":
        """Build a set from a plain key to value mapping.

        Args:
            mapping: Key to value mapping, e.g. a parsed output file.
            source_files: Source files recorded on every entry.

        Returns:
            New TranslationSet.
        """
        sources = tuple(source_files)
        return cls(
            {
                key: TranslationEntry(value=value, source_files=sources)
                for key, value in mapping.items()
            }
        )

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, TranslationSet):
            return NotImplemented
        return dict(self._entries) == dict(other.entries)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"TranslationSet({dict(self._entries)!r})"
