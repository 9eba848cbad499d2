"""Keep the key order of the previous output file.

Keys are dot-delimited paths. Existing keys keep their positions exactly;
each new key goes right after the last key of the longest path prefix group
it shares, new keys among themselves in sorted order. Re-sorting a whole
file on every run would produce large diffs; this only ever inserts.
"""

from typing import List, Optional, Set, Union

from infrastructure.i18n import SortSensitivity, TranslationSet, collation_key
from modules.extraction.exceptions import UnexpectedKeyError
from modules.extraction.post_processors.base import PostProcessor

KEY_DELIMITER = "."


def _prefixes(key: str) -> List[str]:
    """Proper path prefixes of a key, longest first."""
    parts = key.split(KEY_DELIMITER)
    return [KEY_DELIMITER.join(parts[:size]) for size in range(len(parts) - 1, 0, -1)]


def _insert_position(ordered: List[str], key: str) -> int:
    for prefix in _prefixes(key):
        group = prefix + KEY_DELIMITER
        for index in range(len(ordered) - 1, -1, -1):
            if ordered[index].startswith(group):
                return index + 1
    return len(ordered)


class SortByOriginalOrderPostProcessor(PostProcessor):
    """Order the draft like the existing output, inserting new keys.

    Keys of the draft that are neither existing nor extracted (renamed by an
    earlier stage, for example) follow at the end in sorted order.

    Args:
        sensitivity: Collation strength for ordering new keys. None sorts by
            code point.

    Raises:
        ValueError: If sensitivity is not a known name.
    """

    name = "sort_by_original_order"

    def __init__(self, sensitivity: Optional[Union[str, SortSensitivity]] = None):
        self.sensitivity = SortSensitivity.from_string(sensitivity)

    def process(
        self,
        draft: TranslationSet,
        extracted: TranslationSet,
        existing: TranslationSet,
    ) -> TranslationSet:
        """Reorder the draft.

        Raises:
            UnexpectedKeyError: If a new key would nest below an existing
                plain value, e.g. `a.b.c` when `a.b` is a string.
        """
        sort_key = collation_key(self.sensitivity)

        ordered: List[str] = list(existing)
        known: Set[str] = set(ordered)
        groups: Set[str] = {prefix for key in ordered for prefix in _prefixes(key)}

        for key in sorted((key for key in extracted if key not in known), key=sort_key):
            prefixes = _prefixes(key)
            for prefix in prefixes:
                # A plain value cannot become a group in nested output.
                if prefix in known and prefix not in groups:
                    raise UnexpectedKeyError(key)
            ordered.insert(_insert_position(ordered, key), key)
            known.add(key)
            groups.update(prefixes)

        result = [key for key in ordered if key in draft]
        placed = set(result)
        result.extend(sorted((key for key in draft if key not in placed), key=sort_key))
        return TranslationSet({key: draft.entries[key] for key in result})

    def __repr__(self) -> str:
        return f"SortByOriginalOrderPostProcessor(sensitivity={self.sensitivity.value!r})"
