"""Locale-aware sort keys for translation keys.

Approximates collation strength levels with Unicode decomposition: letters
are compared by base character first, then by accents, then by case
(lowercase before uppercase).
"""

import unicodedata
from enum import Enum
from typing import Any, Callable, Optional, Tuple


class SortSensitivity(str, Enum):
    """Which differences between keys affect their order.

    NONE compares raw code points. The other members follow the usual
    collation strengths: BASE ignores accents and case, ACCENT ignores
    case, CASE ignores accents, VARIANT honors both.
    """

    NONE = "none"
    BASE = "base"
    ACCENT = "accent"
    CASE = "case"
    VARIANT = "variant"

    @classmethod
    def from_string(cls, value: Optional[str]) -> "SortSensitivity":
        """Convert a configuration string to SortSensitivity.

        Args:
            value: Sensitivity name, or None for code point order.

        Returns:
            Matching SortSensitivity.

        Raises:
            ValueError: If the name is not a known sensitivity.
        """
        if value is None or isinstance(value, cls):
            return cls.NONE if value is None else value
        try:
            return cls(value.lower())
        except ValueError as e:
            raise ValueError(f"Unknown sort sensitivity: {value}") from e


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def _primary(text: str) -> str:
    return _strip_accents(text).casefold()


def _secondary(text: str) -> str:
    # Decomposed and case folded: accents remain as combining marks.
    return unicodedata.normalize("NFD", text.casefold())


def _tertiary(text: str) -> Tuple[int, ...]:
    return tuple(1 if c.isupper() else 0 for c in _strip_accents(text))


def collation_key(
    sensitivity: Optional[SortSensitivity],
) -> Optional[Callable[[str], Any]]:
    """Build a sort key function for the given sensitivity.

    Args:
        sensitivity: Collation strength. None or NONE means code point order.

    Returns:
        Key function for sorted(), or None for plain code point order.

    Example:
        >>> sorted(["b", "A", "a"], key=collation_key(SortSensitivity.CASE))
        ['a', 'A', 'b']
    """
    if sensitivity is None or sensitivity is SortSensitivity.NONE:
        return None
    if sensitivity is SortSensitivity.BASE:
        return lambda text: (_primary(text),)
    if sensitivity is SortSensitivity.ACCENT:
        return lambda text: (_primary(text), _secondary(text))
    if sensitivity is SortSensitivity.CASE:
        return lambda text: (_primary(text), _tertiary(text))
    return lambda text: (_primary(text), _secondary(text), _tertiary(text), text)
