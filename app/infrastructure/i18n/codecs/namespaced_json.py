"""Nested JSON codec: keys are split into objects on a delimiter."""

import json
from typing import Any, Dict, Optional

from infrastructure.i18n.codecs.base import TranslationCodec
from infrastructure.i18n.codecs.json_codec import flatten, load_json_object
from infrastructure.i18n.exceptions import CodecError
from infrastructure.i18n.models import TranslationSet


def unflatten(values: Dict[str, Optional[str]], delimiter: str = ".") -> Dict[str, Any]:
    """Build nested objects from delimiter-joined keys.

    Args:
        values: Flat key to value mapping.
        delimiter: Separator between key segments.

    Returns:
        Nested mapping.

    Raises:
        CodecError: If a key would have to nest below a plain value,
            e.g. "a" and "a.b" in the same set.
    """
    nested: Dict[str, Any] = {}
    for key, value in values.items():
        node = nested
        *parents, leaf = key.split(delimiter)
        for part in parents:
            child = node.setdefault(part, {})
            if not isinstance(child, dict):
                raise CodecError(f"Key '{key}' nests below a translated value")
            node = child
        if isinstance(node.get(leaf), dict):
            raise CodecError(f"Key '{key}' is also a group of other keys")
        node[leaf] = value
    return nested


class NamespacedJsonCodec(TranslationCodec):
    """Nested JSON output, e.g. {"home": {"title": "..."}} for "home.title".

    Attributes:
        indentation: Indentation string passed to json.dumps.
        delimiter: Key segment separator.
    """

    extension = "json"

    def __init__(self, indentation: str = "\t", delimiter: str = "."):
        self.indentation = indentation
        self.delimiter = delimiter

    def parse(self, text: str, source: Optional[str] = None) -> TranslationSet:
        values = load_json_object(text, source)
        return TranslationSet.from_flat_mapping(flatten(values, self.delimiter))

    def compile(self, translations: TranslationSet) -> str:
        nested = unflatten(translations.to_flat_mapping(), self.delimiter)
        return json.dumps(nested, indent=self.indentation, ensure_ascii=False) + "\n"
