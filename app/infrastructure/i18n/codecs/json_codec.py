"""Flat key to value JSON codec."""

import json
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from infrastructure.i18n.codecs.base import TranslationCodec
from infrastructure.i18n.exceptions import CodecError
from infrastructure.i18n.models import TranslationSet

BOM = "\ufeff"


def load_json_object(text: str, source: Optional[str] = None) -> Dict[str, Any]:
    """Load a JSON object, ignoring a leading byte order mark.

    Args:
        text: Document contents.
        source: Name of the document, used in error messages.

    Returns:
        Decoded object.

    Raises:
        CodecError: If the document is not valid JSON or not an object.
    """
    try:
        values = json.loads(text.lstrip(BOM).strip())
    except json.JSONDecodeError as e:
        raise CodecError(f"Invalid JSON in {source or 'document'}: {e}", source) from e
    if not isinstance(values, dict):
        raise CodecError(
            f"Expected a JSON object in {source or 'document'}, got {type(values).__name__}",
            source,
        )
    return values


def flatten(values: Mapping[str, Any], delimiter: str = ".") -> Dict[str, Optional[str]]:
    """Flatten nested objects and arrays into delimiter-joined keys.

    Args:
        values: Nested mapping.
        delimiter: Separator placed between key segments.

    Returns:
        Flat key to value mapping. Leaves that are not strings or null are
        converted to strings.
    """
    flat: Dict[str, Optional[str]] = {}
    stack = [("", _items(values))]
    while stack:
        prefix, items = stack[-1]
        for key, value in items:
            path = f"{prefix}{delimiter}{key}" if prefix else str(key)
            if isinstance(value, (Mapping, list)):
                # Descend now and resume this level afterwards.
                stack.append((path, _items(value)))
                break
            flat[path] = value if value is None or isinstance(value, str) else str(value)
        else:
            stack.pop()
    return flat


def _items(node: Any) -> Iterator[Tuple[Any, Any]]:
    return iter(node.items()) if isinstance(node, Mapping) else iter(enumerate(node))


class JsonCodec(TranslationCodec):
    """Flat JSON output: one key per translation.

    Parsing also accepts nested objects, which are flattened with ".".

    Attributes:
        indentation: Indentation string passed to json.dumps.
    """

    extension = "json"

    def __init__(self, indentation: str = "\t"):
        self.indentation = indentation

    def parse(self, text: str, source: Optional[str] = None) -> TranslationSet:
        values = load_json_object(text, source)
        if any(isinstance(v, (dict, list)) for v in values.values()):
            values = flatten(values)
        return TranslationSet.from_flat_mapping(
            {k: v if v is None or isinstance(v, str) else str(v) for k, v in values.items()}
        )

    def compile(self, translations: TranslationSet) -> str:
        return (
            json.dumps(
                translations.to_flat_mapping(),
                indent=self.indentation,
                ensure_ascii=False,
            )
            + "\n"
        )
