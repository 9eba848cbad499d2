"""tree-sitter parsing for TypeScript sources."""

from pathlib import Path
from typing import Dict

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Node, Parser

TS_LANGUAGE = Language(ts_typescript.language_typescript())
TSX_LANGUAGE = Language(ts_typescript.language_tsx())

JSX_SUFFIXES = frozenset({".tsx", ".jsx"})
SCRIPT_SUFFIXES = frozenset({".ts", ".tsx", ".js", ".jsx", ".mts", ".cts"})

_PARSERS: Dict[str, Parser] = {}


def is_script_path(path: str) -> bool:
    """Check whether a file should be parsed as TypeScript."""
    return Path(path).suffix.lower() in SCRIPT_SUFFIXES


def _get_parser(path: str) -> Parser:
    # The TSX grammar rejects `<Type>value` casts, so it is only used
    # where JSX is actually allowed.
    grammar = "tsx" if Path(path).suffix.lower() in JSX_SUFFIXES else "typescript"
    if grammar not in _PARSERS:
        language = TSX_LANGUAGE if grammar == "tsx" else TS_LANGUAGE
        _PARSERS[grammar] = Parser(language)
    return _PARSERS[grammar]


def parse_source(source: str, path: str = "") -> Node:
    """Parse TypeScript source into a syntax tree.

    tree-sitter recovers from syntax errors, so this never raises for bad
    input; broken regions simply contain ERROR nodes.

    Args:
        source: File contents.
        path: File path, used to pick the grammar.

    Returns:
        Root node of the tree.
    """
    return _get_parser(path).parse(source.encode("utf-8")).root_node
