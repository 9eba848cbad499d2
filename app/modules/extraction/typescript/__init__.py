"""TypeScript syntax trees via tree-sitter, and queries over them."""

from modules.extraction.typescript.parser import is_script_path, parse_source

__all__ = ["is_script_path", "parse_source"]
