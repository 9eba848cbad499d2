"""Input and output path helpers.

Patterns go through brace expansion (`src/{app,lib}/**/*.ts`), home
directory expansion and absolutization. A pattern naming an existing
directory stands for the default file patterns below it.
"""

import glob
import os
from pathlib import Path
from typing import List, Optional, Sequence

from braceexpand import braceexpand

from infrastructure.configuration import settings


def normalize_home_dir(path: str) -> str:
    """Expand a leading `~` to the user's home directory."""
    if path.startswith("~"):
        return str(Path.home()) + "/" + path[1:].lstrip("/\\")
    return path


def expand_pattern(pattern: str) -> List[str]:
    """Expand `{a,b}` and `{1..3}` braces in a pattern.

    Example:
        >>> expand_pattern("i18n/{en,fr}.json")
        ['i18n/en.json', 'i18n/fr.json']
    """
    # Backslash separators would escape the braces.
    posix_pattern = pattern.replace(os.sep, "/") if os.sep != "/" else pattern
    expanded = list(braceexpand(posix_pattern, escape=False))
    if os.sep != "/":
        expanded = [path.replace("/", os.sep) for path in expanded]
    return expanded


def normalize_paths(
    patterns: Sequence[str], default_patterns: Optional[Sequence[str]] = None
) -> List[str]:
    """Turn user supplied patterns into absolute glob patterns.

    Args:
        patterns: Paths or glob patterns, possibly with braces or `~`.
        default_patterns: Suffixes appended to patterns naming a directory,
            e.g. "/**/*.ts". Defaults to settings.extraction.default_patterns;
            an empty list keeps directories as they are.

    Returns:
        Absolute patterns in input order.
    """
    if default_patterns is None:
        default_patterns = settings.extraction.default_patterns

    normalized: List[str] = []
    for pattern in patterns:
        for path in expand_pattern(pattern):
            path = os.path.abspath(normalize_home_dir(path))
            if default_patterns and os.path.isdir(path):
                base = path.rstrip("/\\")
                normalized.extend(base + suffix for suffix in default_patterns)
            else:
                normalized.append(path)
    return normalized


def get_files(pattern: str) -> List[str]:
    """Files (not directories) matching a recursive glob pattern, sorted."""
    return sorted(path for path in glob.glob(pattern, recursive=True) if os.path.isfile(path))


def resolve_output_path(output: str, extension: str) -> str:
    """Output file for an output argument.

    An existing directory gets `strings.<extension>` inside it; anything
    else is the file path itself.
    """
    if os.path.isdir(output):
        return os.path.join(output, f"strings.{extension}")
    return output
