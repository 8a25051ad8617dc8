"""File system abstraction for the SVG icon sprite builder.

Provides a consistent interface for file system operations across the
application, including text reading and glob pattern resolution.
This module works with path_utils.py so that every component reads icons and
resolves import patterns the same way.
"""

import glob
import os
from fnmatch import fnmatch
from pathlib import Path

from svg_icon_sprite.utils.path_utils import path_resolver

# Type aliases for clarity and documentation
PathLike = str | Path


def read_text(file_path: PathLike) -> str:
    """Read text content from a file.

    Args:
        file_path: Path to the file (string or Path object)

    Returns:
        The text content of the file

    Raises:
        FileNotFoundError: If the file does not exist
        PermissionError: If the file cannot be read due to permissions
        UnicodeDecodeError: If the file content cannot be decoded as text
    """
    normalized_path = path_resolver.normalize_path(file_path)
    with open(normalized_path, encoding="utf-8") as f:
        return f.read()


def ensure_dir_exists(dir_path: PathLike) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Wrapper around path_resolver.ensure_dir_exists for API consistency.

    Args:
        dir_path: Directory path (string or Path object)

    Returns:
        Path to the directory
    """
    return path_resolver.ensure_dir_exists(dir_path)


def resolve_files(base_dir: PathLike, patterns: list[str]) -> list[str]:
    """Resolve glob patterns to a sorted list of absolute file paths.

    Relative patterns are resolved against base_dir. Patterns starting with
    ``!`` exclude every file they match. ``**`` matches any number of
    directories. Symbolic links to directories are not followed.

    Args:
        base_dir: Directory that relative patterns are resolved against
        patterns: Glob patterns, optionally negated with a leading ``!``

    Returns:
        Absolute paths of all matching files, sorted and without duplicates.
    """
    base = str(base_dir)
    include = [p for p in patterns if not p.startswith("!")]
    exclude = [path_resolver.to_absolute(p[1:], base) for p in patterns if p.startswith("!")]

    found: set[str] = set()
    for pattern in include:
        absolute_pattern = path_resolver.to_absolute(pattern, base)
        for match in glob.iglob(absolute_pattern, recursive=True):
            if os.path.isfile(match) and not _has_linked_dir(match, absolute_pattern):
                found.add(os.path.normpath(match))

    return sorted(
        path for path in found if not any(fnmatch(path, pattern) for pattern in exclude)
    )


def _has_linked_dir(path: str, pattern: str) -> bool:
    """Check whether a match was reached through a symlinked directory.

    Only the part of the path below the static prefix of the pattern is
    checked, as links above it are part of the configured location.

    Args:
        path: The matched file path
        pattern: The absolute pattern that produced the match

    Returns:
        True if any directory between the pattern prefix and the file is a link.
    """
    static_prefix = pattern.split("*", 1)[0].split("?", 1)[0].split("[", 1)[0]
    static_dir = os.path.dirname(static_prefix)
    current = os.path.dirname(path)
    while len(current) > len(static_dir) and current.startswith(static_dir):
        if os.path.islink(current):
            return True
        current = os.path.dirname(current)
    return False
