"""Path utility module for the SVG icon sprite builder.

Provides centralized path resolution for configuration files, packaged
templates and import patterns, so that sprites, the collector and the
configuration layer agree on how a path is interpreted.
"""

import os
from pathlib import Path

from svg_icon_sprite.exceptions import ConfigFileNotFoundError

# Aliases resolved against the source directory and the project root
SRC_ALIASES = ("~/", "@/")
ROOT_ALIASES = ("~~/", "@@/")


class PathResolver:
    """Centralized utility for path resolution and management.

    Attributes:
        package_root: Directory of the installed package
    """

    def __init__(self) -> None:
        """Initialize the path resolver."""
        self.package_root = Path(__file__).resolve().parent.parent

    def get_config_path(self, config_filename: str = "sprites.yaml") -> Path:
        """Get the path to a configuration file.

        Configuration files are looked up in the current working directory.

        Args:
            config_filename: Name of the configuration file

        Returns:
            Path to the configuration file.
        """
        return Path.cwd() / config_filename

    def get_templates_dir(self) -> Path:
        """Get path to the packaged templates directory.

        Returns:
            Path to the templates directory.
        """
        return self.package_root / "templates"

    def normalize_path(self, path: str | Path) -> Path:
        """Convert a string path to a Path object.

        Args:
            path: String or Path object

        Returns:
            A Path object.
        """
        return Path(path) if isinstance(path, str) else path

    def ensure_dir_exists(self, path: str | Path) -> Path:
        """Ensure a directory exists, creating it if necessary.

        Args:
            path: Directory path

        Returns:
            Path to the directory.
        """
        dir_path = self.normalize_path(path)
        dir_path.mkdir(exist_ok=True, parents=True)
        return dir_path

    def to_absolute(self, path: str | Path, base_dir: str | Path) -> str:
        """Make a path absolute relative to a base directory.

        Args:
            path: Absolute or relative path
            base_dir: Directory that relative paths are resolved against

        Returns:
            The absolute, normalized path as a string.
        """
        if os.path.isabs(path):
            return os.path.normpath(path)
        return os.path.normpath(os.path.join(base_dir, path))

    def resolve_pattern(self, pattern: str, root_dir: str | Path, src_dir: str | Path) -> str:
        """Resolve an import pattern to an absolute glob pattern.

        Ignore patterns (starting with ``!``) and absolute patterns are kept
        as they are. ``~~/`` and ``@@/`` point at the project root, ``~/``
        and ``@/`` at the source directory; any other relative pattern is
        relative to the project root.

        Args:
            pattern: The configured pattern
            root_dir: The project root directory
            src_dir: The source directory

        Returns:
            The resolved pattern.
        """
        if pattern.startswith("!") or os.path.isabs(pattern):
            return pattern

        for alias in ROOT_ALIASES:
            if pattern.startswith(alias):
                return self.to_absolute(pattern[len(alias):], root_dir)

        for alias in SRC_ALIASES:
            if pattern.startswith(alias):
                return self.to_absolute(pattern[len(alias):], src_dir)

        return self.to_absolute(pattern, root_dir)

    def is_within(self, path: str, folder: str) -> bool:
        """Check whether a path is the folder itself or located below it.

        Compares whole path segments, so ``/icons/a`` does not contain
        ``/icons/ab/x.svg``.

        Args:
            path: The path to check
            folder: The folder path

        Returns:
            True if path is inside folder.
        """
        folder = folder.rstrip("/\\")
        if not folder:
            # Filesystem root
            return True
        if path == folder:
            return True
        return path.startswith(folder + os.sep) or path.startswith(folder + "/")


# Create a global instance for easy import
path_resolver = PathResolver()


def validate_config_path(config_path: str | Path | None = None) -> Path:
    """Validate and resolve the configuration file path.

    Args:
        config_path: Optional path to configuration file

    Returns:
        Resolved Path to the configuration file

    Raises:
        ConfigFileNotFoundError: If the configuration file cannot be found
    """
    if config_path is None:
        resolved_path = path_resolver.get_config_path()
    else:
        resolved_path = path_resolver.normalize_path(config_path)

    if not resolved_path.exists():
        error_details = {
            "path": str(resolved_path),
            "cwd": str(Path.cwd()),
        }
        raise ConfigFileNotFoundError(
            f"Configuration file not found: {resolved_path}", error_details
        )

    return resolved_path
