"""Configuration models for the SVG icon sprite builder.

Defines Pydantic models for sprite configuration, logging options and the
application configuration loaded from a YAML file.
"""

import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field, field_validator, model_validator

from svg_icon_sprite.constants import (
    DEFAULT_BUILD_ASSETS_DIR,
    DEFAULT_IMPORT_PATTERNS,
    DEFAULT_SPRITE_NAME,
)
from svg_icon_sprite.exceptions import ConfigurationError
from svg_icon_sprite.models.sprite import BuildContext, RuntimeOptions
from svg_icon_sprite.processors import resolve_processor
from svg_icon_sprite.utils.path_utils import path_resolver


def _join_url(*parts: str) -> str:
    """Join URL path segments with single slashes, keeping a leading and trailing slash."""
    segments = [segment for part in parts for segment in part.split("/") if segment]
    if not segments:
        return "/"
    return "/" + "/".join(segments) + "/"


class SpriteConfig(BaseModel):
    """Configuration of a single sprite.

    Attributes:
        import_patterns: Glob patterns of the SVG files added to the sprite.
            Patterns starting with ``!`` exclude files.
        symbol_files: Additional SVG files, keyed by a descriptive name. The
            symbol id is always derived from the file name.
        process_sprite_symbol: Processors run on every symbol
        process_sprite: Processors run on the assembled sprite
    """

    import_patterns: list[str] = Field(default_factory=list)
    symbol_files: dict[str, str] = Field(default_factory=dict)
    process_sprite_symbol: list[Callable[..., Any]] = Field(default_factory=list)
    process_sprite: list[Callable[..., Any]] = Field(default_factory=list)

    @field_validator("import_patterns", mode="before")
    @classmethod
    def validate_import_patterns(cls, v: Any) -> Any:
        """Accept a single pattern in place of a list.

        Args:
            v: The configured patterns.

        Returns:
            The patterns as a list.
        """
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("process_sprite_symbol", "process_sprite", mode="before")
    @classmethod
    def validate_processors(cls, v: Any) -> list[Callable[..., Any]]:
        """Resolve processor specifications into processors.

        Args:
            v: A processor, a processor specification or a list of them.

        Returns:
            The processors in configured order.

        Raises:
            ValueError: If a specification names an unknown processor.
        """
        if v is None:
            return []
        if callable(v) or isinstance(v, str | dict):
            v = [v]

        try:
            return [resolve_processor(spec) for spec in v]
        except ConfigurationError as e:
            raise ValueError(str(e)) from e


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: str | None = None
    format: str = "json"
    max_size_mb: int = 5
    backup_count: int = 3

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate the log format is one of the supported renderers.

        Args:
            v: The log format.

        Returns:
            The validated format.

        Raises:
            ValueError: If the format is neither json nor console.
        """
        if v.lower() not in ("json", "console"):
            raise ValueError("Log format must be 'json' or 'console'")
        return v


class AppConfig(BaseModel):
    """Main application configuration.

    Relative directories are resolved against the current working directory.
    Import patterns may start with ``~/`` or ``@/`` (source directory) or
    ``~~/`` or ``@@/`` (project root); other relative patterns are relative
    to the project root.
    """

    sprites: dict[str, SpriteConfig] = Field(default_factory=dict)
    aria_hidden: bool = False
    dev: bool = False
    root_dir: str = Field(default_factory=os.getcwd)
    src_dir: str | None = None
    base_url: str = "/"
    build_assets_dir: str = DEFAULT_BUILD_ASSETS_DIR
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def resolve_sprites(self) -> "AppConfig":
        """Resolve directories and import patterns and add the default sprite.

        Returns:
            The configuration with absolute directories and patterns.
        """
        self.root_dir = os.path.abspath(self.root_dir)
        self.src_dir = path_resolver.to_absolute(self.src_dir or self.root_dir, self.root_dir)

        sprites = dict(self.sprites)
        if DEFAULT_SPRITE_NAME not in sprites:
            sprites[DEFAULT_SPRITE_NAME] = SpriteConfig(
                import_patterns=list(DEFAULT_IMPORT_PATTERNS)
            )

        self.sprites = {
            name: sprite.model_copy(
                update={
                    "import_patterns": [
                        path_resolver.resolve_pattern(pattern, self.root_dir, self.src_dir)
                        for pattern in sprite.import_patterns
                    ],
                    "symbol_files": {
                        key: path_resolver.to_absolute(path, self.src_dir)
                        for key, path in sprite.symbol_files.items()
                    },
                }
            )
            for name, sprite in sprites.items()
        }
        return self

    def to_context(self) -> BuildContext:
        """Create the build context shared by the collector and all sprites.

        Returns:
            The build context.
        """
        return BuildContext(
            dev=self.dev,
            root_dir=self.root_dir,
            src_dir=self.src_dir or self.root_dir,
            build_assets_dir=_join_url(self.base_url, self.build_assets_dir),
            runtime_options=RuntimeOptions(aria_hidden=self.aria_hidden),
        )

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> "AppConfig":
        """Load configuration from YAML file.

        Args:
            config_path: Path to the YAML configuration file. Can be a string path
                or a Path object.

        Returns:
            An initialized AppConfig object with values from the YAML file.

        Raises:
            FileNotFoundError: If the specified config file doesn't exist.
            yaml.YAMLError: If the YAML file has invalid syntax.
            ValidationError: If the configuration values don't match the expected schema.
        """
        import yaml

        # Use direct import to avoid circular imports
        from svg_icon_sprite.utils.file_utils import read_text

        path = path_resolver.normalize_path(config_path)

        yaml_content = read_text(path)
        config_data = yaml.safe_load(yaml_content) or {}

        return cls.model_validate(config_data)
