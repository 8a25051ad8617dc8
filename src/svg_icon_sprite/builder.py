"""Entry point wiring configuration, logging and the collector together.

The host build tool creates one SpriteBuilder per build, initializes it and
forwards its file watcher events to it.
"""

from pathlib import Path

from svg_icon_sprite.models.config import AppConfig
from svg_icon_sprite.models.sprite import WatchEvent
from svg_icon_sprite.sprite.collector import Collector
from svg_icon_sprite.utils.logging import setup_logging
from svg_icon_sprite.utils.path_utils import validate_config_path


class SpriteBuilder:
    """Sprite builder configured from a YAML file."""

    def __init__(self, config: AppConfig) -> None:
        """Initialize the builder.

        Args:
            config: Application configuration.
        """
        self.config = config
        self.logger = setup_logging(config.logging, "svg_icon_sprite")
        self.context = config.to_context()
        self.collector = Collector(config.sprites, self.context, logger=self.logger)

    @classmethod
    def from_yaml(cls, config_path: str | Path | None = None) -> "SpriteBuilder":
        """Create a builder from a configuration file.

        Args:
            config_path: Path to the configuration file. Defaults to
                ``sprites.yaml`` in the current working directory.

        Returns:
            The builder.

        Raises:
            ConfigFileNotFoundError: If the configuration file does not exist.
        """
        return cls(AppConfig.from_yaml(validate_config_path(config_path)))

    async def start(self) -> None:
        """Collect all sprites and generate the initial exports."""
        self.logger.info(
            f"Building {len(self.config.sprites)} sprites from {self.context.src_dir}"
        )
        await self.collector.init()

    async def on_watch_event(self, event: WatchEvent | str, path: str) -> bool:
        """Forward a file watcher event to the collector.

        Args:
            event: Kind of the event.
            path: Path of the affected file or directory.

        Returns:
            True if the exports were regenerated.
        """
        changed = await self.collector.handle_watch_event(event, path)
        if changed:
            self.logger.info(f"Sprites updated after {WatchEvent(event).value} {path}")
        return changed
