"""Collector owning all sprites and the data exported from them."""

import asyncio
import logging
import re

from svg_icon_sprite.constants import EMPTY_SPRITE_MARKUP, SVG_FILE_SUFFIX
from svg_icon_sprite.models.config import SpriteConfig
from svg_icon_sprite.models.sprite import (
    BuildContext,
    ExportTables,
    SymbolContent,
    SymbolLoader,
    WatchEvent,
)
from svg_icon_sprite.sprite.exporter import ModuleRenderer
from svg_icon_sprite.sprite.sprite import Sprite
from svg_icon_sprite.utils.logging import log_context
from svg_icon_sprite.utils.path_utils import path_resolver

# File name of a sprite requested from the development route
_DEV_SPRITE_FILE = re.compile(r"^sprite\.(?P<name>.+)\.(?P<hash>[^.]+)\.svg$")


def _make_loader(content: SymbolContent) -> SymbolLoader:
    async def load() -> SymbolContent:
        return content

    return load


class Collector:
    """Owner of all configured sprites.

    Routes filesystem events to the sprites and regenerates the export tables
    whenever a sprite reports a change. Events are handled one at a time, so
    the tables always reflect the last event that completed.

    Attributes:
        sprites: Sprites by name, in configuration order
        context: Build-wide settings
        exports: Tables generated from the current state of all sprites
        renderer: Renderer of the generated data modules
        logger: Logger instance
    """

    def __init__(
        self,
        sprites_config: dict[str, SpriteConfig],
        context: BuildContext,
        logger: logging.Logger | None = None,
        renderer: ModuleRenderer | None = None,
    ) -> None:
        """Initialize the collector.

        Args:
            sprites_config: Configuration of every sprite by name
            context: Build-wide settings
            logger: Logger passed on to sprites and symbols
            renderer: Renderer of the generated data modules
        """
        self.context = context
        self.logger = logger or logging.getLogger(__name__)
        self.renderer = renderer or ModuleRenderer()
        self.sprites: dict[str, Sprite] = {
            name: Sprite(name, config, context, logger=self.logger)
            for name, config in sprites_config.items()
        }
        self.exports = ExportTables()
        self._lock = asyncio.Lock()

    async def init(self) -> None:
        """Initialize all sprites and generate the export tables."""
        async with self._lock:
            await asyncio.gather(*(sprite.init() for sprite in self.sprites.values()))
            await self.regenerate_exports()
        self.logger.info(
            f"Collected {len(self.exports.symbol_names)} symbols in {len(self.sprites)} sprites"
        )

    async def regenerate_exports(self) -> ExportTables:
        """Rebuild the export tables from the current state of all sprites.

        Returns:
            The new export tables, also stored as ``exports``.
        """
        sprite_paths: dict[str, str] = {}
        inline_symbols: dict[str, SymbolContent] = {}

        for sprite in self.sprites.values():
            sprite_paths[sprite.name] = await self._get_sprite_path(sprite)

            prefix = sprite.get_prefix()
            for symbol, processed in await sprite.get_processed_symbols():
                inline_symbols.setdefault(
                    prefix + symbol.id,
                    SymbolContent(attributes=processed.attributes, content=processed.content),
                )

        symbol_names = sorted(inline_symbols)
        self.exports = ExportTables(
            sprite_paths=sprite_paths,
            symbol_names=symbol_names,
            inline_symbols={name: inline_symbols[name] for name in symbol_names},
            symbol_loaders={name: _make_loader(inline_symbols[name]) for name in symbol_names},
        )
        return self.exports

    async def dispatch(self, event: WatchEvent | str, path: str = "") -> bool:
        """Route a filesystem event to every sprite.

        Args:
            event: Kind of the event
            path: Absolute path of the affected file or directory

        Returns:
            True if any sprite changed and the exports were regenerated.
        """
        event = WatchEvent(event)
        async with self._lock:
            with log_context(watch_event=event.value, path=path or None):
                results = await asyncio.gather(
                    *(self._handle(sprite, event, path) for sprite in self.sprites.values())
                )
                if not any(results):
                    return False

                self.logger.debug(f"Regenerating exports after {event.value} {path}")
                await self.regenerate_exports()
                return True

    async def handle_watch_event(self, event: WatchEvent | str, path: str) -> bool:
        """Handle an event reported by a file watcher.

        File events are only handled for SVG files. Relative paths are
        resolved against the source directory.

        Args:
            event: Kind of the event
            path: Path of the affected file or directory

        Returns:
            True if any sprite changed.
        """
        event = WatchEvent(event)
        if event.is_file_event and not path.endswith(SVG_FILE_SUFFIX):
            return False

        return await self.dispatch(event, path_resolver.to_absolute(path, self.context.src_dir))

    async def get_dev_sprite(self, file_name: str) -> str:
        """Get the sprite document requested from the development route.

        Args:
            file_name: Requested file name or path ending in ``sprite.<name>.<hash>.svg``

        Returns:
            The sprite markup, or an empty SVG if no such sprite exists.
        """
        match = _DEV_SPRITE_FILE.match(file_name.rsplit("/", 1)[-1])
        sprite = self.sprites.get(match.group("name")) if match else None
        if sprite is None:
            return EMPTY_SPRITE_MARKUP

        return (await sprite.get_sprite()).content

    def render_runtime_module(self) -> str:
        """Render the runtime module from the current exports."""
        return self.renderer.render_runtime_module(
            sprite_paths=self.exports.sprite_paths,
            runtime_options=self.context.runtime_options.to_runtime(),
            symbol_names=self.exports.symbol_names,
        )

    def render_runtime_types(self) -> str:
        """Render the type declarations of the runtime module."""
        return self.renderer.render_runtime_types(self.exports.symbol_names)

    def render_symbol_import_module(self) -> str:
        """Render the symbol import module from the current exports."""
        return self.renderer.render_symbol_import_module(
            inline_symbols={
                name: self._to_record(content)
                for name, content in self.exports.inline_symbols.items()
            },
            dev=self.context.dev,
            symbol_import_base=self.context.symbol_import_base,
        )

    def render_symbol_import_types(self) -> str:
        """Render the type declarations of the symbol import module."""
        return self.renderer.render_symbol_import_types()

    def render_symbol_module(self, name: str) -> str:
        """Render the module of a single symbol.

        Args:
            name: Composite name of the symbol

        Returns:
            The rendered module source.

        Raises:
            KeyError: If no symbol with this name exists.
        """
        return self.renderer.render_symbol_module(
            self._to_record(self.exports.inline_symbols[name])
        )

    @staticmethod
    def _to_record(content: SymbolContent) -> dict[str, object]:
        return {"content": content.content, "attributes": content.attributes}

    async def _get_sprite_path(self, sprite: Sprite) -> str:
        if self.context.dev:
            sprite_content = await sprite.get_sprite()
            route = self.context.dev_route.rstrip("/")
            return f"{route}/sprite.{sprite.name}.{sprite_content.hash}.svg"
        return self.context.build_assets_dir + await sprite.get_sprite_file_name()

    async def _handle(self, sprite: Sprite, event: WatchEvent, path: str) -> bool:
        if event is WatchEvent.ADD:
            return await sprite.handle_add(path)
        if event is WatchEvent.CHANGE:
            return await sprite.handle_change(path)
        if event is WatchEvent.UNLINK:
            return await sprite.handle_unlink(path)
        if event is WatchEvent.ADD_DIR:
            return await sprite.handle_add_dir()
        return await sprite.handle_unlink_dir(path)
