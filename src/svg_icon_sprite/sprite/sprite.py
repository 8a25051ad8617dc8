"""A sprite combining the symbols of one configuration entry into one SVG."""

import asyncio
import hashlib
import logging
import os
import xml.etree.ElementTree as ET

from svg_icon_sprite.constants import (
    DEFAULT_SPRITE_NAME,
    SPRITE_FILE_EXTENSION,
    SPRITE_FILE_PREFIX,
    SPRITE_HASH_LENGTH,
    SPRITE_SVG_VERSION,
    SVG_NAMESPACE,
)
from svg_icon_sprite.models.config import SpriteConfig
from svg_icon_sprite.models.sprite import (
    BuildContext,
    ProcessedSymbol,
    ProcessorContext,
    SpriteContent,
)
from svg_icon_sprite.processors import as_processor_list, run_processors
from svg_icon_sprite.sprite.symbol import SpriteSymbol
from svg_icon_sprite.utils import file_utils
from svg_icon_sprite.utils.cache_manager import AsyncMemo
from svg_icon_sprite.utils.logging import log_context
from svg_icon_sprite.utils.path_utils import path_resolver
from svg_icon_sprite.utils.svg_utils import build_element, to_string


class Sprite:
    """A named collection of symbols rendered into one SVG document.

    The symbol list is mutated only by ``init`` and the event handlers. The
    generated document and its hash are memoized until ``reset`` is called;
    every handler that changes the symbol list resets the sprite.

    Attributes:
        name: Name of the sprite, ``default`` for the unprefixed sprite
        config: Configuration of the sprite
        context: Build-wide settings
        symbols: Symbols in discovery order
        processors: Processors run on the assembled sprite
        logger: Logger instance
    """

    def __init__(
        self,
        name: str,
        config: SpriteConfig,
        context: BuildContext,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the sprite.

        Args:
            name: Name of the sprite
            config: Configuration of the sprite
            context: Build-wide settings
            logger: Logger passed on to the symbols
        """
        self.name = name
        self.config = config
        self.context = context
        self.symbols: list[SpriteSymbol] = []
        self.processors = as_processor_list(config.process_sprite)
        self.logger = logger or logging.getLogger(__name__)
        self._sprite = AsyncMemo(self._generate, name=f"sprite {name}")

    async def init(self) -> None:
        """Create a symbol for every file matched by the configured patterns.

        Files matched by the patterns come first, followed by the explicitly
        configured symbol files.
        A file whose id is already used by an earlier file is skipped with a
        warning, since symbol ids are unique within a sprite.

        Raises:
            EmptyIdentifierError: If no id can be derived from a file name.
        """
        with log_context(sprite=self.name):
            paths = await self._resolve_pattern_files()
            paths += [
                path_resolver.to_absolute(path, self.context.src_dir)
                for path in self.config.symbol_files.values()
            ]

            self.symbols = []
            for path in dict.fromkeys(paths):
                self._add_symbol(path)

            if not self.symbols:
                self.logger.error(f"No symbols found for sprite {self.name}")
            else:
                self.logger.debug(
                    f"Sprite {self.name} initialized with {len(self.symbols)} symbols"
                )
        self.reset()

    async def get_processed_symbols(self) -> list[tuple[SpriteSymbol, ProcessedSymbol]]:
        """Process all symbols concurrently.

        Returns:
            Symbols that were processed successfully with their result, sorted by id.
        """
        symbols = list(self.symbols)
        results = await asyncio.gather(*(symbol.get_processed() for symbol in symbols))

        processed = [
            (symbol, result)
            for symbol, result in zip(symbols, results, strict=True)
            if result is not None
        ]
        return sorted(processed, key=lambda item: item[0].id)

    async def get_sprite(self) -> SpriteContent:
        """Get the sprite document and its hash.

        Returns:
            The generated sprite.

        Raises:
            Exception: Any exception raised by a sprite processor.
        """
        return await self._sprite.get()

    def reset(self) -> None:
        """Discard the generated sprite. Symbols keep their processed content."""
        self._sprite.reset()

    async def get_sprite_file_name(self) -> str:
        """Get the file name of the sprite, including its content hash.

        Returns:
            File name in the form ``sprite-<name>.<hash>.svg``.
        """
        sprite = await self.get_sprite()
        return f"{SPRITE_FILE_PREFIX}-{self.name}.{sprite.hash}{SPRITE_FILE_EXTENSION}"

    def get_prefix(self) -> str:
        """Get the prefix of the public names of the symbols in this sprite."""
        if self.name == DEFAULT_SPRITE_NAME:
            return ""
        return f"{self.name}/"

    async def handle_add(self, file_path: str) -> bool:
        """Handle a file that was added.

        Args:
            file_path: Absolute path of the added file

        Returns:
            True if the file belongs to this sprite and was added. A file whose
            symbol id is already taken is not added.
        """
        file_path = os.path.normpath(file_path)
        if self._find_symbol(file_path) is not None:
            return False

        if file_path not in await self._resolve_pattern_files():
            return False

        if not self._add_symbol(file_path):
            return False

        self.logger.debug(f"Added {file_path} to sprite {self.name}")
        self.reset()
        return True

    async def handle_change(self, file_path: str) -> bool:
        """Handle a file whose content changed.

        Args:
            file_path: Absolute path of the changed file

        Returns:
            True if the file belongs to this sprite.
        """
        symbol = self._find_symbol(os.path.normpath(file_path))
        if symbol is None:
            return False

        symbol.reset()
        self.reset()
        return True

    async def handle_unlink(self, file_path: str) -> bool:
        """Handle a file that was removed.

        Args:
            file_path: Absolute path of the removed file

        Returns:
            True if the file belonged to this sprite.
        """
        symbol = self._find_symbol(os.path.normpath(file_path))
        if symbol is None:
            return False

        self.symbols.remove(symbol)
        self.logger.debug(f"Removed {file_path} from sprite {self.name}")
        self.reset()
        return True

    async def handle_add_dir(self) -> bool:
        """Handle a directory that was added by adding all newly matched files.

        Returns:
            True if at least one symbol was added.
        """
        owned = {symbol.file_path for symbol in self.symbols}
        added = 0
        for path in await self._resolve_pattern_files():
            if path not in owned and self._add_symbol(path):
                added += 1
        if not added:
            return False

        self.reset()
        return True

    async def handle_unlink_dir(self, folder_path: str) -> bool:
        """Handle a directory that was removed.

        Args:
            folder_path: Absolute path of the removed directory

        Returns:
            True if at least one symbol was inside the directory.
        """
        folder_path = os.path.normpath(folder_path)
        remaining = [
            symbol
            for symbol in self.symbols
            if not path_resolver.is_within(symbol.file_path, folder_path)
        ]
        if len(remaining) == len(self.symbols):
            return False

        self.symbols = remaining
        self.reset()
        return True

    def _add_symbol(self, file_path: str) -> bool:
        symbol = SpriteSymbol(file_path, self.config, logger=self.logger)
        existing = next((s for s in self.symbols if s.id == symbol.id), None)
        if existing is not None:
            self.logger.warning(
                f"Skipping {file_path} in sprite {self.name}: "
                f"symbol id {symbol.id} is already used by {existing.file_path}"
            )
            return False

        self.symbols.append(symbol)
        return True

    def _find_symbol(self, file_path: str) -> SpriteSymbol | None:
        return next((s for s in self.symbols if s.file_path == file_path), None)

    async def _resolve_pattern_files(self) -> list[str]:
        return await asyncio.to_thread(
            file_utils.resolve_files, self.context.src_dir, self.config.import_patterns
        )

    async def _generate(self) -> SpriteContent:
        """Assemble the sprite document from the processed symbols.

        Returns:
            The sprite content and its hash.
        """
        svg = ET.Element("svg", {"xmlns": SVG_NAMESPACE, "version": SPRITE_SVG_VERSION})
        defs = ET.SubElement(svg, "defs")

        with log_context(sprite=self.name):
            for symbol, processed in await self.get_processed_symbols():
                if self.context.dev:
                    defs.append(ET.Comment(f" File: {symbol.file_path} "))
                defs.append(build_element("symbol", processed.attributes, processed.content))

            await run_processors(self.processors, svg, ProcessorContext(id=self.name))

        content = to_string(svg)
        content_hash = hashlib.sha256(content.encode("utf-8")).hexdigest()[:SPRITE_HASH_LENGTH]
        self.logger.debug(f"Generated sprite {self.name} with hash {content_hash}")
        return SpriteContent(hash=content_hash, content=content)
