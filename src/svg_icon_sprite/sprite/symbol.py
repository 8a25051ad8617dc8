"""A single SVG icon that becomes a <symbol> in a sprite."""

import asyncio
import logging
import os
import xml.etree.ElementTree as ET

from svg_icon_sprite.exceptions import (
    EmptySvgError,
    InvalidSvgError,
    MissingSvgRootError,
    chain_exception,
)
from svg_icon_sprite.models.config import SpriteConfig
from svg_icon_sprite.models.sprite import ProcessedSymbol, ProcessorContext
from svg_icon_sprite.processors import as_processor_list, run_processors
from svg_icon_sprite.utils import file_utils
from svg_icon_sprite.utils.cache_manager import AsyncMemo
from svg_icon_sprite.utils.identifier import to_valid_id
from svg_icon_sprite.utils.logging import log_context
from svg_icon_sprite.utils.svg_utils import inner_markup, parse_svg


class SpriteSymbol:
    """An SVG file and its lazily processed content.

    The id is derived from the file name and fixed for the lifetime of the
    symbol. Processing is memoized until ``reset`` is called; a symbol whose
    file cannot be processed yields None instead of raising.

    Attributes:
        file_path: Absolute path of the source SVG file
        id: Identifier of the symbol within its sprite
        processors: Processors run on the parsed <svg> element
        logger: Logger instance
    """

    def __init__(
        self,
        file_path: str,
        config: SpriteConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        """Initialize the symbol.

        Args:
            file_path: Absolute path of the source SVG file
            config: Configuration of the owning sprite
            logger: Logger used for processing failures

        Raises:
            EmptyIdentifierError: If no id can be derived from the file name.
        """
        self.file_path = file_path
        self.id = to_valid_id(os.path.splitext(os.path.basename(file_path))[0])
        self.processors = as_processor_list(config.process_sprite_symbol if config else None)
        self.logger = logger or logging.getLogger(__name__)
        self._processed = AsyncMemo(self._process, name=f"symbol {self.id}")

    def __repr__(self) -> str:
        return f"SpriteSymbol(id={self.id!r}, file_path={self.file_path!r})"

    async def get_processed(self) -> ProcessedSymbol | None:
        """Get the processed symbol.

        Returns:
            The processed symbol, or None if the file could not be processed.
        """
        return await self._processed.get()

    def reset(self) -> None:
        """Discard the processed content so it is read again on next access."""
        self._processed.reset()

    async def _process(self) -> ProcessedSymbol | None:
        with log_context(symbol=self.id):
            return await self._process_file()

    async def _process_file(self) -> ProcessedSymbol | None:
        try:
            markup = (await asyncio.to_thread(file_utils.read_text, self.file_path)).strip()
            svg = self._parse(markup)

            await run_processors(
                self.processors, svg, ProcessorContext(id=self.id, file_path=self.file_path)
            )

            attributes = {**svg.attrib, "id": self.id}
            return ProcessedSymbol(attributes=attributes, content=inner_markup(svg))
        except Exception as e:
            self.logger.warning(f"Failed to process SVG symbol {self.file_path}: {e}")
            return None

    def _parse(self, markup: str) -> ET.Element:
        """Parse the markup of the file and return its <svg> element.

        Args:
            markup: Trimmed file content

        Returns:
            The <svg> element.

        Raises:
            EmptySvgError: If the file is empty.
            InvalidSvgError: If the file is not SVG markup.
            MissingSvgRootError: If no <svg> element is found.
        """
        details = {"path": self.file_path}
        if not markup:
            raise EmptySvgError("SVG file is empty", details)
        if "<svg" not in markup:
            raise InvalidSvgError("File does not contain an <svg> element", details)

        try:
            svg = parse_svg(markup)
        except ET.ParseError as e:
            raise chain_exception(InvalidSvgError("Failed to parse SVG", details), e)

        if svg is None:
            raise MissingSvgRootError("No <svg> root element found", details)
        return svg
