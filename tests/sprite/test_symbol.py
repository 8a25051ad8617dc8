"""Tests for SpriteSymbol."""

import asyncio
import xml.etree.ElementTree as ET
from collections.abc import Callable
from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from svg_icon_sprite.exceptions import EmptyIdentifierError
from svg_icon_sprite.models.config import SpriteConfig
from svg_icon_sprite.models.sprite import ProcessorContext
from svg_icon_sprite.processors import force_current_color, remove_sizes
from svg_icon_sprite.sprite.symbol import SpriteSymbol
from svg_icon_sprite.utils import file_utils


@pytest.fixture()
def mock_logger() -> MagicMock:
    """Create a logger mock."""
    return MagicMock()


class TestIdentifier:
    """Test how symbol ids are derived."""

    def test_id_from_file_name(self) -> None:
        """Test the id is derived from the file name stem."""
        assert SpriteSymbol("/icons/My Icon.svg").id == "My-Icon"
        assert SpriteSymbol("/icons/123.svg").id == "id-123"

    def test_empty_id_raises(self) -> None:
        """Test construction fails when no id can be derived."""
        with pytest.raises(EmptyIdentifierError):
            SpriteSymbol("/icons/ .svg")


class TestGetProcessed:
    """Test processing of symbol files."""

    @pytest.mark.asyncio()
    async def test_processed_content(self, write_svg: Callable[..., str]) -> None:
        """Test root attributes and inner markup are returned."""
        path = write_svg("icons/arrow.svg")
        processed = await SpriteSymbol(path).get_processed()

        assert processed is not None
        assert processed.attributes == {
            "xmlns": "http://www.w3.org/2000/svg",
            "viewBox": "0 0 24 24",
            "width": "24",
            "height": "24",
            "id": "arrow",
        }
        assert processed.content == '<path d="M0 0h24v24H0z" fill="red"></path>'

    @pytest.mark.asyncio()
    async def test_existing_id_overwritten(self, write_svg: Callable[..., str]) -> None:
        """Test an id on the root element is replaced by the symbol id."""
        path = write_svg("icons/arrow.svg", '<svg id="original"><g/></svg>')
        processed = await SpriteSymbol(path).get_processed()

        assert processed is not None
        assert processed.attributes == {"id": "arrow"}

    @pytest.mark.asyncio()
    async def test_whitespace_and_prolog(self, write_svg: Callable[..., str]) -> None:
        """Test surrounding whitespace and an XML declaration are accepted."""
        path = write_svg("icons/a.svg", '\n  <?xml version="1.0"?>\n<svg><g/></svg>\n\n')
        processed = await SpriteSymbol(path).get_processed()

        assert processed is not None
        assert processed.content == "<g></g>"

    @pytest.mark.asyncio()
    async def test_processors_applied(self, write_svg: Callable[..., str]) -> None:
        """Test symbol processors run in configured order."""
        path = write_svg("icons/arrow.svg")
        config = SpriteConfig(process_sprite_symbol=[remove_sizes(), force_current_color()])
        processed = await SpriteSymbol(path, config).get_processed()

        assert processed is not None
        assert "width" not in processed.attributes
        assert 'fill="currentColor"' in processed.content

    @pytest.mark.asyncio()
    async def test_processor_context(self, write_svg: Callable[..., str]) -> None:
        """Test processors receive the symbol id and file path."""
        path = write_svg("icons/arrow.svg")
        processor = MagicMock(return_value=None)
        await SpriteSymbol(path, SpriteConfig(process_sprite_symbol=[processor])).get_processed()

        svg, context = processor.call_args[0]
        assert isinstance(svg, ET.Element)
        assert context == ProcessorContext(id="arrow", file_path=path)

    @pytest.mark.asyncio()
    async def test_memoized(self, write_svg: Callable[..., str]) -> None:
        """Test the file is read once until the symbol is reset."""
        path = write_svg("icons/arrow.svg")
        symbol = SpriteSymbol(path)

        with patch(
            "svg_icon_sprite.utils.file_utils.read_text", wraps=file_utils.read_text
        ) as mock_read:
            first = await symbol.get_processed()
            second = await symbol.get_processed()

        assert first is second
        assert mock_read.call_count == 1

    @pytest.mark.asyncio()
    async def test_concurrent_calls_read_once(self, write_svg: Callable[..., str]) -> None:
        """Test overlapping calls share one computation."""
        symbol = SpriteSymbol(write_svg("icons/arrow.svg"))

        with patch(
            "svg_icon_sprite.utils.file_utils.read_text", wraps=file_utils.read_text
        ) as mock_read:
            results = await asyncio.gather(*(symbol.get_processed() for _ in range(5)))

        assert mock_read.call_count == 1
        assert all(result is results[0] for result in results)

    @pytest.mark.asyncio()
    async def test_reset_reads_again(self, write_svg: Callable[..., str]) -> None:
        """Test reset makes the next call read the file again."""
        path = write_svg("icons/arrow.svg", "<svg><g/></svg>")
        symbol = SpriteSymbol(path)
        assert (await symbol.get_processed()).content == "<g></g>"  # type: ignore[union-attr]

        Path(path).write_text("<svg><circle/></svg>", encoding="utf-8")
        assert (await symbol.get_processed()).content == "<g></g>"  # type: ignore[union-attr]

        symbol.reset()
        processed = await symbol.get_processed()
        assert processed is not None
        assert processed.content == "<circle></circle>"


class TestFailures:
    """Test that processing failures yield None and a warning."""

    @pytest.mark.asyncio()
    @pytest.mark.parametrize(
        ("markup", "message"),
        [
            ("", "SVG file is empty"),
            ("   \n ", "SVG file is empty"),
            ("<div><span/></div>", "does not contain an <svg> element"),
            ("<svg><g></svg>", "Failed to parse SVG"),
            ("<!-- <svg> --><div/>", "No <svg> root element found"),
        ],
    )
    async def test_invalid_content(
        self,
        write_svg: Callable[..., str],
        mock_logger: MagicMock,
        markup: str,
        message: str,
    ) -> None:
        """Test invalid files are skipped with a warning naming the file."""
        path = write_svg("icons/broken.svg", markup)
        result = await SpriteSymbol(path, logger=mock_logger).get_processed()

        assert result is None
        mock_logger.warning.assert_called_once()
        warning = mock_logger.warning.call_args[0][0]
        assert path in warning
        assert message in warning

    @pytest.mark.asyncio()
    async def test_missing_file(self, tmp_path: Path, mock_logger: MagicMock) -> None:
        """Test a missing file yields None."""
        symbol = SpriteSymbol(str(tmp_path / "missing.svg"), logger=mock_logger)

        assert await symbol.get_processed() is None
        mock_logger.warning.assert_called_once()

    @pytest.mark.asyncio()
    async def test_processor_error(
        self, write_svg: Callable[..., str], mock_logger: MagicMock
    ) -> None:
        """Test a failing processor only removes its own symbol."""

        def failing(svg: ET.Element, context: ProcessorContext) -> None:
            raise RuntimeError("broken processor")

        path = write_svg("icons/arrow.svg")
        symbol = SpriteSymbol(path, SpriteConfig(process_sprite_symbol=[failing]), mock_logger)

        assert await symbol.get_processed() is None
        assert "broken processor" in mock_logger.warning.call_args[0][0]

    @pytest.mark.asyncio()
    async def test_failure_is_memoized(
        self, write_svg: Callable[..., str], mock_logger: MagicMock
    ) -> None:
        """Test a failed result is kept until reset."""
        path = write_svg("icons/broken.svg", "")
        symbol = SpriteSymbol(path, logger=mock_logger)

        assert await symbol.get_processed() is None
        assert await symbol.get_processed() is None
        assert mock_logger.warning.call_count == 1

        Path(path).write_text("<svg/>", encoding="utf-8")
        symbol.reset()
        assert await symbol.get_processed() is not None
