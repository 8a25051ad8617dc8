"""Fixtures for processor tests."""

from collections.abc import Callable

import pytest

from svg_icon_sprite.models.sprite import ProcessorContext
from svg_icon_sprite.processors import Processor
from svg_icon_sprite.utils.svg_utils import parse_svg, to_string


@pytest.fixture()
def apply_processor() -> Callable[..., str]:
    """Get a function running a synchronous processor on markup."""

    def apply(processor: Processor, markup: str, context_id: str = "test") -> str:
        svg = parse_svg(markup)
        assert svg is not None
        processor(svg, ProcessorContext(id=context_id, file_path="/icons/test.svg"))
        return to_string(svg)

    return apply
