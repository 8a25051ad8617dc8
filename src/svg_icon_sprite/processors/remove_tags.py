"""Processor removing unwanted elements."""

import xml.etree.ElementTree as ET

from cssselect import SelectorError

from svg_icon_sprite.exceptions import InvalidConfigError, chain_exception
from svg_icon_sprite.models.sprite import ProcessorContext
from svg_icon_sprite.processors.base import Processor
from svg_icon_sprite.utils.svg_utils import (
    css_to_xpath,
    parent_map,
    remove_element,
    select_elements,
)


def remove_tags(tags: list[str] | str) -> Processor:
    """Create a processor removing every element matching the given selectors.

    Selectors are CSS selectors matched against the elements below the root,
    e.g. ``title``, ``rect[fill="red"]`` or ``g > text``.

    Args:
        tags: Selectors of the elements to remove

    Returns:
        The processor.

    Raises:
        InvalidConfigError: If a selector cannot be parsed.
    """
    selectors = [tags] if isinstance(tags, str) else list(tags)
    try:
        expressions = [css_to_xpath(selector) for selector in selectors]
    except SelectorError as e:
        raise chain_exception(
            InvalidConfigError(f"Invalid selector for remove_tags: {e}", {"tags": selectors}), e
        )

    def process(svg: ET.Element, context: ProcessorContext) -> None:
        if not expressions:
            return

        matches = select_elements(svg, expressions)
        if not matches:
            return

        parents = parent_map(svg)
        for element in matches:
            parent = parents[element]
            # Elements inside an already removed match are detached with it
            if element in list(parent):
                remove_element(parent, element)

    return process
