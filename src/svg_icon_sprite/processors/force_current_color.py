"""Processor making icons inherit the current text color."""

import xml.etree.ElementTree as ET

from svg_icon_sprite.constants import (
    COLOR_ATTRIBUTES,
    CURRENT_COLOR,
    DEFAULT_KEEP_COLOR_ATTRIBUTE,
    UNCHANGED_COLOR_VALUES,
)
from svg_icon_sprite.models.sprite import ProcessorContext
from svg_icon_sprite.processors.base import Processor


def force_current_color(ignore_attribute: str = DEFAULT_KEEP_COLOR_ATTRIBUTE) -> Processor:
    """Create a processor replacing stroke and fill colors with currentColor.

    If the root element carries the ignore attribute, the attribute is
    removed and no color is replaced. An element carrying the attribute loses
    the attribute and keeps its own colors; its children are still processed.
    Empty values as well as ``transparent`` and ``none`` are left alone.

    Args:
        ignore_attribute: Attribute marking elements whose colors are kept

    Returns:
        The processor.
    """

    def process(svg: ET.Element, context: ProcessorContext) -> None:
        if ignore_attribute in svg.attrib:
            del svg.attrib[ignore_attribute]
            return

        for element in svg.iter():
            if ignore_attribute in element.attrib:
                del element.attrib[ignore_attribute]
                continue

            for attribute in COLOR_ATTRIBUTES:
                value = element.get(attribute)
                if value and value not in UNCHANGED_COLOR_VALUES:
                    element.set(attribute, CURRENT_COLOR)

    return process
