"""Processor removing the intrinsic size of an SVG."""

import xml.etree.ElementTree as ET

from svg_icon_sprite.models.sprite import ProcessorContext
from svg_icon_sprite.processors.base import Processor


def remove_sizes() -> Processor:
    """Create a processor removing width and height from the root element.

    Nested elements keep their width and height.

    Returns:
        The processor.
    """

    def process(svg: ET.Element, context: ProcessorContext) -> None:
        svg.attrib.pop("width", None)
        svg.attrib.pop("height", None)

    return process
