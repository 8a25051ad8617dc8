"""Processor pipeline primitives.

A processor receives an <svg> element and a ProcessorContext and mutates the
element in place. It may be a plain function or a coroutine function.
"""

import inspect
import xml.etree.ElementTree as ET
from collections.abc import Awaitable, Callable, Sequence

from svg_icon_sprite.models.sprite import ProcessorContext

Processor = Callable[[ET.Element, ProcessorContext], Awaitable[None] | None]


def as_processor_list(value: Processor | Sequence[Processor] | None) -> list[Processor]:
    """Normalize a configured processor value to a list.

    Args:
        value: A single processor, a sequence of processors, or None

    Returns:
        List of processors in configured order.
    """
    if value is None:
        return []
    if callable(value):
        return [value]
    return list(value)


async def run_processors(
    processors: Sequence[Processor], element: ET.Element, context: ProcessorContext
) -> None:
    """Run processors one after another on an element.

    Each processor completes before the next one starts, as later processors
    may depend on the output of earlier ones.

    Args:
        processors: Processors in execution order
        element: The element to process
        context: Context passed to every processor
    """
    for processor in processors:
        result = processor(element, context)
        if inspect.isawaitable(result):
            await result
