"""Built-in SVG processors and the registry used by YAML configuration."""

from collections.abc import Callable
from typing import Any

from svg_icon_sprite.exceptions import InvalidConfigError, MissingConfigError, chain_exception
from svg_icon_sprite.processors.base import Processor, as_processor_list, run_processors
from svg_icon_sprite.processors.css_prefix import css_prefix
from svg_icon_sprite.processors.force_current_color import force_current_color
from svg_icon_sprite.processors.remove_sizes import remove_sizes
from svg_icon_sprite.processors.remove_tags import remove_tags

# Factories by the name used in configuration files
BUILTIN_PROCESSORS: dict[str, Callable[..., Processor]] = {
    "remove_sizes": remove_sizes,
    "force_current_color": force_current_color,
    "remove_tags": remove_tags,
    "css_prefix": css_prefix,
}


def resolve_processor(spec: Any) -> Processor:
    """Turn a processor specification into a processor.

    A specification is either a processor, the name of a built-in processor
    or a mapping with a ``name`` and optional ``options`` passed to the
    factory as keyword arguments.

    Args:
        spec: The processor specification

    Returns:
        The processor.

    Raises:
        MissingConfigError: If a mapping specification has no name.
        InvalidConfigError: If the name is unknown or the options are invalid.
    """
    if callable(spec):
        return spec

    if isinstance(spec, str):
        name, options = spec, {}
    elif isinstance(spec, dict):
        if not spec.get("name"):
            raise MissingConfigError("Processor specification has no name", {"spec": spec})
        name, options = spec["name"], spec.get("options") or {}
    else:
        raise InvalidConfigError(
            "Invalid processor specification", {"spec": repr(spec), "type": type(spec).__name__}
        )

    factory = BUILTIN_PROCESSORS.get(name)
    if factory is None:
        raise InvalidConfigError(
            f"Unknown processor: {name}", {"available": sorted(BUILTIN_PROCESSORS)}
        )

    try:
        return factory(**options)
    except TypeError as e:
        raise chain_exception(
            InvalidConfigError(f"Invalid options for processor {name}", {"options": options}), e
        )


__all__ = [
    "BUILTIN_PROCESSORS",
    "Processor",
    "as_processor_list",
    "css_prefix",
    "force_current_color",
    "remove_sizes",
    "remove_tags",
    "resolve_processor",
    "run_processors",
]
