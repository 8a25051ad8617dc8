"""Module initialization."""

from svg_icon_sprite.utils.identifier import to_valid_id
from svg_icon_sprite.utils.path_utils import path_resolver

__all__ = [
    "path_resolver",
    "to_valid_id",
]
