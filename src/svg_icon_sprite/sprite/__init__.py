"""Module initialization."""

from svg_icon_sprite.sprite.collector import Collector
from svg_icon_sprite.sprite.sprite import Sprite
from svg_icon_sprite.sprite.symbol import SpriteSymbol

__all__ = [
    "Collector",
    "Sprite",
    "SpriteSymbol",
]
