"""Data models exchanged between symbols, sprites and the collector.

Defines Pydantic models for processor context, processed symbols, generated
sprites and the build context, plus the tables exported to consumers.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from enum import Enum

from pydantic import BaseModel, Field

from svg_icon_sprite.constants import (
    DEFAULT_BUILD_ASSETS_DIR,
    DEV_SPRITE_ROUTE,
    SYMBOL_IMPORT_BASE,
)


class WatchEvent(str, Enum):
    """Kind of a filesystem watch event."""

    ADD = "add"
    CHANGE = "change"
    UNLINK = "unlink"
    ADD_DIR = "addDir"
    UNLINK_DIR = "unlinkDir"

    @property
    def is_file_event(self) -> bool:
        """Check if the event concerns a file rather than a directory."""
        return self in (WatchEvent.ADD, WatchEvent.CHANGE, WatchEvent.UNLINK)


class ProcessorContext(BaseModel):
    """Context passed to every processor invocation.

    Attributes:
        id: Symbol id for symbol processors, sprite name for sprite processors
        file_path: Source file of the symbol, None for sprite processors
    """

    id: str
    file_path: str | None = None


class ProcessedSymbol(BaseModel):
    """A symbol after its processors have run."""

    attributes: dict[str, str]
    content: str  # Inner markup of the processed <svg>


class SymbolContent(BaseModel):
    """Symbol data as exposed to consumers of the generated modules."""

    attributes: dict[str, str]
    content: str


class SpriteContent(BaseModel):
    """A generated sprite document and the hash of its content."""

    hash: str
    content: str


class RuntimeOptions(BaseModel):
    """Options passed through to the runtime data module."""

    aria_hidden: bool = False

    def to_runtime(self) -> dict[str, bool]:
        """Get the options with the key names used by the runtime."""
        return {"ariaHidden": self.aria_hidden}


class BuildContext(BaseModel):
    """Build-wide settings shared by the collector and all sprites."""

    dev: bool = False
    root_dir: str
    src_dir: str
    build_assets_dir: str = DEFAULT_BUILD_ASSETS_DIR
    dev_route: str = DEV_SPRITE_ROUTE
    symbol_import_base: str = SYMBOL_IMPORT_BASE
    runtime_options: RuntimeOptions = Field(default_factory=RuntimeOptions)


SymbolLoader = Callable[[], Awaitable[SymbolContent]]


@dataclass(frozen=True)
class ExportTables:
    """Data derived from all sprites, regenerated as a whole on every change.

    Attributes:
        sprite_paths: Public path of every sprite by sprite name
        symbol_names: Sorted composite names of all symbols
        inline_symbols: Symbol content by composite name
        symbol_loaders: Zero-argument coroutine functions loading symbol content
    """

    sprite_paths: dict[str, str] = field(default_factory=dict)
    symbol_names: list[str] = field(default_factory=list)
    inline_symbols: dict[str, SymbolContent] = field(default_factory=dict)
    symbol_loaders: dict[str, SymbolLoader] = field(default_factory=dict)
