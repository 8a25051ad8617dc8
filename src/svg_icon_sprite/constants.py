"""Application-wide constants for the SVG icon sprite builder.

Constants are grouped into the following categories:
- Sprite Constants: Sprite naming, default import patterns and file names
- Identifier Constants: Rules for generating symbol identifiers
- SVG Constants: Namespaces and markup used when assembling sprites
- Processor Constants: Defaults for the built-in processors
- Module Constants: Names of the generated data modules
"""

# Sprite constants
DEFAULT_SPRITE_NAME = "default"  # Sprite whose symbols are not prefixed
DEFAULT_IMPORT_PATTERNS = ["./assets/symbols/*.svg"]  # Patterns of the synthesized default sprite
SPRITE_FILE_PREFIX = "sprite"  # Prefix of generated sprite file names
SPRITE_FILE_EXTENSION = ".svg"  # Extension of generated sprite file names
SPRITE_HASH_LENGTH = 10  # Number of hex characters kept from the content hash
DEV_SPRITE_ROUTE = "/__svg-icon-sprite"  # Route prefix of sprites served in development
DEFAULT_BUILD_ASSETS_DIR = "/_assets/"  # Public directory of sprites in production builds
SVG_FILE_SUFFIX = ".svg"  # Only files with this suffix trigger file events
EMPTY_SPRITE_MARKUP = "<svg></svg>"  # Returned for unknown sprite requests

# Identifier constants
MAX_IDENTIFIER_LENGTH = 64  # Maximum length of a symbol identifier
IDENTIFIER_PREFIX = "id-"  # Prepended when an identifier starts with a digit or hyphen

# SVG constants
SVG_NAMESPACE = "http://www.w3.org/2000/svg"
XLINK_NAMESPACE = "http://www.w3.org/1999/xlink"
XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"
SPRITE_SVG_VERSION = "1.1"
# Prefixes that are commonly used in exported icons without being declared
KNOWN_NAMESPACES = {
    "xlink": XLINK_NAMESPACE,
    "sodipodi": "http://sodipodi.sourceforge.net/DTD/sodipodi-0.dtd",
    "inkscape": "http://www.inkscape.org/namespaces/inkscape",
    "sketch": "http://www.bohemiancoding.com/sketch/ns",
}

# Processor constants
DEFAULT_KEEP_COLOR_ATTRIBUTE = "data-keep-color"  # Opt-out attribute for force_current_color
CURRENT_COLOR = "currentColor"
COLOR_ATTRIBUTES = ["stroke", "fill"]
UNCHANGED_COLOR_VALUES = ["transparent", "none"]
CSS_PREFIX_SEPARATOR = "--"  # Separator between the context id and a prefixed name

# Generated module constants
MODULE_NAMESPACE = "svg-icon-sprite"
RUNTIME_MODULE = f"#{MODULE_NAMESPACE}/runtime"
SYMBOL_IMPORT_MODULE = f"#{MODULE_NAMESPACE}/symbol-import"
SYMBOL_IMPORT_BASE = f"#build/{MODULE_NAMESPACE}/symbols/"  # Base of per-symbol modules

# Unit conversion constants
BYTES_PER_MEGABYTE = 1024 * 1024  # Bytes in a megabyte
