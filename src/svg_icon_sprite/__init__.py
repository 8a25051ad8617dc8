"""Build SVG icon sprites from individual icon files.

Collects SVG files into named sprites, runs configurable processor chains on
every symbol and on the final sprite, and exposes the resulting data through
generated modules.
"""

__version__ = "0.1.0"
