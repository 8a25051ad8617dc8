"""Processor prefixing ids and class names with the symbol id.

Symbols of one sprite share a single document, so ids and class names defined
by different icons would otherwise collide. Every id and class name found in
the DOM or in <style> blocks is renamed to ``<context id>--<name>``, and all
references to them are rewritten with the same mapping.
"""

import re
import xml.etree.ElementTree as ET

from svg_icon_sprite.constants import CSS_PREFIX_SEPARATOR
from svg_icon_sprite.models.sprite import ProcessorContext
from svg_icon_sprite.processors.base import Processor

# Name of an id or class in a CSS selector
_NAME = r"-?[A-Za-z_][\w-]*"

# Either a complete url(...) or an id/class selector. Hex colors directly
# after a property colon are not selectors.
_CSS_TOKEN = re.compile(
    r"url\((?P<url>[^)]*)\)"
    rf"|(?<!:)(?<!:\s)(?P<kind>[#.])(?P<name>{_NAME})(?=[\s,.:{{\[\]>+~)#]|$)"
)
_HASH_URL = re.compile(
    r"^(?P<before>\s*(?P<quote>['\"]?)\s*#)"
    r"(?P<name>[^'\"\s]+)"
    r"(?P<after>\s*(?P=quote)\s*)$"
)
_URL = re.compile(r"url\((?P<url>[^)]*)\)")
_BARE_REFERENCE = re.compile(r"^#(?P<name>.+)$")


class _RenameTables:
    """Rename maps for one processor invocation."""

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix
        self.ids: dict[str, str] = {}
        self.classes: dict[str, str] = {}

    def add_id(self, name: str) -> str:
        return self.ids.setdefault(name, f"{self.prefix}{name}")

    def add_class(self, name: str) -> str:
        return self.classes.setdefault(name, f"{self.prefix}{name}")

    def scan_css(self, css: str) -> None:
        for match in _CSS_TOKEN.finditer(css):
            if match.group("url") is not None:
                url = _HASH_URL.match(match.group("url"))
                if url:
                    self.add_id(url.group("name"))
            elif match.group("kind") == "#":
                self.add_id(match.group("name"))
            else:
                self.add_class(match.group("name"))

    def rewrite_url(self, match: re.Match[str]) -> str:
        url = _HASH_URL.match(match.group("url"))
        if url is None or url.group("name") not in self.ids:
            return match.group(0)
        new_name = self.ids[url.group("name")]
        return f"url({url.group('before')}{new_name}{url.group('after')})"

    def rewrite_css_token(self, match: re.Match[str]) -> str:
        if match.group("url") is not None:
            return self.rewrite_url(match)

        kind, name = match.group("kind"), match.group("name")
        table = self.ids if kind == "#" else self.classes
        return f"{kind}{table.get(name, name)}"

    def rewrite_css(self, css: str) -> str:
        return _CSS_TOKEN.sub(self.rewrite_css_token, css)

    def rewrite_reference(self, value: str) -> str:
        bare = _BARE_REFERENCE.match(value.strip())
        if bare:
            name = bare.group("name")
            return f"#{self.ids[name]}" if name in self.ids else value
        return _URL.sub(self.rewrite_url, value)


def css_prefix() -> Processor:
    """Create a processor prefixing all ids and class names.

    Returns:
        The processor.
    """

    def process(svg: ET.Element, context: ProcessorContext) -> None:
        tables = _RenameTables(f"{context.id}{CSS_PREFIX_SEPARATOR}")
        elements = list(svg.iter())
        styles = [el for el in elements if el.tag == "style" and el.text]

        for element in elements:
            if element.get("id"):
                tables.add_id(element.get("id", ""))
            for name in element.get("class", "").split():
                tables.add_class(name)
        for style in styles:
            tables.scan_css(style.text or "")

        for style in styles:
            style.text = tables.rewrite_css(style.text or "")

        for element in elements:
            for name, value in list(element.attrib.items()):
                if name == "id":
                    if value:
                        element.set(name, tables.ids[value])
                elif name == "class":
                    element.set(name, " ".join(tables.classes[c] for c in value.split()))
                else:
                    element.set(name, tables.rewrite_reference(value))

    return process
