"""SVG markup parsing and serialization helpers.

Processors operate on ``xml.etree.ElementTree`` elements whose tags and
attribute names are plain strings: the SVG namespace is stripped and other
namespaces are written with their declared prefix (``xlink:href``).
Namespace declarations are kept as regular ``xmlns`` attributes on the
element that declared them, so serialized fragments stay self-contained.

CSS selectors are evaluated with lxml on a copy of the tree, prefixed names
being mapped to namespaces bound to the same prefix.
"""

import re
import xml.etree.ElementTree as ET
from xml.sax.saxutils import escape, quoteattr

from cssselect import GenericTranslator
from lxml import etree

from svg_icon_sprite.constants import KNOWN_NAMESPACES, SVG_NAMESPACE, XML_NAMESPACE

# Start tags, skipping declarations (<?xml, <!DOCTYPE, <!--) and end tags
_START_TAG = re.compile(
    r"<([A-Za-z_][\w:.-]*)"
    r"((?:\s+[^\s=/>\"']+(?:\s*=\s*(?:\"[^\"]*\"|'[^']*'|[^\s\"'>]+))?)*)"
    r"(\s*/?)>"
)
_ATTRIBUTE = re.compile(
    r"(\s+)([^\s=/>\"']+)(?:(\s*=\s*)(\"[^\"]*\"|'[^']*'|[^\s\"'>]+))?"
)

_TRANSLATOR = GenericTranslator()
# Base URI of the namespaces bound to prefixes when matching selectors
_SELECTOR_NAMESPACE = "urn:svg-icon-sprite:prefix:"


def _normalize_attributes(match: re.Match[str]) -> str:
    """Give valueless attributes an empty value and quote unquoted values."""
    space, name, equals, value = match.groups()
    if value is None:
        return f'{space}{name}=""'
    if value[0] not in "\"'":
        return f"{space}{name}{equals}{quoteattr(value)}"
    return match.group(0)


def _normalize_tag(match: re.Match[str]) -> str:
    """Normalize the attributes of a single start tag."""
    name, attributes, end = match.groups()
    return f"<{name}{_ATTRIBUTE.sub(_normalize_attributes, attributes)}{end}>"


def _declare_known_prefixes(markup: str) -> str:
    """Declare well-known namespace prefixes that are used but not declared.

    Declarations are added to the first start tag of the document.
    """
    missing = [
        f' xmlns:{prefix}="{uri}"'
        for prefix, uri in KNOWN_NAMESPACES.items()
        if re.search(rf"[\s<]{prefix}:", markup) and f"xmlns:{prefix}" not in markup
    ]
    if not missing:
        return markup

    first_tag = _START_TAG.search(markup)
    if first_tag is None:
        return markup

    insert_at = first_tag.start() + 1 + len(first_tag.group(1))
    return markup[:insert_at] + "".join(missing) + markup[insert_at:]


def prepare_markup(markup: str) -> str:
    """Make loosely written SVG markup acceptable to the XML parser.

    Args:
        markup: Raw SVG markup

    Returns:
        Markup with valueless attributes such as ``data-keep-color`` written
        as empty attributes and well-known prefixes declared.
    """
    return _declare_known_prefixes(_START_TAG.sub(_normalize_tag, markup))


def _flatten_name(qualified_name: str, prefixes: dict[str, str]) -> str:
    """Turn a ``{uri}local`` name into ``local`` or ``prefix:local``."""
    if qualified_name[:1] != "{":
        return qualified_name

    uri, local = qualified_name[1:].split("}", 1)
    if uri == XML_NAMESPACE:
        return f"xml:{local}"

    prefix = prefixes.get(uri, "")
    if uri == SVG_NAMESPACE or not prefix:
        return local
    return f"{prefix}:{local}"


def parse_element(markup: str) -> ET.Element:
    """Parse markup into an element tree with flattened names.

    Comments and processing instructions are dropped.

    Args:
        markup: SVG or XML markup

    Returns:
        The document root element.

    Raises:
        ET.ParseError: If the markup is not well-formed.
    """
    parser = ET.XMLPullParser(events=("start-ns", "start"))
    parser.feed(prepare_markup(markup))
    parser.close()

    root: ET.Element | None = None
    prefixes: dict[str, str] = {}
    declarations: list[tuple[str, str]] = []

    for event, data in parser.read_events():
        if event == "start-ns":
            prefix, uri = data
            declarations.append((prefix, uri))
            prefixes.setdefault(uri, prefix)
            continue

        element = data
        if root is None:
            root = element

        attributes = {
            f"xmlns:{prefix}" if prefix else "xmlns": uri for prefix, uri in declarations
        }
        for name, value in element.attrib.items():
            attributes[_flatten_name(name, prefixes)] = value
        element.attrib = attributes
        element.tag = _flatten_name(element.tag, prefixes)
        declarations = []

    if root is None:
        raise ET.ParseError("no element found")
    return root


def parse_svg(markup: str) -> ET.Element | None:
    """Parse markup and return its first <svg> element.

    Args:
        markup: SVG markup, possibly with an XML declaration or doctype

    Returns:
        The <svg> element, or None if the document contains none.

    Raises:
        ET.ParseError: If the markup is not well-formed.
    """
    root = parse_element(markup)
    if root.tag == "svg":
        return root
    return next(root.iter("svg"), None)


def build_element(tag: str, attributes: dict[str, str], inner: str = "") -> ET.Element:
    """Create an element from attributes and serialized child markup.

    Args:
        tag: Tag name of the element
        attributes: Attributes, including any namespace declarations
        inner: Serialized children of the element

    Returns:
        The parsed element.
    """
    attribute_markup = "".join(f" {name}={quoteattr(value)}" for name, value in attributes.items())
    return parse_element(f"<{tag}{attribute_markup}>{inner}</{tag}>")


def to_string(element: ET.Element) -> str:
    """Serialize an element with explicit end tags.

    Args:
        element: The element to serialize

    Returns:
        The markup of the element.
    """
    return ET.tostring(element, encoding="unicode", short_empty_elements=False)


def inner_markup(element: ET.Element) -> str:
    """Serialize the content of an element without the element itself.

    Args:
        element: The element whose content is serialized

    Returns:
        The markup of the element's text and children.
    """
    return escape(element.text or "") + "".join(to_string(child) for child in element)


def parent_map(root: ET.Element) -> dict[ET.Element, ET.Element]:
    """Map every element below root to its parent.

    Args:
        root: The root element

    Returns:
        Dictionary of child element to parent element.
    """
    return {child: parent for parent in root.iter() for child in parent}


def remove_element(parent: ET.Element, element: ET.Element) -> None:
    """Remove an element while keeping the text that follows it.

    Args:
        parent: The parent of the element
        element: The element to remove
    """
    if element.tail:
        index = list(parent).index(element)
        if index > 0:
            previous = parent[index - 1]
            previous.tail = (previous.tail or "") + element.tail
        else:
            parent.text = (parent.text or "") + element.tail
    parent.remove(element)


def css_to_xpath(selector: str) -> str:
    """Translate a CSS selector into an XPath expression.

    Element and attribute names are matched case-sensitively. Prefixed
    names are written with a namespace separator (``sodipodi|namedview``)
    or an escaped colon (``sodipodi\\:namedview``).

    Args:
        selector: CSS selector

    Returns:
        XPath expression matching the selector from any context element.

    Raises:
        cssselect.SelectorError: If the selector is not valid or not supported.
    """
    return _TRANSLATOR.css_to_xpath(selector)


def _mirror_name(name: str, namespaces: dict[str, str]) -> str:
    """Map a flattened ``prefix:local`` name to a namespaced lxml name."""
    prefix, separator, local = name.partition(":")
    if not separator:
        return name
    if prefix == "xml":
        return f"{{{XML_NAMESPACE}}}{local}"
    return f"{{{namespaces[prefix]}}}{local}"


def _collect_prefixes(root: ET.Element) -> dict[str, str]:
    """Bind every prefix used in the tree, and the well-known ones, to a namespace."""
    names = [
        name
        for element in root.iter()
        if isinstance(element.tag, str)
        for name in (element.tag, *element.attrib)
    ]
    prefixes = [*KNOWN_NAMESPACES, *(name.partition(":")[0] for name in names if ":" in name)]
    return {
        prefix: f"{_SELECTOR_NAMESPACE}{prefix}"
        for prefix in prefixes
        if prefix not in ("xml", "xmlns")
    }


def _mirror_tree(
    root: ET.Element,
) -> tuple[etree._Element, dict[etree._Element, ET.Element], dict[str, str]]:
    """Copy an element tree into lxml for XPath evaluation.

    Prefixes keep their names in the copy, so selectors may use either
    namespace syntax or escaped prefixed names.

    Returns:
        The copied root, the map of copied to original elements and the
        namespaces bound to the prefixes.
    """
    namespaces = _collect_prefixes(root)
    originals: dict[etree._Element, ET.Element] = {}

    def copy(element: ET.Element, parent: etree._Element | None) -> etree._Element:
        tag = _mirror_name(element.tag, namespaces)
        if parent is None:
            node = etree.Element(tag, nsmap=namespaces)
        else:
            node = etree.SubElement(parent, tag)
        node.text = element.text
        for name, value in element.attrib.items():
            if name == "xmlns" or name.startswith("xmlns:"):
                continue
            node.set(_mirror_name(name, namespaces), value)

        originals[node] = element
        for child in element:
            # Comments and processing instructions have no string tag
            if isinstance(child.tag, str):
                copy(child, node)
        return node

    return copy(root, None), originals, namespaces


def select_elements(root: ET.Element, expressions: list[str]) -> list[ET.Element]:
    """Find the elements below root matched by any of the XPath expressions.

    Args:
        root: The root element, never part of the result
        expressions: Expressions created by ``css_to_xpath``

    Returns:
        Matching elements in the order of the expressions, without duplicates.
    """
    mirror, originals, namespaces = _mirror_tree(root)
    selected: dict[ET.Element, None] = {}

    for expression in expressions:
        try:
            matches = mirror.xpath(expression, namespaces=namespaces)
        except etree.XPathEvalError:
            # A prefix unused by the document matches nothing
            continue
        for node in matches:
            element = originals.get(node)
            if element is not None and element is not root:
                selected.setdefault(element, None)

    return list(selected)
