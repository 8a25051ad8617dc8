"""Tests for SVG parsing and serialization helpers."""

import xml.etree.ElementTree as ET

import pytest
from cssselect import SelectorError

from svg_icon_sprite.utils.svg_utils import (
    build_element,
    css_to_xpath,
    inner_markup,
    parent_map,
    parse_element,
    parse_svg,
    prepare_markup,
    remove_element,
    select_elements,
    to_string,
)


class TestPrepareMarkup:
    """Test the markup normalization before parsing."""

    def test_valueless_attribute(self) -> None:
        """Test HTML-style attributes without value get an empty value."""
        assert prepare_markup("<svg data-keep-color><g/></svg>") == (
            '<svg data-keep-color=""><g/></svg>'
        )

    def test_unquoted_value(self) -> None:
        """Test unquoted attribute values are quoted."""
        assert prepare_markup("<svg width=10></svg>") == '<svg width="10"></svg>'

    def test_well_formed_markup_unchanged(self) -> None:
        """Test well-formed markup is left alone."""
        markup = '<svg viewBox="0 0 10 10"><path d="M0 0"/></svg>'
        assert prepare_markup(markup) == markup

    def test_declares_known_prefix(self) -> None:
        """Test an undeclared xlink prefix is declared on the first element."""
        result = prepare_markup('<svg><use xlink:href="#a"/></svg>')
        assert result.startswith('<svg xmlns:xlink="http://www.w3.org/1999/xlink"')


class TestParse:
    """Test parsing into elements with flattened names."""

    def test_svg_namespace_is_stripped(self) -> None:
        """Test tags in the SVG namespace have plain names."""
        svg = parse_svg('<svg xmlns="http://www.w3.org/2000/svg"><circle r="1"/></svg>')
        assert svg is not None
        assert svg.tag == "svg"
        assert svg[0].tag == "circle"
        assert svg.attrib == {"xmlns": "http://www.w3.org/2000/svg"}

    def test_prefixed_attribute(self) -> None:
        """Test attributes in other namespaces keep their prefix."""
        svg = parse_svg(
            '<svg xmlns="http://www.w3.org/2000/svg" '
            'xmlns:xlink="http://www.w3.org/1999/xlink"><use xlink:href="#a"/></svg>'
        )
        assert svg is not None
        assert svg[0].get("xlink:href") == "#a"
        assert svg.get("xmlns:xlink") == "http://www.w3.org/1999/xlink"

    def test_xml_declaration_and_doctype(self) -> None:
        """Test documents with a prolog are parsed."""
        svg = parse_svg('<?xml version="1.0"?>\n<!-- icon -->\n<svg><g/></svg>')
        assert svg is not None
        assert svg.tag == "svg"

    def test_nested_svg_is_found(self) -> None:
        """Test the first <svg> below another root is returned."""
        svg = parse_svg('<div><svg id="inner"/></div>')
        assert svg is not None
        assert svg.get("id") == "inner"

    def test_no_svg(self) -> None:
        """Test None is returned when there is no <svg> element."""
        assert parse_svg("<div><span/></div>") is None

    def test_malformed(self) -> None:
        """Test malformed markup raises a parse error."""
        with pytest.raises(ET.ParseError):
            parse_svg("<svg><g></svg>")

    def test_parse_element_any_root(self) -> None:
        """Test fragments with any root element are parsed."""
        element = parse_element('<symbol id="a"><path/></symbol>')
        assert element.tag == "symbol"
        assert element.get("id") == "a"


class TestSerialize:
    """Test serialization helpers."""

    def test_explicit_end_tags(self) -> None:
        """Test empty elements are written with an end tag."""
        svg = parse_element('<svg><path d="M0 0"/></svg>')
        assert to_string(svg) == '<svg><path d="M0 0"></path></svg>'

    def test_inner_markup(self) -> None:
        """Test only the content of the element is serialized."""
        svg = parse_element("<svg>a &amp; b<g/>tail</svg>")
        assert inner_markup(svg) == "a &amp; b<g></g>tail"

    def test_build_element(self) -> None:
        """Test elements are built from attributes and inner markup."""
        element = build_element("symbol", {"viewBox": "0 0 1 1", "id": "x"}, "<g/>")
        assert to_string(element) == '<symbol viewBox="0 0 1 1" id="x"><g></g></symbol>'

    def test_build_element_with_namespace_declaration(self) -> None:
        """Test prefixed content stays valid when its declaration is passed along."""
        element = build_element(
            "symbol",
            {"xmlns:xlink": "http://www.w3.org/1999/xlink", "id": "x"},
            '<use xlink:href="#a"></use>',
        )
        assert element[0].get("xlink:href") == "#a"


class TestTreeHelpers:
    """Test parent lookup and removal."""

    def test_parent_map(self) -> None:
        """Test every element below the root maps to its parent."""
        svg = parse_element("<svg><g><path/></g></svg>")
        parents = parent_map(svg)
        group = svg[0]
        assert parents[group] is svg
        assert parents[group[0]] is group
        assert svg not in parents

    def test_remove_element_keeps_tail(self) -> None:
        """Test text following a removed element is kept."""
        svg = parse_element("<svg>a<title>t</title>b<g/>c</svg>")
        remove_element(svg, svg[0])
        assert inner_markup(svg) == "ab<g></g>c"

    def test_remove_element_after_sibling(self) -> None:
        """Test the tail is appended to the previous sibling."""
        svg = parse_element("<svg><g/>x<title/>y</svg>")
        remove_element(svg, svg[1])
        assert to_string(svg) == "<svg><g></g>xy</svg>"


class TestSelectElements:
    """Test CSS selector matching on element trees."""

    def test_matches_in_document_order(self) -> None:
        """Test elements are returned once each, in selector order."""
        svg = parse_element('<svg><g><rect id="a"/></g><rect id="b"/><circle/></svg>')
        matches = select_elements(svg, [css_to_xpath("rect"), css_to_xpath("#a, circle")])

        assert [element.get("id") for element in matches] == ["a", "b", None]
        assert matches[2].tag == "circle"

    def test_root_excluded(self) -> None:
        """Test the root element itself is never selected."""
        svg = parse_element("<svg><svg/></svg>")
        matches = select_elements(svg, [css_to_xpath("svg")])

        assert matches == [svg[0]]

    def test_prefixed_attribute(self) -> None:
        """Test prefixed attribute names can be selected with namespace syntax."""
        svg = parse_element(
            '<svg xmlns:xlink="http://www.w3.org/1999/xlink"><use xlink:href="#a"/><use/></svg>'
        )
        matches = select_elements(svg, [css_to_xpath("use[xlink|href]")])

        assert matches == [svg[0]]

    def test_unused_prefix_matches_nothing(self) -> None:
        """Test a namespace prefix absent from the document selects nothing."""
        svg = parse_element("<svg><g/></svg>")

        assert select_elements(svg, [css_to_xpath("foo|g")]) == []

    def test_invalid_selector(self) -> None:
        """Test malformed selectors raise a selector error."""
        with pytest.raises(SelectorError):
            css_to_xpath("g >")
