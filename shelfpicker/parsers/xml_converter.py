"""
Schema-agnostic XML to node-tree converter.

Works on any well-formed document: it knows nothing about BGG endpoints.
Parsing goes through defusedxml so a hostile upstream payload cannot
trigger entity expansion.
"""

import re
from xml.etree.ElementTree import Element, ParseError

from defusedxml import DefusedXmlException
from defusedxml import ElementTree as SafeElementTree

from shelfpicker.models.xml_node import (
    TEXT_KEY,
    ScalarValue,
    XmlMapping,
    XmlNode,
    XmlScalar,
    XmlSequence,
)

# Optional minus, digits, optional decimal point and digits
_NUMERIC_PATTERN = re.compile(r"^-?\d+\.?\d*$")


class XmlParseError(ValueError):
    """Raised when a payload is not well-formed XML."""

    pass


def coerce_scalar(text: str) -> ScalarValue:
    """
    Coerce a string to a number when it has a numeric lexical shape.

    Only the shape is inspected: "007" becomes 7 and "1." becomes 1.0.
    Anything else, or a digit run too long to convert, is returned unchanged.
    """
    if not _NUMERIC_PATTERN.match(text):
        return text
    try:
        if "." in text:
            return float(text)
        return int(text)
    except ValueError:
        # Longer than the interpreter allows for int conversion
        return text


def _build_node(element: Element, converted: dict[Element, XmlNode]) -> XmlNode:
    """Build the node for one element whose children are already converted."""
    fields: dict[str, XmlNode] = {
        name: XmlScalar(coerce_scalar(value)) for name, value in element.attrib.items()
    }

    if len(element) == 0:
        text = (element.text or "").strip()
        if text and not fields:
            return XmlScalar(coerce_scalar(text))
        if text:
            fields[TEXT_KEY] = XmlScalar(coerce_scalar(text))
        return XmlMapping(fields)

    child_tags: set[str] = set()
    for child in element:
        if not isinstance(child.tag, str):
            # Comments and processing instructions
            continue
        tag = child.tag
        value = converted.pop(child)

        if tag not in child_tags:
            child_tags.add(tag)
            fields[tag] = value
            continue

        # Converted elements are never sequences, so one here came from promotion
        existing = fields[tag]
        if isinstance(existing, XmlSequence):
            fields[tag] = XmlSequence((*existing.items, value))
        else:
            fields[tag] = XmlSequence((existing, value))

    return XmlMapping(fields)


def element_to_node(element: Element) -> XmlNode:
    """
    Convert one element (and its subtree) into a node.

    Rules:
    - attributes become keys with coerced values
    - a leaf with no attributes and non-empty text reduces to a scalar
    - a leaf with attributes stores its text under TEXT_KEY
    - children are assigned under their tag; a repeated tag promotes the
      existing value to a sequence
    - a child tag that collides with an attribute name replaces it

    The tree is walked with an explicit stack, so nesting depth is not
    bounded by the recursion limit.
    """
    converted: dict[Element, XmlNode] = {}
    stack: list[tuple[Element, bool]] = [(element, False)]

    while stack:
        current, children_done = stack.pop()
        if children_done:
            converted[current] = _build_node(current, converted)
            continue
        stack.append((current, True))
        stack.extend((child, False) for child in current if isinstance(child.tag, str))

    return converted[element]


def parse_xml(text: str) -> XmlNode:
    """
    Parse an XML payload and convert its root element.

    The root tag itself is not part of the result: `<items><item/></items>`
    becomes a mapping with an "item" key.

    Raises:
        XmlParseError: If the payload is not well-formed or is rejected as unsafe
    """
    try:
        root = SafeElementTree.fromstring(text)
    except ParseError as e:
        raise XmlParseError(f"XML parsing error: {e}") from e
    except DefusedXmlException as e:
        raise XmlParseError(f"Unsafe XML rejected: {e}") from e

    return element_to_node(root)
