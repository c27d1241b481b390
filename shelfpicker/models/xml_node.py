"""
Generic XML value tree.

The converter turns any well-formed XML document into one of three node
shapes. Extractors dispatch on these shapes instead of probing arbitrary
dicts, so every fallback path is an explicit isinstance branch.

Shapes:
- XmlScalar: a coerced text or attribute value (int, float or str)
- XmlMapping: attribute and child-element names to nodes
- XmlSequence: repeated sibling elements sharing one tag, in document order
"""

from dataclasses import dataclass, field
from typing import Any

ScalarValue = int | float | str

# '#' cannot start an XML attribute name, so text never collides with one
TEXT_KEY = "#text"


@dataclass(frozen=True, slots=True)
class XmlScalar:
    """A leaf value after numeric coercion."""

    value: ScalarValue


@dataclass(frozen=True, slots=True)
class XmlMapping:
    """
    An element with attributes and/or child elements.

    Attribute names and child tags share one namespace. Treat `fields`
    as read-only once the converter has built the node.
    """

    fields: dict[str, "XmlNode"] = field(default_factory=dict)

    def get(self, key: str) -> "XmlNode | None":
        return self.fields.get(key)

    def __contains__(self, key: object) -> bool:
        return key in self.fields


@dataclass(frozen=True, slots=True)
class XmlSequence:
    """Repeated sibling elements with the same tag."""

    items: tuple["XmlNode", ...] = ()

    def __len__(self) -> int:
        return len(self.items)


XmlNode = XmlScalar | XmlMapping | XmlSequence


def to_plain(node: XmlNode) -> Any:
    """Render a node tree as plain JSON-compatible Python values."""
    if isinstance(node, XmlScalar):
        return node.value
    if isinstance(node, XmlSequence):
        return [to_plain(item) for item in node.items]
    return {key: to_plain(value) for key, value in node.fields.items()}
