from shelfpicker.parsers.extractors import (
    extract_collection,
    extract_game_details,
    extract_plays_page,
    extract_user,
    is_processing,
    resolve_scalar,
)
from shelfpicker.parsers.xml_converter import XmlParseError, coerce_scalar, parse_xml

__all__ = [
    "XmlParseError",
    "coerce_scalar",
    "extract_collection",
    "extract_game_details",
    "extract_plays_page",
    "extract_user",
    "is_processing",
    "parse_xml",
    "resolve_scalar",
]
