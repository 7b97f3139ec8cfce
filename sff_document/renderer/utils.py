"""Common helpers shared by renderer implementations."""
from __future__ import annotations

import re

from sff_document.model.constants import TEXT_HEADERS, BalloonType
from sff_document.parser.errors import UnencodableTextError

# Anything outside the XML 1.0 Char production
_INVALID_XML_CHARS = re.compile(
    "[^\t\n\r%s-%s%s-%s%s-%s]" % (chr(0x20), chr(0xD7FF), chr(0xE000), chr(0xFFFD), chr(0x10000), chr(0x10FFFF))
)

_TEXT_ESCAPES = {"&": "&amp;", "<": "&lt;", ">": "&gt;", "\r": "&#13;"}
_ATTRIBUTE_ESCAPES = {
    **_TEXT_ESCAPES,
    '"': "&quot;",
    "\t": "&#9;",
    "\n": "&#10;",
}
_TEXT_PATTERN = re.compile("[&<>\r]")
_ATTRIBUTE_PATTERN = re.compile('[&<>"\t\n\r]')


def _check_encodable(value: str) -> None:
    match = _INVALID_XML_CHARS.search(value)
    if match is not None:
        raise UnencodableTextError(
            f"Character U+{ord(match.group()):04X} at offset {match.start()} cannot be stored in XML"
        )


def escape_text(value: str) -> str:
    """Escape element text so that an XML parser returns ``value`` unchanged.

    Carriage returns are written as character references because parsers
    normalise literal line endings.
    """
    _check_encodable(value)
    return _TEXT_PATTERN.sub(lambda m: _TEXT_ESCAPES[m.group()], value)


def escape_attribute(value: str) -> str:
    """Escape a double-quoted attribute value, including whitespace parsers would normalise."""
    _check_encodable(value)
    return _ATTRIBUTE_PATTERN.sub(lambda m: _ATTRIBUTE_ESCAPES[m.group()], value)


def text_header(balloon_type: str) -> str:
    """Header prefix of the lossy text format; unknown types read as dialogue."""
    return TEXT_HEADERS.get(balloon_type, TEXT_HEADERS[BalloonType.DIALOGUE])
