"""Helper functions to work with SFF XML trees."""
from __future__ import annotations

from typing import Iterator, Optional, Tuple, Union
from xml.etree import ElementTree as ET

from sff_document.parser.errors import MalformedDocumentError


def parse_xml(data: Union[str, bytes]) -> ET.Element:
    """Parse XML text or bytes and return the root element.

    Expat failures (unterminated or mismatched tags, bad encoding), text that
    cannot be encoded for the parser and unknown declared encodings all surface
    as ``MalformedDocumentError``.
    """
    try:
        return ET.fromstring(data)
    except (ET.ParseError, UnicodeError, LookupError) as exc:
        raise MalformedDocumentError(f"Invalid SFF markup: {exc}") from exc


def strip_namespace(tag: str) -> str:
    """Return the local name of a possibly namespaced ElementTree tag."""
    if "}" in tag:
        return tag.split("}", 1)[1]
    return tag


def iter_children(element: ET.Element) -> Iterator[Tuple[str, ET.Element]]:
    """Yield ``(local_name, child)`` pairs, skipping comments and processing instructions."""
    for child in list(element):
        if not isinstance(child.tag, str):
            continue
        yield strip_namespace(child.tag), child


def get_attribute(element: ET.Element, name: str, default: str = "") -> str:
    """Return an attribute by local name, ignoring any namespace qualification."""
    if name in element.attrib:
        return element.attrib[name]
    for key, value in element.attrib.items():
        if strip_namespace(key) == name:
            return value
    return default


def element_text(element: Optional[ET.Element]) -> str:
    """Text of a leaf element, verbatim; empty string for ``<X/>`` or a missing element."""
    if element is None or element.text is None:
        return ""
    return element.text


def leaf_text(tag: str, element: ET.Element) -> str:
    """Text of an element that must not contain child elements."""
    nested = next(iter_children(element), None)
    if nested is not None:
        raise MalformedDocumentError(f"Unexpected <{nested[0]}> inside <{tag}>")
    return element_text(element)


def ensure_no_text(tag: str, element: ET.Element) -> None:
    """Reject character data placed between the children of a container element."""
    stray = [element.text] + [child.tail for child in element]
    if any(text and text.strip() for text in stray):
        raise MalformedDocumentError(f"Unexpected text inside <{tag}>")
