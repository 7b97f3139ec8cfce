"""Entry points for reading and writing SFF documents.

``parse``/``serialize`` work on XML text. ``loads``/``dumps`` work on the
bytes of the three container flavours: raw XML (``.sffx``), zlib-compressed
XML (``.sffz``), and the lossy plain-text script (``.txt``).
"""
from __future__ import annotations

import zlib
from enum import Enum
from pathlib import PurePath
from typing import Union

from sff_document.model.constants import ZLIB_LEVEL
from sff_document.model.document_model import Document
from sff_document.parser.document_parser import CounterCheck, DocumentParser
from sff_document.parser.errors import MalformedDocumentError
from sff_document.parser.text_parser import TextParser
from sff_document.renderer.text_renderer import TextRenderer
from sff_document.renderer.xml_renderer import CounterMode, XmlRenderer
from sff_document.utils.logger import get_logger

LOGGER = get_logger(__name__)

ENCODING = "utf-8"


class OutputFormat(Enum):
    """Container flavours, valued by their file suffix."""

    RAW = "sffx"
    ZLIB = "sffz"
    TXT = "txt"


def new_empty() -> Document:
    """Return a new document with default metadata and no balloons."""
    return Document.new_empty()


def parse(data: Union[str, bytes], *, check_counters: CounterCheck = CounterCheck.IGNORE) -> Document:
    """Parse SFF XML into a ``Document``."""
    return DocumentParser(data, check_counters).parse()


def serialize(document: Document, mode: CounterMode = CounterMode.RECOMPUTE, *, pretty: bool = False) -> str:
    """Render a ``Document`` as SFF XML text."""
    return XmlRenderer(mode, pretty=pretty).render(document)


def dumps(
    document: Document,
    fmt: OutputFormat = OutputFormat.RAW,
    mode: CounterMode = CounterMode.RECOMPUTE,
) -> bytes:
    """Encode a document into the bytes of the requested container."""
    if fmt is OutputFormat.TXT:
        return TextRenderer().render(document).encode(ENCODING)
    payload = serialize(document, mode).encode(ENCODING)
    if fmt is OutputFormat.ZLIB:
        compressed = zlib.compress(payload, ZLIB_LEVEL)
        LOGGER.debug("Compressed %d bytes of XML into %d bytes", len(payload), len(compressed))
        return compressed
    return payload


def loads(
    data: bytes,
    fmt: OutputFormat = OutputFormat.RAW,
    *,
    check_counters: CounterCheck = CounterCheck.IGNORE,
) -> Document:
    """Decode container bytes produced by ``dumps`` or another SFF producer."""
    if fmt is OutputFormat.TXT:
        return TextParser(_decode_text(data)).parse()
    if fmt is OutputFormat.ZLIB:
        try:
            data = zlib.decompress(data)
        except zlib.error as exc:
            raise MalformedDocumentError(f"Corrupt compressed SFF payload: {exc}") from exc
    return parse(data, check_counters=check_counters)


def format_for_suffix(name: Union[str, PurePath]) -> OutputFormat:
    """Map a file name (``chapter1.sffz``) or bare suffix (``.sffz``, ``sffz``) to its format."""
    text = str(name)
    suffix = PurePath(text).suffix or text
    try:
        return OutputFormat(suffix.lstrip(".").lower())
    except ValueError:
        raise ValueError(f"Unsupported SFF file type: {name}") from None


def _decode_text(data: bytes) -> str:
    try:
        return data.decode(ENCODING)
    except UnicodeDecodeError as exc:
        raise MalformedDocumentError(f"Plain-text script is not valid {ENCODING}: {exc}") from exc
