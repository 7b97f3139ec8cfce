"""Rebuild a document from the lossy plain-text script format."""
from __future__ import annotations

from typing import Dict, Optional, Tuple

from sff_document.model.balloon_model import Balloon
from sff_document.model.constants import TEXT_HEADERS, TEXT_LINE_SEPARATOR, BalloonType
from sff_document.model.document_model import Document
from sff_document.utils.logger import get_logger

LOGGER = get_logger(__name__)

_TYPES_BY_HEADER: Dict[str, str] = {header: balloon_type for balloon_type, header in TEXT_HEADERS.items()}


class TextParser:
    """Parse text written by ``TextRenderer``.

    Every recovered line lands in ``tl_content``; the output carries no
    proofread lines, comments, or images.
    """

    def __init__(self, text: str) -> None:
        self._text = text

    def parse(self) -> Document:
        document = Document.new_empty()
        current: Optional[Balloon] = None
        continues = False

        for raw_line in self._text.splitlines():
            line = raw_line.strip()
            if not line:
                continue
            if line == TEXT_LINE_SEPARATOR:
                continues = current is not None
                continue

            balloon_type, content = self._split_header(line)
            if continues and current is not None:
                current.tl_content.append(content)
            else:
                current = Balloon(balloon_type=balloon_type, tl_content=[content])
                document.balloons.append(current)
            continues = False

        LOGGER.debug("Parsed %d balloons from plain text", len(document.balloons))
        return document

    def _split_header(self, line: str) -> Tuple[str, str]:
        header, sep, rest = line.partition(":")
        if sep and header in _TYPES_BY_HEADER:
            return _TYPES_BY_HEADER[header], rest.strip()
        return BalloonType.DIALOGUE, line
