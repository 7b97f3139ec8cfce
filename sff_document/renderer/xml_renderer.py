"""Render the document model into SFF XML."""
from __future__ import annotations

import base64
from enum import Enum
from typing import List

from sff_document.model.balloon_model import Balloon, BalloonImage
from sff_document.model.constants import METADATA_COUNTER_FIELDS, METADATA_STRING_FIELDS, Tags
from sff_document.model.document_model import Document, Metadata
from sff_document.parser.errors import InvalidMetadataError
from sff_document.renderer.utils import escape_attribute, escape_text
from sff_document.utils.logger import get_logger

LOGGER = get_logger(__name__)

_INDENT = "  "


class CounterMode(Enum):
    """Source of the metadata counters written to the output."""

    RECOMPUTE = "recompute"
    AS_STORED = "as_stored"


class XmlRenderer:
    """Produce the SFF XML text of a document.

    Lines are grouped per category (all TL, then PR, then comments) whatever
    their order in the source file. The document itself is never modified.
    """

    def __init__(self, mode: CounterMode = CounterMode.RECOMPUTE, *, pretty: bool = False) -> None:
        self._mode = mode
        self._pretty = pretty

    def render(self, document: Document) -> str:
        metadata = document.metadata
        if self._mode is CounterMode.RECOMPUTE:
            metadata = document.computed_metadata()

        lines: List[str] = []
        self._open(lines, 0, Tags.DOCUMENT)
        self._render_metadata(lines, metadata)
        self._open(lines, 1, Tags.BALLOONS)
        for balloon in document.balloons:
            self._render_balloon(lines, balloon)
        self._close(lines, 1, Tags.BALLOONS)
        self._close(lines, 0, Tags.DOCUMENT)

        LOGGER.debug("Rendered %d balloons (%s counters)", len(document.balloons), self._mode.value)
        if self._pretty:
            return "\n".join(lines) + "\n"
        return "".join(lines)

    def _render_metadata(self, lines: List[str], metadata: Metadata) -> None:
        self._open(lines, 1, Tags.METADATA)
        for tag, name in METADATA_STRING_FIELDS.items():
            self._leaf(lines, 2, tag, getattr(metadata, name))
        for tag, name in METADATA_COUNTER_FIELDS.items():
            value = getattr(metadata, name)
            if value < 0:
                raise InvalidMetadataError(tag, str(value))
            self._leaf(lines, 2, tag, str(value))
        self._close(lines, 1, Tags.METADATA)

    def _render_balloon(self, lines: List[str], balloon: Balloon) -> None:
        type_attr = escape_attribute(balloon.balloon_type)
        self._append(lines, 2, f'<{Tags.BALLOON} {Tags.TYPE_ATTR}="{type_attr}">')
        for tag, content in (
            (Tags.TL, balloon.tl_content),
            (Tags.PR, balloon.pr_content),
            (Tags.COMMENT, balloon.cm_content),
        ):
            for line in content:
                self._leaf(lines, 3, tag, line)
        if balloon.image is not None:
            self._render_image(lines, balloon.image)
        self._close(lines, 2, Tags.BALLOON)

    def _render_image(self, lines: List[str], image: BalloonImage) -> None:
        encoded = base64.urlsafe_b64encode(image.img_data).decode("ascii").rstrip("=")
        img_type = escape_attribute(image.img_type)
        self._append(lines, 3, f'<{Tags.IMAGE} {Tags.TYPE_ATTR}="{img_type}">{encoded}</{Tags.IMAGE}>')

    def _leaf(self, lines: List[str], depth: int, tag: str, text: str) -> None:
        self._append(lines, depth, f"<{tag}>{escape_text(text)}</{tag}>")

    def _open(self, lines: List[str], depth: int, tag: str) -> None:
        self._append(lines, depth, f"<{tag}>")

    def _close(self, lines: List[str], depth: int, tag: str) -> None:
        self._append(lines, depth, f"</{tag}>")

    def _append(self, lines: List[str], depth: int, markup: str) -> None:
        if self._pretty:
            markup = _INDENT * depth + markup
        lines.append(markup)
