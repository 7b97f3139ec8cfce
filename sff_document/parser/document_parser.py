"""Parse SFF XML into the in-memory document model."""
from __future__ import annotations

import base64
import binascii
import re
from enum import Enum
from typing import Dict, List, Union
from xml.etree import ElementTree as ET

from sff_document.model.balloon_model import Balloon, BalloonImage
from sff_document.model.constants import (
    METADATA_COUNTER_FIELDS,
    METADATA_STRING_FIELDS,
    STRUCTURAL_TAGS,
    Tags,
)
from sff_document.model.document_model import Document, Metadata
from sff_document.parser.errors import (
    CounterMismatchError,
    InvalidMetadataError,
    MalformedDocumentError,
)
from sff_document.utils.logger import get_logger
from sff_document.utils.xml_utils import (
    ensure_no_text,
    get_attribute,
    iter_children,
    leaf_text,
    parse_xml,
    strip_namespace,
)

LOGGER = get_logger(__name__)

_COUNTER_PATTERN = re.compile(r"[0-9]+")
_BASE64_PATTERN = re.compile(r"[A-Za-z0-9_-]*")


class CounterCheck(Enum):
    """How parsing treats stored counters that disagree with the content."""

    IGNORE = "ignore"
    WARN = "warn"
    STRICT = "strict"


class DocumentParser:
    """Transforms an SFF XML payload into a ``Document``."""

    def __init__(self, data: Union[str, bytes], check_counters: CounterCheck = CounterCheck.IGNORE) -> None:
        self._data = data
        self._check_counters = check_counters

    def parse(self) -> Document:
        """Parse the payload; raises a ``CodecError`` subclass on invalid input."""
        root = parse_xml(self._data)
        root_tag = strip_namespace(root.tag)
        if root_tag != Tags.DOCUMENT:
            raise MalformedDocumentError(f"Root element must be <{Tags.DOCUMENT}>, found <{root_tag}>")

        sections = self._collect_sections(root)
        metadata = self._parse_metadata(sections[Tags.METADATA])
        balloons = self._parse_balloons(sections[Tags.BALLOONS])
        document = Document(metadata=metadata, balloons=balloons)
        LOGGER.debug("Parsed SFF document with %d balloons", len(balloons))

        self._verify_counters(document)
        return document

    def _collect_sections(self, root: ET.Element) -> Dict[str, ET.Element]:
        ensure_no_text(Tags.DOCUMENT, root)
        sections: Dict[str, ET.Element] = {}
        for tag, child in iter_children(root):
            if tag not in (Tags.METADATA, Tags.BALLOONS):
                raise MalformedDocumentError(f"Unexpected <{tag}> inside <{Tags.DOCUMENT}>")
            if tag in sections:
                raise MalformedDocumentError(f"Duplicate <{tag}> section")
            sections[tag] = child
        for required in (Tags.METADATA, Tags.BALLOONS):
            if required not in sections:
                raise MalformedDocumentError(f"Missing <{required}> section")
        return sections

    def _parse_metadata(self, metadata_el: ET.Element) -> Metadata:
        values: Dict[str, object] = {name: "" for name in METADATA_STRING_FIELDS.values()}
        values.update({name: 0 for name in METADATA_COUNTER_FIELDS.values()})
        ensure_no_text(Tags.METADATA, metadata_el)

        for tag, child in iter_children(metadata_el):
            if tag in METADATA_STRING_FIELDS:
                values[METADATA_STRING_FIELDS[tag]] = leaf_text(tag, child)
            elif tag in METADATA_COUNTER_FIELDS:
                values[METADATA_COUNTER_FIELDS[tag]] = self._parse_counter(tag, leaf_text(tag, child))
            elif tag in STRUCTURAL_TAGS:
                raise MalformedDocumentError(f"Unexpected <{tag}> inside <{Tags.METADATA}>")
            else:
                LOGGER.debug("Ignoring unknown metadata field: %s", tag)
        return Metadata(**values)

    def _parse_counter(self, tag: str, raw: str) -> int:
        value = raw.strip()
        if not value:
            return 0
        if not _COUNTER_PATTERN.fullmatch(value):
            raise InvalidMetadataError(tag, raw)
        try:
            return int(value)
        except ValueError as exc:
            # longer than the interpreter's integer string conversion limit
            raise InvalidMetadataError(tag, raw) from exc

    def _parse_balloons(self, balloons_el: ET.Element) -> List[Balloon]:
        balloons: List[Balloon] = []
        ensure_no_text(Tags.BALLOONS, balloons_el)
        for tag, child in iter_children(balloons_el):
            if tag != Tags.BALLOON:
                raise MalformedDocumentError(f"Unexpected <{tag}> inside <{Tags.BALLOONS}>")
            balloons.append(self._parse_balloon(child))
        return balloons

    def _parse_balloon(self, balloon_el: ET.Element) -> Balloon:
        ensure_no_text(Tags.BALLOON, balloon_el)
        balloon = Balloon(balloon_type=get_attribute(balloon_el, Tags.TYPE_ATTR))
        # Interleaved lines are demultiplexed; order within a category is kept.
        targets = {
            Tags.TL: balloon.tl_content,
            Tags.PR: balloon.pr_content,
            Tags.COMMENT: balloon.cm_content,
            Tags.CM: balloon.cm_content,
        }
        for tag, child in iter_children(balloon_el):
            if tag in targets:
                targets[tag].append(leaf_text(tag, child))
            elif tag == Tags.IMAGE:
                if balloon.image is not None:
                    raise MalformedDocumentError(f"<{Tags.BALLOON}> holds more than one <{Tags.IMAGE}>")
                balloon.image = self._parse_image(child)
            else:
                raise MalformedDocumentError(f"Unexpected <{tag}> inside <{Tags.BALLOON}>")
        return balloon

    def _parse_image(self, image_el: ET.Element) -> BalloonImage:
        encoded = leaf_text(Tags.IMAGE, image_el).strip()
        if not _BASE64_PATTERN.fullmatch(encoded):
            raise MalformedDocumentError("Balloon image contains characters outside the URL-safe base64 alphabet")
        padding = "=" * (-len(encoded) % 4)
        try:
            data = base64.urlsafe_b64decode(encoded + padding)
        except (binascii.Error, ValueError) as exc:
            raise MalformedDocumentError(f"Balloon image is not valid base64: {exc}") from exc
        return BalloonImage(img_type=get_attribute(image_el, Tags.TYPE_ATTR), img_data=data)

    def _verify_counters(self, document: Document) -> None:
        if self._check_counters is CounterCheck.IGNORE:
            return
        mismatches = document.counter_mismatches()
        if not mismatches:
            return
        if self._check_counters is CounterCheck.STRICT:
            raise CounterMismatchError(mismatches)
        for mismatch in mismatches:
            LOGGER.warning(
                "Stored %s is %d but the content has %d",
                mismatch.name,
                mismatch.stored,
                mismatch.actual,
            )
