"""Format constants shared by the SFF model, parser, and renderers."""
from __future__ import annotations

import zlib
from typing import Dict

FORMAT_VERSION = "Scanlation Script File v0.2.0"

# Compression level of the .sffz container
ZLIB_LEVEL = zlib.Z_BEST_COMPRESSION


class BalloonType:
    """Balloon type tags written by known producers.

    The set is open: parsers keep any other tag verbatim.
    """

    DIALOGUE = "Dialogue"
    SQUARE = "Square"
    THINKING = "Thinking"
    ST = "ST"  # sub-text
    OT = "OT"  # over-text


class Tags:
    """Element and attribute names of the SFF XML schema."""

    DOCUMENT = "Document"
    METADATA = "Metadata"
    BALLOONS = "Balloons"
    BALLOON = "Balloon"

    SCRIPT = "Script"
    APP = "App"
    INFO = "Info"
    TL_LENGTH = "TLLength"
    PR_LENGTH = "PRLength"
    CM_LENGTH = "CMLength"
    BALLOON_COUNT = "BalloonCount"
    LINE_COUNT = "LineCount"

    TL = "TL"
    PR = "PR"
    COMMENT = "Comment"
    CM = "CM"
    IMAGE = "img"

    TYPE_ATTR = "type"


# Metadata element -> Metadata field, in the order they are written
METADATA_STRING_FIELDS: Dict[str, str] = {
    Tags.SCRIPT: "script_version",
    Tags.APP: "app",
    Tags.INFO: "info",
}
METADATA_COUNTER_FIELDS: Dict[str, str] = {
    Tags.TL_LENGTH: "tl_length",
    Tags.PR_LENGTH: "pr_length",
    Tags.CM_LENGTH: "cm_length",
    Tags.BALLOON_COUNT: "balloon_count",
    Tags.LINE_COUNT: "line_count",
}

# Tags that may only appear at their own level of the tree
STRUCTURAL_TAGS = frozenset(
    {
        Tags.DOCUMENT,
        Tags.METADATA,
        Tags.BALLOONS,
        Tags.BALLOON,
        Tags.TL,
        Tags.PR,
        Tags.COMMENT,
        Tags.CM,
        Tags.IMAGE,
    }
)

# Header prefixes of the lossy text format
TEXT_HEADERS: Dict[str, str] = {
    BalloonType.DIALOGUE: "()",
    BalloonType.OT: "OT",
    BalloonType.SQUARE: "[]",
    BalloonType.ST: "ST",
    BalloonType.THINKING: "{}",
}
TEXT_LINE_SEPARATOR = "//"
