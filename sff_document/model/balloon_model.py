"""Balloon model: one text unit of a panel with its TL/PR/comment lines."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(slots=True)
class BalloonImage:
    """Image snippet attached to a balloon, kept as raw bytes."""

    img_type: str
    img_data: bytes = b""


@dataclass(slots=True)
class Balloon:
    """Translation, proofread, and comment lines of a single balloon.

    ``balloon_type`` is an open tag. See ``BalloonType`` for the values known
    producers write; anything else is preserved as-is.
    """

    balloon_type: str = ""
    tl_content: List[str] = field(default_factory=list)
    pr_content: List[str] = field(default_factory=list)
    cm_content: List[str] = field(default_factory=list)
    image: Optional[BalloonImage] = None

    def add_image(self, img_type: str, img_data: bytes) -> BalloonImage:
        """Attach an image, replacing any previous one."""
        self.image = BalloonImage(img_type=img_type, img_data=bytes(img_data))
        return self.image

    def remove_image(self) -> None:
        self.image = None

    def tl_chars(self) -> int:
        """Character count of all translation lines, spaces included."""
        return sum(len(line) for line in self.tl_content)

    def pr_chars(self) -> int:
        """Character count of all proofread lines, spaces included."""
        return sum(len(line) for line in self.pr_content)

    def cm_chars(self) -> int:
        """Character count of all comments, spaces included."""
        return sum(len(line) for line in self.cm_content)

    def line_count(self) -> int:
        """Lines to typeset: proofread lines when present, translation lines otherwise."""
        if self.pr_content:
            return len(self.pr_content)
        return len(self.tl_content)
