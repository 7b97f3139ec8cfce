"""Render the document model into the lossy plain-text script format."""
from __future__ import annotations

from typing import List

from sff_document.model.balloon_model import Balloon
from sff_document.model.constants import TEXT_LINE_SEPARATOR
from sff_document.model.document_model import Document
from sff_document.renderer.utils import text_header


class TextRenderer:
    """Produce a reading script: one block per balloon, proofread text preferred.

    Metadata, comments, and images are not part of the output.
    """

    def render(self, document: Document) -> str:
        blocks = [self._render_balloon(balloon) for balloon in document.balloons]
        return "\n\n".join(block for block in blocks if block)

    def _render_balloon(self, balloon: Balloon) -> str:
        header = text_header(balloon.balloon_type)
        content: List[str] = balloon.pr_content or balloon.tl_content
        return f"\n{TEXT_LINE_SEPARATOR}\n".join(f"{header}: {line}" for line in content)
