"""Aggregate model combining document metadata and the ordered balloons."""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, List

from sff_document.model.balloon_model import Balloon
from sff_document.model.constants import FORMAT_VERSION, METADATA_COUNTER_FIELDS


@dataclass(slots=True)
class Metadata:
    """Header of an SFF document.

    The counters are a cache of values derivable from the balloons. They are
    only brought up to date by ``Document.recompute_metadata`` or when a
    document is serialized with recomputation enabled.
    """

    script_version: str = FORMAT_VERSION
    app: str = ""
    info: str = ""
    tl_length: int = 0
    pr_length: int = 0
    cm_length: int = 0
    balloon_count: int = 0
    line_count: int = 0

    def counters(self) -> Dict[str, int]:
        """Return the counter fields keyed by attribute name, in schema order."""
        return {name: getattr(self, name) for name in METADATA_COUNTER_FIELDS.values()}


@dataclass(frozen=True, slots=True)
class CounterMismatch:
    """A stored metadata counter that disagrees with the document content."""

    name: str
    stored: int
    actual: int


@dataclass(slots=True)
class Document:
    """In-memory SFF document: metadata plus balloons in reading order."""

    metadata: Metadata = field(default_factory=Metadata)
    balloons: List[Balloon] = field(default_factory=list)

    @classmethod
    def new_empty(cls) -> "Document":
        """Fresh document with default metadata and no balloons."""
        return cls(metadata=Metadata(), balloons=[])

    def computed_metadata(self) -> Metadata:
        """Return a copy of the metadata with counters derived from the balloons."""
        return replace(
            self.metadata,
            tl_length=sum(len(b.tl_content) for b in self.balloons),
            pr_length=sum(len(b.pr_content) for b in self.balloons),
            cm_length=sum(len(b.cm_content) for b in self.balloons),
            balloon_count=len(self.balloons),
            line_count=self.line_count(),
        )

    def recompute_metadata(self) -> Metadata:
        """Overwrite the stored counters with values derived from the balloons."""
        self.metadata = self.computed_metadata()
        return self.metadata

    def counter_mismatches(self) -> List[CounterMismatch]:
        """List stored counters that differ from the derived ones."""
        actual = self.computed_metadata().counters()
        return [
            CounterMismatch(name=name, stored=stored, actual=actual[name])
            for name, stored in self.metadata.counters().items()
            if stored != actual[name]
        ]

    def line_count(self) -> int:
        return sum(b.line_count() for b in self.balloons)

    def tl_chars(self) -> int:
        return sum(b.tl_chars() for b in self.balloons)

    def pr_chars(self) -> int:
        return sum(b.pr_chars() for b in self.balloons)

    def cm_chars(self) -> int:
        return sum(b.cm_chars() for b in self.balloons)
