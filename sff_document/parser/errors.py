"""Exceptions raised while reading or writing SFF documents."""
from __future__ import annotations

from typing import List, Sequence

from sff_document.model.document_model import CounterMismatch


class CodecError(ValueError):
    """Base class for every SFF codec failure."""


class MalformedDocumentError(CodecError):
    """Markup is not well-formed or elements are nested incorrectly."""


class InvalidMetadataError(CodecError):
    """A numeric metadata field holds something other than a non-negative integer."""

    def __init__(self, field_name: str, value: str) -> None:
        super().__init__(f"Metadata field {field_name} must be a non-negative integer, got {value!r}")
        self.field_name = field_name
        self.value = value


class CounterMismatchError(CodecError):
    """Stored metadata counters disagree with the parsed content."""

    def __init__(self, mismatches: Sequence[CounterMismatch]) -> None:
        details = ", ".join(f"{m.name}: stored {m.stored}, actual {m.actual}" for m in mismatches)
        super().__init__(f"Metadata counters out of date ({details})")
        self.mismatches: List[CounterMismatch] = list(mismatches)


class UnencodableTextError(CodecError):
    """A string contains characters that XML 1.0 cannot represent."""
