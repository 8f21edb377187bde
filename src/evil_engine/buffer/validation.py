"""Validation helpers shared across buffer services."""

from __future__ import annotations

from typing import Sequence, Tuple

from .document import TextDocument
from .state import Edit
from .sync import BufferValidationError


def ensure_edits(document: TextDocument, edits: Sequence[Edit]) -> Tuple[Edit, ...]:
    """Return ``edits`` sorted by start, rejecting overlaps and bad bounds."""

    length = document.len_chars()
    ordered = tuple(sorted(edits, key=lambda edit: (edit[0], edit[1])))
    previous_end = 0
    for edit in ordered:
        start, end, _ = edit
        if start < 0 or end > length:
            raise BufferValidationError("Edit out of range", edit=edit)
        if start > end:
            raise BufferValidationError("Edit start after end", edit=edit)
        if start < previous_end:
            raise BufferValidationError("Overlapping edits", edit=edit)
        previous_end = end
    return ordered
