"""Adapter boundary types for syncing buffers with host widgets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .state import Edit, Mode, Selection


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    selection: Selection
    mode: Mode
    status: str = ""
    attributes: dict[str, str] = field(default_factory=dict)


class BufferValidationError(RuntimeError):
    """Raised when an edit batch is unsorted, overlapping, or out of bounds."""

    def __init__(self, message: str, *, edit: Optional[Edit] = None) -> None:
        super().__init__(message)
        self.edit = edit
