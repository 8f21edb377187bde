"""Linear undo/redo history for the reference host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .state import Selection


@dataclass(frozen=True, slots=True)
class UndoEntry:
    """Whole-text snapshot of one committed transaction."""

    label: str
    before_text: str
    after_text: str
    selection_before: Selection
    selection_after: Selection


class UndoTimeline:
    """Two stacks: committed entries and undone ones.

    Recording a new entry forgets everything that was undone.
    """

    def __init__(self) -> None:
        self._done: List[UndoEntry] = []
        self._undone: List[UndoEntry] = []

    def __len__(self) -> int:
        return len(self._done) + len(self._undone)

    def push(self, entry: UndoEntry) -> None:
        self._done.append(entry)
        self._undone.clear()

    def undo(self) -> Optional[UndoEntry]:
        if not self._done:
            return None
        entry = self._done.pop()
        self._undone.append(entry)
        return entry

    def redo(self) -> Optional[UndoEntry]:
        if not self._undone:
            return None
        entry = self._undone.pop()
        self._done.append(entry)
        return entry
