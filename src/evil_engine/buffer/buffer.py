"""High-level buffer façade: the in-memory reference host for the engine."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import ContextManager, List, Optional, Sequence

from evil_engine.runtime import telemetry

from .document import TextDocument
from .registers import RegisterBank
from .state import Edit, Mode, Range, Selection
from .sync import BufferMirror
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_edits


@dataclass(slots=True)
class BufferDelta:
    version: int
    text: str
    selection: Selection
    label: str


class Buffer:
    """Text, per-cursor selection, registers, mode and undo in one object.

    Implements ``evil_engine.host.EditorHost``.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[TextDocument] = None,
        selection: Optional[Selection] = None,
        registers: Optional[RegisterBank] = None,
        undo: Optional[UndoTimeline] = None,
        mode: Mode = Mode.NORMAL,
    ) -> None:
        self.name = name
        self.document = document or TextDocument()
        self.registers = registers or RegisterBank()
        self.undo_timeline = undo or UndoTimeline()
        self._mode = mode
        self._selection = Selection.point(0)
        self.status: str = ""
        self.status_history: List[str] = []
        self.set_selection(selection or Selection.point(0))

    @classmethod
    def from_text(
        cls, text: str, *, name: str = "default", cursor: int = 0
    ) -> "Buffer":
        return cls(
            name=name,
            document=TextDocument.from_text(text),
            selection=Selection.point(cursor),
        )

    @property
    def text(self) -> str:
        return self.document.text

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def selection(self) -> Selection:
        return self._selection

    def set_selection(self, selection: Selection) -> None:
        length = self.document.len_chars()
        self._selection = selection.transform(lambda r: r.clamp(length))

    def enter_insert_mode(self) -> None:
        self._switch(Mode.INSERT)

    def enter_select_mode(self) -> None:
        self._switch(Mode.SELECT)

    def exit_to_normal_mode(self) -> None:
        self._switch(Mode.NORMAL)

    def set_status(self, message: str) -> None:
        self.status = message
        self.status_history.append(message)

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> BufferMirror:
        return BufferMirror(
            text=self.document.text,
            selection=self._selection,
            mode=self._mode,
            status=self.status,
            attributes=dict(attributes or {}),
        )

    def apply(self, edits: Sequence[Edit], *, label: str = "apply") -> BufferDelta:
        """Commit every span at once; offsets refer to the text before the call."""

        ordered = ensure_edits(self.document, edits)
        with Transaction(self, label) as tx:
            before_text = self.document.text
            before_selection = self._selection
            pieces: List[str] = []
            cursor = 0
            for start, end, replacement in ordered:
                pieces.append(before_text[cursor:start])
                pieces.append(replacement)
                cursor = end
            pieces.append(before_text[cursor:])
            self.document = self.document.replace("".join(pieces))
            self.set_selection(
                before_selection.transform(lambda r: _map_range(r, ordered))
            )
            tx.commit(
                before_text, self.document.text, before_selection, self._selection
            )

        return BufferDelta(
            version=self.document.version,
            text=self.document.text,
            selection=self._selection,
            label=label,
        )

    def insert_text(self, text: str) -> BufferDelta:
        """Insert ``text`` before every cursor (Insert-mode typing)."""

        edits = [(r.from_, r.from_, text) for r in self._selection]
        return self.apply(edits, label="insert_text")

    def undo(self) -> bool:
        entry = self.undo_timeline.undo()
        if entry is None:
            return False
        self.document = self.document.replace(entry.before_text)
        self.set_selection(entry.selection_before)
        return True

    def redo(self) -> bool:
        entry = self.undo_timeline.redo()
        if entry is None:
            return False
        self.document = self.document.replace(entry.after_text)
        self.set_selection(entry.selection_after)
        return True

    def _switch(self, mode: Mode) -> None:
        if mode is self._mode:
            return
        previous = self._mode
        self._mode = mode
        telemetry.record_event(
            "mode.switch",
            data={"buffer": self.name, "from": previous.value, "mode": mode.value},
        )


class Transaction(AbstractContextManager["Transaction"]):
    """Telemetry span around one edit; the undo entry lands only on success."""

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self.entry: Optional[UndoEntry] = None
        self._span: Optional[ContextManager[object]] = None

    def __enter__(self) -> "Transaction":
        self._span = telemetry.span(
            f"buffer::{self.label}",
            component=True,
            metadata={"buffer": self.buffer.name},
        )
        self._span.__enter__()
        return self

    def commit(
        self,
        before_text: str,
        after_text: str,
        selection_before: Selection,
        selection_after: Selection,
    ) -> None:
        self.entry = UndoEntry(
            self.label, before_text, after_text, selection_before, selection_after
        )

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is None and self.entry is not None:
            self.buffer.undo_timeline.push(self.entry)
        if self._span is not None:
            self._span.__exit__(exc_type, exc, tb)
        return False


def _map_offset(offset: int, edits: Sequence[Edit]) -> int:
    shift = 0
    for start, end, replacement in edits:
        if offset < start:
            break
        if offset < end:
            return start + shift
        shift += len(replacement) - (end - start)
    return offset + shift


def _map_range(range_: Range, edits: Sequence[Edit]) -> Range:
    mapped = Range(_map_offset(range_.anchor, edits), _map_offset(range_.head, edits))
    if mapped.width == 0:
        return Range.point(mapped.from_)
    return mapped
