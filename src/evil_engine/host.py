"""Interface the engine consumes from its host editor.

The engine never owns text, selections or registers. It reads them through an
``EditorHost`` and changes them only through ``apply`` and the mode/selection
primitives below. ``evil_engine.buffer.Buffer`` is the in-memory reference
implementation.
"""

from __future__ import annotations

from typing import List, Protocol, Sequence

from evil_engine.buffer.state import Edit, Mode, Selection


class TextView(Protocol):
    """Read-only character/line queries over the current text."""

    def len_chars(self) -> int: ...

    def len_lines(self) -> int: ...

    def char_at(self, offset: int) -> str: ...

    def line_to_char(self, line: int) -> int: ...

    def char_to_line(self, offset: int) -> int: ...

    def line_end(self, line: int) -> int: ...

    def slice(self, start: int, end: int) -> str: ...


class RegisterStore(Protocol):
    def read(self, name: str) -> List[str]: ...

    def write(self, name: str, values: Sequence[str]) -> None: ...


class EditorHost(Protocol):
    """Everything a session needs from the editor it is embedded in."""

    @property
    def mode(self) -> Mode: ...

    @property
    def selection(self) -> Selection: ...

    @property
    def document(self) -> TextView: ...

    @property
    def registers(self) -> RegisterStore: ...

    def apply(self, edits: Sequence[Edit]) -> object:
        """Commit all ``(start, end, replacement)`` spans atomically."""
        ...

    def set_selection(self, selection: Selection) -> None: ...

    def enter_insert_mode(self) -> None: ...

    def enter_select_mode(self) -> None: ...

    def exit_to_normal_mode(self) -> None:
        """Return to Normal from any mode; a no-op when already there."""
        ...

    def set_status(self, message: str) -> None: ...


__all__ = ["EditorHost", "Mode", "RegisterStore", "TextView"]
