"""Character-addressed text storage for evil_engine buffers."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from typing import List


def _line_starts(text: str) -> List[int]:
    starts = [0]
    for offset, char in enumerate(text):
        if char == "\n":
            starts.append(offset + 1)
    return starts


@dataclass(slots=True)
class TextDocument:
    """Immutable-ish text addressable by character offset ``0..len``.

    Lines are split on ``\\n`` only; a ``\\r`` before it belongs to the line's
    break. A trailing line break opens one more (empty) line, so
    ``line_to_char(len_lines())`` is always ``len_chars()``.
    """

    text: str = ""
    version: int = 0
    _starts: List[int] = field(default_factory=lambda: [0], repr=False)

    def __post_init__(self) -> None:
        self._starts = _line_starts(self.text)

    @classmethod
    def from_text(cls, text: str) -> "TextDocument":
        return cls(text=text)

    def replace(self, text: str) -> "TextDocument":
        """Return a new document with ``text`` and a bumped version."""

        return TextDocument(text=text, version=self.version + 1)

    def len_chars(self) -> int:
        return len(self.text)

    def len_lines(self) -> int:
        return len(self._starts)

    def char_at(self, offset: int) -> str:
        """Character at ``offset``, or ``""`` past either end."""

        if 0 <= offset < len(self.text):
            return self.text[offset]
        return ""

    def line_to_char(self, line: int) -> int:
        if line >= len(self._starts):
            return len(self.text)
        return self._starts[max(0, line)]

    def char_to_line(self, offset: int) -> int:
        offset = max(0, min(offset, len(self.text)))
        return bisect_right(self._starts, offset) - 1

    def line_end(self, line: int) -> int:
        """Offset of the line's break (or of the buffer end on the last line)."""

        end = self.line_to_char(line + 1)
        if end > self.line_to_char(line) and self.char_at(end - 1) == "\n":
            end -= 1
            if end > self.line_to_char(line) and self.char_at(end - 1) == "\r":
                end -= 1
        return end

    def slice(self, start: int, end: int) -> str:
        return self.text[start:end]
