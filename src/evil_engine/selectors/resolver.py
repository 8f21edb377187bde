"""Per-cursor selection resolution for resolved commands."""

from __future__ import annotations

from typing import Optional

from evil_engine.buffer.state import Range, Selection
from evil_engine.commands.state import ResolvedCommand
from evil_engine.host import TextView
from evil_engine.keymaps.models import Modifier, Motion, Operator, supports_modifiers
from evil_engine.runtime.telemetry import span

from .words import around_word, inner_word, next_word_end, prev_word_start


def cursor_offset(range_: Range) -> int:
    """Offset of the character the cursor of ``range_`` sits on."""

    if range_.head > range_.anchor:
        return range_.head - 1
    return range_.head


def whole_lines(
    text: TextView, range_: Range, count: int = 1, *, exclude_line_break: bool = False
) -> Range:
    """Lines touched by ``range_`` plus ``count - 1`` more below.

    A range that already covers whole lines (and is wider than a cursor)
    grows by ``count`` further lines instead.
    """

    total = text.len_lines()
    start_line = text.char_to_line(range_.from_)
    last = range_.to - 1 if range_.to > range_.from_ else range_.to
    end_line = text.char_to_line(last)

    start = text.line_to_char(start_line)
    end = text.line_to_char(min(end_line + count, total))
    next_line = text.line_to_char(end_line + 1)
    if range_.from_ == start and range_.to == next_line and not range_.is_cursor:
        end = text.line_to_char(min(end_line + 1 + count, total))

    if exclude_line_break:
        if end > start and text.char_at(end - 1) == "\n":
            end -= 1
            if end > start and text.char_at(end - 1) == "\r":
                end -= 1
    return Range(start, end)


def find_in_line(
    text: TextView, pos: int, motion: Motion, char: str, count: int = 1
) -> Optional[int]:
    """Offset of the ``count``-th ``char`` after (or before) ``pos`` on its line."""

    line = text.char_to_line(pos)
    remaining = max(1, count)
    if motion.is_backward:
        offsets = range(pos - 1, text.line_to_char(line) - 1, -1)
    else:
        offsets = range(pos + 1, text.line_end(line))
    for offset in offsets:
        if text.char_at(offset) == char:
            remaining -= 1
            if remaining == 0:
                return offset
    return None


def char_forward(range_: Range, count: int = 1) -> Range:
    head = max(range_.to, range_.from_ + 1) + max(1, count) - 1
    return Range(range_.from_, head)


def char_backward(range_: Range, count: int = 1) -> Range:
    return Range(range_.from_, max(0, range_.from_ - max(1, count)))


def _extend(range_: Range, head: int) -> Range:
    """``range_`` with a new head; the anchor's character stays selected."""

    anchor = range_.anchor
    if range_.head > anchor and head <= anchor:
        anchor += 1
    elif range_.head < anchor and head >= anchor:
        anchor -= 1
    return Range(anchor, head)


class SelectionResolver:
    """Computes the target range of a command for every cursor independently."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._logger_name = logger_name

    def resolve(
        self, text: TextView, selection: Selection, command: ResolvedCommand
    ) -> Selection:
        length = text.len_chars()
        with span(
            "selectors::resolve",
            logger_name=self._logger_name,
            component="selectors",
            metadata={
                "operator": command.operator.value,
                "motion": command.motion.value if command.motion else "line",
                "count": command.count,
                "cursors": len(selection),
            },
        ) as handle:
            resolved = selection.transform(
                lambda r: self.resolve_range(text, r, command).clamp(length)
            )
            handle.add_metadata("ranges", [(r.anchor, r.head) for r in resolved])
            return resolved

    def resolve_range(
        self, text: TextView, range_: Range, command: ResolvedCommand
    ) -> Range:
        motion = command.motion
        count = command.count
        if motion is None or (command.modifiers and not supports_modifiers(motion)):
            return whole_lines(
                text,
                range_,
                count,
                exclude_line_break=command.operator is Operator.CHANGE,
            )

        pos = cursor_offset(range_)
        if command.modifiers:
            if Modifier.AROUND in command.modifiers:
                start, end = around_word(text, pos, long=motion.is_long_word)
            else:
                start, end = inner_word(text, pos, long=motion.is_long_word)
            return Range(start, end)

        if motion.is_word:
            if motion.is_backward:
                start = prev_word_start(text, pos, count, long=motion.is_long_word)
                return Range(range_.to, start)
            end = next_word_end(text, pos, count, long=motion.is_long_word)
            return Range(range_.from_, end)

        if motion is Motion.LINE_START:
            line = text.char_to_line(range_.from_)
            return Range(range_.to, text.line_to_char(line))

        if motion is Motion.LINE_END:
            last = max(0, text.len_lines() - 1)
            line = min(text.char_to_line(pos) + count - 1, last)
            return Range(range_.from_, max(range_.from_, text.line_end(line)))

        if command.find_char is None:
            return whole_lines(text, range_, count)
        return self.find_range(text, range_, motion, command.find_char, count)

    def find_range(
        self, text: TextView, range_: Range, motion: Motion, char: str, count: int = 1
    ) -> Range:
        """Span an operator acts on for ``f``/``t``/``F``/``T``."""

        match = find_in_line(text, cursor_offset(range_), motion, char, count)
        if match is None:
            return Range(range_.from_, range_.from_)
        if motion is Motion.FIND_NEXT_CHAR:
            return Range(range_.from_, match + 1)
        if motion is Motion.TILL_NEXT_CHAR:
            return Range(range_.from_, match)
        if motion is Motion.FIND_PREV_CHAR:
            return Range(range_.to, match)
        return Range(range_.to, match + 1)

    def find_sweep(
        self,
        text: TextView,
        selection: Selection,
        motion: Motion,
        char: str,
        count: int = 1,
        *,
        extend: bool = False,
    ) -> Selection:
        """Move every cursor with a find motion; misses leave the range as is.

        The result spans from the cursor to the match so the caller can
        collapse it; with ``extend`` the range grows from its anchor, which
        stays selected even when the head crosses it.
        """

        def sweep(range_: Range) -> Range:
            pos = cursor_offset(range_)
            match = find_in_line(text, pos, motion, char, count)
            if match is None:
                return range_
            if motion is Motion.FIND_NEXT_CHAR:
                moved = Range(pos, match + 1)
            elif motion is Motion.TILL_NEXT_CHAR:
                moved = Range(pos, match)
            elif motion is Motion.FIND_PREV_CHAR:
                moved = Range(pos + 1, match)
            else:
                moved = Range(pos + 1, match + 1)
            if extend:
                return _extend(range_, moved.head)
            return moved

        with span(
            "selectors::find",
            logger_name=self._logger_name,
            component="selectors",
            metadata={"motion": motion.value, "char": char, "count": count},
        ):
            return selection.transform(sweep)

    def line_start(self, text: TextView, selection: Selection) -> Selection:
        """Cursor moved to the first character of its line."""

        def to_line_start(range_: Range) -> Range:
            line = text.char_to_line(cursor_offset(range_))
            return Range.point(text.line_to_char(line))

        return selection.transform(to_line_start)


__all__ = [
    "SelectionResolver",
    "char_backward",
    "char_forward",
    "cursor_offset",
    "find_in_line",
    "whole_lines",
]
