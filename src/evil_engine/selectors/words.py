"""Character categories and word-boundary stepping over a ``TextView``."""

from __future__ import annotations

from enum import Enum
from typing import Tuple

from evil_engine.host import TextView


class CharCategory(str, Enum):
    EOL = "eol"
    WHITESPACE = "whitespace"
    WORD = "word"
    PUNCTUATION = "punctuation"


def categorize(char: str, *, long: bool = False) -> CharCategory:
    """Category of ``char``; long words merge word and punctuation characters.

    The empty string (an offset past either end) counts as a line break.
    """

    if char in ("", "\n", "\r"):
        return CharCategory.EOL
    if char.isspace():
        return CharCategory.WHITESPACE
    if char.isalnum() or char == "_":
        return CharCategory.WORD
    return CharCategory.WORD if long else CharCategory.PUNCTUATION


def is_blank(category: CharCategory) -> bool:
    return category in (CharCategory.EOL, CharCategory.WHITESPACE)


def _is_space(char: str) -> bool:
    return categorize(char) is CharCategory.WHITESPACE


def is_boundary(left: str, right: str, *, long: bool = False) -> bool:
    return categorize(left, long=long) is not categorize(right, long=long)


def next_word_end(
    text: TextView, pos: int, count: int = 1, *, long: bool = False
) -> int:
    """Exclusive offset just past the ``count``-th word end from ``pos``.

    Sitting on the last character of a word uses up the first step.
    """

    length = text.len_chars()
    end = pos
    remaining = max(1, count)

    current = text.char_at(pos)
    if not is_blank(categorize(current, long=long)) and is_boundary(
        current, text.char_at(pos + 1), long=long
    ):
        end = pos + 1
        remaining -= 1

    while remaining > 0 and end < length:
        while end < length and is_blank(categorize(text.char_at(end), long=long)):
            end += 1
        if end >= length:
            break
        category = categorize(text.char_at(end), long=long)
        while end < length and categorize(text.char_at(end), long=long) is category:
            end += 1
        remaining -= 1
    return end


def prev_word_start(
    text: TextView, pos: int, count: int = 1, *, long: bool = False
) -> int:
    """Offset of the ``count``-th word start at or before ``pos``.

    Mirrors ``next_word_end``: sitting on the first character of a word uses
    up the first step.
    """

    start = pos
    remaining = max(1, count)

    current = text.char_at(pos)
    if not is_blank(categorize(current, long=long)) and is_boundary(
        text.char_at(pos - 1), current, long=long
    ):
        remaining -= 1

    while remaining > 0 and start > 0:
        while start > 0 and is_blank(categorize(text.char_at(start - 1), long=long)):
            start -= 1
        if start <= 0:
            break
        category = categorize(text.char_at(start - 1), long=long)
        while start > 0 and categorize(text.char_at(start - 1), long=long) is category:
            start -= 1
        remaining -= 1
    return start


def whitespace_run(text: TextView, pos: int) -> Tuple[int, int]:
    """Span of whitespace around ``pos``, never crossing a line break."""

    start = pos
    while start > 0 and _is_space(text.char_at(start - 1)):
        start -= 1
    end = pos
    while _is_space(text.char_at(end)):
        end += 1
    return start, end


def inner_word(text: TextView, pos: int, *, long: bool = False) -> Tuple[int, int]:
    """One backward word-start step, then one forward word-end step."""

    category = categorize(text.char_at(pos), long=long)
    if category is CharCategory.WHITESPACE:
        return whitespace_run(text, pos)
    if category is CharCategory.EOL:
        return pos, pos
    start = prev_word_start(text, pos, long=long)
    return start, next_word_end(text, start, long=long)


def around_word(text: TextView, pos: int, *, long: bool = False) -> Tuple[int, int]:
    """Inner word plus its trailing whitespace, or leading when none trails."""

    start, end = inner_word(text, pos, long=long)
    if start == end:
        return start, end

    if categorize(text.char_at(pos)) is CharCategory.WHITESPACE:
        # On whitespace the following word joins the run.
        if not is_blank(categorize(text.char_at(end), long=long)):
            end = next_word_end(text, end, long=long)
        return start, end

    _, trailing = whitespace_run(text, end)
    if trailing > end:
        return start, trailing
    leading, _ = whitespace_run(text, start)
    return leading, end


__all__ = [
    "CharCategory",
    "around_word",
    "categorize",
    "inner_word",
    "is_blank",
    "is_boundary",
    "next_word_end",
    "prev_word_start",
    "whitespace_run",
]
