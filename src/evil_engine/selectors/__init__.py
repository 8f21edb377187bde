"""Selection resolution, word stepping and collapse helpers."""

from .collapse import CollapseMode, collapse, collapse_selection
from .resolver import (
    SelectionResolver,
    char_backward,
    char_forward,
    cursor_offset,
    find_in_line,
    whole_lines,
)
from .words import (
    CharCategory,
    around_word,
    categorize,
    inner_word,
    next_word_end,
    prev_word_start,
    whitespace_run,
)

__all__ = [
    "CharCategory",
    "CollapseMode",
    "SelectionResolver",
    "around_word",
    "categorize",
    "char_backward",
    "char_forward",
    "collapse",
    "collapse_selection",
    "cursor_offset",
    "find_in_line",
    "inner_word",
    "next_word_end",
    "prev_word_start",
    "whitespace_run",
    "whole_lines",
]
