"""Reduce swept ranges to a single-character cursor."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from evil_engine.buffer.state import Range, Selection


class CollapseMode(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"
    TO_ANCHOR = "to_anchor"
    TO_HEAD = "to_head"


def collapse(range_: Range, mode: CollapseMode, length: Optional[int] = None) -> Range:
    """Return a one-character range derived from ``range_``.

    ``FORWARD`` keeps the character before the far edge, ``BACKWARD`` the one
    at the low edge. ``TO_ANCHOR`` and ``TO_HEAD`` keep the anchor or head
    side, respecting the range direction. With ``length`` the result is
    clamped to ``[0, length]``.
    """

    anchor, head = range_.anchor, range_.head
    if mode is CollapseMode.FORWARD:
        head = max(anchor, head)
        anchor = max(0, head - 1)
    elif mode is CollapseMode.BACKWARD:
        anchor = min(anchor, head)
        head = anchor + 1
    elif mode is CollapseMode.TO_ANCHOR:
        if head > anchor:
            head = anchor + 1
        else:
            head = max(0, anchor - 1)
    else:
        if head > anchor:
            anchor = max(0, head - 1)
        else:
            anchor = head + 1

    result = Range(anchor, head)
    if length is None:
        return result
    return result.clamp(length)


def collapse_selection(
    selection: Selection, mode: CollapseMode, length: Optional[int] = None
) -> Selection:
    return selection.transform(lambda r: collapse(r, mode, length))


__all__ = ["CollapseMode", "collapse", "collapse_selection"]
