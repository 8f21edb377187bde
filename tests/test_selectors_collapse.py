from __future__ import annotations

from evil_engine.buffer import Range, Selection
from evil_engine.selectors import CollapseMode, collapse, collapse_selection


def test_forward_and_backward_collapse() -> None:
    swept = Range(2, 7)

    assert collapse(swept, CollapseMode.FORWARD) == Range(6, 7)
    assert collapse(swept, CollapseMode.BACKWARD) == Range(2, 3)


def test_collapse_ignores_direction_for_forward_and_backward() -> None:
    swept = Range(7, 2)

    assert collapse(swept, CollapseMode.FORWARD) == Range(6, 7)
    assert collapse(swept, CollapseMode.BACKWARD) == Range(2, 3)


def test_collapse_to_anchor() -> None:
    assert collapse(Range(2, 7), CollapseMode.TO_ANCHOR) == Range(2, 3)
    assert collapse(Range(7, 2), CollapseMode.TO_ANCHOR) == Range(7, 6)


def test_collapse_to_head() -> None:
    assert collapse(Range(2, 7), CollapseMode.TO_HEAD) == Range(6, 7)
    assert collapse(Range(7, 2), CollapseMode.TO_HEAD) == Range(3, 2)


def test_collapse_clamps_to_buffer() -> None:
    assert collapse(Range(0, 0), CollapseMode.FORWARD) == Range(0, 0)
    assert collapse(Range(5, 5), CollapseMode.BACKWARD, 5) == Range(5, 5)


def test_collapse_selection_applies_to_every_range() -> None:
    selection = Selection.from_ranges([Range(0, 3), Range(5, 9)], primary_index=1)

    collapsed = collapse_selection(selection, CollapseMode.FORWARD)

    assert list(collapsed) == [Range(2, 3), Range(8, 9)]
    assert collapsed.primary_index == 1
