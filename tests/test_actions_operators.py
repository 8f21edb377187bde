from __future__ import annotations

from typing import List, Sequence

import pytest

from evil_engine.actions import OperatorExecutor, merge_spans, yank_message
from evil_engine.buffer import Buffer, Edit, Mode, Range, Selection
from evil_engine.keymaps import Operator


class RecordingBuffer(Buffer):
    """Buffer that logs register writes and edits in call order."""

    def __init__(self, text: str) -> None:
        super().__init__()
        self.calls: List[str] = []
        self.document = self.document.replace(text)

    def apply(self, edits: Sequence[Edit], *, label: str = "apply"):
        self.calls.append("apply")
        return super().apply(edits, label=label)


class RecordingRegisters:
    def __init__(self, calls: List[str]) -> None:
        self.calls = calls
        self.values: dict[str, List[str]] = {}

    def read(self, name: str) -> List[str]:
        return list(self.values.get(name, []))

    def write(self, name: str, values: Sequence[str]) -> None:
        self.calls.append(f"write:{name}")
        self.values[name] = list(values)


def make_buffer(text: str, *ranges: Range) -> RecordingBuffer:
    buffer = RecordingBuffer(text)
    buffer.registers = RecordingRegisters(buffer.calls)  # type: ignore[assignment]
    buffer.set_selection(Selection.from_ranges(ranges or (Range.point(0),)))
    return buffer


def test_yank_writes_register_and_leaves_text() -> None:
    buffer = make_buffer("cat dog\n")
    executor = OperatorExecutor()

    outcome = executor.execute(
        buffer, Operator.YANK, Selection.from_ranges([Range(0, 3), Range(4, 7)])
    )

    assert buffer.text == "cat dog\n"
    assert buffer.registers.read('"') == ["cat", "dog"]
    assert outcome.mutated is False
    assert buffer.status == 'Yanked 2 selections to register "'
    assert buffer.calls == ['write:"']


def test_yank_from_select_returns_to_normal() -> None:
    buffer = make_buffer("cat dog\n", Range(0, 3))
    buffer.enter_select_mode()

    outcome = OperatorExecutor().execute(buffer, Operator.YANK, buffer.selection)

    assert outcome.mode is Mode.NORMAL
    assert buffer.mode is Mode.NORMAL


def test_yank_keeps_insert_mode_untouched() -> None:
    buffer = make_buffer("cat dog\n")
    buffer.enter_insert_mode()

    OperatorExecutor().execute(buffer, Operator.YANK, Selection.single(0, 3))

    assert buffer.mode is Mode.INSERT


def test_delete_writes_register_before_mutating() -> None:
    buffer = make_buffer("hello world\nfoo bar\n")

    outcome = OperatorExecutor().execute(
        buffer, Operator.DELETE, Selection.single(0, 12), register="a"
    )

    assert buffer.calls == ["write:a", "apply"]
    assert buffer.text == "foo bar\n"
    assert buffer.registers.read("a") == ["hello world\n"]
    assert outcome.mutated is True
    assert buffer.mode is Mode.NORMAL
    assert buffer.selection.primary == Range.point(0)


def test_delete_into_discard_register_skips_write() -> None:
    buffer = make_buffer("abc")

    OperatorExecutor().execute(
        buffer, Operator.DELETE, Selection.single(0, 1), register="_"
    )

    assert buffer.calls == ["apply"]
    assert buffer.text == "bc"


def test_change_enters_insert_mode() -> None:
    buffer = make_buffer("cat dog\n", Range.point(5))

    outcome = OperatorExecutor().execute(
        buffer, Operator.CHANGE, Selection.single(4, 7)
    )

    assert buffer.text == "cat \n"
    assert outcome.mode is Mode.INSERT
    assert buffer.registers.read('"') == ["dog"]


def test_delete_with_several_cursors_is_one_edit() -> None:
    buffer = make_buffer("ab cd ef")
    undo_before = len(buffer.undo_timeline)

    OperatorExecutor().execute(
        buffer,
        Operator.DELETE,
        Selection.from_ranges([Range(0, 2), Range(6, 8), Range(3, 5)]),
    )

    assert buffer.text == "  "
    assert buffer.calls.count("apply") == 1
    assert len(buffer.undo_timeline) == undo_before + 1
    assert buffer.registers.read('"') == ["ab", "ef", "cd"]


def test_empty_selection_does_not_touch_buffer() -> None:
    buffer = make_buffer("abc")

    outcome = OperatorExecutor().execute(
        buffer, Operator.DELETE, Selection.single(1, 1)
    )

    assert outcome.mutated is False
    assert buffer.calls == ['write:"']
    assert buffer.registers.read('"') == [""]


@pytest.mark.parametrize(
    "ranges,expected",
    [
        ([Range(0, 3), Range(2, 5)], [(0, 5)]),
        ([Range(4, 6), Range(0, 2)], [(0, 2), (4, 6)]),
        ([Range(0, 2), Range(2, 4)], [(0, 2), (2, 4)]),
        ([Range(1, 1)], []),
    ],
)
def test_merge_spans(ranges: List[Range], expected: List[tuple[int, int]]) -> None:
    assert merge_spans(Selection.from_ranges(ranges)) == expected


def test_yank_message_pluralizes() -> None:
    assert yank_message(1, "a") == "Yanked 1 selection to register a"
    assert yank_message(3, '"') == 'Yanked 3 selections to register "'
