from __future__ import annotations

import pytest

from evil_engine.buffer import (
    Buffer,
    BufferValidationError,
    Mode,
    Range,
    RegisterBank,
    Selection,
    TextDocument,
)


def test_document_line_queries() -> None:
    doc = TextDocument.from_text("ab\r\ncd\n")

    assert doc.len_chars() == 7
    assert doc.len_lines() == 3
    assert doc.line_to_char(1) == 4
    assert doc.line_to_char(3) == 7
    assert doc.char_to_line(5) == 1
    assert doc.line_end(0) == 2
    assert doc.line_end(2) == 7
    assert doc.char_at(7) == ""


def test_selection_is_clamped_to_text() -> None:
    buffer = Buffer.from_text("abc", cursor=10)

    assert buffer.selection.primary == Range(3, 3)


def test_apply_commits_all_spans_against_original_offsets() -> None:
    buffer = Buffer.from_text("one two three")

    delta = buffer.apply([(8, 13, "3"), (0, 3, "1")])

    assert buffer.text == "1 two 3"
    assert delta.version == buffer.document.version
    assert len(buffer.undo_timeline) == 1


def test_apply_rejects_overlapping_edits() -> None:
    buffer = Buffer.from_text("abcdef")

    with pytest.raises(BufferValidationError) as excinfo:
        buffer.apply([(0, 3, ""), (2, 4, "")])

    assert excinfo.value.edit == (2, 4, "")
    assert buffer.text == "abcdef"


def test_apply_rejects_out_of_range_edits() -> None:
    buffer = Buffer.from_text("abc")

    with pytest.raises(BufferValidationError):
        buffer.apply([(2, 9, "")])


def test_selection_follows_edits() -> None:
    buffer = Buffer.from_text("abcdef")
    buffer.set_selection(Selection.from_ranges([Range.point(1), Range.point(5)]))

    buffer.apply([(0, 2, "")])

    assert list(buffer.selection) == [Range.point(0), Range.point(3)]


def test_undo_and_redo() -> None:
    buffer = Buffer.from_text("abc")
    buffer.insert_text("x")

    assert buffer.text == "xabc"
    assert buffer.undo() is True
    assert buffer.text == "abc"
    assert buffer.redo() is True
    assert buffer.text == "xabc"
    assert buffer.redo() is False


def test_mode_transitions() -> None:
    buffer = Buffer.from_text("abc")

    buffer.enter_select_mode()
    assert buffer.mode is Mode.SELECT
    buffer.exit_to_normal_mode()
    assert buffer.mode is Mode.NORMAL
    buffer.enter_insert_mode()
    assert buffer.mirror().mode is Mode.INSERT


def test_register_bank() -> None:
    registers = RegisterBank()

    assert registers.read("q") == []
    registers.write("a", ["one", "two"])
    registers.write("_", ["gone"])

    assert registers.read("a") == ["one", "two"]
    assert registers.read("_") == []
