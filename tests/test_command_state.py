from __future__ import annotations

from typing import List, Optional

from evil_engine.buffer import Mode
from evil_engine.commands import (
    CommandState,
    FeedResult,
    FeedStatus,
    accumulate_count,
    target_mode_for,
)
from evil_engine.keymaps import KeyClassifier, Modifier, Motion, Operator


def feed_keys(
    state: CommandState, keys: str, *, count: Optional[int] = None
) -> List[FeedResult]:
    classifier = KeyClassifier()
    results: List[FeedResult] = []
    for index, key in enumerate(keys):
        token = classifier.classify(key, pending=state.operator)
        initial = count if index == 0 else None
        results.append(state.feed(token, initial_count=initial))
    return results


def test_operator_then_repeat_resolves_whole_line_form() -> None:
    state = CommandState()

    first, second = feed_keys(state, "dd")

    assert first.status is FeedStatus.CONTINUE
    assert first.message == "Command initiated without count"
    assert second.status is FeedStatus.EXECUTE
    assert second.command is not None
    assert second.command.line_wise
    assert second.command.operator is Operator.DELETE
    assert second.command.count == 1
    assert second.command.target_mode is Mode.NORMAL


def test_digits_accumulate_to_count() -> None:
    state = CommandState()

    results = feed_keys(state, "y12w")

    assert [r.status for r in results[:3]] == [FeedStatus.CONTINUE] * 3
    assert results[1].message == "Key callback: Increasing count"
    command = results[-1].command
    assert command is not None
    assert command.count == 12
    assert command.motion is Motion.NEXT_WORD_END


def test_leading_zero_dispatches_line_start() -> None:
    state = CommandState()

    results = feed_keys(state, "d0")

    assert results[-1].status is FeedStatus.EXECUTE
    assert results[-1].command is not None
    assert results[-1].command.motion is Motion.LINE_START
    assert results[-1].command.count == 1


def test_zero_after_count_is_a_digit() -> None:
    state = CommandState()

    results = feed_keys(state, "d10")

    assert results[-1].status is FeedStatus.CONTINUE
    assert state.count == 10


def test_initial_count_is_reported() -> None:
    state = CommandState()

    results = feed_keys(state, "c", count=3)

    assert results[0].message == "Command initiated with count 3"
    assert state.count == 3
    assert state.target_mode is Mode.INSERT


def test_modifier_then_word_motion() -> None:
    state = CommandState()

    results = feed_keys(state, "ciw")

    command = results[-1].command
    assert command is not None
    assert command.modifiers == frozenset({Modifier.INNER})
    assert command.motion is Motion.NEXT_WORD_END


def test_modifier_with_non_word_motion_falls_back_to_whole_line() -> None:
    state = CommandState()

    results = feed_keys(state, "di$")

    command = results[-1].command
    assert command is not None
    assert command.line_wise


def test_find_motion_waits_for_character() -> None:
    state = CommandState()

    results = feed_keys(state, "d2tx")

    assert results[2].status is FeedStatus.CONTINUE
    assert results[2].message == "Key callback: Awaiting find character"
    command = results[-1].command
    assert command is not None
    assert command.motion is Motion.TILL_NEXT_CHAR
    assert command.find_char == "x"
    assert command.count == 2


def test_find_character_may_be_an_operator_key() -> None:
    state = CommandState()

    results = feed_keys(state, "dfd")

    assert results[-1].command is not None
    assert results[-1].command.find_char == "d"


def test_other_operator_cancels_with_message() -> None:
    state = CommandState()

    results = feed_keys(state, "dy")

    assert results[-1].status is FeedStatus.CANCELLED
    assert results[-1].message == (
        "Key callback: Command interrupted due to another command"
    )
    assert state.is_idle


def test_unknown_key_cancels() -> None:
    state = CommandState()

    results = feed_keys(state, "d3q")

    assert results[-1].status is FeedStatus.CANCELLED
    assert results[-1].message == "Key callback: Command interrupted"
    assert state == CommandState()


def test_state_returns_to_initial_value_after_every_command() -> None:
    for keys in ("dd", "y3w", "ciw", "d0", "dq", "dy", "dfx", "c2aW"):
        state = CommandState()
        feed_keys(state, keys)
        assert state == CommandState(), keys


def test_idle_non_operator_is_not_a_command() -> None:
    state = CommandState()

    results = feed_keys(state, "w")

    assert results[0].status is FeedStatus.CANCELLED
    assert state.is_idle


def test_resolving_without_operator_cancels() -> None:
    state = CommandState()

    result = state._resolve(Motion.LINE_END)

    assert result.status is FeedStatus.CANCELLED
    assert result.command is None
    assert result.message == "No command pending"
    assert state.is_idle


def test_count_helpers() -> None:
    assert accumulate_count(None, 0) is None
    assert accumulate_count(None, 4) == 4
    assert accumulate_count(4, 0) == 40
    assert target_mode_for(Operator.YANK) is None
    assert target_mode_for(Operator.CHANGE) is Mode.INSERT
