"""Pending-command record and its key-by-key transition function."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional, Set

from evil_engine.buffer.state import Mode
from evil_engine.keymaps.models import (
    KeyToken,
    Modifier,
    Motion,
    Operator,
    TokenKind,
    supports_modifiers,
)
from evil_engine.runtime import telemetry


class FeedStatus(str, Enum):
    CONTINUE = "continue"
    EXECUTE = "execute"
    CANCELLED = "cancelled"


@dataclass(frozen=True, slots=True)
class ResolvedCommand:
    """A complete command ready for selection resolution.

    ``motion`` is ``None`` for the whole-line form (operator repeated).
    """

    operator: Operator
    motion: Optional[Motion] = None
    count: int = 1
    modifiers: FrozenSet[Modifier] = frozenset()
    target_mode: Optional[Mode] = None
    find_char: Optional[str] = None

    @property
    def line_wise(self) -> bool:
        return self.motion is None


@dataclass(frozen=True, slots=True)
class FeedResult:
    status: FeedStatus
    command: Optional[ResolvedCommand] = None
    message: str = ""


def target_mode_for(operator: Operator) -> Optional[Mode]:
    """Mode entered once ``operator`` has run; ``None`` leaves it unchanged."""

    if operator is Operator.CHANGE:
        return Mode.INSERT
    if operator is Operator.DELETE:
        return Mode.NORMAL
    return None


def accumulate_count(count: Optional[int], digit: int) -> Optional[int]:
    """Append ``digit`` to ``count``; a leading zero starts no count."""

    if count is None and digit == 0:
        return None
    return (count or 0) * 10 + digit


@dataclass(slots=True)
class CommandState:
    """Operator, count, motion and modifiers of the command being typed.

    Empty while idle. ``feed`` consumes one classified key at a time and
    resets the record before returning any ``EXECUTE`` or ``CANCELLED``
    result, so every completed or abandoned command ends idle.
    """

    operator: Optional[Operator] = None
    motion: Optional[Motion] = None
    count: Optional[int] = None
    modifiers: Set[Modifier] = field(default_factory=set)
    target_mode: Optional[Mode] = None

    @property
    def is_idle(self) -> bool:
        return self.operator is None

    @property
    def awaiting_char(self) -> bool:
        return self.motion is not None and self.motion.is_find

    def reset(self) -> None:
        self.operator = None
        self.motion = None
        self.count = None
        self.modifiers = set()
        self.target_mode = None

    def begin(self, operator: Operator, *, count: Optional[int] = None) -> FeedResult:
        self.reset()
        self.operator = operator
        self.count = count if count and count > 0 else None
        self.target_mode = target_mode_for(operator)
        if self.count is not None:
            message = f"Command initiated with count {self.count}"
        else:
            message = "Command initiated without count"
        return self._result(FeedStatus.CONTINUE, message=message)

    def feed(
        self, token: KeyToken, *, initial_count: Optional[int] = None
    ) -> FeedResult:
        if self.operator is None:
            if token.kind is TokenKind.OPERATOR and token.operator is not None:
                return self.begin(token.operator, count=initial_count)
            return self._result(FeedStatus.CANCELLED, message="No command pending")

        if self.awaiting_char:
            char = token.key.char
            if char is None:
                return self._cancel("Key callback: Find interrupted")
            return self._resolve(self.motion, find_char=char)

        kind = token.kind
        if kind is TokenKind.DIGIT and token.digit is not None:
            updated = accumulate_count(self.count, token.digit)
            if updated is None:
                return self._resolve(Motion.LINE_START)
            self.count = updated
            return self._result(
                FeedStatus.CONTINUE, message="Key callback: Increasing count"
            )

        if kind is TokenKind.MODIFIER and token.modifier is not None:
            self.modifiers.add(token.modifier)
            return self._result(
                FeedStatus.CONTINUE, message="Key callback: Modifier key detected"
            )

        if kind is TokenKind.REPEAT:
            return self._resolve(None)

        if kind is TokenKind.MOTION and token.motion is not None:
            motion = token.motion
            if self.modifiers and not supports_modifiers(motion):
                return self._resolve(None)
            if motion.is_find:
                self.motion = motion
                return self._result(
                    FeedStatus.CONTINUE,
                    message="Key callback: Awaiting find character",
                )
            return self._resolve(motion)

        if kind is TokenKind.OPERATOR:
            return self._cancel(
                "Key callback: Command interrupted due to another command"
            )

        return self._cancel("Key callback: Command interrupted")

    def _resolve(
        self, motion: Optional[Motion], *, find_char: Optional[str] = None
    ) -> FeedResult:
        operator = self.operator
        if operator is None:
            return self._cancel("No command pending")
        command = ResolvedCommand(
            operator=operator,
            motion=motion,
            count=self.count or 1,
            modifiers=frozenset(self.modifiers),
            target_mode=self.target_mode,
            find_char=find_char,
        )
        self.reset()
        return self._result(
            FeedStatus.EXECUTE,
            command=command,
            message="Key callback: Executing command",
        )

    def _cancel(self, message: str) -> FeedResult:
        self.reset()
        return self._result(FeedStatus.CANCELLED, message=message)

    def _result(
        self,
        status: FeedStatus,
        *,
        command: Optional[ResolvedCommand] = None,
        message: str = "",
    ) -> FeedResult:
        telemetry.record_event(
            "command.feed",
            level="debug",
            data={
                "status": status.value,
                "operator": self.operator.value if self.operator else None,
                "count": self.count,
                "message": message,
            },
        )
        return FeedResult(status=status, command=command, message=message)


__all__ = [
    "CommandState",
    "FeedResult",
    "FeedStatus",
    "ResolvedCommand",
    "accumulate_count",
    "target_mode_for",
]
