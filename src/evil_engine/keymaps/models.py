"""Dataclasses and enums describing keys and the tokens they classify to."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


def _normalize_modifiers(modifiers: tuple[str, ...]) -> tuple[str, ...]:
    values = tuple(m.strip().lower() for m in modifiers if m.strip())
    return tuple(sorted(dict.fromkeys(values)))


@dataclass(frozen=True, slots=True)
class KeyInput:
    """Normalized key event handed to a session."""

    key: str
    modifiers: tuple[str, ...] = ()
    text: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")
        object.__setattr__(self, "modifiers", _normalize_modifiers(self.modifiers))

    @classmethod
    def coerce(cls, key: "KeyInput | str") -> "KeyInput":
        if isinstance(key, KeyInput):
            return key
        return cls(key=key, text=key if len(key) == 1 else None)

    @property
    def token(self) -> str:
        if self.modifiers:
            modifier = "+".join(self.modifiers)
            return f"{modifier}+{self.key}"
        return self.key

    @property
    def char(self) -> Optional[str]:
        """The printable character this key types, if any."""

        if self.modifiers:
            return None
        if self.text is not None and len(self.text) == 1:
            return self.text
        if len(self.key) == 1:
            return self.key
        return None


class TokenKind(str, Enum):
    OPERATOR = "operator"
    MOTION = "motion"
    MODIFIER = "modifier"
    DIGIT = "digit"
    REPEAT = "repeat"
    OTHER = "other"


class Operator(str, Enum):
    YANK = "yank"
    DELETE = "delete"
    CHANGE = "change"


class Motion(str, Enum):
    NEXT_WORD_END = "next_word_end"
    PREV_WORD_START = "prev_word_start"
    NEXT_LONG_WORD_END = "next_long_word_end"
    PREV_LONG_WORD_START = "prev_long_word_start"
    LINE_START = "line_start"
    LINE_END = "line_end"
    FIND_NEXT_CHAR = "find_next_char"
    TILL_NEXT_CHAR = "till_next_char"
    FIND_PREV_CHAR = "find_prev_char"
    TILL_PREV_CHAR = "till_prev_char"

    @property
    def is_word(self) -> bool:
        return self in _WORD_MOTIONS

    @property
    def is_long_word(self) -> bool:
        return self in (Motion.NEXT_LONG_WORD_END, Motion.PREV_LONG_WORD_START)

    @property
    def is_find(self) -> bool:
        return self in _FIND_MOTIONS

    @property
    def is_backward(self) -> bool:
        return self in _BACKWARD_MOTIONS

    def reversed(self) -> "Motion":
        """Opposite-direction find motion (``f`` <-> ``F``, ``t`` <-> ``T``)."""

        return _REVERSED_FINDS.get(self, self)


_WORD_MOTIONS = frozenset(
    {
        Motion.NEXT_WORD_END,
        Motion.PREV_WORD_START,
        Motion.NEXT_LONG_WORD_END,
        Motion.PREV_LONG_WORD_START,
    }
)
_FIND_MOTIONS = frozenset(
    {
        Motion.FIND_NEXT_CHAR,
        Motion.TILL_NEXT_CHAR,
        Motion.FIND_PREV_CHAR,
        Motion.TILL_PREV_CHAR,
    }
)
_BACKWARD_MOTIONS = frozenset(
    {
        Motion.PREV_WORD_START,
        Motion.PREV_LONG_WORD_START,
        Motion.LINE_START,
        Motion.FIND_PREV_CHAR,
        Motion.TILL_PREV_CHAR,
    }
)
_REVERSED_FINDS = {
    Motion.FIND_NEXT_CHAR: Motion.FIND_PREV_CHAR,
    Motion.FIND_PREV_CHAR: Motion.FIND_NEXT_CHAR,
    Motion.TILL_NEXT_CHAR: Motion.TILL_PREV_CHAR,
    Motion.TILL_PREV_CHAR: Motion.TILL_NEXT_CHAR,
}


class Modifier(str, Enum):
    INNER = "inner"
    AROUND = "around"


def supports_modifiers(motion: Optional[Motion]) -> bool:
    """Text-object modifiers only combine with word motions."""

    return motion is not None and motion.is_word


@dataclass(frozen=True, slots=True)
class KeyToken:
    """Semantic meaning of one key in the current command context."""

    kind: TokenKind
    key: KeyInput
    operator: Optional[Operator] = None
    motion: Optional[Motion] = None
    modifier: Optional[Modifier] = None
    digit: Optional[int] = None


__all__ = [
    "KeyInput",
    "KeyToken",
    "TokenKind",
    "Operator",
    "Motion",
    "Modifier",
    "supports_modifiers",
]
