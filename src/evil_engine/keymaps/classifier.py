"""Closed key -> token table used by every session."""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping, Optional

from evil_engine.runtime.telemetry import span

from .models import KeyInput, KeyToken, Modifier, Motion, Operator, TokenKind

DEFAULT_OPERATOR_KEYS: Mapping[str, Operator] = MappingProxyType(
    {
        "y": Operator.YANK,
        "d": Operator.DELETE,
        "c": Operator.CHANGE,
    }
)

DEFAULT_MOTION_KEYS: Mapping[str, Motion] = MappingProxyType(
    {
        # Operators act up to the end of the word for both w and e.
        "w": Motion.NEXT_WORD_END,
        "e": Motion.NEXT_WORD_END,
        "b": Motion.PREV_WORD_START,
        "W": Motion.NEXT_LONG_WORD_END,
        "E": Motion.NEXT_LONG_WORD_END,
        "B": Motion.PREV_LONG_WORD_START,
        "$": Motion.LINE_END,
        "HOME": Motion.LINE_START,
        "END": Motion.LINE_END,
        "f": Motion.FIND_NEXT_CHAR,
        "t": Motion.TILL_NEXT_CHAR,
        "F": Motion.FIND_PREV_CHAR,
        "T": Motion.TILL_PREV_CHAR,
    }
)

DEFAULT_MODIFIER_KEYS: Mapping[str, Modifier] = MappingProxyType(
    {
        "i": Modifier.INNER,
        "a": Modifier.AROUND,
    }
)

DIGIT_KEYS = frozenset("0123456789")


class KeyClassifier:
    """Maps keys to ``KeyToken`` values; every key has exactly one kind.

    Digits always classify as ``DIGIT``; the leading-zero rule is applied by
    the command state, which knows whether a count has started. The key of the
    pending operator classifies as ``REPEAT``.
    """

    def __init__(
        self,
        *,
        operators: Optional[Mapping[str, Operator]] = None,
        motions: Optional[Mapping[str, Motion]] = None,
        modifiers: Optional[Mapping[str, Modifier]] = None,
        logger_name: str | None = None,
    ) -> None:
        self._operators = dict(
            DEFAULT_OPERATOR_KEYS if operators is None else operators
        )
        self._motions = dict(DEFAULT_MOTION_KEYS if motions is None else motions)
        self._modifiers = dict(
            DEFAULT_MODIFIER_KEYS if modifiers is None else modifiers
        )
        self._logger_name = logger_name
        self._validate()

    def _validate(self) -> None:
        tables = (self._operators, self._motions, self._modifiers)
        seen: dict[str, int] = {}
        for index, table in enumerate(tables):
            for key in table:
                if key in DIGIT_KEYS:
                    raise ValueError(f"Key '{key}' is reserved for counts")
                if key in seen:
                    raise ValueError(f"Key '{key}' is mapped more than once")
                seen[key] = index

    def classify(
        self, key: KeyInput | str, *, pending: Optional[Operator] = None
    ) -> KeyToken:
        stroke = KeyInput.coerce(key)
        with span(
            "keymaps::classify",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"key": stroke.token},
        ) as handle:
            token = self._lookup(stroke, pending)
            handle.add_metadata("kind", token.kind.value)
            return token

    def _lookup(self, stroke: KeyInput, pending: Optional[Operator]) -> KeyToken:
        if stroke.modifiers:
            return KeyToken(kind=TokenKind.OTHER, key=stroke)

        name = stroke.key
        if name in DIGIT_KEYS:
            return KeyToken(kind=TokenKind.DIGIT, key=stroke, digit=int(name))

        operator = self._operators.get(name)
        if operator is not None:
            kind = TokenKind.REPEAT if operator is pending else TokenKind.OPERATOR
            return KeyToken(kind=kind, key=stroke, operator=operator)

        motion = self._motions.get(name)
        if motion is not None:
            return KeyToken(kind=TokenKind.MOTION, key=stroke, motion=motion)

        modifier = self._modifiers.get(name)
        if modifier is not None:
            return KeyToken(kind=TokenKind.MODIFIER, key=stroke, modifier=modifier)

        return KeyToken(kind=TokenKind.OTHER, key=stroke)


__all__ = [
    "KeyClassifier",
    "DEFAULT_OPERATOR_KEYS",
    "DEFAULT_MOTION_KEYS",
    "DEFAULT_MODIFIER_KEYS",
    "DIGIT_KEYS",
]
