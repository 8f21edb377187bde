"""Key classification: which keys are operators, motions, modifiers, digits."""

from .classifier import (
    DEFAULT_MODIFIER_KEYS,
    DEFAULT_MOTION_KEYS,
    DEFAULT_OPERATOR_KEYS,
    DIGIT_KEYS,
    KeyClassifier,
)
from .models import (
    KeyInput,
    KeyToken,
    Modifier,
    Motion,
    Operator,
    TokenKind,
    supports_modifiers,
)

__all__ = [
    "KeyClassifier",
    "KeyInput",
    "KeyToken",
    "Modifier",
    "Motion",
    "Operator",
    "TokenKind",
    "supports_modifiers",
    "DEFAULT_OPERATOR_KEYS",
    "DEFAULT_MOTION_KEYS",
    "DEFAULT_MODIFIER_KEYS",
    "DIGIT_KEYS",
]
