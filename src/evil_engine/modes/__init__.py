"""Per-mode key handlers and the services they share."""

from .base_mode import (
    ESCAPE_KEYS,
    EventBus,
    FindOperation,
    ModeHandler,
    ModeResult,
    SessionContext,
)
from .insert_mode import InsertMode
from .normal_mode import NormalMode
from .select_mode import SelectMode

__all__ = [
    "ESCAPE_KEYS",
    "EventBus",
    "FindOperation",
    "InsertMode",
    "ModeHandler",
    "ModeResult",
    "NormalMode",
    "SelectMode",
    "SessionContext",
]
