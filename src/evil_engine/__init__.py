"""Operator + count + motion command engine for modal text editing."""

from evil_engine.buffer import Buffer, Mode, Range, Selection
from evil_engine.host import EditorHost
from evil_engine.session import EvilSession

__all__ = [
    "Buffer",
    "EditorHost",
    "EvilSession",
    "Mode",
    "Range",
    "Selection",
    "actions",
    "adapters",
    "buffer",
    "commands",
    "host",
    "keymaps",
    "modes",
    "runtime",
    "selectors",
    "session",
]

__version__ = "0.1.0"
