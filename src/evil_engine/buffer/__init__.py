"""In-memory reference host: document, selections, registers and undo."""

from .buffer import Buffer, BufferDelta, Transaction
from .document import TextDocument
from .registers import DEFAULT_REGISTER, DISCARD_REGISTER, RegisterBank
from .state import Edit, Mode, Range, Selection
from .sync import BufferMirror, BufferValidationError
from .undo import UndoEntry, UndoTimeline
from .validation import ensure_edits

__all__ = [
    "Buffer",
    "BufferDelta",
    "Transaction",
    "TextDocument",
    "RegisterBank",
    "DEFAULT_REGISTER",
    "DISCARD_REGISTER",
    "Edit",
    "Mode",
    "Range",
    "Selection",
    "BufferMirror",
    "BufferValidationError",
    "UndoEntry",
    "UndoTimeline",
    "ensure_edits",
]
