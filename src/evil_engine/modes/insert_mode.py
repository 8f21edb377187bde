"""Insert mode: everything but Escape belongs to the host."""

from __future__ import annotations

from evil_engine.buffer.state import Mode
from evil_engine.keymaps.models import KeyInput

from .base_mode import ESCAPE_KEYS, ModeHandler, ModeResult


class InsertMode(ModeHandler):
    name = Mode.INSERT

    def handle_key(self, key: KeyInput) -> ModeResult:
        if key.key in ESCAPE_KEYS:
            return ModeResult(
                consumed=True, switch_to=Mode.NORMAL, message="exit_insert"
            )
        return ModeResult(consumed=False, status="passthrough")


__all__ = ["InsertMode"]
