"""Select mode: operators act on the existing selection at once."""

from __future__ import annotations

from evil_engine.buffer.state import Mode
from evil_engine.keymaps.models import KeyInput, TokenKind

from .base_mode import ESCAPE_KEYS, ModeHandler, ModeResult


class SelectMode(ModeHandler):
    name = Mode.SELECT

    def handle_key(self, key: KeyInput) -> ModeResult:
        prefix = self.handle_prefix(key)
        if prefix is not None:
            return prefix

        if key.key in ESCAPE_KEYS or key.key == "v":
            self.reset()
            return ModeResult(
                consumed=True, switch_to=Mode.NORMAL, message="exit_select"
            )

        if key.key == ";":
            return self.repeat_find()
        if key.key == ",":
            return self.repeat_find(reverse=True)

        token = self.context.classifier.classify(key)
        if token.kind is TokenKind.OPERATOR and token.operator is not None:
            operator = token.operator
            count = self.take_count() or 1
            self.context.trace(
                f"Select: executing {operator.value}", operator=operator.value
            )
            outcome = self.context.execute(
                operator, self.host.selection, count=count
            )
            return ModeResult(
                consumed=True,
                status="executed",
                message=outcome.message or operator.value,
            )

        self._count = None
        return ModeResult(consumed=False, status="ignored")


__all__ = ["SelectMode"]
