"""Normal mode: counts, registers, staged operators and find motions."""

from __future__ import annotations

from typing import Callable, Dict

from evil_engine.buffer.state import Mode
from evil_engine.commands.state import ResolvedCommand, target_mode_for
from evil_engine.keymaps.models import KeyInput, Motion, Operator, TokenKind
from evil_engine.selectors.resolver import char_backward, char_forward

from .base_mode import ESCAPE_KEYS, ModeHandler, ModeResult


class NormalMode(ModeHandler):
    name = Mode.NORMAL

    def __init__(self, context) -> None:
        super().__init__(context)
        self._shortcuts: Dict[str, Callable[[], ModeResult]] = {
            "x": self._delete_char,
            "X": self._delete_char_left,
            "D": lambda: self._to_line_end(Operator.DELETE),
            "C": lambda: self._to_line_end(Operator.CHANGE),
            "Y": self._yank_line,
            ";": self.repeat_find,
            ",": lambda: self.repeat_find(reverse=True),
            "v": lambda: self._switch(Mode.SELECT, "enter_select"),
            "i": lambda: self._switch(Mode.INSERT, "enter_insert"),
        }

    def reset(self) -> None:
        super().reset()
        self.context.command.reset()

    def handle_key(self, key: KeyInput) -> ModeResult:
        context = self.context
        state = context.command
        if not state.is_idle:
            token = context.classifier.classify(key, pending=state.operator)
            return self.report(state.feed(token))

        prefix = self.handle_prefix(key)
        if prefix is not None:
            return prefix

        if key.key in ESCAPE_KEYS:
            self.reset()
            context.register = None
            context.trace("Command reset", status=False)
            return ModeResult(consumed=True, status="reset")

        if key.modifiers:
            self._count = None
            return ModeResult(consumed=False, status="ignored")

        token = context.classifier.classify(key)
        if token.kind is TokenKind.DIGIT:
            # Only a leading zero reaches this point.
            return self._line_start()

        if token.kind is TokenKind.OPERATOR and token.operator is not None:
            return self.report(state.feed(token, initial_count=self.take_count()))

        shortcut = self._shortcuts.get(key.key)
        if shortcut is not None:
            return shortcut()

        self._count = None
        return ModeResult(consumed=False, status="ignored")

    def _line_start(self) -> ModeResult:
        host = self.host
        host.set_selection(
            self.context.resolver.line_start(host.document, host.selection)
        )
        self.context.trace("Moved to line start")
        return ModeResult(consumed=True, status="line_start")

    def _delete_char(self) -> ModeResult:
        count = self.take_count() or 1
        host = self.host
        length = host.document.len_chars()
        selection = host.selection.transform(
            lambda r: char_forward(r, count).clamp(length)
        )
        self.context.execute(Operator.DELETE, selection, count=count)
        return ModeResult(consumed=True, status="executed", message="delete_char")

    def _delete_char_left(self) -> ModeResult:
        count = self.take_count() or 1
        selection = self.host.selection.transform(lambda r: char_backward(r, count))
        self.context.execute(Operator.DELETE, selection, count=count)
        return ModeResult(consumed=True, status="executed", message="delete_char_left")

    def _to_line_end(self, operator: Operator) -> ModeResult:
        command = ResolvedCommand(
            operator=operator,
            motion=Motion.LINE_END,
            count=self.take_count() or 1,
            target_mode=target_mode_for(operator),
        )
        self.context.run(command)
        return ModeResult(consumed=True, status="executed", message=operator.value)

    def _yank_line(self) -> ModeResult:
        command = ResolvedCommand(operator=Operator.YANK, count=self.take_count() or 1)
        outcome = self.context.run(command)
        return ModeResult(consumed=True, status="executed", message=outcome.message)

    def _switch(self, mode: Mode, message: str) -> ModeResult:
        self._count = None
        return ModeResult(consumed=True, switch_to=mode, message=message)


__all__ = ["NormalMode"]
