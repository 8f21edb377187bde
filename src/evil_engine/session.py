"""Editing session: one pending command, one host, three mode handlers."""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from evil_engine.actions.operators import OperatorExecutor
from evil_engine.buffer.registers import DEFAULT_REGISTER
from evil_engine.buffer.state import Mode
from evil_engine.commands.state import CommandState
from evil_engine.host import EditorHost
from evil_engine.keymaps.classifier import KeyClassifier
from evil_engine.keymaps.models import KeyInput
from evil_engine.modes.base_mode import (
    EventBus,
    ModeHandler,
    ModeResult,
    SessionContext,
)
from evil_engine.modes.insert_mode import InsertMode
from evil_engine.modes.normal_mode import NormalMode
from evil_engine.modes.select_mode import SelectMode
from evil_engine.runtime import telemetry
from evil_engine.selectors.resolver import SelectionResolver


class EvilSession:
    """Routes keys to the handler of the host's current mode.

    Each session owns its own ``CommandState``; two sessions over two hosts
    never share a pending command. The host stays the owner of the mode:
    handlers ask for a switch through ``ModeResult.switch_to`` and the
    session forwards it to the host.
    """

    def __init__(
        self,
        host: EditorHost,
        *,
        name: str = "session",
        classifier: Optional[KeyClassifier] = None,
        resolver: Optional[SelectionResolver] = None,
        executor: Optional[OperatorExecutor] = None,
        default_register: str = DEFAULT_REGISTER,
        logger_name: Optional[str] = None,
    ) -> None:
        self.host = host
        self.name = name
        self.bus = EventBus()
        self.logger = telemetry.get_logger(logger_name)
        self.context = SessionContext(
            host=host,
            classifier=classifier or KeyClassifier(logger_name=logger_name),
            resolver=resolver or SelectionResolver(logger_name=logger_name),
            executor=executor
            or OperatorExecutor(
                default_register=default_register, logger_name=logger_name
            ),
            bus=self.bus,
            logger_name=logger_name,
        )
        self._modes: Dict[Mode, ModeHandler] = {
            Mode.NORMAL: NormalMode(self.context),
            Mode.SELECT: SelectMode(self.context),
            Mode.INSERT: InsertMode(self.context),
        }
        self._active = host.mode

    @property
    def command(self) -> CommandState:
        return self.context.command

    @property
    def pending(self) -> bool:
        return not self.context.command.is_idle

    @property
    def active_mode(self) -> ModeHandler:
        return self._modes[self.host.mode]

    def handle_key(self, key: KeyInput | str) -> ModeResult:
        stroke = KeyInput.coerce(key)
        self._sync_mode()
        mode = self.active_mode
        with telemetry.span(
            name=f"mode::{mode.name.value}",
            logger_name=self.context.logger_name,
            component=True,
            metadata={
                "key": stroke.token,
                "mode": mode.name.value,
                "session": self.name,
            },
        ):
            result = mode.handle_key(stroke)
        if result.switch_to is not None:
            self._switch(result.switch_to)
        self._sync_mode()
        return result

    def feed(self, keys: Iterable[KeyInput | str]) -> List[ModeResult]:
        return [self.handle_key(key) for key in keys]

    def reset(self) -> None:
        """Drop any pending command, count, register or find prefix."""

        for mode in self._modes.values():
            mode.reset()
        self.context.command.reset()
        self.context.register = None

    def _switch(self, mode: Mode) -> None:
        host = self.host
        if host.mode is mode:
            return
        if mode is Mode.INSERT:
            host.enter_insert_mode()
        elif mode is Mode.SELECT:
            host.enter_select_mode()
        else:
            host.exit_to_normal_mode()

    def _sync_mode(self) -> None:
        current = self.host.mode
        if current is self._active:
            return
        previous = self._active
        self._modes[previous].on_exit(current)
        self._active = current
        self._modes[current].on_enter(previous)
        telemetry.record_event(
            "session.mode",
            logger_name=self.context.logger_name,
            data={
                "session": self.name,
                "from": previous.value,
                "mode": current.value,
            },
        )


__all__ = ["EvilSession"]
