"""Base classes and shared services for the per-mode key handlers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from evil_engine.actions.operators import OperatorExecutor, OperatorOutcome
from evil_engine.buffer.state import Mode, Selection
from evil_engine.commands.state import (
    CommandState,
    FeedResult,
    FeedStatus,
    ResolvedCommand,
    accumulate_count,
)
from evil_engine.host import EditorHost
from evil_engine.keymaps.classifier import KeyClassifier
from evil_engine.keymaps.models import KeyInput, Motion, Operator, TokenKind
from evil_engine.runtime import telemetry
from evil_engine.selectors.collapse import CollapseMode, collapse_selection
from evil_engine.selectors.resolver import SelectionResolver

ESCAPE_KEYS = frozenset({"ESC", "<Esc>", "escape"})
REGISTER_KEY = '"'


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``ModeHandler.handle_key``."""

    consumed: bool
    switch_to: Optional[Mode] = None
    status: str = "ok"
    message: Optional[str] = None


@dataclass(frozen=True, slots=True)
class FindOperation:
    """Last find-character motion, replayed by ``;`` and ``,``."""

    motion: Motion
    char: str

    def reversed(self) -> "FindOperation":
        return FindOperation(self.motion.reversed(), self.char)


class EventBus:
    """Minimal event bus letting hosts observe command progress."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[Any], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[Any], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: Any = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class SessionContext:
    """Services and per-session state shared by every mode handler.

    ``command`` is the pending-command record; it belongs to exactly one
    session.
    """

    host: EditorHost
    classifier: KeyClassifier
    resolver: SelectionResolver
    executor: OperatorExecutor
    bus: EventBus
    command: CommandState = field(default_factory=CommandState)
    register: Optional[str] = None
    last_find: Optional[FindOperation] = None
    logger_name: Optional[str] = None

    def trace(self, message: str, *, status: bool = True, **data: Any) -> None:
        """Report one step on the host status line and in the log."""

        if status:
            self.host.set_status(message)
        telemetry.trace(message, logger_name=self.logger_name, **data)

    def take_register(self) -> Optional[str]:
        register, self.register = self.register, None
        return register

    def run(self, command: ResolvedCommand) -> OperatorOutcome:
        """Resolve ``command`` against every cursor and execute it."""

        host = self.host
        selection = self.resolver.resolve(host.document, host.selection, command)
        return self.execute(command.operator, selection, count=command.count)

    def execute(
        self, operator: Operator, selection: Selection, *, count: int = 1
    ) -> OperatorOutcome:
        outcome = self.executor.execute(
            self.host, operator, selection, register=self.take_register()
        )
        self.bus.emit(
            "evil.execute",
            {
                "operator": operator.value,
                "count": count,
                "register": outcome.register,
                "values": list(outcome.values),
                "mode": outcome.mode.value,
            },
        )
        # Keep the yank report on the status line.
        self.trace("Command executed", status=not outcome.message)
        return outcome


class ModeHandler:
    """Base class for the Normal, Select and Insert key handlers.

    Holds the idle-time prefixes shared by Normal and Select: a count, a
    ``"`` register selection and a find motion waiting for its character.
    """

    name: Mode = Mode.NORMAL

    def __init__(self, context: SessionContext) -> None:
        self.context = context
        self.logger = telemetry.get_logger(context.logger_name)
        self._count: Optional[int] = None
        self._awaiting_register = False
        self._awaiting_find: Optional[Motion] = None

    @property
    def host(self) -> EditorHost:
        return self.context.host

    @property
    def count(self) -> Optional[int]:
        return self._count

    def on_enter(self, previous: Optional[Mode]) -> None:
        del previous

    def on_exit(self, next_mode: Optional[Mode]) -> None:
        del next_mode
        self.reset()

    def reset(self) -> None:
        self._count = None
        self._awaiting_register = False
        self._awaiting_find = None

    def handle_key(self, key: KeyInput) -> ModeResult:  # pragma: no cover - abstract
        raise NotImplementedError

    def take_count(self) -> Optional[int]:
        count, self._count = self._count, None
        return count

    def handle_prefix(self, key: KeyInput) -> Optional[ModeResult]:
        """Consume register, find-character and count keys; ``None`` otherwise."""

        context = self.context
        if self._awaiting_register:
            self._awaiting_register = False
            char = key.char
            if char is None:
                context.trace("Register selection cancelled", key=key.token)
                return ModeResult(consumed=True, status="cancelled")
            context.register = char
            context.trace(f"Register {char} selected", register=char)
            return ModeResult(consumed=True, status="register", message=char)

        if self._awaiting_find is not None:
            motion, self._awaiting_find = self._awaiting_find, None
            char = key.char
            if char is None:
                self._count = None
                context.trace("Find cancelled", key=key.token)
                return ModeResult(consumed=True, status="cancelled")
            return self.find(FindOperation(motion, char))

        if key.modifiers:
            return None

        if key.key == REGISTER_KEY:
            self._awaiting_register = True
            return ModeResult(consumed=True, status="pending", message="register")

        token = context.classifier.classify(key)
        if token.kind is TokenKind.DIGIT and token.digit is not None:
            updated = accumulate_count(self._count, token.digit)
            if updated is None:
                return None
            self._count = updated
            context.trace(f"Count {updated}", count=updated)
            return ModeResult(consumed=True, status="count", message=str(updated))

        if token.kind is TokenKind.MOTION and token.motion is not None:
            if token.motion.is_find:
                self._awaiting_find = token.motion
                return ModeResult(consumed=True, status="pending", message="find")
        return None

    def find(self, operation: FindOperation) -> ModeResult:
        """Move every cursor to the ``count``-th match of a find motion.

        Normal mode collapses the sweep onto the matched character; Select
        mode keeps the swept range.
        """

        host = self.host
        document = host.document
        count = self.take_count() or 1
        selection = self.context.resolver.find_sweep(
            document,
            host.selection,
            operation.motion,
            operation.char,
            count,
            extend=host.mode is Mode.SELECT,
        )
        if host.mode is Mode.NORMAL:
            direction = (
                CollapseMode.BACKWARD
                if operation.motion.is_backward
                else CollapseMode.FORWARD
            )
            selection = collapse_selection(selection, direction, document.len_chars())
        host.set_selection(selection)
        self.context.last_find = operation
        self.context.bus.emit(
            "evil.find",
            {"motion": operation.motion.value, "char": operation.char, "count": count},
        )
        self.context.trace(
            f"Find {operation.char}", motion=operation.motion.value, count=count
        )
        return ModeResult(consumed=True, status="find", message=operation.char)

    def repeat_find(self, *, reverse: bool = False) -> ModeResult:
        operation = self.context.last_find
        if operation is None:
            self._count = None
            self.context.trace("No find to repeat")
            return ModeResult(consumed=True, status="noop")
        return self.find(operation.reversed() if reverse else operation)

    def report(self, result: FeedResult) -> ModeResult:
        """Translate a command-state step into a mode result."""

        context = self.context
        if result.message:
            context.trace(result.message, status_kind=result.status.value)

        if result.status is FeedStatus.EXECUTE and result.command is not None:
            command = result.command
            outcome = context.run(command)
            return ModeResult(
                consumed=True,
                status="executed",
                message=outcome.message or command.operator.value,
            )

        if result.status is FeedStatus.CANCELLED:
            context.register = None
            context.bus.emit("evil.cancel", {"reason": result.message})
            return ModeResult(consumed=True, status="cancelled", message=result.message)

        state = context.command
        context.bus.emit(
            "evil.pending",
            {
                "operator": state.operator.value if state.operator else None,
                "count": state.count,
                "modifiers": sorted(m.value for m in state.modifiers),
            },
        )
        return ModeResult(consumed=True, status="pending", message=result.message)


__all__ = [
    "ESCAPE_KEYS",
    "EventBus",
    "FindOperation",
    "ModeHandler",
    "ModeResult",
    "SessionContext",
]
