"""Minimal Textual adapter that wires an EvilSession into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from evil_engine.buffer import Buffer, BufferMirror, Mode
from evil_engine.keymaps import KeyInput
from evil_engine.modes import ModeResult
from evil_engine.session import EvilSession


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_buffer: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    show_pending: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


class TextualEvilAdapter:
    """Bridges an ``EvilSession`` over a ``Buffer`` to a Textual surface.

    Keys the session leaves unconsumed in Insert mode are typed into the
    buffer here, since the engine never inserts text itself.
    """

    EVENTS = ("evil.pending", "evil.cancel", "evil.execute", "evil.find")

    def __init__(
        self,
        buffer: Buffer,
        hooks: TextualUIHooks,
        *,
        session: Optional[EvilSession] = None,
    ) -> None:
        self.buffer = buffer
        self.session = session or EvilSession(buffer, name=buffer.name)
        self.hooks = hooks
        self._subscribe_events()
        self._refresh_buffer()
        self._refresh_pending()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        """Translate a Textual key event into a KeyInput and dispatch it."""

        normalized_modifiers = tuple(str(mod).upper() for mod in modifiers)
        self._log_state("key ->", key=key, text=text, mods=normalized_modifiers)
        stroke = KeyInput(key=key, text=text, modifiers=normalized_modifiers)
        result = self.session.handle_key(stroke)
        if not result.consumed and self.buffer.mode is Mode.INSERT:
            self._type(stroke)
        self._after_mode_result(result)
        self._log_state(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            switch_to=result.switch_to.value if result.switch_to else None,
        )
        return result

    def _type(self, stroke: KeyInput) -> None:
        if stroke.modifiers:
            return
        if stroke.key == "ENTER":
            self.buffer.insert_text("\n")
        elif stroke.key == "BACKSPACE":
            selection = self.buffer.selection
            edits = [(r.from_ - 1, r.from_, "") for r in selection if r.from_]
            if edits:
                self.buffer.apply(edits, label="backspace")
        elif stroke.char is not None:
            self.buffer.insert_text(stroke.char)

    def _after_mode_result(self, result: ModeResult) -> None:
        status = self.buffer.status or result.message or result.status
        if status:
            self.hooks.update_status(status)
        self._refresh_buffer()
        self._refresh_pending()

    def _subscribe_events(self) -> None:
        bus = self.session.bus
        for event in self.EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name in ("evil.execute", "evil.find"):
            self._refresh_buffer()

    def _refresh_buffer(self) -> None:
        self.hooks.update_buffer(self.buffer.mirror())

    def _refresh_pending(self) -> None:
        state = self.session.command
        if state.is_idle or state.operator is None:
            self.hooks.show_pending("")
            return
        count = str(state.count) if state.count else ""
        self.hooks.show_pending(f"{count}{state.operator.value}")

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.buffer
        primary = buffer.selection.primary
        return {
            "mode": buffer.mode.value,
            "selection": (primary.anchor, primary.head),
            "pending": self.session.pending,
            "buffer": buffer.name,
            "buffer_version": buffer.document.version,
        }


__all__ = ["TextualEvilAdapter", "TextualUIHooks"]
