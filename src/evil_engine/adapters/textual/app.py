"""Runnable Textual demo: one Buffer, one EvilSession, three widgets."""

from __future__ import annotations

import argparse
import os
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Tuple

try:  # pragma: no cover - imported only when demo is run
    from textual import events
    from textual.app import App, ComposeResult
    from textual.widgets import Footer, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' extra to run the evil engine demo"
    ) from exc

from evil_engine.buffer import Buffer, BufferMirror
from evil_engine.runtime import telemetry

from .controller import TextualEvilAdapter, TextualUIHooks

SAMPLE_TEXT = "hello world\nfoo bar\ncat dog\n"

KeyStroke = Tuple[str, Optional[str], Tuple[str, ...]]

# Textual key names the engine knows under a different token
NAMED_KEYS: Dict[str, str] = {
    "escape": "ESC",
    "enter": "ENTER",
    "return": "ENTER",
    "backspace": "BACKSPACE",
    "tab": "TAB",
}

QUIT_KEYS = frozenset({"ctrl+c", "ctrl+q"})


def normalize_key(event: Any) -> Optional[KeyStroke]:
    """``(key, text, modifiers)`` for a Textual key event, ``None`` to skip it."""

    if event.key in QUIT_KEYS:
        return None
    modifiers = tuple(
        name
        for name, active in (
            ("CTRL", getattr(event, "ctrl", False)),
            ("ALT", getattr(event, "alt", False) or getattr(event, "meta", False)),
        )
        if active
    )
    named = NAMED_KEYS.get(event.key)
    if named is not None:
        return named, None, modifiers
    if event.character and event.is_printable:
        return event.character, event.character, modifiers
    return event.key.upper(), None, modifiers


def render_buffer(mirror: BufferMirror) -> str:
    """Buffer text with the primary selection bracketed."""

    primary = mirror.selection.primary
    text = mirror.text
    start, end = primary.from_, primary.to
    return f"{text[:start]}[{text[start:end]}]{text[end:]}"


class EvilEngineApp(App[None]):
    """Edit a scratch buffer through the evil engine."""

    TITLE = "evil-engine"

    CSS = """
    #buffer {
        height: 1fr;
        border: tall $primary;
        padding: 0 1;
    }

    #status, #pending {
        height: 1;
        padding: 0 1;
    }

    #pending {
        color: $text-muted;
    }
    """

    BINDINGS = [("ctrl+q", "quit", "Quit")]

    def __init__(self, *, text: str = SAMPLE_TEXT, name: str = "demo") -> None:
        super().__init__()
        self.buffer = Buffer.from_text(text, name=name)
        self.adapter: Optional[TextualEvilAdapter] = None

    def compose(self) -> ComposeResult:
        yield Static(id="buffer")
        yield Static(id="status")
        yield Static(id="pending")
        yield Footer()

    def on_mount(self) -> None:
        hooks = TextualUIHooks(
            update_buffer=self._show_buffer,
            update_status=self._show_status,
            show_pending=self._show_pending,
            handle_event=self._on_engine_event,
            log=self._log_line,
        )
        self.adapter = TextualEvilAdapter(self.buffer, hooks)
        self._show_status("")

    def on_key(self, event: events.Key) -> None:
        stroke = normalize_key(event)
        if self.adapter is None or stroke is None:
            return
        key, text, modifiers = stroke
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def _show_buffer(self, mirror: BufferMirror) -> None:
        self.query_one("#buffer", Static).update(render_buffer(mirror))

    def _show_status(self, status: str) -> None:
        mode = self.buffer.mode.value.upper()
        self.query_one("#status", Static).update(f"-- {mode} -- {status}")

    def _show_pending(self, pending: str) -> None:
        self.query_one("#pending", Static).update(pending)

    def _on_engine_event(self, name: str, payload: object | None) -> None:
        if name == "evil.cancel" and isinstance(payload, dict):
            self._show_status(str(payload.get("reason", "cancelled")))

    def _log_line(self, line: str) -> None:
        telemetry.trace(line, logger_name="evil_engine.textual")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="evil-engine-demo", description="Run the evil engine Textual demo."
    )
    parser.add_argument(
        "path",
        nargs="?",
        type=Path,
        help="file whose contents seed the buffer (never written back)",
    )
    parser.add_argument(
        "--preset",
        default=os.environ.get("EVIL_ENGINE_PRESET"),
        choices=sorted(telemetry.PRESETS),
        help="telelog preset applied before the app starts",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.preset:
        telemetry.configure(preset=args.preset)
    if args.path is not None:
        text = args.path.read_text(encoding="utf-8")
        app = EvilEngineApp(text=text, name=args.path.name)
    else:
        app = EvilEngineApp()
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
