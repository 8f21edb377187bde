from __future__ import annotations

from typing import Any, Dict, List

from evil_engine.adapters.textual import TextualEvilAdapter, TextualUIHooks
from evil_engine.buffer import Buffer, BufferMirror, Mode


def make_adapter(
    text: str = "cat dog\n", **hooks: Any
) -> tuple[TextualEvilAdapter, Buffer]:
    buffer = Buffer.from_text(text, name="test")
    hooks.setdefault("update_buffer", lambda mirror: None)
    return TextualEvilAdapter(buffer, TextualUIHooks(**hooks)), buffer


def test_adapter_updates_buffer_and_status() -> None:
    updates: List[BufferMirror] = []
    statuses: List[str] = []
    adapter, buffer = make_adapter(
        update_buffer=updates.append,
        update_status=statuses.append,
    )

    adapter.handle_textual_key("d", text="d")
    adapter.handle_textual_key("w", text="w")

    assert updates[-1].text == " dog\n"
    assert "Command initiated without count" in statuses
    assert statuses[-1] == "Command executed"


def test_adapter_types_text_in_insert_mode() -> None:
    adapter, buffer = make_adapter("ab")

    adapter.handle_textual_key("i", text="i")
    adapter.handle_textual_key("x", text="x")
    adapter.handle_textual_key("ENTER")
    adapter.handle_textual_key("BACKSPACE")
    adapter.handle_textual_key("ESC")

    assert buffer.text == "xab"
    assert buffer.mode is Mode.NORMAL


def test_adapter_shows_pending_command() -> None:
    pending: List[str] = []
    adapter, _ = make_adapter(show_pending=pending.append)

    adapter.handle_textual_key("3", text="3")
    adapter.handle_textual_key("d", text="d")
    assert pending[-1] == "3delete"

    adapter.handle_textual_key("ESC")
    assert pending[-1] == ""


def test_adapter_relays_session_events() -> None:
    events: List[Dict[str, Any]] = []
    adapter, _ = make_adapter(
        handle_event=lambda name, payload: events.append(
            {"name": name, "payload": payload}
        ),
    )

    adapter.handle_textual_key("y", text="y")
    adapter.handle_textual_key("y", text="y")
    adapter.handle_textual_key("f", text="f")
    adapter.handle_textual_key("o", text="o")

    names = [event["name"] for event in events]
    assert names == ["evil.pending", "evil.execute", "evil.find"]
    assert events[1]["payload"]["values"] == ["cat dog\n"]


def test_adapter_emits_log_lines() -> None:
    logs: List[str] = []
    adapter, _ = make_adapter(log=logs.append)

    adapter.handle_textual_key("i", text="i")

    assert any(line.startswith("key ->") for line in logs)
    assert any("mode='insert'" in line for line in logs)
