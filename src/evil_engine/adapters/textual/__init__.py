"""Textual integration; the demo app lives in ``app`` and needs textual."""

from .controller import TextualEvilAdapter, TextualUIHooks

__all__ = ["TextualEvilAdapter", "TextualUIHooks"]
