"""Pending-command state machine."""

from .state import (
    CommandState,
    FeedResult,
    FeedStatus,
    ResolvedCommand,
    accumulate_count,
    target_mode_for,
)

__all__ = [
    "CommandState",
    "FeedResult",
    "FeedStatus",
    "ResolvedCommand",
    "accumulate_count",
    "target_mode_for",
]
