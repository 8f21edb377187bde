"""Operator implementations."""

from .operators import OperatorExecutor, OperatorOutcome, merge_spans, yank_message

__all__ = ["OperatorExecutor", "OperatorOutcome", "merge_spans", "yank_message"]
