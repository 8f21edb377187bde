"""Yank, delete and change applied to a resolved selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from evil_engine.buffer.registers import DEFAULT_REGISTER, DISCARD_REGISTER
from evil_engine.buffer.state import Edit, Mode, Selection
from evil_engine.host import EditorHost
from evil_engine.keymaps.models import Operator
from evil_engine.runtime import telemetry


@dataclass(frozen=True, slots=True)
class OperatorOutcome:
    operator: Operator
    values: Tuple[str, ...]
    register: str
    mutated: bool
    mode: Mode
    message: str = ""


def yank_message(selections: int, register: str) -> str:
    noun = "selection" if selections == 1 else "selections"
    return f"Yanked {selections} {noun} to register {register}"


def merge_spans(selection: Selection) -> List[Tuple[int, int]]:
    """Non-empty ``(from, to)`` spans of ``selection``, overlaps merged."""

    spans: List[Tuple[int, int]] = []
    for range_ in sorted(selection, key=lambda r: (r.from_, r.to)):
        if range_.width == 0:
            continue
        if spans and range_.from_ < spans[-1][1]:
            start, end = spans[-1]
            spans[-1] = (start, max(end, range_.to))
        else:
            spans.append((range_.from_, range_.to))
    return spans


class OperatorExecutor:
    """Runs an operator against the host.

    Register contents are always read and written before the buffer is
    touched: the edit invalidates the offsets the fragments came from.
    """

    def __init__(
        self,
        *,
        default_register: str = DEFAULT_REGISTER,
        logger_name: str | None = None,
    ) -> None:
        self.default_register = default_register
        self._logger_name = logger_name

    def execute(
        self,
        host: EditorHost,
        operator: Operator,
        selection: Selection,
        *,
        register: Optional[str] = None,
    ) -> OperatorOutcome:
        name = register or self.default_register
        with telemetry.span(
            f"operator::{operator.value}",
            logger_name=self._logger_name,
            component="actions",
            metadata={"register": name, "cursors": len(selection)},
        ) as handle:
            if operator is Operator.YANK:
                outcome = self._yank(host, selection, name)
            else:
                outcome = self._remove(host, operator, selection, name)
            handle.add_metadata("mode", outcome.mode.value)

        telemetry.record_event(
            "operator.execute",
            logger_name=self._logger_name,
            data={
                "operator": operator.value,
                "register": name,
                "values": len(outcome.values),
                "mutated": outcome.mutated,
            },
        )
        return outcome

    def _fragments(self, host: EditorHost, selection: Selection) -> Tuple[str, ...]:
        document = host.document
        return tuple(document.slice(r.from_, r.to) for r in selection)

    def _yank(
        self, host: EditorHost, selection: Selection, register: str
    ) -> OperatorOutcome:
        values = self._fragments(host, selection)
        host.registers.write(register, values)
        message = yank_message(len(values), register)
        host.set_status(message)
        if host.mode is Mode.SELECT:
            host.exit_to_normal_mode()
        return OperatorOutcome(
            operator=Operator.YANK,
            values=values,
            register=register,
            mutated=False,
            mode=host.mode,
            message=message,
        )

    def _remove(
        self,
        host: EditorHost,
        operator: Operator,
        selection: Selection,
        register: str,
    ) -> OperatorOutcome:
        values = self._fragments(host, selection)
        if register != DISCARD_REGISTER:
            host.registers.write(register, values)

        edits: Sequence[Edit] = [
            (start, end, "") for start, end in merge_spans(selection)
        ]
        if edits:
            host.apply(edits)

        if operator is Operator.CHANGE:
            host.enter_insert_mode()
        else:
            host.exit_to_normal_mode()
        return OperatorOutcome(
            operator=operator,
            values=values,
            register=register,
            mutated=bool(edits),
            mode=host.mode,
        )


__all__ = ["OperatorExecutor", "OperatorOutcome", "merge_spans", "yank_message"]
