"""Register storage keyed by single-character names."""

from __future__ import annotations

from typing import Dict, List, Sequence

DEFAULT_REGISTER = '"'
DISCARD_REGISTER = "_"


class RegisterBank:
    """Named registers, each holding one value per contributing cursor.

    Writes replace a register wholesale. The discard register accepts writes
    without retaining them. Reading a register that was never written yields
    an empty list.
    """

    def __init__(self) -> None:
        self._registers: Dict[str, List[str]] = {DEFAULT_REGISTER: []}

    def read(self, name: str) -> List[str]:
        return list(self._registers.get(name, ()))

    def write(self, name: str, values: Sequence[str]) -> None:
        if name == DISCARD_REGISTER:
            return
        self._registers[name] = list(values)
