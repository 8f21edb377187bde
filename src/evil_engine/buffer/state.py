"""Selection ranges tracked per cursor."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Iterator, Tuple

Edit = Tuple[int, int, str]  # (start, end, replacement)


class Mode(str, Enum):
    """Editing modes supplied by the host."""

    NORMAL = "normal"
    INSERT = "insert"
    SELECT = "select"


@dataclass(frozen=True, slots=True)
class Range:
    """Ordered ``(anchor, head)`` pair of character offsets.

    ``anchor`` is the fixed end and ``head`` the movable one. In Normal mode a
    cursor is a one-character range ``(n, n + 1)``.
    """

    anchor: int
    head: int

    @classmethod
    def point(cls, offset: int) -> "Range":
        return cls(offset, offset + 1)

    @property
    def from_(self) -> int:
        return min(self.anchor, self.head)

    @property
    def to(self) -> int:
        return max(self.anchor, self.head)

    @property
    def width(self) -> int:
        return self.to - self.from_

    @property
    def is_cursor(self) -> bool:
        return self.width <= 1

    def clamp(self, length: int) -> "Range":
        return Range(_clamp(self.anchor, length), _clamp(self.head, length))


@dataclass(frozen=True, slots=True)
class Selection:
    """One range per cursor plus the index of the primary one."""

    ranges: Tuple[Range, ...]
    primary_index: int = 0

    def __post_init__(self) -> None:
        if not self.ranges:
            raise ValueError("Selection requires at least one range")
        if not 0 <= self.primary_index < len(self.ranges):
            raise ValueError("primary_index out of range")

    @classmethod
    def single(cls, anchor: int, head: int) -> "Selection":
        return cls((Range(anchor, head),))

    @classmethod
    def point(cls, offset: int) -> "Selection":
        return cls((Range.point(offset),))

    @classmethod
    def from_ranges(
        cls, ranges: Iterable[Range], primary_index: int = 0
    ) -> "Selection":
        return cls(tuple(ranges), primary_index)

    @property
    def primary(self) -> Range:
        return self.ranges[self.primary_index]

    def transform(self, func: Callable[[Range], Range]) -> "Selection":
        return Selection(tuple(func(r) for r in self.ranges), self.primary_index)

    def __iter__(self) -> Iterator[Range]:
        return iter(self.ranges)

    def __len__(self) -> int:
        return len(self.ranges)


def _clamp(offset: int, length: int) -> int:
    return max(0, min(offset, length))
