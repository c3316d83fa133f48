"""Compass directions and compact sets of them.

Directions are ordered counter-clockwise starting at East so that
``value * pi/4`` is the direction's angle in radians.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator


class Direction(Enum):
    """The four cardinal and four ordinal compass directions."""

    EAST = 0
    NORTH_EAST = 1
    NORTH = 2
    NORTH_WEST = 3
    WEST = 4
    SOUTH_WEST = 5
    SOUTH = 6
    SOUTH_EAST = 7

    @classmethod
    def from_index(cls, index: int) -> Direction:
        """Return the direction with raw value ``index`` (0..7)."""
        if not 0 <= index < 8:
            raise ValueError(f"Invalid direction value: {index}")
        return _BY_INDEX[index]

    @classmethod
    def parse(cls, name: str) -> Direction:
        """Parse a short (``"NE"``) or long (``"NorthEast"``) name."""
        key = name.strip().lower()
        try:
            return _BY_NAME[key]
        except KeyError:
            raise ValueError(f"Unknown direction name: {name!r}") from None

    @property
    def short_name(self) -> str:
        return _SHORT_NAMES[self.value]

    @property
    def long_name(self) -> str:
        return _LONG_NAMES[self.value]

    def __str__(self) -> str:
        return self.long_name

    def is_cardinal(self) -> bool:
        return self in CARDINAL

    def is_ordinal(self) -> bool:
        return self in ORDINAL

    def clockwise(self) -> Direction:
        return _BY_INDEX[(self.value - 1) % 8]

    def counter_clockwise(self) -> Direction:
        return _BY_INDEX[(self.value + 1) % 8]

    def opposite(self) -> Direction:
        return _BY_INDEX[(self.value + 4) % 8]

    def __invert__(self) -> Direction:
        return self.opposite()

    def angle(self) -> float:
        """Angle of the direction in radians."""
        return self.value * (math.pi / 4.0)


_SHORT_NAMES = ("E", "NE", "N", "NW", "W", "SW", "S", "SE")
_LONG_NAMES = (
    "East", "NorthEast", "North", "NorthWest",
    "West", "SouthWest", "South", "SouthEast",
)
_BY_INDEX = tuple(Direction)
_BY_NAME = {
    **{n.lower(): d for n, d in zip(_SHORT_NAMES, _BY_INDEX)},
    **{n.lower(): d for n, d in zip(_LONG_NAMES, _BY_INDEX)},
}


@dataclass(frozen=True)
class DirectionSet:
    """A set of directions packed into a single byte."""

    bits: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.bits <= 0xFF:
            raise ValueError(f"Direction set bits out of range: {self.bits}")

    @classmethod
    def from_iter(cls, dirs: Iterable[Direction]) -> DirectionSet:
        bits = 0
        for d in dirs:
            bits |= 1 << d.value
        return cls(bits)

    @classmethod
    def empty(cls) -> DirectionSet:
        return cls(0)

    def __contains__(self, d: object) -> bool:
        return isinstance(d, Direction) and bool(self.bits & (1 << d.value))

    def contains(self, d: Direction) -> bool:
        return d in self

    def __iter__(self) -> Iterator[Direction]:
        for i in range(8):
            if self.bits & (1 << i):
                yield _BY_INDEX[i]

    def __len__(self) -> int:
        return bin(self.bits).count("1")

    def is_empty(self) -> bool:
        return self.bits == 0

    def union(self, other: DirectionSet) -> DirectionSet:
        return DirectionSet(self.bits | other.bits)

    def intersection(self, other: DirectionSet) -> DirectionSet:
        return DirectionSet(self.bits & other.bits)

    def difference(self, other: DirectionSet) -> DirectionSet:
        return DirectionSet(self.bits & ~other.bits & 0xFF)

    __or__ = union
    __and__ = intersection
    __sub__ = difference

    def superset(self, other: DirectionSet) -> bool:
        return self.bits & other.bits == other.bits

    def subset(self, other: DirectionSet) -> bool:
        return self.bits & other.bits == self.bits

    def __str__(self) -> str:
        return "{" + ", ".join(str(d) for d in self) + "}"


ALL_DIRECTIONS = DirectionSet(0b11111111)
CARDINAL = DirectionSet(0b01010101)
ORDINAL = DirectionSet(0b10101010)


class DirectionType(Enum):
    """Whether a direction crosses a cell's face or points at a vertex."""

    FACE = "face"
    VERTEX = "vertex"

    def __invert__(self) -> DirectionType:
        return DirectionType.VERTEX if self is DirectionType.FACE else DirectionType.FACE

    def __str__(self) -> str:
        return self.value.capitalize()
