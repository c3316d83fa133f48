"""Finite regions of cells and the ring builder shared by every topology."""
from __future__ import annotations

import logging
from typing import Any, Dict, Generic, Iterable, Iterator, Optional, Sequence, Tuple, TypeVar

from .coord import Coord

logger = logging.getLogger(__name__)

C = TypeVar("C", bound=Coord)
V = TypeVar("V")


def _order_free_hash(items: Iterable[Any]) -> int:
    return hash(tuple(sorted(hash(item) for item in items)))


class Shape(Generic[C]):
    """Immutable set of coordinates of one topology."""

    __slots__ = ("_cells",)

    def __init__(self, cells: Iterable[C] = ()) -> None:
        self._cells = frozenset(cells)

    def __repr__(self) -> str:
        return f"Shape({sorted(self._cells, key=repr)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Shape):
            return NotImplemented
        return self._cells == other._cells

    def __hash__(self) -> int:
        return _order_free_hash(self._cells)

    def __contains__(self, coord: object) -> bool:
        return coord in self._cells

    def contains(self, coord: C) -> bool:
        return coord in self._cells

    def __iter__(self) -> Iterator[C]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def is_empty(self) -> bool:
        return not self._cells

    def is_subshape(self, other: Shape[C]) -> bool:
        return self._cells <= other._cells

    def is_supershape(self, other: Shape[C]) -> bool:
        return self._cells >= other._cells

    def is_disjoint(self, other: Shape[C]) -> bool:
        return self._cells.isdisjoint(other._cells)

    def union(self, other: Shape[C]) -> Shape[C]:
        return Shape(self._cells | other._cells)

    def difference(self, other: Shape[C]) -> Shape[C]:
        return Shape(self._cells - other._cells)

    __or__ = union
    __sub__ = difference

    def translate(self, offset: C) -> Shape[C]:
        """Shift every cell by ``offset``; only for module coordinates."""
        return Shape(cell + offset for cell in self._cells)


class ShapeContainer(Generic[C, V]):
    """Mapping from coordinates to values, one entry per coordinate.

    Equality and hashing ignore insertion order. Hash a container only
    while it is not being modified.
    """

    def __init__(self, items: Iterable[Tuple[C, V]] = ()) -> None:
        self._map: Dict[C, V] = dict(items)

    @classmethod
    def from_shape_value(cls, shape: Shape[C], value: V) -> ShapeContainer[C, V]:
        return cls((coord, value) for coord in shape)

    @classmethod
    def from_iter_value(cls, coords: Iterable[C], value: V) -> ShapeContainer[C, V]:
        return cls((coord, value) for coord in coords)

    def __repr__(self) -> str:
        return f"ShapeContainer({self._map!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ShapeContainer):
            return NotImplemented
        return self._map == other._map

    def __hash__(self) -> int:
        return _order_free_hash(self._map.items())

    def __contains__(self, coord: object) -> bool:
        return coord in self._map

    def contains(self, coord: C) -> bool:
        return coord in self._map

    def get(self, coord: C) -> Optional[V]:
        return self._map.get(coord)

    def __getitem__(self, coord: C) -> V:
        return self._map[coord]

    def insert(self, coord: C, value: V) -> Optional[V]:
        """Bind ``value`` to ``coord`` and return the value it replaced."""
        previous = self._map.get(coord)
        self._map[coord] = value
        return previous

    def __setitem__(self, coord: C, value: V) -> None:
        self._map[coord] = value

    def __iter__(self) -> Iterator[Tuple[C, V]]:
        return iter(self._map.items())

    def __len__(self) -> int:
        return len(self._map)

    def is_empty(self) -> bool:
        return not self._map

    def as_shape(self) -> Shape[C]:
        return Shape(self._map.keys())

    def difference(self, other: ShapeContainer[C, Any]) -> ShapeContainer[C, V]:
        return ShapeContainer((c, v) for c, v in self._map.items() if c not in other._map)

    __sub__ = difference

    def translate(self, offset: C) -> ShapeContainer[C, V]:
        return ShapeContainer((c + offset, v) for c, v in self._map.items())


def ring(start: C, start_axis, flip_axis, axes: Sequence, rotation_step: int) -> Shape[C]:
    """Build a ring by rotating ``start`` to find each corner and walking between them.

    The walk begins along ``start_axis`` in the negative sense, takes the
    axes in the order given, and flips the sense each time ``flip_axis``
    comes up again.
    """
    cells = set()
    index = list(axes).index(start_axis)
    positive = False
    current = start
    while True:
        corner = current.rotate(rotation_step)
        axis = axes[index]
        cell = current
        while True:
            cells.add(cell)
            cell = cell.move_on_axis(axis, positive)
            if cell == corner:
                break
        current = corner
        if current == start:
            break
        index = (index + 1) % len(axes)
        if axes[index] == flip_axis:
            positive = not positive
    logger.debug("Built ring of %d cells from %s", len(cells), start)
    return Shape(cells)
