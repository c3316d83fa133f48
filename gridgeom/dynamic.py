"""Pick the grid topology at runtime.

``DynamicCoord``, ``DynamicAxes`` and ``DynamicSizedGrid`` each wrap one
concrete value and forward every operation to it. Combining values of
different kinds is a caller bug and raises ``KindMismatchError``.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from .coord import ArrayOffset, Color, Coord, Point, SizedGrid
from .direction import Direction, DirectionSet, DirectionType
from .errors import KindMismatchError
from .hexgrid import HexAxes, HexCoord, HexSizedGrid
from .shape import Shape
from .square import SquareAxes, SquareCoord, SquareSizedGrid
from .triangle import TriangleAxes, TriangleCoord, TriangleSizedGrid


class Kind(Enum):
    SQUARE = "Square"
    HEX = "Hex"
    TRIANGLE = "Triangle"

    def __str__(self) -> str:
        return self.value

    @property
    def num_vertices(self) -> int:
        return _NUM_VERTICES[self]

    @property
    def axes(self) -> List[DynamicAxes]:
        return [DynamicAxes(a) for a in _AXES_TYPES[self]]

    @property
    def is_modular(self) -> bool:
        return self is not Kind.TRIANGLE

    @property
    def coord_type(self) -> type:
        return _COORD_TYPES[self]

    @property
    def sized_grid_type(self) -> type:
        return _SIZED_GRID_TYPES[self]

    @classmethod
    def of(cls, value) -> Kind:
        """Kind of a concrete coordinate, axis or sized grid."""
        for kind in cls:
            if isinstance(value, (_COORD_TYPES[kind], _AXES_TYPES[kind], _SIZED_GRID_TYPES[kind])):
                return kind
        raise TypeError(f"Not a grid value: {value!r}")


_NUM_VERTICES = {Kind.SQUARE: 4, Kind.HEX: 6, Kind.TRIANGLE: 3}
_COORD_TYPES = {Kind.SQUARE: SquareCoord, Kind.HEX: HexCoord, Kind.TRIANGLE: TriangleCoord}
_AXES_TYPES = {Kind.SQUARE: SquareAxes, Kind.HEX: HexAxes, Kind.TRIANGLE: TriangleAxes}
_SIZED_GRID_TYPES = {
    Kind.SQUARE: SquareSizedGrid,
    Kind.HEX: HexSizedGrid,
    Kind.TRIANGLE: TriangleSizedGrid,
}


@dataclass(frozen=True)
class DynamicAxes:
    inner: Enum

    def __post_init__(self) -> None:
        Kind.of(self.inner)

    @property
    def kind(self) -> Kind:
        return Kind.of(self.inner)

    def __str__(self) -> str:
        return str(self.inner)


def _wrap(coord: Optional[Coord]) -> Optional[DynamicCoord]:
    return None if coord is None else DynamicCoord(coord)


def _wrap_iter(coords: Iterator[Coord]) -> Iterator[DynamicCoord]:
    for coord in coords:
        yield DynamicCoord(coord)


@dataclass(frozen=True)
class DynamicCoord(Coord):
    """A coordinate of whichever topology ``inner`` belongs to."""

    inner: Coord

    def __post_init__(self) -> None:
        if isinstance(self.inner, DynamicCoord):
            raise TypeError("DynamicCoord cannot wrap another DynamicCoord")
        Kind.of(self.inner)

    def __str__(self) -> str:
        return str(self.inner)

    @property
    def kind(self) -> Kind:
        return Kind.of(self.inner)

    def _same_kind(self, operation: str, other: DynamicCoord) -> Coord:
        if self.kind is not other.kind:
            raise KindMismatchError(operation, self.kind, other.kind)
        return other.inner

    def _axis(self, operation: str, axis: DynamicAxes) -> Enum:
        if self.kind is not axis.kind:
            raise KindMismatchError(operation, self.kind, axis.kind)
        return axis.inner

    @classmethod
    def origin(cls, kind: Kind) -> DynamicCoord:
        return cls(kind.coord_type.origin())

    def is_origin(self) -> bool:
        return self.inner.is_origin()

    def distance(self, other: DynamicCoord) -> int:
        return self.inner.distance(self._same_kind("compute distance", other))

    def angle_to_direction(self, dir_type: DirectionType, angle: float) -> Direction:
        return self.inner.angle_to_direction(dir_type, angle)

    def direction_angle(self, dir_type: DirectionType, dir: Direction) -> Optional[float]:
        return self.inner.direction_angle(dir_type, dir)

    def move_in_direction(self, dir_type: DirectionType, dir: Direction) -> Optional[DynamicCoord]:
        return _wrap(self.inner.move_in_direction(dir_type, dir))

    def move_on_axis(self, axis: DynamicAxes, positive: bool) -> DynamicCoord:
        return DynamicCoord(self.inner.move_on_axis(self._axis("move on axis", axis), positive))

    def allowed_direction(self, dir_type: DirectionType, dir: Direction) -> bool:
        return self.inner.allowed_direction(dir_type, dir)

    def allowed_directions(self, dir_type: DirectionType) -> DirectionSet:
        return self.inner.allowed_directions(dir_type)

    def direction_iterator(
        self, dir_type: DirectionType, dir: Direction, limit: Optional[int] = None
    ) -> Iterator[DynamicCoord]:
        return _wrap_iter(self.inner.direction_iterator(dir_type, dir, limit))

    def path_iterator(self, other: DynamicCoord) -> Iterator[DynamicCoord]:
        return _wrap_iter(self.inner.path_iterator(self._same_kind("compute path", other)))

    def axis_iterator(
        self, axis: DynamicAxes, positive: bool, limit: Optional[int] = None
    ) -> Iterator[DynamicCoord]:
        inner_axis = self._axis("iterate on axis", axis)
        return _wrap_iter(self.inner.axis_iterator(inner_axis, positive, limit))

    def grid_to_array_offset(self) -> ArrayOffset:
        return self.inner.grid_to_array_offset()

    @classmethod
    def array_offset_to_grid(cls, kind: Kind, offset: ArrayOffset) -> DynamicCoord:
        return cls(kind.coord_type.array_offset_to_grid(offset))

    def to_color(self) -> Color:
        return self.inner.to_color()

    def rotate_clockwise(self) -> DynamicCoord:
        return DynamicCoord(self.inner.rotate_clockwise())

    def rotate_counterclockwise(self) -> DynamicCoord:
        return DynamicCoord(self.inner.rotate_counterclockwise())

    def reflect(self, axis: DynamicAxes) -> DynamicCoord:
        return DynamicCoord(self.inner.reflect(self._axis("reflect", axis)))

    @classmethod
    def ring(cls, kind: Kind, radius: int) -> Shape[DynamicCoord]:
        return Shape(cls(c) for c in kind.coord_type.ring(radius))

    @classmethod
    def range(cls, kind: Kind, radius: int) -> Shape[DynamicCoord]:
        return Shape(cls(c) for c in kind.coord_type.range(radius))


class DynamicSizedGrid(SizedGrid):
    """Sized grid of a topology chosen at runtime."""

    coord_type = DynamicCoord

    def __init__(self, kind: Kind, inradius: float) -> None:
        super().__init__(inradius)
        self.kind = kind
        self.inner: SizedGrid = kind.sized_grid_type(inradius)

    @classmethod
    def wrap(cls, grid: SizedGrid) -> DynamicSizedGrid:
        return cls(Kind.of(grid), grid.inradius())

    def __repr__(self) -> str:
        return f"DynamicSizedGrid({self.kind}, {self._inradius!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DynamicSizedGrid):
            return NotImplemented
        return self.inner == other.inner

    def __hash__(self) -> int:
        return hash(self.inner)

    def _coord(self, operation: str, coord: DynamicCoord) -> Coord:
        if coord.kind is not self.kind:
            raise KindMismatchError(operation, self.kind, coord.kind)
        return coord.inner

    def circumradius(self) -> float:
        return self.inner.circumradius()

    def edge_length(self) -> float:
        return self.inner.edge_length()

    def vertices(self, coord: DynamicCoord) -> List[Point]:
        return self.inner.vertices(self._coord("compute vertices", coord))

    def edges(self, coord: DynamicCoord) -> Dict[Direction, Tuple[Point, Point]]:
        return self.inner.edges(self._coord("compute edges", coord))

    def grid_to_screen(self, coord: DynamicCoord) -> Point:
        return self.inner.grid_to_screen(self._coord("convert to screen", coord))

    def screen_to_grid(self, point: Point) -> DynamicCoord:
        return DynamicCoord(self.inner.screen_to_grid(point))

    def coord_intersects_rect(self, coord: DynamicCoord, rect_min: Point, rect_max: Point) -> bool:
        return self.inner.coord_intersects_rect(self._coord("intersect", coord), rect_min, rect_max)

    def _rect_cells(self, rect_min: Point, rect_max: Point) -> Iterator[DynamicCoord]:
        return _wrap_iter(self.inner.screen_rect_to_grid(rect_min, rect_max))
