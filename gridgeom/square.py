"""Square grid coordinates.

Cells are addressed by integer ``(x, y)``; ``+y`` is North on screen.
Face moves cross an edge, vertex moves cross a corner diagonally.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple

from .coord import ArrayOffset, Color, ModuleCoord, Point, SizedGrid, normalize_angle
from .direction import CARDINAL, ORDINAL, Direction, DirectionSet, DirectionType
from .errors import KindMismatchError
from .geometry import vertices_to_edges
from .shape import Shape, ring as walk_ring

SQRT2 = math.sqrt(2.0)


class SquareAxes(Enum):
    X = "X"
    Y = "Y"

    def __str__(self) -> str:
        return self.value


AXES = (SquareAxes.X, SquareAxes.Y)

_FACE_OFFSETS = {
    Direction.NORTH: (0, 1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, -1),
    Direction.WEST: (-1, 0),
}
_VERTEX_OFFSETS = {
    Direction.NORTH_EAST: (1, 1),
    Direction.SOUTH_EAST: (1, -1),
    Direction.SOUTH_WEST: (-1, -1),
    Direction.NORTH_WEST: (-1, 1),
}
_AXIS_DIRECTIONS = {
    (SquareAxes.X, True): Direction.EAST,
    (SquareAxes.X, False): Direction.WEST,
    (SquareAxes.Y, True): Direction.NORTH,
    (SquareAxes.Y, False): Direction.SOUTH,
}


def _check_axis(operation: str, axis) -> None:
    if not isinstance(axis, SquareAxes):
        raise KindMismatchError(operation, "SquareAxes", type(axis).__name__)


@dataclass(frozen=True)
class SquareCoord(ModuleCoord):
    x: int = 0
    y: int = 0

    def __str__(self) -> str:
        return f"({self.x},{self.y})"

    @classmethod
    def origin(cls) -> SquareCoord:
        return cls(0, 0)

    def to_vector(self) -> Tuple[int, int]:
        return self.x, self.y

    @classmethod
    def from_vector(cls, vec: Tuple[int, int]) -> SquareCoord:
        return cls(vec[0], vec[1])

    def distance(self, other: SquareCoord) -> int:
        return abs(self.x - other.x) + abs(self.y - other.y)

    def allowed_directions(self, dir_type: DirectionType) -> DirectionSet:
        return CARDINAL if dir_type is DirectionType.FACE else ORDINAL

    def angle_to_direction(self, dir_type: DirectionType, angle: float) -> Direction:
        if dir_type is DirectionType.VERTEX:
            face = self.angle_to_direction(DirectionType.FACE, angle - math.pi / 4.0)
            return face.counter_clockwise()
        octant = normalize_angle(angle) / (math.pi / 4.0)
        if octant >= 7.0 or octant < 1.0:
            return Direction.EAST
        if octant < 3.0:
            return Direction.NORTH
        if octant < 5.0:
            return Direction.WEST
        return Direction.SOUTH

    def direction_angle(self, dir_type: DirectionType, dir: Direction) -> Optional[float]:
        if not self.allowed_direction(dir_type, dir):
            return None
        return dir.angle()

    def offset_in_direction(self, dir_type: DirectionType, dir: Direction) -> Optional[SquareCoord]:
        table = _FACE_OFFSETS if dir_type is DirectionType.FACE else _VERTEX_OFFSETS
        vec = table.get(dir)
        if vec is None:
            return None
        return SquareCoord(*vec)

    def offset_on_axis(self, axis: SquareAxes, positive: bool) -> SquareCoord:
        _check_axis("move on axis", axis)
        return SquareCoord(*_FACE_OFFSETS[_AXIS_DIRECTIONS[(axis, positive)]])

    def path_iterator(self, other: SquareCoord) -> Iterator[SquareCoord]:
        return square_path(self, other)

    def grid_to_array_offset(self) -> ArrayOffset:
        return self.x, self.y

    @classmethod
    def array_offset_to_grid(cls, offset: ArrayOffset) -> SquareCoord:
        return cls(offset[0], offset[1])

    def to_color(self) -> Color:
        return Color((self.x + self.y) % 2 + 1)

    def rotate_clockwise(self) -> SquareCoord:
        return SquareCoord(-self.y, self.x)

    def rotate_counterclockwise(self) -> SquareCoord:
        return SquareCoord(self.y, -self.x)

    def reflect(self, axis: SquareAxes) -> SquareCoord:
        _check_axis("reflect", axis)
        if axis is SquareAxes.X:
            return SquareCoord(-self.x, self.y)
        return SquareCoord(self.x, -self.y)

    @classmethod
    def ring(cls, radius: int) -> Shape[SquareCoord]:
        if radius == 0:
            return Shape([cls.origin()])
        return walk_ring(cls(radius, radius), SquareAxes.Y, SquareAxes.Y, AXES, -1)

    @classmethod
    def range(cls, radius: int) -> Shape[SquareCoord]:
        span = list(range(-radius, radius + 1))
        return Shape(cls(x, y) for x in span for y in span)


def _sign(v: int) -> int:
    return (v > 0) - (v < 0)


def square_path(start: SquareCoord, end: SquareCoord) -> Iterator[SquareCoord]:
    """Walk from ``start`` to ``end`` one face at a time.

    Each step moves along whichever axis lands closest to the straight
    line between the two cells; X wins ties.
    """
    steps = start.distance(end)
    dx, dy = _sign(end.x - start.x), _sign(end.y - start.y)
    x, y = start.x, start.y
    for i in range(steps + 1):
        yield SquareCoord(x, y)
        if i == steps:
            break
        t = (i + 1) / steps
        tx = start.x + (end.x - start.x) * t
        ty = start.y + (end.y - start.y) * t
        err_x = math.hypot(tx - (x + dx), ty - y) if dx else math.inf
        err_y = math.hypot(tx - x, ty - (y + dy)) if dy else math.inf
        if err_x <= err_y:
            x += dx
        else:
            y += dy


class SquareSizedGrid(SizedGrid):
    coord_type = SquareCoord

    def circumradius(self) -> float:
        return 2.0 * self._inradius / SQRT2

    def edge_length(self) -> float:
        return 2.0 * self._inradius

    def vertices(self, coord: SquareCoord) -> List[Point]:
        cx, cy = self.grid_to_screen(coord)
        radius = self.circumradius()
        points = []
        for i in range(4):
            angle = math.pi / 4.0 + i * (math.pi / 2.0)
            points.append(Point(cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
        return points

    def edges(self, coord: SquareCoord) -> Dict[Direction, Tuple[Point, Point]]:
        faces = (Direction.NORTH, Direction.WEST, Direction.SOUTH, Direction.EAST)
        return dict(zip(faces, vertices_to_edges(self.vertices(coord))))

    def grid_to_screen(self, coord: SquareCoord) -> Point:
        scale = 2.0 * self._inradius
        return Point(scale * coord.x, scale * coord.y)

    def screen_to_grid(self, point: Point) -> SquareCoord:
        scale = 2.0 * self._inradius
        return SquareCoord(math.floor(point[0] / scale + 0.5), math.floor(point[1] / scale + 0.5))

    def _rect_cells(self, rect_min: Point, rect_max: Point) -> Iterator[SquareCoord]:
        lo = self.screen_to_grid(rect_min)
        hi = self.screen_to_grid(rect_max)
        for y in range(lo.y, hi.y + 1):
            for x in range(lo.x, hi.x + 1):
                yield SquareCoord(x, y)
