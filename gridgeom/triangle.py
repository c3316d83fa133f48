"""Triangle grid coordinates.

A cell is ``(x, y)`` plus whether the triangle points up or down. The
cubical form ``(x, y, k - x - y)`` sums to 2 for up cells and 1 for down
cells, where each component counts one of the three lane families.
Triangles have no additive identity, so these coordinates do not support
vector arithmetic.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .coord import ArrayOffset, Color, Coord, Point, SizedGrid, normalize_angle
from .direction import Direction, DirectionSet, DirectionType
from .errors import KindMismatchError
from .geometry import vertices_to_edges
from .settings import SETTINGS
from .shape import Shape, ring as walk_ring

SQRT3 = math.sqrt(3.0)
Cube = Tuple[int, int, int]


class TriangleAxes(Enum):
    A = "A"
    B = "B"
    C = "C"

    def __str__(self) -> str:
        return self.value


AXES = (TriangleAxes.A, TriangleAxes.B, TriangleAxes.C)


class TrianglePoint(Enum):
    UP = "up"
    DOWN = "down"

    def __invert__(self) -> TrianglePoint:
        return TrianglePoint.DOWN if self is TrianglePoint.UP else TrianglePoint.UP

    def __str__(self) -> str:
        return "∆" if self is TrianglePoint.UP else "∇"


UP = TrianglePoint.UP
DOWN = TrianglePoint.DOWN

UP_DIRECTIONS = DirectionSet.from_iter([Direction.NORTH_EAST, Direction.SOUTH, Direction.NORTH_WEST])
DOWN_DIRECTIONS = DirectionSet.from_iter(~d for d in UP_DIRECTIONS)

_FACE_OFFSETS = {
    (UP, Direction.NORTH_EAST): (0, 0),
    (UP, Direction.SOUTH): (0, -1),
    (UP, Direction.NORTH_WEST): (-1, 0),
    (DOWN, Direction.NORTH): (0, 1),
    (DOWN, Direction.SOUTH_EAST): (1, 0),
    (DOWN, Direction.SOUTH_WEST): (0, 0),
}
_VERTEX_OFFSETS = {
    (UP, Direction.NORTH): (-1, 1),
    (UP, Direction.SOUTH_EAST): (1, -1),
    (UP, Direction.SOUTH_WEST): (-1, -1),
    (DOWN, Direction.SOUTH): (1, -1),
    (DOWN, Direction.NORTH_WEST): (-1, 1),
    (DOWN, Direction.NORTH_EAST): (1, 1),
}
_AXIS_OFFSETS = {
    (UP, TriangleAxes.A, True): (0, 0),
    (UP, TriangleAxes.A, False): (0, -1),
    (UP, TriangleAxes.B, True): (0, 0),
    (UP, TriangleAxes.B, False): (-1, 0),
    (UP, TriangleAxes.C, True): (-1, 0),
    (UP, TriangleAxes.C, False): (0, -1),
    (DOWN, TriangleAxes.A, True): (0, 1),
    (DOWN, TriangleAxes.A, False): (0, 0),
    (DOWN, TriangleAxes.B, True): (1, 0),
    (DOWN, TriangleAxes.B, False): (0, 0),
    (DOWN, TriangleAxes.C, True): (0, 1),
    (DOWN, TriangleAxes.C, False): (1, 0),
}
_ANGLES = {
    (UP, Direction.NORTH_EAST): math.pi / 6.0,
    (UP, Direction.NORTH_WEST): 5.0 * math.pi / 6.0,
    (UP, Direction.SOUTH): Direction.SOUTH.angle(),
    (DOWN, Direction.SOUTH_WEST): 7.0 * math.pi / 6.0,
    (DOWN, Direction.SOUTH_EAST): 11.0 * math.pi / 6.0,
    (DOWN, Direction.NORTH): Direction.NORTH.angle(),
}

# Cubical form shifted so the origin cell sits at (0, 0, 0)
_UP_SHIFT = 2


def _check_axis(operation: str, axis) -> None:
    if not isinstance(axis, TriangleAxes):
        raise KindMismatchError(operation, "TriangleAxes", type(axis).__name__)


@dataclass(frozen=True)
class TriangleCoord(Coord):
    x: int = 0
    y: int = 0
    point: TrianglePoint = UP

    def __str__(self) -> str:
        return f"({self.x},{self.y},{self.point})"

    @classmethod
    def origin(cls) -> TriangleCoord:
        return cls(0, 0, UP)

    def is_up(self) -> bool:
        return self.point is UP

    def to_cubical(self) -> Cube:
        total = 2 if self.point is UP else 1
        return self.x, self.y, total - self.x - self.y

    @classmethod
    def from_cubical(cls, cube: Sequence[int]) -> TriangleCoord:
        cx, cy, cz = (int(c) for c in cube)
        total = cx + cy + cz
        if total not in (1, 2):
            raise ValueError(f"Invalid cubical coordinate {(cx, cy, cz)}, elements sum to {total}")
        return cls(cx, cy, UP if total == 2 else DOWN)

    def _offset_cubical(self) -> Cube:
        x, y, z = self.to_cubical()
        return x, y, z - _UP_SHIFT

    @classmethod
    def _from_offset_cubical(cls, cube: Cube) -> TriangleCoord:
        x, y, z = cube
        return cls.from_cubical((x, y, z + _UP_SHIFT))

    def distance(self, other: TriangleCoord) -> int:
        return sum(abs(a - b) for a, b in zip(self.to_cubical(), other.to_cubical()))

    def _point_for(self, dir_type: DirectionType) -> TrianglePoint:
        # Vertex directions of a cell are the face directions of its flip
        return ~self.point if dir_type is DirectionType.VERTEX else self.point

    def allowed_directions(self, dir_type: DirectionType) -> DirectionSet:
        return UP_DIRECTIONS if self._point_for(dir_type) is UP else DOWN_DIRECTIONS

    def angle_to_direction(self, dir_type: DirectionType, angle: float) -> Direction:
        dodecant = normalize_angle(angle) / (math.pi / 6.0)
        if self._point_for(dir_type) is UP:
            if dodecant >= 11.0 or dodecant < 3.0:
                return Direction.NORTH_EAST
            if dodecant < 7.0:
                return Direction.NORTH_WEST
            return Direction.SOUTH
        if dodecant >= 9.0 or dodecant < 1.0:
            return Direction.SOUTH_EAST
        if dodecant < 4.0:
            return Direction.NORTH
        return Direction.SOUTH_WEST

    def direction_angle(self, dir_type: DirectionType, dir: Direction) -> Optional[float]:
        return _ANGLES.get((self._point_for(dir_type), dir))

    def move_in_direction(self, dir_type: DirectionType, dir: Direction) -> Optional[TriangleCoord]:
        table = _FACE_OFFSETS if dir_type is DirectionType.FACE else _VERTEX_OFFSETS
        offset = table.get((self.point, dir))
        if offset is None:
            return None
        return TriangleCoord(self.x + offset[0], self.y + offset[1], ~self.point)

    def move_on_axis(self, axis: TriangleAxes, positive: bool) -> TriangleCoord:
        _check_axis("move on axis", axis)
        dx, dy = _AXIS_OFFSETS[(self.point, axis, positive)]
        return TriangleCoord(self.x + dx, self.y + dy, ~self.point)

    def direction_iterator(
        self, dir_type: DirectionType, dir: Direction, limit: Optional[int] = None
    ) -> Iterator[TriangleCoord]:
        """Step repeatedly toward ``dir``.

        Every move flips the cell, so the walk alternates between crossing a
        face and crossing a vertex. It stops as soon as ``dir`` is no longer
        allowed from the current cell and kind of move.
        """
        current = self
        count = 0
        while limit is None or count < limit:
            if not current.allowed_direction(dir_type, dir):
                return
            yield current
            current = current.move_in_direction(dir_type, dir)
            dir_type = ~dir_type
            count += 1

    def axis_iterator(
        self, axis: TriangleAxes, positive: bool, limit: Optional[int] = None
    ) -> Iterator[TriangleCoord]:
        _check_axis("move on axis", axis)
        current = self
        count = 0
        while limit is None or count < limit:
            yield current
            current = current.move_on_axis(axis, positive)
            count += 1

    def path_iterator(self, other: TriangleCoord) -> Iterator[TriangleCoord]:
        return triangle_path(self, other)

    def grid_to_array_offset(self) -> ArrayOffset:
        return 2 * self.x + (0 if self.point is UP else 1), self.y

    @classmethod
    def array_offset_to_grid(cls, offset: ArrayOffset) -> TriangleCoord:
        ax, ay = offset
        rem = ax % 2
        return cls((ax - rem) // 2, ay, UP if rem == 0 else DOWN)

    def to_color(self) -> Color:
        ax, ay = self.grid_to_array_offset()
        return Color((ax + 2 * ay) % 2 + 1)

    def rotate_clockwise(self) -> TriangleCoord:
        a, b, c = self._offset_cubical()
        return self._from_offset_cubical((c, a, b))

    def rotate_counterclockwise(self) -> TriangleCoord:
        a, b, c = self._offset_cubical()
        return self._from_offset_cubical((b, c, a))

    def reflect(self, axis: TriangleAxes) -> TriangleCoord:
        _check_axis("reflect", axis)
        a, b, c = self._offset_cubical()
        if axis is TriangleAxes.A:
            return self._from_offset_cubical((a, c, b))
        if axis is TriangleAxes.B:
            return self._from_offset_cubical((c, b, a))
        return self._from_offset_cubical((b, a, c))

    @classmethod
    def ring(cls, radius: int) -> Shape[TriangleCoord]:
        if radius == 0:
            return Shape([cls.origin()])
        if radius == 1:
            return Shape([cls(0, 0, DOWN), cls(0, -1, DOWN), cls(-1, 0, DOWN)])
        start = cls(radius - 1, radius - 1, DOWN)
        return walk_ring(start, TriangleAxes.B, TriangleAxes.A, AXES, 1)

    @classmethod
    def range(cls, radius: int) -> Shape[TriangleCoord]:
        cells = set()
        for r in range(radius + 1):
            cells.update(cls.ring(r))
        return Shape(cells)


def triangle_path(start: TriangleCoord, end: TriangleCoord) -> Iterator[TriangleCoord]:
    """Greedy face walk that tracks the straight screen-space line.

    At each step the face neighbour closest to the interpolated point wins.
    Ties go to the first neighbour in direction order, which can pick a
    correct but odd-looking route, e.g. from (0,1,UP) to (1,4,UP).
    """
    steps = start.distance(end)
    if steps == 0:
        yield start
        return
    grid = TriangleSizedGrid(SETTINGS.path_unit_inradius)
    a = grid.grid_to_screen(start)
    b = grid.grid_to_screen(end)
    current = start
    for i in range(steps + 1):
        yield current
        if i == steps:
            break
        target = a.lerp(b, (i + 1) / steps)
        candidates = [
            current.move_in_direction(DirectionType.FACE, d)
            for d in current.allowed_directions(DirectionType.FACE)
        ]
        current = min(candidates, key=lambda c: target.distance_to(grid.grid_to_screen(c)))


class TriangleSizedGrid(SizedGrid):
    coord_type = TriangleCoord

    # Columns are the unit vectors of the A, B and C lanes
    BASIS = np.array([
        [math.cos(11.0 * math.pi / 6.0), 0.0, math.cos(7.0 * math.pi / 6.0)],
        [math.sin(11.0 * math.pi / 6.0), 1.0, math.sin(7.0 * math.pi / 6.0)],
    ])

    def circumradius(self) -> float:
        return 2.0 * self._inradius

    def edge_length(self) -> float:
        return 6.0 * self._inradius / SQRT3

    def vertices(self, coord: TriangleCoord) -> List[Point]:
        start = math.pi / 2.0 if coord.point is UP else math.pi / 6.0
        cx, cy = self.grid_to_screen(coord)
        radius = self.circumradius()
        points = []
        for i in range(3):
            angle = start + i * (2.0 * math.pi / 3.0)
            points.append(Point(cx + radius * math.cos(angle), cy + radius * math.sin(angle)))
        return points

    def edges(self, coord: TriangleCoord) -> Dict[Direction, Tuple[Point, Point]]:
        if coord.point is UP:
            faces = (Direction.NORTH_WEST, Direction.SOUTH, Direction.NORTH_EAST)
        else:
            faces = (Direction.NORTH, Direction.SOUTH_WEST, Direction.SOUTH_EAST)
        return dict(zip(faces, vertices_to_edges(self.vertices(coord))))

    def grid_to_screen(self, coord: TriangleCoord) -> Point:
        lanes = np.array(coord._offset_cubical(), dtype=float)
        x, y = self.circumradius() * (self.BASIS @ lanes)
        return Point(float(x), float(y))

    def screen_to_grid(self, point: Point) -> TriangleCoord:
        height = self._inradius + self.circumradius()
        shifted = np.array([point[0] - self.edge_length(), point[1] - self.circumradius()])
        # Snap float noise so lattice vertices land on exact lane boundaries
        lanes = np.ceil(np.round((self.BASIS.T @ shifted) / height, 9)).astype(int)
        if lanes.sum() == 0:
            # A vertex has every lane integral; bumping A picks a down cell on that corner
            lanes[0] += 1
        return TriangleCoord.from_cubical(lanes.tolist())

    def _rect_cells(self, rect_min: Point, rect_max: Point) -> Iterator[TriangleCoord]:
        lo = self.screen_to_grid(rect_min).move_on_axis(TriangleAxes.B, False)
        hi = self.screen_to_grid(rect_max).move_on_axis(TriangleAxes.B, True)
        row_length = 2 * (hi.x - lo.x) + (hi.y - lo.y) + 2

        row = lo
        while row.y <= hi.y:
            current = row
            for _ in range(row_length):
                if self.coord_intersects_rect(current, rect_min, rect_max):
                    yield current
                current = current.move_on_axis(TriangleAxes.B, True)
            if row.is_up():
                row = row.move_in_direction(DirectionType.VERTEX, Direction.NORTH)
            else:
                row = row.move_in_direction(DirectionType.FACE, Direction.NORTH)
