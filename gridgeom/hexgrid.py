"""Hex grid axial coordinate utilities.

Flat-top hexes addressed by axial ``(q, r)``. The cubical form is
``(q, -q - r, r)`` and always sums to zero.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .coord import ArrayOffset, Color, ModuleCoord, Point, SizedGrid, normalize_angle
from .direction import Direction, DirectionSet, DirectionType
from .errors import KindMismatchError
from .geometry import vertices_to_edges
from .settings import SETTINGS
from .shape import Shape, ring as walk_ring

SQRT3 = math.sqrt(3.0)
Cube = Tuple[int, int, int]


def axial_to_pixel(q: float, r: float, hex_size: float) -> Tuple[float, float]:
    """Convert axial coords to 2D pixel coords for flat-top hexes."""
    x = 1.5 * hex_size * q
    y = SQRT3 * hex_size * (r + 0.5 * q)
    return x, y


def _round_half_away(v: float) -> float:
    # Halves go away from zero
    return math.copysign(math.floor(abs(v) + 0.5), v)


def hex_round(cube: Sequence[float]) -> Cube:
    """Round fractional cube coordinates to the nearest hex.

    The component with the largest rounding error is rebuilt from the
    other two so the result still sums to zero.
    """
    fx, fy, fz = cube
    rx, ry, rz = _round_half_away(fx), _round_half_away(fy), _round_half_away(fz)

    dx = abs(rx - fx)
    dy = abs(ry - fy)
    dz = abs(rz - fz)

    if dx > dy and dx > dz:
        rx = -ry - rz
    elif dy > dz:
        ry = -rx - rz
    else:
        rz = -rx - ry

    return int(rx), int(ry), int(rz)


def pixel_to_axial(x: float, y: float, hex_size: float) -> Tuple[int, int]:
    """Approximate inverse of :func:`axial_to_pixel` for flat-top hexes.

    The returned axial coordinates are rounded to the nearest hex tile.
    ``hex_size`` must match the size used in :func:`axial_to_pixel`.
    """

    if hex_size == 0:
        raise ValueError("hex_size must be non-zero")

    # Fractional axial coordinates
    fq = (2.0 / 3.0) * x / hex_size
    fr = ((-1.0 / 3.0) * x + (SQRT3 / 3.0) * y) / hex_size

    q, _, r = hex_round((fq, -fq - fr, fr))
    return q, r


class HexAxes(Enum):
    Q = "Q"
    R = "R"
    S = "S"

    def __str__(self) -> str:
        return self.value


AXES = (HexAxes.Q, HexAxes.R, HexAxes.S)

FACE_DIRECTIONS = DirectionSet.from_iter([
    Direction.NORTH_EAST, Direction.NORTH, Direction.NORTH_WEST,
    Direction.SOUTH_WEST, Direction.SOUTH, Direction.SOUTH_EAST,
])
VERTEX_DIRECTIONS = DirectionSet.from_iter([
    Direction.EAST, Direction.NORTH_EAST, Direction.NORTH_WEST,
    Direction.WEST, Direction.SOUTH_WEST, Direction.SOUTH_EAST,
])

_FACE_OFFSETS = {
    Direction.NORTH_EAST: (1, 0),
    Direction.NORTH: (0, 1),
    Direction.NORTH_WEST: (-1, 1),
    Direction.SOUTH_WEST: (-1, 0),
    Direction.SOUTH: (0, -1),
    Direction.SOUTH_EAST: (1, -1),
}
_VERTEX_OFFSETS = {
    Direction.EAST: (2, -1),
    Direction.NORTH_EAST: (1, 1),
    Direction.NORTH_WEST: (-1, 2),
    Direction.WEST: (-2, 1),
    Direction.SOUTH_WEST: (-1, -1),
    Direction.SOUTH_EAST: (1, -2),
}
_AXIS_DIRECTIONS = {
    (HexAxes.Q, True): Direction.NORTH,
    (HexAxes.Q, False): Direction.SOUTH,
    (HexAxes.R, True): Direction.NORTH_EAST,
    (HexAxes.R, False): Direction.SOUTH_WEST,
    (HexAxes.S, True): Direction.SOUTH_EAST,
    (HexAxes.S, False): Direction.NORTH_WEST,
}

_FACE_ANGLES = {
    Direction.NORTH_EAST: math.pi / 6.0,
    Direction.NORTH_WEST: 5.0 * math.pi / 6.0,
    Direction.SOUTH_WEST: 7.0 * math.pi / 6.0,
    Direction.SOUTH_EAST: 11.0 * math.pi / 6.0,
}
_VERTEX_ANGLES = {
    Direction.NORTH_EAST: math.pi / 3.0,
    Direction.NORTH_WEST: 2.0 * math.pi / 3.0,
    Direction.SOUTH_WEST: 4.0 * math.pi / 3.0,
    Direction.SOUTH_EAST: 5.0 * math.pi / 3.0,
}


def _check_axis(operation: str, axis) -> None:
    if not isinstance(axis, HexAxes):
        raise KindMismatchError(operation, "HexAxes", type(axis).__name__)


@dataclass(frozen=True)
class HexCoord(ModuleCoord):
    q: int = 0
    r: int = 0

    def __str__(self) -> str:
        return f"({self.q},{self.r})"

    @classmethod
    def origin(cls) -> HexCoord:
        return cls(0, 0)

    def to_vector(self) -> Tuple[int, int]:
        return self.q, self.r

    @classmethod
    def from_vector(cls, vec: Tuple[int, int]) -> HexCoord:
        return cls(vec[0], vec[1])

    def to_cubical(self) -> Cube:
        return self.q, -self.q - self.r, self.r

    @classmethod
    def from_cubical(cls, cube: Sequence[int]) -> HexCoord:
        x, y, z = cube
        if x + y + z != 0:
            raise ValueError(f"Cubical hex components must sum to 0: {tuple(cube)}")
        return cls(x, z)

    def distance(self, other: HexCoord) -> int:
        dq = self.q - other.q
        dr = self.r - other.r
        return (abs(dq) + abs(dr) + abs(dq + dr)) // 2

    def allowed_directions(self, dir_type: DirectionType) -> DirectionSet:
        return FACE_DIRECTIONS if dir_type is DirectionType.FACE else VERTEX_DIRECTIONS

    def angle_to_direction(self, dir_type: DirectionType, angle: float) -> Direction:
        a = normalize_angle(angle)
        if dir_type is DirectionType.FACE:
            hextant = a / (math.pi / 3.0)
            if hextant < 1.0:
                return Direction.NORTH_EAST
            if hextant < 2.0:
                return Direction.NORTH
            if hextant < 3.0:
                return Direction.NORTH_WEST
            if hextant < 4.0:
                return Direction.SOUTH_WEST
            if hextant < 5.0:
                return Direction.SOUTH
            return Direction.SOUTH_EAST

        dodecant = a / (math.pi / 6.0)
        if dodecant > 11.0 or dodecant < 1.0:
            return Direction.EAST
        if dodecant < 3.0:
            return Direction.NORTH_EAST
        if dodecant < 5.0:
            return Direction.NORTH_WEST
        if dodecant < 7.0:
            return Direction.WEST
        if dodecant < 9.0:
            return Direction.SOUTH_WEST
        return Direction.SOUTH_EAST

    def direction_angle(self, dir_type: DirectionType, dir: Direction) -> Optional[float]:
        if not self.allowed_direction(dir_type, dir):
            return None
        table = _FACE_ANGLES if dir_type is DirectionType.FACE else _VERTEX_ANGLES
        # N/S faces and E/W vertices sit on their compass angle
        return table.get(dir, dir.angle())

    def offset_in_direction(self, dir_type: DirectionType, dir: Direction) -> Optional[HexCoord]:
        table = _FACE_OFFSETS if dir_type is DirectionType.FACE else _VERTEX_OFFSETS
        vec = table.get(dir)
        if vec is None:
            return None
        return HexCoord(*vec)

    def offset_on_axis(self, axis: HexAxes, positive: bool) -> HexCoord:
        _check_axis("move on axis", axis)
        return HexCoord(*_FACE_OFFSETS[_AXIS_DIRECTIONS[(axis, positive)]])

    def path_iterator(self, other: HexCoord) -> Iterator[HexCoord]:
        return hex_line(self, other)

    def grid_to_array_offset(self) -> ArrayOffset:
        q, r = self.q, self.r
        return q, r + (q + (q & 1)) // 2

    @classmethod
    def array_offset_to_grid(cls, offset: ArrayOffset) -> HexCoord:
        x, y = offset
        return cls(x, y - (x + (x & 1)) // 2)

    def to_color(self) -> Color:
        col, row = self.grid_to_array_offset()
        return Color((row + col % 2) % 3 + 1)

    def rotate_clockwise(self) -> HexCoord:
        x, y, z = self.to_cubical()
        return HexCoord.from_cubical((-z, -x, -y))

    def rotate_counterclockwise(self) -> HexCoord:
        x, y, z = self.to_cubical()
        return HexCoord.from_cubical((-y, -z, -x))

    def reflect(self, axis: HexAxes) -> HexCoord:
        _check_axis("reflect", axis)
        x, y, z = self.to_cubical()
        if axis is HexAxes.Q:
            return HexCoord.from_cubical((x, z, y))
        if axis is HexAxes.R:
            return HexCoord.from_cubical((y, x, z))
        return HexCoord.from_cubical((z, y, x))

    @classmethod
    def ring(cls, radius: int) -> Shape[HexCoord]:
        if radius == 0:
            return Shape([cls.origin()])
        return walk_ring(cls(radius, 0), HexAxes.Q, HexAxes.Q, AXES, -1)

    @classmethod
    def range(cls, radius: int) -> Shape[HexCoord]:
        cells = []
        for x in range(-radius, radius + 1):
            for y in range(max(-radius, -x - radius), min(radius, -x + radius) + 1):
                cells.append(cls.from_cubical((x, y, -x - y)))
        return Shape(cells)


def hex_line(start: HexCoord, end: HexCoord) -> Iterator[HexCoord]:
    """Cells along the straight line between two hexes, both inclusive."""
    steps = start.distance(end)
    if steps == 0:
        yield start
        return
    # Ties on cell boundaries are settled by the nudge direction, not by
    # hex_round, so lines along a boundary can differ from a plain lerp
    nudge = SETTINGS.hex_line_nudge
    a = [c + n for c, n in zip(start.to_cubical(), nudge)]
    b = [c + n for c, n in zip(end.to_cubical(), nudge)]
    for i in range(steps + 1):
        t = i / steps
        yield HexCoord.from_cubical(hex_round([p + (q - p) * t for p, q in zip(a, b)]))


class HexSizedGrid(SizedGrid):
    coord_type = HexCoord

    def circumradius(self) -> float:
        return 2.0 * self._inradius / SQRT3

    def edge_length(self) -> float:
        # A regular hexagon's edge equals its circumradius
        return self.circumradius()

    def vertices(self, coord: HexCoord) -> List[Point]:
        """Return the 6 polygon corner points for the given hex."""
        cx, cy = self.grid_to_screen(coord)
        size = self.circumradius()
        pts: List[Point] = []
        for i in range(6):
            angle = math.radians(60 * i)
            pts.append(Point(cx + size * math.cos(angle), cy + size * math.sin(angle)))
        return pts

    def edges(self, coord: HexCoord) -> Dict[Direction, Tuple[Point, Point]]:
        faces = (
            Direction.NORTH_EAST, Direction.NORTH, Direction.NORTH_WEST,
            Direction.SOUTH_WEST, Direction.SOUTH, Direction.SOUTH_EAST,
        )
        return dict(zip(faces, vertices_to_edges(self.vertices(coord))))

    def grid_to_screen(self, coord: HexCoord) -> Point:
        return Point(*axial_to_pixel(coord.q, coord.r, self.circumradius()))

    def screen_to_grid(self, point: Point) -> HexCoord:
        return HexCoord(*pixel_to_axial(point[0], point[1], self.circumradius()))

    def _rect_cells(self, rect_min: Point, rect_max: Point) -> Iterator[HexCoord]:
        # Pad by one cell on each side so partially covered hexes are visited
        lo = self.screen_to_grid(rect_min).move_in_direction(DirectionType.FACE, Direction.SOUTH_WEST)
        hi = self.screen_to_grid(rect_max).move_in_direction(DirectionType.FACE, Direction.NORTH_EAST)
        end_r = hi.r + (hi.q - lo.q) // 2 + 1
        row_length = hi.q - lo.q + 1

        row = lo
        while row.r <= end_r:
            current = row
            for i in range(row_length):
                if self.coord_intersects_rect(current, rect_min, rect_max):
                    yield current
                step = Direction.SOUTH_EAST if i % 2 == 0 else Direction.NORTH_EAST
                current = current.move_in_direction(DirectionType.FACE, step)
            row = row.move_in_direction(DirectionType.FACE, Direction.NORTH)
