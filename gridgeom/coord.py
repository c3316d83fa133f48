"""Interfaces shared by every grid topology.

``Coord`` is what each cell coordinate implements, ``ModuleCoord`` adds
vector arithmetic for the topologies where it is well defined, and
``SizedGrid`` ties a topology to a cell size in screen space.
"""
from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import Dict, Iterator, List, NamedTuple, Optional, Tuple

from .direction import Direction, DirectionSet, DirectionType
from .geometry import convex_poly_intersects_rect

logger = logging.getLogger(__name__)

ArrayOffset = Tuple[int, int]


class Color(Enum):
    """Four-coloring of cells: face-adjacent cells never share a color."""

    ONE = 1
    TWO = 2
    THREE = 3
    FOUR = 4

    @classmethod
    def from_index(cls, index: int) -> Optional[Color]:
        if 1 <= index <= 4:
            return cls(index)
        return None


class Point(NamedTuple):
    """A 2-D position in screen space."""

    x: float
    y: float

    def lerp(self, other: Point, t: float) -> Point:
        return Point(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def distance_to(self, other: Point) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


def normalize_angle(angle: float) -> float:
    """Wrap ``angle`` into ``[0, 2*pi)``."""
    a = math.fmod(angle, 2.0 * math.pi)
    if a < 0.0:
        a += 2.0 * math.pi
    return a


class Coord(ABC):
    """A cell of a planar tessellation.

    Concrete coordinates are immutable and hashable. Methods that may have
    no answer (a disallowed direction) return ``None`` instead of raising.
    """

    @classmethod
    @abstractmethod
    def origin(cls) -> Coord:
        ...

    def is_origin(self) -> bool:
        return self == type(self).origin()

    @abstractmethod
    def distance(self, other: Coord) -> int:
        """Number of face steps between two cells."""

    @abstractmethod
    def angle_to_direction(self, dir_type: DirectionType, angle: float) -> Direction:
        """Nearest allowed direction of ``dir_type`` for a radian angle."""

    @abstractmethod
    def direction_angle(self, dir_type: DirectionType, dir: Direction) -> Optional[float]:
        """Screen angle of a move in ``dir``, or ``None`` if not allowed."""

    @abstractmethod
    def move_in_direction(self, dir_type: DirectionType, dir: Direction) -> Optional[Coord]:
        ...

    @abstractmethod
    def move_on_axis(self, axis, positive: bool) -> Coord:
        ...

    @abstractmethod
    def allowed_directions(self, dir_type: DirectionType) -> DirectionSet:
        ...

    def allowed_direction(self, dir_type: DirectionType, dir: Direction) -> bool:
        return dir in self.allowed_directions(dir_type)

    @abstractmethod
    def direction_iterator(
        self, dir_type: DirectionType, dir: Direction, limit: Optional[int] = None
    ) -> Iterator[Coord]:
        """Cells starting at ``self`` stepping repeatedly in ``dir``.

        Empty when ``dir`` is not allowed. ``limit`` caps the number of
        cells produced; ``None`` never stops.
        """

    @abstractmethod
    def path_iterator(self, other: Coord) -> Iterator[Coord]:
        """Face-connected line from ``self`` to ``other``, both inclusive."""

    @abstractmethod
    def axis_iterator(self, axis, positive: bool, limit: Optional[int] = None) -> Iterator[Coord]:
        ...

    @abstractmethod
    def grid_to_array_offset(self) -> ArrayOffset:
        ...

    @classmethod
    @abstractmethod
    def array_offset_to_grid(cls, offset: ArrayOffset) -> Coord:
        ...

    @abstractmethod
    def to_color(self) -> Color:
        ...

    @abstractmethod
    def rotate_clockwise(self) -> Coord:
        ...

    @abstractmethod
    def rotate_counterclockwise(self) -> Coord:
        ...

    def rotate(self, steps: int) -> Coord:
        """Rotate clockwise ``steps`` times; negative steps turn the other way."""
        result = self
        if steps >= 0:
            for _ in range(steps):
                result = result.rotate_clockwise()
        else:
            for _ in range(-steps):
                result = result.rotate_counterclockwise()
        return result

    @abstractmethod
    def reflect(self, axis) -> Coord:
        ...

    @classmethod
    @abstractmethod
    def ring(cls, radius: int):
        """Shape of the cells exactly ``radius`` rings from the origin."""

    @classmethod
    @abstractmethod
    def range(cls, radius: int):
        """Shape of the cells at most ``radius`` rings from the origin."""


class ModuleCoord(Coord):
    """Coordinates that add, subtract and scale like integer vectors.

    Subclasses expose their two integer components via ``to_vector`` and
    rebuild from them with ``from_vector``; the arithmetic lives here.
    """

    @abstractmethod
    def to_vector(self) -> Tuple[int, int]:
        ...

    @classmethod
    @abstractmethod
    def from_vector(cls, vec: Tuple[int, int]) -> ModuleCoord:
        ...

    @abstractmethod
    def offset_in_direction(self, dir_type: DirectionType, dir: Direction) -> Optional[ModuleCoord]:
        """Displacement of one step in ``dir``, or ``None`` if not allowed."""

    @abstractmethod
    def offset_on_axis(self, axis, positive: bool) -> ModuleCoord:
        ...

    def __add__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        a, b = self.to_vector()
        c, d = other.to_vector()
        return self.from_vector((a + c, b + d))

    def __sub__(self, other):
        if type(other) is not type(self):
            return NotImplemented
        a, b = self.to_vector()
        c, d = other.to_vector()
        return self.from_vector((a - c, b - d))

    def __neg__(self):
        a, b = self.to_vector()
        return self.from_vector((-a, -b))

    def __mul__(self, scalar):
        if isinstance(scalar, bool) or not isinstance(scalar, int):
            return NotImplemented
        a, b = self.to_vector()
        return self.from_vector((a * scalar, b * scalar))

    __rmul__ = __mul__

    def translate(self, offset: ModuleCoord) -> ModuleCoord:
        return self + offset

    def move_in_direction(self, dir_type: DirectionType, dir: Direction) -> Optional[ModuleCoord]:
        offset = self.offset_in_direction(dir_type, dir)
        if offset is None:
            return None
        return self + offset

    def move_on_axis(self, axis, positive: bool) -> ModuleCoord:
        return self + self.offset_on_axis(axis, positive)

    def direction_iterator(
        self, dir_type: DirectionType, dir: Direction, limit: Optional[int] = None
    ) -> Iterator[ModuleCoord]:
        offset = self.offset_in_direction(dir_type, dir)
        if offset is None:
            return iter(())
        return module_coord_iter(self, offset, limit)

    def axis_iterator(self, axis, positive: bool, limit: Optional[int] = None) -> Iterator[ModuleCoord]:
        return module_coord_iter(self, self.offset_on_axis(axis, positive), limit)


def module_coord_iter(coord: ModuleCoord, offset: ModuleCoord, limit: Optional[int] = None):
    """Yield ``coord``, ``coord + offset``, ... for at most ``limit`` items."""
    count = 0
    current = coord
    while limit is None or count < limit:
        yield current
        current = current + offset
        count += 1


class SizedGrid(ABC):
    """Screen-space geometry of one topology at one cell size."""

    coord_type: type = Coord

    def __init__(self, inradius: float) -> None:
        if not inradius > 0:
            raise ValueError("inradius must be positive")
        self._inradius = float(inradius)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._inradius!r})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._inradius == other._inradius

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._inradius))

    def inradius(self) -> float:
        return self._inradius

    @abstractmethod
    def circumradius(self) -> float:
        ...

    @abstractmethod
    def edge_length(self) -> float:
        ...

    @abstractmethod
    def vertices(self, coord: Coord) -> List[Point]:
        """Corner points of the cell, consecutive corners one edge apart."""

    @abstractmethod
    def edges(self, coord: Coord) -> Dict[Direction, Tuple[Point, Point]]:
        """Boundary segment crossed by each allowed face direction."""

    @abstractmethod
    def grid_to_screen(self, coord: Coord) -> Point:
        ...

    @abstractmethod
    def screen_to_grid(self, point: Point) -> Coord:
        ...

    def coord_intersects_rect(self, coord: Coord, rect_min: Point, rect_max: Point) -> bool:
        return convex_poly_intersects_rect(self.vertices(coord), rect_min, rect_max)

    def screen_rect_to_grid(self, rect_min: Point, rect_max: Point) -> Optional[Iterator[Coord]]:
        """Every cell whose polygon overlaps the rectangle.

        Returns ``None`` when ``rect_min`` is not component-wise <= ``rect_max``.
        """
        rect_min = Point(*rect_min)
        rect_max = Point(*rect_max)
        if rect_min.x > rect_max.x or rect_min.y > rect_max.y:
            logger.debug("Rejected inverted rectangle %s..%s", rect_min, rect_max)
            return None
        return self._rect_cells(rect_min, rect_max)

    @abstractmethod
    def _rect_cells(self, rect_min: Point, rect_max: Point) -> Iterator[Coord]:
        ...
