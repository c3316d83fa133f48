# gridgeom/__init__.py
# Package init for square, hex and triangle grid geometry

from .direction import Direction, DirectionSet, DirectionType, ALL_DIRECTIONS, CARDINAL, ORDINAL
from .coord import Color, Point, Coord, ModuleCoord, SizedGrid, module_coord_iter
from .errors import GridError, KindMismatchError
from .settings import GridSettings, SETTINGS
from .geometry import vertices_to_edges, convex_poly_intersects_rect
from .shape import Shape, ShapeContainer, ring
from .square import SquareAxes, SquareCoord, SquareSizedGrid
from .hexgrid import HexAxes, HexCoord, HexSizedGrid, hex_round, axial_to_pixel, pixel_to_axial
from .triangle import TriangleAxes, TriangleCoord, TrianglePoint, TriangleSizedGrid
from .dynamic import Kind, DynamicAxes, DynamicCoord, DynamicSizedGrid

__all__ = [
    "Direction", "DirectionSet", "DirectionType", "ALL_DIRECTIONS", "CARDINAL", "ORDINAL",
    "Color", "Point", "Coord", "ModuleCoord", "SizedGrid", "module_coord_iter",
    "GridError", "KindMismatchError",
    "GridSettings", "SETTINGS",
    "vertices_to_edges", "convex_poly_intersects_rect",
    "Shape", "ShapeContainer", "ring",
    "SquareAxes", "SquareCoord", "SquareSizedGrid",
    "HexAxes", "HexCoord", "HexSizedGrid", "hex_round", "axial_to_pixel", "pixel_to_axial",
    "TriangleAxes", "TriangleCoord", "TrianglePoint", "TriangleSizedGrid",
    "Kind", "DynamicAxes", "DynamicCoord", "DynamicSizedGrid",
]
