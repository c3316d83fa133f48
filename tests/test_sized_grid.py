import logging
import math

import pytest

from gridgeom.coord import Point
from gridgeom.direction import DirectionType
from gridgeom.hexgrid import HexCoord, HexSizedGrid
from gridgeom.square import SquareCoord, SquareSizedGrid
from gridgeom.triangle import TriangleCoord, TrianglePoint, TriangleSizedGrid

GRID_TYPES = [SquareSizedGrid, HexSizedGrid, TriangleSizedGrid]
SIZES = [1.0, 7.5]


def grids():
    for grid_type in GRID_TYPES:
        for size in SIZES:
            yield grid_type(size)


def test_radii():
    for grid in grids():
        assert grid.inradius() <= grid.circumradius()
        assert grid.edge_length() > 0
    assert SquareSizedGrid(1.0).circumradius() == pytest.approx(math.sqrt(2.0))
    assert HexSizedGrid(1.0).edge_length() == pytest.approx(HexSizedGrid(1.0).circumradius())
    assert TriangleSizedGrid(1.0).edge_length() == pytest.approx(2.0 * math.sqrt(3.0))
    with pytest.raises(ValueError):
        SquareSizedGrid(0.0)


def test_screen_roundtrip_and_center_inside_cell():
    for grid in grids():
        for coord in grid.coord_type.range(4):
            center = grid.grid_to_screen(coord)
            assert grid.screen_to_grid(center) == coord
            eps = 0.01 * grid.inradius()
            lo = Point(center.x - eps, center.y - eps)
            hi = Point(center.x + eps, center.y + eps)
            assert grid.coord_intersects_rect(coord, lo, hi)


def test_vertices_are_one_edge_apart():
    for grid in grids():
        coord = next(iter(grid.coord_type.ring(2)))
        verts = grid.vertices(coord)
        center = grid.grid_to_screen(coord)
        for a, b in zip(verts, verts[1:] + verts[:1]):
            assert a.distance_to(b) == pytest.approx(grid.edge_length())
            assert center.distance_to(a) == pytest.approx(grid.circumradius())


def test_edges_cover_the_face_directions():
    for grid in grids():
        for coord in grid.coord_type.range(1):
            edges = grid.edges(coord)
            assert set(edges) == set(coord.allowed_directions(DirectionType.FACE))
            center = grid.grid_to_screen(coord)
            for d, (a, b) in edges.items():
                # the edge midpoint lies in the direction of the face
                mid = Point((a.x + b.x) / 2, (a.y + b.y) / 2)
                angle = math.atan2(mid.y - center.y, mid.x - center.x)
                assert coord.angle_to_direction(DirectionType.FACE, angle) == d
                assert center.distance_to(mid) == pytest.approx(grid.inradius())


def test_face_neighbours_share_an_edge():
    grid = TriangleSizedGrid(2.0)
    up = TriangleCoord(0, 0, TrianglePoint.UP)
    down = TriangleCoord(0, 0, TrianglePoint.DOWN)
    assert grid.grid_to_screen(up) == Point(0.0, 0.0)
    up_center = grid.grid_to_screen(up)
    down_center = grid.grid_to_screen(down)
    assert up_center.distance_to(down_center) == pytest.approx(2.0 * grid.inradius())


def test_inverted_rect_gives_nothing(caplog):
    for grid in grids():
        assert grid.screen_rect_to_grid(Point(5.0, 0.0), Point(-5.0, 10.0)) is None
        assert grid.screen_rect_to_grid(Point(0.0, 5.0), Point(10.0, -5.0)) is None
    with caplog.at_level(logging.DEBUG, logger="gridgeom.coord"):
        SquareSizedGrid(1.0).screen_rect_to_grid(Point(1.0, 0.0), Point(0.0, 0.0))
    assert "inverted rectangle" in caplog.text


def brute_force(grid, lo, hi, radius):
    return {c for c in grid.coord_type.range(radius) if grid.coord_intersects_rect(c, lo, hi)}


def test_rect_enumeration_matches_brute_force():
    rects = [
        (Point(-3.3, -2.2), Point(5.1, 4.7)),
        (Point(0.3, 0.2), Point(0.4, 0.9)),
        (Point(-9.7, 1.1), Point(-2.05, 6.3)),
    ]
    for grid_type in GRID_TYPES:
        grid = grid_type(1.0)
        for lo, hi in rects:
            found = list(grid.screen_rect_to_grid(lo, hi))
            assert len(found) == len(set(found))
            assert set(found) == brute_force(grid, lo, hi, 12)


def test_square_rect_is_a_plain_sweep():
    grid = SquareSizedGrid(1.0)
    cells = list(grid.screen_rect_to_grid(Point(-0.5, -0.5), Point(2.5, 0.5)))
    assert cells == [SquareCoord(0, 0), SquareCoord(1, 0)]
    hex_cells = set(HexSizedGrid(1.0).screen_rect_to_grid(Point(-0.1, -0.1), Point(0.1, 0.1)))
    assert hex_cells == {HexCoord(0, 0)}


def test_boundary_points_map_to_a_touching_cell():
    for grid in grids():
        for coord in grid.coord_type.range(2):
            verts = grid.vertices(coord)
            mids = [a.lerp(b, 0.5) for a, b in zip(verts, verts[1:] + verts[:1])]
            for p in verts + mids:
                cell = grid.screen_to_grid(p)
                center = grid.grid_to_screen(cell)
                assert center.distance_to(p) <= grid.circumradius() * (1.0 + 1e-9)


def test_triangle_vertex_shared_by_six_cells():
    grid = TriangleSizedGrid(1.0)
    corner = Point(grid.edge_length(), grid.circumradius())
    cell = grid.screen_to_grid(corner)
    assert cell == TriangleCoord(1, 0, TrianglePoint.DOWN)
    assert any(corner.distance_to(v) < 1e-9 for v in grid.vertices(cell))
    sharing = [c for c in TriangleCoord.range(4)
               if any(corner.distance_to(v) < 1e-6 for v in grid.vertices(c))]
    assert len(sharing) == 6
    assert cell in sharing


def test_rect_with_corners_on_vertices():
    tri = TriangleSizedGrid(1.0)
    edge, height = tri.edge_length(), 3.0 * tri.inradius()

    def lattice_vertex(i, j):
        return Point(edge * (1 + i + 0.5 * j), tri.circumradius() + height * j)

    hexagon = HexSizedGrid(1.0)
    cases = [
        (tri, lattice_vertex(-2, -2), lattice_vertex(2, 2)),
        (tri, lattice_vertex(0, 0), lattice_vertex(1, 1)),
        (hexagon, hexagon.vertices(HexCoord(0, 0))[3], hexagon.vertices(HexCoord(2, 1))[0]),
    ]
    for grid, lo, hi in cases:
        found = list(grid.screen_rect_to_grid(lo, hi))
        assert len(found) == len(set(found))
        assert set(found) == brute_force(grid, lo, hi, 12)

    # the square sweep is unfiltered, so it may include edge-touching cells
    square = SquareSizedGrid(1.0)
    lo, hi = Point(-1.0, -1.0), Point(3.0, 1.0)
    swept = set(square.screen_rect_to_grid(lo, hi))
    assert brute_force(square, lo, hi, 12) <= swept
    assert swept == {SquareCoord(x, y) for x in range(3) for y in range(2)}
