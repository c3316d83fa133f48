import math

import numpy as np
import pytest

from gridgeom.direction import Direction, DirectionType
from gridgeom.errors import KindMismatchError
from gridgeom.hexgrid import HexAxes, HexCoord
from gridgeom.square import SquareAxes

FACE = DirectionType.FACE
VERTEX = DirectionType.VERTEX


def sample_coords(seed=5, n=60, span=20):
    rng = np.random.RandomState(seed)
    return [HexCoord(int(q), int(r)) for q, r in rng.randint(-span, span + 1, size=(n, 2))]


def test_cubical_form_sums_to_zero():
    for c in sample_coords():
        cube = c.to_cubical()
        assert sum(cube) == 0
        assert HexCoord.from_cubical(cube) == c
    with pytest.raises(ValueError):
        HexCoord.from_cubical((1, 1, 1))


def test_distance_matches_cube_distance():
    for a, b in zip(sample_coords(), sample_coords(seed=6)):
        ca, cb = a.to_cubical(), b.to_cubical()
        assert a.distance(b) == max(abs(x - y) for x, y in zip(ca, cb))


def test_moves_are_undone_by_the_opposite_direction():
    for c in sample_coords():
        for dir_type in (FACE, VERTEX):
            for d in Direction:
                moved = c.move_in_direction(dir_type, d)
                if c.allowed_direction(dir_type, d):
                    assert moved.move_in_direction(dir_type, d.opposite()) == c
                    assert c.distance(moved) == (1 if dir_type is FACE else 2)
                else:
                    assert moved is None
    assert HexCoord(0, 0).move_in_direction(FACE, Direction.EAST) is None
    assert HexCoord(0, 0).move_in_direction(VERTEX, Direction.NORTH) is None


def test_module_laws():
    coords = sample_coords(seed=9, n=20)
    zero = HexCoord.origin()
    for a, b, c in zip(coords, coords[1:], coords[2:]):
        assert a + b == b + a
        assert (a + b) + c == a + (b + c)
        assert a + (-a) == zero
        assert a * 0 == zero
        assert -2 * (a + b) == -2 * a + -2 * b
        assert a.translate(b) == a + b
    assert HexCoord(0, 0).offset_on_axis(HexAxes.R, True) == HexCoord(1, 0)


def test_rotation_and_reflection():
    for c in sample_coords():
        assert c.rotate_clockwise().rotate_counterclockwise() == c
        assert c.rotate(6) == c
        assert c.rotate(-2) == c.rotate(4)
        for axis in (HexAxes.Q, HexAxes.R, HexAxes.S):
            assert c.reflect(axis).reflect(axis) == c
        # reflecting across all three axes in turn is again a reflection
        composed = c
        for _ in range(2):
            composed = composed.reflect(HexAxes.Q).reflect(HexAxes.R).reflect(HexAxes.S)
        assert composed == c
    # rotation walks the face neighbours in turn
    assert HexCoord(1, 0).rotate_clockwise() == HexCoord(0, 1)
    assert HexCoord(0, 1).rotate_counterclockwise() == HexCoord(1, 0)
    with pytest.raises(KindMismatchError):
        HexCoord(1, 0).reflect(SquareAxes.X)


def test_colors_differ_from_face_neighbours():
    for c in sample_coords() + list(HexCoord.range(3)):
        for d in c.allowed_directions(FACE):
            assert c.move_in_direction(FACE, d).to_color() != c.to_color()


def test_array_offset_roundtrip():
    for c in sample_coords():
        assert HexCoord.array_offset_to_grid(c.grid_to_array_offset()) == c
    assert HexCoord(1, 0).grid_to_array_offset() == (1, 1)
    assert HexCoord(-1, 0).grid_to_array_offset() == (-1, 0)


def test_angles():
    c = HexCoord(2, -5)
    assert c.direction_angle(FACE, Direction.NORTH_EAST) == pytest.approx(math.pi / 6)
    assert c.direction_angle(FACE, Direction.NORTH) == pytest.approx(math.pi / 2)
    assert c.direction_angle(FACE, Direction.EAST) is None
    assert c.direction_angle(VERTEX, Direction.WEST) == pytest.approx(math.pi)
    assert c.direction_angle(VERTEX, Direction.SOUTH) is None
    for dir_type in (FACE, VERTEX):
        for d in c.allowed_directions(dir_type):
            assert c.angle_to_direction(dir_type, c.direction_angle(dir_type, d)) == d
    assert c.angle_to_direction(VERTEX, -0.1) == Direction.EAST


def test_iterators():
    origin = HexCoord.origin()
    assert list(origin.axis_iterator(HexAxes.Q, True, 3)) == [
        HexCoord(0, 0), HexCoord(0, 1), HexCoord(0, 2),
    ]
    assert list(origin.axis_iterator(HexAxes.S, False, 2)) == [HexCoord(0, 0), HexCoord(-1, 1)]
    assert list(origin.direction_iterator(VERTEX, Direction.EAST, 3)) == [
        HexCoord(0, 0), HexCoord(2, -1), HexCoord(4, -2),
    ]
    assert list(origin.direction_iterator(FACE, Direction.WEST, 3)) == []


def test_path_iterator():
    a = HexCoord(-3, 1)
    assert list(a.path_iterator(a)) == [a]
    coords = sample_coords(seed=13, n=30, span=10)
    for start, end in zip(coords, coords[1:]):
        path = list(start.path_iterator(end))
        assert len(path) == start.distance(end) + 1
        assert path[0] == start
        assert path[-1] == end
        for p, q in zip(path, path[1:]):
            assert p.distance(q) == 1


def test_ring_and_range():
    assert len(HexCoord.ring(1)) == 6
    assert HexCoord.ring(1) == HexCoord.range(1) - HexCoord.range(0)
    assert list(HexCoord.ring(0)) == [HexCoord.origin()]
    origin = HexCoord.origin()
    for r in range(0, 5):
        ring = HexCoord.ring(r + 1)
        filled = HexCoord.range(r)
        assert len(ring) == 6 * (r + 1)
        assert len(filled) == 3 * r * (r + 1) + 1
        assert ring.is_disjoint(filled)
        assert all(origin.distance(c) == r + 1 for c in ring)
        assert all(origin.distance(c) <= r for c in filled)
