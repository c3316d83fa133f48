import math

import pytest

from gridgeom.direction import (
    ALL_DIRECTIONS, CARDINAL, ORDINAL, Direction, DirectionSet, DirectionType,
)


def test_opposite_and_rotation_are_inverses():
    for d in Direction:
        assert ~~d == d
        assert d.clockwise().counter_clockwise() == d
        assert d.counter_clockwise().clockwise() == d
        assert d.opposite().angle() == pytest.approx((d.angle() + math.pi) % (2 * math.pi))


def test_angles_run_counter_clockwise_from_east():
    assert Direction.EAST.angle() == 0.0
    assert Direction.NORTH.angle() == pytest.approx(math.pi / 2)
    assert Direction.SOUTH_EAST.angle() == pytest.approx(7 * math.pi / 4)
    assert Direction.EAST.counter_clockwise() == Direction.NORTH_EAST
    assert Direction.EAST.clockwise() == Direction.SOUTH_EAST


def test_cardinal_and_ordinal_partition_all():
    assert ALL_DIRECTIONS.difference(CARDINAL) == ORDINAL
    assert ALL_DIRECTIONS - ORDINAL == CARDINAL
    assert CARDINAL.intersection(ORDINAL).is_empty()
    assert CARDINAL | ORDINAL == ALL_DIRECTIONS
    assert len(CARDINAL) == 4
    assert Direction.NORTH.is_cardinal()
    assert Direction.NORTH_WEST.is_ordinal()


def test_direction_set_membership_and_order():
    s = DirectionSet.from_iter([Direction.SOUTH, Direction.EAST, Direction.NORTH_EAST])
    assert Direction.EAST in s
    assert Direction.WEST not in s
    assert list(s) == [Direction.EAST, Direction.NORTH_EAST, Direction.SOUTH]
    assert str(DirectionSet.from_iter([Direction.NORTH_EAST, Direction.EAST])) == "{East, NorthEast}"
    assert s.subset(ALL_DIRECTIONS)
    assert ALL_DIRECTIONS.superset(s)
    assert DirectionSet.empty().is_empty()
    # hashable, so usable as dict keys
    assert {s: 1}[DirectionSet(s.bits)] == 1


def test_parse_short_and_long_names():
    assert Direction.parse("NE") == Direction.NORTH_EAST
    assert Direction.parse("southwest") == Direction.SOUTH_WEST
    assert Direction.parse("West") == Direction.WEST
    assert Direction.NORTH_WEST.short_name == "NW"
    assert str(Direction.SOUTH_EAST) == "SouthEast"
    with pytest.raises(ValueError):
        Direction.parse("up")


def test_from_index_rejects_out_of_range():
    assert Direction.from_index(2) == Direction.NORTH
    with pytest.raises(ValueError):
        Direction.from_index(8)
    with pytest.raises(ValueError):
        DirectionSet(256)


def test_direction_type_flips():
    assert ~DirectionType.FACE == DirectionType.VERTEX
    assert ~~DirectionType.VERTEX == DirectionType.VERTEX
