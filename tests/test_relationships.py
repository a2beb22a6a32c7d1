"""Tests for relationship classification shared by both distance tiers."""
import pytest

from geodist.calc.approximate import distance_to_sequence
from geodist.calc.relationships import (
    ContainedInHole,
    FullyContained,
    Intersecting,
    NoRelationship,
    bidirectional_distance,
    classify_line_string_polygon,
    classify_point_polygon,
    classify_polygon_polygon,
    line_string_line_string_distance,
    point_polygon_distance,
    polygon_polygon_distance,
    split_rings,
)
from geodist.errors import InvalidGeometryError
from geodist.model.geometry import Position

from conftest import HOLE, SQUARE, ring

ISLAND = ring((11.54, 49.34), (11.56, 49.34), (11.56, 49.36), (11.54, 49.36), (11.54, 49.34))
SECOND_HOLE = ring((11.505, 49.305), (11.515, 49.305), (11.515, 49.315), (11.505, 49.315), (11.505, 49.305))


# --- Point / polygon ---


def test_point_outside_polygon_has_no_relationship():
    assert classify_point_polygon(Position(11.4, 49.35), SQUARE, []) == NoRelationship()


def test_point_inside_polygon_is_contained():
    assert classify_point_polygon(Position(11.55, 49.35), SQUARE, []) == FullyContained()


def test_point_inside_hole_reports_that_hole():
    outcome = classify_point_polygon(Position(11.55, 49.35), SQUARE, [SECOND_HOLE, HOLE])
    assert isinstance(outcome, ContainedInHole)
    assert outcome.hole is HOLE


def test_point_inside_exterior_but_outside_holes():
    assert classify_point_polygon(Position(11.59, 49.39), SQUARE, [HOLE, SECOND_HOLE]) == FullyContained()


# --- Line string / polygon ---


def test_line_crossing_hole_boundary_intersects():
    line = ring((11.55, 49.35), (11.59, 49.36))
    assert classify_line_string_polygon(line, SQUARE, [HOLE]) == Intersecting()


def test_line_inside_hole_carries_itself_as_member():
    line = ring((11.54, 49.35), (11.56, 49.35))
    outcome = classify_line_string_polygon(line, SQUARE, [HOLE])
    assert isinstance(outcome, ContainedInHole)
    assert outcome.hole is HOLE
    assert outcome.members == (line,)


def test_line_outside_polygon():
    line = ring((11.0, 49.0), (11.1, 49.1))
    assert classify_line_string_polygon(line, SQUARE, [HOLE]) == NoRelationship()


# --- Polygon / polygon ---


def test_polygons_sharing_an_edge_intersect():
    neighbour = ring((11.6, 49.3), (11.7, 49.3), (11.7, 49.4), (11.6, 49.4), (11.6, 49.3))
    assert classify_polygon_polygon([SQUARE], [neighbour]) == Intersecting()


def test_smaller_polygon_contained_in_larger_either_order():
    inner = ring((11.51, 49.31), (11.515, 49.31), (11.515, 49.315), (11.51, 49.31))
    assert classify_polygon_polygon([inner], [SQUARE]) == FullyContained()
    assert classify_polygon_polygon([SQUARE], [inner]) == FullyContained()


def test_island_in_hole_members_are_island_rings():
    outcome = classify_polygon_polygon([SQUARE, HOLE], [ISLAND])
    assert isinstance(outcome, ContainedInHole)
    assert outcome.hole is HOLE
    assert outcome.members == (ISLAND,)


def test_disjoint_polygons_have_no_relationship():
    far = ring((13.0, 50.0), (13.1, 50.0), (13.1, 50.1), (13.0, 50.1), (13.0, 50.0))
    assert classify_polygon_polygon([SQUARE], [far]) == NoRelationship()


# --- Distances through injected leaf ---


def test_leaf_function_is_injected():
    calls = []

    def to_sequence(position, positions):
        calls.append(position)
        return 42.0

    assert point_polygon_distance(Position(11.4, 49.35), [SQUARE], to_sequence) == 42.0
    assert calls == [Position(11.4, 49.35)]


def test_point_polygon_distance_short_circuits_when_contained():
    def to_sequence(position, positions):
        raise AssertionError("leaf distance must not be evaluated")

    assert point_polygon_distance(Position(11.55, 49.35), [SQUARE], to_sequence) == 0.0


def test_island_distance_matches_gap_to_hole():
    d = polygon_polygon_distance([ISLAND], [SQUARE, HOLE], distance_to_sequence)
    # 0.02 deg of longitude between island and hole edges
    assert 1440 < d < 1460


def test_bidirectional_distance_takes_the_smaller_direction():
    a = ring((0.0, 0.0), (0.0, 1.0))
    b = ring((1.0, 0.5), (2.0, 0.5))
    d = bidirectional_distance(a, b, distance_to_sequence)
    assert d == distance_to_sequence(Position(1.0, 0.5), a)


# --- Invalid input ---


def test_polygon_without_rings_is_invalid():
    with pytest.raises(InvalidGeometryError, match="at least 1 ring"):
        split_rings([])


def test_empty_ring_is_invalid():
    with pytest.raises(InvalidGeometryError):
        split_rings([SQUARE, []])


def test_empty_line_string_is_invalid():
    with pytest.raises(InvalidGeometryError):
        line_string_line_string_distance([], SQUARE, distance_to_sequence)


def test_polygon_distance_rejects_ringless_polygon():
    with pytest.raises(InvalidGeometryError):
        polygon_polygon_distance([], [SQUARE], distance_to_sequence)
