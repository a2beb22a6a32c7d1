"""Tests for geometry value types and their validation."""
import math

import pytest
from pydantic import ValidationError

from geodist.model.geometry import (
    CoordinateReferenceSystem,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    Position,
    count_positions,
)

from conftest import HOLE, SQUARE, ring


def test_position_positional_and_keyword_construction():
    assert Position(11.5, 49.3) == Position(longitude=11.5, latitude=49.3)
    assert Position(11.5, 49.3).altitude == 0.0
    assert Position(11.5, 49.3, 120.0).altitude == 120.0


def test_position_is_immutable():
    p = Position(11.5, 49.3)
    with pytest.raises(ValidationError):
        p.longitude = 12.0


@pytest.mark.parametrize(
    "lon, lat",
    [(180.5, 0.0), (-181.0, 0.0), (0.0, 90.1), (0.0, -91.0), (math.nan, 0.0), (0.0, math.inf)],
)
def test_position_rejects_out_of_range(lon, lat):
    with pytest.raises(ValidationError):
        Position(lon, lat)


def test_position_rejects_non_finite_altitude():
    with pytest.raises(ValidationError, match="altitude"):
        Position(0.0, 0.0, math.nan)


def test_position_accepts_bounds():
    Position(180.0, 90.0)
    Position(-180.0, -90.0)


def test_point_accessors():
    p = Point.of(11.5, 49.3, 10.0)
    assert (p.longitude, p.latitude, p.altitude) == (11.5, 49.3, 10.0)
    assert p.coordinate_reference_system is CoordinateReferenceSystem.WGS_84


def test_crs_is_carried_but_not_reprojected():
    p = Point.of(11.5, 49.3, coordinate_reference_system=CoordinateReferenceSystem.WEB_MERCATOR)
    assert p.coordinate_reference_system is CoordinateReferenceSystem.WEB_MERCATOR
    assert p.longitude == 11.5


def test_line_string_needs_two_positions():
    with pytest.raises(ValidationError, match="at least 2 positions"):
        LineString(coordinates=ring((11.5, 49.3)))


def test_polygon_needs_a_ring():
    with pytest.raises(ValidationError, match="at least 1 ring"):
        Polygon(coordinates=[])


def test_polygon_ring_needs_four_positions():
    with pytest.raises(ValidationError, match="at least 4 positions"):
        Polygon(coordinates=[ring((0, 0), (1, 0), (0, 0))])


def test_polygon_ring_must_be_closed():
    with pytest.raises(ValidationError, match="closed"):
        Polygon(coordinates=[ring((0, 0), (1, 0), (1, 1), (0, 1))])


def test_open_hole_names_the_interior_ring():
    open_hole = HOLE[:-1] + [Position(11.53, 49.33)]
    with pytest.raises(ValidationError, match="interior ring at index 1"):
        Polygon(coordinates=[SQUARE, open_hole])


def test_polygon_rings():
    polygon = Polygon(coordinates=[SQUARE, HOLE])
    assert polygon.exterior_ring == tuple(SQUARE)
    assert polygon.interior_rings == (tuple(HOLE),)


def test_multi_line_string_validates_each_line():
    with pytest.raises(ValidationError, match="index 1"):
        MultiLineString(coordinates=[ring((0, 0), (1, 1)), ring((2, 2))])


def test_multi_polygon_validates_each_polygon():
    with pytest.raises(ValidationError, match="Polygon at index 0"):
        MultiPolygon(coordinates=[[ring((0, 0), (1, 0), (1, 1), (0, 1))]])


def test_multi_geometries_expose_parts():
    multi_line = MultiLineString(coordinates=[ring((0, 0), (1, 1)), ring((2, 2), (3, 3))])
    assert [len(line.coordinates) for line in multi_line.line_strings] == [2, 2]
    multi_polygon = MultiPolygon(coordinates=[[SQUARE, HOLE]])
    assert multi_polygon.polygons[0].interior_rings == (tuple(HOLE),)


def test_count_positions():
    assert count_positions(Point.of(0, 0)) == 1
    assert count_positions(LineString(coordinates=ring((0, 0), (1, 1), (2, 2)))) == 3
    assert count_positions(MultiPoint(coordinates=ring((0, 0), (1, 1)))) == 2
    assert count_positions(Polygon(coordinates=[SQUARE, HOLE])) == 10
    assert count_positions(MultiPolygon(coordinates=[[SQUARE], [SQUARE, HOLE]])) == 15


def test_count_positions_rejects_non_geometry():
    with pytest.raises(TypeError):
        count_positions("POINT (0 0)")
