"""Tests for GeoJSON parsing and serialization."""
import pytest
from pydantic import ValidationError

from geodist.geojson.models import PointGeoJSON, PolygonGeoJSON, from_geometry, parse_geometry
from geodist.model.geometry import LineString, MultiLineString, MultiPoint, MultiPolygon, Point, Polygon

from conftest import HOLE, SQUARE

SQUARE_JSON = [[11.5, 49.3], [11.6, 49.3], [11.6, 49.4], [11.5, 49.4], [11.5, 49.3]]


def test_parse_point():
    point = parse_geometry({"type": "Point", "coordinates": [11.4694, 49.2965]})
    assert point == Point.of(11.4694, 49.2965)


def test_parse_point_with_altitude():
    point = parse_geometry({"type": "Point", "coordinates": [11.4694, 49.2965, 350.0]})
    assert point.altitude == 350.0


def test_parse_polygon_with_hole():
    polygon = parse_geometry(
        {"type": "Polygon", "coordinates": [SQUARE_JSON, [[p.longitude, p.latitude] for p in HOLE]]}
    )
    assert isinstance(polygon, Polygon)
    assert polygon.interior_rings == (tuple(HOLE),)


@pytest.mark.parametrize(
    "data, cls",
    [
        ({"type": "LineString", "coordinates": [[0, 0], [1, 1]]}, LineString),
        ({"type": "MultiPoint", "coordinates": [[0, 0], [1, 1]]}, MultiPoint),
        ({"type": "MultiLineString", "coordinates": [[[0, 0], [1, 1]]]}, MultiLineString),
        ({"type": "MultiPolygon", "coordinates": [[SQUARE_JSON]]}, MultiPolygon),
    ],
)
def test_parse_each_type(data, cls):
    assert isinstance(parse_geometry(data), cls)


def test_unknown_type_is_rejected():
    with pytest.raises(ValidationError):
        parse_geometry({"type": "GeometryCollection", "geometries": []})


def test_short_position_is_rejected():
    with pytest.raises(ValidationError):
        parse_geometry({"type": "Point", "coordinates": [11.5]})


def test_out_of_range_position_is_rejected():
    with pytest.raises(ValueError):
        parse_geometry({"type": "Point", "coordinates": [200.0, 0.0]})


def test_unclosed_ring_is_rejected():
    with pytest.raises(ValueError, match="closed"):
        parse_geometry({"type": "Polygon", "coordinates": [SQUARE_JSON[:-1] + [[11.5, 49.35]]]})


def test_from_geometry_point_drops_zero_altitude():
    geojson = from_geometry(Point.of(11.5, 49.3))
    assert isinstance(geojson, PointGeoJSON)
    assert geojson.model_dump() == {"type": "Point", "coordinates": [11.5, 49.3]}


def test_from_geometry_keeps_altitude():
    assert from_geometry(Point.of(11.5, 49.3, 12.5)).coordinates == [11.5, 49.3, 12.5]


def test_from_geometry_polygon_parses_back():
    polygon = Polygon(coordinates=[SQUARE, HOLE])
    geojson = from_geometry(polygon)
    assert isinstance(geojson, PolygonGeoJSON)
    assert geojson.coordinates[0] == SQUARE_JSON
    assert parse_geometry(geojson.model_dump()) == polygon
