"""
Approximate distance engine: haversine on a spherical earth plus an equirectangular
projection for closest-point-on-segment searches. Fast, accurate to a fraction of a
percent at city scale; degrades over very long distances and near the poles.
"""
import logging
import math
from collections.abc import Sequence

from geodist.calc import relationships
from geodist.calc.relationships import require_positions
from geodist.errors import UnsupportedGeometryError
from geodist.model.geometry import (
    Geometry,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    Position,
)

logger = logging.getLogger(__name__)

# Mean earth radius in meters (IUGG)
EARTH_RADIUS_M = 6371008.8


def _haversine(lat1_deg: float, lon1_deg: float, lat2_deg: float, lon2_deg: float) -> float:
    lat1 = math.radians(lat1_deg)
    lat2 = math.radians(lat2_deg)
    dlat = lat2 - lat1
    dlon = math.radians(lon2_deg) - math.radians(lon1_deg)
    factor = 1.0 - math.cos(dlat) + math.cos(lat1) * math.cos(lat2) * (1.0 - math.cos(dlon))
    return 2.0 * EARTH_RADIUS_M * math.asin(math.sqrt(factor / 2.0))


def haversine_distance(p1: Position, p2: Position) -> float:
    """Great-circle distance in meters between two positions. Arguments in degrees."""
    return _haversine(p1.latitude, p1.longitude, p2.latitude, p2.longitude)


def segment_projection_factor(p: Position, start: Position, end: Position) -> float:
    """
    Where the perpendicular from p meets the line through start -> end, as a fraction of the segment.
    0 is start, 1 is end; values outside [0, 1] fall beyond the segment. Longitude deltas are scaled
    by cos of the mean latitude of start and p. A zero-length segment returns -1 (snap to start).
    """
    scale = math.cos(math.radians((start.latitude + p.latitude) / 2.0))
    x = (p.longitude - start.longitude) * scale
    y = p.latitude - start.latitude
    dx = (end.longitude - start.longitude) * scale
    dy = end.latitude - start.latitude

    length_sq = dx * dx + dy * dy
    if length_sq == 0.0:
        return -1.0
    return (x * dx + y * dy) / length_sq


def distance_to_segment(p: Position, start: Position, end: Position) -> float:
    factor = segment_projection_factor(p, start, end)
    if factor < 0:
        lat, lon = start.latitude, start.longitude
    elif factor > 1:
        lat, lon = end.latitude, end.longitude
    else:
        lat = start.latitude + factor * (end.latitude - start.latitude)
        lon = start.longitude + factor * (end.longitude - start.longitude)
    return _haversine(p.latitude, p.longitude, lat, lon)


def distance_to_sequence(p: Position, positions: Sequence[Position]) -> float:
    """Minimum distance from p to an open coordinate sequence (line string or ring)."""
    require_positions(positions)
    if len(positions) == 1:
        return haversine_distance(p, positions[0])
    return min(distance_to_segment(p, positions[i], positions[i + 1]) for i in range(len(positions) - 1))


# --- Geometry pairs ---


def point_to_point(a: Point, b: Point) -> float:
    return haversine_distance(a.coordinates, b.coordinates)


def point_to_line_string(point: Point, line: LineString) -> float:
    return distance_to_sequence(point.coordinates, line.coordinates)


def point_to_polygon(point: Point, polygon: Polygon) -> float:
    return relationships.point_polygon_distance(point.coordinates, polygon.coordinates, distance_to_sequence)


def point_to_multi_point(point: Point, multi_point: MultiPoint) -> float:
    require_positions(multi_point.coordinates, "MultiPoint")
    return min(haversine_distance(point.coordinates, p) for p in multi_point.coordinates)


def point_to_multi_line_string(point: Point, multi_line: MultiLineString) -> float:
    require_positions(multi_line.coordinates, "MultiLineString")
    return min(distance_to_sequence(point.coordinates, line) for line in multi_line.coordinates)


def point_to_multi_polygon(point: Point, multi_polygon: MultiPolygon) -> float:
    require_positions(multi_polygon.coordinates, "MultiPolygon")
    return min(
        relationships.point_polygon_distance(point.coordinates, rings, distance_to_sequence)
        for rings in multi_polygon.coordinates
    )


def line_string_to_line_string(a: LineString, b: LineString) -> float:
    return relationships.line_string_line_string_distance(a.coordinates, b.coordinates, distance_to_sequence)


def line_string_to_polygon(line: LineString, polygon: Polygon) -> float:
    return relationships.line_string_polygon_distance(line.coordinates, polygon.coordinates, distance_to_sequence)


def polygon_to_polygon(a: Polygon, b: Polygon) -> float:
    return relationships.polygon_polygon_distance(a.coordinates, b.coordinates, distance_to_sequence)


def distance(a: Geometry, b: Geometry) -> float:
    """Approximate distance in meters between two geometries, in either argument order."""
    logger.debug("telemetry distance tier=approximate a=%s b=%s", type(a).__name__, type(b).__name__)
    match a, b:
        case Point(), Point():
            return point_to_point(a, b)
        case Point(), LineString():
            return point_to_line_string(a, b)
        case LineString(), Point():
            return point_to_line_string(b, a)
        case Point(), Polygon():
            return point_to_polygon(a, b)
        case Polygon(), Point():
            return point_to_polygon(b, a)
        case Point(), MultiPoint():
            return point_to_multi_point(a, b)
        case MultiPoint(), Point():
            return point_to_multi_point(b, a)
        case Point(), MultiLineString():
            return point_to_multi_line_string(a, b)
        case MultiLineString(), Point():
            return point_to_multi_line_string(b, a)
        case Point(), MultiPolygon():
            return point_to_multi_polygon(a, b)
        case MultiPolygon(), Point():
            return point_to_multi_polygon(b, a)
        case LineString(), LineString():
            return line_string_to_line_string(a, b)
        case LineString(), Polygon():
            return line_string_to_polygon(a, b)
        case Polygon(), LineString():
            return line_string_to_polygon(b, a)
        case Polygon(), Polygon():
            return polygon_to_polygon(a, b)
    raise UnsupportedGeometryError(a, b, "Approximate")
