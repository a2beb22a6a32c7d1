"""
Precise distance engine: geodesic distances on the WGS84 ellipsoid.

Closest point on a segment A-B to a query point P is found with two azimuth comparisons and
one direct-problem evaluation instead of an iterative cross-track solver:
  - if the azimuths A->P and A->B differ by more than 90 degrees, A is closest
  - else if B->P and B->A differ by more than 90 degrees, B is closest
  - else walk |AP| * cos(difference at A) from A towards B and measure from P to that point
Containment tests stay planar (see predicates).
"""
import logging
import math
from collections.abc import Sequence
from functools import partial

from geodist.calc import relationships
from geodist.calc.geodesy import WGS84, GeodesySolver
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

RIGHT_ANGLE_DEG = 90.0


def geodesic_distance(p1: Position, p2: Position, solver: GeodesySolver = WGS84) -> float:
    """Ellipsoidal distance in meters between two positions."""
    return solver.inverse(p1.latitude, p1.longitude, p2.latitude, p2.longitude).distance


def _azimuth_difference(azimuth1: float, azimuth2: float) -> float:
    """Absolute angle between two azimuths, normalized to [0, 180]."""
    diff = abs(azimuth1 - azimuth2)
    if diff > 180.0:
        diff = 360.0 - diff
    return diff


def distance_to_segment(p: Position, start: Position, end: Position, solver: GeodesySolver = WGS84) -> float:
    if start == end:
        return geodesic_distance(p, start, solver)

    start_to_p = solver.inverse(start.latitude, start.longitude, p.latitude, p.longitude)
    start_to_end = solver.inverse(start.latitude, start.longitude, end.latitude, end.longitude)
    diff_at_start = _azimuth_difference(start_to_p.initial_azimuth, start_to_end.initial_azimuth)
    if diff_at_start > RIGHT_ANGLE_DEG:
        return start_to_p.distance

    end_to_p = solver.inverse(end.latitude, end.longitude, p.latitude, p.longitude)
    end_to_start = solver.inverse(end.latitude, end.longitude, start.latitude, start.longitude)
    diff_at_end = _azimuth_difference(end_to_p.initial_azimuth, end_to_start.initial_azimuth)
    if diff_at_end > RIGHT_ANGLE_DEG:
        return end_to_p.distance

    along_track = start_to_p.distance * math.cos(math.radians(diff_at_start))
    projected = solver.direct(start.latitude, start.longitude, start_to_end.initial_azimuth, along_track)
    return solver.inverse(p.latitude, p.longitude, projected.lat2, projected.lon2).distance


def distance_to_sequence(p: Position, positions: Sequence[Position], solver: GeodesySolver = WGS84) -> float:
    """Minimum distance from p to an open coordinate sequence (line string or ring)."""
    require_positions(positions)
    if len(positions) == 1:
        return geodesic_distance(p, positions[0], solver)
    return min(distance_to_segment(p, positions[i], positions[i + 1], solver) for i in range(len(positions) - 1))


def _to_sequence(solver: GeodesySolver) -> relationships.SequenceDistance:
    return partial(distance_to_sequence, solver=solver)


# --- Geometry pairs ---


def point_to_point(a: Point, b: Point, solver: GeodesySolver = WGS84) -> float:
    return geodesic_distance(a.coordinates, b.coordinates, solver)


def point_to_line_string(point: Point, line: LineString, solver: GeodesySolver = WGS84) -> float:
    return distance_to_sequence(point.coordinates, line.coordinates, solver)


def point_to_polygon(point: Point, polygon: Polygon, solver: GeodesySolver = WGS84) -> float:
    return relationships.point_polygon_distance(point.coordinates, polygon.coordinates, _to_sequence(solver))


def point_to_multi_point(point: Point, multi_point: MultiPoint, solver: GeodesySolver = WGS84) -> float:
    require_positions(multi_point.coordinates, "MultiPoint")
    return min(geodesic_distance(point.coordinates, p, solver) for p in multi_point.coordinates)


def point_to_multi_line_string(point: Point, multi_line: MultiLineString, solver: GeodesySolver = WGS84) -> float:
    require_positions(multi_line.coordinates, "MultiLineString")
    return min(distance_to_sequence(point.coordinates, line, solver) for line in multi_line.coordinates)


def point_to_multi_polygon(point: Point, multi_polygon: MultiPolygon, solver: GeodesySolver = WGS84) -> float:
    require_positions(multi_polygon.coordinates, "MultiPolygon")
    to_sequence = _to_sequence(solver)
    return min(
        relationships.point_polygon_distance(point.coordinates, rings, to_sequence)
        for rings in multi_polygon.coordinates
    )


def line_string_to_line_string(a: LineString, b: LineString, solver: GeodesySolver = WGS84) -> float:
    return relationships.line_string_line_string_distance(a.coordinates, b.coordinates, _to_sequence(solver))


def line_string_to_polygon(line: LineString, polygon: Polygon, solver: GeodesySolver = WGS84) -> float:
    return relationships.line_string_polygon_distance(line.coordinates, polygon.coordinates, _to_sequence(solver))


def polygon_to_polygon(a: Polygon, b: Polygon, solver: GeodesySolver = WGS84) -> float:
    return relationships.polygon_polygon_distance(a.coordinates, b.coordinates, _to_sequence(solver))


def distance(a: Geometry, b: Geometry, solver: GeodesySolver = WGS84) -> float:
    """Ellipsoidal distance in meters between two geometries, in either argument order."""
    logger.debug("telemetry distance tier=precise a=%s b=%s", type(a).__name__, type(b).__name__)
    match a, b:
        case Point(), Point():
            return point_to_point(a, b, solver)
        case Point(), LineString():
            return point_to_line_string(a, b, solver)
        case LineString(), Point():
            return point_to_line_string(b, a, solver)
        case Point(), Polygon():
            return point_to_polygon(a, b, solver)
        case Polygon(), Point():
            return point_to_polygon(b, a, solver)
        case Point(), MultiPoint():
            return point_to_multi_point(a, b, solver)
        case MultiPoint(), Point():
            return point_to_multi_point(b, a, solver)
        case Point(), MultiLineString():
            return point_to_multi_line_string(a, b, solver)
        case MultiLineString(), Point():
            return point_to_multi_line_string(b, a, solver)
        case Point(), MultiPolygon():
            return point_to_multi_polygon(a, b, solver)
        case MultiPolygon(), Point():
            return point_to_multi_polygon(b, a, solver)
        case LineString(), LineString():
            return line_string_to_line_string(a, b, solver)
        case LineString(), Polygon():
            return line_string_to_polygon(a, b, solver)
        case Polygon(), LineString():
            return line_string_to_polygon(b, a, solver)
        case Polygon(), Polygon():
            return polygon_to_polygon(a, b, solver)
    raise UnsupportedGeometryError(a, b, "Precise")
