"""
WKT (Well-Known Text) and EWKT reading and writing for the six geometry types.

EWKT prefixes the text with "SRID=<code>;". 4326 maps to WGS_84 and 3857 to WEB_MERCATOR;
plain WKT is read as WGS_84. Positions are "lon lat" or "lon lat alt"; a "Z" tag after the
type name is accepted.
"""
import re

from pydantic import ValidationError

from geodist.errors import WktError
from geodist.model.geometry import (
    CoordinateReferenceSystem,
    Geometry,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
    Position,
)

WGS_84_SRID = 4326
WEB_MERCATOR_SRID = 3857

_CRS_BY_SRID = {
    WGS_84_SRID: CoordinateReferenceSystem.WGS_84,
    WEB_MERCATOR_SRID: CoordinateReferenceSystem.WEB_MERCATOR,
}
_SRID_BY_CRS = {crs: srid for srid, crs in _CRS_BY_SRID.items()}

_SRID_PATTERN = re.compile(r"^SRID=(\d+);(.*)$", re.IGNORECASE | re.DOTALL)
_TYPE_PATTERN = re.compile(r"^([A-Z]+)\s*(?:Z\s*)?(.*)$", re.IGNORECASE | re.DOTALL)
_EMPTY = "EMPTY"


# --- Reading ---


def _split_top_level(text: str) -> list[str]:
    """Split on commas that are not nested inside parentheses."""
    parts = []
    depth = 0
    start = 0
    for i, c in enumerate(text):
        if c == "(":
            depth += 1
        elif c == ")":
            depth -= 1
            if depth < 0:
                raise WktError(f"Unbalanced parentheses in: {text}")
        elif c == "," and depth == 0:
            parts.append(text[start:i].strip())
            start = i + 1
    if depth != 0:
        raise WktError(f"Unbalanced parentheses in: {text}")
    parts.append(text[start:].strip())
    return parts


def _unwrap(text: str, required: bool = True) -> str:
    text = text.strip()
    if text.startswith("(") and text.endswith(")"):
        return text[1:-1].strip()
    if required:
        raise WktError(f"Expected parenthesized coordinates but got: {text!r}")
    return text


def _position(text: str) -> Position:
    parts = text.split()
    if len(parts) not in (2, 3):
        raise WktError(f"Invalid position: {text!r}")
    try:
        values = [float(part) for part in parts]
    except ValueError as e:
        raise WktError(f"Invalid coordinate value in: {text!r}") from e
    return Position(*values)


def _positions(text: str) -> list[Position]:
    return [_position(part) for part in _split_top_level(text)]


def _rings(text: str) -> list[list[Position]]:
    return [_positions(_unwrap(ring)) for ring in _split_top_level(text)]


def _point(body: str, crs: CoordinateReferenceSystem) -> Point:
    if body == _EMPTY:
        raise WktError("POINT EMPTY has no position")
    return Point(coordinates=_position(_unwrap(body)), coordinate_reference_system=crs)


def _line_string(body: str, crs: CoordinateReferenceSystem) -> LineString:
    positions = [] if body == _EMPTY else _positions(_unwrap(body))
    return LineString(coordinates=positions, coordinate_reference_system=crs)


def _polygon(body: str, crs: CoordinateReferenceSystem) -> Polygon:
    rings = [] if body == _EMPTY else _rings(_unwrap(body))
    return Polygon(coordinates=rings, coordinate_reference_system=crs)


def _multi_point(body: str, crs: CoordinateReferenceSystem) -> MultiPoint:
    if body == _EMPTY:
        positions = []
    else:
        # both "MULTIPOINT ((1 2), (3 4))" and "MULTIPOINT (1 2, 3 4)" occur in the wild
        positions = [_position(_unwrap(p, required=False)) for p in _split_top_level(_unwrap(body))]
    return MultiPoint(coordinates=positions, coordinate_reference_system=crs)


def _multi_line_string(body: str, crs: CoordinateReferenceSystem) -> MultiLineString:
    lines = [] if body == _EMPTY else _rings(_unwrap(body))
    return MultiLineString(coordinates=lines, coordinate_reference_system=crs)


def _multi_polygon(body: str, crs: CoordinateReferenceSystem) -> MultiPolygon:
    if body == _EMPTY:
        polygons = []
    else:
        polygons = [_rings(_unwrap(polygon)) for polygon in _split_top_level(_unwrap(body))]
    return MultiPolygon(coordinates=polygons, coordinate_reference_system=crs)


_READERS = {
    "POINT": _point,
    "LINESTRING": _line_string,
    "POLYGON": _polygon,
    "MULTIPOINT": _multi_point,
    "MULTILINESTRING": _multi_line_string,
    "MULTIPOLYGON": _multi_polygon,
}


def from_wkt(text: str) -> Geometry:
    """
    Parse WKT or EWKT into a geometry.

    Raises WktError for malformed text, an unknown SRID, an unsupported type (including
    GEOMETRYCOLLECTION), or coordinates the geometry model rejects.
    """
    if not text or not text.strip():
        raise WktError("WKT string cannot be empty")

    body = text.strip()
    crs = CoordinateReferenceSystem.WGS_84
    srid_match = _SRID_PATTERN.match(body)
    if srid_match is not None:
        srid = int(srid_match.group(1))
        if srid not in _CRS_BY_SRID:
            raise WktError(f"Unsupported SRID: {srid}")
        crs = _CRS_BY_SRID[srid]
        body = srid_match.group(2).strip()

    type_match = _TYPE_PATTERN.match(body)
    if type_match is None:
        raise WktError(f"Invalid WKT: {body!r}")
    kind = type_match.group(1).upper()
    coordinates = type_match.group(2).strip()
    if coordinates.upper() == _EMPTY:
        coordinates = _EMPTY

    reader = _READERS.get(kind)
    if reader is None:
        raise WktError(f"Unsupported geometry type: {kind}")
    try:
        return reader(coordinates, crs)
    except ValidationError as e:
        raise WktError(f"Invalid {kind}: {e.errors()[0]['msg']}") from e


# --- Writing ---


def _format_position(position: Position) -> str:
    if position.altitude:
        return f"{position.longitude!r} {position.latitude!r} {position.altitude!r}"
    return f"{position.longitude!r} {position.latitude!r}"


def _format_sequence(positions) -> str:
    return "(" + ", ".join(_format_position(p) for p in positions) + ")"


def _format_rings(rings) -> str:
    return "(" + ", ".join(_format_sequence(ring) for ring in rings) + ")"


def _require_parts(geometry: Geometry) -> None:
    if not geometry.coordinates:
        raise WktError(f"Cannot serialize empty {type(geometry).__name__}")


def to_wkt(geometry: Geometry) -> str:
    match geometry:
        case Point():
            return f"POINT ({_format_position(geometry.coordinates)})"
        case LineString():
            return f"LINESTRING {_format_sequence(geometry.coordinates)}"
        case Polygon():
            return f"POLYGON {_format_rings(geometry.coordinates)}"
        case MultiPoint():
            _require_parts(geometry)
            return "MULTIPOINT (" + ", ".join(f"({_format_position(p)})" for p in geometry.coordinates) + ")"
        case MultiLineString():
            _require_parts(geometry)
            return f"MULTILINESTRING {_format_rings(geometry.coordinates)}"
        case MultiPolygon():
            _require_parts(geometry)
            return "MULTIPOLYGON (" + ", ".join(_format_rings(polygon) for polygon in geometry.coordinates) + ")"
    raise WktError(f"Unsupported geometry type: {type(geometry).__name__}")


def to_ewkt(geometry: Geometry) -> str:
    """WKT prefixed with the SRID of the geometry's coordinate reference system."""
    return f"SRID={_SRID_BY_CRS[geometry.coordinate_reference_system]};{to_wkt(geometry)}"
