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
    count_positions,
)

__all__ = [
    "CoordinateReferenceSystem",
    "Geometry",
    "LineString",
    "MultiLineString",
    "MultiPoint",
    "MultiPolygon",
    "Point",
    "Polygon",
    "Position",
    "count_positions",
]
