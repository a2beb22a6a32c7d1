"""
Pydantic models for GeoJSON geometry objects (RFC 7946) and conversion to/from geodist geometries.
Positions are [longitude, latitude] or [longitude, latitude, altitude].
"""
from typing import Annotated, Any, Literal

from pydantic import BaseModel, Field, TypeAdapter

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

PositionArray = Annotated[list[float], Field(min_length=2, max_length=3)]


def _position(values: list[float]) -> Position:
    return Position(*values)


def _positions(values: list[list[float]]) -> list[Position]:
    return [_position(v) for v in values]


def _array(position: Position) -> list[float]:
    if position.altitude:
        return [position.longitude, position.latitude, position.altitude]
    return [position.longitude, position.latitude]


def _arrays(positions) -> list[list[float]]:
    return [_array(p) for p in positions]


class PointGeoJSON(BaseModel):
    type: Literal["Point"]
    coordinates: PositionArray

    def to_geometry(self) -> Point:
        return Point(coordinates=_position(self.coordinates))


class LineStringGeoJSON(BaseModel):
    type: Literal["LineString"]
    coordinates: list[PositionArray]

    def to_geometry(self) -> LineString:
        return LineString(coordinates=_positions(self.coordinates))


class PolygonGeoJSON(BaseModel):
    type: Literal["Polygon"]
    coordinates: list[list[PositionArray]]

    def to_geometry(self) -> Polygon:
        return Polygon(coordinates=[_positions(ring) for ring in self.coordinates])


class MultiPointGeoJSON(BaseModel):
    type: Literal["MultiPoint"]
    coordinates: list[PositionArray]

    def to_geometry(self) -> MultiPoint:
        return MultiPoint(coordinates=_positions(self.coordinates))


class MultiLineStringGeoJSON(BaseModel):
    type: Literal["MultiLineString"]
    coordinates: list[list[PositionArray]]

    def to_geometry(self) -> MultiLineString:
        return MultiLineString(coordinates=[_positions(line) for line in self.coordinates])


class MultiPolygonGeoJSON(BaseModel):
    type: Literal["MultiPolygon"]
    coordinates: list[list[list[PositionArray]]]

    def to_geometry(self) -> MultiPolygon:
        return MultiPolygon(
            coordinates=[[_positions(ring) for ring in polygon] for polygon in self.coordinates]
        )


# Discriminated on "type" so errors point at the right geometry schema
GeoJSONGeometry = Annotated[
    PointGeoJSON
    | LineStringGeoJSON
    | PolygonGeoJSON
    | MultiPointGeoJSON
    | MultiLineStringGeoJSON
    | MultiPolygonGeoJSON,
    Field(discriminator="type"),
]

_geometry_adapter: TypeAdapter[GeoJSONGeometry] = TypeAdapter(GeoJSONGeometry)


def parse_geometry(data: dict[str, Any]) -> Geometry:
    """Validate a GeoJSON geometry dict and build the matching geometry. Raises ValueError (pydantic ValidationError)."""
    return _geometry_adapter.validate_python(data).to_geometry()


def from_geometry(geometry: Geometry) -> GeoJSONGeometry:
    match geometry:
        case Point():
            return PointGeoJSON(type="Point", coordinates=_array(geometry.coordinates))
        case LineString():
            return LineStringGeoJSON(type="LineString", coordinates=_arrays(geometry.coordinates))
        case Polygon():
            return PolygonGeoJSON(type="Polygon", coordinates=[_arrays(ring) for ring in geometry.coordinates])
        case MultiPoint():
            return MultiPointGeoJSON(type="MultiPoint", coordinates=_arrays(geometry.coordinates))
        case MultiLineString():
            return MultiLineStringGeoJSON(
                type="MultiLineString", coordinates=[_arrays(line) for line in geometry.coordinates]
            )
        case MultiPolygon():
            return MultiPolygonGeoJSON(
                type="MultiPolygon",
                coordinates=[[_arrays(ring) for ring in polygon] for polygon in geometry.coordinates],
            )
    raise TypeError(f"No GeoJSON representation for {type(geometry).__name__}")
