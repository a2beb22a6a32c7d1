"""
Immutable geometry value types: positions, points, line strings, polygons and their multi variants.
Coordinates are WGS84 degrees (longitude, latitude) with an optional altitude in meters.
"""
import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

LONGITUDE_MIN, LONGITUDE_MAX = -180.0, 180.0
LATITUDE_MIN, LATITUDE_MAX = -90.0, 90.0
MIN_LINE_STRING_POSITIONS = 2
MIN_RING_POSITIONS = 4


class CoordinateReferenceSystem(str, Enum):
    """Tag describing how coordinates map to the earth. No reprojection is ever performed."""

    WGS_84 = "WGS_84"
    WEB_MERCATOR = "WEB_MERCATOR"


class Position(BaseModel):
    model_config = ConfigDict(frozen=True)

    longitude: float
    latitude: float
    altitude: float = 0.0

    def __init__(self, longitude: float, latitude: float, altitude: float = 0.0, **data):
        super().__init__(longitude=longitude, latitude=latitude, altitude=altitude, **data)

    @model_validator(mode="after")
    def check_coordinates(self):
        for name in ("longitude", "latitude", "altitude"):
            value = getattr(self, name)
            if not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number, but was {value}")
        if not (LONGITUDE_MIN <= self.longitude <= LONGITUDE_MAX):
            raise ValueError(f"longitude must be between {LONGITUDE_MIN} and {LONGITUDE_MAX}, but was {self.longitude}")
        if not (LATITUDE_MIN <= self.latitude <= LATITUDE_MAX):
            raise ValueError(f"latitude must be between {LATITUDE_MIN} and {LATITUDE_MAX}, but was {self.latitude}")
        return self


def _ring_label(index: int) -> str:
    return "exterior ring" if index == 0 else f"interior ring at index {index}"


def _check_rings(rings: tuple[tuple[Position, ...], ...], owner: str) -> None:
    if not rings:
        raise ValueError(f"{owner} must contain at least 1 ring (exterior ring), but contained 0")
    for index, ring in enumerate(rings):
        if len(ring) < MIN_RING_POSITIONS:
            raise ValueError(
                f"Each ring in {owner} must contain at least {MIN_RING_POSITIONS} positions, "
                f"but {_ring_label(index)} contained {len(ring)}"
            )
        if ring[0] != ring[-1]:
            raise ValueError(
                f"Each ring in {owner} must be closed (first position must equal last position), "
                f"but {_ring_label(index)} is not closed"
            )


class Geometry(BaseModel):
    """Base for all geometries. Distance methods delegate to the calc engines."""

    model_config = ConfigDict(frozen=True)

    coordinate_reference_system: CoordinateReferenceSystem = CoordinateReferenceSystem.WGS_84

    def fast_distance_to(self, other: "Geometry") -> float:
        """Approximate (haversine / equirectangular) distance in meters."""
        from geodist.calc import approximate

        return approximate.distance(self, other)

    def exact_distance_to(self, other: "Geometry") -> float:
        """Ellipsoidal (WGS84 geodesic) distance in meters."""
        from geodist.calc import precise

        return precise.distance(self, other)


class Point(Geometry):
    coordinates: Position

    @classmethod
    def of(cls, longitude: float, latitude: float, altitude: float = 0.0, **kwargs) -> "Point":
        return cls(coordinates=Position(longitude, latitude, altitude), **kwargs)

    @property
    def longitude(self) -> float:
        return self.coordinates.longitude

    @property
    def latitude(self) -> float:
        return self.coordinates.latitude

    @property
    def altitude(self) -> float:
        return self.coordinates.altitude


class LineString(Geometry):
    coordinates: tuple[Position, ...]

    @field_validator("coordinates")
    @classmethod
    def at_least_two_positions(cls, v: tuple[Position, ...]) -> tuple[Position, ...]:
        if len(v) < MIN_LINE_STRING_POSITIONS:
            raise ValueError(
                f"LineString must contain at least {MIN_LINE_STRING_POSITIONS} positions, but contained {len(v)}"
            )
        return v


class Polygon(Geometry):
    """Ring 0 is the exterior boundary, rings 1..n are holes."""

    coordinates: tuple[tuple[Position, ...], ...]

    @field_validator("coordinates")
    @classmethod
    def rings_closed(cls, v: tuple[tuple[Position, ...], ...]) -> tuple[tuple[Position, ...], ...]:
        _check_rings(v, "Polygon")
        return v

    @property
    def exterior_ring(self) -> tuple[Position, ...]:
        return self.coordinates[0]

    @property
    def interior_rings(self) -> tuple[tuple[Position, ...], ...]:
        return self.coordinates[1:]


class MultiPoint(Geometry):
    coordinates: tuple[Position, ...]


class MultiLineString(Geometry):
    coordinates: tuple[tuple[Position, ...], ...]

    @field_validator("coordinates")
    @classmethod
    def lines_have_two_positions(cls, v: tuple[tuple[Position, ...], ...]) -> tuple[tuple[Position, ...], ...]:
        for index, line in enumerate(v):
            if len(line) < MIN_LINE_STRING_POSITIONS:
                raise ValueError(
                    f"Each LineString in MultiLineString must contain at least {MIN_LINE_STRING_POSITIONS} "
                    f"positions, but LineString at index {index} contained {len(line)}"
                )
        return v

    @property
    def line_strings(self) -> list[LineString]:
        return [
            LineString(coordinates=line, coordinate_reference_system=self.coordinate_reference_system)
            for line in self.coordinates
        ]


class MultiPolygon(Geometry):
    coordinates: tuple[tuple[tuple[Position, ...], ...], ...]

    @field_validator("coordinates")
    @classmethod
    def polygons_valid(cls, v):
        for index, rings in enumerate(v):
            _check_rings(rings, f"MultiPolygon (Polygon at index {index})")
        return v

    @property
    def polygons(self) -> list[Polygon]:
        return [
            Polygon(coordinates=rings, coordinate_reference_system=self.coordinate_reference_system)
            for rings in self.coordinates
        ]


def count_positions(geometry: Geometry) -> int:
    """Total number of positions stored in a geometry."""
    match geometry:
        case Point():
            return 1
        case LineString() | MultiPoint():
            return len(geometry.coordinates)
        case Polygon() | MultiLineString():
            return sum(len(ring) for ring in geometry.coordinates)
        case MultiPolygon():
            return sum(len(ring) for rings in geometry.coordinates for ring in rings)
    raise TypeError(f"Not a geometry: {type(geometry).__name__}")
