"""Errors raised by the distance engine."""


class GeoDistError(Exception):
    """Base class for all geodist errors."""


class InvalidGeometryError(GeoDistError, ValueError):
    """A geometry cannot be used for a distance calculation (empty sequence, polygon without rings)."""


class UnsupportedGeometryError(GeoDistError, NotImplementedError):
    """The combination of geometry types has no distance implementation."""

    def __init__(self, a: object, b: object, tier: str = ""):
        self.a_type = type(a).__name__
        self.b_type = type(b).__name__
        prefix = f"{tier} distance" if tier else "Distance"
        super().__init__(
            f"{prefix} calculation is not supported between {self.a_type} and {self.b_type}"
        )


class GeometryTooLargeError(GeoDistError):
    """A request carries more positions than the configured limit."""

    def __init__(self, count: int, limit: int):
        self.count = count
        self.limit = limit
        super().__init__(f"Geometries contain {count} positions; the limit is {limit}")


class WktError(InvalidGeometryError):
    """WKT or EWKT text that cannot be read, or a geometry that cannot be written as WKT."""
