"""
Geodesy solver capability consumed by the precise engine.

Any WGS84-accurate implementation of the inverse and direct geodesic problems can be
substituted; the engine depends only on the two methods below.
"""
from typing import NamedTuple, Protocol

from geographiclib.geodesic import Geodesic


class InverseResult(NamedTuple):
    distance: float  # meters
    initial_azimuth: float  # degrees clockwise from north, at the first point
    reduced_length: float  # meters


class DirectResult(NamedTuple):
    lat2: float
    lon2: float


class GeodesySolver(Protocol):
    def inverse(self, lat1: float, lon1: float, lat2: float, lon2: float) -> InverseResult: ...

    def direct(self, lat1: float, lon1: float, azimuth: float, distance: float) -> DirectResult: ...


class GeographicLibSolver:
    """Karney's geodesic algorithms via geographiclib."""

    _INVERSE_MASK = Geodesic.DISTANCE | Geodesic.AZIMUTH | Geodesic.REDUCEDLENGTH
    _DIRECT_MASK = Geodesic.LATITUDE | Geodesic.LONGITUDE

    def __init__(self, geodesic: Geodesic = Geodesic.WGS84):
        self._geodesic = geodesic

    def inverse(self, lat1: float, lon1: float, lat2: float, lon2: float) -> InverseResult:
        g = self._geodesic.Inverse(lat1, lon1, lat2, lon2, self._INVERSE_MASK)
        return InverseResult(distance=g["s12"], initial_azimuth=g["azi1"], reduced_length=g["m12"])

    def direct(self, lat1: float, lon1: float, azimuth: float, distance: float) -> DirectResult:
        g = self._geodesic.Direct(lat1, lon1, azimuth, distance, self._DIRECT_MASK)
        return DirectResult(lat2=g["lat2"], lon2=g["lon2"])


WGS84 = GeographicLibSolver()
