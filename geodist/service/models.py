"""Pydantic models for POST /distance."""
from pydantic import BaseModel

from geodist.calc import DistanceTier
from geodist.geojson.models import GeoJSONGeometry


class DistanceRequest(BaseModel):
    a: GeoJSONGeometry
    b: GeoJSONGeometry
    tier: DistanceTier | None = None  # settings.default_tier when omitted


class DistanceResponse(BaseModel):
    distance_m: float
    tier: DistanceTier
    a_type: str
    b_type: str
