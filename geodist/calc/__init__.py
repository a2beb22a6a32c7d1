"""Distance engines. Pick a tier, then call distance(a, b)."""
from enum import Enum

from geodist.calc import approximate, precise
from geodist.model.geometry import Geometry


class DistanceTier(str, Enum):
    APPROXIMATE = "approximate"
    PRECISE = "precise"


def distance(a: Geometry, b: Geometry, tier: DistanceTier = DistanceTier.APPROXIMATE) -> float:
    """Distance in meters between two geometries using the chosen accuracy tier."""
    if DistanceTier(tier) is DistanceTier.PRECISE:
        return precise.distance(a, b)
    return approximate.distance(a, b)


__all__ = ["DistanceTier", "approximate", "distance", "precise"]
