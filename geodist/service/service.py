"""
Distance service: GeoJSON request -> geometries -> engine for the requested tier.
Shared by the HTTP app and the command-line script.
"""
import logging
import time

from geodist.calc import DistanceTier, distance
from geodist.errors import GeometryTooLargeError
from geodist.model.geometry import Geometry, count_positions
from geodist.monitoring import record_computation

logger = logging.getLogger(__name__)


def check_size(a: Geometry, b: Geometry, max_positions: int) -> int:
    """Total positions across both geometries; raises GeometryTooLargeError above max_positions."""
    total = count_positions(a) + count_positions(b)
    if total > max_positions:
        raise GeometryTooLargeError(total, max_positions)
    return total


def compute_distance(
    a: Geometry,
    b: Geometry,
    *,
    tier: DistanceTier = DistanceTier.APPROXIMATE,
    max_positions: int | None = None,
) -> float:
    """
    Distance in meters between a and b. Errors from the engines (InvalidGeometryError,
    UnsupportedGeometryError) propagate unchanged.
    """
    positions = check_size(a, b, max_positions) if max_positions is not None else None
    start = time.perf_counter()
    result = distance(a, b, tier)
    duration_ms = (time.perf_counter() - start) * 1000
    record_computation(DistanceTier(tier).value)
    logger.info(
        "telemetry distance tier=%s a=%s b=%s positions=%s duration_ms=%.2f",
        DistanceTier(tier).value,
        type(a).__name__,
        type(b).__name__,
        positions,
        duration_ms,
    )
    return result
