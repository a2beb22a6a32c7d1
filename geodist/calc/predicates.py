"""
Planar geometric predicates over (longitude, latitude) treated as (x, y).

Used only to decide intersection and containment, never to produce a distance value.
Segments that intersect are by definition close together, where the ellipsoid is locally flat.
Ray casting is knowingly approximate near the poles and for very large rings.
"""
from collections.abc import Sequence
from enum import Enum

from geodist.model.geometry import Position

# Cross products inside this band count as collinear (floating-point noise)
COLLINEAR_EPSILON = 1e-10


class Orientation(Enum):
    COLLINEAR = 0
    CLOCKWISE = 1
    COUNTERCLOCKWISE = 2


def orientation(p: Position, q: Position, r: Position) -> Orientation:
    """
    Orientation of the ordered triplet p -> q -> r.
    Sign of the cross product of (q - p) and (r - q); positive is a right (clockwise) turn.
    """
    cross = (q.latitude - p.latitude) * (r.longitude - q.longitude) - (q.longitude - p.longitude) * (
        r.latitude - q.latitude
    )
    if -COLLINEAR_EPSILON <= cross <= COLLINEAR_EPSILON:
        return Orientation.COLLINEAR
    if cross > 0:
        return Orientation.CLOCKWISE
    return Orientation.COUNTERCLOCKWISE


def on_segment(p: Position, q: Position, r: Position) -> bool:
    """True if q lies within the bounding box of segment pr (p, q, r assumed collinear)."""
    return (
        min(p.longitude, r.longitude) <= q.longitude <= max(p.longitude, r.longitude)
        and min(p.latitude, r.latitude) <= q.latitude <= max(p.latitude, r.latitude)
    )


def segments_intersect(a1: Position, a2: Position, b1: Position, b2: Position) -> bool:
    """
    True if closed segments a1-a2 and b1-b2 touch or cross.

    Shared endpoints count as intersecting. Otherwise the segments intersect when each one's
    endpoints lie on opposite sides of the other's line, or when an endpoint is collinear with
    and lies on the other segment.
    """
    if a1 == b1 or a1 == b2 or a2 == b1 or a2 == b2:
        return True

    o1 = orientation(a1, a2, b1)
    o2 = orientation(a1, a2, b2)
    o3 = orientation(b1, b2, a1)
    o4 = orientation(b1, b2, a2)

    if o1 != o2 and o3 != o4:
        return True

    collinear = Orientation.COLLINEAR
    if o1 == collinear and on_segment(a1, b1, a2):
        return True
    if o2 == collinear and on_segment(a1, b2, a2):
        return True
    if o3 == collinear and on_segment(b1, a1, b2):
        return True
    if o4 == collinear and on_segment(b1, a2, b2):
        return True
    return False


def sequences_intersect(a: Sequence[Position], b: Sequence[Position]) -> bool:
    """True if any segment of coordinate sequence a intersects any segment of b."""
    for i in range(len(a) - 1):
        for j in range(len(b) - 1):
            if segments_intersect(a[i], a[i + 1], b[j], b[j + 1]):
                return True
    return False


def point_in_ring(x: float, y: float, ring: Sequence[Position]) -> bool:
    """Even-odd rule: cast a horizontal ray from (x, y) and count edge crossings."""
    inside = False
    n = len(ring)
    j = n - 1
    for i in range(n):
        xi, yi = ring[i].longitude, ring[i].latitude
        xj, yj = ring[j].longitude, ring[j].latitude
        if (yi > y) != (yj > y) and x < (xj - xi) * (y - yi) / (yj - yi) + xi:
            inside = not inside
        j = i
    return inside
