"""
Tier-agnostic relationship analysis shared by the approximate and precise engines.

Every two-geometry distance runs in three phases:
  1. intersection: any pair of segments touching -> distance 0
  2. containment: vertices inside the other geometry's filled area -> 0,
     vertices inside a hole -> distance to that hole's boundary only
  3. general: bidirectional minimum over all vertices and coordinate sequences

Only the leaf "distance from a position to a coordinate sequence" differs between tiers;
it is passed in as `to_sequence`.
"""
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import assert_never

from geodist.calc.predicates import point_in_ring, sequences_intersect
from geodist.errors import InvalidGeometryError
from geodist.model.geometry import Position

Ring = Sequence[Position]
SequenceDistance = Callable[[Position, Sequence[Position]], float]


@dataclass(frozen=True)
class Intersecting:
    pass


@dataclass(frozen=True)
class FullyContained:
    pass


@dataclass(frozen=True)
class ContainedInHole:
    """`members` are the coordinate sequences of the geometry found inside `hole`."""

    hole: Ring
    members: tuple[Ring, ...] = ()


@dataclass(frozen=True)
class NoRelationship:
    pass


Relationship = Intersecting | FullyContained | ContainedInHole | NoRelationship


def require_positions(positions: Sequence[Position], what: str = "Coordinate sequence") -> None:
    if not positions:
        raise InvalidGeometryError(f"{what} must contain at least one position")


def split_rings(rings: Sequence[Ring]) -> tuple[Ring, Sequence[Ring]]:
    """Return (exterior ring, holes); a polygon without rings is invalid."""
    if not rings:
        raise InvalidGeometryError("Polygon must contain at least 1 ring (exterior ring), but contained 0")
    for ring in rings:
        require_positions(ring, "Polygon ring")
    return rings[0], rings[1:]


def _hole_containing(position: Position, holes: Sequence[Ring]) -> Ring | None:
    for hole in holes:
        if point_in_ring(position.longitude, position.latitude, hole):
            return hole
    return None


def _classify_vertices(
    vertices: Sequence[Position],
    exterior: Ring,
    holes: Sequence[Ring],
    members: tuple[Ring, ...],
) -> Relationship:
    for position in vertices:
        if not point_in_ring(position.longitude, position.latitude, exterior):
            return NoRelationship()
        hole = _hole_containing(position, holes)
        if hole is not None:
            return ContainedInHole(hole=hole, members=members)
    return FullyContained()


# --- Classification ---


def classify_point_polygon(position: Position, exterior: Ring, holes: Sequence[Ring]) -> Relationship:
    """Exterior first, then each hole in order; the first hole containing the point wins."""
    if not point_in_ring(position.longitude, position.latitude, exterior):
        return NoRelationship()
    hole = _hole_containing(position, holes)
    if hole is not None:
        return ContainedInHole(hole=hole, members=((position,),))
    return FullyContained()


def classify_line_string_polygon(line: Sequence[Position], exterior: Ring, holes: Sequence[Ring]) -> Relationship:
    for ring in (exterior, *holes):
        if sequences_intersect(line, ring):
            return Intersecting()
    return _classify_vertices(line, exterior, holes, members=(line,))


def classify_polygon_polygon(rings_a: Sequence[Ring], rings_b: Sequence[Ring]) -> Relationship:
    """Checks A's exterior vertices against B first, then B's against A."""
    exterior_a, holes_a = split_rings(rings_a)
    exterior_b, holes_b = split_rings(rings_b)

    for ring_a in rings_a:
        for ring_b in rings_b:
            if sequences_intersect(ring_a, ring_b):
                return Intersecting()

    a_in_b = _classify_vertices(exterior_a, exterior_b, holes_b, members=tuple(rings_a))
    if not isinstance(a_in_b, NoRelationship):
        return a_in_b
    return _classify_vertices(exterior_b, exterior_a, holes_a, members=tuple(rings_b))


# --- Minimum distance searches ---


def bidirectional_distance(a: Sequence[Position], b: Sequence[Position], to_sequence: SequenceDistance) -> float:
    """Min over every vertex of a to sequence b, and every vertex of b to sequence a."""
    from_a = min(to_sequence(position, b) for position in a)
    from_b = min(to_sequence(position, a) for position in b)
    return min(from_a, from_b)


def hole_distance(members: Sequence[Ring], hole: Ring, to_sequence: SequenceDistance) -> float:
    """Distance between a geometry lying inside a hole and that hole's boundary."""
    from_members = min(to_sequence(position, hole) for member in members for position in member)
    from_hole = min(min(to_sequence(position, member) for member in members) for position in hole)
    return min(from_members, from_hole)


def sequences_distance(a: Sequence[Ring], b: Sequence[Ring], to_sequence: SequenceDistance) -> float:
    """General case: every vertex of a against every sequence of b, and the reverse."""
    from_a = min(min(to_sequence(position, seq) for seq in b) for ring in a for position in ring)
    from_b = min(min(to_sequence(position, seq) for seq in a) for ring in b for position in ring)
    return min(from_a, from_b)


# --- Three-phase algorithms ---


def point_polygon_distance(position: Position, rings: Sequence[Ring], to_sequence: SequenceDistance) -> float:
    exterior, holes = split_rings(rings)
    outcome = classify_point_polygon(position, exterior, holes)
    match outcome:
        case Intersecting() | FullyContained():
            return 0.0
        case ContainedInHole(hole=hole):
            return to_sequence(position, hole)
        case NoRelationship():
            return to_sequence(position, exterior)
        case _:
            assert_never(outcome)


def line_string_line_string_distance(
    a: Sequence[Position], b: Sequence[Position], to_sequence: SequenceDistance
) -> float:
    require_positions(a, "LineString")
    require_positions(b, "LineString")
    if sequences_intersect(a, b):
        return 0.0
    return bidirectional_distance(a, b, to_sequence)


def line_string_polygon_distance(
    line: Sequence[Position], rings: Sequence[Ring], to_sequence: SequenceDistance
) -> float:
    require_positions(line, "LineString")
    exterior, holes = split_rings(rings)
    outcome = classify_line_string_polygon(line, exterior, holes)
    match outcome:
        case Intersecting() | FullyContained():
            return 0.0
        case ContainedInHole(hole=hole, members=members):
            return hole_distance(members, hole, to_sequence)
        case NoRelationship():
            return sequences_distance((line,), rings, to_sequence)
        case _:
            assert_never(outcome)


def polygon_polygon_distance(rings_a: Sequence[Ring], rings_b: Sequence[Ring], to_sequence: SequenceDistance) -> float:
    outcome = classify_polygon_polygon(rings_a, rings_b)
    match outcome:
        case Intersecting() | FullyContained():
            return 0.0
        case ContainedInHole(hole=hole, members=members):
            return hole_distance(members, hole, to_sequence)
        case NoRelationship():
            return sequences_distance(rings_a, rings_b, to_sequence)
        case _:
            assert_never(outcome)
