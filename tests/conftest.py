"""Pytest configuration and fixtures."""
import sys
from pathlib import Path

import pytest

# Ensure repo root is on path when running pytest from anywhere
root = Path(__file__).resolve().parent.parent
if str(root) not in sys.path:
    sys.path.insert(0, str(root))

from geodist.model.geometry import LineString, Point, Polygon, Position  # noqa: E402


def ring(*coords: tuple[float, float]) -> list[Position]:
    return [Position(lon, lat) for lon, lat in coords]


SQUARE = ring((11.5, 49.3), (11.6, 49.3), (11.6, 49.4), (11.5, 49.4), (11.5, 49.3))
HOLE = ring((11.52, 49.32), (11.58, 49.32), (11.58, 49.38), (11.52, 49.38), (11.52, 49.32))


@pytest.fixture
def square() -> Polygon:
    return Polygon(coordinates=[SQUARE])


@pytest.fixture
def square_with_hole() -> Polygon:
    return Polygon(coordinates=[SQUARE, HOLE])


@pytest.fixture
def outside_point() -> Point:
    return Point.of(11.4694, 49.2965)


@pytest.fixture
def far_point() -> Point:
    return Point.of(11.0549, 49.4532)


@pytest.fixture
def three_segment_line() -> LineString:
    return LineString(coordinates=ring((11.4432, 49.3429), (11.4463, 49.1877), (11.5161, 49.1239)))
