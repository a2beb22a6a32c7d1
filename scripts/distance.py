#!/usr/bin/env python3
"""
Print the distance in meters between two geometries read from GeoJSON or WKT files.

Each file holds a single GeoJSON geometry object (Point, LineString, Polygon, MultiPoint,
MultiLineString or MultiPolygon). A Feature is accepted too; its "geometry" member is used.
Files ending in .wkt are read as WKT or EWKT instead.

  python scripts/distance.py a.geojson b.geojson
  python scripts/distance.py a.geojson b.geojson --tier precise
  python scripts/distance.py a.wkt b.geojson
"""
import argparse
import json
import logging
import sys
from pathlib import Path

# Add repo root to path
root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(root))

from geodist.calc import DistanceTier
from geodist.errors import GeoDistError
from geodist.geojson.models import parse_geometry
from geodist.model.geometry import Geometry
from geodist.service.service import compute_distance
from geodist.wkt.codec import from_wkt


def load_geometry(path: Path) -> Geometry:
    if path.suffix.lower() == ".wkt":
        return from_wkt(path.read_text(encoding="utf-8"))
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict) and data.get("type") == "Feature":
        data = data.get("geometry") or {}
    return parse_geometry(data)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Distance between two GeoJSON or WKT geometries")
    parser.add_argument("a", type=Path, help="Path to first geometry (GeoJSON or .wkt)")
    parser.add_argument("b", type=Path, help="Path to second geometry (GeoJSON or .wkt)")
    parser.add_argument(
        "--tier",
        choices=[t.value for t in DistanceTier],
        default=DistanceTier.APPROXIMATE.value,
        help="approximate (haversine) or precise (WGS84 geodesic)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log computation details to stderr")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s %(message)s",
    )

    geometries = []
    for path in (args.a, args.b):
        if not path.exists():
            print(f"Error: file not found: {path}", file=sys.stderr)
            return 1
        try:
            geometries.append(load_geometry(path))
        except json.JSONDecodeError as e:
            print(f"Error: {path} is not valid JSON: {e}", file=sys.stderr)
            return 1
        except ValueError as e:
            print(f"Error: {path} is not a valid geometry: {e}", file=sys.stderr)
            return 1

    try:
        result = compute_distance(geometries[0], geometries[1], tier=DistanceTier(args.tier))
    except GeoDistError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"{result:.3f}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
