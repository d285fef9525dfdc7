"""
GeoData CLI entrypoint.

Quick local inspection of GeoJSON files without writing Python:
- `info`: geometry type, coordinates and properties of a feature
- `area`: planar area of a Polygon feature
- `distance`: great-circle distance between the point features of two files
- `nearest`: feature closest to a lat/lon coordinate
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any

from geodata.config.settings import get_settings
from geodata.core.env import resolve_project_path
from geodata.core.errors import GeoDataError
from geodata.core.logging import configure_logging
from geodata.domain.models import FeatureCollection
from geodata.io.geojson import load_geojson
from geodata.query.explain import collection_summary, describe_feature, nearest_as_dict
from geodata.query.features import (
    distance_between,
    geometry_type_of,
    nearest_feature,
    polygon_area_of,
)


def _load(path: str | None) -> FeatureCollection:
    # Typed paths are cwd-relative; only the configured default is project-relative.
    if path:
        return load_geojson(path)
    return load_geojson(resolve_project_path(get_settings().data.path))


def _cmd_info(args: argparse.Namespace) -> int:
    collection = _load(args.path)
    print(collection_summary(collection))
    # Validates the index (and emptiness) before touching the feature list.
    geometry_type_of(collection, index=int(args.index))
    for line in describe_feature(collection.features[int(args.index)]):
        print(line)
    return 0


def _cmd_area(args: argparse.Namespace) -> int:
    collection = _load(args.path)
    area = polygon_area_of(collection, index=int(args.index))
    print(f"area: {area:.6f} (planar, square coordinate units)")
    return 0


def _cmd_distance(args: argparse.Namespace) -> int:
    settings = get_settings()
    a = load_geojson(args.path_a)
    b = load_geojson(args.path_b)
    km = distance_between(a, b, radius_km=settings.geometry.earth_radius_km)
    print(f"distance: {km:.3f} km")
    return 0


def _cmd_nearest(args: argparse.Namespace) -> int:
    settings = get_settings()
    collection = _load(args.path)
    result = nearest_feature(
        collection,
        float(args.lat),
        float(args.lon),
        on_invalid=args.on_invalid or settings.query.nearest_on_invalid,
        radius_km=settings.geometry.earth_radius_km,
    )

    if args.json:
        print(json.dumps(nearest_as_dict(result) if result else None, ensure_ascii=False, indent=2))
        return 0 if result else 1

    if result is None:
        print("No point features found in the GeoJSON data.")
        return 1

    print(f"nearest feature: #{result.index} at {result.distance_km:.3f} km")
    for line in describe_feature(result.feature):
        print(line)
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the GeoData CLI."""
    parser = argparse.ArgumentParser(prog="geodata")
    sub = parser.add_subparsers(dest="command", required=True)

    info = sub.add_parser("info", help="Show geometry type, coordinates and properties of a feature.")
    info.add_argument("path", nargs="?", default=None, help="GeoJSON file (default: settings data.path)")
    info.add_argument("--index", type=int, default=0)
    info.set_defaults(func=_cmd_info)

    area = sub.add_parser("area", help="Planar area of a Polygon feature's exterior ring.")
    area.add_argument("path", nargs="?", default=None)
    area.add_argument("--index", type=int, default=0)
    area.set_defaults(func=_cmd_area)

    dist = sub.add_parser("distance", help="Great-circle distance (km) between two single-point files.")
    dist.add_argument("path_a")
    dist.add_argument("path_b")
    dist.set_defaults(func=_cmd_distance)

    near = sub.add_parser("nearest", help="Find the feature nearest to a coordinate.")
    near.add_argument("path", nargs="?", default=None)
    near.add_argument("--lat", required=True, type=float)
    near.add_argument("--lon", required=True, type=float)
    near.add_argument(
        "--on-invalid",
        choices=["skip", "error"],
        default=None,
        help="How to treat non-Point features (default from settings).",
    )
    near.add_argument("--json", action="store_true", help="Output machine-readable JSON")
    near.set_defaults(func=_cmd_nearest)
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entrypoint callable used by `python -m geodata.cli`."""
    configure_logging()
    parser = build_parser()
    args = parser.parse_args(argv)
    func: Any = getattr(args, "func")
    try:
        return int(func(args))
    except GeoDataError as e:
        print(f"error: {e.kind}: {e.message}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
