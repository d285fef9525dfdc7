"""
Geometry math.

Pure functions only: polygon area (shoelace), great-circle distance (haversine) and the
degree/radian conversion they share. Everything here works on plain numbers and sequences so
the query layer can stay a thin adapter over the data model.

Area caveat: `polygon_area` is planar. Fed with `[lon, lat]` pairs it returns square degrees,
which shrink in real-world size towards the poles. It is not a geodesic area.
"""

from __future__ import annotations

from math import atan2, cos, pi, sin, sqrt
from typing import Sequence

from geodata.core.errors import MalformedCoordinates

EARTH_RADIUS_KM = 6371.0


def to_radians(deg: float) -> float:
    """Convert degrees to radians."""
    return float(deg) * pi / 180


def _xy(position: Sequence[float], i: int) -> tuple[float, float]:
    if len(position) < 2:
        raise MalformedCoordinates(f"ring position {i} has fewer than two numbers: {list(position)!r}")
    return float(position[0]), float(position[1])


def polygon_area(ring: Sequence[Sequence[float]]) -> float:
    """Compute the planar area of a ring of `[x, y]` pairs using the shoelace formula.

    The ring may be open or explicitly closed (a repeated closing point adds a zero term).
    Winding order and starting vertex do not change the result.

    Raises:
        MalformedCoordinates: the ring has fewer than 3 points or a position lacks x/y.
    """
    n = len(ring)
    if n < 3:
        raise MalformedCoordinates(f"a ring needs at least 3 points, got {n}")

    points = [_xy(p, i) for i, p in enumerate(ring)]
    area = 0.0
    j = n - 1
    for i in range(n):
        xi, yi = points[i]
        xj, yj = points[j]
        area += (xj + xi) * (yj - yi)
        j = i
    return abs(area / 2.0)


def haversine_km(
    lat1: float,
    lon1: float,
    lat2: float,
    lon2: float,
    *,
    radius_km: float = EARTH_RADIUS_KM,
) -> float:
    """Compute great-circle distance in kilometers between two lat/lon points (degrees)."""
    dlat = to_radians(lat2 - lat1)
    dlon = to_radians(lon2 - lon1)

    a = sin(dlat / 2) ** 2 + cos(to_radians(lat1)) * cos(to_radians(lat2)) * sin(dlon / 2) ** 2
    # Rounding can push `a` a hair outside [0, 1] for antipodal points.
    a = min(1.0, max(0.0, a))
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return radius_km * c
