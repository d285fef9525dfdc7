"""
Feature queries over a loaded `FeatureCollection`.

These are the operations callers actually use:
- accessors for the geometry type / raw coordinates of a feature
- polygon area of a feature (planar, see `geodata.core.geo`)
- great-circle distance between the point features of two collections
- nearest point feature to a lat/lon query (single linear pass)

"First feature" operations take an explicit `index` keyword that defaults to 0.
All functions are stateless and never mutate the collection.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Literal

from geodata.core.errors import EmptyCollection, InvalidInput, WrongGeometryType
from geodata.core.geo import EARTH_RADIUS_KM, haversine_km, polygon_area
from geodata.domain.models import Feature, FeatureCollection, PointGeometry, PolygonGeometry

logger = logging.getLogger(__name__)

InvalidFeaturePolicy = Literal["skip", "error"]


@dataclass(frozen=True)
class NearestFeature:
    """Winner of a nearest-feature scan."""

    feature: Feature
    index: int
    distance_km: float


def _require_features(
    collection: FeatureCollection | None,
    *,
    operand: str = "collection",
    error: type[InvalidInput] = InvalidInput,
) -> FeatureCollection:
    if collection is None:
        raise error(f"{operand} is missing", operand=operand)
    if not collection.features:
        raise error(f"{operand} has no features", operand=operand)
    return collection


def _feature_at(
    collection: FeatureCollection | None,
    index: int,
    *,
    operand: str = "collection",
    error: type[InvalidInput] = InvalidInput,
) -> Feature:
    features = _require_features(collection, operand=operand, error=error).features
    if not 0 <= index < len(features):
        raise InvalidInput(
            f"{operand} has {len(features)} feature(s); index {index} is out of range",
            operand=operand,
        )
    return features[index]


def geometry_type_of(collection: FeatureCollection | None, *, index: int = 0) -> str:
    """Return the geometry type tag of a feature (first by default)."""
    return _feature_at(collection, index, error=EmptyCollection).geometry.type


def coordinates_of(collection: FeatureCollection | None, *, index: int = 0) -> Any:
    """Return the raw coordinate structure of a feature (first by default)."""
    return _feature_at(collection, index, error=EmptyCollection).geometry.coordinates


def polygon_area_of(collection: FeatureCollection | None, *, index: int = 0) -> float:
    """Compute the area of a Polygon feature's exterior ring.

    The result is planar, in square units of the input coordinates (square degrees for
    lon/lat data). Interior rings are ignored.
    """
    feature = _feature_at(collection, index)
    geometry = feature.geometry
    if not isinstance(geometry, PolygonGeometry):
        raise WrongGeometryType("Polygon", geometry.type, operand="collection")
    return polygon_area(geometry.exterior)


def _point_of(collection: FeatureCollection | None, *, operand: str) -> PointGeometry:
    geometry = _feature_at(collection, 0, operand=operand).geometry
    if not isinstance(geometry, PointGeometry):
        raise WrongGeometryType("Point", geometry.type, operand=operand)
    return geometry


def distance_between(
    collection_a: FeatureCollection | None,
    collection_b: FeatureCollection | None,
    *,
    radius_km: float = EARTH_RADIUS_KM,
) -> float:
    """Great-circle distance (km) between the first point features of two collections."""
    a = _point_of(collection_a, operand="collection_a")
    b = _point_of(collection_b, operand="collection_b")
    return haversine_km(a.lat, a.lon, b.lat, b.lon, radius_km=radius_km)


def _scan(
    features: list[Feature],
    start: int,
    stop: int,
    latitude: float,
    longitude: float,
    *,
    on_invalid: InvalidFeaturePolicy,
    radius_km: float,
) -> NearestFeature | None:
    best: NearestFeature | None = None
    for i in range(start, stop):
        feature = features[i]
        geometry = feature.geometry
        if not isinstance(geometry, PointGeometry):
            if on_invalid == "error":
                raise WrongGeometryType("Point", geometry.type, operand=f"features[{i}]")
            logger.warning("Skipping feature %d in nearest search: geometry is %s.", i, geometry.type)
            continue
        d = haversine_km(latitude, longitude, geometry.lat, geometry.lon, radius_km=radius_km)
        # Strict comparison: ties keep the earliest feature.
        if best is None or d < best.distance_km:
            best = NearestFeature(feature=feature, index=i, distance_km=d)
    return best


def _check_policy(on_invalid: str) -> None:
    if on_invalid not in ("skip", "error"):
        raise InvalidInput(f"on_invalid must be 'skip' or 'error', got {on_invalid!r}", operand="on_invalid")


def nearest_feature(
    collection: FeatureCollection | None,
    latitude: float,
    longitude: float,
    *,
    on_invalid: InvalidFeaturePolicy = "skip",
    radius_km: float = EARTH_RADIUS_KM,
) -> NearestFeature | None:
    """Find the point feature closest to `(latitude, longitude)` in one linear pass.

    Non-Point features are skipped with a warning (`on_invalid="skip"`) or abort the query
    (`on_invalid="error"`). Returns None when no feature had computable coordinates.
    """
    _check_policy(on_invalid)
    features = _require_features(collection).features
    result = _scan(
        features,
        0,
        len(features),
        float(latitude),
        float(longitude),
        on_invalid=on_invalid,
        radius_km=radius_km,
    )
    if result is None:
        logger.warning("Nearest search found no point features among %d feature(s).", len(features))
    else:
        logger.debug("Nearest feature index=%d distance_km=%.3f", result.index, result.distance_km)
    return result


def nearest_feature_partitioned(
    collection: FeatureCollection | None,
    latitude: float,
    longitude: float,
    *,
    partitions: int,
    on_invalid: InvalidFeaturePolicy = "skip",
    radius_km: float = EARTH_RADIUS_KM,
) -> NearestFeature | None:
    """Nearest search over contiguous partitions followed by a min-reduce.

    Each partition scan is independent, so callers may fan them out; the reduce keeps the
    earliest partition on ties, which gives the same answer as `nearest_feature`.
    """
    if int(partitions) < 1:
        raise InvalidInput("partitions must be >= 1", operand="partitions")
    _check_policy(on_invalid)
    features = _require_features(collection).features

    n = len(features)
    size = -(-n // int(partitions))
    partials = [
        _scan(
            features,
            start,
            min(start + size, n),
            float(latitude),
            float(longitude),
            on_invalid=on_invalid,
            radius_km=radius_km,
        )
        for start in range(0, n, size)
    ]

    best: NearestFeature | None = None
    for partial in partials:
        if partial is None:
            continue
        if best is None or partial.distance_km < best.distance_km:
            best = partial
    return best
