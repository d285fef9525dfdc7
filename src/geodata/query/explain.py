"""
Small formatting helpers.

Used by the CLI to print query results in a compact, human-readable way.
"""

from __future__ import annotations

import json
from typing import Any

from geodata.domain.models import Feature, FeatureCollection
from geodata.query.features import NearestFeature


def describe_feature(feature: Feature) -> list[str]:
    """Render a feature as lines: geometry type, coordinates, then one line per property."""
    coords = json.dumps(feature.geometry.model_dump(mode="json").get("coordinates"))
    lines = [f"geometry type: {feature.geometry.type}", f"coordinates: {coords}"]
    if feature.properties:
        lines.append("properties:")
        for key, value in feature.properties.items():
            lines.append(f"  {key}: {value}")
    return lines


def nearest_as_dict(result: NearestFeature) -> dict[str, Any]:
    """JSON-friendly view of a nearest-feature result."""
    return {
        "index": result.index,
        "distance_km": result.distance_km,
        "feature": result.feature.model_dump(mode="json"),
    }


def collection_summary(collection: FeatureCollection) -> str:
    """One-line summary: feature count plus per-geometry-type counts."""
    counts: dict[str, int] = {}
    for feature in collection.features:
        counts[feature.geometry.type] = counts.get(feature.geometry.type, 0) + 1
    parts = [f"features={len(collection)}"]
    parts.extend(f"{name}={count}" for name, count in sorted(counts.items()))
    return " | ".join(parts)
