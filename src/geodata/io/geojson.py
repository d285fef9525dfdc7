"""
GeoJSON file store.

Reads a `.geojson` file (plain JSON text) and validates it into a typed `FeatureCollection`,
and writes a collection back out as indented JSON. Validation failures are translated into
the library's error taxonomy so callers never need to handle Pydantic errors directly.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import TypeAdapter, ValidationError

from geodata.core.errors import InvalidInput, MalformedCoordinates
from geodata.domain.models import FeatureCollection

logger = logging.getLogger(__name__)

_COLLECTION_ADAPTER = TypeAdapter(FeatureCollection)


def _is_coordinate_error(err: dict[str, Any]) -> bool:
    return "coordinates" in err.get("loc", ())


def parse_geojson(payload: Any, *, source: str = "payload") -> FeatureCollection:
    """Validate a decoded GeoJSON mapping into a `FeatureCollection`."""
    try:
        return _COLLECTION_ADAPTER.validate_python(payload)
    except ValidationError as e:
        errors = e.errors()
        first = errors[0] if errors else {}
        where = ".".join(str(p) for p in first.get("loc", ()))
        message = f"{source}: {where}: {first.get('msg', str(e))}"
        if errors and all(_is_coordinate_error(err) for err in errors):
            raise MalformedCoordinates(message, operand=source) from e
        raise InvalidInput(message, operand=source) from e


def load_geojson(path: str | Path) -> FeatureCollection:
    """Load and validate a GeoJSON feature collection file.

    Relative paths resolve against the current directory.
    """
    resolved = Path(path).expanduser()
    try:
        text = resolved.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InvalidInput(f"{resolved}: cannot read file ({e})", operand=str(path)) from e
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidInput(f"{resolved}: not valid JSON ({e.msg} at line {e.lineno})", operand=str(path)) from e
    collection = parse_geojson(payload, source=str(path))
    logger.info("Loaded %d feature(s) from %s", len(collection), resolved)
    return collection


def dump_geojson(collection: FeatureCollection) -> str:
    """Serialize a collection to indented GeoJSON text."""
    return json.dumps(collection.model_dump(mode="json"), ensure_ascii=False, indent=2)


def save_geojson(path: str | Path, collection: FeatureCollection) -> Path:
    """Write a collection to disk, creating parent directories; returns the resolved path."""
    resolved = Path(path).expanduser()
    resolved.parent.mkdir(parents=True, exist_ok=True)
    resolved.write_text(dump_geojson(collection) + "\n", encoding="utf-8")
    logger.info("Saved %d feature(s) to %s", len(collection), resolved)
    return resolved
