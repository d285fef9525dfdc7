"""
Domain models (Pydantic).

In-memory representation of a GeoJSON feature collection after deserialization:
- `FeatureCollection` owns an ordered list of `Feature`
- each `Feature` has one geometry and an opaque `properties` mapping
- geometry is a closed tagged union discriminated on `type`

Coordinate order is GeoJSON's `[lon, lat]` everywhere. Point and Polygon shapes are checked
at construction so the query layer never meets a half-formed coordinate payload:
- a Point takes exactly two numbers; an altitude component is rejected, because distances
  are only defined over `[lon, lat]` and a silently dropped value would hide bad input
- Polygon ring positions may carry an altitude, which area computation ignores

Other geometry kinds (including GeometryCollection) are kept verbatim and never computed over.

Models are frozen: queries read them but never mutate them.
"""

from __future__ import annotations

from typing import Annotated, Any, Iterable, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Position = tuple[float, float]
# Rings tolerate an optional altitude; only x/y are used.
RingPosition = Union[tuple[float, float], tuple[float, float, float]]


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class PointGeometry(_Frozen):
    """A single `[lon, lat]` position in decimal degrees."""

    type: Literal["Point"] = "Point"
    coordinates: Position

    @field_validator("coordinates")
    @classmethod
    def _check_range(cls, value: Position) -> Position:
        lon, lat = value
        if not -180 <= lon <= 180:
            raise ValueError(f"longitude {lon} out of range [-180, 180]")
        if not -90 <= lat <= 90:
            raise ValueError(f"latitude {lat} out of range [-90, 90]")
        return value

    @property
    def lon(self) -> float:
        return self.coordinates[0]

    @property
    def lat(self) -> float:
        return self.coordinates[1]


class PolygonGeometry(_Frozen):
    """Linear rings of `[lon, lat]` pairs; ring 0 is the exterior, the rest are holes."""

    type: Literal["Polygon"] = "Polygon"
    coordinates: list[list[RingPosition]] = Field(..., min_length=1)

    @field_validator("coordinates")
    @classmethod
    def _check_exterior(cls, rings: list[list[RingPosition]]) -> list[list[RingPosition]]:
        if len(rings[0]) < 3:
            raise ValueError(f"exterior ring needs at least 3 positions, got {len(rings[0])}")
        return rings

    @property
    def exterior(self) -> list[RingPosition]:
        return self.coordinates[0]


class OtherGeometry(_Frozen):
    """Geometry kinds that are stored but not computed over."""

    type: Literal["MultiPoint", "LineString", "MultiLineString", "MultiPolygon"]
    coordinates: Any


class GeometryCollectionGeometry(_Frozen):
    """Nested geometries, stored untyped; it has no coordinate payload of its own."""

    type: Literal["GeometryCollection"] = "GeometryCollection"
    geometries: list[Any] = Field(default_factory=list)

    @property
    def coordinates(self) -> None:
        return None


Geometry = Annotated[
    Union[PointGeometry, PolygonGeometry, OtherGeometry, GeometryCollectionGeometry],
    Field(discriminator="type"),
]


class Feature(_Frozen):
    """One geometry plus its free-form properties."""

    type: Literal["Feature"] = "Feature"
    geometry: Geometry
    properties: dict[str, Any] = Field(default_factory=dict)

    @field_validator("properties", mode="before")
    @classmethod
    def _null_properties(cls, value: Any) -> Any:
        return {} if value is None else value


class FeatureCollection(_Frozen):
    """An ordered collection of features; a feature's identity is its position."""

    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: list[Feature] = Field(default_factory=list)

    def __len__(self) -> int:
        return len(self.features)

    @classmethod
    def from_features(cls, features: Iterable[Feature]) -> "FeatureCollection":
        return cls(features=list(features))
