"""
Error taxonomy.

Every failure raised by the geometry/query layers derives from `GeoDataError`, which is a
`ValueError` so callers that only care about "bad input" can catch the builtin.

`operand` names the offending input (e.g. `collection_b`) so a caller presenting the error
can tell the user which argument was rejected.
"""

from __future__ import annotations


class GeoDataError(ValueError):
    """Base class for caller-visible GeoData failures."""

    kind = "geodata_error"

    def __init__(self, message: str, *, operand: str | None = None) -> None:
        self.message = message
        self.operand = operand
        super().__init__(message)


class InvalidInput(GeoDataError):
    """A collection is missing or empty where at least one feature is required."""

    kind = "invalid_input"


class EmptyCollection(InvalidInput):
    """Accessor-style query on a collection without features."""

    kind = "empty_collection"


class WrongGeometryType(GeoDataError):
    """An operation received a geometry of a different type than it needs."""

    kind = "wrong_geometry_type"

    def __init__(self, expected: str, actual: str, *, operand: str | None = None) -> None:
        self.expected = expected
        self.actual = actual
        super().__init__(f"expected a {expected} geometry, got {actual}", operand=operand)


class MalformedCoordinates(GeoDataError):
    """A coordinate structure does not have the shape an operation expects."""

    kind = "malformed_coordinates"
