"""Error hierarchy. Every error is a ValueError so plain ``except ValueError`` still works."""

from __future__ import annotations


class GeobrailleError(ValueError):
    """Base class for all geobraille errors."""


class RenderError(GeobrailleError):
    """A render cannot proceed. Always terminal for the whole render."""


class EmptyGeometryError(RenderError):
    def __init__(self, message: str = "empty geometry set: no bounding box can be computed") -> None:
        super().__init__(message)


class InvalidDimensionsError(RenderError):
    pass


class InvalidCoordinateError(RenderError):
    pass


class DecodeError(GeobrailleError):
    """A format decoder could not read its input."""
