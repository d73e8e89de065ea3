"""GeometryAtom and BoundingBox — the only shapes the index and sampler understand.

An atom is a closed sum type over three kinds:
    POINT   → shapely Point
    LINE    → two-vertex shapely LineString (one segment)
    POLYGON → shapely Polygon, holes preserved

Every consumer dispatches on ``kind``. Unknown kinds are a programming error.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

import numpy as np
import shapely
from shapely.geometry import LineString, Point, Polygon
from shapely.geometry.base import BaseGeometry

from geobraille.errors import InvalidCoordinateError

Coordinate = tuple[float, float]


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned box: (min_x, min_y, max_x, max_y). A single point gives min == max."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    def __post_init__(self) -> None:
        if not all(math.isfinite(v) for v in self.as_tuple()):
            raise InvalidCoordinateError(f"Bounding box has non-finite bounds: {self.as_tuple()}")
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise ValueError(
                f"Invalid bounding box: min ({self.min_x}, {self.min_y}) "
                f"exceeds max ({self.max_x}, {self.max_y})"
            )

    @classmethod
    def from_bounds(cls, bounds: Sequence[float]) -> BoundingBox:
        """Build from a shapely-style ``(minx, miny, maxx, maxy)`` sequence."""
        min_x, min_y, max_x, max_y = bounds
        return cls(float(min_x), float(min_y), float(max_x), float(max_y))

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.min_x, self.min_y, self.max_x, self.max_y)


class AtomKind(enum.Enum):
    POINT = "point"
    LINE = "line"
    POLYGON = "polygon"


@dataclass(frozen=True)
class GeometryAtom:
    """One indexable primitive. Build through the ``point``/``line``/``polygon`` constructors."""

    kind: AtomKind
    geometry: BaseGeometry

    @classmethod
    def point(cls, x: float, y: float) -> GeometryAtom:
        return cls(AtomKind.POINT, Point(x, y))

    @classmethod
    def line(cls, start: Coordinate, end: Coordinate) -> GeometryAtom:
        return cls(AtomKind.LINE, LineString([start, end]))

    @classmethod
    def polygon(
        cls,
        shell: Sequence[Coordinate],
        holes: Iterable[Sequence[Coordinate]] | None = None,
    ) -> GeometryAtom:
        return cls(AtomKind.POLYGON, Polygon(shell, holes))

    @classmethod
    def from_polygon(cls, polygon: Polygon) -> GeometryAtom:
        return cls(AtomKind.POLYGON, polygon)

    @property
    def bounds(self) -> BoundingBox:
        """Envelope used as the spatial index key."""
        if self.kind is AtomKind.POINT:
            x, y = self.geometry.x, self.geometry.y
            return BoundingBox(x, y, x, y)
        elif self.kind is AtomKind.LINE:
            (x1, y1), (x2, y2) = self.geometry.coords
            return BoundingBox(min(x1, x2), min(y1, y2), max(x1, x2), max(y1, y2))
        elif self.kind is AtomKind.POLYGON:
            return BoundingBox.from_bounds(self.geometry.exterior.bounds)
        raise TypeError(f"Unknown atom kind: {self.kind!r}")

    def intersects_rect(self, rect: Polygon) -> bool:
        """Exact test against a dot rectangle.

        Points must lie strictly inside (a point on the rectangle edge does not
        count); segments and polygons count when they touch the rectangle.
        """
        if self.kind is AtomKind.POINT:
            return rect.contains(self.geometry)
        elif self.kind is AtomKind.LINE:
            return rect.intersects(self.geometry)
        elif self.kind is AtomKind.POLYGON:
            return rect.intersects(self.geometry)
        raise TypeError(f"Unknown atom kind: {self.kind!r}")


def check_finite(geometries: Iterable[BaseGeometry]) -> None:
    """Raise InvalidCoordinateError if any vertex is NaN or infinite."""
    geoms = list(geometries)
    if not geoms:
        return
    coords = shapely.get_coordinates(geoms)
    if coords.size and not np.isfinite(coords).all():
        bad = next(g for g in geoms if not np.isfinite(shapely.get_coordinates(g)).all())
        raise InvalidCoordinateError(f"{bad.geom_type} has coordinates that are not finite floats")
