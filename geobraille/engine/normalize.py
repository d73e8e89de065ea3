"""Geometry normalizer — flattens nested/multi shapely geometry into GeometryAtoms.

    Point / MultiPoint              → one POINT atom per point
    LineString / MultiLineString    → one LINE atom per consecutive vertex pair
    Polygon / MultiPolygon, outline → LINE atoms along the exterior ring (holes dropped)
    Polygon / MultiPolygon, area    → one POLYGON atom per polygon (holes kept)
    GeometryCollection              → recursive, concatenated

Atom order carries no meaning downstream.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from shapely.geometry import (
    GeometryCollection,
    LineString,
    MultiLineString,
    MultiPoint,
    MultiPolygon,
    Point,
    Polygon,
)
from shapely.geometry.base import BaseGeometry

from geobraille.engine.atoms import GeometryAtom, check_finite

logger = logging.getLogger(__name__)


def simplify_tolerance(proportion: float, rows: int, cols: int) -> float:
    """Scale a simplification proportion to the output resolution.

    A proportion of 0 disables simplification.
    """
    if proportion <= 0 or rows <= 0 or cols <= 0:
        return 0.0
    return proportion / (rows * cols)


def normalize(
    geometry: BaseGeometry,
    is_area: bool = False,
    tolerance: float = 0.0,
) -> list[GeometryAtom]:
    """Decompose one geometry into atoms."""
    check_finite([geometry])
    return _normalize(geometry, is_area, tolerance)


def normalize_all(
    geometries: Iterable[BaseGeometry],
    is_area: bool = False,
    tolerance: float = 0.0,
) -> list[GeometryAtom]:
    """Decompose a sequence of geometries and concatenate the atoms."""
    atoms: list[GeometryAtom] = []
    count = 0
    for geom in geometries:
        atoms.extend(normalize(geom, is_area, tolerance))
        count += 1
    logger.debug("Normalized %d geometries into %d atoms", count, len(atoms))
    return atoms


def _normalize(geom: BaseGeometry, is_area: bool, tolerance: float) -> list[GeometryAtom]:
    if geom.is_empty:
        return []

    if isinstance(geom, Point):
        return [GeometryAtom.point(geom.x, geom.y)]

    if isinstance(geom, MultiPoint):
        return [GeometryAtom.point(p.x, p.y) for p in geom.geoms if not p.is_empty]

    # LinearRing subclasses LineString, so both land here.
    if isinstance(geom, LineString):
        return _segments(list(_simplify(geom, tolerance).coords))

    if isinstance(geom, MultiLineString):
        atoms: list[GeometryAtom] = []
        for ls in geom.geoms:
            atoms.extend(_normalize(ls, is_area, tolerance))
        return atoms

    if isinstance(geom, Polygon):
        return _polygon_atoms(geom, is_area, tolerance)

    if isinstance(geom, MultiPolygon):
        atoms = []
        for poly in geom.geoms:
            atoms.extend(_polygon_atoms(poly, is_area, tolerance))
        return atoms

    if isinstance(geom, GeometryCollection):
        atoms = []
        for member in geom.geoms:
            atoms.extend(_normalize(member, is_area, tolerance))
        return atoms

    raise TypeError(f"Unsupported geometry type: {geom.geom_type}")


def _polygon_atoms(poly: Polygon, is_area: bool, tolerance: float) -> list[GeometryAtom]:
    if poly.is_empty or len(poly.exterior.coords) == 0:
        return []

    simplified = _simplify(poly, tolerance)
    if not isinstance(simplified, Polygon) or simplified.is_empty:
        # Simplification collapsed the ring; fall back to the original shape.
        simplified = poly

    if is_area:
        return [GeometryAtom.from_polygon(simplified)]

    # Shapely rings repeat the first vertex at the end, so consecutive pairs
    # already include the closing segment.
    return _segments(list(simplified.exterior.coords))


def _segments(coords: list[tuple[float, ...]]) -> list[GeometryAtom]:
    return [
        GeometryAtom.line((a[0], a[1]), (b[0], b[1]))
        for a, b in zip(coords[:-1], coords[1:])
    ]


def _simplify(geom: BaseGeometry, tolerance: float) -> BaseGeometry:
    if tolerance <= 0:
        return geom
    return geom.simplify(tolerance, preserve_topology=True)

