"""Spatial index — immutable STR-tree over GeometryAtom envelopes.

Built once by bulk load, read-only afterwards, so any number of sampler
threads may query it concurrently.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

import numpy as np
import shapely
from numpy.typing import NDArray
from shapely.geometry import LineString, Point
from shapely.geometry.base import BaseGeometry
from shapely.strtree import STRtree

from geobraille.engine.atoms import BoundingBox, GeometryAtom, check_finite
from geobraille.errors import EmptyGeometryError

logger = logging.getLogger(__name__)


class SpatialIndex:
    """Bounding-box index over a fixed atom set."""

    def __init__(self, atoms: Iterable[GeometryAtom]) -> None:
        self._atoms: tuple[GeometryAtom, ...] = tuple(atoms)
        check_finite(atom.geometry for atom in self._atoms)
        self._envelopes: NDArray[np.float64] = np.array(
            [atom.bounds.as_tuple() for atom in self._atoms], dtype=np.float64
        ).reshape(-1, 4)
        self._tree = STRtree([atom.geometry for atom in self._atoms]) if self._atoms else None

    @classmethod
    def build(cls, atoms: Iterable[GeometryAtom]) -> SpatialIndex:
        index = cls(atoms)
        logger.debug("Indexed %d atoms", len(index))
        return index

    def __len__(self) -> int:
        return len(self._atoms)

    def __iter__(self) -> Iterator[GeometryAtom]:
        return iter(self._atoms)

    @property
    def atoms(self) -> tuple[GeometryAtom, ...]:
        return self._atoms

    def bounds(self) -> BoundingBox:
        """Union of every atom envelope."""
        if not self._atoms:
            raise EmptyGeometryError()
        env = self._envelopes
        return BoundingBox(
            float(env[:, 0].min()),
            float(env[:, 1].min()),
            float(env[:, 2].max()),
            float(env[:, 3].max()),
        )

    def query_intersecting(self, box: BoundingBox) -> Iterator[GeometryAtom]:
        """Lazily yield atoms whose envelope intersects ``box``, in no particular order."""
        if self._tree is None:
            return
        for i in self._tree.query(_envelope_geometry(box)):
            yield self._atoms[int(i)]


def _envelope_geometry(box: BoundingBox) -> BaseGeometry:
    # STRtree compares envelopes, so a zero-area box must stay a valid shape.
    if box.width == 0 and box.height == 0:
        return Point(box.min_x, box.min_y)
    if box.width == 0 or box.height == 0:
        return LineString([(box.min_x, box.min_y), (box.max_x, box.max_y)])
    return shapely.box(*box.as_tuple())
