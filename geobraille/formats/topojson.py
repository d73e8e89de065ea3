"""TopoJSON decoder.

Geometry references shared arcs by index; a negative index ``~i`` means arc
``i`` walked backwards. Quantized topologies store arcs delta-encoded and
carry a ``transform`` to map integer positions back to coordinates.
"""

from __future__ import annotations

import json
import logging
from typing import Any

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

from geobraille.errors import DecodeError
from geobraille.formats.registry import DecodeOptions, decoder

logger = logging.getLogger(__name__)

Position = tuple[float, float]


@decoder(name="topojson", extensions=[".topojson"], description="TopoJSON topology")
def decode_topojson(text: str, options: DecodeOptions) -> list[BaseGeometry]:
    try:
        topology = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Invalid TopoJSON: {e}") from e

    if not isinstance(topology, dict) or topology.get("type") != "Topology":
        raise DecodeError("Invalid TopoJSON: expected an object with type 'Topology'")

    geometries: list[BaseGeometry] = []
    try:
        topo = _TopologyDecoder(topology)
        for name, obj in (topology.get("objects") or {}).items():
            geom = topo.geometry(obj)
            logger.debug("TopoJSON object %r → %s", name, geom.geom_type)
            geometries.append(geom)
    except (KeyError, TypeError, IndexError) as e:
        raise DecodeError(f"Invalid TopoJSON: {e!r}") from e
    return geometries


class _TopologyDecoder:
    def __init__(self, topology: dict[str, Any]) -> None:
        transform = topology.get("transform")
        if transform:
            self._scale = tuple(float(v) for v in transform["scale"])
            self._translate = tuple(float(v) for v in transform["translate"])
        else:
            self._scale = None
            self._translate = None
        self._arcs = [self._decode_arc(arc) for arc in topology.get("arcs") or []]

    def _decode_arc(self, arc: list[list[float]]) -> list[Position]:
        if self._scale is None:
            return [(float(p[0]), float(p[1])) for p in arc]
        x = y = 0.0
        out: list[Position] = []
        for p in arc:
            x += p[0]
            y += p[1]
            out.append(self._untransform(x, y))
        return out

    def _untransform(self, x: float, y: float) -> Position:
        if self._scale is None:
            return (float(x), float(y))
        return (
            x * self._scale[0] + self._translate[0],
            y * self._scale[1] + self._translate[1],
        )

    def _arc(self, index: int) -> list[Position]:
        try:
            if index < 0:
                return list(reversed(self._arcs[~index]))
            return self._arcs[index]
        except IndexError:
            raise DecodeError(f"Invalid TopoJSON: arc index {index} out of range") from None

    def _line(self, arc_indexes: list[int]) -> list[Position]:
        """Stitch arcs end to end, dropping each shared start point."""
        points: list[Position] = []
        for i, index in enumerate(arc_indexes):
            arc = self._arc(index)
            points.extend(arc if i == 0 else arc[1:])
        return points

    def geometry(self, obj: dict[str, Any]) -> BaseGeometry:
        kind = obj.get("type")
        if kind == "GeometryCollection":
            return GeometryCollection([self.geometry(g) for g in obj.get("geometries") or []])
        if kind is None:
            return GeometryCollection()

        if kind == "Point":
            return Point(self._untransform(*obj["coordinates"][:2]))
        if kind == "MultiPoint":
            return MultiPoint([self._untransform(*p[:2]) for p in obj["coordinates"]])

        arcs = obj.get("arcs")
        if arcs is None:
            raise DecodeError(f"Invalid TopoJSON: {kind} without arcs")
        if kind == "LineString":
            return LineString(self._line(arcs))
        if kind == "MultiLineString":
            return MultiLineString([self._line(a) for a in arcs])
        if kind == "Polygon":
            return self._polygon(arcs)
        if kind == "MultiPolygon":
            return MultiPolygon([self._polygon(p) for p in arcs])
        raise DecodeError(f"Invalid TopoJSON: unknown geometry type {kind!r}")

    def _polygon(self, rings: list[list[int]]) -> Polygon:
        if not rings:
            return Polygon()
        shell, *holes = [self._line(ring) for ring in rings]
        return Polygon(shell, holes)
