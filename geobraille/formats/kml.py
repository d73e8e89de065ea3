"""KML decoder — Point, LineString, LinearRing and Polygon placemark geometry."""

from __future__ import annotations

import logging
from xml.etree import ElementTree as ET

from shapely.geometry import LinearRing, LineString, Point, Polygon
from shapely.geometry.base import BaseGeometry

from geobraille.errors import DecodeError
from geobraille.formats.registry import DecodeOptions, decoder

logger = logging.getLogger(__name__)

# Any namespace (KML 2.2, Google extensions, or none at all).
_ANY = "{*}"


@decoder(name="kml", extensions=[".kml"], description="Keyhole Markup Language")
def decode_kml(text: str, options: DecodeOptions) -> list[BaseGeometry]:
    try:
        root = ET.fromstring(text)
    except ET.ParseError as e:
        raise DecodeError(f"Invalid KML: {e}") from e

    geometries: list[BaseGeometry] = []
    # Rings nested in a Polygon are handled with their polygon.
    nested_rings = {
        id(ring)
        for poly in root.iter()
        if _local_name(poly.tag) == "Polygon"
        for ring in poly.iter()
        if _local_name(ring.tag) == "LinearRing"
    }

    for elem in root.iter():
        tag = _local_name(elem.tag)
        if tag == "Point":
            coords = _coordinates(elem)
            if coords:
                geometries.append(Point(coords[0]))
        elif tag == "LineString":
            coords = _coordinates(elem)
            if len(coords) >= 2:
                geometries.append(LineString(coords))
        elif tag == "LinearRing" and id(elem) not in nested_rings:
            coords = _coordinates(elem)
            if len(coords) >= 3:
                geometries.append(LinearRing(coords))
        elif tag == "Polygon":
            polygon = _polygon(elem)
            if polygon is not None:
                geometries.append(polygon)

    logger.debug("KML: %d geometries", len(geometries))
    return geometries


def _polygon(elem: ET.Element) -> Polygon | None:
    outer = elem.find(f"{_ANY}outerBoundaryIs/{_ANY}LinearRing")
    if outer is None:
        return None
    shell = _coordinates(outer)
    if len(shell) < 3:
        return None
    holes = []
    for inner in elem.iterfind(f"{_ANY}innerBoundaryIs/{_ANY}LinearRing"):
        ring = _coordinates(inner)
        if len(ring) >= 3:
            holes.append(ring)
    return Polygon(shell, holes)


def _coordinates(elem: ET.Element) -> list[tuple[float, float]]:
    """Parse the element's ``<coordinates>`` tuples (``lon,lat[,alt]``)."""
    node = elem.find(f"{_ANY}coordinates")
    if node is None or not node.text:
        return []
    coords: list[tuple[float, float]] = []
    for token in node.text.split():
        parts = token.split(",")
        try:
            coords.append((float(parts[0]), float(parts[1])))
        except (IndexError, ValueError) as e:
            raise DecodeError(f"Invalid KML coordinate {token!r}") from e
    return coords


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1] if isinstance(tag, str) else ""
