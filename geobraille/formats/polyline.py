"""Encoded polyline input (Google polyline algorithm), one polyline per line.

Pairs decode as (lat, lon); geometry is built as x = lon, y = lat.
"""

from __future__ import annotations

import polyline
from shapely.geometry import LineString, Point
from shapely.geometry.base import BaseGeometry

from geobraille.errors import DecodeError
from geobraille.formats.registry import DecodeOptions, decoder


@decoder(name="polyline", extensions=[".polyline"], description="Encoded polyline")
def decode_polyline(text: str, options: DecodeOptions) -> list[BaseGeometry]:
    geometries: list[BaseGeometry] = []
    for line in text.splitlines():
        line = line.strip()
        if not line:
            continue
        coords = decode_polyline_string(line, options.polyline_precision)
        if len(coords) == 1:
            geometries.append(Point(coords[0]))
        elif coords:
            geometries.append(LineString(coords))
    return geometries


def decode_polyline_string(encoded: str, precision: int = 5) -> list[tuple[float, float]]:
    """Decode one polyline into (lon, lat) pairs."""
    try:
        pairs = polyline.decode(encoded, precision)
    except (IndexError, ValueError, TypeError) as e:
        raise DecodeError(f"Invalid polyline {encoded!r}: {e}") from e
    return [(lon, lat) for lat, lon in pairs]
