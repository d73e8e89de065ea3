"""Well-known text input, one geometry per non-empty line."""

from __future__ import annotations

import shapely.wkt
from shapely.errors import ShapelyError
from shapely.geometry.base import BaseGeometry

from geobraille.errors import DecodeError
from geobraille.formats.registry import DecodeOptions, decoder


@decoder(name="wkt", extensions=[".wkt"], description="Well-known text")
def decode_wkt(text: str, options: DecodeOptions) -> list[BaseGeometry]:
    geometries: list[BaseGeometry] = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        line = line.strip()
        if not line:
            continue
        try:
            geometries.append(shapely.wkt.loads(line))
        except (ShapelyError, ValueError) as e:
            raise DecodeError(f"Invalid WKT on line {line_no}: {e}") from e
    return geometries
