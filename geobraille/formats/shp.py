"""ESRI Shapefile input, read from the .shp geometry file alone.

Attributes (.dbf) and the record index (.shx) are not needed to draw the
shapes, so only the main file's bytes are read.
"""

from __future__ import annotations

import io
import logging
import struct

import shapefile
from shapely.errors import ShapelyError
from shapely.geometry import shape
from shapely.geometry.base import BaseGeometry

from geobraille.errors import DecodeError
from geobraille.formats.registry import DecodeOptions, decoder

logger = logging.getLogger(__name__)

# Shape types with no GeoJSON equivalent
_SKIPPED_SHAPE_TYPES = {shapefile.NULL, shapefile.MULTIPATCH}


@decoder(name="shapefile", extensions=[".shp"], description="ESRI Shapefile", binary=True)
def decode_shapefile(data: bytes, options: DecodeOptions) -> list[BaseGeometry]:
    try:
        reader = shapefile.Reader(shp=io.BytesIO(data))
        shapes = list(reader.iterShapes())
    except (shapefile.ShapefileException, struct.error, ValueError) as e:
        raise DecodeError(f"Invalid shapefile: {e}") from e

    geometries: list[BaseGeometry] = []
    skipped = 0
    for i, record in enumerate(shapes):
        if record.shapeType in _SKIPPED_SHAPE_TYPES or not record.points:
            logger.debug("Skipping shape %d (type %s)", i, record.shapeTypeName)
            skipped += 1
            continue
        try:
            geometries.append(shape(record.__geo_interface__))
        except (ValueError, TypeError, ShapelyError) as e:
            raise DecodeError(f"Invalid shapefile record {i}: {e}") from e

    if skipped:
        logger.info("Skipped %d empty or unsupported shapes", skipped)
    return geometries
