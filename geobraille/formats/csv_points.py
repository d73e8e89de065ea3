"""CSV decoder — one point per row from configurable latitude/longitude columns."""

from __future__ import annotations

import csv
import io
import logging
import math

from shapely.geometry import Point
from shapely.geometry.base import BaseGeometry

from geobraille.errors import DecodeError
from geobraille.formats.registry import DecodeOptions, decoder

logger = logging.getLogger(__name__)


@decoder(name="csv", extensions=[".csv"], description="CSV with latitude/longitude columns")
def decode_csv(text: str, options: DecodeOptions) -> list[BaseGeometry]:
    reader = csv.DictReader(io.StringIO(text))
    fields = reader.fieldnames or []
    for column in (options.lat_column, options.lon_column):
        if column not in fields:
            raise DecodeError(
                f"CSV column {column!r} not found; available columns: {', '.join(fields)}"
            )

    points: list[BaseGeometry] = []
    skipped = 0
    for line_no, row in enumerate(reader, start=2):
        try:
            lat = float(row[options.lat_column])
            lon = float(row[options.lon_column])
        except (TypeError, ValueError):
            skipped += 1
            logger.debug("Skipping CSV line %d: non-numeric coordinates", line_no)
            continue
        if not (math.isfinite(lat) and math.isfinite(lon)):
            skipped += 1
            logger.debug("Skipping CSV line %d: non-finite coordinates", line_no)
            continue
        points.append(Point(lon, lat))

    if skipped:
        logger.info("Skipped %d CSV rows without usable coordinates", skipped)
    return points
