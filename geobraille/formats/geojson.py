"""GeoJSON input: FeatureCollection, Feature or a bare geometry object."""

from __future__ import annotations

import json
import logging
from typing import Any

from shapely.errors import ShapelyError
from shapely.geometry import shape
from shapely.geometry.base import BaseGeometry

from geobraille.errors import DecodeError
from geobraille.formats.registry import DecodeOptions, decoder

logger = logging.getLogger(__name__)


@decoder(name="geojson", extensions=[".geojson", ".json"], description="GeoJSON")
def decode_geojson(text: str, options: DecodeOptions) -> list[BaseGeometry]:
    try:
        doc = json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(f"Invalid GeoJSON: {e}") from e
    return geojson_geometries(doc)


def geojson_geometries(doc: Any) -> list[BaseGeometry]:
    """Geometries from an already-parsed GeoJSON object."""
    if not isinstance(doc, dict) or "type" not in doc:
        raise DecodeError("Invalid GeoJSON: expected an object with a 'type' member")

    kind = doc["type"]
    if kind == "FeatureCollection":
        geometries: list[BaseGeometry] = []
        for feature in doc.get("features") or []:
            geometries.extend(_feature_geometry(feature))
        return geometries
    if kind == "Feature":
        return _feature_geometry(doc)
    return [_to_shape(doc)]


def _feature_geometry(feature: Any) -> list[BaseGeometry]:
    if not isinstance(feature, dict):
        raise DecodeError("Invalid GeoJSON: feature is not an object")
    geometry = feature.get("geometry")
    if geometry is None:
        logger.debug("Skipping feature %r with null geometry", feature.get("id"))
        return []
    return [_to_shape(geometry)]


def _to_shape(geometry: dict[str, Any]) -> BaseGeometry:
    try:
        return shape(geometry)
    except (KeyError, ValueError, TypeError, AttributeError, ShapelyError) as e:
        raise DecodeError(f"Invalid GeoJSON geometry: {e}") from e
