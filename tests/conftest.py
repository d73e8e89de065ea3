"""Shared test fixtures."""

from __future__ import annotations

import pytest
import shapefile
from shapely.geometry import LineString, Point, Polygon

from geobraille.engine.atoms import GeometryAtom


# Line along y=0 plus a point sitting on the top-left corner of the first dot.
# Rendered 4×4 the top-left cell is 0x36.
REFERENCE_ATOMS = [
    GeometryAtom.line((0.0, 0.0), (4.0, 0.0)),
    GeometryAtom.point(0.0, 1.0),
]

REFERENCE_GEOMETRIES = [
    LineString([(0.0, 0.0), (4.0, 0.0)]),
    Point(0.0, 1.0),
]

TRIANGLE = Polygon([(0.0, 0.0), (1.0, 1.0), (1.0, 0.0)])

# 8×8 square with a 6×6 hole
FRAME = Polygon(
    [(0, 0), (8, 0), (8, 8), (0, 8)],
    [[(1, 1), (7, 1), (7, 7), (1, 7)]],
)

GEOJSON_FEATURES = '''{
  "type": "FeatureCollection",
  "features": [
    {"type": "Feature", "properties": {"name": "road"},
     "geometry": {"type": "LineString", "coordinates": [[0, 0], [4, 0]]}},
    {"type": "Feature", "properties": {"name": "stop"},
     "geometry": {"type": "Point", "coordinates": [0, 1]}},
    {"type": "Feature", "id": "missing", "properties": {}, "geometry": null}
  ]
}'''

GEOJSON_EMPTY = '{"type": "FeatureCollection", "features": []}'

# Quantized topology: scale 2, translate (10, 20)
TOPOJSON_QUANTIZED = '''{
  "type": "Topology",
  "transform": {"scale": [2, 2], "translate": [10, 20]},
  "objects": {
    "example": {
      "type": "GeometryCollection",
      "geometries": [
        {"type": "Point", "coordinates": [4, 5]},
        {"type": "LineString", "arcs": [0]},
        {"type": "Polygon", "arcs": [[1]]}
      ]
    }
  },
  "arcs": [
    [[0, 0], [2, 2], [1, -1]],
    [[0, 0], [0, 4], [4, 0], [0, -4], [-4, 0]]
  ]
}'''

TOPOJSON_SHARED_ARCS = '''{
  "type": "Topology",
  "objects": {
    "forward": {"type": "LineString", "arcs": [0, 1]},
    "backward": {"type": "LineString", "arcs": [-2, -1]}
  },
  "arcs": [
    [[0, 0], [1, 1]],
    [[1, 1], [2, 0]]
  ]
}'''

CSV_STOPS = """name,lat,lon
Clark/Lake,41.8857,-87.6309
broken,n/a,-87.0
Harlem,41.8868,-87.8066
"""

WKT_LINES = """POINT (1 2)

LINESTRING (0 0, 1 1, 2 0)
POLYGON ((0 0, 4 0, 4 4, 0 4, 0 0))
"""

KML_DOCUMENT = """<?xml version="1.0" encoding="UTF-8"?>
<kml xmlns="http://www.opengis.net/kml/2.2">
  <Document>
    <Placemark>
      <name>Stop</name>
      <Point><coordinates>-87.6,41.8,0</coordinates></Point>
    </Placemark>
    <Placemark>
      <LineString><coordinates>0,0 1,1 2,0</coordinates></LineString>
    </Placemark>
    <Placemark>
      <Polygon>
        <outerBoundaryIs><LinearRing><coordinates>0,0 4,0 4,4 0,4 0,0</coordinates></LinearRing></outerBoundaryIs>
        <innerBoundaryIs><LinearRing><coordinates>1,1 2,1 2,2 1,2 1,1</coordinates></LinearRing></innerBoundaryIs>
      </Polygon>
    </Placemark>
  </Document>
</kml>
"""

# Reference example from the polyline algorithm documentation
POLYLINE_ENCODED = "_p~iF~ps|U_ulLnnqC_mqNvxq`@"


@pytest.fixture
def reference_atoms() -> list[GeometryAtom]:
    return list(REFERENCE_ATOMS)


@pytest.fixture
def geojson_features() -> str:
    return GEOJSON_FEATURES


@pytest.fixture
def geojson_file(tmp_path):
    path = tmp_path / "features.geojson"
    path.write_text(GEOJSON_FEATURES, encoding="utf-8")
    return path


@pytest.fixture
def roads_shapefile(tmp_path):
    """Polyline shapefile: two roads and one null record."""
    with shapefile.Writer(str(tmp_path / "roads"), shapeType=shapefile.POLYLINE) as w:
        w.field("name", "C")
        w.line([[[0, 0], [4, 0]]])
        w.record("ring road")
        w.line([[[0, 1], [2, 3], [4, 1]]])
        w.record("hill road")
        w.null()
        w.record("planned")
    return tmp_path / "roads.shp"
