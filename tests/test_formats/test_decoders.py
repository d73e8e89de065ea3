"""Tests for the built-in format decoders."""

import pytest
import shapefile
from shapely.geometry import GeometryCollection, LineString, Point, Polygon

from geobraille.errors import DecodeError
from geobraille.formats import DecodeOptions, decode
from geobraille.formats.polyline import decode_polyline_string
from tests.conftest import (
    CSV_STOPS,
    GEOJSON_EMPTY,
    GEOJSON_FEATURES,
    KML_DOCUMENT,
    POLYLINE_ENCODED,
    TOPOJSON_QUANTIZED,
    TOPOJSON_SHARED_ARCS,
    WKT_LINES,
)


# ── GeoJSON ──


def test_geojson_feature_collection_skips_null_geometry():
    geoms = decode(GEOJSON_FEATURES, "geojson")
    assert geoms == [LineString([(0, 0), (4, 0)]), Point(0, 1)]


def test_geojson_single_feature_and_bare_geometry():
    feature = '{"type": "Feature", "properties": {}, "geometry": {"type": "Point", "coordinates": [1, 2]}}'
    assert decode(feature, "geojson") == [Point(1, 2)]
    bare = '{"type": "Polygon", "coordinates": [[[0, 0], [1, 0], [1, 1], [0, 0]]]}'
    (poly,) = decode(bare, "geojson")
    assert isinstance(poly, Polygon)


def test_geojson_empty_collection():
    assert decode(GEOJSON_EMPTY, "geojson") == []


@pytest.mark.parametrize(
    "text",
    [
        "not json",
        "[1, 2, 3]",
        '{"type": "Spiral", "coordinates": [0, 0]}',
    ],
)
def test_geojson_invalid(text):
    with pytest.raises(DecodeError):
        decode(text, "geojson")


# ── TopoJSON ──


def test_topojson_quantized_transform():
    (collection,) = decode(TOPOJSON_QUANTIZED, "topojson")
    assert isinstance(collection, GeometryCollection)
    point, line, polygon = collection.geoms

    assert point == Point(18, 30)
    assert list(line.coords) == [(10, 20), (14, 24), (16, 22)]
    assert list(polygon.exterior.coords) == [(10, 20), (10, 28), (18, 28), (18, 20), (10, 20)]


def test_topojson_stitches_and_reverses_arcs():
    forward, backward = decode(TOPOJSON_SHARED_ARCS, "topojson")
    assert list(forward.coords) == [(0, 0), (1, 1), (2, 0)]
    assert list(backward.coords) == [(2, 0), (1, 1), (0, 0)]


def test_topojson_requires_topology():
    with pytest.raises(DecodeError):
        decode('{"type": "FeatureCollection", "features": []}', "topojson")


def test_topojson_bad_arc_index():
    text = '{"type": "Topology", "objects": {"a": {"type": "LineString", "arcs": [3]}}, "arcs": []}'
    with pytest.raises(DecodeError):
        decode(text, "topojson")


# ── CSV ──


def test_csv_points_skip_unparsable_rows():
    geoms = decode(CSV_STOPS, "csv")
    assert len(geoms) == 2
    assert geoms[0].x == pytest.approx(-87.6309)
    assert geoms[0].y == pytest.approx(41.8857)


def test_csv_custom_columns():
    text = "stop_lat,stop_lon\n1.5,2.5\n"
    options = DecodeOptions(lat_column="stop_lat", lon_column="stop_lon")
    assert decode(text, "csv", options) == [Point(2.5, 1.5)]


def test_csv_missing_column():
    with pytest.raises(DecodeError, match="latitude|lat"):
        decode("y,x\n1,2\n", "csv")


# ── WKT ──


def test_wkt_one_geometry_per_line():
    geoms = decode(WKT_LINES, "wkt")
    assert [g.geom_type for g in geoms] == ["Point", "LineString", "Polygon"]


def test_wkt_invalid_line_reports_line_number():
    with pytest.raises(DecodeError, match="line 2"):
        decode("POINT (0 0)\nPOINT (nope)\n", "wkt")


# ── KML ──


def test_kml_placemarks():
    point, line, polygon = decode(KML_DOCUMENT, "kml")
    assert point == Point(-87.6, 41.8)
    assert list(line.coords) == [(0, 0), (1, 1), (2, 0)]
    assert isinstance(polygon, Polygon)
    assert len(polygon.interiors) == 1


def test_kml_without_namespace():
    text = "<kml><Placemark><Point><coordinates>1,2</coordinates></Point></Placemark></kml>"
    assert decode(text, "kml") == [Point(1, 2)]


def test_kml_invalid_xml():
    with pytest.raises(DecodeError):
        decode("<kml><Placemark>", "kml")


# ── Encoded polyline ──


def test_polyline_reference_example():
    coords = decode_polyline_string(POLYLINE_ENCODED)
    expected = [(-120.2, 38.5), (-120.95, 40.7), (-126.453, 43.252)]
    assert len(coords) == len(expected)
    for got, want in zip(coords, expected):
        assert got == pytest.approx(want)


def test_polyline_precision():
    coarse = decode_polyline_string(POLYLINE_ENCODED, precision=6)
    assert coarse[0] == pytest.approx((-12.02, 3.85))


def test_polyline_decoder_builds_linestring():
    (line,) = decode(POLYLINE_ENCODED + "\n", "polyline")
    assert isinstance(line, LineString)
    assert len(line.coords) == 3


def test_polyline_truncated():
    with pytest.raises(DecodeError):
        decode_polyline_string("_p~iF~ps|")


# ── Shapefile ──


def test_shapefile_lines_skip_null_records(roads_shapefile):
    geoms = decode(roads_shapefile.read_bytes(), "shapefile")
    assert geoms == [
        LineString([(0, 0), (4, 0)]),
        LineString([(0, 1), (2, 3), (4, 1)]),
    ]


def test_shapefile_polygon(tmp_path):
    with shapefile.Writer(str(tmp_path / "parcels"), shapeType=shapefile.POLYGON) as w:
        w.field("id", "N")
        # Clockwise outer ring
        w.poly([[[0, 0], [0, 4], [4, 4], [4, 0], [0, 0]]])
        w.record(1)
    (parcel,) = decode((tmp_path / "parcels.shp").read_bytes(), "shapefile")
    assert isinstance(parcel, Polygon)
    assert parcel.area == pytest.approx(16)


def test_shapefile_requires_bytes():
    with pytest.raises(DecodeError, match="bytes"):
        decode("POINT (0 0)", "shapefile")


def test_shapefile_invalid_bytes():
    with pytest.raises(DecodeError):
        decode(b"not a shapefile", "shapefile")
