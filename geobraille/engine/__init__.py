"""geobraille rasterization engine."""

from geobraille.engine.atoms import AtomKind, BoundingBox, GeometryAtom
from geobraille.engine.config import RenderConfig
from geobraille.engine.grid import Grid, fit_grid
from geobraille.engine.index import SpatialIndex
from geobraille.engine.normalize import normalize, normalize_all, simplify_tolerance
from geobraille.engine.pipeline import Pipeline, RenderResult, render_geometries
from geobraille.engine.renderer import render, render_lines

__all__ = [
    "AtomKind",
    "BoundingBox",
    "GeometryAtom",
    "RenderConfig",
    "Grid",
    "fit_grid",
    "SpatialIndex",
    "normalize",
    "normalize_all",
    "simplify_tolerance",
    "Pipeline",
    "RenderResult",
    "render_geometries",
    "render",
    "render_lines",
]
