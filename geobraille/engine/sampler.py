"""Cell sampler — tests each character's 8 dots against the spatial index.

Row 0 is the top of the map: y decreases as rows increase. For every dot the
index gives a cheap envelope filter, then the exact test runs on the
survivors and stops at the first hit. Which atom produced the hit is not
defined.
"""

from __future__ import annotations

import shapely
from shapely.geometry import Polygon

from geobraille.engine.atoms import BoundingBox
from geobraille.engine.grid import CELL_DOT_COLS, CELL_DOT_ROWS, Grid
from geobraille.engine.index import SpatialIndex
from geobraille.utils.braille import braille_char, cell_from_dots


def cell_origin(grid: Grid, row: int, col: int) -> tuple[float, float]:
    """Top-left corner of a cell in data space."""
    start_x = grid.bbox.min_x + grid.cell_size[0] * col
    start_y = grid.bbox.max_y - grid.cell_size[1] * row
    return (start_x, start_y)


def dot_rect(grid: Grid, row: int, col: int, dot_row: int, dot_col: int) -> BoundingBox:
    """Data-space rectangle of one dot inside cell (row, col)."""
    start_x, start_y = cell_origin(grid, row, col)
    dot_w, dot_h = grid.dot_size
    min_x = start_x + dot_w * dot_col
    max_y = start_y - dot_h * dot_row
    return BoundingBox(min_x, max_y - dot_h, min_x + dot_w, max_y)


def dot_is_set(index: SpatialIndex, rect: BoundingBox) -> bool:
    candidates = index.query_intersecting(rect)
    shape: Polygon = shapely.box(*rect.as_tuple())
    return any(atom.intersects_rect(shape) for atom in candidates)


def cell_value(index: SpatialIndex, grid: Grid, row: int, col: int) -> int:
    """Braille cell value in [0, 255] for cell (row, col)."""
    return cell_from_dots(
        (dr, dc)
        for dr in range(CELL_DOT_ROWS)
        for dc in range(CELL_DOT_COLS)
        if dot_is_set(index, dot_rect(grid, row, col, dr, dc))
    )


def sample_row(index: SpatialIndex, grid: Grid, row: int) -> str:
    """Render one printed line."""
    return "".join(braille_char(cell_value(index, grid, row, c)) for c in range(grid.cols))
