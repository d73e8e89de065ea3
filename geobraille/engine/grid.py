"""Grid fitter — sizes character cells so the data keeps its aspect ratio.

Each printed character is a 2-wide × 4-tall Braille dot matrix, so a cell is
twice as tall as it is wide in dot terms. The printed grid is always exactly
the requested size; fitting only changes how much data space each cell
covers.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from geobraille.engine.atoms import BoundingBox
from geobraille.errors import InvalidDimensionsError

logger = logging.getLogger(__name__)

# Braille dot matrix per character.
CELL_DOT_COLS = 2
CELL_DOT_ROWS = 4

# Extent used when every coordinate collapses onto a single point.
_UNIT_EXTENT = 1.0


@dataclass(frozen=True)
class Grid:
    rows: int
    cols: int
    bbox: BoundingBox
    # Data-space size of one character cell: (width, height)
    cell_size: tuple[float, float]

    @property
    def dot_size(self) -> tuple[float, float]:
        """Data-space size of one Braille dot."""
        return (self.cell_size[0] / CELL_DOT_COLS, self.cell_size[1] / CELL_DOT_ROWS)


def expand_degenerate(bbox: BoundingBox) -> BoundingBox:
    """Give a zero-width or zero-height box a usable extent.

    A flat axis borrows the other axis's extent, centred on the data. When
    both axes are flat (a single location) a unit square centred on it is used.
    """
    if not bbox.is_degenerate:
        return bbox

    width, height = bbox.width, bbox.height
    if width <= 0 and height <= 0:
        width = height = _UNIT_EXTENT
    elif width <= 0:
        width = height
    else:
        height = width

    cx = (bbox.min_x + bbox.max_x) / 2
    cy = (bbox.min_y + bbox.max_y) / 2
    expanded = BoundingBox(cx - width / 2, cy - height / 2, cx + width / 2, cy + height / 2)
    logger.debug("Expanded degenerate bounding box %s to %s", bbox.as_tuple(), expanded.as_tuple())
    return expanded


def centre_flat_axes(
    data: BoundingBox,
    fitted: BoundingBox,
    cell_size: tuple[float, float],
) -> BoundingBox:
    """Shift ``fitted`` so each flat axis of ``data`` runs through the middle of a dot.

    Points register only strictly inside a dot, and a centred expansion puts a
    lone location exactly on a dot corner. The shift is under one dot, so the
    data stays on the printed grid.
    """
    dot_w = cell_size[0] / CELL_DOT_COLS
    dot_h = cell_size[1] / CELL_DOT_ROWS
    min_x, max_y = fitted.min_x, fitted.max_y
    if data.width <= 0:
        col = math.floor((data.min_x - min_x) / dot_w)
        min_x = data.min_x - (col + 0.5) * dot_w
    if data.height <= 0:
        row = math.floor((max_y - data.min_y) / dot_h)
        max_y = data.min_y + (row + 0.5) * dot_h
    return BoundingBox(min_x, max_y - fitted.height, min_x + fitted.width, max_y)


def fitted_extents(width: float, height: float, bbox: BoundingBox) -> tuple[float, float]:
    """Virtual fractional (cols, rows) the data would span, used only to size a cell."""
    box_aspect = bbox.width / bbox.height
    term_aspect = width / height

    if term_aspect > 1 and (box_aspect <= 2 or term_aspect > box_aspect * 2):
        # Multiply by 2 because a column is half as wide as a row is tall
        return (height * box_aspect * 2, height)
    return (width, (width / box_aspect) / 2)


def fit_grid(width: float, height: float, bbox: BoundingBox) -> Grid:
    """Derive the character grid for a requested ``width`` × ``height`` output."""
    check_dimensions(width, height)

    fitted = expand_degenerate(bbox)
    cols_f, rows_f = fitted_extents(width, height, fitted)
    cell_size = (fitted.width / cols_f, fitted.height / rows_f)
    if bbox.is_degenerate:
        fitted = centre_flat_axes(bbox, fitted, cell_size)

    grid = Grid(
        rows=math.ceil(height),
        cols=math.ceil(width),
        bbox=fitted,
        cell_size=cell_size,
    )
    logger.debug(
        "Grid %dx%d, virtual extent %.3fx%.3f, cell %s",
        grid.cols,
        grid.rows,
        cols_f,
        rows_f,
        grid.cell_size,
    )
    return grid


def check_dimensions(width: float, height: float) -> None:
    """Reject non-positive or non-finite output sizes."""
    _check_dimension("width", width)
    _check_dimension("height", height)


def _check_dimension(name: str, value: float) -> None:
    if not math.isfinite(value) or value <= 0:
        raise InvalidDimensionsError(f"Output {name} must be a positive number, got {value!r}")
