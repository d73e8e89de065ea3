"""Assembles sampled rows into the final text block."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor
from functools import partial

from geobraille.engine.atoms import GeometryAtom
from geobraille.engine.grid import Grid, fit_grid
from geobraille.engine.index import SpatialIndex
from geobraille.engine.sampler import sample_row

logger = logging.getLogger(__name__)


def render_lines(index: SpatialIndex, grid: Grid, workers: int = 1) -> list[str]:
    """Sample every row, top to bottom.

    With ``workers > 1`` rows are sampled on a thread pool; ``Executor.map``
    keeps results in row order.
    """
    rows = range(grid.rows)
    if workers > 1 and grid.rows > 1:
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(partial(sample_row, index, grid), rows))
    return [sample_row(index, grid, r) for r in rows]


def join_lines(lines: Iterable[str]) -> str:
    return "\n".join(lines)


def render(
    atoms: Iterable[GeometryAtom],
    width: float,
    height: float,
    workers: int = 1,
) -> str:
    """Atoms → index → grid → text."""
    index = SpatialIndex.build(atoms)
    grid = fit_grid(width, height, index.bounds())
    return join_lines(render_lines(index, grid, workers))
