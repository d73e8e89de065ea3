"""Pipeline orchestrator — normalize, index, fit, sample, with per-stage timing.

Unlike a best-effort transform chain, any stage failure aborts the whole
render: there is no partial map.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass, field

from shapely.geometry.base import BaseGeometry

from geobraille.engine.atoms import GeometryAtom
from geobraille.engine.config import RenderConfig
from geobraille.engine.grid import Grid, check_dimensions, fit_grid
from geobraille.engine.index import SpatialIndex
from geobraille.engine.normalize import normalize_all
from geobraille.engine.renderer import join_lines, render_lines

logger = logging.getLogger(__name__)


@dataclass
class RenderResult:
    """Output of one render plus what it took to get there."""

    lines: list[str]
    grid: Grid
    atom_count: int
    # Stage name → elapsed milliseconds
    timings_ms: dict[str, float] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return join_lines(self.lines)


class Pipeline:
    """Runs one render per call; holds no state between calls."""

    def __init__(self, config: RenderConfig) -> None:
        self.config = config

    def run(self, geometries: Iterable[BaseGeometry]) -> RenderResult:
        """Render decoded geometry."""
        check_dimensions(self.config.width, self.config.height)

        logger.info("Parsing geography")
        t0 = time.perf_counter()
        atoms = normalize_all(geometries, self.config.is_area, self.config.tolerance)
        normalize_ms = (time.perf_counter() - t0) * 1000
        logger.debug("  normalize completed in %.1fms", normalize_ms)

        result = self.run_atoms(atoms)
        result.timings_ms = {"normalize": round(normalize_ms, 1), **result.timings_ms}
        return result

    def run_atoms(self, atoms: Iterable[GeometryAtom]) -> RenderResult:
        """Render atoms that are already normalized."""
        start = time.perf_counter()
        timings: dict[str, float] = {}

        logger.info("Indexing geography")
        t0 = time.perf_counter()
        index = SpatialIndex.build(atoms)
        timings["index"] = self._lap("index", t0)

        t0 = time.perf_counter()
        grid = fit_grid(self.config.width, self.config.height, index.bounds())
        timings["grid"] = self._lap("grid", t0)

        logger.info("Sampling %dx%d cells", grid.cols, grid.rows)
        t0 = time.perf_counter()
        lines = render_lines(index, grid, self.config.workers)
        timings["sample"] = self._lap("sample", t0)

        total = (time.perf_counter() - start) * 1000
        logger.info(
            "Rendered %d atoms onto %dx%d cells in %.0fms",
            len(index),
            grid.cols,
            grid.rows,
            total,
        )
        return RenderResult(lines=lines, grid=grid, atom_count=len(index), timings_ms=timings)

    @staticmethod
    def _lap(stage: str, t0: float) -> float:
        elapsed = (time.perf_counter() - t0) * 1000
        logger.debug("  %s completed in %.1fms", stage, elapsed)
        return round(elapsed, 1)


def render_geometries(
    geometries: Iterable[BaseGeometry],
    width: float,
    height: float,
    is_area: bool = False,
    simplify: float = 0.0,
    workers: int = 1,
) -> str:
    """Decoded geometry straight to Braille text."""
    config = RenderConfig(
        width=width,
        height=height,
        is_area=is_area,
        simplify=simplify,
        workers=workers,
    )
    return Pipeline(config).run(geometries).text
