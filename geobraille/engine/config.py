"""Per-call render settings."""

from __future__ import annotations

import math
from dataclasses import dataclass

from geobraille.engine.normalize import simplify_tolerance


@dataclass
class RenderConfig:
    """Requested output size plus how geometry is turned into atoms."""

    width: float
    height: float
    # Polygons as filled areas instead of outlines
    is_area: bool = False
    # Simplification proportion; 0 = keep every vertex
    simplify: float = 0.0
    # Row sampling threads; 1 = sample on the calling thread
    workers: int = 1

    @property
    def rows(self) -> int:
        return math.ceil(self.height)

    @property
    def cols(self) -> int:
        return math.ceil(self.width)

    @property
    def tolerance(self) -> float:
        """Simplifier tolerance scaled to the printed resolution."""
        return simplify_tolerance(self.simplify, self.rows, self.cols)

