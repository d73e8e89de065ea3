"""Tests for the renderer."""

import math

import pytest

from geobraille.engine.atoms import GeometryAtom
from geobraille.engine.grid import fit_grid
from geobraille.engine.index import SpatialIndex
from geobraille.engine.renderer import render, render_lines
from geobraille.errors import EmptyGeometryError, InvalidCoordinateError
from geobraille.utils.braille import BRAILLE_BASE, is_braille

ZIGZAG = [
    GeometryAtom.line((0, 0), (2, 3)),
    GeometryAtom.line((2, 3), (4, 0)),
    GeometryAtom.line((4, 0), (6, 3)),
    GeometryAtom.point(5, 0.5),
    GeometryAtom.polygon([(0, 2), (1, 2), (1, 3), (0, 3)]),
]


@pytest.mark.parametrize("width, height", [(1, 1), (10, 5), (40, 3), (3, 12)])
def test_output_has_requested_shape(width, height):
    lines = render(ZIGZAG, width, height).split("\n")
    assert len(lines) == height
    for line in lines:
        assert len(line) == width
        assert all(is_braille(ch) for ch in line)


def test_fractional_size_rounds_up():
    lines = render(ZIGZAG, 7.5, 3.2).split("\n")
    assert len(lines) == 4
    assert all(len(line) == 8 for line in lines)


def test_reference_render(reference_atoms):
    text = render(reference_atoms, 4, 4)
    assert text.split("\n")[0][0] == chr(0x2800 + 0x36)


def test_threaded_sampling_matches_sequential():
    index = SpatialIndex.build(ZIGZAG)
    grid = fit_grid(30, 10, index.bounds())
    assert render_lines(index, grid, workers=4) == render_lines(index, grid, workers=1)


def test_empty_atom_set_is_fatal():
    with pytest.raises(EmptyGeometryError):
        render([], 10, 5)


def _set_bits(text):
    return sum(bin(ord(ch) - BRAILLE_BASE).count("1") for ch in text if ch != "\n")


@pytest.mark.parametrize("width, height", [(1, 1), (4, 4), (6, 3), (10, 5), (3, 12), (80, 23)])
@pytest.mark.parametrize("x, y", [(1, 1), (-87.6309, 41.8857), (0, 0)])
def test_single_point_dataset_sets_exactly_one_dot(width, height, x, y):
    text = render([GeometryAtom.point(x, y)], width, height)
    lines = text.split("\n")
    assert len(lines) == height
    assert all(len(line) == width for line in lines)
    assert _set_bits(text) == 1


def test_repeated_location_sets_one_dot():
    atoms = [GeometryAtom.point(5, 5), GeometryAtom.point(5, 5)]
    assert _set_bits(render(atoms, 8, 4)) == 1


def test_points_on_a_vertical_line_are_drawn():
    atoms = [GeometryAtom.point(2, y) for y in (0.4, 1.3, 2.6)]
    assert _set_bits(render(atoms, 12, 6)) >= 1


@pytest.mark.parametrize("bad", [math.nan, math.inf])
def test_non_finite_atom_is_fatal(bad):
    with pytest.raises(InvalidCoordinateError):
        render([GeometryAtom.point(0, 0), GeometryAtom.point(bad, 1)], 4, 4)
