"""Colour mapping for the lattice view."""

import numpy as np

from tissue.constants import CellState
from ui.colors import STATE_RGB, grid_to_rgb, nutrients_to_rgb, states_to_rgb


def _grid():
    states = np.array([[CellState.EMPTY, CellState.ALIVE], [CellState.QUIESCENT, CellState.NECROTIC]], dtype=np.int8)
    nutrients = np.array([[0.0, 1.0], [0.5, 0.25]])
    return states, nutrients


def test_state_colors():
    states, _ = _grid()
    rgb = states_to_rgb(states)
    assert rgb.shape == (2, 2, 3)
    assert rgb.dtype == np.uint8
    assert tuple(rgb[0, 0]) == (0, 0, 0)
    assert tuple(rgb[0, 1]) == (0, 255, 0)
    assert tuple(rgb[1, 0]) == (255, 255, 0)
    assert tuple(rgb[1, 1]) == (0, 0, 255)


def test_nutrient_gradient_is_fixed_scale():
    low = nutrients_to_rgb(np.array([[0.0, 0.2]]))
    high = nutrients_to_rgb(np.array([[0.0, 1.0]]))
    # same value, same colour, whatever else is on the grid
    assert np.array_equal(low[0, 0], high[0, 0])
    assert tuple(low[0, 0]) == (0, 0, 0)
    assert high[0, 1].sum() > low[0, 1].sum()


def test_view_modes():
    states, nutrients = _grid()
    assert np.array_equal(grid_to_rgb(states, nutrients, "cells"), states_to_rgb(states))
    assert np.array_equal(grid_to_rgb(states, nutrients, "nutrients"), nutrients_to_rgb(nutrients))
    overlay = grid_to_rgb(states, nutrients, "overlay")
    assert overlay.dtype == np.uint8
    # empty site shows the nutrient background only
    assert np.array_equal(overlay[0, 0], nutrients_to_rgb(nutrients)[0, 0])
    assert not np.array_equal(overlay[0, 1], nutrients_to_rgb(nutrients)[0, 1])


def test_palette_covers_every_state():
    assert STATE_RGB.shape == (len(CellState), 3)
