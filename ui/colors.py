"""
Display colours. Cell states use fixed colours (empty black, alive green, quiescent yellow,
necrotic blue). Nutrients use a dark-to-bright gradient over the fixed [0, 1] range, so the
same level always renders the same colour across ticks.
"""

import numpy as np

from tissue.constants import MAX_NUTRIENT, MIN_NUTRIENT, CellState

# Indexed by CellState value.
STATE_RGB = np.zeros((len(CellState), 3), dtype=np.uint8)
STATE_RGB[CellState.EMPTY] = (0, 0, 0)
STATE_RGB[CellState.ALIVE] = (0, 255, 0)
STATE_RGB[CellState.QUIESCENT] = (255, 255, 0)
STATE_RGB[CellState.NECROTIC] = (0, 0, 255)

# Nutrient: starved (black) → deep teal → cyan → pale white
_NUTRIENT_STOPS = np.array([
    [0.0, 0.0, 0.0], [0.02, 0.12, 0.18], [0.05, 0.35, 0.45], [0.2, 0.7, 0.8], [0.85, 0.97, 1.0],
], dtype=np.float64)
_NUTRIENT_T = np.array([0.0, 0.2, 0.5, 0.8, 1.0], dtype=np.float64)

OVERLAY_ALPHA = 0.65  # weight of cell colour over the nutrient background


def _apply_gradient(t: np.ndarray, stops: np.ndarray, t_vals: np.ndarray) -> np.ndarray:
    """Map t in [0,1] to RGB via piecewise-linear stops. t 1D, returns (n, 3)."""
    t = np.clip(np.asarray(t, dtype=np.float64).reshape(-1), 0.0, 1.0)
    out = np.empty((t.size, 3), dtype=np.float64)
    for c in range(3):
        out[:, c] = np.interp(t, t_vals, stops[:, c])
    return out


def states_to_rgb(states: np.ndarray) -> np.ndarray:
    """(n, m) CellState grid -> (n, m, 3) uint8."""
    return STATE_RGB[states.astype(np.intp)]


def nutrients_to_rgb(nutrients: np.ndarray) -> np.ndarray:
    """(n, m) nutrient grid -> (n, m, 3) uint8, fixed scale."""
    n, m = nutrients.shape
    t = (nutrients - MIN_NUTRIENT) / (MAX_NUTRIENT - MIN_NUTRIENT)
    rgb = _apply_gradient(t, _NUTRIENT_STOPS, _NUTRIENT_T).reshape(n, m, 3)
    return (rgb * 255).astype(np.uint8)


def grid_to_rgb(states: np.ndarray, nutrients: np.ndarray, view_mode: str = "cells") -> np.ndarray:
    """
    Returns (n, m, 3) uint8 RGB. view_mode: "cells" (state colours), "nutrients" (gradient),
    "overlay" (state colours blended over the nutrient gradient where a cell is present).
    """
    if view_mode == "nutrients":
        return nutrients_to_rgb(nutrients)
    cells_rgb = states_to_rgb(states)
    if view_mode != "overlay":
        return cells_rgb
    background = nutrients_to_rgb(nutrients).astype(np.float64)
    occupied = (states != CellState.EMPTY)[:, :, np.newaxis]
    blended = OVERLAY_ALPHA * cells_rgb + (1.0 - OVERLAY_ALPHA) * background
    rgb = np.where(occupied, blended, background)
    return np.clip(rgb, 0, 255).astype(np.uint8)
