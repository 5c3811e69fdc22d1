"""
Pytest configuration for tumor-lattice tests.
"""
import os
import sys

import numpy as np
import pytest

# Repository root on sys.path so tests import tissue/ui/config/app without an install
root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
sys.path.insert(0, root)

from tissue.constants import CellState, STATE_DTYPE  # noqa: E402


@pytest.fixture
def empty_cells():
    """Factory: NxN all-EMPTY state grid."""
    def make(size: int = 7) -> np.ndarray:
        return np.full((size, size), CellState.EMPTY, dtype=STATE_DTYPE)
    return make


@pytest.fixture
def flat_nutrients():
    """Factory: NxN nutrient grid at a single level."""
    def make(size: int = 7, value: float = 0.5) -> np.ndarray:
        return np.full((size, size), value, dtype=np.float64)
    return make
