"""State transition table, candidate ordering and border handling."""

import numpy as np
import pytest

from tissue.constants import CellState
from tissue.lattice import CellLattice
from tissue.nutrients import NutrientField
from tissue.params import SimulationParams

PARAMS = SimulationParams(death_threshold=0.2, divide_threshold=0.6)

E, A, Q, N = CellState.EMPTY, CellState.ALIVE, CellState.QUIESCENT, CellState.NECROTIC


@pytest.mark.parametrize(
    "state, nutrient, expected, divides",
    [
        (E, 0.9, E, False),
        (E, 0.0, E, False),
        (N, 1.0, N, False),
        (N, 0.0, N, False),
        (A, 0.6, A, True),
        (A, 0.95, A, True),
        (A, 0.59, Q, False),
        (A, 0.05, Q, False),
        (Q, 0.6, A, True),
        (Q, 0.19, N, False),
        (Q, 0.2, Q, False),
        (Q, 0.59, Q, False),
    ],
)
def test_transition_table(empty_cells, flat_nutrients, state, nutrient, expected, divides):
    cells = empty_cells(5)
    cells[2, 2] = state
    lattice = CellLattice(cells)
    candidates = lattice.transition(NutrientField(flat_nutrients(5, nutrient)), PARAMS)
    assert lattice[2, 2] == expected
    assert [tuple(c) for c in candidates] == ([(2, 2)] if divides else [])


def test_candidates_in_row_major_order(empty_cells, flat_nutrients):
    cells = empty_cells(5)
    for ij in [(3, 1), (1, 3), (1, 1), (2, 2)]:
        cells[ij] = A
    cells[2, 3] = Q
    lattice = CellLattice(cells)
    candidates = lattice.transition(NutrientField(flat_nutrients(5, 0.9)), PARAMS)
    assert candidates.shape == (5, 2)
    assert [tuple(int(v) for v in c) for c in candidates] == [(1, 1), (1, 3), (2, 2), (2, 3), (3, 1)]


def test_border_cells_never_transition(empty_cells, flat_nutrients):
    cells = empty_cells(5)
    cells[0, 2] = A
    cells[4, 4] = Q
    lattice = CellLattice(cells)
    candidates = lattice.transition(NutrientField(flat_nutrients(5, 0.0)), PARAMS)
    assert lattice[0, 2] == A
    assert lattice[4, 4] == Q
    assert len(candidates) == 0


def test_candidates_rebuilt_each_call(empty_cells, flat_nutrients):
    cells = empty_cells(5)
    cells[2, 2] = A
    lattice = CellLattice(cells)
    assert len(lattice.transition(NutrientField(flat_nutrients(5, 0.9)), PARAMS)) == 1
    # now starving: no carry-over from the previous call
    assert len(lattice.transition(NutrientField(flat_nutrients(5, 0.3)), PARAMS)) == 0


def test_transition_keeps_states_identity(empty_cells, flat_nutrients):
    lattice = CellLattice(empty_cells(5))
    states = lattice.states
    lattice.transition(NutrientField(flat_nutrients(5)), PARAMS)
    assert lattice.states is states


def test_empty_neighbors_excludes_border_and_occupied(empty_cells):
    cells = empty_cells(5)
    cells[2, 1] = N
    lattice = CellLattice(cells)
    # (1, 1): top (0, 1) and left (1, 0) are border
    assert lattice.empty_neighbors(1, 1) == [(1, 2)]
    # top, left, bottom, right order
    assert lattice.empty_neighbors(2, 2) == [(1, 2), (3, 2), (2, 3)]


def test_counts(empty_cells):
    cells = empty_cells(5)
    cells[1, 1] = A
    cells[1, 2] = A
    cells[3, 3] = N
    counts = CellLattice(cells).counts()
    assert counts == {"empty": 22, "alive": 2, "quiescent": 0, "necrotic": 1}
