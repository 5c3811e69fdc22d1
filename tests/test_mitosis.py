"""Mitosis: placement, nutrient cost, border exclusion, PRNG ownership, visibility policy."""

import numpy as np
import pytest

from tissue.constants import CellState
from tissue.lattice import CellLattice
from tissue.mitosis import MitosisEngine, resolve_seed
from tissue.nutrients import NutrientField
from tissue.params import ConfigurationError, Visibility

E, A, N = CellState.EMPTY, CellState.ALIVE, CellState.NECROTIC


def _setup(empty_cells, flat_nutrients, alive, necrotic=(), nutrient=0.65):
    cells = empty_cells(5)
    for ij in alive:
        cells[ij] = A
    for ij in necrotic:
        cells[ij] = N
    return CellLattice(cells), NutrientField(flat_nutrients(5, nutrient))


def test_single_empty_neighbor_is_filled(empty_cells, flat_nutrients):
    lattice, field = _setup(empty_cells, flat_nutrients, [(2, 2)], [(2, 1), (3, 2), (2, 3)])
    engine = MitosisEngine(0.12, seed=1)
    born = engine.divide(np.array([[2, 2]]), lattice, field)
    assert born == 1
    assert lattice[1, 2] == A
    assert lattice[2, 2] == A
    assert field[2, 2] == pytest.approx(0.53)
    assert field[1, 2] == pytest.approx(0.65)


def test_no_empty_neighbor_no_division(empty_cells, flat_nutrients):
    lattice, field = _setup(empty_cells, flat_nutrients, [(2, 2)], [(1, 2), (2, 1), (3, 2), (2, 3)])
    before = lattice.states.copy()
    born = MitosisEngine(0.12, seed=1).divide(np.array([[2, 2]]), lattice, field)
    assert born == 0
    assert np.array_equal(lattice.states, before)
    assert field[2, 2] == pytest.approx(0.65)


def test_cost_clamped_at_min(empty_cells, flat_nutrients):
    lattice, field = _setup(empty_cells, flat_nutrients, [(2, 2)], nutrient=0.05)
    MitosisEngine(0.12, seed=1).divide(np.array([[2, 2]]), lattice, field)
    assert field[2, 2] == 0.0


def test_border_is_never_a_target(empty_cells, flat_nutrients):
    # (1, 1) only has border cells free
    lattice, field = _setup(empty_cells, flat_nutrients, [(1, 1)], [(2, 1), (1, 2)])
    born = MitosisEngine(0.12, seed=4).divide(np.array([[1, 1]]), lattice, field)
    assert born == 0
    assert lattice.count(A) == 1
    assert field[1, 1] == pytest.approx(0.65)


def test_target_chosen_among_empty_interior_neighbors(empty_cells, flat_nutrients):
    chosen = set()
    for seed in range(200):
        lattice, field = _setup(empty_cells, flat_nutrients, [(1, 1)])
        MitosisEngine(0.12, seed=seed).divide(np.array([[1, 1]]), lattice, field)
        born = {tuple(int(v) for v in ij) for ij in np.argwhere(lattice.states == A)} - {(1, 1)}
        assert len(born) == 1
        chosen |= born
    assert chosen == {(1, 2), (2, 1)}


def test_each_division_adds_one_alive_and_debits_parent(empty_cells, flat_nutrients):
    rng = np.random.default_rng(3)
    cells = empty_cells(12)
    interior = rng.random((10, 10))
    cells[1:-1, 1:-1][interior < 0.3] = A
    cells[1:-1, 1:-1][(interior >= 0.3) & (interior < 0.4)] = N
    lattice = CellLattice(cells)
    field = NutrientField(flat_nutrients(12, 0.9))
    candidates = np.argwhere(lattice.states == A)
    before = lattice.count(A)
    born = MitosisEngine(0.1, seed=9).divide(candidates, lattice, field)
    assert born > 0
    assert lattice.count(A) == before + born
    debited = np.isclose(field.values, 0.8)
    assert int(np.count_nonzero(debited)) == born
    assert np.all(lattice.states[debited] == A)


def test_same_seed_same_choices(empty_cells, flat_nutrients):
    def choices(engine):
        out = []
        for _ in range(20):
            lattice, field = _setup(empty_cells, flat_nutrients, [(2, 2)])
            engine.divide(np.array([[2, 2]]), lattice, field)
            out.append(lattice.states.tobytes())
        return out

    assert choices(MitosisEngine(0.1, seed=7)) == choices(MitosisEngine(0.1, seed=7))


def test_rng_is_not_reseeded_between_calls(empty_cells, flat_nutrients):
    def placed(engine):
        lattice, field = _setup(empty_cells, flat_nutrients, [(2, 2)])
        engine.divide(np.array([[2, 2]]), lattice, field)
        return lattice.states.tobytes()

    engine = MitosisEngine(0.1, seed=5)
    runs = {placed(engine) for _ in range(30)}
    fresh = {placed(MitosisEngine(0.1, seed=5)) for _ in range(30)}
    assert len(fresh) == 1
    assert len(runs) > 1


def test_resolve_seed():
    assert resolve_seed(42) == 42
    s = resolve_seed(-1)
    assert 0 <= s < 2**31
    assert MitosisEngine(0.1, seed=-1).seed >= 0


# Contested layout on a 5x5 lattice:
#   (2, 1) can only grow into (2, 2).
#   (2, 3) can grow into (2, 2) or (1, 3).
CONTESTED_NECROTIC = [(1, 1), (3, 1), (3, 3), (1, 2), (3, 2)]


def _contested(empty_cells, flat_nutrients):
    return _setup(empty_cells, flat_nutrients, [(2, 1), (2, 3)], CONTESTED_NECROTIC)


def test_live_policy_sees_earlier_daughters(empty_cells, flat_nutrients):
    for seed in range(50):
        lattice, field = _contested(empty_cells, flat_nutrients)
        engine = MitosisEngine(0.12, seed=seed, visibility=Visibility.LIVE)
        born = engine.divide(np.array([[2, 1], [2, 3]]), lattice, field)
        assert born == 2
        assert lattice[2, 2] == A
        assert lattice[1, 3] == A
        assert field[2, 3] == pytest.approx(0.53)


def test_snapshot_policy_loses_contested_divisions(empty_cells, flat_nutrients):
    outcomes = set()
    for seed in range(50):
        lattice, field = _contested(empty_cells, flat_nutrients)
        engine = MitosisEngine(0.12, seed=seed, visibility="snapshot")
        born = engine.divide(np.array([[2, 1], [2, 3]]), lattice, field)
        assert lattice[2, 2] == A
        assert lattice.count(A) == 2 + born
        if born == 1:
            # second parent picked the claimed site: no daughter, no cost
            assert lattice[1, 3] == E
            assert field[2, 3] == pytest.approx(0.65)
        outcomes.add(born)
    assert outcomes == {1, 2}


def test_unknown_visibility_rejected():
    with pytest.raises(ConfigurationError) as exc:
        MitosisEngine(0.1, seed=1, visibility="sideways")
    assert "visibility" in exc.value.problems[0]
