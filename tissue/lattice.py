"""Cell lattice: one CellState per cell and the per-tick state transition."""

import numpy as np

from tissue.constants import CellState, NEIGHBOR_OFFSETS, STATE_DTYPE
from tissue.nutrients import NutrientField
from tissue.params import SimulationParams


class CellLattice:
    """Double-buffered state grid. Border cells never transition."""

    __slots__ = ("shape", "states", "_back")

    def __init__(self, states: np.ndarray) -> None:
        self.states = np.array(states, dtype=STATE_DTYPE)
        self.shape = self.states.shape
        self._back = np.empty_like(self.states)

    def __getitem__(self, ij: tuple[int, int]) -> CellState:
        return CellState(int(self.states[ij]))

    def is_interior(self, i: int, j: int) -> bool:
        n, m = self.shape
        return 0 < i < n - 1 and 0 < j < m - 1

    def empty_neighbors(self, i: int, j: int, states: np.ndarray | None = None) -> list[tuple[int, int]]:
        """Interior EMPTY neighbours of (i, j) in top, left, bottom, right order."""
        grid = self.states if states is None else states
        out = []
        for di, dj in NEIGHBOR_OFFSETS:
            ni, nj = i + di, j + dj
            if self.is_interior(ni, nj) and grid[ni, nj] == CellState.EMPTY:
                out.append((ni, nj))
        return out

    def transition(self, nutrients: NutrientField, params: SimulationParams) -> np.ndarray:
        """
        Apply the state table to every interior cell from the current grid and nutrient
        levels; swap in the result. Returns (k, 2) coordinates of cells that may divide,
        in row-major order.
        """
        old = self.states[1:-1, 1:-1]
        n = nutrients.values[1:-1, 1:-1]
        np.copyto(self._back, self.states)
        new = self._back[1:-1, 1:-1]

        alive = old == CellState.ALIVE
        quiescent = old == CellState.QUIESCENT
        fed = n >= params.divide_threshold
        starving = n < params.death_threshold

        new[alive & ~fed] = CellState.QUIESCENT
        new[quiescent & fed] = CellState.ALIVE
        new[quiescent & ~fed & starving] = CellState.NECROTIC
        dividing = (alive | quiescent) & fed

        np.copyto(self.states, self._back)
        # argwhere is row-major; shift back from interior to lattice coordinates
        return np.argwhere(dividing) + 1

    def count(self, state: CellState) -> int:
        return int(np.count_nonzero(self.states == state))

    def counts(self) -> dict[str, int]:
        return {s.name.lower(): self.count(s) for s in CellState}
