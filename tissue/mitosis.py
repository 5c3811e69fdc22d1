"""
Mitosis: each division candidate places one ALIVE daughter into a random empty orthogonal
neighbour and pays divide_cost from its own nutrient. Candidates are visited in the order
given (row-major from the transition scan), so under the LIVE policy later candidates see
earlier daughters.
"""

import logging
import random

import numpy as np

from tissue.constants import CellState
from tissue.lattice import CellLattice
from tissue.nutrients import NutrientField
from tissue.params import Visibility

logger = logging.getLogger(__name__)


def resolve_seed(seed: int | None) -> int:
    """Seed -1 (or None) = new random seed; otherwise the seed itself."""
    if seed is None or seed == -1:
        return random.randint(0, 2**31 - 1)
    return int(seed)


class MitosisEngine:
    """Owns the simulation's single PRNG. Seeded once; never reseeded between ticks."""

    def __init__(
        self,
        divide_cost: float,
        seed: int | None = -1,
        visibility: Visibility | str = Visibility.LIVE,
    ) -> None:
        self.divide_cost = divide_cost
        self.seed = resolve_seed(seed)
        self.visibility = Visibility.parse(visibility)
        self.rng = random.Random(self.seed)

    def divide(self, candidates: np.ndarray, lattice: CellLattice, nutrients: NutrientField) -> int:
        """Run one mitosis pass in place. Returns the number of daughters placed."""
        if self.visibility is Visibility.SNAPSHOT:
            frozen = lattice.states.copy()
        else:
            frozen = None
        born = 0
        for i, j in candidates:
            i, j = int(i), int(j)
            free = lattice.empty_neighbors(i, j, frozen)
            if not free:
                continue
            ti, tj = free[self.rng.randrange(len(free))]
            if lattice.states[ti, tj] != CellState.EMPTY:
                # SNAPSHOT only: target claimed earlier this tick
                continue
            lattice.states[ti, tj] = CellState.ALIVE
            nutrients.debit(i, j, self.divide_cost)
            born += 1
        logger.debug("mitosis: %d candidates, %d divisions (%s)", len(candidates), born, self.visibility.value)
        return born
