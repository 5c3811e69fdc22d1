"""
Orchestrator. One tick = diffuse -> transition -> mitosis, always in that order.
External readers (viewer, logging) only see the grids between ticks.
"""

import logging

import numpy as np

from tissue.lattice import CellLattice
from tissue.mitosis import MitosisEngine
from tissue.nutrients import NutrientField
from tissue.params import ConfigurationError, SimulationParams, Visibility

logger = logging.getLogger(__name__)


def _grid_problems(name: str, grid) -> list[str]:
    if grid is None:
        return [f"{name}: required grid is missing"]
    try:
        arr = np.asarray(grid)
    except (ValueError, TypeError):
        return [f"{name}: not a rectangular grid"]
    if arr.dtype.kind not in "biuf":
        return [f"{name}: expected numeric values, got dtype {arr.dtype}"]
    if arr.ndim != 2:
        return [f"{name}: expected a 2D grid, got {arr.ndim}D"]
    if arr.shape[0] != arr.shape[1]:
        return [f"{name}: expected a square grid, got {arr.shape[0]}x{arr.shape[1]}"]
    if arr.shape[0] < 3:
        return [f"{name}: grid of size {arr.shape[0]} has no interior (need >= 3)"]
    return []


def _coerce_params(params) -> SimulationParams:
    if params is None:
        return SimulationParams()
    if isinstance(params, dict):
        return SimulationParams.from_dict(params)
    if not isinstance(params, SimulationParams):
        raise ConfigurationError([f"params: expected SimulationParams or a dict, got {type(params).__name__}"])
    return params


def validate_inputs(cells, nutrients, params=None, visibility=Visibility.LIVE) -> list[str]:
    """All construction problems at once; empty list means the inputs are usable."""
    problems = _grid_problems("cells", cells) + _grid_problems("nutrients", nutrients)
    if not problems and np.shape(cells) != np.shape(nutrients):
        problems.append(f"grid shapes differ: cells {np.shape(cells)} vs nutrients {np.shape(nutrients)}")
    for check, arg in ((_coerce_params, params), (Visibility.parse, visibility)):
        try:
            check(arg)
        except ConfigurationError as e:
            problems.extend(e.problems)
    return problems


class Simulation:
    """Owns the lattice, the nutrient field and the mitosis engine for its whole lifetime."""

    def __init__(
        self,
        cells: np.ndarray | None = None,
        nutrients: np.ndarray | None = None,
        params: SimulationParams | dict | None = None,
        *,
        seed: int | None = -1,
        visibility: Visibility | str = Visibility.LIVE,
    ) -> None:
        problems = validate_inputs(cells, nutrients, params, visibility)
        if problems:
            raise ConfigurationError(problems)
        self.params = _coerce_params(params)
        hazards = self.params.out_of_range()
        if hazards:
            logger.warning("parameters outside [0, 1], running anyway: %s", ", ".join(hazards))
        self.lattice = CellLattice(cells)
        self.field = NutrientField(nutrients)
        self.mitosis = MitosisEngine(self.params.divide_cost, seed=seed, visibility=visibility)
        self.tick_count = 0
        self.last_divisions = 0

    @property
    def size(self) -> int:
        return self.lattice.shape[0]

    @property
    def seed(self) -> int:
        return self.mitosis.seed

    @property
    def visibility(self) -> Visibility:
        return self.mitosis.visibility

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the current state grid."""
        view = self.lattice.states.view()
        view.flags.writeable = False
        return view

    @property
    def nutrients(self) -> np.ndarray:
        """Read-only view of the current nutrient grid."""
        view = self.field.values.view()
        view.flags.writeable = False
        return view

    def step(self) -> None:
        self.field.diffuse(self.params.diffusion_rate)
        candidates = self.lattice.transition(self.field, self.params)
        self.last_divisions = self.mitosis.divide(candidates, self.lattice, self.field)
        self.tick_count += 1
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("tick %d: %s, nutrient total %.3f", self.tick_count, self.counts(), self.field.total())

    def run(self, ticks: int) -> None:
        for _ in range(ticks):
            self.step()

    def counts(self) -> dict[str, int]:
        return self.lattice.counts()
