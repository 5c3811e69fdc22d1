"""Tissue: nutrient field, cell lattice, mitosis and the tick orchestrator."""

from tissue.constants import GRID_SIZE, MAX_NUTRIENT, MIN_NUTRIENT, CellState
from tissue.lattice import CellLattice
from tissue.mitosis import MitosisEngine
from tissue.nutrients import NutrientField
from tissue.params import ConfigurationError, SimulationParams, Visibility
from tissue.simulation import Simulation

__all__ = [
    "GRID_SIZE",
    "MAX_NUTRIENT",
    "MIN_NUTRIENT",
    "CellState",
    "CellLattice",
    "MitosisEngine",
    "NutrientField",
    "ConfigurationError",
    "SimulationParams",
    "Visibility",
    "Simulation",
]
