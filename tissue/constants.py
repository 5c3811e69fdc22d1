"""Lattice constants. Nutrient range is [MIN_NUTRIENT, MAX_NUTRIENT]; border is the nutrient source."""

from enum import IntEnum

GRID_SIZE = 512
MIN_NUTRIENT = 0.0
MAX_NUTRIENT = 1.0


class CellState(IntEnum):
    EMPTY = 0
    ALIVE = 1  # healthy, may divide
    QUIESCENT = 2  # starving, alive
    NECROTIC = 3  # dead tissue


STATE_DTYPE = "int8"

# Von Neumann neighbourhood (di, dj): top, left, bottom, right. Mitosis scans in this order.
NEIGHBOR_OFFSETS = [(-1, 0), (0, -1), (1, 0), (0, 1)]
