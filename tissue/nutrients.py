"""
Nutrient field: one concentration per cell. Diffusion relaxes each interior cell toward
the mean of its 4 orthogonal neighbours; the border ring is a fixed source at MAX_NUTRIENT.
"""

import numpy as np

from tissue.constants import MAX_NUTRIENT, MIN_NUTRIENT


class NutrientField:
    """Double-buffered float grid. values keeps its identity; diffuse() writes via the back buffer."""

    __slots__ = ("shape", "values", "_back")

    def __init__(self, values: np.ndarray) -> None:
        self.values = np.array(values, dtype=np.float64)
        self.shape = self.values.shape
        self._back = np.empty_like(self.values)

    def __getitem__(self, ij: tuple[int, int]) -> float:
        return float(self.values[ij])

    def diffuse(self, rate: float) -> None:
        """One relaxation step. Reads only the previous field, so no directional bias."""
        old = self.values
        new = self._back
        centre = old[1:-1, 1:-1]
        # top, left, bottom, right
        mean = (old[:-2, 1:-1] + old[1:-1, :-2] + old[2:, 1:-1] + old[1:-1, 2:]) / 4.0
        np.clip(centre + rate * (mean - centre), MIN_NUTRIENT, MAX_NUTRIENT, out=new[1:-1, 1:-1])
        new[0, :] = MAX_NUTRIENT
        new[-1, :] = MAX_NUTRIENT
        new[:, 0] = MAX_NUTRIENT
        new[:, -1] = MAX_NUTRIENT
        np.copyto(self.values, new)

    def debit(self, i: int, j: int, amount: float) -> float:
        """Subtract amount at (i, j), clamped at MIN_NUTRIENT. Returns the new value."""
        value = max(MIN_NUTRIENT, float(self.values[i, j]) - amount)
        self.values[i, j] = value
        return value

    def total(self) -> float:
        return float(np.sum(self.values))
