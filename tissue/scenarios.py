"""Initial conditions. Each generator returns (cells, nutrients) for an NxN lattice with an EMPTY border.
Seed -1 = new random seed each call; the seed actually used is returned so a run can be replayed."""

import numpy as np

from tissue.constants import GRID_SIZE, MAX_NUTRIENT, MIN_NUTRIENT, CellState, STATE_DTYPE
from tissue.mitosis import resolve_seed


class UnknownScenarioError(KeyError):
    pass


def empty_cells(size: int) -> np.ndarray:
    return np.full((size, size), CellState.EMPTY, dtype=STATE_DTYPE)


def uniform_nutrients(size: int, value: float) -> np.ndarray:
    return np.full((size, size), value, dtype=np.float64)


def _distance_from_centre(size: int) -> np.ndarray:
    c = size // 2
    i = np.arange(size, dtype=np.float64).reshape(-1, 1)
    j = np.arange(size, dtype=np.float64).reshape(1, -1)
    return np.hypot(i - c, j - c)


def _stamp_disk(cells: np.ndarray, ci: int, cj: int, radius: int) -> None:
    size = cells.shape[0]
    for i in range(max(0, ci - radius), min(size, ci + radius + 1)):
        for j in range(max(0, cj - radius), min(size, cj + radius + 1)):
            if (i - ci) ** 2 + (j - cj) ** 2 <= radius * radius:
                cells[i, j] = CellState.ALIVE


def sparse_noise(size: int, rng: np.random.Generator) -> tuple[np.ndarray, np.ndarray]:
    """Isolated cells scattered over a well-fed field (density 0.2%)."""
    cells = empty_cells(size)
    nutrients = uniform_nutrients(size, 0.8)
    seeded = rng.random((size - 2, size - 2)) < 0.002
    cells[1:-1, 1:-1][seeded] = CellState.ALIVE
    return cells, nutrients


def radial_tumor(size: int, rng: np.random.Generator) -> tuple[np.ndarray, np.ndarray]:
    """Small central tumour; nutrients peak at the centre and fall off linearly outward."""
    cells = empty_cells(size)
    d = _distance_from_centre(size)
    nutrients = np.clip(1.0 - d / (size / 2.0), MIN_NUTRIENT, MAX_NUTRIENT)
    cells[d < 6] = CellState.ALIVE
    return cells, nutrients


def competing_colonies(size: int, rng: np.random.Generator) -> tuple[np.ndarray, np.ndarray]:
    """Twelve round colonies (radius 4) placed at random, competing for space."""
    cells = empty_cells(size)
    nutrients = uniform_nutrients(size, 0.7)
    margin = min(20, size // 4)
    for _ in range(12):
        ci, cj = rng.integers(margin, size - margin, size=2, endpoint=True)
        _stamp_disk(cells, int(ci), int(cj), 4)
    return cells, nutrients


def stripes(size: int, rng: np.random.Generator) -> tuple[np.ndarray, np.ndarray]:
    """Horizontal bands (16 rows) of rich and poor nutrient, crossed by a line of cells."""
    cells = empty_cells(size)
    nutrients = uniform_nutrients(size, 0.15)
    rich = (np.arange(size) // 16) % 2 == 0
    nutrients[rich, :] = 0.9
    cells[size // 2, size // 3 : 2 * size // 3] = CellState.ALIVE
    return cells, nutrients


def traveling_wave(size: int, rng: np.random.Generator) -> tuple[np.ndarray, np.ndarray]:
    """Sinusoidal nutrient rows (period 40) with a seed line near the top edge."""
    cells = empty_cells(size)
    w = 0.5 * (1.0 + np.sin(2.0 * np.pi * np.arange(size, dtype=np.float64) / 40.0))
    nutrients = np.repeat((0.1 + 0.9 * w).reshape(-1, 1), size, axis=1)
    cells[2, size // 4 : 3 * size // 4] = CellState.ALIVE
    return cells, nutrients


def ring(size: int, rng: np.random.Generator) -> tuple[np.ndarray, np.ndarray]:
    """Annulus of cells (20 < r < 24) around the centre."""
    cells = empty_cells(size)
    nutrients = uniform_nutrients(size, 0.6)
    d = _distance_from_centre(size)
    cells[(d > 20) & (d < 24)] = CellState.ALIVE
    return cells, nutrients


def random_cluster(size: int, rng: np.random.Generator, count: int = 100) -> tuple[np.ndarray, np.ndarray]:
    """count cells dropped uniformly into a central square (the middle ~22% of each axis)."""
    cells = empty_cells(size)
    nutrients = uniform_nutrients(size, 0.7)
    lo = max(1, size * 200 // GRID_SIZE)
    hi = max(lo, size - 1 - lo)
    ij = rng.integers(lo, hi, size=(count, 2), endpoint=True)
    cells[ij[:, 0], ij[:, 1]] = CellState.ALIVE
    return cells, nutrients


def central_disk(size: int, rng: np.random.Generator, radius: int = 12) -> tuple[np.ndarray, np.ndarray]:
    """Solid disk of cells at the centre over uniform nutrient 0.75."""
    cells = empty_cells(size)
    nutrients = uniform_nutrients(size, 0.75)
    _stamp_disk(cells, size // 2, size // 2, radius)
    return cells, nutrients


def multiple_clusters(
    size: int, rng: np.random.Generator, clusters: int = 5, radius: int = 6
) -> tuple[np.ndarray, np.ndarray]:
    """A few disks (radius 6) at random centres, at least 50 cells in from the edge on a full grid."""
    cells = empty_cells(size)
    nutrients = uniform_nutrients(size, 0.70)
    margin = min(50, size // 4)
    for _ in range(clusters):
        ci, cj = rng.integers(margin, size - 1 - margin, size=2, endpoint=True)
        _stamp_disk(cells, int(ci), int(cj), radius)
    return cells, nutrients


# Order matches the numeric ids used on the command line (0-5).
SCENARIOS = {
    "sparse_noise": sparse_noise,
    "radial_tumor": radial_tumor,
    "competing_colonies": competing_colonies,
    "stripes": stripes,
    "traveling_wave": traveling_wave,
    "ring": ring,
    "random_cluster": random_cluster,
    "central_disk": central_disk,
    "multiple_clusters": multiple_clusters,
}
SCENARIO_IDS = list(SCENARIOS)[:6]


def scenario_name(key: str | int) -> str:
    """Accept a name or a numeric id ("3" or 3)."""
    text = str(key).strip()
    if text.lstrip("-").isdigit():
        idx = int(text)
        if 0 <= idx < len(SCENARIO_IDS):
            return SCENARIO_IDS[idx]
        raise UnknownScenarioError(f"no scenario with id {idx} (0-{len(SCENARIO_IDS) - 1})")
    if text in SCENARIOS:
        return text
    raise UnknownScenarioError(f"unknown scenario {text!r}; choose from {', '.join(SCENARIOS)}")


def generate(key: str | int, size: int = GRID_SIZE, seed: int = -1) -> tuple[np.ndarray, np.ndarray, int]:
    """Return (cells, nutrients, seed_used). The outer border is always left EMPTY."""
    seed_used = resolve_seed(seed)
    rng = np.random.default_rng(seed_used)
    cells, nutrients = SCENARIOS[scenario_name(key)](size, rng)
    cells[0, :] = cells[-1, :] = CellState.EMPTY
    cells[:, 0] = cells[:, -1] = CellState.EMPTY
    return cells, nutrients, seed_used
