"""UI: lattice view and status panel."""

from ui.grid_view import cell_at, draw_grid
from ui.panel import StatusPanel
from ui.colors import grid_to_rgb

__all__ = ["cell_at", "draw_grid", "StatusPanel", "grid_to_rgb"]
