"""Left panel: the lattice with a thin grey border; cell colours from the simulation state."""

import pygame
import numpy as np

from ui.colors import grid_to_rgb

BORDER_COLOR = (80, 80, 80)
BORDER_PX = 1


def _rgb_to_surface(rgb: np.ndarray) -> pygame.Surface:
    """(H, W, 3) uint8 row-major -> pygame surface of size (W, H)."""
    h, w = rgb.shape[0], rgb.shape[1]
    data = np.ascontiguousarray(rgb).tobytes()
    try:
        return pygame.image.fromstring(data, (w, h), "RGB")
    except (TypeError, AttributeError):
        return pygame.image.frombytes(data, (w, h), "RGB")


def cell_at(grid_rect: pygame.Rect, shape: tuple[int, int], pos: tuple[int, int]) -> tuple[int, int] | None:
    """Lattice (row, col) under a screen position, or None outside the grid."""
    if not grid_rect.collidepoint(pos):
        return None
    n, m = shape
    i = (pos[1] - grid_rect.y) * n // max(1, grid_rect.height)
    j = (pos[0] - grid_rect.x) * m // max(1, grid_rect.width)
    return (min(i, n - 1), min(j, m - 1))


def draw_grid(
    surface: pygame.Surface,
    grid_rect: pygame.Rect,
    states: np.ndarray,
    nutrients: np.ndarray,
    view_mode: str = "cells",
) -> None:
    """Draw the lattice into grid_rect, nearest-neighbour scaled so each cell stays a crisp block."""
    n, m = states.shape
    if n == 0 or m == 0:
        return
    img = _rgb_to_surface(grid_to_rgb(states, nutrients, view_mode))
    if img.get_size() != grid_rect.size:
        img = pygame.transform.scale(img, grid_rect.size)
    surface.blit(img, grid_rect.topleft)
    pygame.draw.rect(surface, BORDER_COLOR, grid_rect, BORDER_PX)
