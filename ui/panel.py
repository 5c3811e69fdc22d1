"""Right panel: tick and population readout, run controls (play/pause, step, restart), view mode, tick rate."""

import pygame
from typing import Callable

import config
from tissue.constants import CellState
from tissue.params import SimulationParams
from ui.colors import STATE_RGB

FONT_SIZE = 16
LABEL_COLOR = (200, 200, 200)
DIM_COLOR = (140, 140, 140)
SLIDER_COLOR = (100, 100, 100)
KNOB_COLOR = (180, 180, 180)
BUTTON_COLOR = (60, 60, 60)
BUTTON_HOVER = (80, 80, 80)

VIEW_MODE_LABELS = {"cells": "Cells", "nutrients": "Nutrients", "overlay": "Overlay"}


class StatusPanel:
    """State: params dict (tick_rate, view_mode, paused, step_requested); draw and handle events."""

    def __init__(self, rect: pygame.Rect, initial: dict, on_restart: Callable[[], None]) -> None:
        self.rect = rect
        self.params = {
            "tick_rate": initial.get("tick_rate", 30),
            "view_mode": initial.get("view_mode", "cells"),
            "paused": initial.get("paused", True),
            "step_requested": False,
        }
        self.on_restart = on_restart
        self._font = None
        self._slider_rects: dict = {}
        self._button_rects: dict = {}
        self._dragging: str | None = None

    def _ensure_font(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.Font(None, FONT_SIZE)
        return self._font

    def get_params(self) -> dict:
        return self.params.copy()

    def take_step_request(self) -> bool:
        """True once per click on Step."""
        requested = self.params["step_requested"]
        self.params["step_requested"] = False
        return requested

    def draw(
        self,
        surface: pygame.Surface,
        tick_count: int,
        counts: dict[str, int],
        sim_params: SimulationParams,
        seed: int,
        scenario: str,
        hover: str | None = None,
    ) -> None:
        font = self._ensure_font()
        x, y = self.rect.x + 8, self.rect.y + 6
        line_h = 18
        gap = 4
        self._slider_rects.clear()
        self._button_rects.clear()
        mouse = pygame.mouse.get_pos()

        for text in (f"Tick: {tick_count}", f"Scenario: {scenario}", f"Seed: {seed}"):
            surface.blit(font.render(text, True, LABEL_COLOR), (x, y))
            y += line_h
        y += gap

        # Population, one swatch per state
        for state in CellState:
            swatch = pygame.Rect(x, y + 3, 10, 10)
            pygame.draw.rect(surface, tuple(int(c) for c in STATE_RGB[state]), swatch)
            pygame.draw.rect(surface, LABEL_COLOR, swatch, 1)
            label = f"{state.name.capitalize()}: {counts.get(state.name.lower(), 0)}"
            surface.blit(font.render(label, True, LABEL_COLOR), (x + 16, y))
            y += line_h
        y += gap

        # Parameters are fixed for the run; shown read-only
        for name, value in sim_params.to_dict().items():
            surface.blit(font.render(f"{name.replace('_', ' ')}: {value:.3f}", True, DIM_COLOR), (x, y))
            y += line_h
        y += gap

        # View mode: click to cycle
        label = font.render("View", True, LABEL_COLOR)
        surface.blit(label, (x, y))
        y += line_h
        view_rect = pygame.Rect(x, y, 160, 18)
        pygame.draw.rect(surface, BUTTON_HOVER if view_rect.collidepoint(mouse) else SLIDER_COLOR, view_rect)
        t = font.render(VIEW_MODE_LABELS.get(self.params["view_mode"], "Cells"), True, LABEL_COLOR)
        surface.blit(t, (view_rect.x + 4, view_rect.y + 2))
        self._button_rects["view_mode"] = view_rect
        y += 18 + gap * 2

        # Tick rate
        lo, hi = config.TICK_RATE_RANGE
        slider_w = self.rect.width - 16 - 44
        slider_h = 12
        surface.blit(font.render(f"Tick rate ({lo}–{hi})", True, LABEL_COLOR), (x, y))
        y += line_h
        sr = _draw_slider(surface, x, y, slider_w, slider_h, self.params["tick_rate"], lo, hi)
        surface.blit(font.render(str(self.params["tick_rate"]), True, LABEL_COLOR), (x + slider_w + 4, y))
        self._slider_rects["tick_rate"] = (sr, lo, hi)
        y += slider_h + gap * 2

        # Start / Pause / Resume, Step, Restart
        btn_h = 26
        bx = x
        if self.params["paused"]:
            pause_text = "Start" if tick_count == 0 else "Resume"
        else:
            pause_text = "Pause"
        for key, text, w in (("pause", pause_text, 80), ("step", "Step", 60), ("restart", "Restart", 80)):
            r = pygame.Rect(bx, y, w, btn_h)
            pygame.draw.rect(surface, BUTTON_HOVER if r.collidepoint(mouse) else BUTTON_COLOR, r)
            surface.blit(font.render(text, True, LABEL_COLOR), (r.x + 6, r.y + 6))
            self._button_rects[key] = r
            bx += w + 4
        y += btn_h + gap * 2

        if hover:
            surface.blit(font.render(hover, True, LABEL_COLOR), (x, y))

    def handle_event(self, event: pygame.event.Event) -> bool:
        """Returns True if event was consumed."""
        if event.type == pygame.MOUSEBUTTONDOWN:
            for key, (slider_rect, lo, hi) in self._slider_rects.items():
                if slider_rect.collidepoint(event.pos):
                    self._dragging = key
                    self._set_slider_value(key, event.pos, slider_rect, lo, hi)
                    return True
            for key, btn_rect in self._button_rects.items():
                if btn_rect.collidepoint(event.pos):
                    if key == "pause":
                        self.params["paused"] = not self.params["paused"]
                    elif key == "step":
                        self.params["paused"] = True
                        self.params["step_requested"] = True
                    elif key == "restart":
                        self.on_restart()
                    elif key == "view_mode":
                        self.cycle_view_mode()
                    return True
            return False
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_SPACE:
                self.params["paused"] = not self.params["paused"]
                return True
            if event.key == pygame.K_v:
                self.cycle_view_mode()
                return True
            if event.key == pygame.K_n:
                self.params["paused"] = True
                self.params["step_requested"] = True
                return True
        elif event.type == pygame.MOUSEBUTTONUP:
            self._dragging = None
        elif event.type == pygame.MOUSEMOTION:
            if self._dragging is not None and self._dragging in self._slider_rects:
                sr, lo, hi = self._slider_rects[self._dragging]
                self._set_slider_value(self._dragging, event.pos, sr, lo, hi)
                return True
        return False

    def cycle_view_mode(self) -> None:
        modes = config.VIEW_MODES
        current = self.params["view_mode"]
        idx = modes.index(current) if current in modes else -1
        self.params["view_mode"] = modes[(idx + 1) % len(modes)]

    def _set_slider_value(self, key: str, pos: tuple[int, int], slider_rect: pygame.Rect, lo: int, hi: int) -> None:
        t = (pos[0] - slider_rect.x) / max(1, slider_rect.width - 8)
        t = max(0, min(1, t))
        self.params[key] = int(lo + t * (hi - lo))


def _draw_slider(
    surface: pygame.Surface, x: int, y: int, w: int, h: int, value: int, vmin: int, vmax: int
) -> pygame.Rect:
    rect = pygame.Rect(x, y, w, h)
    pygame.draw.rect(surface, SLIDER_COLOR, rect)
    t = (value - vmin) / max(1, vmax - vmin)
    knob_x = x + 4 + int(t * (w - 8))
    pygame.draw.rect(surface, KNOB_COLOR, (knob_x, y, 8, h))
    return rect
