"""
App shell: command line, logging, display and main loop. Simulation is tick-driven from
elapsed time and tick_rate (independent of frame rate). Closing the window ends the run.
"""

import argparse
import logging

import pygame

import config
from tissue import Simulation
from tissue.constants import CellState
from tissue.params import ConfigurationError
from tissue.scenarios import SCENARIOS, generate, scenario_name
from ui import StatusPanel, cell_at, draw_grid

logger = logging.getLogger("tumor_lattice")

TITLE = "Tumor lattice"
GRID_PX = 640
PANEL_WIDTH = 280
BACKGROUND = (0, 0, 0)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="tumor-lattice", description="Nutrient-limited tumour growth on a 2D lattice.")
    p.add_argument("scenario", nargs="?", help=f"scenario name or id 0-5 ({', '.join(SCENARIOS)})")
    p.add_argument("--config", help="JSON config file (missing file = defaults)")
    p.add_argument("--size", type=int, help="lattice size N (NxN)")
    p.add_argument("--seed", type=int, help="PRNG seed; -1 = random")
    p.add_argument("--visibility", choices=("live", "snapshot"), help="intra-tick mitosis visibility")
    p.add_argument("--ticks", type=int, help="stop after this many ticks")
    p.add_argument("--headless", action="store_true", help="run without a window")
    p.add_argument("--log-every", type=int, help="log the epoch every N ticks")
    p.add_argument(
        "--log-level", default="INFO", type=str.upper, choices=("DEBUG", "INFO", "WARNING", "ERROR"), help="logging level"
    )
    p.add_argument("--save-config", metavar="NAME", help="save the effective config under configs/NAME.json")
    return p


def resolve_config(args: argparse.Namespace) -> dict:
    """Config file merged with defaults, then command-line overrides. Raises ConfigurationError."""
    cfg = config.load_config(args.config)
    overrides = {
        "scenario": args.scenario,
        "grid_size": args.size,
        "seed": args.seed,
        "visibility": args.visibility,
        "log_every": args.log_every,
    }
    cfg.update({k: v for k, v in overrides.items() if v is not None})
    problems = config.validate_config(cfg)
    if problems:
        raise ConfigurationError(problems)
    return cfg


def new_simulation(cfg: dict, seed: int) -> tuple[Simulation, int]:
    """Generate the scenario and build a simulation. Returns (simulation, seed_used)."""
    cells, nutrients, seed_used = generate(cfg["scenario"], cfg["grid_size"], seed)
    sim = Simulation(
        cells,
        nutrients,
        config.params_from_config(cfg),
        seed=seed_used,
        visibility=cfg["visibility"],
    )
    logger.info(
        "scenario %s, %dx%d, seed %d, visibility %s, %s",
        scenario_name(cfg["scenario"]), sim.size, sim.size, seed_used, sim.visibility.value, sim.params,
    )
    return sim, seed_used


def _log_epoch(sim: Simulation, log_every: int) -> None:
    if log_every > 0 and sim.tick_count % log_every == 0:
        logger.info("Epoch: %d %s", sim.tick_count, sim.counts())


def run_headless(cfg: dict, ticks: int | None) -> Simulation:
    """Step until ticks is reached (forever if None)."""
    sim, _ = new_simulation(cfg, cfg["seed"])
    log_every = cfg["log_every"]
    while ticks is None or sim.tick_count < ticks:
        sim.step()
        _log_epoch(sim, log_every)
    return sim


def run(cfg: dict, ticks: int | None = None) -> None:
    """Windowed loop. pygame is initialised here and always shut down on exit."""
    pygame.init()
    try:
        screen = pygame.display.set_mode((GRID_PX + PANEL_WIDTH, GRID_PX))
        pygame.display.set_caption(TITLE)
        clock = pygame.time.Clock()

        sim, seed_used = new_simulation(cfg, cfg["seed"])
        log_every = cfg["log_every"]

        def do_restart() -> None:
            nonlocal sim, seed_used
            # Fixed seed replays the run; -1 draws a new one
            sim, seed_used = new_simulation(cfg, cfg["seed"])

        grid_rect = pygame.Rect(0, 0, GRID_PX, GRID_PX)
        panel = StatusPanel(
            pygame.Rect(GRID_PX, 0, PANEL_WIDTH, GRID_PX),
            {"tick_rate": cfg["tick_rate"], "view_mode": cfg["view_mode"], "paused": False},
            on_restart=do_restart,
        )

        tick_accum = 0.0
        running = True
        while running:
            dt_s = clock.tick(60) / 1000.0

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                    break
                panel.handle_event(event)

            params = panel.get_params()
            num_ticks = 0
            if panel.take_step_request():
                num_ticks = 1
            elif not params["paused"]:
                lo, hi = config.TICK_RATE_RANGE
                tick_rate = max(lo, min(hi, params["tick_rate"]))
                tick_accum += dt_s * tick_rate
                max_ticks_per_frame = max(4, tick_rate // 10)
                num_ticks = min(int(tick_accum), max_ticks_per_frame)
                tick_accum -= num_ticks
                tick_accum = min(tick_accum, max_ticks_per_frame)
            for _ in range(num_ticks):
                if ticks is not None and sim.tick_count >= ticks:
                    running = False
                    break
                sim.step()
                _log_epoch(sim, log_every)

            hover = None
            ij = cell_at(grid_rect, sim.cells.shape, pygame.mouse.get_pos())
            if ij is not None:
                state = CellState(int(sim.cells[ij]))
                hover = f"({ij[0]}, {ij[1]}) {state.name.lower()}  n={sim.nutrients[ij]:.3f}"

            screen.fill(BACKGROUND)
            draw_grid(screen, grid_rect, sim.cells, sim.nutrients, view_mode=params["view_mode"])
            panel.draw(
                screen,
                tick_count=sim.tick_count,
                counts=sim.counts(),
                sim_params=sim.params,
                seed=seed_used,
                scenario=scenario_name(cfg["scenario"]),
                hover=hover,
            )
            pygame.display.flip()
        logger.info("window closed at epoch %d", sim.tick_count)
    finally:
        pygame.quit()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    try:
        cfg = resolve_config(args)
    except ConfigurationError as e:
        logger.error("%s", e)
        return 2
    if args.save_config:
        logger.info("saved config to %s", config.save_config(cfg, args.save_config))
    try:
        if args.headless:
            run_headless(cfg, args.ticks)
        else:
            run(cfg, args.ticks)
    except KeyboardInterrupt:
        logger.info("interrupted")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
