"""Load/save run configuration. Configs live in configs/ as {name}.json; parameters only, never grid state."""

import json
import re
from pathlib import Path

from tissue.constants import GRID_SIZE
from tissue.params import ConfigurationError, SimulationParams, Visibility
from tissue.scenarios import UnknownScenarioError, scenario_name

CONFIG_DIR = Path(__file__).resolve().parent / "configs"

VIEW_MODES = ("cells", "nutrients", "overlay")

TICK_RATE_RANGE = (1, 60)

# Tuned parameter set per scenario; a config's "params" overrides these key by key.
_SHARED_PRESET = {"diffusion_rate": 0.05, "death_threshold": 0.18, "divide_threshold": 0.55, "divide_cost": 0.18}
SCENARIO_PRESETS = {
    "sparse_noise": {"diffusion_rate": 0.01, "death_threshold": 0.22, "divide_threshold": 0.62, "divide_cost": 0.18},
    "radial_tumor": _SHARED_PRESET,
    "competing_colonies": _SHARED_PRESET,
    "stripes": _SHARED_PRESET,
    "traveling_wave": _SHARED_PRESET,
    "ring": _SHARED_PRESET,
    "random_cluster": SimulationParams().to_dict(),
    "central_disk": {"diffusion_rate": 0.05, "death_threshold": 0.25, "divide_threshold": 0.65, "divide_cost": 0.10},
    "multiple_clusters": {"diffusion_rate": 0.055, "death_threshold": 0.22, "divide_threshold": 0.62, "divide_cost": 0.11},
}


def _sanitize_name(name: str) -> str:
    s = (name or "").strip()
    s = re.sub(r"[^\w\s-]", "", s)
    s = re.sub(r"[\s-]+", "_", s).strip("_")
    return s[:64] or "unnamed"


def get_config_path(name: str, config_dir: Path | None = None) -> Path:
    return (config_dir or CONFIG_DIR) / f"{_sanitize_name(name)}.json"


def list_configs(config_dir: Path | None = None) -> list[str]:
    """Names of saved configs, sorted case-insensitively."""
    d = config_dir or CONFIG_DIR
    if not d.exists():
        return []
    return sorted((f.stem for f in d.glob("*.json")), key=str.lower)


def load_config(path: Path | str | None = None) -> dict:
    """Missing file = defaults. Unreadable or malformed file raises ConfigurationError."""
    if path is None:
        return _default_config()
    p = Path(path)
    if not p.exists():
        return _default_config()
    try:
        with open(p, "r") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigurationError([f"{p}: cannot read config ({e})"]) from e
    if not isinstance(data, dict):
        raise ConfigurationError([f"{p}: expected a JSON object"])
    return _merge_defaults(data)


def save_config(cfg: dict, name: str, config_dir: Path | None = None) -> Path:
    d = config_dir or CONFIG_DIR
    d.mkdir(parents=True, exist_ok=True)
    path = get_config_path(name, d)
    with open(path, "w") as f:
        json.dump(_merge_defaults(cfg), f, indent=2)
    return path


def delete_config(name: str, config_dir: Path | None = None) -> None:
    get_config_path(name, config_dir).unlink(missing_ok=True)


def scenario_preset(key: str | int) -> dict:
    """Tuned parameters for a scenario name or id. Raises UnknownScenarioError."""
    return dict(SCENARIO_PRESETS[scenario_name(key)])


def params_from_config(cfg: dict) -> SimulationParams:
    """The scenario's preset with the config's "params" laid over it."""
    return SimulationParams.from_dict({**scenario_preset(cfg["scenario"]), **cfg.get("params", {})})


def _int_problem(cfg: dict, key: str, lo: int, hi: int | None = None) -> str | None:
    value = cfg.get(key)
    if isinstance(value, bool) or not isinstance(value, int) or value < lo or (hi is not None and value > hi):
        bound = f"in {lo}-{hi}" if hi is not None else f">= {lo}"
        return f"{key}: expected an integer {bound}, got {value!r}"
    return None


def validate_config(cfg: dict) -> list[str]:
    """Every problem in a merged config dict; empty list = usable."""
    problems = []
    try:
        SimulationParams.from_dict(cfg.get("params", {}))
    except ConfigurationError as e:
        problems.extend(e.problems)
    try:
        Visibility.parse(cfg.get("visibility", Visibility.LIVE))
    except ConfigurationError as e:
        problems.extend(e.problems)
    try:
        scenario_name(cfg.get("scenario"))
    except UnknownScenarioError as e:
        problems.append(f"scenario: {e.args[0]}")
    for key, lo, hi in (("grid_size", 3, None), ("seed", -1, None), ("log_every", 0, None), ("tick_rate", *TICK_RATE_RANGE)):
        problem = _int_problem(cfg, key, lo, hi)
        if problem:
            problems.append(problem)
    if cfg.get("view_mode") not in VIEW_MODES:
        problems.append(f"view_mode: expected one of {', '.join(VIEW_MODES)}, got {cfg.get('view_mode')!r}")
    return problems


def _default_config() -> dict:
    return {
        "grid_size": GRID_SIZE,
        "scenario": "radial_tumor",
        "seed": -1,
        "tick_rate": 30,
        "view_mode": "cells",
        "visibility": Visibility.LIVE.value,
        "log_every": 100,
        "params": {},
    }


def _merge_defaults(data: dict) -> dict:
    d = _default_config()
    if isinstance(data.get("params"), dict):
        d["params"] = dict(data["params"])
    for k in ("grid_size", "scenario", "seed", "tick_rate", "view_mode", "visibility", "log_every"):
        if k in data:
            d[k] = data[k]
    return d
