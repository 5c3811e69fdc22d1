"""Simulation parameters, the intra-tick visibility policy, and the configuration error."""

import math
from dataclasses import dataclass, fields
from enum import Enum

DEFAULT_DIFFUSION_RATE = 0.06
DEFAULT_DEATH_THRESHOLD = 0.20
DEFAULT_DIVIDE_THRESHOLD = 0.60
DEFAULT_DIVIDE_COST = 0.12

PARAM_RANGE = (0.0, 1.0)


class ConfigurationError(ValueError):
    """Raised when a simulation cannot be set up. problems lists every missing/invalid input."""

    def __init__(self, problems: list[str]) -> None:
        self.problems = list(problems)
        super().__init__("invalid simulation configuration: " + "; ".join(self.problems))


class Visibility(str, Enum):
    """Whether mitosis candidates see divisions made earlier in the same tick."""

    LIVE = "live"
    SNAPSHOT = "snapshot"

    @classmethod
    def parse(cls, value: "Visibility | str") -> "Visibility":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            choices = ", ".join(v.value for v in cls)
            raise ConfigurationError([f"visibility: unknown policy {value!r} (expected one of {choices})"]) from None


def _check_number(name: str, value) -> str | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return f"{name}: expected a number, got {type(value).__name__}"
    if not math.isfinite(value):
        return f"{name}: expected a finite number, got {value!r}"
    return None


@dataclass(frozen=True)
class SimulationParams:
    """Immutable per-simulation parameters. Documented range is [0, 1]; range is not enforced."""

    diffusion_rate: float = DEFAULT_DIFFUSION_RATE
    death_threshold: float = DEFAULT_DEATH_THRESHOLD
    divide_threshold: float = DEFAULT_DIVIDE_THRESHOLD
    divide_cost: float = DEFAULT_DIVIDE_COST

    def __post_init__(self) -> None:
        problems = []
        for f in fields(self):
            value = getattr(self, f.name)
            problem = _check_number(f.name, value)
            if problem:
                problems.append(problem)
            else:
                object.__setattr__(self, f.name, float(value))
        if problems:
            raise ConfigurationError(problems)

    @classmethod
    def from_dict(cls, data: dict) -> "SimulationParams":
        """Build from a config mapping; missing keys take defaults. Reports all bad keys together."""
        known = {f.name for f in fields(cls)}
        problems = [f"{k}: unknown parameter" for k in data if k not in known]
        kwargs = {}
        for name in known:
            if name not in data:
                continue
            problem = _check_number(name, data[name])
            if problem:
                problems.append(problem)
            else:
                kwargs[name] = data[name]
        if problems:
            raise ConfigurationError(sorted(problems))
        return cls(**kwargs)

    def to_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}

    def out_of_range(self) -> list[str]:
        """Names of parameters outside PARAM_RANGE. Caller's hazard; the simulation runs anyway."""
        lo, hi = PARAM_RANGE
        return [name for name, value in self.to_dict().items() if not lo <= value <= hi]
