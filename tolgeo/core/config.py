"""Configuration objects for tolgeo solvers and the intersection search."""
from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional

from .constants import (
    DEFAULT_GRID_SIZE,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_SCREENING_FACTOR,
    FD_STEP,
)
from .tolerance import ToleranceContext


@dataclass(frozen=True)
class SolverConfig:
    max_iterations: int = DEFAULT_MAX_ITERATIONS

    def __post_init__(self):
        if int(self.max_iterations) < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations!r}")


@dataclass(frozen=True)
class IntersectionConfig:
    """Heuristics of the grid-seeded intersection search.

    Attributes
    ----------
    grid_size : int
        Number of lattice samples per parameter axis.
    screening_factor : float
        A lattice pair becomes a refinement seed when its two curve points are
        closer than ``screening_factor * tolerance.linear``.
    fd_step : float
        Forward-difference step used to estimate the Jacobian.
    max_iterations : int
        Newton iteration cap per seed.
    """
    grid_size: int = DEFAULT_GRID_SIZE
    screening_factor: float = DEFAULT_SCREENING_FACTOR
    fd_step: float = FD_STEP
    max_iterations: int = DEFAULT_MAX_ITERATIONS

    def __post_init__(self):
        if int(self.grid_size) < 1:
            raise ValueError(f"grid_size must be >= 1, got {self.grid_size!r}")
        if not self.screening_factor > 0:
            raise ValueError(f"screening_factor must be positive, got {self.screening_factor!r}")
        if not self.fd_step > 0:
            raise ValueError(f"fd_step must be positive, got {self.fd_step!r}")
        if int(self.max_iterations) < 1:
            raise ValueError(f"max_iterations must be >= 1, got {self.max_iterations!r}")


@dataclass
class EngineConfig:
    """Unified configuration.

    Attributes
    ----------
    tolerance : ToleranceContext
        Tolerances shared by every operation.
    intersection : IntersectionConfig
        Intersection search heuristics.
    solver : SolverConfig
        Standalone Newton solver settings.
    extras : dict
        Free-form dictionary for caller extensions.
    """
    tolerance: ToleranceContext = field(default_factory=ToleranceContext.standard)
    intersection: IntersectionConfig = field(default_factory=IntersectionConfig)
    solver: SolverConfig = field(default_factory=SolverConfig)
    extras: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]] = None) -> 'EngineConfig':
        """Build a config from nested plain dicts, e.g. ``{'intersection': {'grid_size': 40}}``.

        ``tolerance`` may be a preset name ('standard', 'high_precision',
        'low_precision') or a dict of tolerance fields overriding the standard
        preset. Unknown keys raise ValueError.
        """
        data = dict(data or {})
        known = {'tolerance', 'intersection', 'solver', 'extras'}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"unknown config sections: {sorted(unknown)}")

        tol_spec = data.get('tolerance')
        if tol_spec is None:
            tol = ToleranceContext.standard()
        elif isinstance(tol_spec, str):
            presets = {
                'standard': ToleranceContext.standard,
                'high_precision': ToleranceContext.high_precision,
                'low_precision': ToleranceContext.low_precision,
            }
            if tol_spec not in presets:
                raise ValueError(f"unknown tolerance preset {tol_spec!r}")
            tol = presets[tol_spec]()
        else:
            tol = replace(ToleranceContext.standard(), **_checked(ToleranceContext, tol_spec))

        return cls(
            tolerance=tol,
            intersection=IntersectionConfig(**_checked(IntersectionConfig, data.get('intersection') or {})),
            solver=SolverConfig(**_checked(SolverConfig, data.get('solver') or {})),
            extras=dict(data.get('extras') or {}),
        )


def _checked(dc_type, overrides: Dict[str, Any]) -> Dict[str, Any]:
    names = {f.name for f in fields(dc_type)}
    bad = set(overrides) - names
    if bad:
        raise ValueError(f"unknown {dc_type.__name__} fields: {sorted(bad)}")
    return dict(overrides)


__all__ = ['SolverConfig', 'IntersectionConfig', 'EngineConfig']
