"""Tolerance bundles for tolerant geometric computation.

A ``ToleranceContext`` groups the scalar thresholds every numerical decision
in tolgeo relies on (convergence, degeneracy detection, deduplication). It is
immutable; derived contexts are produced by ``scaled`` and ``tightened``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, fields

from .constants import (
    STANDARD_TOLERANCES,
    HIGH_PRECISION_TOLERANCES,
    LOW_PRECISION_TOLERANCES,
)

__all__ = ['ToleranceContext']


@dataclass(frozen=True)
class ToleranceContext:
    """Immutable set of domain tolerances.

    Attributes
    ----------
    linear : float
        Length tolerance (point coincidence, deduplication).
    angular : float
        Angle tolerance in radians; unit independent.
    parametric : float
        Tolerance in parameter space (Newton convergence, degeneracy).
    curvature : float
        Curvature tolerance (1 / length).
    area : float
        Area tolerance (length squared).
    volume : float
        Volume tolerance (length cubed).
    """
    linear: float
    angular: float
    parametric: float
    curvature: float
    area: float
    volume: float

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if (isinstance(value, bool) or not isinstance(value, (int, float))
                    or not math.isfinite(value) or value <= 0):
                raise ValueError(f"tolerance '{f.name}' must be a positive finite number, got {value!r}")

    @classmethod
    def standard(cls) -> 'ToleranceContext':
        return cls(*STANDARD_TOLERANCES)

    @classmethod
    def high_precision(cls) -> 'ToleranceContext':
        return cls(*HIGH_PRECISION_TOLERANCES)

    @classmethod
    def low_precision(cls) -> 'ToleranceContext':
        """Loose tolerances intended for prototyping and noisy input."""
        return cls(*LOW_PRECISION_TOLERANCES)

    @classmethod
    def default(cls) -> 'ToleranceContext':
        return cls.standard()

    def scaled(self, factor: float) -> 'ToleranceContext':
        """Return a context for a model expressed in units ``factor`` times larger.

        Length-type tolerances follow their dimension (area squared, volume
        cubed, curvature inverse). Angular and parametric tolerances are
        dimensionless and stay unchanged.
        """
        if not factor > 0:
            raise ValueError(f"scale factor must be positive, got {factor!r}")
        return ToleranceContext(
            linear=self.linear * factor,
            angular=self.angular,
            parametric=self.parametric,
            curvature=self.curvature / factor,
            area=self.area * factor * factor,
            volume=self.volume * factor * factor * factor,
        )

    def tightened(self, factor: float) -> 'ToleranceContext':
        """Multiply every tolerance by ``factor`` in (0, 1]."""
        if not (0.0 < factor <= 1.0):
            raise ValueError(f"tightening factor must be in (0, 1], got {factor!r}")
        return ToleranceContext(
            linear=self.linear * factor,
            angular=self.angular * factor,
            parametric=self.parametric * factor,
            curvature=self.curvature * factor,
            area=self.area * factor,
            volume=self.volume * factor,
        )

    def tolerant_eq(self, a: float, b: float) -> bool:
        """True when ``a`` and ``b`` differ by less than the linear tolerance."""
        return abs(a - b) < self.linear

    def tolerant_cmp(self, a: float, b: float) -> int:
        """Three-way comparison treating values within ``linear`` as equal."""
        diff = a - b
        if abs(diff) < self.linear:
            return 0
        return -1 if diff < 0 else 1

    def __str__(self) -> str:
        return (f"ToleranceContext {{ linear: {self.linear:.2e}, "
                f"angular: {self.angular:.2e}, parametric: {self.parametric:.2e} }}")
