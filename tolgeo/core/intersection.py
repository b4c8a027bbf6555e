"""Curve-curve intersection search without a caller supplied initial guess.

The search runs in four phases:

1. grid seeding: a ``grid_size x grid_size`` lattice of parameter pairs;
2. coarse screening: pairs whose curve points lie within
   ``screening_factor * linear`` become seeds;
3. local refinement: each seed is polished with a 2D Newton solve on
   ``curve1(t1) - curve2(t2) = 0`` using a forward-difference Jacobian;
4. deduplication: candidates sorted by parameter, a candidate is kept only
   when it is at least ``linear`` away from every candidate already kept.

Refinement failures never escape: a seed that hits a degenerate Jacobian or
the iteration cap simply yields no candidate.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from .config import IntersectionConfig
from .constants import FD_STEP
from .errors import GeometryError
from .logging_utils import get_logger
from .newton import NewtonSolver
from .primitives import CurveEvaluator, Point2D, as_evaluator
from .stats import SearchStats, format_stats
from .tolerance import ToleranceContext

logger = get_logger('tolgeo.intersection')

__all__ = ['IntersectionCandidate', 'CurveIntersection', 'finite_difference_jacobian']


@dataclass(frozen=True)
class IntersectionCandidate:
    """A refined intersection.

    ``point`` is evaluated on the first curve at ``parameter``; ``parameter2``
    is the matching parameter on the second curve. ``confidence`` is
    ``1 / (1 + final_error)`` of the Newton solve, in (0, 1].
    """
    point: Point2D
    parameter: float
    distance: float
    confidence: float
    parameter2: float = float('nan')


def finite_difference_jacobian(curve1: CurveEvaluator, curve2: CurveEvaluator,
                               t1: float, t2: float, h: float = FD_STEP):
    """Residual and forward-difference Jacobian of ``curve1(t1) - curve2(t2)``.

    Returns ``(f1, f2, J)``. The second column carries a minus sign because the
    residual depends on ``-curve2(t2)``.
    """
    p1 = curve1.evaluate(t1)
    p2 = curve2.evaluate(t2)
    p1h = curve1.evaluate(t1 + h)
    p2h = curve2.evaluate(t2 + h)
    f1 = p1.x - p2.x
    f2 = p1.y - p2.y
    J = (
        ((p1h.x - p1.x) / h, -(p2h.x - p2.x) / h),
        ((p1h.y - p1.y) / h, -(p2h.y - p2.y) / h),
    )
    return f1, f2, J


class CurveIntersection:
    """Grid-seeded Newton intersection finder for two parametric curves."""

    def __init__(self, tolerance: Optional[ToleranceContext] = None,
                 config: Optional[IntersectionConfig] = None):
        self.tolerance = tolerance if tolerance is not None else ToleranceContext.standard()
        self.config = config if config is not None else IntersectionConfig()
        self.newton_solver = NewtonSolver(self.tolerance, max_iterations=self.config.max_iterations)
        self.last_stats = SearchStats()

    @classmethod
    def from_config(cls, config) -> 'CurveIntersection':
        """Build from an EngineConfig (tolerance + intersection section)."""
        return cls(config.tolerance, config.intersection)

    def find_intersections(self, curve1, curve2,
                           t1_range: Tuple[float, float],
                           t2_range: Tuple[float, float]) -> List[IntersectionCandidate]:
        """Return the distinct intersections of ``curve1`` and ``curve2``, sorted by parameter.

        Curves may be CurveEvaluator objects or plain callables ``t -> point``.
        Never raises for numerical failures; an empty list means nothing was found.
        """
        c1 = as_evaluator(curve1)
        c2 = as_evaluator(curve2)
        stats = SearchStats()
        self.last_stats = stats

        seeds = self._screen_seeds(c1, c2, t1_range, t2_range, stats)
        candidates = []
        for t1, t2 in seeds:
            cand = self._refine(c1, c2, t1, t2, stats)
            if cand is not None:
                candidates.append(cand)

        unique = self._remove_duplicates(candidates)
        stats.duplicates_removed = len(candidates) - len(unique)
        stats.candidates = len(unique)
        logger.debug("find_intersections: %s", format_stats(stats))
        return unique

    def _lattice(self, t_range: Tuple[float, float]) -> np.ndarray:
        n = int(self.config.grid_size)
        start, end = float(t_range[0]), float(t_range[1])
        step = (end - start) / n
        return start + np.arange(n, dtype=np.float64) * step

    def _screen_seeds(self, c1: CurveEvaluator, c2: CurveEvaluator,
                      t1_range, t2_range, stats: SearchStats) -> List[Tuple[float, float]]:
        t1s = self._lattice(t1_range)
        t2s = self._lattice(t2_range)
        # Evaluators are deterministic, so one sample per lattice coordinate suffices
        p1 = np.array([tuple(c1.evaluate(float(t))) for t in t1s], dtype=np.float64)
        p2 = np.array([tuple(c2.evaluate(float(t))) for t in t2s], dtype=np.float64)
        dist = np.hypot(p1[:, None, 0] - p2[None, :, 0], p1[:, None, 1] - p2[None, :, 1])
        stats.seeds_evaluated = int(dist.size)
        threshold = self.config.screening_factor * self.tolerance.linear
        ii, jj = np.nonzero(dist < threshold)  # row-major: deterministic seed order
        stats.seeds_screened = int(ii.size)
        return [(float(t1s[i]), float(t2s[j])) for i, j in zip(ii, jj)]

    def _refine(self, c1: CurveEvaluator, c2: CurveEvaluator, t1: float, t2: float,
                stats: SearchStats) -> Optional[IntersectionCandidate]:
        h = self.config.fd_step

        def system(a, b):
            return finite_difference_jacobian(c1, c2, a, b, h)

        try:
            (r1, r2), info = self.newton_solver.solve_2d(system, (t1, t2))
        except GeometryError as exc:
            stats.refine_degenerate += 1
            logger.debug("seed (%.6g, %.6g) dropped: %s", t1, t2, exc)
            return None
        if not info.converged:
            stats.refine_not_converged += 1
            logger.debug("seed (%.6g, %.6g) dropped: not converged after %d iterations",
                         t1, t2, info.iterations)
            return None
        stats.refine_converged += 1
        point = c1.evaluate(r1)
        return IntersectionCandidate(
            point=point,
            parameter=r1,
            distance=point.distance_to(c2.evaluate(r2)),
            confidence=1.0 / (1.0 + info.final_error),
            parameter2=r2,
        )

    def _remove_duplicates(self, candidates: List[IntersectionCandidate]) -> List[IntersectionCandidate]:
        unique: List[IntersectionCandidate] = []
        for cand in sorted(candidates, key=lambda c: c.parameter):
            if all(cand.point.distance_to(kept.point) >= self.tolerance.linear for kept in unique):
                unique.append(cand)
        return unique
