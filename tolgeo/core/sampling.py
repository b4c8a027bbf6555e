"""Curve and region sampling helpers.

``AdaptiveSampler`` bisects a parameter interval more finely where the curve
bends sharply; ``MonteCarloSampler`` draws seeded random points from a
rectangle, optionally filtered by a predicate.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

import numpy as np

from .constants import SAMPLER_MAX_POINTS, SAMPLER_MAX_RECURSION, SAMPLER_MIN_SAMPLES
from .logging_utils import get_logger
from .primitives import Point2D, as_evaluator
from .tolerance import ToleranceContext

logger = get_logger('tolgeo.sampling')

__all__ = ['QualityMetrics', 'SamplingResult', 'AdaptiveSampler', 'MonteCarloSampler']

# Intervals wider than a tenth of a full turn are always split
_MAX_SPAN = 2.0 * math.pi / 10.0


@dataclass
class QualityMetrics:
    uniformity_score: float = 0.0
    coverage_ratio: float = 0.0
    density_variance: float = 0.0


@dataclass
class SamplingResult:
    points: List[Point2D] = field(default_factory=list)
    parameter_values: List[float] = field(default_factory=list)
    quality_metrics: QualityMetrics = field(default_factory=QualityMetrics)


class AdaptiveSampler:
    def __init__(self, tolerance: Optional[ToleranceContext] = None,
                 max_recursion: int = SAMPLER_MAX_RECURSION,
                 min_samples: int = SAMPLER_MIN_SAMPLES,
                 max_points: int = SAMPLER_MAX_POINTS):
        self.tolerance = tolerance if tolerance is not None else ToleranceContext.standard()
        self.max_recursion = int(max_recursion)
        self.min_samples = int(min_samples)
        self.max_points = int(max_points)

    def sample_curve(self, curve, curvature_fn: Callable[[float], float],
                     start: float, end: float) -> SamplingResult:
        """Sample ``curve`` on ``[start, end]``, refining where ``|curvature_fn|`` is large.

        Parameter values are returned in increasing order; the start point is
        always the first sample.
        """
        ev = as_evaluator(curve)
        params: List[float] = [float(start)]
        points: List[Point2D] = [ev.evaluate(float(start))]
        # Iterative depth-first bisection, left halves first
        stack: List[Tuple[float, float, int]] = [(float(start), float(end), 0)]
        curvature_limit = 1.0 / self.tolerance.curvature
        while stack:
            a, b, depth = stack.pop()
            if depth >= self.max_recursion:
                params.append(b); points.append(ev.evaluate(b))
                continue
            mid = 0.5 * (a + b)
            split = abs(curvature_fn(mid)) > curvature_limit or (b - a) > _MAX_SPAN
            if split and len(points) < self.max_points:
                stack.append((mid, b, depth + 1))
                stack.append((a, mid, depth + 1))
            else:
                params.append(mid); points.append(ev.evaluate(mid))
                params.append(b); points.append(ev.evaluate(b))
        metrics = self._quality_metrics(points, params)
        logger.debug("adaptive sampling [%g, %g]: %d points, uniformity=%.3f",
                     start, end, len(points), metrics.uniformity_score)
        return SamplingResult(points=points, parameter_values=params, quality_metrics=metrics)

    def _quality_metrics(self, points: List[Point2D], params: List[float]) -> QualityMetrics:
        if len(points) < 2:
            return QualityMetrics()
        xy = np.array([tuple(p) for p in points], dtype=np.float64)
        gaps = np.hypot(np.diff(xy[:, 0]), np.diff(xy[:, 1]))
        mean = float(gaps.mean())
        variance = float(gaps.var())
        if variance > 0 and mean > 0:
            uniformity = 1.0 / (1.0 + math.sqrt(variance) / mean)
        else:
            uniformity = 1.0
        return QualityMetrics(
            uniformity_score=uniformity,
            coverage_ratio=len(params) / float(self.min_samples),
            density_variance=variance,
        )


class MonteCarloSampler:
    """Seeded rejection sampler over an axis-aligned rectangle."""

    def __init__(self, seed: int = 0):
        self.seed = int(seed)

    def sample_region(self, bounds: Tuple[Point2D, Point2D], count: int,
                      predicate: Optional[Callable[[Point2D], bool]] = None) -> List[Point2D]:
        """Draw up to ``count`` accepted points, giving up after ``10 * count`` attempts."""
        lo, hi = bounds
        rng = np.random.default_rng(self.seed)
        accepted: List[Point2D] = []
        attempts = 0
        while len(accepted) < count and attempts < count * 10:
            u, v = rng.random(2)
            p = Point2D(lo.x + u * (hi.x - lo.x), lo.y + v * (hi.y - lo.y))
            attempts += 1
            if predicate is None or predicate(p):
                accepted.append(p)
        if len(accepted) < count:
            logger.debug("monte carlo: %d/%d points accepted after %d attempts",
                         len(accepted), count, attempts)
        return accepted
