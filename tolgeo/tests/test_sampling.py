"""Tests for adaptive curve sampling and Monte Carlo region sampling."""
import math

import numpy as np

from tolgeo.core.primitives import CircleCurve, Point2D
from tolgeo.core.sampling import AdaptiveSampler, MonteCarloSampler
from tolgeo.core.tolerance import ToleranceContext


class TestAdaptiveSampler:

    def test_low_curvature_circle_splits_by_span(self):
        """Unit curvature never triggers refinement; spans are halved until <= 2pi/10."""
        sampler = AdaptiveSampler(ToleranceContext.standard())
        res = sampler.sample_curve(CircleCurve((0.0, 0.0), 1.0), lambda t: 1.0, 0.0, 2.0 * math.pi)
        # 16 leaves of width pi/8, each adding its midpoint and end
        assert len(res.points) == 33
        assert res.parameter_values[0] == 0.0
        assert res.parameter_values[-1] == 2.0 * math.pi
        assert np.all(np.diff(res.parameter_values) > 0)
        assert res.quality_metrics.uniformity_score > 0.99
        assert res.quality_metrics.coverage_ratio == 33 / 10

    def test_high_curvature_recurses_to_max_depth(self):
        sampler = AdaptiveSampler(ToleranceContext.standard(), max_recursion=8)
        res = sampler.sample_curve(lambda t: (t, 0.0), lambda t: 1e6, 0.0, 1.0)
        assert len(res.points) == 2 ** 8 + 1
        assert np.allclose(res.parameter_values, np.linspace(0.0, 1.0, 257))

    def test_samples_lie_on_curve(self):
        circle = CircleCurve((2.0, -1.0), 3.0)
        res = AdaptiveSampler().sample_curve(circle, lambda t: 1.0 / 3.0, 0.0, math.pi)
        for p in res.points:
            assert abs(p.distance_to(Point2D(2.0, -1.0)) - 3.0) < 1e-12

    def test_short_interval_without_curvature(self):
        res = AdaptiveSampler().sample_curve(lambda t: (t, t), lambda t: 0.0, 0.0, 0.1)
        assert res.parameter_values == [0.0, 0.05, 0.1]


class TestMonteCarloSampler:

    BOUNDS = (Point2D(-1.0, -1.0), Point2D(1.0, 1.0))

    def test_same_seed_same_points(self):
        a = MonteCarloSampler(seed=11).sample_region(self.BOUNDS, 50)
        b = MonteCarloSampler(seed=11).sample_region(self.BOUNDS, 50)
        assert a == b
        assert len(a) == 50

    def test_points_respect_bounds_and_predicate(self):
        inside = lambda p: p.x * p.x + p.y * p.y <= 1.0
        pts = MonteCarloSampler(seed=5).sample_region(self.BOUNDS, 100, inside)
        assert len(pts) == 100
        for p in pts:
            assert -1.0 <= p.x <= 1.0 and -1.0 <= p.y <= 1.0
            assert inside(p)

    def test_gives_up_after_bounded_attempts(self):
        pts = MonteCarloSampler(seed=1).sample_region(self.BOUNDS, 10, lambda p: False)
        assert pts == []
