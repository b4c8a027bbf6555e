"""Least-squares fitting of circles and lines to unordered point sets.

Circle fitting uses Kasa's algebraic formulation: minimise
``sum (x^2 + y^2 + D x + E y + F)^2`` which reduces to a 3x3 linear system
in ``(D, E, F)`` solved here by Cramer's rule. Line fitting is ordinary least
squares of ``y`` on ``x`` with an explicit vertical fallback.
"""
from __future__ import annotations

import math
from typing import Optional, Sequence, Tuple

import numpy as np

from .errors import DegeneratePointSet, InsufficientPoints, NegativeRadiusSquared
from .logging_utils import get_logger
from .primitives import Point2D, Vector2, as_points_array
from .tolerance import ToleranceContext

logger = get_logger('tolgeo.fitting')

__all__ = ['LeastSquaresFitter', 'solve_3x3_cramer', 'circle_residuals']


def _det3(m) -> float:
    return (m[0][0] * (m[1][1] * m[2][2] - m[1][2] * m[2][1])
            - m[0][1] * (m[1][0] * m[2][2] - m[1][2] * m[2][0])
            + m[0][2] * (m[1][0] * m[2][1] - m[1][1] * m[2][0]))


def solve_3x3_cramer(A: Sequence[Sequence[float]], b: Sequence[float],
                     tolerance: float) -> Tuple[float, float, float]:
    """Solve ``A x = b`` by full determinant expansion.

    Raises DegeneratePointSet when ``|det A| < tolerance``.
    """
    m = [[float(v) for v in row] for row in A]
    det = _det3(m)
    if abs(det) < tolerance:
        raise DegeneratePointSet(det, tolerance)
    out = []
    for col in range(3):
        mc = [row[:] for row in m]
        for r in range(3):
            mc[r][col] = float(b[r])
        out.append(_det3(mc) / det)
    return out[0], out[1], out[2]


def circle_residuals(points, center: Point2D, radius: float) -> np.ndarray:
    """Signed radial residuals ``|p - center| - radius`` for each point."""
    pts = as_points_array(points)
    return np.hypot(pts[:, 0] - center.x, pts[:, 1] - center.y) - radius


class LeastSquaresFitter:
    def __init__(self, tolerance: Optional[ToleranceContext] = None):
        self.tolerance = tolerance if tolerance is not None else ToleranceContext.standard()

    def fit_circle(self, points) -> Tuple[Point2D, float]:
        """Fit a circle to at least 3 points; returns ``(center, radius)``.

        Raises
        ------
        InsufficientPoints
            Fewer than 3 points.
        DegeneratePointSet
            Normal equations singular (collinear or coincident points).
        NegativeRadiusSquared
            Squared radius more negative than the parametric tolerance.
        """
        pts = as_points_array(points)
        n = pts.shape[0]
        if n < 3:
            raise InsufficientPoints(3, n, 'circle')
        tol = self.tolerance.parametric
        x = pts[:, 0]; y = pts[:, 1]
        x2 = x * x; y2 = y * y
        sx, sy = x.sum(), y.sum()
        sxx, syy, sxy = x2.sum(), y2.sum(), (x * y).sum()
        sxxx, syyy = (x2 * x).sum(), (y2 * y).sum()
        sxyy, sxxy = (x * y2).sum(), (x2 * y).sum()

        A = ((sxx, sxy, sx),
             (sxy, syy, sy),
             (sx, sy, float(n)))
        b = (-(sxxx + sxyy), -(sxxy + syyy), -(sxx + syy))
        D, E, F = solve_3x3_cramer(A, b, tol)

        cx, cy = -D / 2.0, -E / 2.0
        r2 = cx * cx + cy * cy - F
        if r2 < -tol:
            raise NegativeRadiusSquared(r2, tol)
        radius = math.sqrt(max(r2, 0.0))
        return Point2D(float(cx), float(cy)), float(radius)

    def fit_line(self, points) -> Tuple[Point2D, Vector2]:
        """Fit a line to at least 2 points; returns ``(point_on_line, unit_direction)``.

        Near-vertical data (all x nearly equal) is not an error: the centroid
        and the direction (0, 1) are returned.
        """
        pts = as_points_array(points)
        n = pts.shape[0]
        if n < 2:
            raise InsufficientPoints(2, n, 'line')
        x = pts[:, 0]; y = pts[:, 1]
        sx, sy = float(x.sum()), float(y.sum())
        sxy, sxx = float((x * y).sum()), float((x * x).sum())

        denom = n * sxx - sx * sx
        if denom < self.tolerance.parametric:
            logger.debug("fit_line: vertical fallback (denominator %.3e)", denom)
            return Point2D(sx / n, sy / n), Vector2.y_axis()

        slope = (n * sxy - sx * sy) / denom
        intercept = (sy - slope * sx) / n
        direction = Vector2(1.0, slope).normalize() or Vector2.x_axis()
        return Point2D(0.0, intercept), direction
