"""Arc length of parametric curves by fixed-step quadrature."""
from __future__ import annotations

from typing import Tuple

import numpy as np

from .constants import ARC_LENGTH_STEPS
from .primitives import as_evaluator, as_points_array

__all__ = ['arc_length']


def _parameters(start: float, end: float, steps: int) -> Tuple[np.ndarray, float]:
    steps = int(steps)
    if steps < 1:
        raise ValueError(f"steps must be >= 1, got {steps!r}")
    lo, hi = sorted((float(start), float(end)))
    return np.linspace(lo, hi, steps + 1), (hi - lo) / steps


def arc_length(curve_or_derivative, start: float, end: float,
               steps: int = ARC_LENGTH_STEPS, derivative: bool = False) -> float:
    """Length of a curve over ``[start, end]``.

    Parameters
    ----------
    curve_or_derivative : CurveEvaluator or callable
        By default a curve ``t -> point``; the length is the sum of the chords
        between ``steps + 1`` evenly spaced samples. With ``derivative=True``
        it is ``t -> r'(t)`` (a Vector2, an object with ``x``/``y`` or an
        (x, y) pair) and the speed ``|r'(t)|`` is integrated with the
        trapezoidal rule.
    start, end : float
        Parameter interval; the order does not matter and the result is never
        negative.
    steps : int
        Number of panels.
    """
    ts, dt = _parameters(start, end, steps)
    if dt == 0.0:
        return 0.0
    if derivative:
        d = as_points_array([curve_or_derivative(float(t)) for t in ts])
        speed = np.hypot(d[:, 0], d[:, 1])
        return float(0.5 * dt * np.sum(speed[1:] + speed[:-1]))
    curve = as_evaluator(curve_or_derivative)
    p = as_points_array([curve.evaluate(float(t)) for t in ts])
    return float(np.sum(np.hypot(np.diff(p[:, 0]), np.diff(p[:, 1]))))
