"""Minimal 2D value types and curve evaluator adapters.

These are the collaborator interfaces the numerical routines consume: a
point with Euclidean ``distance_to``, a vector whose ``normalize`` may come
back empty, and a one-method curve evaluator ``evaluate(t) -> Point2D``.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Sequence, Tuple, Union, runtime_checkable

import numpy as np

from .constants import NORMALIZE_EPS

__all__ = [
    'Point2D', 'Vector2', 'CurveEvaluator', 'FunctionCurve', 'CircleCurve', 'LineCurve',
    'as_evaluator', 'as_points_array',
]


@dataclass(frozen=True)
class Point2D:
    x: float
    y: float

    @classmethod
    def from_array(cls, xy) -> 'Point2D':
        a = np.asarray(xy, dtype=np.float64).reshape(-1)
        if a.shape[0] != 2:
            raise ValueError(f"expected 2 coordinates, got shape {np.shape(xy)}")
        return cls(float(a[0]), float(a[1]))

    def distance_to(self, other: 'Point2D') -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def as_array(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)

    def __sub__(self, other: 'Point2D') -> 'Vector2':
        return Vector2(self.x - other.x, self.y - other.y)

    def __iter__(self):
        yield self.x
        yield self.y


@dataclass(frozen=True)
class Vector2:
    x: float
    y: float

    @classmethod
    def x_axis(cls) -> 'Vector2':
        return cls(1.0, 0.0)

    @classmethod
    def y_axis(cls) -> 'Vector2':
        return cls(0.0, 1.0)

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalize(self) -> Optional['Vector2']:
        """Unit vector in the same direction, or None for a (near) zero vector."""
        n = self.length()
        if n > NORMALIZE_EPS:
            return Vector2(self.x / n, self.y / n)
        return None

    def __iter__(self):
        yield self.x
        yield self.y


@runtime_checkable
class CurveEvaluator(Protocol):
    """Parametric curve ``t -> point``.

    Implementations must be deterministic and side-effect free: the
    intersection search probes them at many repeated and perturbed parameters.
    """

    def evaluate(self, t: float) -> Point2D:
        ...


def _to_point(value) -> Point2D:
    if isinstance(value, Point2D):
        return value
    if hasattr(value, 'x') and hasattr(value, 'y'):
        return Point2D(float(value.x), float(value.y))
    return Point2D.from_array(value)


class FunctionCurve:
    """Adapter turning a plain callable ``t -> (x, y)`` into a CurveEvaluator."""

    def __init__(self, fn: Callable[[float], Union[Point2D, Sequence[float]]]):
        self._fn = fn

    def evaluate(self, t: float) -> Point2D:
        return _to_point(self._fn(t))

    def __call__(self, t: float) -> Point2D:
        return self.evaluate(t)


class CircleCurve:
    """Circle parametrised by angle: ``center + radius * (cos t, sin t)``."""

    def __init__(self, center: Union[Point2D, Tuple[float, float]], radius: float):
        self.center = _to_point(center)
        self.radius = float(radius)

    def evaluate(self, t: float) -> Point2D:
        return Point2D(self.center.x + self.radius * math.cos(t),
                       self.center.y + self.radius * math.sin(t))

    def __call__(self, t: float) -> Point2D:
        return self.evaluate(t)


class LineCurve:
    """Infinite line ``origin + t * direction`` (direction is not normalised)."""

    def __init__(self, origin: Union[Point2D, Tuple[float, float]],
                 direction: Union[Vector2, Tuple[float, float]]):
        self.origin = _to_point(origin)
        dx, dy = direction
        self.direction = Vector2(float(dx), float(dy))

    def evaluate(self, t: float) -> Point2D:
        return Point2D(self.origin.x + t * self.direction.x,
                       self.origin.y + t * self.direction.y)

    def __call__(self, t: float) -> Point2D:
        return self.evaluate(t)


def as_evaluator(curve) -> CurveEvaluator:
    """Return ``curve`` as an object exposing ``evaluate(t) -> Point2D``.

    Accepts anything with an ``evaluate`` method, or a plain callable returning
    a point (anything with ``x`` and ``y``) or an (x, y) pair.
    """
    if isinstance(curve, (FunctionCurve, CircleCurve, LineCurve)):
        return curve
    if callable(getattr(curve, 'evaluate', None)):
        return FunctionCurve(curve.evaluate)
    if callable(curve):
        return FunctionCurve(curve)
    raise TypeError(f"expected a curve evaluator or callable, got {type(curve).__name__}")


def as_points_array(points) -> np.ndarray:
    """Coerce point objects (anything with ``x``/``y``), (x, y) pairs or an (N, 2)
    array into float64 (N, 2)."""
    if isinstance(points, np.ndarray):
        arr = np.asarray(points, dtype=np.float64)
    else:
        seq = list(points)
        if not seq:
            return np.empty((0, 2), dtype=np.float64)
        arr = np.array([[p.x, p.y] if hasattr(p, 'x') and hasattr(p, 'y') else p for p in seq],
                       dtype=np.float64)
    if arr.size == 0:
        return arr.reshape(0, 2)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise ValueError(f"points must have shape (N, 2), got {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError("points contain non-finite coordinates")
    return arr
