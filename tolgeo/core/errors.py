"""Failure kinds raised by the tolgeo numerical routines.

Every fatal condition is a ``GeometryError`` subclass carrying the offending
numbers as attributes, so callers can branch on the type and inspect the
context instead of parsing messages. Non-convergence of a Newton solve is not
an error by itself; see ``ConvergenceInfo.require_converged``.
"""
from __future__ import annotations

from typing import Tuple

__all__ = [
    'GeometryError',
    'DerivativeTooSmall',
    'SingularJacobian',
    'DegeneratePointSet',
    'InsufficientPoints',
    'NegativeRadiusSquared',
    'NonConvergence',
]


class GeometryError(Exception):
    """Base class for numerical geometry failures."""


class DerivativeTooSmall(GeometryError):
    def __init__(self, derivative: float, x: float, tolerance: float):
        self.derivative = derivative
        self.x = x
        self.tolerance = tolerance
        super().__init__(
            f"derivative {derivative:.3e} at x={x!r} is below tolerance {tolerance:.1e}")


class SingularJacobian(GeometryError):
    def __init__(self, determinant: float, point: Tuple[float, float], tolerance: float):
        self.determinant = determinant
        self.point = point
        self.tolerance = tolerance
        super().__init__(
            f"Jacobian determinant {determinant:.3e} at {point!r} is below tolerance {tolerance:.1e}")


class DegeneratePointSet(GeometryError):
    """Normal equations are singular, e.g. (near-)collinear points for a circle."""

    def __init__(self, determinant: float, tolerance: float):
        self.determinant = determinant
        self.tolerance = tolerance
        super().__init__(
            f"degenerate point set: determinant {determinant:.3e} below tolerance {tolerance:.1e}")


class InsufficientPoints(GeometryError):
    def __init__(self, required: int, given: int, primitive: str):
        self.required = required
        self.given = given
        self.primitive = primitive
        super().__init__(f"{primitive} fit needs at least {required} points, got {given}")


class NegativeRadiusSquared(GeometryError):
    def __init__(self, radius_squared: float, tolerance: float):
        self.radius_squared = radius_squared
        self.tolerance = tolerance
        super().__init__(f"fitted squared radius {radius_squared:.3e} is negative beyond noise")


class NonConvergence(GeometryError):
    """Raised on request only, when a caller treats a soft Newton result as fatal."""

    def __init__(self, info):
        self.info = info
        super().__init__(
            f"no convergence after {info.iterations} iterations "
            f"(residual={info.residual:.3e}, error={info.final_error:.3e})")
