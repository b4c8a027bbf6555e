"""Newton-Raphson root finding in one and two variables.

All solvers share one failure policy: degenerate steps (vanishing derivative,
singular Jacobian) raise a ``GeometryError`` immediately, while running out
of iterations is a soft outcome reported through ``ConvergenceInfo.converged``
together with the last iterate. Callers decide whether a near miss is usable;
``ConvergenceInfo.require_converged()`` turns it into a hard failure.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from .constants import DEFAULT_MAX_ITERATIONS
from .errors import DerivativeTooSmall, NonConvergence, SingularJacobian
from .logging_utils import get_logger
from .tolerance import ToleranceContext

logger = get_logger('tolgeo.newton')

Jacobian = Sequence[Sequence[float]]
System2D = Callable[[float, float], Tuple[float, float, Jacobian]]

__all__ = ['ConvergenceInfo', 'NewtonSolver', 'solve_2x2']


@dataclass
class ConvergenceInfo:
    iterations: int = 0
    residual: float = math.inf
    converged: bool = False
    final_error: float = math.inf

    def require_converged(self) -> 'ConvergenceInfo':
        if not self.converged:
            raise NonConvergence(self)
        return self

    def to_dict(self):
        return {
            'iterations': self.iterations,
            'residual': self.residual,
            'converged': self.converged,
            'final_error': self.final_error,
        }


def solve_2x2(J: Jacobian, rhs: Tuple[float, float], tolerance: float,
              point: Optional[Tuple[float, float]] = None) -> Tuple[float, float]:
    """Solve ``J @ d = rhs`` with the explicit 2x2 inverse.

    Raises SingularJacobian when ``|det J| < tolerance``.
    """
    j00, j01 = float(J[0][0]), float(J[0][1])
    j10, j11 = float(J[1][0]), float(J[1][1])
    det = j00 * j11 - j01 * j10
    if abs(det) < tolerance:
        raise SingularJacobian(det, point, tolerance)
    r1, r2 = rhs
    inv_det = 1.0 / det
    return inv_det * (j11 * r1 - j01 * r2), inv_det * (-j10 * r1 + j00 * r2)


class NewtonSolver:
    """Newton-Raphson solver driven by a ToleranceContext.

    Parameters
    ----------
    tolerance : ToleranceContext, optional
        Convergence and degeneracy thresholds; ``parametric`` is used for both.
        Defaults to the standard preset.
    max_iterations : int
        Iteration cap after which a soft (non converged) result is returned.
    """

    def __init__(self, tolerance: Optional[ToleranceContext] = None,
                 max_iterations: int = DEFAULT_MAX_ITERATIONS):
        self.tolerance = tolerance if tolerance is not None else ToleranceContext.standard()
        self.max_iterations = int(max_iterations)
        if self.max_iterations < 1:
            raise ValueError(f"max_iterations must be >= 1, got {max_iterations!r}")

    @classmethod
    def from_config(cls, config) -> 'NewtonSolver':
        """Build from an EngineConfig (tolerance + solver section)."""
        return cls(config.tolerance, max_iterations=config.solver.max_iterations)

    def solve_1d(self, f: Callable[[float], float], df: Callable[[float], float],
                 initial_guess: float) -> Tuple[float, ConvergenceInfo]:
        """Find a root of ``f`` starting from ``initial_guess``.

        Returns ``(root, info)``. Raises DerivativeTooSmall as soon as
        ``|df(x)|`` drops below the parametric tolerance.
        """
        tol = self.tolerance.parametric
        x = float(initial_guess)
        info = ConvergenceInfo()
        for i in range(self.max_iterations):
            fx = f(x)
            dfx = df(x)
            if abs(dfx) < tol:
                raise DerivativeTooSmall(dfx, x, tol)
            delta = fx / dfx
            x -= delta
            info.iterations = i + 1
            info.residual = abs(fx)
            info.final_error = abs(delta)
            if info.residual < tol and info.final_error < tol:
                info.converged = True
                break
        if not info.converged:
            logger.debug("solve_1d: no convergence after %d iterations (x=%.6g residual=%.3e)",
                         info.iterations, x, info.residual)
        return x, info

    def solve_inverse(self, f: Callable[[float], float], df: Callable[[float], float],
                      target: float, initial_guess: float) -> Tuple[float, ConvergenceInfo]:
        """Find ``x`` with ``f(x) == target``; same failure policy as solve_1d."""
        return self.solve_1d(lambda x: f(x) - target, df, initial_guess)

    def solve_2d(self, system: System2D,
                 initial_guess: Tuple[float, float]) -> Tuple[Tuple[float, float], ConvergenceInfo]:
        """Solve ``f1(x, y) = f2(x, y) = 0``.

        ``system(x, y)`` must return ``(f1, f2, J)`` with ``J`` the 2x2
        Jacobian ``[[df1/dx, df1/dy], [df2/dx, df2/dy]]``. Raises
        SingularJacobian when ``|det J|`` drops below the parametric tolerance.
        """
        tol = self.tolerance.parametric
        x, y = float(initial_guess[0]), float(initial_guess[1])
        info = ConvergenceInfo()
        for i in range(self.max_iterations):
            f1, f2, J = system(x, y)
            dx, dy = solve_2x2(J, (f1, f2), tol, point=(x, y))
            x -= dx
            y -= dy
            info.iterations = i + 1
            info.residual = math.hypot(f1, f2)
            info.final_error = math.hypot(dx, dy)
            if info.residual < tol and info.final_error < tol:
                info.converged = True
                break
        if not info.converged:
            logger.debug("solve_2d: no convergence after %d iterations (x=%.6g y=%.6g residual=%.3e)",
                         info.iterations, x, y, info.residual)
        return (x, y), info
