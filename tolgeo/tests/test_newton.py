"""Tests for the 1D / 2D Newton-Raphson solvers."""
import math

import pytest

from tolgeo.core.errors import DerivativeTooSmall, NonConvergence, SingularJacobian
from tolgeo.core.newton import ConvergenceInfo, NewtonSolver, solve_2x2
from tolgeo.core.tolerance import ToleranceContext


class TestSolve1D:

    def test_square_root_of_four(self):
        solver = NewtonSolver(ToleranceContext.standard())
        root, info = solver.solve_1d(lambda x: x * x - 4.0, lambda x: 2.0 * x, 1.0)
        assert info.converged
        assert abs(root - 2.0) < 1e-6
        assert info.residual < solver.tolerance.parametric
        assert info.final_error < solver.tolerance.parametric
        assert 0 < info.iterations < solver.max_iterations

    @pytest.mark.parametrize("r", [-3.5, -1.0, 0.25, 2.0, 7.0])
    def test_simple_polynomial_roots(self, r):
        """Simple root of (x - r)(x - r - 3) is found from a nearby start."""
        tol = ToleranceContext.standard()
        solver = NewtonSolver(tol)
        f = lambda x: (x - r) * (x - r - 3.0)
        df = lambda x: 2.0 * x - 2.0 * r - 3.0
        root, info = solver.solve_1d(f, df, r + 0.3)
        assert info.converged
        assert abs(root - r) < tol.parametric * 10

    def test_zero_derivative_fails_immediately(self):
        calls = []

        def f(x):
            calls.append(x)
            return x * x

        solver = NewtonSolver()
        with pytest.raises(DerivativeTooSmall) as excinfo:
            solver.solve_1d(f, lambda x: 0.0, 1.0)
        assert len(calls) == 1
        assert excinfo.value.derivative == 0.0
        assert excinfo.value.x == 1.0

    def test_iteration_cap_is_a_soft_result(self):
        """x^3 - 2x + 2 from 0 cycles between 0 and 1 forever."""
        solver = NewtonSolver(max_iterations=25)
        x, info = solver.solve_1d(lambda x: x ** 3 - 2 * x + 2, lambda x: 3 * x ** 2 - 2, 0.0)
        assert not info.converged
        assert info.iterations == 25
        assert x in (0.0, 1.0)
        with pytest.raises(NonConvergence):
            info.require_converged()

    def test_few_iterations_return_last_iterate(self):
        solver = NewtonSolver(max_iterations=2)
        x, info = solver.solve_1d(lambda x: x * x - 4.0, lambda x: 2.0 * x, 100.0)
        assert not info.converged
        # two Newton steps from 100: 50.02, then ~25.05
        assert 20.0 < x < 30.0

    def test_solve_inverse(self):
        solver = NewtonSolver()
        x, info = solver.solve_inverse(lambda x: x ** 3, lambda x: 3 * x ** 2, 27.0, 2.0)
        assert info.require_converged() is info
        assert abs(x - 3.0) < 1e-9

    def test_invalid_max_iterations(self):
        with pytest.raises(ValueError):
            NewtonSolver(max_iterations=0)


class TestSolve2D:

    def test_circle_and_diagonal(self):
        def system(x, y):
            return x * x + y * y - 4.0, x - y, ((2 * x, 2 * y), (1.0, -1.0))

        (x, y), info = NewtonSolver().solve_2d(system, (1.0, 0.5))
        assert info.converged
        assert abs(x - math.sqrt(2)) < 1e-9
        assert abs(y - math.sqrt(2)) < 1e-9

    def test_unit_circle_meets_horizontal_line_at_minus_one(self):
        """curve1(t) = (cos t, sin t) and curve2(s) = (1 - s, 0) meet at t = pi, s = 2."""
        def system(t, s):
            f1 = math.cos(t) - (1.0 - s)
            f2 = math.sin(t) - 0.0
            return f1, f2, ((-math.sin(t), 1.0), (math.cos(t), 0.0))

        (t, s), info = NewtonSolver().solve_2d(system, (3.0, 1.9))
        assert info.converged
        assert abs(t - math.pi) < 1e-9
        assert abs(s - 2.0) < 1e-9

    def test_singular_jacobian(self):
        def system(x, y):
            return x + y - 1.0, 2 * x + 2 * y - 2.0, ((1.0, 1.0), (2.0, 2.0))

        with pytest.raises(SingularJacobian) as excinfo:
            NewtonSolver().solve_2d(system, (0.0, 0.0))
        assert excinfo.value.determinant == 0.0
        assert excinfo.value.point == (0.0, 0.0)

    def test_linear_system_converges_in_two_steps(self):
        def system(x, y):
            return 3 * x + y - 5.0, x - 2 * y + 3.0, ((3.0, 1.0), (1.0, -2.0))

        (x, y), info = NewtonSolver().solve_2d(system, (10.0, -10.0))
        assert info.converged
        assert info.iterations == 2
        assert abs(x - 1.0) < 1e-12 and abs(y - 2.0) < 1e-12

    def test_iteration_cap_is_a_soft_result(self):
        """Decoupled system whose x component cycles 0 -> 1 -> 0 under Newton."""
        def system(x, y):
            return x ** 3 - 2 * x + 2, y, ((3 * x ** 2 - 2, 0.0), (0.0, 1.0))

        (x, y), info = NewtonSolver(max_iterations=25).solve_2d(system, (0.0, 0.0))
        assert not info.converged
        assert info.iterations == 25
        assert x in (0.0, 1.0)
        assert y == 0.0
        assert info.residual > 0.0
        with pytest.raises(NonConvergence):
            info.require_converged()


def test_solve_2x2_matches_cramer():
    dx, dy = solve_2x2(((2.0, 1.0), (1.0, 3.0)), (3.0, 5.0), 1e-12)
    assert abs(dx - 0.8) < 1e-12
    assert abs(dy - 1.4) < 1e-12


def test_convergence_info_defaults():
    info = ConvergenceInfo()
    assert info.iterations == 0
    assert not info.converged
    assert math.isinf(info.residual) and math.isinf(info.final_error)
    assert set(info.to_dict()) == {'iterations', 'residual', 'converged', 'final_error'}
