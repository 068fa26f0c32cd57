from unittest import TestCase

import numpy as np
from numpy.testing import assert_allclose


# ======================================================================

class TestSolveLinear(TestCase):
    def test_regular(self):
        from pyrootfind.solve import solve_linear

        sol = solve_linear([[2.0, 1.0], [1.0, 3.0]], [3.0, 5.0])
        self.assertFalse(sol.singular)
        assert_allclose(sol.x, [0.8, 1.4])

        # Matrix right-hand side gives the inverse.
        A = np.array([[4.0, 7.0], [2.0, 6.0]])
        sol = solve_linear(A, np.eye(2))
        self.assertFalse(sol.singular)
        assert_allclose(sol.x @ A, np.eye(2), atol=1e-14)

    def test_singular(self):
        from pyrootfind.solve import solve_linear

        # Exactly singular.
        sol = solve_linear([[1.0, 1.0], [1.0, 1.0]], [1.0, 2.0])
        self.assertTrue(sol.singular)
        self.assertIsNone(sol.x)

        sol = solve_linear([[0.0, 0.0], [0.0, 1.0]], [1.0, 2.0])
        self.assertTrue(sol.singular)

        # Numerically singular (condition number > 1 / ε).
        sol = solve_linear([[1e-20, 0.0], [0.0, 1.0]], [1.0, 1.0])
        self.assertTrue(sol.singular)

    def test_not_square(self):
        from pyrootfind.solve import solve_linear

        with self.assertRaises(ValueError):
            solve_linear([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]], [1.0, 2.0])


class TestApproxJacobian(TestCase):
    def test_linear(self):
        from pyrootfind.solve import approx_jacobian

        A = np.array([[1.0, 2.0], [3.0, -4.0]])
        J = approx_jacobian(lambda x: A @ x, [0.5, -0.25])
        self.assertEqual(J.shape, (2, 2))
        assert_allclose(J, A, atol=1e-6)

    def test_nonlinear(self):
        from pyrootfind.solve import approx_jacobian
        from .tst_functions import f_circle_exp, J_circle_exp

        x = np.array([1.0, -1.7])
        assert_allclose(approx_jacobian(f_circle_exp, x), J_circle_exp(x),
                        atol=1e-6)

    def test_rectangular(self):
        from pyrootfind.solve import approx_jacobian

        def f(x):
            return np.array([x[0] + x[1], x[0] * x[1], x[1] ** 2])

        J = approx_jacobian(f, [2.0, 3.0])
        self.assertEqual(J.shape, (3, 2))
        assert_allclose(J, [[1.0, 1.0], [3.0, 2.0], [0.0, 6.0]], atol=1e-6)
