from unittest import TestCase

import numpy as np

from .tst_functions import f_golden, df_golden, GOLDEN_ROOT


# ======================================================================

class TestNewton(TestCase):
    def test_newton(self):
        from pyrootfind.solve import newton

        # Check normal operation.
        x, res = newton(f_golden, df_golden, 1.0)
        self.assertAlmostEqual(x, GOLDEN_ROOT, places=14)
        self.assertTrue(res.converged)
        self.assertEqual(res.n_feval, res.n_iter + 1)
        self.assertEqual(res.n_jeval, res.n_iter)

        # Histories are aligned, derivative skipped at the final point.
        self.assertEqual(res.f_all.shape, res.x_all.shape)
        self.assertEqual(res.df_all.shape, res.x_all.shape)
        self.assertTrue(np.isnan(res.df_all[-1]))
        self.assertFalse(np.any(np.isnan(res.df_all[:-1])))

    def test_quadratic_convergence(self):
        from pyrootfind.solve import newton

        x, res = newton(lambda x: x ** 2 - 1, lambda x: 2 * x, 1000.0)
        self.assertAlmostEqual(x, 1.0, places=14)

        err = np.abs(res.x_all - 1.0)
        for e_k, e_next in zip(err[:-1], err[1:]):
            if 1e-7 < e_k < 0.1:
                self.assertLessEqual(e_next, e_k ** 2)

    def test_early_exit(self):
        from pyrootfind.solve import newton

        x, res = newton(lambda x: x - 1, lambda x: 1.0, 1.0)
        self.assertEqual(x, 1.0)
        self.assertEqual((res.n_iter, res.n_feval, res.n_jeval), (0, 1, 0))
        self.assertTrue(res.converged)

    def test_zero_derivative(self):
        from pyrootfind.solve import newton, SolverError

        # f'(0) = 0 is stepped off by perturbation.
        x, res = newton(lambda x: x ** 2 - 1, lambda x: 2 * x, 0.0)
        self.assertAlmostEqual(x, 1.0, places=12)
        self.assertTrue(res.converged)

        # Derivative zero everywhere.
        with self.assertRaises(SolverError) as cm:
            newton(lambda x: 1.0, lambda x: 0.0, 0.5)
        self.assertEqual(cm.exception.flag, 1)
        self.assertEqual(cm.exception.x, 0.5)

    def test_budgets(self):
        from pyrootfind.solve import newton

        f, df = (lambda x: x ** 2 - 1), (lambda x: 2 * x)

        x, res = newton(f, df, 1000.0, max_jeval=3)
        self.assertFalse(res.converged)
        self.assertEqual((res.n_iter, res.n_jeval), (3, 3))

        x, res = newton(f, df, 1000.0, max_iter=4)
        self.assertFalse(res.converged)
        self.assertEqual(res.n_iter, 4)

        x, res = newton(f, df, 1000.0, vtol=1e-3)
        self.assertTrue(res.converged)
        self.assertLessEqual(abs(f(x)), 1e-3)
