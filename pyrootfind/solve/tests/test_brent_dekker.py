from unittest import TestCase

import numpy as np

from .tst_functions import (f_cubic, CUBIC_ROOT, f_golden, GOLDEN_ROOT,
                            f_omega, OMEGA_ROOT)


# ======================================================================

class TestBrentDekker(TestCase):
    def test_brent_dekker(self):
        from pyrootfind.solve import brent_dekker

        # Check normal operation.
        for f, interval, exact in ((f_omega, [0.0, 1.0], OMEGA_ROOT),
                                   (f_golden, [1.0, 2.0], GOLDEN_ROOT),
                                   (f_cubic, [2.0, 1.0], CUBIC_ROOT)):
            with self.subTest(f=f.__name__):
                x, res = brent_dekker(f, interval)
                self.assertAlmostEqual(x, exact, places=12)
                self.assertTrue(res.converged)
                self.assertEqual(res.n_feval, res.n_iter + 2)
                self.assertLess(res.n_iter, 50)

    def test_bracket_invariant(self):
        from pyrootfind.solve import brent_dekker

        x, res = brent_dekker(f_cubic, [1.0, 2.0])
        width = res.b_all - res.a_all
        self.assertTrue(np.all(width >= 0))
        self.assertTrue(np.all(np.diff(width) <= 0))
        self.assertTrue(np.all((res.a_all <= res.x_all) &
                               (res.x_all <= res.b_all)))
        self.assertEqual((res.a_all[0], res.b_all[0]), (1.0, 2.0))

    def test_root_at_end(self):
        from pyrootfind.solve import brent_dekker

        # Root at the starting estimate b.
        x, res = brent_dekker(lambda x: x - 1, [0.0, 1.0])
        self.assertEqual(x, 1.0)
        self.assertEqual((res.n_iter, res.n_feval), (0, 1))
        self.assertTrue(res.converged)

        # Root at a is found before taking a step.
        x, res = brent_dekker(lambda x: x - 1, [1.0, 2.0])
        self.assertEqual(x, 1.0)
        self.assertEqual((res.n_iter, res.n_feval), (0, 2))
        self.assertTrue(res.converged)

        # Interval already within tolerance.
        x, res = brent_dekker(f_cubic, [CUBIC_ROOT - 1e-9, CUBIC_ROOT + 1e-9],
                              batol=1e-8)
        self.assertEqual((res.n_iter, res.n_feval), (0, 2))
        self.assertTrue(res.converged)

    def test_single_point(self):
        from pyrootfind.solve import brent_dekker

        x, res = brent_dekker(f_golden, 1.5)
        self.assertAlmostEqual(x, GOLDEN_ROOT, places=12)
        self.assertGreater(res.n_int_iter, 0)

    def test_budgets(self):
        from pyrootfind.solve import brent_dekker

        x, res = brent_dekker(f_cubic, [1.0, 2.0], max_feval=5)
        self.assertFalse(res.converged)
        self.assertEqual((res.n_iter, res.n_feval), (3, 5))

        x, res = brent_dekker(f_cubic, [1.0, 2.0], max_iter=2)
        self.assertFalse(res.converged)
        self.assertEqual(res.n_iter, 2)

        x, res = brent_dekker(f_cubic, [1.0, 2.0], vtol=1e-4)
        self.assertTrue(res.converged)
        self.assertLessEqual(abs(f_cubic(x)), 1e-4)

        x, res = brent_dekker(f_cubic, [1.0, 2.0], batol=1e-4)
        self.assertTrue(res.converged)
        self.assertAlmostEqual(x, CUBIC_ROOT, places=3)

    def test_no_sign_change(self):
        from pyrootfind.solve import brent_dekker, BracketWarning

        with self.assertWarns(BracketWarning):
            x, res = brent_dekker(lambda x: x ** 2 + 1, [1.0, 2.0])
        self.assertFalse(res.converged)
        self.assertEqual((res.n_iter, res.n_feval), (0, 2))
