from unittest import TestCase

import numpy as np
from numpy.testing import assert_allclose

NAN = np.nan


# ======================================================================

class TestAnalyze(TestCase):
    def test_short_sequences(self):
        from pyrootfind.solve import analyze

        # No estimate possible for fewer than four iterates.
        for x_all in ([1.0], [1.0, 2.0], [1.0, 2.0, 3.0]):
            with self.subTest(n=len(x_all)):
                alpha, lam, alpha_all, lam_all = analyze(x_all)
                self.assertTrue(np.isnan(alpha))
                self.assertTrue(np.isnan(lam))
                self.assertEqual(alpha_all.shape, (len(x_all),))
                self.assertTrue(np.all(np.isnan(alpha_all)))
                self.assertTrue(np.all(np.isnan(lam_all)))

    def test_sublinear(self):
        from pyrootfind.solve import analyze

        k = np.arange(95, 101)
        alpha, lam, alpha_all, lam_all = analyze(1 / k)
        self.assertAlmostEqual(alpha, 0.9899, delta=1e-4)
        self.assertAlmostEqual(lam, 0.8932, delta=1e-4)
        assert_allclose(alpha_all, [NAN, NAN, 0.9897, 0.9898, 0.9899, NAN],
                        atol=1e-4)
        assert_allclose(lam_all, [NAN, NAN, 0.8915, 0.8924, 0.8932, NAN],
                        atol=1e-4)

        x_all = 1 / np.log(np.log(np.log(k)))
        alpha, lam, alpha_all, lam_all = analyze(x_all)
        self.assertAlmostEqual(alpha, 0.9871, delta=1e-4)
        self.assertAlmostEqual(lam, 0.9206, delta=1e-4)
        assert_allclose(alpha_all, [NAN, NAN, 0.9868, 0.9869, 0.9871, NAN],
                        atol=1e-4)
        assert_allclose(lam_all, [NAN, NAN, 0.9192, 0.9199, 0.9206, NAN],
                        atol=1e-4)

    def test_linear(self):
        from pyrootfind.solve import analyze

        x_all = 1 / 2.0 ** np.arange(95, 101)
        alpha, lam, alpha_all, lam_all = analyze(x_all)
        self.assertAlmostEqual(alpha, 1.0, delta=1e-4)
        self.assertAlmostEqual(lam, 0.5, delta=1e-4)
        assert_allclose(alpha_all, [NAN, NAN, 1, 1, 1, NAN], atol=1e-4)
        assert_allclose(lam_all, [NAN, NAN, 0.5, 0.5, 0.5, NAN], atol=1e-4)

    def test_quadratic(self):
        from pyrootfind.solve import analyze

        x = [0.9999999]
        for _ in range(32):
            x.append(x[-1] ** 2)

        alpha, lam, alpha_all, lam_all = analyze(x[25:33])
        self.assertAlmostEqual(alpha, 2.0, delta=1e-4)
        self.assertAlmostEqual(lam, 1.0, delta=1e-4)
        assert_allclose(alpha_all, [NAN, NAN, 2.0203, 2.0004, 2.0, 2.0, 2.0,
                                    NAN], atol=1e-4)
        assert_allclose(lam_all, [NAN, NAN, 1.1487, 1.0049, 1.0, 1.0, 1.0,
                                  NAN], atol=1e-4)

    def test_vector_sequence(self):
        from pyrootfind.solve import analyze

        # Distances between iterates use the norm.
        x_1d = 1 / 2.0 ** np.arange(95, 101)
        x_all = np.column_stack((x_1d, 3 * x_1d))
        alpha, lam, alpha_all, lam_all = analyze(x_all)
        self.assertAlmostEqual(alpha, 1.0, delta=1e-4)
        self.assertAlmostEqual(lam, 0.5, delta=1e-4)
        self.assertEqual(alpha_all.shape, (6,))

        with self.assertRaises(ValueError):
            analyze(np.zeros((4, 2, 2)))

    def test_solver_history(self):
        from pyrootfind.solve import analyze, bisection

        # Bisection converges linearly with λ = 1/2.
        x, res = bisection(lambda x: x ** 2 - 2, [1.0, 2.0], batol=1e-9)
        alpha, lam, _, _ = analyze(res.x_all[:20])
        self.assertAlmostEqual(alpha, 1.0)
        self.assertAlmostEqual(lam, 0.5)

    def test_alias(self):
        from pyrootfind.solve import analyze, convergence_analysis
        self.assertIs(convergence_analysis, analyze)
