from dataclasses import FrozenInstanceError
from unittest import TestCase

import numpy as np
import pytest


# ======================================================================

class TestSolverOptions(TestCase):
    def test_defaults(self):
        from pyrootfind.solve import SolverOptions

        opts = SolverOptions()
        self.assertEqual(opts.xatol, 1e-10)
        self.assertEqual(opts.vtol, 0.0)
        self.assertEqual(opts.batol, 2 * np.finfo(float).eps)
        self.assertIsNone(opts.max_iter)
        self.assertEqual((opts.max_feval, opts.max_jeval), (200, 200))
        self.assertFalse(opts.rebracket)
        self.assertFalse(opts.verbose)
        self.assertEqual(opts.kappa1, 0.1)
        self.assertAlmostEqual(opts.kappa2, 0.98 * (1 + (1 + 5 ** 0.5) / 2))
        self.assertEqual(opts.n0, 1)

    def test_iter_limit(self):
        from pyrootfind.solve import SolverOptions

        self.assertEqual(SolverOptions().iter_limit(), 200)
        self.assertEqual(SolverOptions().iter_limit(default=30), 30)
        self.assertEqual(SolverOptions(max_iter=7).iter_limit(), 7)

    def test_frozen(self):
        from pyrootfind.solve import SolverOptions

        with self.assertRaises(FrozenInstanceError):
            # noinspection PyDataclass
            SolverOptions().xatol = 1.0  # noqa

        with self.assertRaises(TypeError):
            SolverOptions(1e-6)  # noqa - Keyword only.

    def test_resolve(self):
        from pyrootfind.solve.options import SolverOptions, resolve_options

        base = SolverOptions(max_feval=50)
        self.assertIs(resolve_options(base), base)

        opts = resolve_options(base, verbose=True)
        self.assertEqual(opts.max_feval, 50)
        self.assertTrue(opts.verbose)
        self.assertFalse(base.verbose)

        self.assertEqual(resolve_options(xatol=1e-6).xatol, 1e-6)

        with self.assertRaises(TypeError):
            resolve_options(bad_option=1)

    def test_vector_vtol(self):
        from pyrootfind.solve import SolverOptions

        opts = SolverOptions(vtol=[1e-6, 1e-3])
        self.assertEqual(list(opts.vtol), [1e-6, 1e-3])

        with self.assertRaises(ValueError):
            SolverOptions(vtol=[1e-6, -1e-3])


# ----------------------------------------------------------------------

@pytest.mark.parametrize("kwargs", [
    dict(xatol=-1.0),
    dict(vtol=-1e-8),
    dict(batol=0.0),
    dict(max_iter=0),
    dict(max_feval=0),
    dict(max_jeval=0),
    dict(kappa1=0.0),
    dict(kappa2=0.5),
    dict(kappa2=2.7),
    dict(n0=-1),
])
def test_illegal_options(kwargs):
    from pyrootfind.solve import SolverOptions

    with pytest.raises(ValueError):
        SolverOptions(**kwargs)
