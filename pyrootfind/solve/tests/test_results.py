import contextlib
import io
from dataclasses import FrozenInstanceError
from unittest import TestCase

import numpy as np
from numpy.testing import assert_array_equal


# ======================================================================

class TestIterHistory(TestCase):
    def test_append_and_result(self):
        from pyrootfind.solve.results import IterHistory

        hist = IterHistory('x_all', 'f_all')
        x = np.array([1.0, 2.0])
        hist.append(x_all=x, f_all=np.array([0.5, 0.5]))
        x[0] = 99.0  # Stored values are copies.
        hist.append(x_all=x, f_all=np.array([0.0, 0.0]))
        self.assertEqual(len(hist), 2)

        res = hist.result(x, n_feval=4, converged=True)
        self.assertEqual(res.n_iter, 1)
        self.assertEqual(res.n_feval, 4)
        self.assertEqual(res.x_all.shape, (2, 2))
        assert_array_equal(res.x_all[0], [1.0, 2.0])
        self.assertIsNone(res.J_all)
        self.assertEqual((res.n_jeval, res.n_int_iter), (0, 0))

        # Explicit iteration count.
        self.assertEqual(hist.result(x, n_iter=5, n_feval=4,
                                     converged=False).n_iter, 5)

    def test_illegal(self):
        from pyrootfind.solve.results import IterHistory

        with self.assertRaises(ValueError):
            IterHistory()

        hist = IterHistory('x_all', 'f_all')
        with self.assertRaises(KeyError):
            hist.append(x_all=1.0)

    def test_result_frozen(self):
        from pyrootfind.solve.results import IterHistory

        hist = IterHistory('x_all')
        hist.append(x_all=0.0)
        res = hist.result(0.0, n_feval=1, converged=True)
        with self.assertRaises(FrozenInstanceError):
            # noinspection PyDataclass
            res.n_iter = 3  # noqa


class TestProgress(TestCase):
    def test_print(self):
        from pyrootfind.solve.results import (print_finish, print_header,
                                              print_iteration)

        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            print_header("Test Method", True)
            print_iteration(True, 1, 3, 1.5, -0.25, 1.0, 2.0)
            print_finish(True, True)
            print_finish(True, False, "too many iterations")

        lines = buf.getvalue().splitlines()
        self.assertEqual(lines[0], "Test Method:")
        self.assertTrue(lines[1].startswith("... Iteration 1: n_feval = 3"))
        self.assertIn("[a, b]", lines[1])
        self.assertEqual(lines[2], "... Converged.")
        self.assertEqual(lines[3], "... Stopped: too many iterations.")

    def test_silent(self):
        from pyrootfind.solve.results import (print_finish, print_header,
                                              print_iteration)

        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            print_header("Test Method", False)
            print_iteration(False, 1, 3, np.array([1.0, 2.0]))
            print_finish(False, True)

        self.assertEqual(buf.getvalue(), "")
