"""
Bisection method for a root of a univariate, scalar-valued function.
"""
from __future__ import annotations

import math
import warnings
from collections.abc import Callable

from numpy.typing import ArrayLike

from pyrootfind.solve.bracket import initial_bracket
from pyrootfind.solve.exception import BracketWarning
from pyrootfind.solve.options import EPS, SolverOptions, resolve_options
from pyrootfind.solve.results import (IterHistory, SolverResult,
                                      print_finish, print_header,
                                      print_iteration)


# Last updated: 6 January 2022 by Eric J. Whitney


# ----------------------------------------------------------------------------


def bisection(f: Callable[[float], float], x0: float | ArrayLike,
              opts: SolverOptions = None, **kwargs
              ) -> tuple[float, SolverResult]:
    # noinspection PyUnresolvedReferences
    r"""
    Approximate solution of :math:`f(x) = 0` by the bisection method.
    The bracketing interval :math:`[a, b]` is halved at each step,
    keeping the half where :math:`f(x)` changes sign.

    Examples
    --------
    >>> f = lambda x: x**2 - x - 1
    >>> x, res = bisection(f, [1, 2])
    >>> print(f"{x:.12f}")
    1.618033988750
    >>> f = lambda x: x**2 - 1
    >>> x, res = bisection(f, [-9, 11])  # Root at the midpoint.
    >>> x, res.n_iter, res.n_feval
    (1.0, 0, 1)

    Parameters
    ----------
    f : Callable[[float], float]
        Function which we are searching for root.
    x0 : float or (float, float)
        Starting interval (in any order), or a single point from which
        an interval is found using `bracket`.
    opts : SolverOptions, optional
        Solver options.  Uses `vtol`, `batol`, `max_iter`, `max_feval`,
        `rebracket` and `verbose`.
    kwargs :
        Individual overrides of fields in `opts`.

    Returns
    -------
    x : float
        Best estimate of root found i.e. :math:`f(x) \approx 0`.
    result : SolverResult
        Diagnostics including the midpoints (`x_all`), their function
        values (`f_all`) and the interval (`a_all`, `b_all`) at each
        iteration.

    Notes
    -----
    - `batol` is limited to a minimum of 2ε.
    - The iteration limit is the number of halvings required to reduce
      the initial interval below `batol`, i.e.
      :math:`\lceil \log_2((b - a) / b_{atol}) \rceil`.  If `max_iter`
      is given, the smaller of the two is used.
    - The function is evaluated once at the initial midpoint, once at
      `a` and once per iteration thereafter (plus any evaluations used
      to find the initial bracket).
    - If the upper end of the interval never moves, `f(b)` is evaluated
      once more at the end to confirm there is a sign change.  If there
      is none a `BracketWarning` is issued and the result has
      ``converged = False``.
    """
    opts = resolve_options(opts, **kwargs)
    batol = max(opts.batol, 2 * EPS)

    a, b, n_int_iter, n_feval = initial_bracket(f, x0, opts)
    x_lo = a
    n_halve = max(math.ceil(math.log2((b - a) / batol)), 1)
    max_iter = (n_halve if opts.max_iter is None else
                min(n_halve, opts.max_iter))

    hist = IterHistory('x_all', 'f_all', 'a_all', 'b_all')
    print_header("Bisection Method", opts.verbose)

    c = 0.5 * (a + b)
    fc = f(c)
    n_feval += 1
    hist.append(x_all=c, f_all=fc, a_all=a, b_all=b)

    def result(converged: bool, reason: str = None):
        print_finish(opts.verbose, converged, reason)
        return c, hist.result(c, n_feval=n_feval, n_int_iter=n_int_iter,
                              converged=converged)

    if abs(fc) <= opts.vtol:
        return result(True)
    if n_feval >= opts.max_feval:
        return result(False)

    fa = f(a)
    n_feval += 1

    b_moved = False
    converged = False
    for k in range(1, max_iter + 1):
        # Check which side root is on, narrow interval.
        if fa * fc > 0:
            a, fa = c, fc
        else:
            b, b_moved = c, True

        c = 0.5 * (a + b)
        fc = f(c)
        n_feval += 1
        hist.append(x_all=c, f_all=fc, a_all=a, b_all=b)
        print_iteration(opts.verbose, k, n_feval, c, fc, a, b)

        # Check stopping criteria.
        if abs(fc) <= opts.vtol or (b - a) < batol:
            converged = True
            break

        if n_feval >= opts.max_feval:
            break

    else:
        # Iteration limit is derived from batol so this is a success.
        converged = opts.max_iter is None or n_halve <= opts.max_iter

    if converged and not b_moved and abs(fc) > opts.vtol:
        # Only the sign at a has been seen, check the far end.
        fb = f(b)
        n_feval += 1
        if fa * fb > 0:
            warnings.warn(f"No sign change in interval [{x_lo}, {b}].",
                          BracketWarning)
            return result(False, "no sign change in interval")

    return result(converged)
