from __future__ import annotations

import warnings
from collections.abc import Callable

from numpy.typing import ArrayLike

from pyrootfind.solve.bracket import initial_bracket
from pyrootfind.solve.exception import BracketWarning
from pyrootfind.solve.options import EPS, SolverOptions, resolve_options
from pyrootfind.solve.results import (IterHistory, SolverResult,
                                      print_finish, print_header,
                                      print_iteration)


# ======================================================================

def brent_dekker(f: Callable[[float], float], x0: float | ArrayLike,
                 opts: SolverOptions = None, **kwargs
                 ) -> tuple[float, SolverResult]:
    r"""
    Find a root of a univariate, scalar-valued function using the
    Brent-Dekker method [1]_.  This combines the guaranteed convergence
    of bisection with the speed of inverse quadratic / linear
    interpolation when the function is well behaved.

    Parameters
    ----------
    f : Callable[[float], float]
        Function which we are searching for root.
    x0 : float or (float, float)
        Starting interval (in any order), or a single point from which
        an interval is found using `bracket`.
    opts : SolverOptions, optional
        Solver options.  Uses `batol` as the user tolerance `t`, `vtol`,
        `max_iter`, `max_feval`, `rebracket` and `verbose`.
    kwargs :
        Individual overrides of fields in `opts`.

    Returns
    -------
    x : float
        Root estimate.
    result : SolverResult
        Diagnostics.  `a_all` and `b_all` give the bracketing interval
        after each iteration and `f_all` the function value at each
        estimate in `x_all`.

    Notes
    -----
    Three points are maintained:

    - `b`: The best estimate so far, i.e. :math:`|f(b)| \le |f(c)|`.
    - `c`: The contrapoint, with :math:`f(b)` and :math:`f(c)` of
      opposite sign.  The root lies between `b` and `c`.
    - `a`: The previous value of `b`.

    At each step the tolerance is :math:`\delta = 2\epsilon|b| + t` and
    :math:`m = (c - b) / 2`.  An interpolated step :math:`p/q` is only
    accepted if :math:`2p < 3mq - |\delta q|` (it stays well inside the
    bracket) and :math:`p < |eq/2|` where `e` is the step taken two
    iterations ago (it is converging quickly enough).  Otherwise a
    bisection step is taken.  Steps are never smaller than
    :math:`\delta`.

    The solver stops when :math:`|f(b)| \le v_{tol}`, :math:`|m| \le
    \delta`, or the evaluation / iteration budget is used up.  These
    are also checked before the first step.  If `f` does not change sign
    over the starting interval a `BracketWarning` is issued and `b` is
    returned with ``converged = False``.

    References
    ----------
    .. [1] Brent, R. P., *Algorithms for Minimization Without
       Derivatives*, Prentice-Hall, 1973.  Chapter 4.

    Examples
    --------
    >>> import math
    >>> x, res = brent_dekker(lambda x: math.exp(-math.exp(-x)) - x, [0, 1])
    >>> print(f"{x:.10f}")
    0.5671432904
    """
    opts = resolve_options(opts, **kwargs)
    max_iter = opts.iter_limit()
    t = opts.batol

    a, b, n_int_iter, n_feval = initial_bracket(f, x0, opts)

    fb = f(b)
    n_feval += 1
    hist = IterHistory('x_all', 'f_all', 'a_all', 'b_all')
    hist.append(x_all=b, f_all=fb, a_all=a, b_all=b)

    def result(converged: bool, reason: str = None):
        print_finish(opts.verbose, converged, reason)
        return b, hist.result(b, n_feval=n_feval, n_int_iter=n_int_iter,
                              converged=converged)

    if abs(fb) <= opts.vtol:
        return result(True)
    if n_feval >= opts.max_feval:
        return result(False)

    fa = f(a)
    n_feval += 1
    if fa * fb > 0:
        warnings.warn(f"No sign change in interval [{a}, {b}].",
                      BracketWarning)
        return result(False, "no sign change in interval")

    c, fc = a, fa
    d = e = b - a

    # Make b the best estimate.
    if abs(fc) < abs(fb):
        a, b, c = b, c, b
        fa, fb, fc = fb, fc, fb

    if abs(fb) <= opts.vtol or abs(0.5 * (c - b)) <= 2 * EPS * abs(b) + t:
        return result(True)

    print_header("Brent-Dekker Method", opts.verbose)

    converged = False
    for k in range(1, max_iter + 1):
        δ = 2 * EPS * abs(b) + t
        m = 0.5 * (c - b)

        if abs(e) < δ or abs(fa) <= abs(fb):
            d = e = m  # Bisection.

        else:
            s = fb / fa
            if a == c:
                # Linear interpolation.
                p = 2 * m * s
                q = 1 - s
            else:
                # Inverse quadratic interpolation.
                q, r = fa / fc, fb / fc
                p = s * (2 * m * q * (q - r) - (b - a) * (r - 1))
                q = (q - 1) * (r - 1) * (s - 1)

            if p > 0:
                q = -q
            else:
                p = -p

            # Keep interpolation only if it is well inside the bracket and
            # shrinking fast enough.
            e_prev, e = e, d
            if 2 * p < 3 * m * q - abs(δ * q) and p < abs(0.5 * e_prev * q):
                d = p / q
            else:
                d = e = m

        a, fa = b, fb
        if abs(d) > δ:
            b += d
        else:
            b += δ if m > 0 else -δ

        fb = f(b)
        n_feval += 1

        # Keep the root between b and c.
        if (fb > 0) == (fc > 0):
            c, fc = a, fa
            d = e = b - a

        # Make b the best estimate.
        if abs(fc) < abs(fb):
            a, b, c = b, c, b
            fa, fb, fc = fb, fc, fb

        lo, hi = min(b, c), max(b, c)
        hist.append(x_all=b, f_all=fb, a_all=lo, b_all=hi)
        print_iteration(opts.verbose, k, n_feval, b, fb, lo, hi)

        # Check stopping criteria.
        δ = 2 * EPS * abs(b) + t
        if abs(fb) <= opts.vtol or abs(0.5 * (c - b)) <= δ:
            converged = True
            break

        if n_feval >= opts.max_feval:
            break

    return result(converged)
