from __future__ import annotations

import math
import warnings
from collections.abc import Callable

import numpy as np
from numpy.typing import ArrayLike

from pyrootfind.solve.bracket import initial_bracket
from pyrootfind.solve.exception import BracketWarning
from pyrootfind.solve.options import EPS, SolverOptions, resolve_options
from pyrootfind.solve.results import (IterHistory, SolverResult,
                                      print_finish, print_header,
                                      print_iteration)

# Written by Eric J. Whitney, March 2023.


# ======================================================================

def itp(f: Callable[[float], float], x0: float | ArrayLike,
        opts: SolverOptions = None, **kwargs) -> tuple[float, SolverResult]:
    r"""
    Find a root of a univariate, scalar-valued function using the
    Interpolate-Truncate-Project (ITP) method of [1]_.  ITP keeps the
    worst case performance of bisection while achieving superlinear
    convergence for well behaved functions.

    Each iteration on the bracket :math:`[a, b]` (with :math:`f(a) < 0 <
    f(b)`) has three stages:

    1. **Interpolate**: Regula falsi estimate
       :math:`x_f = (y_b a - y_a b) / (y_b - y_a)`.
    2. **Truncate**: Move :math:`x_f` towards the midpoint `c` by
       :math:`\delta = \kappa_1 (b - a)^{\kappa_2}`, unless it is already
       closer than this (giving :math:`x_t = c`).
    3. **Project**: Limit :math:`x_t` to within radius
       :math:`r = b_{atol} 2^{n_{max} - k} - (b - a) / 2` of `c`, where
       :math:`n_{max} = n_0 + \lceil \log_2((b_0 - a_0) / b_{atol})
       \rceil`.

    Parameters
    ----------
    f : Callable[[float], float]
        Function which we are searching for root.
    x0 : float or (float, float)
        Starting interval (in any order), or a single point from which
        an interval is found using `bracket`.
    opts : SolverOptions, optional
        Solver options.  Uses `kappa1`, `kappa2`, `n0`, `batol`, `vtol`,
        `max_iter`, `max_feval`, `rebracket` and `verbose`.
    kwargs :
        Individual overrides of fields in `opts`.

    Returns
    -------
    x : float
        Root estimate.  This is the midpoint of the final bracket, or the
        point where `vtol` was met.
    result : SolverResult
        Diagnostics.  `x_all` and `f_all` give the point evaluated at
        each iteration (starting with the initial midpoint) and `a_all`,
        `b_all` the bracket.

    Notes
    -----
    - If :math:`f(a) > f(b)` the sign of `f` is reversed internally so
      that the bracket always satisfies :math:`f(a) < 0 < f(b)`.
    - The solver stops when :math:`|f(x)| \le v_{tol}`, when
      :math:`b - a \le b_{atol}` (or the float spacing at `a`, `b` if this
      is larger), or when the evaluation / iteration budget is used up.
      If an exact root is hit the bracket collapses onto it.
    - If `f` does not change sign over the starting interval a
      `BracketWarning` is issued and the midpoint is returned with
      ``converged = False``.

    References
    ----------
    .. [1] Oliveira, I. F. D. and Takahashi, R. H. C., "An Enhancement of
       the Bisection Method Average Performance Preserving Minmax
       Optimality", ACM Transactions on Mathematical Software, Volume
       47, Issue 1, 2020.

    Examples
    --------
    >>> x, res = itp(lambda x: x**3 - x - 2, [1, 2])
    >>> print(f"{x:.10f}")
    1.5213797068
    """
    opts = resolve_options(opts, **kwargs)
    max_iter = opts.iter_limit()
    κ1, κ2, batol = opts.kappa1, opts.kappa2, opts.batol

    a, b, n_int_iter, n_feval = initial_bracket(f, x0, opts)
    n_max = opts.n0 + math.ceil(math.log2((b - a) / batol))

    x = c = 0.5 * (a + b)
    fc = f(c)
    n_feval += 1
    hist = IterHistory('x_all', 'f_all', 'a_all', 'b_all')
    hist.append(x_all=c, f_all=fc, a_all=a, b_all=b)

    def result(converged: bool, reason: str = None):
        print_finish(opts.verbose, converged, reason)
        return x, hist.result(x, n_feval=n_feval, n_int_iter=n_int_iter,
                              converged=converged)

    if abs(fc) <= opts.vtol:
        return result(True)
    if n_feval >= opts.max_feval:
        return result(False)

    ya, yb = f(a), f(b)
    n_feval += 2
    if ya * yb > 0:
        warnings.warn(f"No sign change in interval [{a}, {b}].",
                      BracketWarning)
        return result(False, "no sign change in interval")

    # Root at an end point.
    if abs(ya) <= opts.vtol:
        x = a
        return result(True)
    if abs(yb) <= opts.vtol:
        x = b
        return result(True)

    sign = 1.0
    if ya > yb:
        # Reverse f so that f(a) < 0 < f(b).
        sign, ya, yb = -1.0, -ya, -yb

    print_header("ITP Method", opts.verbose)

    converged = False
    for k in range(1, max_iter + 1):
        # Interpolation.
        xf = (yb * a - ya * b) / (yb - ya)

        # Truncation.
        σ = np.sign(c - xf)
        δ = κ1 * (b - a) ** κ2
        xt = xf + σ * δ if δ <= abs(c - xf) else c

        # Projection.
        r = max(batol * 2.0 ** (n_max - k) - 0.5 * (b - a), 0.0)
        x_itp = xt if abs(xt - c) <= r else c - σ * r

        # Update interval.
        f_itp = f(x_itp)
        y_itp = sign * f_itp
        n_feval += 1
        if y_itp > 0:
            b, yb = x_itp, y_itp
        elif y_itp < 0:
            a, ya = x_itp, y_itp
        else:
            a = b = x_itp

        x = c = 0.5 * (a + b)
        hist.append(x_all=x_itp, f_all=f_itp, a_all=a, b_all=b)
        print_iteration(opts.verbose, k, n_feval, x_itp, f_itp, a, b)

        # Check stopping criteria.
        if abs(f_itp) <= opts.vtol:
            x, converged = x_itp, True
            break

        # Bracket can't be narrower than the float spacing at its ends.
        if b - a <= max(batol, 2 * EPS * max(abs(a), abs(b))):
            converged = True
            break

        if n_feval >= opts.max_feval:
            break

    return result(converged)
