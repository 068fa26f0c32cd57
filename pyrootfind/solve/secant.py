from __future__ import annotations

import math
from collections.abc import Callable

import numpy as np
from numpy.typing import ArrayLike

from pyrootfind.solve.options import EPS, SolverOptions, resolve_options
from pyrootfind.solve.perturb import perturb
from pyrootfind.solve.results import (IterHistory, SolverResult,
                                      print_finish, print_header,
                                      print_iteration)

# Written by Eric J. Whitney, December 2021.


# ======================================================================

def secant(f: Callable[[float], float], x0: float | ArrayLike,
           opts: SolverOptions = None, **kwargs
           ) -> tuple[float, SolverResult]:
    r"""
    Find a root of a univariate, scalar-valued function using the secant
    method:

    .. math:: x_{k+1} = \frac{x_{k-1} f(x_k) - x_k f(x_{k-1})}
              {f(x_k) - f(x_{k-1})}

    Parameters
    ----------
    f : Callable[[float], float]
        Function which we are searching for root.
    x0 : float or (float, float)
        Initial guess.  If only one point is given the second point is
        placed at :math:`x_0 + \sqrt{\epsilon}(1 + |x_0|)`.
    opts : SolverOptions, optional
        Solver options.  Uses `xatol`, `vtol`, `max_iter`, `max_feval`
        and `verbose`.
    kwargs :
        Individual overrides of fields in `opts`.

    Returns
    -------
    x : float
        Root estimate.
    result : SolverResult
        Diagnostics.  Both starting points are included in `x_all` and
        `f_all`, so the second starting point counts as iteration 1.

    Notes
    -----
    If :math:`f(x_k) = f(x_{k-1})` the secant step is undefined.  In
    this case :math:`x_k` is perturbed (see `perturb`) and `f` is
    re-evaluated before continuing.

    Examples
    --------
    >>> x, res = secant(lambda x: x**2 - x - 1, 1.0)
    >>> print(f"{x:.12f}")
    1.618033988750
    """
    opts = resolve_options(opts, **kwargs)
    max_iter = opts.iter_limit()

    if np.ndim(x0) == 0:
        x_prev = float(x0)
        x_curr = x_prev + math.sqrt(EPS) * (1 + abs(x_prev))
    else:
        x_prev, x_curr = (float(x_) for x_ in x0)
        if x_prev == x_curr:
            raise ValueError("Starting points must be different.")

    hist = IterHistory('x_all', 'f_all')
    print_header("Secant Method", opts.verbose)

    f_prev = f(x_prev)
    n_feval = 1
    hist.append(x_all=x_prev, f_all=f_prev)

    if abs(f_prev) <= opts.vtol:
        print_finish(opts.verbose, True)
        return x_prev, hist.result(x_prev, n_feval=n_feval, converged=True)

    f_curr = f(x_curr)
    n_feval += 1
    hist.append(x_all=x_curr, f_all=f_curr)

    if abs(f_curr) <= opts.vtol:
        print_finish(opts.verbose, True)
        return x_curr, hist.result(x_curr, n_feval=n_feval, converged=True)

    x_next, converged = x_curr, False
    while len(hist) <= max_iter and n_feval < opts.max_feval:
        if f_curr == f_prev:
            # Level state, step undefined.  Nudge the current point.
            x_curr = perturb(x_curr)
            f_curr = f(x_curr)
            n_feval += 1
            if f_curr == f_prev:
                x_next = x_curr
                break  # Function is flat here.

        x_next = (x_prev * f_curr - x_curr * f_prev) / (f_curr - f_prev)
        f_next = f(x_next)
        n_feval += 1
        hist.append(x_all=x_next, f_all=f_next)
        print_iteration(opts.verbose, len(hist) - 1, n_feval, x_next,
                        f_next)

        if abs(f_next) <= opts.vtol or abs(x_next - x_curr) <= opts.xatol:
            converged = True
            break

        x_prev, f_prev = x_curr, f_curr
        x_curr, f_curr = x_next, f_next

    print_finish(opts.verbose, converged)
    return x_next, hist.result(x_next, n_feval=n_feval, converged=converged)
