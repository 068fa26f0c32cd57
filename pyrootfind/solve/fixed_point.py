from __future__ import annotations

from collections.abc import Callable

import numpy as np
from numpy.typing import ArrayLike

from pyrootfind.solve.options import SolverOptions, resolve_options
from pyrootfind.solve.results import (IterHistory, SolverResult,
                                      print_finish, print_header,
                                      print_iteration)


# ----------------------------------------------------------------------------

def fixed_point(g: Callable[[float], float], x0: float,
                opts: SolverOptions = None, **kwargs
                ) -> tuple[float, SolverResult]:
    r"""
    Find the fixed point :math:`c = g(c)` of a univariate, scalar-valued
    function by direct iteration :math:`x_{k+1} = g(x_k)`.

    Examples
    --------
    >>> import math
    >>> c, res = fixed_point(math.cos, 1.0, xatol=1e-12)
    >>> print(f"{c:.10f}")
    0.7390851332
    >>> res.converged
    True

    Parameters
    ----------
    g : Callable[[float], float]
        Function that returns a better estimate of `x`.
    x0 : float
        Starting value for `x`.
    opts : SolverOptions, optional
        Solver options.  Uses `xatol`, `max_iter`, `max_feval` and
        `verbose`.
    kwargs :
        Individual overrides of fields in `opts`.

    Returns
    -------
    c : float
        The last computed iterate.  This is returned even when the
        iteration has not converged; check ``result.converged``.
    result : SolverResult
        Diagnostics (`x_all`, `n_iter`, `n_feval`).
    """
    opts = resolve_options(opts, **kwargs)
    return _iterate(lambda x_: float(g(x_)), float(x0), opts,
                    dist=lambda u, v: abs(u - v),
                    title="Fixed Point Iteration")


def fixed_point_n(g: Callable[[np.ndarray], ArrayLike], x0: ArrayLike,
                  opts: SolverOptions = None, **kwargs
                  ) -> tuple[np.ndarray, SolverResult]:
    r"""
    Find the fixed point :math:`c = g(c)` of a multivariate,
    vector-valued function by direct iteration.  Convergence is
    measured using :math:`\|x_{k+1} - x_k\|`.

    Examples
    --------
    >>> def g(x):
    ...     return np.array([np.cos(x[1]), np.sin(x[0])]) / 2
    >>> c, res = fixed_point_n(g, [0.0, 0.0])
    >>> np.allclose(g(c), c)
    True

    Parameters
    ----------
    g : Callable[[ndarray], array-like]
        Function that returns a better estimate of `x`.  The output must
        have the same shape as `x`.
    x0 : array-like
        Starting vector.
    opts, kwargs :
        As for `fixed_point`.

    Returns
    -------
    c : ndarray
        The last computed iterate.
    result : SolverResult
        Diagnostics; ``x_all`` has shape ``(n_iter + 1, n)``.

    Raises
    ------
    ValueError
        If `g(x)` does not return the same shape as `x`.
    """
    opts = resolve_options(opts, **kwargs)
    x0 = np.atleast_1d(np.asarray(x0, dtype=float))

    def g_vec(x_):
        gx = np.asarray(g(x_), dtype=float)
        if gx.shape != x0.shape:
            raise ValueError(f"Wrong shape output from g(x): Expected "
                             f"{x0.shape} got {gx.shape}.")
        return gx

    return _iterate(g_vec, x0, opts,
                    dist=lambda u, v: np.linalg.norm(u - v),
                    title="Fixed Point Iteration (Vector)")


# ----------------------------------------------------------------------------

def root_iteration(f: Callable[[float], float], x0: float,
                   opts: SolverOptions = None, **kwargs
                   ) -> tuple[float, SolverResult]:
    """
    Find a root of :math:`f(x)` by fixed point iteration on the auxiliary
    function :math:`g(x) = x - f(x)`.  This only converges where
    :math:`|1 - f'(x)| < 1` near the root.  Parameters are as for
    `fixed_point`.
    """
    return fixed_point(lambda x_: x_ - f(x_), x0, opts, **kwargs)


def root_iteration_n(f: Callable[[np.ndarray], ArrayLike], x0: ArrayLike,
                     opts: SolverOptions = None, **kwargs
                     ) -> tuple[np.ndarray, SolverResult]:
    """
    Vector version of `root_iteration`, iterating
    :math:`g(x) = x - f(x)` with `fixed_point_n`.
    """
    return fixed_point_n(lambda x_: x_ - np.asarray(f(x_), dtype=float),
                         x0, opts, **kwargs)


# ----------------------------------------------------------------------------

def _iterate(g, x0, opts: SolverOptions, dist, title: str):
    max_iter = opts.iter_limit()
    hist = IterHistory('x_all')
    hist.append(x_all=x0)
    print_header(title, opts.verbose)

    x, x_next = x0, x0
    n_feval, converged = 0, False
    while len(hist) <= max_iter:
        x_next = g(x)
        n_feval += 1
        hist.append(x_all=x_next)
        print_iteration(opts.verbose, len(hist) - 1, n_feval, x_next)

        if dist(x_next, x) <= opts.xatol:
            converged = True
            break

        if n_feval >= opts.max_feval:
            break

        x = x_next

    print_finish(opts.verbose, converged)
    return x_next, hist.result(x_next, n_feval=n_feval, converged=converged)
