"""
Newton-Raphson method for a root of a univariate, scalar-valued
function, with a perturbation fallback where the derivative vanishes.
"""

# Written by: Eric J. Whitney  Last updated: 21 December 2021

from __future__ import annotations

from collections.abc import Callable

from pyrootfind.solve.exception import SolverError
from pyrootfind.solve.options import SolverOptions, resolve_options
from pyrootfind.solve.perturb import perturb
from pyrootfind.solve.results import (IterHistory, SolverResult,
                                      print_finish, print_header,
                                      print_iteration)


# ---------------------------------------------------------------------------

def newton(f: Callable[[float], float], df: Callable[[float], float],
           x0: float, opts: SolverOptions = None, **kwargs
           ) -> tuple[float, SolverResult]:
    r"""
    Find a zero of a univariate, scalar-valued function using the
    Newton-Raphson method :math:`x_{k+1} = x_k - f(x_k) / f'(x_k)`.

    Parameters
    ----------
    f : Callable[[float], float]
        Function which we are searching for root.
    df : Callable[[float], float]
        Derivative :math:`f'(x)`.
    x0 : float
        Initial guess.
    opts : SolverOptions, optional
        Solver options.  Uses `xatol`, `vtol`, `max_iter`, `max_feval`,
        `max_jeval` (derivative evaluations) and `verbose`.
    kwargs :
        Individual overrides of fields in `opts`.

    Returns
    -------
    x : float
        Root estimate.
    result : SolverResult
        Diagnostics.  `f_all` and `df_all` hold the function and
        derivative at each point in `x_all`; `n_jeval` counts derivative
        evaluations.  The derivative is not evaluated at the final
        point, so the last entry of `df_all` is `NaN`.

    Raises
    ------
    SolverError
        If :math:`f'(x_k) = 0` and still zero after perturbing
        :math:`x_k`, unless :math:`|f(x_k)|` is already within `vtol`.

    Examples
    --------
    >>> x, res = newton(lambda x: x**2 - 1, lambda x: 2 * x, 1000.0)
    >>> print(f"{x:.12f}")
    1.000000000000
    """
    opts = resolve_options(opts, **kwargs)
    max_iter = opts.iter_limit()

    x_curr = float(x0)
    f_curr = f(x_curr)
    n_feval, n_deval = 1, 0

    if abs(f_curr) <= opts.vtol:
        hist = IterHistory('x_all', 'f_all')
        hist.append(x_all=x_curr, f_all=f_curr)
        return x_curr, hist.result(x_curr, n_feval=n_feval, converged=True)

    df_curr = df(x_curr)
    n_deval += 1

    hist = IterHistory('x_all', 'f_all', 'df_all')
    hist.append(x_all=x_curr, f_all=f_curr, df_all=df_curr)
    print_header("Newton's Method", opts.verbose)

    x_next, converged = x_curr, False
    while len(hist) <= max_iter:
        if df_curr == 0:
            # Reached a level state -> df/dx = 0.  Nudge off this point.
            x_pert = perturb(x_curr)
            f_pert, df_pert = f(x_pert), df(x_pert)
            n_feval += 1
            n_deval += 1

            if df_pert == 0:
                if abs(f_curr) <= opts.vtol:
                    x_next, converged = x_curr, True
                    break

                raise SolverError("newton() failed to converge:", flag=1,
                                  details="Derivative was zero.",
                                  x=x_curr, fx=f_curr,
                                  n_iter=len(hist) - 1, n_feval=n_feval,
                                  n_jeval=n_deval)

            x_curr, f_curr, df_curr = x_pert, f_pert, df_pert

        x_next = x_curr - f_curr / df_curr
        f_next = f(x_next)
        n_feval += 1

        step = abs(x_next - x_curr)
        if (abs(f_next) <= opts.vtol or step <= opts.xatol or
                n_feval >= opts.max_feval or n_deval >= opts.max_jeval):
            # Stopping here, so f'(x_next) is not required.
            hist.append(x_all=x_next, f_all=f_next, df_all=float('nan'))
            print_iteration(opts.verbose, len(hist) - 1, n_feval, x_next,
                            f_next)
            converged = abs(f_next) <= opts.vtol or step <= opts.xatol
            break

        df_next = df(x_next)
        n_deval += 1
        hist.append(x_all=x_next, f_all=f_next, df_all=df_next)
        print_iteration(opts.verbose, len(hist) - 1, n_feval, x_next,
                        f_next)

        x_curr, f_curr, df_curr = x_next, f_next, df_next

    print_finish(opts.verbose, converged)
    return x_next, hist.result(x_next, n_feval=n_feval, n_jeval=n_deval,
                               converged=converged)
