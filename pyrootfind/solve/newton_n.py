"""
Newton-Raphson method for a root of a multivariate, vector-valued
function.
"""
from __future__ import annotations

from collections.abc import Callable

import numpy as np
from numpy.typing import ArrayLike

from pyrootfind.solve.exception import SolverError
from pyrootfind.solve.linalg import solve_linear
from pyrootfind.solve.options import SolverOptions, resolve_options
from pyrootfind.solve.perturb import perturb
from pyrootfind.solve.results import (IterHistory, SolverResult,
                                      print_finish, print_header,
                                      print_iteration)


# ======================================================================

def newton_n(f: Callable[[np.ndarray], ArrayLike],
             J: Callable[[np.ndarray], ArrayLike], x0: ArrayLike,
             opts: SolverOptions = None, **kwargs
             ) -> tuple[np.ndarray, SolverResult]:
    r"""
    Solve the nonlinear system :math:`f(x) = 0` (:math:`f : ℝⁿ → ℝⁿ`)
    using Newton's method.  Each step solves the linear system
    :math:`J(x_k) y = -f(x_k)` and sets :math:`x_{k+1} = x_k + y`.

    Parameters
    ----------
    f : Callable[[ndarray], array-like]
        Vector valued function, returning shape ``(n,)``.
    J : Callable[[ndarray], array-like]
        Jacobian of `f`, returning shape ``(n, n)``.
    x0 : array-like
        Initial guess, shape ``(n,)``.
    opts : SolverOptions, optional
        Solver options.  Uses `xatol`, `vtol` (scalar or per
        component), `max_iter`, `max_feval`, `max_jeval` and `verbose`.
    kwargs :
        Individual overrides of fields in `opts`.

    Returns
    -------
    x : ndarray
        Root estimate.
    result : SolverResult
        Diagnostics.  `f_all` and `J_all` hold the function and
        Jacobian at each point in `x_all`.

    Raises
    ------
    ValueError
        If `f` or `J` return arrays of the wrong shape.
    SolverError
        If the Jacobian is singular at :math:`x_k` and remains singular
        after perturbing :math:`x_k`, and :math:`|f(x_k)|` is not
        within `vtol`.

    Notes
    -----
    - Convergence is declared when :math:`\|y\| \le x_{atol}` or when
      every component satisfies :math:`|f_i(x_{k+1})| < v_{tol,i}`.
    - A singular Jacobian sometimes occurs exactly at a root.  For this
      reason the residual at the *unperturbed* point is checked before
      raising `SolverError`.

    Examples
    --------
    >>> def f(x):
    ...     return np.array([x[0]**2 + x[1]**2 - 4, x[0] - x[1]])
    >>> def J(x):
    ...     return np.array([[2 * x[0], 2 * x[1]], [1.0, -1.0]])
    >>> x, res = newton_n(f, J, [1.0, 2.0])
    >>> np.allclose(x, np.sqrt(2))
    True
    """
    opts = resolve_options(opts, **kwargs)
    max_iter = opts.iter_limit()
    f_vec, J_mat = _checked_functions(f, J, x0)

    x_curr = np.atleast_1d(np.asarray(x0, dtype=float))
    vtol = np.broadcast_to(np.asarray(opts.vtol, dtype=float), x_curr.shape)

    f_curr, J_curr = f_vec(x_curr), J_mat(x_curr)
    n_feval, n_jeval = 1, 1

    hist = IterHistory('x_all', 'f_all', 'J_all')
    hist.append(x_all=x_curr, f_all=f_curr, J_all=J_curr)

    if np.all(np.abs(f_curr) <= vtol):
        return x_curr, hist.result(x_curr, n_feval=n_feval,
                                   n_jeval=n_jeval, converged=True)

    print_header(f"Newton's Method - Solving {x_curr.size} Equations",
                 opts.verbose)

    x_next, converged = x_curr, False
    while len(hist) <= max_iter:
        sol = solve_linear(J_curr, -f_curr)

        if sol.singular:
            # Perturb the current estimate and retry once.
            x_pert = perturb(x_curr)
            f_pert, J_pert = f_vec(x_pert), J_mat(x_pert)
            n_feval += 1
            n_jeval += 1
            sol = solve_linear(J_pert, -f_pert)

            if sol.singular:
                if np.all(np.abs(f_curr) <= vtol):
                    # Singular Jacobian at the root itself.
                    x_next, converged = x_curr, True
                    break

                raise SolverError("newton_n() failed to converge:", flag=1,
                                  details="Jacobian was singular.",
                                  x=x_curr, fx=f_curr,
                                  n_iter=len(hist) - 1, n_feval=n_feval,
                                  n_jeval=n_jeval)

            x_curr, f_curr, J_curr = x_pert, f_pert, J_pert

        y = sol.x
        x_next = x_curr + y
        f_next, J_next = f_vec(x_next), J_mat(x_next)
        n_feval += 1
        n_jeval += 1
        hist.append(x_all=x_next, f_all=f_next, J_all=J_next)
        print_iteration(opts.verbose, len(hist) - 1, n_feval, x_next,
                        f_next)

        if np.linalg.norm(y) <= opts.xatol or np.all(np.abs(f_next) < vtol):
            converged = True
            break

        if n_feval >= opts.max_feval or n_jeval >= opts.max_jeval:
            break

        x_curr, f_curr, J_curr = x_next, f_next, J_next

    print_finish(opts.verbose, converged)
    return x_next, hist.result(x_next, n_feval=n_feval, n_jeval=n_jeval,
                               converged=converged)


# ----------------------------------------------------------------------

def _checked_functions(f, J, x0):
    """
    Wrap `f` and `J` so that outputs are float arrays of the shape
    implied by `x0`.
    """
    n = np.size(x0)

    def f_vec(x):
        fx = np.atleast_1d(np.asarray(f(x), dtype=float))
        if fx.shape != (n,):
            raise ValueError(f"Wrong shape output from f(x): Expected "
                             f"{(n,)} got {fx.shape}.")
        return fx

    def J_mat(x):
        Jx = np.asarray(J(x), dtype=float)
        if Jx.size == 1:
            Jx = Jx.reshape(1, 1)  # Allow scalar Jacobian for n = 1.
        if Jx.shape != (n, n):
            raise ValueError(f"Wrong shape output from J(x): Expected "
                             f"{(n, n)} got {Jx.shape}.")
        return Jx

    return f_vec, J_mat
