from __future__ import annotations

from collections.abc import Callable

import numpy as np
from numpy.typing import ArrayLike

from pyrootfind.solve.exception import SolverError
from pyrootfind.solve.linalg import approx_jacobian, solve_linear
from pyrootfind.solve.options import SolverOptions, resolve_options
from pyrootfind.solve.perturb import perturb
from pyrootfind.solve.results import (IterHistory, SolverResult,
                                      print_finish, print_header,
                                      print_iteration)


# ----------------------------------------------------------------------------

def broyden(f: Callable[[np.ndarray], ArrayLike], x0: ArrayLike,
            opts: SolverOptions = None, *,
            jac: Callable[[np.ndarray], ArrayLike] = None,
            **kwargs) -> tuple[np.ndarray, SolverResult]:
    r"""
    Solve a nonlinear system of equations :math:`f(x) = 0` using
    Broyden's ("good") quasi-Newton method of [1]_.

    Notes
    -----
    - The Jacobian is only required at the starting point.  Its inverse
      :math:`A_0 = J(x_0)^{-1}` is found by solving :math:`J_0 A_0 = I`.
      After this the inverse is updated directly at each step using the
      Sherman-Morrison formula:

      .. math:: A_{k+1} = A_k + \frac{(s_k - A_k y_k) s_k^T A_k}
                {s_k^T A_k y_k}

      where :math:`s_k = x_{k+1} - x_k` and
      :math:`y_k = f(x_{k+1}) - f(x_k)`.  This costs :math:`O(n^2)` per
      step instead of the :math:`O(n^3)` solution required by Newton's
      method.  The update is skipped for a step where
      :math:`s_k^T A_k y_k = 0`.
    - If the initial Jacobian is singular, :math:`x_0` is perturbed and
      the Jacobian recomputed once.
    - Convergence criteria are the same as `newton_n`.

    Parameters
    ----------
    f : Callable[[ndarray], array-like]
        Vector valued function taking `x` and returning `f(x)` of the
        same shape.
    x0 : array-like
        Starting vector.
    opts : SolverOptions, optional
        Solver options.  Uses `xatol`, `vtol`, `max_iter`, `max_feval`
        and `verbose`.
    jac : Callable[[ndarray], array-like], optional
        Jacobian of `f`, used only at the starting point.  If not
        provided a forward difference approximation is used (see
        `approx_jacobian`), with the function evaluations this requires
        included in ``result.n_feval``.
    kwargs :
        Individual overrides of fields in `opts`.

    Returns
    -------
    x : ndarray
        Root estimate.
    result : SolverResult
        Diagnostics.  `n_jeval` is 1 if `jac` was used (or 2 if the
        starting point had to be perturbed), otherwise 0.

    Raises
    ------
    ValueError
        If `f(x)` does not match the size of `x`.
    SolverError
        If the initial Jacobian is singular both at :math:`x_0` and at
        the perturbed point.

    References
    ----------
    .. [1] Broyden, C. G., "A Class of Methods for Solving Nonlinear
       Simultaneous Equations", Mathematics of Computation, Volume 19,
       Number 92, October 1965, pp 577-593.

    Examples
    --------
    >>> def f(x):
    ...     return np.array([x[0]**2 + x[1]**2 - 4, np.exp(x[0]) + x[1] - 1])
    >>> x, res = broyden(f, [1.0, -1.7])
    >>> bool(np.all(np.abs(f(x)) < 1e-8))
    True
    """
    opts = resolve_options(opts, **kwargs)
    max_iter = opts.iter_limit()

    x = np.atleast_1d(np.asarray(x0, dtype=float))
    n = x.size
    vtol = np.broadcast_to(np.asarray(opts.vtol, dtype=float), x.shape)
    n_feval, n_jeval = 0, 0

    def f_vec(x_):
        nonlocal n_feval
        fx_ = np.atleast_1d(np.asarray(f(x_), dtype=float))
        n_feval += 1
        if fx_.shape != (n,):
            raise ValueError(f"Function result size ({fx_.size}) does not "
                             f"match problem dimension ({n}).")
        return fx_

    def jacobian(x_):
        nonlocal n_jeval
        if jac is None:
            return approx_jacobian(f_vec, x_)

        n_jeval += 1
        return np.asarray(jac(x_), dtype=float).reshape(n, n)

    fx = f_vec(x)
    hist = IterHistory('x_all', 'f_all')
    hist.append(x_all=x, f_all=fx)

    if np.all(np.abs(fx) <= vtol):
        return x, hist.result(x, n_feval=n_feval, converged=True)

    print_header(f"Broyden's Method - Solving {n} Equations", opts.verbose)

    # Initial inverse Jacobian.
    sol = solve_linear(jacobian(x), np.eye(n))
    if sol.singular:
        x = perturb(x)
        fx = f_vec(x)
        sol = solve_linear(jacobian(x), np.eye(n))
        if sol.singular:
            raise SolverError("broyden() failed to start:", flag=1,
                              details="Initial Jacobian was singular.",
                              x=x, fx=fx, n_feval=n_feval, n_jeval=n_jeval)

    A = sol.x
    s = -A @ fx
    x_next, converged = x + s, False

    while True:
        fx_next = f_vec(x_next)
        hist.append(x_all=x_next, f_all=fx_next)
        print_iteration(opts.verbose, len(hist) - 1, n_feval, x_next,
                        fx_next)

        # Check stopping criteria.
        if np.linalg.norm(s) <= opts.xatol or np.all(np.abs(fx_next) < vtol):
            converged = True
            break

        if n_feval >= opts.max_feval or len(hist) > max_iter:
            break

        # Update inverse Jacobian.
        y = fx_next - fx
        Ay = A @ y
        denom = s @ Ay
        if denom != 0:
            A += np.outer(s - Ay, s @ A) / denom

        x, fx = x_next, fx_next
        s = -A @ fx
        x_next = x + s

    print_finish(opts.verbose, converged)
    return x_next, hist.result(x_next, n_feval=n_feval, n_jeval=n_jeval,
                               converged=converged)
