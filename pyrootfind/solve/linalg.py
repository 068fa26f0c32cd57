"""
Dense linear algebra used by the multivariate solvers.  Singularity is
reported through the returned `LinearSolution` rather than raised, so
that solvers can decide how to recover.
"""
from __future__ import annotations

from collections.abc import Callable
from typing import NamedTuple

import numpy as np
from numpy.typing import ArrayLike
from scipy.optimize import approx_fprime

from pyrootfind.solve.options import EPS


# ======================================================================

class LinearSolution(NamedTuple):
    """Result of `solve_linear`.  `x` is `None` when `singular`."""
    x: np.ndarray | None
    singular: bool


def solve_linear(A: ArrayLike, b: ArrayLike) -> LinearSolution:
    """
    Solve the square system ``A @ x = b``.

    The system is treated as singular if the factorisation fails, the
    solution is not finite, or the condition number of `A` exceeds
    ``1 / ε``.  `b` may be a vector or a matrix of right-hand sides
    (e.g. the identity, to compute an inverse).

    Examples
    --------
    >>> solve_linear([[2.0, 0.0], [0.0, 4.0]], [1.0, 1.0])
    LinearSolution(x=array([0.5 , 0.25]), singular=False)
    >>> solve_linear([[1.0, 1.0], [1.0, 1.0]], [1.0, 2.0]).singular
    True
    """
    A, b = np.asarray(A, dtype=float), np.asarray(b, dtype=float)
    if A.ndim != 2 or A.shape[0] != A.shape[1]:
        raise ValueError(f"Require a square matrix, got shape {A.shape}.")

    try:
        x = np.linalg.solve(A, b)
    except np.linalg.LinAlgError:
        return LinearSolution(None, True)

    if not np.all(np.isfinite(x)) or np.linalg.cond(A) > 1 / EPS:
        return LinearSolution(None, True)

    return LinearSolution(x, False)


# ----------------------------------------------------------------------

def approx_jacobian(f: Callable[[np.ndarray], ArrayLike], x: ArrayLike,
                    step: float = None) -> np.ndarray:
    """
    Forward difference approximation of the Jacobian of ``f(x)`` at
    `x`, using `scipy.optimize.approx_fprime`.

    Parameters
    ----------
    f : Callable[[ndarray], array-like]
        Vector valued function of a vector.
    x : array-like
        Point at which to approximate the Jacobian.
    step : float, optional
        Absolute step size.  Defaults to ``√ε``.

    Returns
    -------
    J : ndarray
        Jacobian estimate, shape ``(m, n)`` where ``n = len(x)`` and
        ``m = len(f(x))``.
    """
    x = np.atleast_1d(np.asarray(x, dtype=float))
    if step is None:
        step = np.sqrt(EPS)

    J = np.asarray(approx_fprime(x, lambda x_: np.asarray(f(x_), dtype=float),
                                 step), dtype=float)
    return J.reshape(-1, x.size)
