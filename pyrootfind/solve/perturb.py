from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike

from pyrootfind.solve.options import EPS

# Written by Eric J. Whitney, February 2023.


# ======================================================================

def perturb(x: ArrayLike, rel_step: float = 100 * EPS) -> float | np.ndarray:
    """
    Nudge an iterate by a small, deterministic, scale-aware amount.  This
    is used to move off degenerate points such as a zero derivative,
    a singular Jacobian or a stalled secant step.

    Nonzero components are scaled by ``1 + max(rel_step, ε||x||)``.
    Components that are exactly zero are replaced by `rel_step`.

    Examples
    --------
    >>> perturb(0.0) == 100 * np.finfo(float).eps
    True
    >>> print(f"{perturb(1.0):.15f}")
    1.000000000000022
    >>> perturb([0.0, 0.0]) / np.finfo(float).eps
    array([100., 100.])

    Parameters
    ----------
    x : float or array-like
        Iterate to perturb.
    rel_step : float, default = 100ε
        Minimum relative perturbation.

    Returns
    -------
    xp : float or ndarray
        Perturbed iterate.  Scalars give a `float` result.
    """
    x_ = np.asarray(x, dtype=float)
    scale = 1.0 + max(rel_step, EPS * np.linalg.norm(np.atleast_1d(x_)))
    xp = np.where(x_ != 0, x_ * scale, rel_step)
    return float(xp) if xp.ndim == 0 else xp


# Long-form name.
perturb_iterate = perturb


# ----------------------------------------------------------------------

def absolute_difference(a: ArrayLike, b: ArrayLike) -> float:
    """Returns ``||b - a||``."""
    return float(np.linalg.norm(np.atleast_1d(np.subtract(b, a))))


def relative_difference(a: ArrayLike, b: ArrayLike) -> float:
    """
    Returns ``||b - a|| / ||a||``, i.e. referenced to `a`.  The
    denominator is limited to ε when `a` is zero.
    """
    a_norm = np.linalg.norm(np.atleast_1d(np.asarray(a, dtype=float)))
    return absolute_difference(a, b) / max(a_norm, EPS)
