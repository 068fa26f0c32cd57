"""
Estimation of the order of convergence and asymptotic error constant of
an iterative method from its sequence of iterates.
"""
from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike


# ======================================================================

def analyze(x_all: ArrayLike) -> tuple[float, float, np.ndarray,
                                       np.ndarray]:
    r"""
    Estimate the order of convergence :math:`\alpha` and asymptotic error
    constant :math:`\lambda` of a sequence of iterates, such that
    :math:`\|x_{k+1} - x_k\| \approx \lambda \|x_k - x_{k-1}\|^\alpha`.

    Using four consecutive iterates :math:`d = x_{k-2}`, :math:`c =
    x_{k-1}`, :math:`b = x_k` and :math:`a = x_{k+1}`:

    .. math::
        \alpha_k = \frac{\ln(r_{ab} / r_{bc})}{\ln(r_{bc} / r_{cd})},
        \quad \lambda_k = \frac{r_{ab}}{r_{bc}^{\alpha_k}}

    where :math:`r_{ab} = \|a - b\|` etc.

    Parameters
    ----------
    x_all : array-like, shape (N,) or (N, n)
        Iterates, e.g. ``SolverResult.x_all``, with ``N = n_iter + 1``.

    Returns
    -------
    alpha : float
        Best (i.e. latest) estimate of the order of convergence.
    lam : float
        Best estimate of the asymptotic error constant.
    alpha_all : ndarray, shape (N,)
        Order of convergence estimate at each iterate.  The first two
        and the last entries are always `NaN`.
    lam_all : ndarray, shape (N,)
        Asymptotic error constant estimate at each iterate, with `NaN`
        in the same places as `alpha_all`.

    Notes
    -----
    If there are fewer than four iterates (``n_iter <= 2``) no estimate
    is possible and all outputs are `NaN`.

    Examples
    --------
    >>> alpha, lam, _, _ = analyze(1 / 2.0 ** np.arange(95, 101))
    >>> print(f"{alpha:.4f}, {lam:.4f}")
    1.0000, 0.5000
    """
    x_all = np.asarray(x_all, dtype=float)
    if x_all.ndim == 1:
        x_all = x_all[:, np.newaxis]
    elif x_all.ndim != 2:
        raise ValueError("x_all must be 1-D or 2-D.")

    n_iter = x_all.shape[0] - 1
    alpha_all = np.full(n_iter + 1, np.nan)
    lam_all = np.full(n_iter + 1, np.nan)
    if n_iter <= 2:
        return np.nan, np.nan, alpha_all, lam_all

    # Distance between successive iterates.
    r = np.linalg.norm(np.diff(x_all, axis=0), axis=1)

    for i in range(2, n_iter):
        r_ab, r_bc, r_cd = r[i], r[i - 1], r[i - 2]
        alpha_all[i] = np.log(r_ab / r_bc) / np.log(r_bc / r_cd)
        lam_all[i] = r_ab / r_bc ** alpha_all[i]

    return (float(alpha_all[n_iter - 1]), float(lam_all[n_iter - 1]),
            alpha_all, lam_all)


convergence_analysis = analyze
