from __future__ import annotations

from dataclasses import dataclass, replace

import numpy as np
from numpy.typing import ArrayLike

# Written by Eric J. Whitney, January 2020.

EPS = np.finfo(float).eps
GOLDEN = 0.5 * (1.0 + np.sqrt(5.0))  # φ.

DEFAULT_MAX_ITER = 200


# ======================================================================


@dataclass(frozen=True, kw_only=True)
class SolverOptions:
    # noinspection PyUnresolvedReferences
    """
    Dataclass holding the tunable parameters shared by all solvers.
    Every field has a default, so ``SolverOptions()`` gives the standard
    configuration.  Use `resolve_options` (or pass keyword arguments
    directly to a solver) to override individual fields.

    Parameters
    ----------
    xatol : float, default = 1e-10
        Absolute step tolerance.  Open methods stop when
        ``|x' - x| <= xatol`` (or ``||x' - x|| <= xatol`` for vectors).
    vtol : float or array-like, default = 0
        Value tolerance.  Solvers stop when ``|f(x)| <= vtol``.  For
        vector-valued functions this may be given per component.
    batol : float, default = 2ε
        Bracket tolerance used by the bracketing methods (`bisection`,
        `brent_dekker`, `itp`).
    max_iter : int, optional
        Maximum number of solver iterations.  If `None` a value of 200
        is used, except for `bisection` where the number of halvings
        required to reach `batol` is used instead.
    max_feval : int, default = 200
        Maximum number of function evaluations.
    max_jeval : int, default = 200
        Maximum number of derivative / Jacobian evaluations.

        .. note:: Evaluation budgets are not scaled by the problem size.
           For large systems pass e.g. ``max_feval=200 * n``.

    rebracket : bool, default = False
        If `True` an interval supplied to a bracketing method is passed
        through `bracket` again before solving.
    verbose : bool, default = False
        If `True`, print progress at each iteration.
    kappa1 : float, default = 0.1
        ITP truncation scale (`κ₁` > 0).
    kappa2 : float, default = 0.98(1 + φ)
        ITP truncation exponent, ``1 <= κ₂ < 1 + φ``.
    n0 : int, default = 1
        ITP slack on the number of bisection steps (`n₀` >= 0).
    """
    xatol: float = 1e-10
    vtol: float | ArrayLike = 0.0
    batol: float = 2 * EPS
    max_iter: int | None = None
    max_feval: int = 200
    max_jeval: int = 200
    rebracket: bool = False
    verbose: bool = False
    kappa1: float = 0.1
    kappa2: float = 0.98 * (1 + GOLDEN)
    n0: int = 1

    def __post_init__(self):
        """Check certain values."""
        if self.xatol < 0:
            raise ValueError("Require 'xatol' >= 0.")
        if np.any(np.asarray(self.vtol) < 0):
            raise ValueError("Require 'vtol' >= 0.")
        if self.batol <= 0:
            raise ValueError("Require 'batol' > 0.")
        if self.max_iter is not None and self.max_iter < 1:
            raise ValueError("Require 'max_iter' >= 1.")
        if self.max_feval < 1 or self.max_jeval < 1:
            raise ValueError("Require 'max_feval', 'max_jeval' >= 1.")
        if self.kappa1 <= 0:
            raise ValueError("Require 'kappa1' > 0.")
        if not (1 <= self.kappa2 < 1 + GOLDEN):
            raise ValueError("Require 1 <= 'kappa2' < 1 + φ.")
        if self.n0 < 0:
            raise ValueError("Require 'n0' >= 0.")

    # -- Public Methods ------------------------------------------------

    def iter_limit(self, default: int = DEFAULT_MAX_ITER) -> int:
        """
        Returns `max_iter` if set, otherwise `default`.
        """
        return default if self.max_iter is None else self.max_iter


# ----------------------------------------------------------------------

def resolve_options(opts: SolverOptions = None, **kwargs) -> SolverOptions:
    """
    Merge keyword overrides over `opts` (or over the defaults if `opts`
    is `None`).

    Examples
    --------
    >>> resolve_options(xatol=1e-6).xatol
    1e-06
    >>> resolve_options(SolverOptions(max_feval=50), verbose=True).max_feval
    50

    Raises
    ------
    TypeError
        If a keyword is not a field of `SolverOptions`.
    """
    if opts is None:
        return SolverOptions(**kwargs)
    if not kwargs:
        return opts
    return replace(opts, **kwargs)
