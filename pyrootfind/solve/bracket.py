from __future__ import annotations

import warnings
from collections.abc import Callable

import numpy as np
from numpy.typing import ArrayLike

from pyrootfind.solve.exception import BracketWarning
from pyrootfind.solve.options import SolverOptions
from pyrootfind.solve.perturb import perturb

# Written by Eric J. Whitney, January 2023.

DEFAULT_BRACKET_STEPS = 200


# ======================================================================

def bracket(f: Callable[[float], float], x0: float | ArrayLike,
            max_iter: int = DEFAULT_BRACKET_STEPS
            ) -> tuple[float, float, int, int]:
    """
    Given a starting point or an interval, the interval is expanded
    geometrically about its centre until a sign change of the function
    `f(x)` is bracketed or until `max_iter` expansions have been made.

    Parameters
    ----------
    f : Callable[[float], float]
        Scalar function of one variable.
    x0 : float or (float, float)
        Either a single starting point, in which case the initial
        interval is ``(x0, perturb(x0))``, or an interval ``(a, b)``
        given in any order.
    max_iter : int, default = 200
        Maximum number of expansions.

    Returns
    -------
    a, b : float, float
        Interval with ``a < b``, bracketing a sign change unless a
        `BracketWarning` was issued.
    n_iter : int
        Number of expansions made.
    n_feval : int
        Number of function evaluations (``2 + 2 * n_iter``).

    Raises
    ------
    ValueError
        Illegal starting interval.

    Warns
    -----
    BracketWarning
        No sign change was found within `max_iter` expansions.  The
        last (non-bracketing) interval is returned.

    Notes
    -----
    - A bracket is found when ``f(a) * f(b) < 0``.  An endpoint that is
      exactly a root does *not* stop the expansion.
    - At each step the half-width doubles while the centre stays fixed,
      so both ends move and both are re-evaluated.
    - Basic expansion can easily fail for functions that have extrema
      near the area of interest. Quoting [1]_: `'The procedure “go
      downhill until your function changes sign,” can be foiled by a
      function that has a simple extremum.  Nevertheless, if you are
      prepared to deal with a “failure” outcome, this procedure is
      often a good first start; success is usual if your function has
      opposite signs in the limit x → ±∞.'`

    References
    ----------
    .. [1] Press, W. H.; Flannery, B. P.; Teukolsky, S. A.; and
       Vetterling, W. T. *Numerical Recipes: The Art of Scientific
       Computing*, 3rd ed. Cambridge, England: Cambridge University
       Press, pp. 447, 2007. Section 9.1: "Bracketing and Bisection".

    Examples
    --------
    >>> bracket(lambda x: x, [50, 100])
    (-25.0, 175.0, 2, 6)
    """
    a, b = _as_interval(x0)
    if a == b:
        raise ValueError("Interval end points must have different values.")

    n_iter, n_feval = 0, 2
    if f(a) * f(b) < 0:
        return a, b, n_iter, n_feval

    c = 0.5 * (a + b)  # Fixed centre.
    w = 0.5 * (b - a)  # Half-width.

    while n_iter < max_iter:
        w *= 2.0
        a, b = c - w, c + w
        n_iter += 1
        n_feval += 2

        if f(a) * f(b) < 0:
            return a, b, n_iter, n_feval

    warnings.warn(f"No interval with a sign change was found after "
                  f"{n_iter} expansions, last interval [{a}, {b}].",
                  BracketWarning)
    return a, b, n_iter, n_feval


# Long-form name.
bracket_sign_change = bracket


# ----------------------------------------------------------------------

def initial_bracket(f: Callable[[float], float], x0: float | ArrayLike,
                    opts: SolverOptions) -> tuple[float, float, int, int]:
    """
    Starting interval for the bracketing methods.  A single point is
    always expanded using `bracket`.  An interval is only expanded if
    ``opts.rebracket`` is set, otherwise it is just put in order.

    Returns
    -------
    a, b, n_int_iter, n_feval : float, float, int, int
        Interval, bracketing iterations and function evaluations used.
    """
    if np.ndim(x0) == 0:
        return bracket(f, x0)

    a, b = _as_interval(x0)
    if opts.rebracket:
        return bracket(f, (a, b))

    return a, b, 0, 0


# ----------------------------------------------------------------------

def _as_interval(x0) -> tuple[float, float]:
    if np.ndim(x0) == 0:
        a = float(x0)
        return a, perturb(a)

    x0 = np.asarray(x0, dtype=float)
    if x0.shape != (2,):
        raise ValueError(f"Interval must have two values, got shape "
                         f"{x0.shape}.")

    a, b = float(x0.min()), float(x0.max())
    return a, b
