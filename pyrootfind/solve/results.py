from __future__ import annotations

from dataclasses import dataclass

import numpy as np

# Written by Eric J. Whitney, November 2023.


# ======================================================================

@dataclass(frozen=True, kw_only=True)
class SolverResult:
    # noinspection PyUnresolvedReferences
    """
    Diagnostics returned by every solver alongside the root estimate.
    Per-iteration histories have the iteration number along the first
    axis, so for `n_iter` iterations ``x_all`` has ``n_iter + 1`` rows
    (the starting point is included).  Histories that do not apply to a
    solver are `None`.

    Parameters
    ----------
    root : float or ndarray
        Final estimate (same value as returned with the result).
    x_all : ndarray
        Estimates at all iterations, shape ``(n_iter + 1,)`` for scalar
        problems or ``(n_iter + 1, n)`` for vector problems.
    f_all : ndarray, optional
        Function values corresponding to ``x_all``.
    df_all : ndarray, optional
        Derivative values corresponding to ``x_all`` (scalar Newton).
    J_all : ndarray, optional
        Jacobians corresponding to ``x_all``, shape
        ``(n_iter + 1, n, n)`` (multivariate Newton).
    a_all, b_all : ndarray, optional
        Lower and upper bracket bounds at each iteration (bracketing
        methods).
    n_iter : int
        Number of solver iterations completed.
    n_feval : int
        Number of function evaluations, including any used to find the
        initial bracket or approximate a Jacobian.
    n_jeval : int, default = 0
        Number of derivative / Jacobian evaluations.
    n_int_iter : int, default = 0
        Number of iterations used to find the initial bracket.
    converged : bool
        `True` if a tolerance was met, `False` if the solver stopped
        because an iteration or evaluation budget ran out.
    """
    root: float | np.ndarray
    x_all: np.ndarray
    n_iter: int
    n_feval: int
    converged: bool
    n_jeval: int = 0
    n_int_iter: int = 0
    f_all: np.ndarray | None = None
    df_all: np.ndarray | None = None
    J_all: np.ndarray | None = None
    a_all: np.ndarray | None = None
    b_all: np.ndarray | None = None


# ----------------------------------------------------------------------

class IterHistory:
    """
    Growable record of per-iteration values, converted to arrays once
    the solver finishes.

    Examples
    --------
    >>> hist = IterHistory('x_all', 'f_all')
    >>> hist.append(x_all=1.0, f_all=0.5)
    >>> hist.append(x_all=2.0, f_all=0.25)
    >>> len(hist)
    2
    >>> hist.arrays()['f_all']
    array([0.5 , 0.25])
    """

    def __init__(self, *names: str):
        if not names:
            raise ValueError("At least one history name is required.")
        self._data = {name: [] for name in names}

    def __len__(self) -> int:
        return len(next(iter(self._data.values())))

    # -- Public Methods ------------------------------------------------

    def append(self, **values):
        """
        Add one entry to each named history.  Every name given at
        construction must be supplied.
        """
        if values.keys() != self._data.keys():
            raise KeyError(f"Expected values for {list(self._data)}, got "
                           f"{list(values)}.")
        for name, value in values.items():
            self._data[name].append(np.copy(value))

    def arrays(self) -> dict[str, np.ndarray]:
        """Returns each history as an `ndarray`, keyed by name."""
        return {name: np.array(vals, dtype=float)
                for name, vals in self._data.items()}

    def result(self, root, **kwargs) -> SolverResult:
        """
        Build the `SolverResult`.  The number of iterations is taken
        from the history length unless `n_iter` is given.
        """
        kwargs.setdefault('n_iter', len(self) - 1)
        return SolverResult(root=root, **self.arrays(), **kwargs)


# ----------------------------------------------------------------------

def _fmt(v) -> str:
    if np.ndim(v) == 0:
        return f"{float(v):+.10G}"
    return np.array2string(np.asarray(v, dtype=float), precision=6,
                           separator=', ', sign=' ')


def print_header(title: str, verbose: bool):
    if verbose:
        print(f"{title}:")


def print_iteration(verbose: bool, k: int, n_feval: int, x, fx=None,
                    a=None, b=None):
    """
    Print one line of solver progress when `verbose` is set.
    """
    if not verbose:
        return
    line = f"... Iteration {k}: n_feval = {n_feval}, x = {_fmt(x)}"
    if fx is not None:
        line += f", f(x) = {_fmt(fx)}"
    if a is not None and b is not None:
        line += f", [a, b] = [{_fmt(a)}, {_fmt(b)}]"
    print(line)


def print_finish(verbose: bool, converged: bool, reason: str = None):
    if not verbose:
        return
    if converged:
        print("... Converged.")
    else:
        print(f"... Stopped: {reason or 'budget exhausted'}.")
