"""
=========================================
Root Finding (:mod:`pyrootfind.solve`)
=========================================

.. currentmodule:: pyrootfind.solve

Iterative methods for finding roots of nonlinear equations
:math:`f(x) = 0` and fixed points :math:`x = g(x)`.  Every solver returns
a ``(root, SolverResult)`` pair and accepts a `SolverOptions` instance
plus individual keyword overrides.

Bracketing Methods
------------------

.. autosummary::
    :toctree:

    bisection
    brent_dekker
    itp
    bracket

Open Methods
------------

.. autosummary::
    :toctree:

    secant
    newton
    newton_n
    broyden

Fixed Point Iteration
---------------------

.. autosummary::
    :toctree:

    fixed_point
    fixed_point_n
    root_iteration
    root_iteration_n

Utilities
---------

.. autosummary::
    :toctree:

    analyze
    perturb
    absolute_difference
    relative_difference
    solve_linear
    approx_jacobian

Options and Results
-------------------

.. autosummary::
    :toctree:

    SolverOptions
    SolverResult
    LinearSolution

Exceptions and Warnings
-----------------------

.. autosummary::
    :toctree:

    SolverError
    BracketWarning

"""

from .bisection import bisection
from .bracket import bracket, bracket_sign_change
from .brent_dekker import brent_dekker
from .broyden import broyden
from .convergence import analyze, convergence_analysis
from .exception import BracketWarning, SolverError
from .fixed_point import (fixed_point, fixed_point_n, root_iteration,
                          root_iteration_n)
from .itp import itp
from .linalg import LinearSolution, approx_jacobian, solve_linear
from .newton import newton
from .newton_n import newton_n
from .options import SolverOptions
from .perturb import (absolute_difference, perturb, perturb_iterate,
                      relative_difference)
from .results import SolverResult
from .secant import secant
