"""
.. This module acts as the top-level API documentation.

.. module: pyrootfind

Numerical root finding and fixed point iteration for scalar and
vector-valued functions.  The solvers are in the `solve` subpackage and
are also available directly from the top level.

.. autosummary::
    :toctree: generated/

    solve

"""

__version__ = "0.1.0"

import sys

# Written by Eric J. Whitney, November 2019.

# ======================================================================

assert sys.version_info >= (3, 10)

from .solve import *
