#!usr/bin/env python3

# Examples of finding roots of nonlinear equations.
# Last updated: 19 October 2026 by Eric J. Whitney

import numpy as np

from pyrootfind.solve import (analyze, bisection, brent_dekker, broyden,
                              itp, newton_n, SolverOptions)


def kepler(E, M=1.0, e=0.9):
    """Kepler's equation for eccentric anomaly E."""
    return E - e * np.sin(E) - M


def std_problem_3(x):
    """Standard start point x0 = (0.5, 0.5, ...)"""
    n = len(x)
    f = np.zeros(n)
    for i in range(n - 1):
        f[i] = x[i] * x[i + 1] - 1
    f[n - 1] = x[n - 1] * x[0] - 1
    return f


def std_problem_3_jac(x):
    n = len(x)
    J = np.zeros((n, n))
    for i in range(n - 1):
        J[i, i], J[i, i + 1] = x[i + 1], x[i]
    J[n - 1, n - 1], J[n - 1, 0] = x[0], x[n - 1]
    return J


# Compare bracketing methods on Kepler's equation.
opts = SolverOptions(batol=1e-12)
for solver in (bisection, brent_dekker, itp):
    E, res = solver(kepler, [0.0, np.pi], opts)
    print(f"{solver.__name__:>12s}: E = {E:.12f}, n_iter = {res.n_iter}, "
          f"n_feval = {res.n_feval}")

# Show progress for one solution.
print()
E, res = itp(kepler, 0.5, opts, verbose=True)

# Estimated order of convergence.
alpha, lam, _, _ = analyze(res.x_all)
print(f"\nITP order of convergence = {alpha:.3f}, error constant = "
      f"{lam:.3g}")

# Solve a system of equations at a given size.
ndim = 9  # Jacobian is singular at x0 for even sizes.
x0 = np.full(ndim, 0.5)
print()
x_result, res = newton_n(std_problem_3, std_problem_3_jac, x0,
                         max_feval=200 * ndim, max_jeval=200 * ndim,
                         verbose=True)
x_broyden, res_b = broyden(std_problem_3, x0, jac=std_problem_3_jac)

print("\nResult x = " +
      np.array2string(np.asarray(x_result), precision=6, suppress_small=True,
                      separator=', ', sign=' ', floatmode='fixed'))
print(f"Newton: n_iter = {res.n_iter}, Broyden: n_iter = {res_b.n_iter}")
