"""
Closed-form polynomial root finding.

Public API:
    solve_linear(c2, c3) -> Roots
    solve_quadratic(c1, c2, c3) -> Roots
    solve_cubic(c0, c1, c2, c3) -> Roots

Example:
    >>> from pynumerics.polynomial import solve_cubic
    >>> roots = solve_cubic(1, -6, 11, -6)
    >>> roots.code, sorted(roots.values)
    (<RootCode.THREE_ROOTS: 3>, [1.0, 2.0, 3.0])
"""

from pynumerics.polynomial.solution import RootCode, Roots
from pynumerics.polynomial.solvers import solve_cubic, solve_linear, solve_quadratic

__all__ = [
    "RootCode",
    "Roots",
    "solve_linear",
    "solve_quadratic",
    "solve_cubic",
]
