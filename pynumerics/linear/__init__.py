"""
Dense N x N linear systems.

Public API:
    lu_factor(a, ...) -> Result[LUFactorization]
    lu_solve(factorization, b, ...) -> NDArray
    solve(a, b, ...) -> Result[NDArray]
    invert(a, ...) -> Result[NDArray]
    estimate_condition(factorization) -> float

Example:
    >>> from pynumerics.linear import solve
    >>> result = solve(A, b)
    >>> if result.ok:
    ...     x = result.params
"""

from pynumerics.linear.solution import LUFactorization
from pynumerics.linear.solvers import (
    estimate_condition,
    invert,
    lu_factor,
    lu_solve,
    solve,
)

__all__ = [
    "LUFactorization",
    "lu_factor",
    "lu_solve",
    "solve",
    "invert",
    "estimate_condition",
]
