"""
Symmetric eigendecomposition.

Public API:
    jacobi(a, ...) -> Result[EigenDecomposition]
    jacobi_3x3(a) -> Result[EigenDecomposition]

Example:
    >>> from pynumerics.eigen import jacobi
    >>> eig = jacobi(A).params
    >>> eig.values       # descending
    >>> eig.vectors      # columns
"""

from pynumerics.eigen.solution import EigenDecomposition
from pynumerics.eigen.solvers import jacobi, jacobi_3x3

__all__ = [
    "EigenDecomposition",
    "jacobi",
    "jacobi_3x3",
]
