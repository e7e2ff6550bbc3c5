"""
Crout LU kernels for dense N x N systems.

Private to pynumerics.linear. Both functions work strictly in place on
buffers the caller has already validated and sized; neither allocates
anything proportional to n beyond numpy's temporaries.
"""

from typing import Any, NamedTuple

import numpy as np
from numpy.typing import NDArray


class FactorFailure(NamedTuple):
    """Where and why a factorization broke down."""
    column: int
    pivot: float
    reason: str


def crout_factor(
    a: NDArray[np.floating[Any]],
    pivots: NDArray[np.intp],
    scale: NDArray[np.floating[Any]],
    pivot_tolerance: float,
) -> FactorFailure | None:
    """
    Factor ``a`` into combined L\\U form with implicit-scaling partial pivoting.

    On return ``a`` holds the unit-lower L below the diagonal and U on and
    above it; ``pivots[j]`` is the row swapped into position j.

    Returns:
        None on success, otherwise a FactorFailure
    """
    n = a.shape[0]
    one = a.dtype.type(1.0)

    # Implicit scaling: 1 / largest magnitude in each row
    largest = np.max(np.abs(a), axis=1)
    zero_rows = np.flatnonzero(largest == 0)
    if zero_rows.size:
        return FactorFailure(column=int(zero_rows[0]), pivot=0.0, reason='zero_row')
    scale[:] = one / largest

    for j in range(n):
        # Upper triangle entries of column j
        for i in range(1, j):
            a[i, j] -= a[i, :i] @ a[:i, j]

        # Diagonal and sub-diagonal entries; choose the pivot row
        if j > 0:
            a[j:, j] -= a[j:, :j] @ a[:j, j]
        weighted = scale[j:] * np.abs(a[j:, j])
        # Ties resolve to the last candidate row
        max_i = j + (weighted.shape[0] - 1 - int(np.argmax(weighted[::-1])))

        if max_i != j:
            a[[j, max_i]] = a[[max_i, j]]
            scale[max_i] = scale[j]
        pivots[j] = max_i

        pivot = a[j, j]
        if abs(pivot) <= pivot_tolerance:
            return FactorFailure(column=j, pivot=float(abs(pivot)), reason='small_pivot')

        if j != n - 1:
            a[j + 1:, j] *= one / pivot

    return None


def substitute(
    lu: NDArray[np.floating[Any]],
    pivots: NDArray[np.intp],
    x: NDArray[np.floating[Any]],
) -> None:
    """
    Overwrite ``x`` with the solution of A x = b given A's Crout factors.

    Forward substitution applies the row interchanges as it goes and skips
    the leading zero entries of the permuted right-hand side; back
    substitution divides by the stored U diagonal.
    """
    n = lu.shape[0]

    first = -1
    for i in range(n):
        idx = pivots[i]
        total = x[idx]
        x[idx] = x[i]
        if first >= 0:
            total -= lu[i, first:i] @ x[first:i]
        elif total != 0:
            first = i
        x[i] = total

    for i in range(n - 1, -1, -1):
        x[i] = (x[i] - lu[i, i + 1:] @ x[i + 1:]) / lu[i, i]


def condition_estimate(lu: NDArray[np.floating[Any]]) -> float:
    """
    Ratio of the largest upper-triangle magnitude to the smallest diagonal.

    A cheap triangular condition estimate (Conte and de Boor); returns inf
    when any diagonal entry is zero.
    """
    upper = np.abs(np.triu(lu))
    smallest = float(np.min(np.abs(np.diag(lu))))
    if smallest == 0.0:
        return float('inf')
    return float(np.max(upper)) / smallest
