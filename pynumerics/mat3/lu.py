"""
Unrolled LU factorization for 3x3 systems.

The factored matrix stores the reciprocals of the U diagonal so the
substitution step multiplies instead of dividing. There is no singularity
check: a zero pivot yields inf in the factor and non-finite solutions.
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pynumerics.core.precision import working_copy
from pynumerics.core.validation import check_same_dtype
from pynumerics.mat3._common import as_matrix3, as_vector3, swap_rows


def lu_factor_3x3(
    a: ArrayLike,
    *,
    overwrite_a: bool = False,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.intp]]:
    """
    Crout LU factorization of a 3x3 matrix with implicit-scaling pivoting.

    Args:
        a: Matrix (3 x 3)
        overwrite_a: Factor ``a`` in place (must be C-contiguous and writable)

    Returns:
        (lu, pivots): packed factors with reciprocal diagonal, and the row
        exchanged with row k at step k
    """
    A = working_copy(as_matrix3(a, 'a'), 'a', overwrite_a)
    T = A.dtype.type
    one = T(1.0)
    pivots = np.empty(3, dtype=np.intp)

    scale = one / np.abs(A).max(axis=1)

    # first column
    largest = scale[0] * abs(A[0, 0])
    max_i = 0
    tmp = scale[1] * abs(A[1, 0])
    if tmp >= largest:
        largest = tmp
        max_i = 1
    if scale[2] * abs(A[2, 0]) >= largest:
        max_i = 2
    if max_i != 0:
        swap_rows(A, max_i, 0)
        scale[max_i] = scale[0]
    pivots[0] = max_i

    A[0, 0] = one / A[0, 0]
    A[1, 0] *= A[0, 0]
    A[2, 0] *= A[0, 0]

    # second column
    A[1, 1] -= A[1, 0] * A[0, 1]
    A[2, 1] -= A[2, 0] * A[0, 1]
    max_i = 1
    if scale[2] * abs(A[2, 1]) >= scale[1] * abs(A[1, 1]):
        max_i = 2
        swap_rows(A, 2, 1)
        scale[2] = scale[1]
    pivots[1] = max_i
    A[1, 1] = one / A[1, 1]
    A[2, 1] *= A[1, 1]

    # third column
    A[1, 2] -= A[1, 0] * A[0, 2]
    A[2, 2] -= A[2, 0] * A[0, 2] + A[2, 1] * A[1, 2]
    pivots[2] = 2
    A[2, 2] = one / A[2, 2]

    return A, pivots


def lu_solve_3x3(
    lu: NDArray[np.floating[Any]],
    pivots: NDArray[np.intp],
    x: ArrayLike,
    *,
    overwrite_x: bool = False,
) -> NDArray[np.floating[Any]]:
    """
    Solve A y = x given the output of lu_factor_3x3.

    Args:
        lu: Packed factors from lu_factor_3x3
        pivots: Row exchanges from lu_factor_3x3
        x: Right-hand side (3,)
        overwrite_x: Solve in place in ``x`` (must be C-contiguous and writable)

    Returns:
        Solution vector y
    """
    LU = as_matrix3(lu, 'lu')
    y = working_copy(as_vector3(x, 'x'), 'x', overwrite_x)
    check_same_dtype(LU, y, names=('lu', 'x'))
    _substitute(LU, pivots, y)
    return y


def linear_solve_3x3(a: ArrayLike, x: ArrayLike) -> NDArray[np.floating[Any]]:
    """Solve A y = x for a 3x3 matrix; neither input is modified."""
    A = as_matrix3(a, 'a')
    X = as_vector3(x, 'x')
    check_same_dtype(A, X, names=('a', 'x'))
    lu, pivots = lu_factor_3x3(A)
    y = np.array(X, copy=True)
    _substitute(lu, pivots, y)
    return y


def invert_3x3(a: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Inverse of a 3x3 matrix, one column per substitution.

    A singular input produces non-finite entries rather than an error.
    """
    lu, pivots = lu_factor_3x3(a)
    inverse = np.empty((3, 3), dtype=lu.dtype)
    column = np.empty(3, dtype=lu.dtype)
    for i in range(3):
        column[:] = 0.0
        column[i] = 1.0
        _substitute(lu, pivots, column)
        inverse[:, i] = column
    return inverse


def _substitute(
    lu: NDArray[np.floating[Any]],
    pivots: NDArray[np.intp],
    x: NDArray[np.floating[Any]],
) -> None:
    # forward substitution
    p = pivots[0]
    total = x[p]
    x[p] = x[0]
    x[0] = total

    p = pivots[1]
    total = x[p]
    x[p] = x[1]
    x[1] = total - lu[1, 0] * x[0]

    p = pivots[2]
    total = x[p]
    x[p] = x[2]
    x[2] = total - lu[2, 0] * x[0] - lu[2, 1] * x[1]

    # back substitution
    x[2] = x[2] * lu[2, 2]
    x[1] = (x[1] - lu[1, 2] * x[2]) * lu[1, 1]
    x[0] = (x[0] - lu[0, 1] * x[1] - lu[0, 2] * x[2]) * lu[0, 0]
