"""
Solver dispatch for dense N x N linear systems.

Public API:
    lu_factor(a) -> Result[LUFactorization]
    lu_solve(factorization, b) -> NDArray
    solve(a, b) -> Result[NDArray]
    invert(a) -> Result[NDArray]
    estimate_condition(factorization) -> float

Every entry point validates its inputs here, at the boundary, and trusts
them everywhere below. Numerical failure never raises: it comes back as a
Result with status SINGULAR_MATRIX and a logged diagnostic.

Each routine has two calling styles:
    - convenience: solve(a, b) allocates its own scratch and copies inputs
    - zero hidden allocation: solve(a, b, overwrite_a=True, overwrite_b=True,
      workspace=ws) works directly in caller-owned buffers
"""

import logging
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pynumerics.core.exceptions import ValidationError
from pynumerics.core.precision import working_copy
from pynumerics.core.result import Result, Status, failure
from pynumerics.core.tolerances import DEFAULT_PIVOT_TOLERANCE
from pynumerics.core.validation import (
    check_1d,
    check_array,
    check_same_dtype,
    check_shape,
    check_square,
)
from pynumerics.core.workspace import Workspace, scratch_buffers
from pynumerics.linear._crout import (
    FactorFailure,
    condition_estimate,
    crout_factor,
    substitute,
)
from pynumerics.linear.solution import LUFactorization
from pynumerics.mat3.ops import determinant_2x2

logger = logging.getLogger(__name__)


def lu_factor(
    a: ArrayLike,
    *,
    overwrite_a: bool = False,
    workspace: Workspace | None = None,
    pivot_tolerance: float = DEFAULT_PIVOT_TOLERANCE,
) -> Result[LUFactorization]:
    """
    LU-factor a square matrix using Crout's method with partial pivoting.

    Rows are implicitly scaled by their largest magnitude before pivot
    selection, so the pivot is the candidate with the largest magnitude
    relative to its own row.

    Args:
        a: Square matrix (n x n), float32 or float64
        overwrite_a: Factor in place in ``a`` (must be C-contiguous and writable)
        workspace: Optional scratch; pivots are then a view of workspace.pivots
        pivot_tolerance: Absolute pivot magnitude at or below which the matrix
            is reported singular

    Returns:
        Result[LUFactorization]; status SINGULAR_MATRIX (params None) if a row
        is entirely zero or a pivot is too small

    Raises:
        ValidationError: If ``a`` is not numeric or the workspace doesn't fit
        DimensionError: If ``a`` is not square
    """
    a_arr = check_array(a, 'a')
    n = check_square(a_arr, 'a')
    lu = working_copy(a_arr, 'a', overwrite_a)
    pivots, scale = scratch_buffers(n, lu.dtype, workspace)
    return _factor(lu, pivots, scale, pivot_tolerance, 'a')


def lu_solve(
    factorization: LUFactorization,
    b: ArrayLike,
    *,
    overwrite_b: bool = False,
) -> NDArray[np.floating[Any]]:
    """
    Solve A x = b from a previously computed factorization.

    Args:
        factorization: Output of lu_factor (factors and pivots together)
        b: Right-hand side (n,), same dtype as the factors
        overwrite_b: Write the solution over ``b``

    Returns:
        Solution vector x
    """
    b_arr = check_array(b, 'b')
    check_1d(b_arr, 'b')
    check_shape(b_arr, (factorization.n,), 'b')
    check_same_dtype(factorization.lu, b_arr, names=('factorization', 'b'))

    x = working_copy(b_arr, 'b', overwrite_b)
    substitute(factorization.lu, factorization.pivots, x)
    return x


def solve(
    a: ArrayLike,
    b: ArrayLike,
    *,
    overwrite_a: bool = False,
    overwrite_b: bool = False,
    workspace: Workspace | None = None,
    pivot_tolerance: float = DEFAULT_PIVOT_TOLERANCE,
) -> Result[NDArray[np.floating[Any]]]:
    """
    Solve the linear system A x = b.

    1x1 and 2x2 systems are solved directly (division, Cramer's rule) and
    fail only on an exactly zero coefficient/determinant. Larger systems are
    LU-factored and back-substituted.

    Args:
        a: Square matrix (n x n); overwritten with its factors for n >= 3
            when overwrite_a=True
        b: Right-hand side (n,)
        overwrite_a: Allow factoring in place in ``a``
        overwrite_b: Write the solution over ``b``
        workspace: Optional caller-owned scratch
        pivot_tolerance: See lu_factor

    Returns:
        Result whose params is the solution vector

    Raises:
        ValidationError: On non-numeric inputs or mixed precision
        DimensionError: On shape mismatch
    """
    a_arr = check_array(a, 'a')
    b_arr = check_array(b, 'b')
    n = check_square(a_arr, 'a')
    check_1d(b_arr, 'b')
    check_shape(b_arr, (n,), 'b')
    check_same_dtype(a_arr, b_arr, names=('a', 'b'))

    x = working_copy(b_arr, 'b', overwrite_b)

    if n == 1:
        if a_arr[0, 0] == 0.0:
            return _singular("1x1 system has a zero coefficient", 'a', column=0, pivot=0.0)
        x[0] /= a_arr[0, 0]
        return Result(params=x, info={'method': 'division', 'n': 1})

    if n == 2:
        det = determinant_2x2(a_arr[0, 0], a_arr[0, 1], a_arr[1, 0], a_arr[1, 1])
        if det == 0.0:
            return _singular("2x2 system has a zero determinant", 'a', pivot=0.0)
        y0 = determinant_2x2(x[0], a_arr[0, 1], x[1], a_arr[1, 1]) / det
        y1 = determinant_2x2(a_arr[0, 0], x[0], a_arr[1, 0], x[1]) / det
        x[0] = y0
        x[1] = y1
        return Result(params=x, info={'method': 'cramer', 'n': 2})

    lu = working_copy(a_arr, 'a', overwrite_a)
    pivots, scale = scratch_buffers(n, lu.dtype, workspace)
    factored = _factor(lu, pivots, scale, pivot_tolerance, 'a')
    if not factored.ok:
        return factored

    substitute(lu, pivots, x)
    return Result(params=x, info={'method': 'crout_lu', 'n': n})


def invert(
    a: ArrayLike,
    *,
    out: NDArray[np.floating[Any]] | None = None,
    overwrite_a: bool = False,
    workspace: Workspace | None = None,
    pivot_tolerance: float = DEFAULT_PIVOT_TOLERANCE,
) -> Result[NDArray[np.floating[Any]]]:
    """
    Invert a square matrix.

    One LU factorization followed by n back substitutions against the unit
    basis vectors; the inverse is assembled one column at a time.

    Args:
        a: Square matrix (n x n)
        out: Optional (n x n) destination of the same dtype; must not
            share memory with ``a`` when overwrite_a=True
        overwrite_a: Allow factoring in place in ``a``
        workspace: Optional caller-owned scratch
        pivot_tolerance: See lu_factor

    Returns:
        Result whose params is the inverse (``out`` if given)
    """
    a_arr = check_array(a, 'a')
    n = check_square(a_arr, 'a')

    if out is not None:
        check_shape(out, (n, n), 'out')
        check_same_dtype(a_arr, out, names=('a', 'out'))
        if overwrite_a and np.shares_memory(a_arr, out):
            raise ValidationError("out: must not share memory with a when overwrite_a=True")

    lu = working_copy(a_arr, 'a', overwrite_a)
    pivots, column = scratch_buffers(n, lu.dtype, workspace)
    factored = _factor(lu, pivots, column, pivot_tolerance, 'a')
    if not factored.ok:
        return factored

    inverse = out if out is not None else np.empty((n, n), dtype=lu.dtype)
    for j in range(n):
        column[:] = 0.0
        column[j] = 1.0
        substitute(lu, pivots, column)
        inverse[:, j] = column

    return Result(params=inverse, info={'method': 'crout_lu', 'n': n})


def estimate_condition(factorization: LUFactorization) -> float:
    """
    Estimate the condition number of a factored matrix.

    Uses the ratio of the largest magnitude in U to the smallest magnitude
    on U's diagonal. Cheap and rough; useful for judging whether a solution
    can be trusted, not as a substitute for an SVD-based condition number.

    Returns:
        The estimate, or inf if a diagonal entry is zero
    """
    return condition_estimate(factorization.lu)


def _factor(
    lu: NDArray[np.floating[Any]],
    pivots: NDArray[np.intp],
    scale: NDArray[np.floating[Any]],
    pivot_tolerance: float,
    name: str,
) -> Result[LUFactorization]:
    """Run the Crout kernel and wrap its outcome."""
    broke: FactorFailure | None = crout_factor(lu, pivots, scale, pivot_tolerance)
    if broke is not None:
        if broke.reason == 'zero_row':
            message = f"{name}: row {broke.column} is entirely zero, matrix is singular"
            return _singular(message, name, row=broke.column)
        message = (
            f"{name}: pivot {broke.pivot:.3e} in column {broke.column} is at or below "
            f"tolerance {pivot_tolerance:.1e}, matrix is singular"
        )
        return _singular(message, name, column=broke.column, pivot=broke.pivot)

    return Result(
        params=LUFactorization(lu=lu, pivots=pivots),
        info={'method': 'crout_lu', 'n': lu.shape[0]},
    )


def _singular(message: str, name: str, **info: Any) -> Result[Any]:
    logger.warning(message)
    return failure(Status.SINGULAR_MATRIX, message, matrix_name=name, **info)
