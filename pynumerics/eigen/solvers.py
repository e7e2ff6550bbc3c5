"""
Solver dispatch for symmetric eigenproblems.

This module provides the jacobi() function (public API) and its 3x3
convenience wrapper.
"""

import logging
from typing import Any

import numpy as np
from numpy.typing import ArrayLike

from pynumerics.core.result import Result, Status
from pynumerics.core.tolerances import (
    JACOBI_MAX_SWEEPS,
    JACOBI_THRESHOLD_SWEEPS,
    JACOBI_UNDERFLOW_SWEEP,
)
from pynumerics.core.validation import check_array, check_shape, check_square
from pynumerics.eigen._jacobi import jacobi_sweeps, normalize_signs, sort_descending
from pynumerics.eigen.solution import EigenDecomposition

logger = logging.getLogger(__name__)


def jacobi(
    a: ArrayLike,
    *,
    max_sweeps: int = JACOBI_MAX_SWEEPS,
) -> Result[EigenDecomposition]:
    """
    Eigendecomposition of a real symmetric matrix by cyclic Jacobi rotation.

    Only the upper triangle of ``a`` is read; ``a`` itself is never modified.

    Algorithm:
        1. Sweep over every upper off-diagonal entry, rotating away those
           above a threshold (0.2 * sum|off| / n^2 for the first three
           sweeps, zero afterwards). From the fifth sweep on, entries too
           small to change the adjacent diagonal values are zeroed outright.
        2. Stop once the off-diagonal sum is exactly zero.
        3. Sort eigenpairs by decreasing eigenvalue (ties keep their order).
        4. Negate any eigenvector with fewer than ceil(n/2) non-negative
           components, so a given matrix always yields the same signs.

    Args:
        a: Symmetric matrix (n x n), float32 or float64
        max_sweeps: Sweep cap

    Returns:
        Result[EigenDecomposition]. If the sweep cap is reached first the
        status is NON_CONVERGENCE but params still holds the current
        (sorted, sign-normalized) estimate.

    Raises:
        ValidationError: If ``a`` is not numeric
        DimensionError: If ``a`` is not square
    """
    a_arr = check_array(a, 'a')
    n = check_square(a_arr, 'a')
    if max_sweeps < 1:
        raise ValueError(f"max_sweeps must be positive, got {max_sweeps}")

    work = np.array(a_arr, dtype=a_arr.dtype, order='C', copy=True)
    w = np.empty(n, dtype=a_arr.dtype)
    v = np.empty((n, n), dtype=a_arr.dtype)

    report = jacobi_sweeps(
        work, w, v,
        max_sweeps=max_sweeps,
        threshold_sweeps=JACOBI_THRESHOLD_SWEEPS,
        underflow_sweep=JACOBI_UNDERFLOW_SWEEP,
    )
    logger.debug("jacobi: n=%d finished after %d sweeps", n, report.sweeps)

    sort_descending(w, v)
    normalize_signs(v)

    info: dict[str, Any] = {
        'method': 'cyclic_jacobi',
        'sweeps': report.sweeps,
        'off_diagonal': report.off_diagonal,
    }
    params = EigenDecomposition(values=w, vectors=v)

    if not report.converged:
        message = (
            f"jacobi: off-diagonal sum {report.off_diagonal:.3e} still nonzero "
            f"after {report.sweeps} sweeps, returning best estimate"
        )
        logger.warning(message)
        return Result(
            params=params,
            status=Status.NON_CONVERGENCE,
            info=info,
            warnings=(message,),
        )

    return Result(params=params, info=info)


def jacobi_3x3(a: ArrayLike) -> Result[EigenDecomposition]:
    """Jacobi eigendecomposition of a symmetric 3x3 matrix."""
    a_arr = check_array(a, 'a')
    check_shape(a_arr, (3, 3), 'a')
    return jacobi(a_arr)
