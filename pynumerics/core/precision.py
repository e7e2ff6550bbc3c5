"""
Numerical precision constants and utilities.

Provides machine epsilon, working-copy preparation and precision-related
utilities shared by all kernels. Every kernel runs in the element width of
its inputs: float32 in, float32 arithmetic and float32 out.
"""

import numpy as np
from numpy.typing import NDArray
from typing import Any

from pynumerics.core.validation import check_writable


# Machine epsilon for float64
EPSILON_64: float = float(np.finfo(np.float64).eps)  # ~2.22e-16

# Machine epsilon for float32
EPSILON_32: float = float(np.finfo(np.float32).eps)  # ~1.19e-7


def machine_epsilon(dtype: np.dtype | type = np.float64) -> float:
    """
    Get machine epsilon for a given dtype.

    Args:
        dtype: NumPy dtype or type

    Returns:
        Machine epsilon for the dtype
    """
    return float(np.finfo(dtype).eps)


def working_copy(
    array: NDArray[np.floating[Any]],
    name: str,
    overwrite: bool,
) -> NDArray[np.floating[Any]]:
    """
    Return the buffer a kernel may modify.

    With overwrite=True the caller's array is used directly and must be
    writable and C-contiguous. Otherwise a private C-ordered copy is made.

    Args:
        array: Validated float32/float64 array
        name: Parameter name for error messages
        overwrite: Whether the caller allows in-place modification

    Returns:
        Array safe to modify

    Raises:
        ValidationError: If overwrite=True and the array cannot be updated
            in place
    """
    if overwrite:
        check_writable(array, name)
        return array
    return np.array(array, dtype=array.dtype, order='C', copy=True)


def condition_number(A: NDArray[np.floating[Any]]) -> float:
    """
    Compute condition number of a matrix using SVD.

    Args:
        A: Input matrix

    Returns:
        Condition number (ratio of largest to smallest singular value).
        Returns inf if matrix is singular.
    """
    s = np.linalg.svd(A, compute_uv=False)
    if s[-1] == 0:
        return np.inf
    return float(s[0] / s[-1])
