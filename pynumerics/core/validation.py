"""
Input validation utilities for pynumerics.

These validators follow the "fail fast, fail loud" principle. They raise
immediately with clear error messages rather than silently correcting
or making assumptions about user intent. They guard the API boundary only;
kernels trust their inputs once validated.

Design principles:
    - No silent type coercion (except np.asarray on array-likes and
      integer -> float64 promotion)
    - float32 and float64 are both first-class, never mixed in one call
    - Clear, actionable error messages with actual values
    - Each function validates ONE thing
    - Parameter names included in all error messages
"""

import numpy as np
from numpy.typing import ArrayLike, NDArray
from typing import Any

from pynumerics.core.exceptions import ValidationError, DimensionError

SUPPORTED_DTYPES = (np.dtype(np.float32), np.dtype(np.float64))


def check_array(
    array: ArrayLike,
    name: str,
) -> NDArray[np.floating[Any]]:
    """
    Validate and convert input to a floating-point numpy array.

    float32 and float64 inputs pass through untouched (no copy). Other
    numeric dtypes are promoted to float64. Object, string and complex
    data are rejected.

    Args:
        array: Input to validate
        name: Parameter name for error messages

    Returns:
        numpy.ndarray with dtype float32 or float64

    Raises:
        ValidationError: If input cannot be converted to a real float array
    """
    try:
        result = np.asarray(array)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{name}: cannot convert to array: {e}") from e

    if result.dtype == object:
        raise ValidationError(
            f"{name}: converted to object dtype, indicating mixed types or non-numeric data"
        )

    if not np.issubdtype(result.dtype, np.number):
        raise ValidationError(
            f"{name}: non-numeric dtype {result.dtype}, expected numeric data"
        )

    if np.issubdtype(result.dtype, np.complexfloating):
        raise ValidationError(f"{name}: complex dtype {result.dtype} is not supported")

    if result.dtype not in SUPPORTED_DTYPES:
        result = result.astype(np.float64)

    return result


def check_finite(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify array contains no NaN or Inf values.

    Raises:
        ValidationError: If array contains non-finite values
    """
    if not np.all(np.isfinite(array)):
        n_nan = int(np.sum(np.isnan(array)))
        n_inf = int(np.sum(np.isinf(array)))
        raise ValidationError(
            f"{name}: contains non-finite values ({n_nan} NaN, {n_inf} Inf)"
        )


def check_ndim(array: NDArray[np.floating[Any]], ndim: int, name: str) -> None:
    """
    Verify array has exactly the specified number of dimensions.

    Raises:
        DimensionError: If array has wrong number of dimensions
    """
    if array.ndim != ndim:
        raise DimensionError(
            f"{name}: expected {ndim}D array, got {array.ndim}D with shape {array.shape}"
        )


def check_1d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 1-dimensional."""
    check_ndim(array, 1, name)


def check_2d(array: NDArray[np.floating[Any]], name: str) -> None:
    """Verify array is 2-dimensional."""
    check_ndim(array, 2, name)


def check_square(array: NDArray[np.floating[Any]], name: str) -> int:
    """
    Verify array is a non-empty square matrix.

    Returns:
        The matrix order n

    Raises:
        DimensionError: If array is not 2D, not square, or empty
    """
    check_2d(array, name)
    n, m = array.shape
    if n != m:
        raise DimensionError(f"{name}: expected square matrix, got shape {array.shape}")
    if n == 0:
        raise DimensionError(f"{name}: matrix is empty")
    return n


def check_shape(
    array: NDArray[np.floating[Any]],
    shape: tuple[int, ...],
    name: str,
) -> None:
    """
    Verify array has exactly the given shape.

    Raises:
        DimensionError: If shapes differ
    """
    if array.shape != shape:
        raise DimensionError(f"{name}: expected shape {shape}, got {array.shape}")


def check_same_dtype(*arrays: NDArray[np.floating[Any]], names: tuple[str, ...]) -> np.dtype:
    """
    Verify all arrays share one floating-point element width.

    Returns:
        The common dtype

    Raises:
        ValueError: If number of names doesn't match number of arrays
        ValidationError: If arrays mix float32 and float64
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    dtypes = {arr.dtype for arr in arrays}
    if len(dtypes) > 1:
        details = ", ".join(f"{name}={arr.dtype}" for name, arr in zip(names, arrays))
        raise ValidationError(f"Mixed precision in one call: {details}")
    return arrays[0].dtype


def check_consistent_length(
    *arrays: NDArray[np.floating[Any]],
    names: tuple[str, ...]
) -> None:
    """
    Verify all arrays have the same length (first dimension).

    Raises:
        ValueError: If number of names doesn't match number of arrays
        DimensionError: If arrays have inconsistent lengths
    """
    if len(arrays) != len(names):
        raise ValueError(
            f"Number of arrays ({len(arrays)}) must match number of names ({len(names)})"
        )

    if len(arrays) < 2:
        return

    lengths = [arr.shape[0] for arr in arrays]
    if len(set(lengths)) > 1:
        details = ", ".join(f"{name}={length}" for name, length in zip(names, lengths))
        raise DimensionError(f"Inconsistent lengths: {details}")


def check_writable(array: NDArray[np.floating[Any]], name: str) -> None:
    """
    Verify an array can be updated in place by the kernels.

    Raises:
        ValidationError: If the array is read-only or not C-contiguous
    """
    if not array.flags.writeable:
        raise ValidationError(f"{name}: array is read-only, cannot overwrite in place")
    if not array.flags.c_contiguous:
        raise ValidationError(
            f"{name}: array is not C-contiguous, cannot overwrite in place"
        )
