"""Shared input handling for the 3x3 kernels."""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pynumerics.core.validation import check_array, check_same_dtype, check_shape


def as_matrix3(a: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    """Validate a 3x3 float32/float64 matrix."""
    arr = check_array(a, name)
    check_shape(arr, (3, 3), name)
    return arr


def as_vector3(v: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    """Validate a length-3 float32/float64 vector."""
    arr = check_array(v, name)
    check_shape(arr, (3,), name)
    return arr


def check_out(
    out: NDArray[np.floating[Any]] | None,
    shape: tuple[int, ...],
    like: NDArray[np.floating[Any]],
) -> NDArray[np.floating[Any]]:
    """Return ``out`` after validating it, or a fresh array shaped like the result."""
    if out is None:
        return np.empty(shape, dtype=like.dtype)
    check_shape(out, shape, 'out')
    check_same_dtype(like, out, names=('input', 'out'))
    return out


def swap_rows(m: NDArray[np.floating[Any]], i: int, j: int) -> None:
    m[[i, j]] = m[[j, i]]
