"""
Elementary 3x3 matrix and 3-vector operations.

All routines keep the element width of their inputs. Routines that take
``out`` compute into temporaries first, so ``out`` may be one of the inputs.
"""

import math
from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pynumerics.core.exceptions import DimensionError
from pynumerics.core.validation import check_array, check_same_dtype
from pynumerics.mat3._common import as_matrix3, as_vector3, check_out


def multiply_3x3(
    a: ArrayLike,
    b: ArrayLike,
    *,
    out: NDArray[np.floating[Any]] | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Multiply a 3x3 matrix by a 3-vector or by another 3x3 matrix.

    Args:
        a: Matrix (3 x 3)
        b: Vector (3,) or matrix (3 x 3)
        out: Optional destination, may alias ``a`` or ``b``

    Returns:
        a @ b
    """
    A = as_matrix3(a, 'a')
    B = check_array(b, 'b')
    if B.shape not in ((3,), (3, 3)):
        raise DimensionError(f"b: expected shape (3,) or (3, 3), got {B.shape}")
    check_same_dtype(A, B, names=('a', 'b'))

    product = A @ B
    target = check_out(out, B.shape, A)
    target[...] = product
    return target


def transpose_3x3(
    a: ArrayLike,
    *,
    out: NDArray[np.floating[Any]] | None = None,
) -> NDArray[np.floating[Any]]:
    """
    Transpose a 3x3 matrix.

    Passing ``out=a`` transposes in place: each off-diagonal pair is read
    before either element is written.
    """
    A = as_matrix3(a, 'a')
    AT = check_out(out, (3, 3), A)

    tmp = A[1, 0]
    AT[1, 0] = A[0, 1]
    AT[0, 1] = tmp
    tmp = A[2, 0]
    AT[2, 0] = A[0, 2]
    AT[0, 2] = tmp
    tmp = A[2, 1]
    AT[2, 1] = A[1, 2]
    AT[1, 2] = tmp

    AT[0, 0] = A[0, 0]
    AT[1, 1] = A[1, 1]
    AT[2, 2] = A[2, 2]
    return AT


def identity_3x3(
    *,
    dtype: np.dtype | type = np.float64,
    out: NDArray[np.floating[Any]] | None = None,
) -> NDArray[np.floating[Any]]:
    """Return (or fill ``out`` with) the 3x3 identity."""
    if out is None:
        return np.eye(3, dtype=dtype)
    out[...] = 0.0
    out[0, 0] = out[1, 1] = out[2, 2] = 1.0
    return out


def determinant_3x3(a: ArrayLike) -> np.floating[Any]:
    """Determinant of a 3x3 matrix by cofactor expansion, in the input precision."""
    A = as_matrix3(a, 'a')
    return _det3(A)


def determinant_2x2(a: float, b: float, c: float, d: float) -> float:
    """Determinant of the 2x2 matrix [[a, b], [c, d]]."""
    return a * d - b * c


def dot(u: ArrayLike, v: ArrayLike) -> np.floating[Any]:
    """Dot product of two 3-vectors."""
    U = as_vector3(u, 'u')
    V = as_vector3(v, 'v')
    check_same_dtype(U, V, names=('u', 'v'))
    return U[0] * V[0] + U[1] * V[1] + U[2] * V[2]


def cross(u: ArrayLike, v: ArrayLike) -> NDArray[np.floating[Any]]:
    """Cross product u x v of two 3-vectors."""
    U = as_vector3(u, 'u')
    V = as_vector3(v, 'v')
    check_same_dtype(U, V, names=('u', 'v'))
    return _cross(U, V)


def norm(v: ArrayLike) -> float:
    """Euclidean length of a 3-vector."""
    V = as_vector3(v, 'v')
    return float(np.sqrt(V[0] * V[0] + V[1] * V[1] + V[2] * V[2]))


def normalize(v: ArrayLike) -> tuple[NDArray[np.floating[Any]], float]:
    """
    Scale a 3-vector to unit length.

    Returns:
        (unit vector, original length). A zero vector is returned unchanged
        with length 0.
    """
    V = np.array(as_vector3(v, 'v'), copy=True)
    length = _normalize(V)
    return V, length


def perpendiculars(
    x: ArrayLike,
    theta: float = 0.0,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    Two unit vectors perpendicular to ``x`` and to each other.

    With theta = 0 the first vector lies in the plane spanned by ``x`` and
    its smallest coordinate axis; a nonzero theta rotates both vectors by
    theta radians about ``x``. Computed in double precision and returned in
    the input precision.

    Args:
        x: Nonzero 3-vector
        theta: Rotation angle about x (radians)

    Returns:
        (y, z) with x, y, z forming a right-handed orthogonal set
    """
    X = as_vector3(x, 'x')
    x0, x1, x2 = (float(c) for c in X)
    sq = (x0 * x0, x1 * x1, x2 * x2)
    r = math.sqrt(sq[0] + sq[1] + sq[2])

    # Permute axes so the largest component is never the divisor
    if sq[0] > sq[1] and sq[0] > sq[2]:
        dx, dy, dz = 0, 1, 2
    elif sq[1] > sq[2]:
        dx, dy, dz = 1, 2, 0
    else:
        dx, dy, dz = 2, 0, 1

    comps = (x0, x1, x2)
    a = comps[dx] / r
    b = comps[dy] / r
    c = comps[dz] / r
    tmp = math.sqrt(a * a + c * c)

    y = np.empty(3, dtype=np.float64)
    z = np.empty(3, dtype=np.float64)
    if theta != 0:
        sin_t = math.sin(theta)
        cos_t = math.cos(theta)
        y[dx] = (c * cos_t - a * b * sin_t) / tmp
        y[dy] = sin_t * tmp
        y[dz] = (-a * cos_t - b * c * sin_t) / tmp
        z[dx] = (-c * sin_t - a * b * cos_t) / tmp
        z[dy] = cos_t * tmp
        z[dz] = (a * sin_t - b * c * cos_t) / tmp
    else:
        y[dx] = c / tmp
        y[dy] = 0.0
        y[dz] = -a / tmp
        z[dx] = -a * b / tmp
        z[dy] = tmp
        z[dz] = -b * c / tmp

    return y.astype(X.dtype), z.astype(X.dtype)


def _det3(A: NDArray[np.floating[Any]]) -> np.floating[Any]:
    return (
        A[0, 0] * A[1, 1] * A[2, 2]
        + A[1, 0] * A[2, 1] * A[0, 2]
        + A[2, 0] * A[0, 1] * A[1, 2]
        - A[0, 0] * A[2, 1] * A[1, 2]
        - A[1, 0] * A[0, 1] * A[2, 2]
        - A[2, 0] * A[1, 1] * A[0, 2]
    )


def _cross(u: NDArray[np.floating[Any]], v: NDArray[np.floating[Any]]) -> NDArray[np.floating[Any]]:
    return np.array(
        [
            u[1] * v[2] - u[2] * v[1],
            u[2] * v[0] - u[0] * v[2],
            u[0] * v[1] - u[1] * v[0],
        ],
        dtype=u.dtype,
    )


def _normalize(v: NDArray[np.floating[Any]]) -> float:
    """Normalize ``v`` in place; return its original length."""
    length = np.sqrt(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])
    if length != 0.0:
        v /= length
    return float(length)
