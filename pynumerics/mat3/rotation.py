"""
Rotations as quaternions and 3x3 matrices.

Quaternions are length-4 arrays ordered (w, x, y, z). Matrix to quaternion
conversion follows Horn (1987), "Closed-form solution of absolute
orientation using unit quaternions", JOSA A 4:629-642.
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pynumerics.core.validation import check_array, check_shape
from pynumerics.eigen.solvers import jacobi
from pynumerics.mat3._common import as_matrix3, swap_rows
from pynumerics.mat3.ops import _det3


def quaternion_to_matrix_3x3(quat: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Rotation matrix of a quaternion.

    The quaternion need not be normalized: the result is scaled by
    1 / (w^2 + x^2 + y^2 + z^2).

    Args:
        quat: Quaternion (w, x, y, z)

    Returns:
        Rotation matrix (3 x 3)
    """
    q = check_array(quat, 'quat')
    check_shape(q, (4,), 'quat')
    T = q.dtype.type
    w, x, y, z = q

    ww = w * w
    wx = w * x
    wy = w * y
    wz = w * z

    xx = x * x
    yy = y * y
    zz = z * z

    xy = x * y
    xz = x * z
    yz = y * z

    rr = xx + yy + zz
    f = T(1.0) / (ww + rr)
    s = (ww - rr) * f
    f *= T(2.0)

    A = np.empty((3, 3), dtype=q.dtype)
    A[0, 0] = xx * f + s
    A[1, 0] = (xy + wz) * f
    A[2, 0] = (xz - wy) * f

    A[0, 1] = (xy - wz) * f
    A[1, 1] = yy * f + s
    A[2, 1] = (yz + wx) * f

    A[0, 2] = (xz + wy) * f
    A[1, 2] = (yz - wx) * f
    A[2, 2] = zz * f + s
    return A


def matrix_3x3_to_quaternion(a: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Quaternion of the rotation closest to a 3x3 matrix.

    Builds Horn's symmetric 4x4 matrix N from sums and differences of the
    entries of ``a``; the eigenvector of its largest eigenvalue is the
    quaternion. Sign follows the eigensolver's sign convention.

    Args:
        a: Matrix (3 x 3), ideally a rotation

    Returns:
        Unit quaternion (w, x, y, z)
    """
    A = as_matrix3(a, 'a')
    N = np.empty((4, 4), dtype=A.dtype)

    # on-diagonal elements
    N[0, 0] = A[0, 0] + A[1, 1] + A[2, 2]
    N[1, 1] = A[0, 0] - A[1, 1] - A[2, 2]
    N[2, 2] = -A[0, 0] + A[1, 1] - A[2, 2]
    N[3, 3] = -A[0, 0] - A[1, 1] + A[2, 2]

    # off-diagonal elements
    N[0, 1] = N[1, 0] = A[2, 1] - A[1, 2]
    N[0, 2] = N[2, 0] = A[0, 2] - A[2, 0]
    N[0, 3] = N[3, 0] = A[1, 0] - A[0, 1]

    N[1, 2] = N[2, 1] = A[1, 0] + A[0, 1]
    N[1, 3] = N[3, 1] = A[0, 2] + A[2, 0]
    N[2, 3] = N[3, 2] = A[2, 1] + A[1, 2]

    # a non-converged estimate is still the best available rotation
    eig = jacobi(N).params
    return np.array(eig.vectors[:, 0], copy=True)


def orthogonalize_3x3(a: ArrayLike) -> NDArray[np.floating[Any]]:
    """
    Nearest orthogonal matrix, computed through a quaternion.

    A quaternion describes only proper rotations, so a reflection
    (det < 0) is removed before the round trip and restored after it.

    Algorithm:
        1. Pivot rows by implicitly scaled magnitude for accuracy
        2. Negate the matrix if its determinant is negative
        3. Convert to a quaternion and back
        4. Re-apply the negation
        5. Undo the row exchanges, second one first

    Args:
        a: Matrix (3 x 3)

    Returns:
        Orthogonal matrix (3 x 3); ``a`` is not modified
    """
    B = np.array(as_matrix3(a, 'a'), order='C', copy=True)
    T = B.dtype.type

    # a zero row leaves an infinite scale, which only ranks the rows
    with np.errstate(divide='ignore', invalid='ignore'):
        scale = T(1.0) / np.abs(B).max(axis=1)

        # first column
        index0 = 0
        largest = scale[0] * abs(B[0, 0])
        tmp = scale[1] * abs(B[1, 0])
        if tmp >= largest:
            largest = tmp
            index0 = 1
        if scale[2] * abs(B[2, 0]) >= largest:
            index0 = 2
        if index0 != 0:
            swap_rows(B, index0, 0)
            scale[index0] = scale[0]

        # second column
        index1 = 1
        if scale[2] * abs(B[2, 1]) >= scale[1] * abs(B[1, 1]):
            index1 = 2
            swap_rows(B, 2, 1)

    flipped = _det3(B) < 0
    if flipped:
        B = -B

    B = quaternion_to_matrix_3x3(matrix_3x3_to_quaternion(B))

    if flipped:
        B = -B

    if index1 != 1:
        swap_rows(B, index1, 1)
    if index0 != 0:
        swap_rows(B, index0, 0)
    return B
