"""
Eigen- and singular value decomposition of 3x3 matrices.

Both decompositions order their axes by how well the vectors line up with
x, y and z rather than by magnitude, which keeps the result stable for
nearly axis-aligned inputs.
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from pynumerics.eigen.solvers import jacobi
from pynumerics.mat3._common import as_matrix3, swap_rows
from pynumerics.mat3.ops import _cross, _det3, _normalize
from pynumerics.mat3.rotation import orthogonalize_3x3


def diagonalize_3x3(
    a: ArrayLike,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    Eigenvalues and axis-aligned eigenvectors of a symmetric 3x3 matrix.

    Ordering rules:
        - All three eigenvalues equal: V is the identity.
        - Exactly two equal: the independent eigenvector moves to the slot
          of its largest component, which is made positive; the degenerate
          pair is rebuilt by cross products against the next axis.
        - All distinct: the vector with the largest |x| goes first, the one
          of the remaining two with the larger |y| second; V[0, 0] and
          V[1, 1] are made positive and the third vector is negated if
          needed so det(V) > 0.

    Args:
        a: Symmetric matrix (3 x 3)

    Returns:
        (w, V) with A V = V diag(w) and eigenvectors as columns of V
    """
    A = as_matrix3(a, 'a')
    eig = jacobi(A).params
    w = np.array(eig.values, copy=True)

    if w[0] == w[1] and w[0] == w[2]:
        return w, np.eye(3, dtype=A.dtype)

    # rows of Vt are eigenvectors
    Vt = np.array(eig.vectors.T, order='C', copy=True)

    for i in range(3):
        if w[(i + 1) % 3] != w[(i + 2) % 3]:
            continue

        # largest component of the independent eigenvector (first wins ties)
        max_i = int(np.argmax(np.abs(Vt[i])))
        if max_i != i:
            w[[i, max_i]] = w[[max_i, i]]
            swap_rows(Vt, i, max_i)
        if Vt[max_i, max_i] < 0:
            Vt[max_i] = -Vt[max_i]

        j = (max_i + 1) % 3
        k = (max_i + 2) % 3
        Vt[j] = 0.0
        Vt[j, j] = 1.0
        Vt[k] = _cross(Vt[max_i], Vt[j])
        _normalize(Vt[k])
        Vt[j] = _cross(Vt[k], Vt[max_i])
        return w, np.ascontiguousarray(Vt.T)

    max_i = int(np.argmax(np.abs(Vt[:, 0])))
    if max_i != 0:
        w[[0, max_i]] = w[[max_i, 0]]
        swap_rows(Vt, 0, max_i)
    if abs(Vt[1, 1]) < abs(Vt[2, 1]):
        w[[1, 2]] = w[[2, 1]]
        swap_rows(Vt, 1, 2)

    for i in range(2):
        if Vt[i, i] < 0:
            Vt[i] = -Vt[i]
    if _det3(Vt) < 0:
        Vt[2] = -Vt[2]

    return w, np.ascontiguousarray(Vt.T)


def singular_value_decomposition_3x3(
    a: ArrayLike,
) -> tuple[NDArray[np.floating[Any]], NDArray[np.floating[Any]], NDArray[np.floating[Any]]]:
    """
    Singular value decomposition A = U diag(w) VT of a 3x3 matrix.

    U and VT are proper rotations (positive determinant). When A reverses
    orientation the singular values come back negated instead, so the
    decomposition reads as rotation, scale, rotation. The scale factors
    are ordered by how well the rows of VT match the x, y and z axes.

    Args:
        a: Matrix (3 x 3); not modified

    Returns:
        (U, w, VT)
    """
    B = np.array(as_matrix3(a, 'a'), order='C', copy=True)

    flipped = _det3(B) < 0
    if flipped:
        B = -B

    U = orthogonalize_3x3(B)
    w, V = diagonalize_3x3(B.T @ U)
    U = U @ V
    VT = np.ascontiguousarray(V.T)

    if flipped:
        w = -w
    return U, w, VT
