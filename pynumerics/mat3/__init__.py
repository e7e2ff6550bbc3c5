"""
Unrolled kernels for 3x3 matrices and 3-vectors.

Public API:
    lu_factor_3x3, lu_solve_3x3, linear_solve_3x3, invert_3x3
    multiply_3x3, transpose_3x3, identity_3x3, determinant_3x3, determinant_2x2
    dot, cross, norm, normalize, perpendiculars
    quaternion_to_matrix_3x3, matrix_3x3_to_quaternion, orthogonalize_3x3
    diagonalize_3x3, singular_value_decomposition_3x3

Example:
    >>> from pynumerics.mat3 import singular_value_decomposition_3x3
    >>> U, w, VT = singular_value_decomposition_3x3(A)
    >>> np.allclose(U @ np.diag(w) @ VT, A)
    True
"""

from pynumerics.mat3.decomposition import (
    diagonalize_3x3,
    singular_value_decomposition_3x3,
)
from pynumerics.mat3.lu import (
    invert_3x3,
    linear_solve_3x3,
    lu_factor_3x3,
    lu_solve_3x3,
)
from pynumerics.mat3.ops import (
    cross,
    determinant_2x2,
    determinant_3x3,
    dot,
    identity_3x3,
    multiply_3x3,
    norm,
    normalize,
    perpendiculars,
    transpose_3x3,
)
from pynumerics.mat3.rotation import (
    matrix_3x3_to_quaternion,
    orthogonalize_3x3,
    quaternion_to_matrix_3x3,
)

__all__ = [
    "lu_factor_3x3",
    "lu_solve_3x3",
    "linear_solve_3x3",
    "invert_3x3",
    "multiply_3x3",
    "transpose_3x3",
    "identity_3x3",
    "determinant_3x3",
    "determinant_2x2",
    "dot",
    "cross",
    "norm",
    "normalize",
    "perpendiculars",
    "quaternion_to_matrix_3x3",
    "matrix_3x3_to_quaternion",
    "orthogonalize_3x3",
    "diagonalize_3x3",
    "singular_value_decomposition_3x3",
]
