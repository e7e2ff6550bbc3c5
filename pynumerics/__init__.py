"""
PyNumerics: dense-matrix numerical kernels for geometry processing.

Small, exact-convention implementations of classical algorithms whose
sign, ordering and degeneracy behavior downstream code relies on.
float32 and float64 are both supported; a call never mixes them.

Submodules:
    linear: N x N LU factorization, solve, invert
    eigen: Symmetric eigendecomposition by cyclic Jacobi rotation
    mat3: Unrolled 3x3 kernels, quaternions, orthogonalization, SVD
    polynomial: Closed-form linear, quadratic and cubic roots
    lstsq: Least squares by the normal equations

Numerical failures are returned as Result statuses and logged through
the ``pynumerics`` logger, which has a NullHandler until the application
configures logging.
"""

import logging

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from pynumerics import linear  # noqa: E402
from pynumerics import eigen  # noqa: E402
from pynumerics import mat3  # noqa: E402
from pynumerics import polynomial  # noqa: E402
from pynumerics import lstsq  # noqa: E402
from pynumerics.core import Result, Status, Workspace  # noqa: E402

__all__ = [
    "__version__",
    "linear",
    "eigen",
    "mat3",
    "polynomial",
    "lstsq",
    "Result",
    "Status",
    "Workspace",
]
