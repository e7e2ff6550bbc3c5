"""
Cyclic Jacobi kernel for real symmetric matrices.

Private to pynumerics.eigen. Only the strict upper triangle of the working
matrix is read or written; the lower triangle is left as it was.
"""

from typing import Any, NamedTuple

import numpy as np
from numpy.typing import NDArray


class SweepReport(NamedTuple):
    sweeps: int
    off_diagonal: float
    converged: bool


def _rotate(
    x: NDArray[np.floating[Any]],
    y: NDArray[np.floating[Any]],
    s: np.floating[Any],
    tau: np.floating[Any],
) -> None:
    """Apply one plane rotation to paired views x, y in place."""
    g = x.copy()
    h = y.copy()
    x[:] = g - s * (h + g * tau)
    y[:] = h + s * (g - h * tau)


def _off_diagonal(a: NDArray[np.floating[Any]], upper: tuple[NDArray[np.intp], ...]) -> Any:
    return np.sum(np.abs(a[upper]))


def jacobi_sweeps(
    a: NDArray[np.floating[Any]],
    w: NDArray[np.floating[Any]],
    v: NDArray[np.floating[Any]],
    max_sweeps: int,
    threshold_sweeps: int,
    underflow_sweep: int,
) -> SweepReport:
    """
    Diagonalize ``a`` by cyclic Jacobi rotations.

    On return ``w`` holds the (unsorted) eigenvalues and the columns of
    ``v`` the matching eigenvectors. ``a`` is destroyed.

    Args:
        a: Working copy of the symmetric matrix (n x n)
        w: Eigenvalue output (n,)
        v: Eigenvector output (n x n)
        max_sweeps: Sweep cap
        threshold_sweeps: Number of leading sweeps that skip small entries
        underflow_sweep: Sweeps after this index zero negligible entries
    """
    n = a.shape[0]
    T = a.dtype.type
    one = T(1.0)
    hundred = T(100.0)
    half = T(0.5)

    v[:] = np.eye(n, dtype=a.dtype)
    w[:] = np.diag(a)
    b = w.copy()
    z = np.zeros(n, dtype=a.dtype)
    upper = np.triu_indices(n, k=1)

    for sweep in range(max_sweeps):
        off = _off_diagonal(a, upper)
        if off == 0.0:
            return SweepReport(sweeps=sweep, off_diagonal=0.0, converged=True)

        if sweep < threshold_sweeps:
            threshold = T(0.2) * off / T(n * n)
        else:
            threshold = T(0.0)

        for p in range(n - 1):
            for q in range(p + 1, n):
                g = hundred * abs(a[p, q])

                if (
                    sweep > underflow_sweep
                    and abs(w[p]) + g == abs(w[p])
                    and abs(w[q]) + g == abs(w[q])
                ):
                    a[p, q] = 0.0
                    continue

                if abs(a[p, q]) <= threshold:
                    continue

                h = w[q] - w[p]
                if abs(h) + g == abs(h):
                    t = a[p, q] / h
                else:
                    theta = half * h / a[p, q]
                    t = one / (abs(theta) + np.sqrt(one + theta * theta))
                    if theta < 0.0:
                        t = -t

                c = one / np.sqrt(one + t * t)
                s = t * c
                tau = s / (one + c)
                h = t * a[p, q]
                z[p] -= h
                z[q] += h
                w[p] -= h
                w[q] += h
                a[p, q] = 0.0

                _rotate(a[:p, p], a[:p, q], s, tau)
                _rotate(a[p, p + 1:q], a[p + 1:q, q], s, tau)
                _rotate(a[p, q + 1:], a[q, q + 1:], s, tau)
                _rotate(v[:, p], v[:, q], s, tau)

        b += z
        w[:] = b
        z[:] = 0.0

    off = _off_diagonal(a, upper)
    return SweepReport(sweeps=max_sweeps, off_diagonal=float(off), converged=bool(off == 0.0))


def sort_descending(w: NDArray[np.floating[Any]], v: NDArray[np.floating[Any]]) -> None:
    """Order eigenpairs by decreasing eigenvalue; equal values keep their order."""
    order = np.argsort(-w, kind='stable')
    w[:] = w[order]
    v[:] = v[:, order]


def normalize_signs(v: NDArray[np.floating[Any]]) -> None:
    """Negate every column with fewer than ceil(n/2) non-negative entries."""
    n = v.shape[0]
    non_negative = np.count_nonzero(v >= 0.0, axis=0)
    flip = non_negative < (n + 1) // 2
    v[:, flip] *= -1
