"""
Linear solver payload types.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class LUFactorization:
    """
    Combined L\\U factors of a square matrix and their row-interchange record.

    The two arrays only make sense together: ``lu`` is the factored form of
    the row-permuted matrix described by ``pivots``. When produced with
    ``overwrite_a=True`` and/or a Workspace, both are views of caller-owned
    memory and stay valid only as long as the caller leaves that memory alone.
    """
    lu: NDArray[np.floating[Any]]
    pivots: NDArray[np.intp]

    @property
    def n(self) -> int:
        return int(self.lu.shape[0])

    @property
    def dtype(self) -> np.dtype:
        return self.lu.dtype

    @property
    def lower(self) -> NDArray[np.floating[Any]]:
        """Unit lower-triangular factor L."""
        L = np.tril(self.lu, k=-1)
        np.fill_diagonal(L, 1.0)
        return L

    @property
    def upper(self) -> NDArray[np.floating[Any]]:
        """Upper-triangular factor U."""
        return np.triu(self.lu)

    def permutation(self) -> NDArray[np.intp]:
        """
        Row order of the factored matrix.

        ``A[perm] == L @ U`` up to rounding, where ``perm`` is the result of
        replaying the recorded interchanges on ``arange(n)``.
        """
        perm = np.arange(self.n)
        for j, p in enumerate(self.pivots):
            if p != j:
                perm[[j, p]] = perm[[p, j]]
        return perm
