"""
Eigensolver payload types.
"""

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class EigenDecomposition:
    """
    Eigenpairs of a real symmetric matrix.

    Attributes:
        values: Eigenvalues in descending order (n,)
        vectors: Eigenvectors as columns (n x n); column k pairs with
            values[k] and has at least ceil(n/2) non-negative entries
    """
    values: NDArray[np.floating[Any]]
    vectors: NDArray[np.floating[Any]]

    @property
    def n(self) -> int:
        return int(self.values.shape[0])

    def reconstruct(self) -> NDArray[np.floating[Any]]:
        """Return V diag(w) V^T."""
        return (self.vectors * self.values) @ self.vectors.T
