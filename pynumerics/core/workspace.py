"""
Caller-owned scratch buffers.

A Workspace lets hot loops call the N x N kernels without any hidden
allocation of pivot or scratch storage. It is plain data: nothing in the
library keeps a reference to it after a call returns, and nothing caches
one between calls. Using the same Workspace from two threads at once is
the caller's bug.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pynumerics.core.exceptions import ValidationError
from pynumerics.core.validation import SUPPORTED_DTYPES


@dataclass
class Workspace:
    """
    Scratch storage for matrices of order up to ``size``.

    Attributes:
        pivots: Row-interchange record, length >= size
        scratch: Row scale factors / right-hand-side column, length >= size
    """
    pivots: NDArray[np.intp]
    scratch: NDArray[np.floating[Any]]

    @classmethod
    def allocate(cls, size: int, dtype: np.dtype | type = np.float64) -> Workspace:
        """Allocate a workspace for matrices of order <= size."""
        dt = np.dtype(dtype)
        if dt not in SUPPORTED_DTYPES:
            raise ValidationError(f"workspace dtype must be float32 or float64, got {dt}")
        if size < 1:
            raise ValidationError(f"workspace size must be positive, got {size}")
        return cls(
            pivots=np.zeros(size, dtype=np.intp),
            scratch=np.zeros(size, dtype=dt),
        )

    @property
    def size(self) -> int:
        return int(min(self.pivots.shape[0], self.scratch.shape[0]))

    @property
    def dtype(self) -> np.dtype:
        return self.scratch.dtype

    def buffers(self, n: int, dtype: np.dtype) -> tuple[NDArray[np.intp], NDArray[np.floating[Any]]]:
        """
        Return length-n views of the pivot and scratch buffers.

        Raises:
            ValidationError: If the workspace is too small or has the wrong dtype
        """
        if n > self.size:
            raise ValidationError(f"workspace holds {self.size} entries, need {n}")
        if self.scratch.dtype != dtype:
            raise ValidationError(
                f"workspace dtype {self.scratch.dtype} does not match matrix dtype {dtype}"
            )
        return self.pivots[:n], self.scratch[:n]


def scratch_buffers(
    n: int,
    dtype: np.dtype,
    workspace: Workspace | None,
) -> tuple[NDArray[np.intp], NDArray[np.floating[Any]]]:
    """Pivot/scratch views from the workspace, or fresh per-call arrays."""
    if workspace is not None:
        return workspace.buffers(n, dtype)
    return np.zeros(n, dtype=np.intp), np.zeros(n, dtype=dtype)
