"""
Least-squares design.

Holds the transposed sample matrices of the problem X' M' = Y' after
validation. Sample counts are not checked here: too few samples is a
numerical outcome (UNDERDETERMINED) reported by the backend, not an
input error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pynumerics.core.validation import (
    check_2d,
    check_array,
    check_consistent_length,
    check_finite,
    check_same_dtype,
)


@dataclass(frozen=True)
class LeastSquaresDesign:
    """
    Validated inputs for a least-squares fit.

    Construction:
        LeastSquaresDesign.from_arrays(xt, yt)

    A 1-D ``xt`` or ``yt`` is treated as a single column.
    """
    _xt: NDArray[np.floating[Any]]
    _yt: NDArray[np.floating[Any]]

    @classmethod
    def from_arrays(cls, xt: ArrayLike, yt: ArrayLike) -> LeastSquaresDesign:
        """
        Build a design from sample matrices.

        Args:
            xt: Inputs, one row per sample (n_samples x x_order)
            yt: Outputs, one row per sample (n_samples x y_order)

        Raises:
            ValidationError: If data is non-numeric, non-finite or mixes precisions
            DimensionError: If shapes are not 2-D or sample counts differ
        """
        xt_arr = check_array(xt, 'xt')
        yt_arr = check_array(yt, 'yt')
        if xt_arr.ndim == 1:
            xt_arr = xt_arr.reshape(-1, 1)
        if yt_arr.ndim == 1:
            yt_arr = yt_arr.reshape(-1, 1)

        check_2d(xt_arr, 'xt')
        check_2d(yt_arr, 'yt')
        check_same_dtype(xt_arr, yt_arr, names=('xt', 'yt'))
        check_finite(xt_arr, 'xt')
        check_finite(yt_arr, 'yt')
        check_consistent_length(xt_arr, yt_arr, names=('xt', 'yt'))

        return cls(_xt=xt_arr, _yt=yt_arr)

    # === Properties ===

    @property
    def xt(self) -> NDArray[np.floating[Any]]:
        """Input samples (n_samples x x_order)."""
        return self._xt

    @property
    def yt(self) -> NDArray[np.floating[Any]]:
        """Output samples (n_samples x y_order)."""
        return self._yt

    @property
    def n_samples(self) -> int:
        return int(self._xt.shape[0])

    @property
    def x_order(self) -> int:
        return int(self._xt.shape[1])

    @property
    def y_order(self) -> int:
        return int(self._yt.shape[1])

    @property
    def dtype(self) -> np.dtype:
        return self._xt.dtype
