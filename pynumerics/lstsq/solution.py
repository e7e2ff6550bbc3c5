"""
Least-squares solution types.

Contains the parameter payload and user-facing solution wrapper.
"""

from dataclasses import dataclass
from typing import Any, TYPE_CHECKING
import numpy as np
from numpy.typing import ArrayLike, NDArray

from pynumerics.core.result import Result, Status
from pynumerics.core.validation import check_array, check_same_dtype

if TYPE_CHECKING:
    from pynumerics.lstsq.design import LeastSquaresDesign


@dataclass(frozen=True)
class LeastSquaresParams:
    """
    Parameter payload for a least-squares fit.

    This is the immutable data computed by backends.
    """
    mt: NDArray[np.floating[Any]]
    fitted_values: NDArray[np.floating[Any]]
    residuals: NDArray[np.floating[Any]]
    rss: float


@dataclass
class LeastSquaresSolution:
    """
    User-facing least-squares results.

    Wraps the backend Result. A failed fit (UNDERDETERMINED or
    SINGULAR_MATRIX) still yields a solution object: check ``ok`` or
    ``status`` before reading the coefficients, or call ``unwrap()`` to
    raise instead.
    """
    _result: Result[LeastSquaresParams]
    _design: 'LeastSquaresDesign'

    @property
    def ok(self) -> bool:
        return self._result.ok

    @property
    def status(self) -> Status:
        return self._result.status

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    @property
    def info(self) -> dict[str, Any]:
        return self._result.info

    @property
    def timing(self) -> dict[str, float] | None:
        return self._result.timing

    @property
    def coefficients(self) -> NDArray[np.floating[Any]] | None:
        """M' (x_order x y_order), or None if the fit failed."""
        if self._result.params is None:
            return None
        return self._result.params.mt

    @property
    def fitted_values(self) -> NDArray[np.floating[Any]] | None:
        if self._result.params is None:
            return None
        return self._result.params.fitted_values

    @property
    def residuals(self) -> NDArray[np.floating[Any]] | None:
        if self._result.params is None:
            return None
        return self._result.params.residuals

    @property
    def rss(self) -> float | None:
        """Residual sum of squares over all outputs."""
        if self._result.params is None:
            return None
        return self._result.params.rss

    def unwrap(self) -> NDArray[np.floating[Any]]:
        """Return M', raising the matching error if the fit failed."""
        return self._result.unwrap().mt

    def predict(self, xt: ArrayLike) -> NDArray[np.floating[Any]]:
        """
        Apply the fitted map to new samples.

        Args:
            xt: Inputs, one row per sample (m x x_order)

        Returns:
            Predicted outputs (m x y_order)
        """
        mt = self._result.unwrap().mt
        X = check_array(xt, 'xt')
        if X.ndim == 1:
            X = X.reshape(-1, 1)
        check_same_dtype(X, mt, names=('xt', 'coefficients'))
        return X @ mt

    def __repr__(self) -> str:
        d = self._design
        return (
            f"LeastSquaresSolution(n_samples={d.n_samples}, x_order={d.x_order}, "
            f"y_order={d.y_order}, status={self.status.name})"
        )
