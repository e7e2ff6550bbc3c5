"""
Solver dispatch for least squares.

This module provides the fit() function (public API).
"""

from numpy.typing import ArrayLike

from pynumerics.core.tolerances import DEFAULT_PIVOT_TOLERANCE
from pynumerics.core.workspace import Workspace
from pynumerics.lstsq.backends.cpu import NormalEquationsBackend
from pynumerics.lstsq.design import LeastSquaresDesign
from pynumerics.lstsq.solution import LeastSquaresSolution


def fit(
    xt: ArrayLike,
    yt: ArrayLike,
    *,
    workspace: Workspace | None = None,
    pivot_tolerance: float = DEFAULT_PIVOT_TOLERANCE,
) -> LeastSquaresSolution:
    """
    Least-squares fit of a linear map between sample sets.

    Finds M' minimizing ||X' M' - Y'||^2 where each row of ``xt`` and
    ``yt`` is one sample. Prediction for new inputs is ``xt_new @ M'``.

    Args:
        xt: Inputs (n_samples x x_order). Include a column of ones to fit
            an intercept.
        yt: Outputs (n_samples x y_order)
        workspace: Optional caller-owned scratch, order >= x_order
        pivot_tolerance: Pivot threshold for inverting X X'

    Returns:
        LeastSquaresSolution; check ``ok`` before reading coefficients.
        Status is UNDERDETERMINED when n_samples < x_order or
        n_samples < y_order and SINGULAR_MATRIX when X X' is singular.

    Raises:
        ValidationError: If inputs are invalid
        DimensionError: If xt and yt have inconsistent dimensions

    Example:
        >>> x = np.linspace(0, 1, 10)
        >>> xt = np.column_stack([x, np.ones_like(x)])
        >>> sol = fit(xt, 2 * x + 1)
        >>> sol.coefficients.ravel()
        array([2., 1.])
    """
    # === Input Validation ===
    design = LeastSquaresDesign.from_arrays(xt, yt)

    # === Solve ===
    backend = NormalEquationsBackend(pivot_tolerance=pivot_tolerance)
    result = backend.solve(design, workspace=workspace)

    # === Wrap and Return ===
    return LeastSquaresSolution(_result=result, _design=design)
