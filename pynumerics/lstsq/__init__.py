"""
Least-squares fitting by the normal equations.

Public API:
    fit(xt, yt, ...) -> LeastSquaresSolution

Example:
    >>> from pynumerics.lstsq import fit
    >>> sol = fit(xt, yt)
    >>> if sol.ok:
    ...     yt_hat = sol.predict(xt_new)
"""

from pynumerics.lstsq.design import LeastSquaresDesign
from pynumerics.lstsq.solution import LeastSquaresParams, LeastSquaresSolution
from pynumerics.lstsq.solvers import fit

__all__ = [
    "fit",
    "LeastSquaresDesign",
    "LeastSquaresParams",
    "LeastSquaresSolution",
]
