"""
Exception hierarchy for pynumerics.

All exceptions inherit from PyNumericsError to allow catching any
library-specific error.

Numerical failures (singular matrices, too few samples, non-convergence)
are normally reported through Result.status rather than raised; these
classes are raised for invalid inputs at the API boundary, or when a
caller explicitly asks for it with Result.unwrap().

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Never catch and re-raise with less information
"""


class PyNumericsError(Exception):
    """Base exception for all pynumerics errors."""
    pass


class ValidationError(PyNumericsError):
    """
    Input validation failed.

    Raised when user-provided inputs fail validation checks (non-numeric
    data, mixed precision, undersized workspace).
    """
    pass


class DimensionError(ValidationError):
    """
    Array dimensions are incorrect or inconsistent.

    Raised when array shapes don't match expected dimensions or
    when multiple arrays have inconsistent shapes.
    """
    pass


class NumericalError(PyNumericsError):
    """
    Numerical computation failed.

    Base class for errors arising from numerical issues during computation.
    """
    pass


class SingularMatrixError(NumericalError):
    """
    Matrix is singular or nearly singular.

    Attributes:
        matrix_name: Name/description of the problematic matrix
        column: Column at which factorization broke down, if known
        pivot: Magnitude of the rejected pivot, if known
    """

    def __init__(
        self,
        message: str,
        matrix_name: str | None = None,
        column: int | None = None,
        pivot: float | None = None,
    ):
        super().__init__(message)
        self.matrix_name = matrix_name
        self.column = column
        self.pivot = pivot


class UnderdeterminedError(NumericalError):
    """
    Too few samples to determine a least-squares solution.

    Attributes:
        n_samples: Number of samples provided
        required: Minimum number of samples needed
    """

    def __init__(
        self,
        message: str,
        n_samples: int | None = None,
        required: int | None = None,
    ):
        super().__init__(message)
        self.n_samples = n_samples
        self.required = required


class ConvergenceError(PyNumericsError):
    """
    Iterative algorithm failed to converge.

    Attributes:
        iterations: Number of sweeps/iterations completed
        final_change: Residual off-diagonal magnitude or objective change
        reason: Why convergence failed (e.g., 'max_sweeps')
    """

    def __init__(
        self,
        message: str,
        iterations: int,
        final_change: float | None = None,
        reason: str | None = None,
    ):
        super().__init__(message)
        self.iterations = iterations
        self.final_change = final_change
        self.reason = reason
