"""
Core infrastructure for pynumerics.

This module provides shared abstractions and utilities used by all
component sub-packages (linear, eigen, mat3, polynomial, lstsq).

Key components:
    result: Generic Result[P] envelope and Status
    exceptions: Exception hierarchy
    validation: Input validators
    precision: Machine epsilon, working copies
    tolerances: Algorithm defaults and comparison tiers
    workspace: Caller-owned scratch buffers
"""

from pynumerics.core.result import Result, Status
from pynumerics.core.workspace import Workspace
from pynumerics.core.exceptions import (
    PyNumericsError,
    ValidationError,
    DimensionError,
    NumericalError,
    SingularMatrixError,
    UnderdeterminedError,
    ConvergenceError,
)

__all__ = [
    # Result
    "Result",
    "Status",
    # Workspace
    "Workspace",
    # Exceptions
    "PyNumericsError",
    "ValidationError",
    "DimensionError",
    "NumericalError",
    "SingularMatrixError",
    "UnderdeterminedError",
    "ConvergenceError",
]
