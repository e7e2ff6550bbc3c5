"""
Generic result container for all pynumerics computations.

Every fallible kernel returns a Result instead of raising. The status field
tells the caller which branch it is on; params carries the payload (or None
when the computation could not produce one).

Design decisions:
    - Generic over parameter payload P for type safety
    - status is an explicit enum, never inferred from params
    - info dict for flexible metadata (sweeps, pivots, column of failure)
    - timing is optional (don't burden hot loops)
    - Immutable (frozen=True)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import TypeVar, Generic, Any

from pynumerics.core.exceptions import (
    ConvergenceError,
    PyNumericsError,
    SingularMatrixError,
    UnderdeterminedError,
)

P = TypeVar('P')  # Parameter payload type


class Status(Enum):
    """Outcome of a kernel call."""
    OK = 'ok'
    SINGULAR_MATRIX = 'singular_matrix'
    UNDERDETERMINED = 'underdetermined'
    NON_CONVERGENCE = 'non_convergence'

    @property
    def is_soft(self) -> bool:
        """True for failures that still carry a usable payload."""
        return self is Status.NON_CONVERGENCE


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for numerical computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Payload (factors, eigenpairs, solution vector), or None if
            the computation failed hard
        status: Outcome of the call
        info: Structured metadata (method, sweeps, failing column)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the code path that produced this result
        warnings: Non-fatal issues encountered during computation

    Examples:
        >>> result = solve(A, b)
        >>> if result.ok:
        ...     x = result.params
        >>> x = solve(A, b).unwrap()   # raises SingularMatrixError instead
    """
    params: P | None
    status: Status = Status.OK
    info: dict[str, Any] = field(default_factory=dict)
    timing: dict[str, float] | None = None
    backend_name: str = 'cpu'
    warnings: tuple[str, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return self.status is Status.OK

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)

    def unwrap(self) -> P:
        """
        Return the payload, raising if the call failed hard.

        Soft failures (non-convergence) return the best-effort payload.

        Raises:
            SingularMatrixError: status is SINGULAR_MATRIX
            UnderdeterminedError: status is UNDERDETERMINED
            ConvergenceError: status is NON_CONVERGENCE and no payload exists
        """
        if self.status is Status.OK or (self.status.is_soft and self.params is not None):
            return self.params  # type: ignore[return-value]

        message = self.warnings[0] if self.warnings else self.status.value
        if self.status is Status.SINGULAR_MATRIX:
            raise SingularMatrixError(
                message,
                matrix_name=self.info.get('matrix_name'),
                column=self.info.get('column'),
                pivot=self.info.get('pivot'),
            )
        if self.status is Status.UNDERDETERMINED:
            raise UnderdeterminedError(
                message,
                n_samples=self.info.get('n_samples'),
                required=self.info.get('required'),
            )
        if self.status is Status.NON_CONVERGENCE:
            raise ConvergenceError(
                message,
                iterations=self.info.get('sweeps', 0),
                final_change=self.info.get('off_diagonal'),
                reason='max_sweeps',
            )
        raise PyNumericsError(message)


def failure(
    status: Status,
    message: str,
    *,
    backend_name: str = 'cpu',
    **info: Any,
) -> Result[Any]:
    """Build a payload-less Result for a hard failure."""
    return Result(
        params=None,
        status=status,
        info=info,
        backend_name=backend_name,
        warnings=(message,),
    )
