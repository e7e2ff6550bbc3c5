"""
Root-finding result types.
"""

from dataclasses import dataclass
from enum import IntEnum
import numpy as np
from numpy.typing import NDArray


class RootCode(IntEnum):
    """
    Classification of a polynomial's real roots.

    A classification is never an error: every code is a case the caller
    is expected to handle.
    """
    INFINITE_SOLUTIONS = -1
    NO_SOLUTION = 0
    ONE_ROOT = 1
    TWO_ROOTS = 2
    THREE_ROOTS = 3
    COMPLEX_PAIR = -2
    REAL_AND_COMPLEX_PAIR = -3

    @property
    def has_complex_pair(self) -> bool:
        return self in (RootCode.COMPLEX_PAIR, RootCode.REAL_AND_COMPLEX_PAIR)


@dataclass(frozen=True)
class Roots:
    """
    Real roots of a linear, quadratic or cubic polynomial.

    Attributes:
        count: Number of distinct real roots (0-3)
        code: Classification of the solution
        slots: The three root slots (r1, r2, r3). Unused slots are 0. For
            REAL_AND_COMPLEX_PAIR, r2 and r3 hold the real and imaginary
            parts of the complex pair.
        complex_pair: (real, imaginary) part of a complex conjugate root
            pair, or None when all roots are real
    """
    count: int
    code: RootCode
    slots: tuple[float, float, float] = (0.0, 0.0, 0.0)
    complex_pair: tuple[float, float] | None = None

    @property
    def values(self) -> tuple[float, ...]:
        """The distinct real roots."""
        return self.slots[:self.count]

    def as_array(self) -> NDArray[np.float64]:
        """
        Aggregate view [count, r1, r2, r3, code].

        Built from this result, so it always agrees with the discrete fields.
        """
        return np.array(
            [float(self.count), *self.slots, float(int(self.code))],
            dtype=np.float64,
        )

    def __repr__(self) -> str:
        return f"Roots(count={self.count}, code={self.code.name}, values={self.values})"
