"""
Numerical defaults and tolerance tiers.

The first half holds the algorithmic constants every kernel defaults to;
each is also exposed as a keyword argument on the routine that uses it.

The second half defines precision expectations for the two supported
element widths, used by the test suite and by verification code that
checks a decomposition against its inputs.
"""

from dataclasses import dataclass

import numpy as np


# Absolute pivot magnitude below which LU factorization reports a singular
# matrix. Not scaled by matrix magnitude.
DEFAULT_PIVOT_TOLERANCE: float = 1e-12

# Cyclic Jacobi sweep cap
JACOBI_MAX_SWEEPS: int = 20

# Sweeps that use the 0.2 * sum|off| / n^2 skip threshold
JACOBI_THRESHOLD_SWEEPS: int = 3

# Sweep index after which negligible off-diagonal entries are zeroed outright
JACOBI_UNDERFLOW_SWEEP: int = 3


@dataclass(frozen=True)
class ToleranceTier:
    """Tolerance specification for numerical comparison."""
    rtol: float
    atol: float
    name: str
    description: str


# Double precision kernels
FP64 = ToleranceTier(
    rtol=1e-10,
    atol=1e-12,
    name='fp64',
    description='double precision, well-conditioned input',
)

# Double precision, ill-conditioned problems (cond > 1e4)
FP64_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-4,
    atol=1e-6,
    name='fp64_ill_conditioned',
    description='double precision, ill-conditioned (cond > 1e4)',
)

# Single precision kernels
FP32 = ToleranceTier(
    rtol=1e-4,
    atol=1e-5,
    name='fp32',
    description='single precision, well-conditioned input',
)

# Single precision, ill-conditioned problems
FP32_ILL_CONDITIONED = ToleranceTier(
    rtol=1e-2,
    atol=1e-3,
    name='fp32_ill_conditioned',
    description='single precision, ill-conditioned',
)


def select_tolerance(
    dtype: np.dtype | type,
    is_ill_conditioned: bool = False,
) -> ToleranceTier:
    """Select appropriate tolerance tier for a given element width."""
    if np.dtype(dtype) == np.float32:
        if is_ill_conditioned:
            return FP32_ILL_CONDITIONED
        return FP32
    if is_ill_conditioned:
        return FP64_ILL_CONDITIONED
    return FP64
