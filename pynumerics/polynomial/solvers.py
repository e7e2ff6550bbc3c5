"""
Closed-form real root finders for polynomials of degree one to three.

Each solver falls back to the next lower degree when its leading
coefficient is exactly zero. Coincident roots are merged only when they
are bit-for-bit equal.
"""

import logging
import math

from pynumerics.polynomial.solution import RootCode, Roots

logger = logging.getLogger(__name__)


def _sign(x: float) -> float:
    return -1.0 if x < 0.0 else 1.0


def solve_linear(c2: float, c3: float) -> Roots:
    """
    Solve c2*t + c3 = 0.

    Returns:
        Roots with one root (ONE_ROOT), none (NO_SOLUTION), or
        INFINITE_SOLUTIONS when both coefficients are zero
    """
    c2 = float(c2)
    c3 = float(c3)
    if c2 != 0.0:
        return Roots(count=1, code=RootCode.ONE_ROOT, slots=(-c3 / c2, 0.0, 0.0))
    if c3 == 0.0:
        return Roots(count=0, code=RootCode.INFINITE_SOLUTIONS)
    return Roots(count=0, code=RootCode.NO_SOLUTION)


def solve_quadratic(c1: float, c2: float, c3: float) -> Roots:
    """
    Solve c1*t^2 + c2*t + c3 = 0.

    Uses Q = -(c2 + sign(c2)*sqrt(disc)) / 2 so that neither root is
    computed by subtracting nearly equal values.

    Args:
        c1, c2, c3: Coefficients, highest degree first

    Returns:
        Roots with code TWO_ROOTS, ONE_ROOT (equal roots) or COMPLEX_PAIR.
        A complex pair reports no real values; its parts are in
        ``complex_pair``.
    """
    c1 = float(c1)
    c2 = float(c2)
    c3 = float(c3)
    if c1 == 0.0:
        return solve_linear(c2, c3)

    disc = c2 * c2 - 4.0 * c1 * c3
    if disc < 0.0:
        real = -c2 / (2.0 * c1)
        imag = math.sqrt(-disc) / (2.0 * abs(c1))
        return Roots(count=0, code=RootCode.COMPLEX_PAIR, complex_pair=(real, imag))

    Q = -0.5 * (c2 + _sign(c2) * math.sqrt(disc))
    r1 = Q / c1
    r2 = 0.0 if Q == 0.0 else c3 / Q

    if r1 == r2:
        return Roots(count=1, code=RootCode.ONE_ROOT, slots=(r1, r2, 0.0))
    return Roots(count=2, code=RootCode.TWO_ROOTS, slots=(r1, r2, 0.0))


def solve_cubic(c0: float, c1: float, c2: float, c3: float) -> Roots:
    """
    Solve c0*t^3 + c1*t^2 + c2*t + c3 = 0.

    Algorithm:
        1. Normalize by c0 and form Q = (c1^2 - 3c2)/9 and
           R = (2c1^3 - 9c1c2 + 27c3)/54.
        2. If R^2 <= Q^3 all roots are real: a triple root when Q^3 == 0,
           otherwise the trigonometric solution with theta = acos(R/sqrt(Q^3)).
           Equal roots are merged.
        3. Otherwise there is one real root and a complex pair, found with
           Cardano's formula using an explicit sign for the cube root.

    The angles use ``math.pi`` and the cube root an exact ``1.0/3.0``
    exponent. Equal roots are merged only when they agree bit for bit, so
    a routine built on truncated literals for these constants can merge
    (or fail to merge) a different set of near-coincident roots.

    Args:
        c0, c1, c2, c3: Coefficients, highest degree first

    Returns:
        Roots with code ONE_ROOT (triple root), TWO_ROOTS, THREE_ROOTS or
        REAL_AND_COMPLEX_PAIR; lower codes when c0 == 0
    """
    c0 = float(c0)
    if c0 == 0.0:
        return solve_quadratic(c1, c2, c3)

    c1 = float(c1) / c0
    c2 = float(c2) / c0
    c3 = float(c3) / c0

    Q = (c1 * c1 - 3.0 * c2) / 9.0
    R = (2.0 * (c1 * c1 * c1) - 9.0 * (c1 * c2) + 27.0 * c3) / 54.0
    R_squared = R * R
    Q_cubed = Q * Q * Q
    shift = c1 / 3.0

    if R_squared <= Q_cubed:
        if Q_cubed == 0.0:
            r = -shift
            return Roots(count=1, code=RootCode.ONE_ROOT, slots=(r, r, r))

        # rounding can push the ratio just past +-1
        ratio = max(-1.0, min(1.0, R / math.sqrt(Q_cubed)))
        theta = math.acos(ratio)
        m = -2.0 * math.sqrt(Q)
        r1 = m * math.cos(theta / 3.0) - shift
        r2 = m * math.cos((theta + 2.0 * math.pi) / 3.0) - shift
        r3 = m * math.cos((theta - 2.0 * math.pi) / 3.0) - shift

        count = 3
        if r1 == r2:
            count = 2
            r2 = r3
        elif r1 == r3:
            count = 2
        if r2 == r3 and count == 3:
            count = 2
        if r1 == r2:
            count = 1

        logger.debug("solve_cubic: %d distinct real roots", count)
        return Roots(count=count, code=RootCode(count), slots=(r1, r2, r3))

    A = -_sign(R) * (abs(R) + math.sqrt(R_squared - Q_cubed)) ** (1.0 / 3.0)
    B = 0.0 if A == 0.0 else Q / A

    real_root = (A + B) - shift
    pair_real = -0.5 * (A + B) - shift
    pair_imag = math.sqrt(3.0) / 2.0 * (A - B)
    return Roots(
        count=1,
        code=RootCode.REAL_AND_COMPLEX_PAIR,
        slots=(real_root, pair_real, pair_imag),
        complex_pair=(pair_real, pair_imag),
    )
