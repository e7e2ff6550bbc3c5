"""
Wall-clock timing for backends that report a breakdown in their Result.

The fixed-size 3x3 kernels and the polynomial solvers never time
themselves; only the batch-style solvers (least squares) do.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Overall stopwatch plus named, accumulating sections.

    Example:
        >>> timer = Timer()
        >>> timer.start()
        >>> with timer.section('accumulate_xxt'):
        ...     xxt = xt.T @ xt
        >>> with timer.section('invert'):
        ...     inverse = invert(xxt).unwrap()
        >>> timer.stop()
        >>> timer.result()
        {'total_seconds': ..., 'accumulate_xxt': ..., 'invert': ...}
    """

    def __init__(self) -> None:
        self._sections: dict[str, float] = {}
        self._started_at: float | None = None
        self._total: float | None = None

    def start(self) -> None:
        self._started_at = time.perf_counter()

    def stop(self) -> None:
        if self._started_at is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._total = time.perf_counter() - self._started_at

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        """
        Add the time spent in the ``with`` block to section ``name``.

        Re-entering a name adds to its total. Sections are not required to
        be disjoint from each other.
        """
        began = time.perf_counter()
        try:
            yield
        finally:
            spent = time.perf_counter() - began
            self._sections[name] = self._sections.get(name, 0.0) + spent

    @property
    def sections(self) -> tuple[str, ...]:
        """Section names in first-use order."""
        return tuple(self._sections)

    def result(self) -> dict[str, float]:
        """
        Timing breakdown as ``{'total_seconds': ..., <section>: ...}``.

        Raises:
            RuntimeError: If the timer has not been stopped
        """
        if self._total is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._total, **self._sections}


@contextmanager
def timed() -> Iterator[Timer]:
    """
    Time a block with an already-started Timer, stopped on exit.

    Example:
        >>> with timed() as timer:
        ...     sol = fit(xt, yt)
        >>> timer.result()['total_seconds']
    """
    timer = Timer()
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()
