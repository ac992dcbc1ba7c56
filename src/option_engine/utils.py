"""Helper functions shared by the valuation engines and sweeps."""

from __future__ import annotations

from contextlib import contextmanager
from collections.abc import Iterator
import time
import numpy as np

__all__ = [
    "log_timing",
    "binomial_coefficients_row",
]


@contextmanager
def log_timing(logger, label: str, enabled: bool) -> Iterator[None]:
    """Log timing for a code block when enabled is True."""
    if not enabled:
        yield
        return
    start = time.perf_counter()
    try:
        yield
    finally:
        elapsed = time.perf_counter() - start
        logger.debug("Timing %s: %.6fs", label, elapsed)


def binomial_coefficients_row(n: int, log: bool = False) -> np.ndarray:
    """All coefficients C(n, 0), ..., C(n, n) of one Pascal row.

    The first half of the row is built with the multiplicative recurrence
    ``C(n, j + 1) = C(n, j) * (n - j) / (j + 1)``, which uses the symmetry
    ``C(n, k) = C(n, n - k)`` to keep intermediate products small, and is
    mirrored onto the second half.

    Examples
    ========
    >>> binomial_coefficients_row(4).tolist()
    [1.0, 4.0, 6.0, 4.0, 1.0]

    Parameters
    ==========
    n:
        Row index (>= 0).
    log:
        Return natural logarithms of the coefficients instead. The central
        coefficients overflow float64 for rows beyond roughly n = 1020.

    Returns
    =======
    np.ndarray
        Float array of shape (n + 1,).
    """
    if n < 0:
        return np.zeros(0, dtype=float)

    half = n // 2
    j = np.arange(half, dtype=float)
    ratios = (n - j) / (j + 1.0)
    if log:
        first_half = np.concatenate(([0.0], np.cumsum(np.log(ratios))))
    else:
        first_half = np.concatenate(([1.0], np.cumprod(ratios)))

    ks = np.arange(n + 1)
    return first_half[np.minimum(ks, n - ks)]
