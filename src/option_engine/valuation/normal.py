"""Standard normal distribution primitives.

The CDF uses the Abramowitz-Stegun 7.1.26 rational approximation of erf,
giving an absolute error of about 7.5e-8 on the CDF for every real input.
"""

from __future__ import annotations

import numpy as np

__all__ = ["norm_cdf", "norm_pdf"]

_A1 = 0.254829592
_A2 = -0.284496736
_A3 = 1.421413741
_A4 = -1.453152027
_A5 = 1.061405429
_P = 0.3275911

_SQRT_2 = np.sqrt(2.0)
_SQRT_2PI = np.sqrt(2.0 * np.pi)


def norm_cdf(x):
    """Standard normal cumulative distribution function.

    Parameters
    ----------
    x
        Scalar or array-like evaluation point(s).

    Returns
    -------
    float | np.ndarray
        Phi(x); a float for scalar input, an array otherwise.
    """
    x_arr = np.asarray(x, dtype=float)
    sign = np.where(x_arr < 0, -1.0, 1.0)
    z = np.abs(x_arr) / _SQRT_2

    t = 1.0 / (1.0 + _P * z)
    y = 1.0 - ((((_A5 * t + _A4) * t + _A3) * t + _A2) * t + _A1) * t * np.exp(-z * z)
    out = 0.5 * (1.0 + sign * y)

    if out.ndim == 0:
        return float(out)
    return out


def norm_pdf(x):
    """Standard normal probability density function exp(-x^2/2)/sqrt(2*pi)."""
    x_arr = np.asarray(x, dtype=float)
    out = np.exp(-0.5 * x_arr * x_arr) / _SQRT_2PI
    if out.ndim == 0:
        return float(out)
    return out
