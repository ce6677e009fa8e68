"""Unbiased quadrature delay estimator (UQDE).

Estimates the phase difference between two sinusoids of equal frequency
from lagged cross products, with the lag equal to a quarter period.

Reference:
- H.C. So, A comparative study of two discrete-time phase delay estimators,
  IEEE Trans. Instrumentation and Measurement, 54(6), 2005, pp. 2501-2504

The sampling frequency has to be a multiple of 4 times the sinusoid frequency.
"""
import logging
import warnings
from typing import Tuple

import numpy as np

logger = logging.getLogger(__name__)

DELTA_WARN = 10 * np.finfo(float).eps
DELTA_ERR = 1e-6


def quarter_period_lag(fs: float, f0: float,
                       delta_warn: float = DELTA_WARN,
                       delta_err: float = DELTA_ERR) -> Tuple[int, float]:
    """
    Quarter-period lag in samples.

    Returns:
        lag: Rounded lag fs / (4 f0)
        rounding_error: Lag minus rounded lag, in samples

    Raises:
        ValueError: if the rounding error exceeds delta_err
    """
    if not fs > 0 or not f0 > 0:
        raise ValueError("fs and f0 must be positive")
    delta = fs / (4 * f0)
    rounding_error = delta - round(delta)
    if abs(rounding_error) > delta_err:
        raise ValueError(f"fs is not a multiple of 4*f0 (error = {rounding_error:.3e} samples)")
    if abs(rounding_error) > delta_warn:
        warnings.warn(f"fs is not a multiple of 4*f0 (error = {rounding_error:.3e} samples)")
    return int(round(delta)), rounding_error


def uqde(x1: np.ndarray, x2: np.ndarray, fs: float, f0: float,
         delta_warn: float = DELTA_WARN,
         delta_err: float = DELTA_ERR) -> Tuple[float, float]:
    """
    Phase shift between two sinusoids.

    Args:
        x1, x2: Real sinusoids sampled at fs
        fs: Sampling frequency in Hz
        f0: Sinusoid frequency in Hz
        delta_warn: Lag rounding error (samples) above which a warning is issued
        delta_err: Lag rounding error (samples) above which estimation fails

    Returns:
        phi: Estimated phase delay of x2 with respect to x1 in radians, within
            (-pi/2, pi/2) (x1 = cos(w k) and x2 = cos(w k - phi) give phi)
        rounding_error: Quarter-period lag rounding error in samples
    """
    x1 = np.asarray(x1, dtype=np.float64)
    x2 = np.asarray(x2, dtype=np.float64)
    if len(x1) != len(x2):
        warnings.warn("Length of input vectors x1 and x2 does not match. "
                      "Truncating to identical length.")
        n = min(len(x1), len(x2))
        x1, x2 = x1[:n], x2[:n]

    lag, rounding_error = quarter_period_lag(fs, f0, delta_warn, delta_err)
    n = len(x1)
    if n <= lag:
        raise ValueError(f"Signals too short ({n} samples) for a lag of {lag} samples")

    norm = 1.0 / (n - lag)
    qm1 = norm * np.sum(x1[:n - lag] * x2[lag:])        # x1(k-d) x2(k)
    qm2 = norm * np.sum(x1[lag:] * x2[lag:])            # x1(k)   x2(k)
    qm3 = norm * np.sum(x1[lag:] * x2[:n - lag])        # x1(k)   x2(k-d)
    qm4 = norm * np.sum(x1[:n - lag] * x2[:n - lag])    # x1(k-d) x2(k-d)

    phi = float(np.arctan((qm1 - qm3) / (qm2 + qm4)))
    logger.debug("UQDE lag=%d samples, phi=%.6f rad", lag, phi)
    return phi, rounding_error
