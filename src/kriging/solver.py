from __future__ import annotations

import warnings
from typing import Tuple

import numpy as np
from scipy.linalg import LinAlgError, cho_factor, cho_solve

from src.utils.logging import log

from .errors import NegativeMSPEWarning, SingularCovariance

# smallest squared Cholesky pivot accepted, relative to n * eps * max(diag)
PIVOT_SAFETY = 10.0
# negative MSPE down to -MSPE_RTOL * target_variance is treated as rounding
MSPE_RTOL = 1e-10


def kriging_weights(sigma: np.ndarray, c: np.ndarray) -> np.ndarray:
    """
    Solve Sigma_Z w = c by Cholesky factorisation.

    Raises SingularCovariance when Sigma_Z is not positive definite, including
    the case where LAPACK completes but a pivot has collapsed to rounding
    level (e.g. duplicated locations with zero nugget).
    """
    sigma = np.asarray(sigma, dtype=float)
    c = np.asarray(c, dtype=float).reshape(-1)
    n = sigma.shape[0]

    try:
        factor = cho_factor(sigma, lower=True)
    except LinAlgError as e:
        log(f"Cholesky factorisation failed for {n}x{n} covariance: {e}", level="ERROR")
        raise SingularCovariance(
            "observation covariance is not positive definite "
            "(duplicate locations with zero nugget?)"
        ) from e

    pivots = np.diag(factor[0]) ** 2
    threshold = PIVOT_SAFETY * n * np.finfo(float).eps * float(np.max(np.diag(sigma)))
    if np.min(pivots) <= threshold:
        log(f"Cholesky pivot {np.min(pivots):.3g} below {threshold:.3g}", level="ERROR")
        raise SingularCovariance(
            "observation covariance is numerically singular "
            "(duplicate locations with zero nugget?)"
        )

    return cho_solve(factor, c)


def simple_kriging_solve(
    sigma: np.ndarray,
    c: np.ndarray,
    z: np.ndarray,
    mean: float,
    target_variance: float,
) -> Tuple[float, float, np.ndarray]:
    """
    Returns (prediction, mspe, weights).

      prediction = mean + w^T (z - mean)
      mspe       = target_variance - c^T w

    target_variance is k(0) at the target; for the stationary Matern kernel
    that is the sill.
    """
    z = np.asarray(z, dtype=float).reshape(-1)
    c = np.asarray(c, dtype=float).reshape(-1)

    w = kriging_weights(sigma, c)
    prediction = float(mean + w @ (z - mean))
    mspe = float(target_variance - c @ w)

    if mspe < 0:
        tol = MSPE_RTOL * target_variance
        if mspe < -tol:
            msg = f"negative MSPE {mspe:.6g} (tolerance {tol:.3g}); covariance solve is unstable"
            log(msg, level="WARNING")
            warnings.warn(msg, NegativeMSPEWarning, stacklevel=2)
        else:
            mspe = 0.0

    return prediction, mspe, w
