from __future__ import annotations

import math

import numpy as np
from scipy.special import gammaln, kve

from .errors import InvalidParameter
from .model import CovarianceParameters


def validate_parameters(params: CovarianceParameters) -> None:
    values = {
        "sill": params.sill,
        "range": params.range,
        "smoothness": params.smoothness,
        "nugget": params.nugget,
    }
    for name, v in values.items():
        if not math.isfinite(v):
            raise InvalidParameter(f"{name} must be finite. Got {v}")

    if params.sill <= 0:
        raise InvalidParameter(f"sill must be positive. Got {params.sill}")
    if params.range <= 0:
        raise InvalidParameter(f"range must be positive. Got {params.range}")
    if params.smoothness <= 0:
        raise InvalidParameter(f"smoothness must be positive. Got {params.smoothness}")
    if params.nugget < 0:
        raise InvalidParameter(f"nugget must be non-negative. Got {params.nugget}")


def _log_kv(kappa: float, u: np.ndarray) -> np.ndarray:
    """
    log K_kappa(u) for u > 0.

    Orders above 1 are reached from the fractional base order by the forward
    recurrence K_{v+1} = K_{v-1} + (2v/u) K_v, carried as ratios so nothing
    overflows for large kappa or tiny u.
    """
    with np.errstate(divide="ignore", over="ignore", invalid="ignore"):
        if kappa <= 1.0:
            return np.log(kve(kappa, u)) - u

        nu = kappa - math.floor(kappa)
        steps = int(round(kappa - nu))
        log_k0 = np.log(kve(nu, u)) - u
        log_k = np.log(kve(nu + 1.0, u)) - u
        ratio = np.exp(log_k - log_k0)
        nu += 1.0
        for _ in range(steps - 1):
            ratio = 1.0 / ratio + 2.0 * nu / u
            log_k = log_k + np.log(ratio)
            nu += 1.0
    return log_k


def matern_general(d, sill: float, rng: float, kappa: float) -> np.ndarray:
    """
    Bessel form of the Matern covariance, valid for d > 0:
      sill * 2^(1-kappa) / Gamma(kappa) * u^kappa * K_kappa(u),  u = sqrt(2 kappa) d / range

    Evaluated in log space. Correlation is capped at 1; distances so small that
    K_kappa still overflows take the d -> 0 limit, the sill.
    """
    u = math.sqrt(2.0 * kappa) * np.asarray(d, dtype=float) / rng
    with np.errstate(divide="ignore", over="ignore", invalid="ignore", under="ignore"):
        log_corr = (1.0 - kappa) * math.log(2.0) - gammaln(kappa) + kappa * np.log(u) + _log_kv(kappa, u)
    log_corr = np.where(np.isnan(log_corr) | (log_corr > 0.0), 0.0, log_corr)
    return sill * np.exp(log_corr)


def matern_covariance(d, params: CovarianceParameters) -> np.ndarray:
    """
    Matern covariance k(d) for an array of non-negative distances.

    k(0) = sill (nugget is added by the caller on the observation diagonal).
    smoothness == 0.5 uses the exponential closed form sill * exp(-d / range).
    """
    validate_parameters(params)

    d = np.asarray(d, dtype=float)
    flat = d.reshape(-1)
    out = np.full(flat.shape, float(params.sill))
    pos = flat > 0

    if np.any(pos):
        if params.smoothness == 0.5:
            out[pos] = params.sill * np.exp(-flat[pos] / params.range)
        else:
            out[pos] = matern_general(flat[pos], params.sill, params.range, params.smoothness)
    return out.reshape(d.shape)
