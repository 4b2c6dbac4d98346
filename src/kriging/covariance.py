from __future__ import annotations

from typing import Tuple

import numpy as np

from .matern import matern_covariance
from .model import CovarianceParameters


def observation_covariance(obs_dist: np.ndarray, params: CovarianceParameters) -> np.ndarray:
    """
    Sigma_Z (n, n): Matern kernel on every pair, nugget added on the diagonal.
    """
    sigma = matern_covariance(obs_dist, params)
    sigma[np.diag_indices_from(sigma)] += params.nugget
    return sigma


def cross_covariance(target_dist: np.ndarray, params: CovarianceParameters) -> np.ndarray:
    """
    c (n,): kernel between the target and each observation. No nugget, the
    target itself carries no measurement error.
    """
    return matern_covariance(np.asarray(target_dist, dtype=float).reshape(-1), params)


def build_covariances(
    obs_dist: np.ndarray,
    target_dist: np.ndarray,
    params: CovarianceParameters,
) -> Tuple[np.ndarray, np.ndarray]:
    return observation_covariance(obs_dist, params), cross_covariance(target_dist, params)
