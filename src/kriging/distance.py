from __future__ import annotations

from typing import Tuple

import numpy as np
from scipy.spatial.distance import pdist, squareform


def distance_matrix(coords: np.ndarray) -> np.ndarray:
    """
    Pairwise Euclidean distances among m ordered locations -> (m, m).

    pdist evaluates each pair once and squareform mirrors it, so the result is
    exactly symmetric with an exact zero diagonal. Repeated locations give 0.
    """
    coords = np.asarray(coords, dtype=float).reshape(-1, 2)
    if len(coords) == 1:
        return np.zeros((1, 1), dtype=float)
    return squareform(pdist(coords, metric="euclidean"))


def split_distances(dist: np.ndarray, n_obs: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Split the combined (n+1, n+1) matrix built over [observations..., target]
    into the observation block (n, n) and the target column (n,).
    """
    return dist[:n_obs, :n_obs], dist[:n_obs, n_obs]
