from __future__ import annotations

import math
from typing import List, Sequence, Tuple

import numpy as np

from .covariance import build_covariances
from .distance import distance_matrix, split_distances
from .errors import EmptyInput, InvalidParameter
from .matern import validate_parameters
from .model import (
  CovarianceParameters,
  KrigingResult,
  Location,
  Observation,
  locations_to_array,
  observations_from_arrays,
)
from .solver import simple_kriging_solve


def _check_inputs(observations: Sequence[Observation], target: Location, mean: float) -> None:
  if len(observations) == 0:
    raise EmptyInput("at least one observation is required")
  if not math.isfinite(mean):
    raise InvalidParameter(f"mean must be finite. Got {mean}")
  for i, ob in enumerate(observations):
    if not (math.isfinite(ob.location.x) and math.isfinite(ob.location.y) and math.isfinite(ob.value)):
      raise InvalidParameter(f"observation {i} is not finite: {ob}")
  if not (math.isfinite(target.x) and math.isfinite(target.y)):
    raise InvalidParameter(f"target is not finite: {target}")


def predict(
  observations: Sequence[Observation],
  target: Location,
  mean: float,
  params: CovarianceParameters,
) -> KrigingResult:
  """
  Simple kriging (known constant mean) prediction at one target location.
  Every call builds and solves its own system; nothing is cached.
  """
  _check_inputs(observations, target, mean)
  validate_parameters(params)

  n = len(observations)
  coords = locations_to_array([ob.location for ob in observations] + [target])
  z = np.array([ob.value for ob in observations], dtype=float)

  obs_dist, target_dist = split_distances(distance_matrix(coords), n)
  sigma, c = build_covariances(obs_dist, target_dist, params)

  prediction, mspe, _ = simple_kriging_solve(sigma, c, z, mean, target_variance=params.sill)
  return KrigingResult(prediction=prediction, mspe=mspe)


def predict_many(
  observations: Sequence[Observation],
  targets: Sequence[Location],
  mean: float,
  params: CovarianceParameters,
) -> List[KrigingResult]:
  """
  One independent predict() per target, in target order.
  """
  return [predict(observations, t, mean, params) for t in targets]


def kriging_predict(
  train_coords: np.ndarray,
  train_values: np.ndarray,
  query_coords: np.ndarray,
  params: CovarianceParameters,
  mean: float = 0.0,
) -> Tuple[np.ndarray, np.ndarray]:
  """
  Simple kriging (2D) prediction for query points.
  Returns (preds, mspe), both shape (M,).
  """
  observations = observations_from_arrays(train_coords, train_values)
  query_coords = np.asarray(query_coords, dtype=float).reshape(-1, 2)
  targets = [Location(float(x), float(y)) for x, y in query_coords]

  results = predict_many(observations, targets, mean, params)
  preds = np.array([r.prediction for r in results], dtype=float)
  mspe = np.array([r.mspe for r in results], dtype=float)
  return preds, mspe
