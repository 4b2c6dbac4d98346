from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from .errors import EmptyInput, ShapeMismatch


@dataclass(frozen=True)
class Location:
  x: float
  y: float

  def as_array(self) -> np.ndarray:
    return np.array([self.x, self.y], dtype=float)


@dataclass(frozen=True)
class Observation:
  location: Location
  value: float


@dataclass(frozen=True)
class CovarianceParameters:
  """
  Matern covariance parameters.
  sill: process variance (k(0)), range: decay distance scale,
  smoothness: Matern order (0.5 = exponential), nugget: measurement-error variance.
  Positivity is checked by the kernel, not here.
  """
  sill: float
  range: float
  smoothness: float = 0.5
  nugget: float = 0.0


@dataclass(frozen=True)
class KrigingResult:
  prediction: float
  mspe: float

  @property
  def std(self) -> float:
    return math.sqrt(max(self.mspe, 0.0))


def observations_from_arrays(coords, values) -> List[Observation]:
  """
  Pairs an (N,2) coordinate array with an (N,) value array, preserving order.
  """
  coords = np.asarray(coords, dtype=float)
  values = np.asarray(values, dtype=float).reshape(-1)

  if coords.ndim != 2 or coords.shape[1] != 2:
    raise ShapeMismatch(f"coords must be shape (N,2). Got {coords.shape}")
  if len(coords) != len(values):
    raise ShapeMismatch(f"coords and values length mismatch: {len(coords)} vs {len(values)}")
  if len(values) == 0:
    raise EmptyInput("at least one observation is required")

  return [
    Observation(Location(float(x), float(y)), float(v))
    for (x, y), v in zip(coords, values)
  ]


def locations_to_array(locations: Sequence[Location]) -> np.ndarray:
  return np.array([[p.x, p.y] for p in locations], dtype=float).reshape(-1, 2)
