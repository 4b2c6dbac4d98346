from .errors import (
    EmptyInput,
    InvalidParameter,
    KrigingError,
    NegativeMSPEWarning,
    ShapeMismatch,
    SingularCovariance,
)
from .model import CovarianceParameters, KrigingResult, Location, Observation, observations_from_arrays
from .matern import matern_covariance
from .predict import kriging_predict, predict, predict_many
