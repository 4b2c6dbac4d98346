"""Exceptions raised by the simple kriging engine."""

import numpy as np


class KrigingError(Exception):
    """Base class for every failure raised by src.kriging"""
    pass


class InvalidParameter(KrigingError, ValueError):
    """Raised for non-positive sill/range/smoothness, negative nugget or non-finite inputs"""
    pass


class EmptyInput(KrigingError, ValueError):
    """Raised when no observations are supplied"""
    pass


class ShapeMismatch(KrigingError, ValueError):
    """Raised when locations and observed values are not index-aligned"""
    pass


class SingularCovariance(KrigingError, np.linalg.LinAlgError):
    """Raised when the observation covariance matrix cannot be factorised"""
    pass


class NegativeMSPEWarning(RuntimeWarning):
    """Issued when the computed MSPE is negative beyond rounding tolerance"""
    pass
