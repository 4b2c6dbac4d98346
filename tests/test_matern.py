import math

import numpy as np
import pytest
from scipy.special import gamma, kv

from src.kriging.errors import InvalidParameter
from src.kriging.matern import matern_covariance, matern_general, validate_parameters
from src.kriging.model import CovarianceParameters

SMOOTHNESSES = [0.3, 0.5, 1.0, 1.5, 2.5, 4.0, 7.3, 40.0, 120.0]


@pytest.mark.parametrize("kappa", SMOOTHNESSES)
def test_zero_distance_is_sill(kappa):
    p = CovarianceParameters(sill=3.2, range=0.7, smoothness=kappa, nugget=0.4)
    k = matern_covariance(np.array([0.0, 0.0]), p)
    # nugget is never part of the kernel
    assert np.all(k == 3.2)


@pytest.mark.parametrize("kappa", SMOOTHNESSES)
def test_monotone_non_increasing(kappa):
    p = CovarianceParameters(sill=2.0, range=1.3, smoothness=kappa)
    d = np.linspace(0.0, 15.0, 301)
    k = matern_covariance(d, p)
    assert np.all(np.diff(k) <= 1e-12)
    assert np.all(k >= 0)


@pytest.mark.parametrize("kappa", SMOOTHNESSES)
def test_decays_to_zero(kappa):
    p = CovarianceParameters(sill=5.0, range=0.5, smoothness=kappa)
    assert matern_covariance(np.array([1e3]), p)[0] < 1e-8
    assert matern_covariance(np.array([1e6]), p)[0] == pytest.approx(0.0, abs=1e-300)


@pytest.mark.parametrize("kappa", [0.75, 1.5, 2.5, 40.0, 120.0])
@pytest.mark.parametrize("d", [1e-8, 1e-10])
def test_continuous_at_origin(kappa, d):
    p = CovarianceParameters(sill=1.7, range=2.0, smoothness=kappa)
    assert matern_covariance(np.array([d]), p)[0] == pytest.approx(1.7, rel=1e-6)


@pytest.mark.parametrize("kappa", [40.0, 120.0])
def test_large_smoothness_near_origin(kappa):
    p = CovarianceParameters(sill=1.0, range=1.0, smoothness=kappa)
    k = matern_covariance(np.array([0.0, 1e-6, 0.01, 0.1, 0.5]), p)
    assert np.all(np.diff(k) <= 0)
    assert k[1] == pytest.approx(1.0, rel=1e-9)
    assert k[2] == pytest.approx(1.0, rel=1e-3)
    assert np.all(k <= 1.0)


def test_large_smoothness_approaches_gaussian():
    p = CovarianceParameters(sill=1.0, range=1.0, smoothness=120.0)
    d = np.linspace(0.0, 1.5, 31)
    assert np.allclose(matern_covariance(d, p), np.exp(-d ** 2 / 2.0), rtol=0, atol=5e-3)


def test_log_space_matches_direct_bessel():
    kappa, rng = 7.3, 0.9
    d = np.linspace(0.05, 8.0, 120)
    u = math.sqrt(2 * kappa) * d / rng
    direct = 2.0 * 2.0 ** (1 - kappa) / gamma(kappa) * u ** kappa * kv(kappa, u)
    assert np.allclose(matern_general(d, 2.0, rng, kappa), direct, rtol=1e-10, atol=0)


def test_exponential_closed_form():
    p = CovarianceParameters(sill=5.0, range=0.25, smoothness=0.5)
    d = np.array([0.0, 0.1, 0.25, 0.7071, 1.0, 1.4142])
    assert np.allclose(matern_covariance(d, p), 5.0 * np.exp(-d / 0.25), rtol=0, atol=1e-14)


def test_bessel_form_matches_exponential():
    d = np.linspace(0.01, 5.0, 200)
    bessel = matern_general(d, 2.5, 1.0, 0.5)
    closed = 2.5 * np.exp(-d / 1.0)
    assert np.allclose(bessel, closed, rtol=1e-10, atol=0)


def test_matern_three_halves_closed_form():
    # kappa = 1.5: sill * (1 + sqrt(3) d / r) * exp(-sqrt(3) d / r)
    p = CovarianceParameters(sill=1.0, range=0.8, smoothness=1.5)
    d = np.linspace(0.05, 3.0, 50)
    u = math.sqrt(3.0) * d / 0.8
    assert np.allclose(matern_covariance(d, p), (1 + u) * np.exp(-u), rtol=1e-10)


def test_scalar_distance():
    p = CovarianceParameters(sill=2.0, range=1.0)
    assert float(matern_covariance(1.0, p)) == pytest.approx(2.0 * math.exp(-1.0))


class TestValidation:

    @pytest.mark.parametrize(
        "kwargs, match",
        [
            ({"sill": 0.0, "range": 1.0}, "sill"),
            ({"sill": -1.0, "range": 1.0}, "sill"),
            ({"sill": 1.0, "range": 0.0}, "range"),
            ({"sill": 1.0, "range": -2.0}, "range"),
            ({"sill": 1.0, "range": 1.0, "smoothness": 0.0}, "smoothness"),
            ({"sill": 1.0, "range": 1.0, "nugget": -0.1}, "nugget"),
            ({"sill": float("nan"), "range": 1.0}, "sill"),
            ({"sill": 1.0, "range": float("inf")}, "range"),
        ],
    )
    def test_invalid_parameters_raise(self, kwargs, match):
        with pytest.raises(InvalidParameter, match=match):
            validate_parameters(CovarianceParameters(**kwargs))

    def test_kernel_checks_before_evaluating(self):
        with pytest.raises(InvalidParameter):
            matern_covariance(np.array([0.0, 1.0]), CovarianceParameters(sill=1.0, range=-1.0))

    def test_zero_nugget_is_valid(self):
        validate_parameters(CovarianceParameters(sill=1.0, range=1.0, smoothness=0.5, nugget=0.0))

    def test_invalid_parameter_is_value_error(self):
        with pytest.raises(ValueError):
            validate_parameters(CovarianceParameters(sill=1.0, range=1.0, nugget=-1.0))
