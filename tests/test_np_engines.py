import os
import sys

import numpy as np
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from collocation.errors import SingularRegressionError
from collocation.models.np_engines import LocalPolynomialEngine
from collocation.models.np_kernels import (
    BOUNDED_KERNELS,
    EpanechnikovKernel,
    GaussianKernel,
    LogisticKernel,
    SigmoidKernel,
    TriangularKernel,
)

NONNEGATIVE_KERNELS = BOUNDED_KERNELS + (GaussianKernel, LogisticKernel, SigmoidKernel)


def test_local_polynomial_engine_recovers_noisy_linear_function():
    rng = np.random.default_rng(123)
    t = np.sort(rng.uniform(-3, 3, size=200))
    y = (3.0 * t + 1.5 + rng.normal(scale=0.05, size=t.size)).reshape(1, -1)
    query = np.linspace(-2.5, 2.5, 10)

    engine = LocalPolynomialEngine()
    derivative, smoothed = engine.fit(t, y, query, 1.0, GaussianKernel())

    assert smoothed.shape == (1, 10)
    assert np.mean(np.abs(smoothed[0] - (3.0 * query + 1.5))) < 0.1
    assert np.mean(np.abs(derivative[0] - 3.0)) < 0.1


@pytest.mark.parametrize("vectorized", [True, False])
@pytest.mark.parametrize("kernel_class", NONNEGATIVE_KERNELS)
def test_linear_data_is_reproduced_exactly(kernel_class, vectorized):
    t = np.linspace(0.0, 1.0, 21)
    data = np.vstack([2.0 * t + 1.0, -t + 3.0])

    engine = LocalPolynomialEngine(vectorized=vectorized)
    derivative, smoothed = engine.fit(t, data, t, 0.3, kernel_class())

    np.testing.assert_allclose(smoothed, data, atol=1e-10)
    np.testing.assert_allclose(derivative[0], 2.0, atol=1e-8)
    np.testing.assert_allclose(derivative[1], -1.0, atol=1e-8)


@pytest.mark.parametrize("degree", [1, 2])
def test_batched_and_pointwise_paths_agree(degree):
    rng = np.random.default_rng(7)
    t = np.cumsum(rng.uniform(0.05, 0.15, size=60))
    data = rng.normal(size=(3, t.size))
    query = np.linspace(t[0], t[-1], 25)
    kernel = EpanechnikovKernel()

    batched = LocalPolynomialEngine(derivative_degree=degree, vectorized=True)
    pointwise = LocalPolynomialEngine(derivative_degree=degree, vectorized=False)
    d_b, s_b = batched.fit(t, data, query, 0.6, kernel)
    d_p, s_p = pointwise.fit(t, data, query, 0.6, kernel)

    np.testing.assert_allclose(s_b, s_p, rtol=1e-9, atol=1e-9)
    np.testing.assert_allclose(d_b, d_p, rtol=1e-8, atol=1e-8)


@pytest.mark.parametrize("vectorized", [True, False])
def test_quadratic_derivative_degree_recovers_parabola_slope(vectorized):
    t = np.linspace(-1.0, 1.0, 41)
    data = (t**2).reshape(1, -1)

    engine = LocalPolynomialEngine(derivative_degree=2, vectorized=vectorized)
    derivative, _ = engine.fit(t, data, t, 0.3, TriangularKernel())

    np.testing.assert_allclose(derivative[0], 2 * t, atol=1e-9)


def test_linear_fit_slope_is_biased_at_boundary_of_parabola():
    t = np.linspace(-1.0, 1.0, 41)
    data = (t**2).reshape(1, -1)

    derivative, _ = LocalPolynomialEngine(derivative_degree=1).fit(t, data, t, 0.3, TriangularKernel())

    # symmetric windows in the interior give the exact slope, one-sided windows do not
    np.testing.assert_allclose(derivative[0, 10:31], 2 * t[10:31], atol=1e-9)
    assert abs(derivative[0, 0] - 2 * t[0]) > 1e-3


@pytest.mark.parametrize("vectorized", [True, False])
def test_isolated_samples_raise_singular_regression(vectorized):
    t = np.array([0.0, 1.0, 2.0, 3.0])
    data = np.array([[1.0, 2.0, 3.0, 4.0]])

    engine = LocalPolynomialEngine(vectorized=vectorized)
    with pytest.raises(SingularRegressionError) as excinfo:
        engine.fit(t, data, t, 0.5, TriangularKernel())

    assert excinfo.value.query_time == 0.0
    assert excinfo.value.bandwidth == 0.5
    assert isinstance(excinfo.value, np.linalg.LinAlgError)
    assert "higher bandwidth" in str(excinfo.value)


@pytest.mark.parametrize("vectorized", [True, False])
def test_query_outside_kernel_support_raises(vectorized):
    t = np.linspace(0.0, 1.0, 11)
    data = t.reshape(1, -1)

    engine = LocalPolynomialEngine(vectorized=vectorized)
    with pytest.raises(SingularRegressionError):
        engine.fit(t, data, np.array([0.5, 5.0]), 0.3, EpanechnikovKernel())


def test_quadratic_fit_needs_three_weighted_samples():
    t = np.array([0.0, 1.0, 2.0, 3.0])
    data = np.array([[0.0, 1.0, 4.0, 9.0]])
    query = np.array([0.0])

    # at t=0 only two samples fall inside the window
    derivative, smoothed = LocalPolynomialEngine(derivative_degree=1).fit(t, data, query, 1.5, TriangularKernel())
    assert derivative.shape == (1, 1)
    with pytest.raises(SingularRegressionError):
        LocalPolynomialEngine(derivative_degree=2).fit(t, data, query, 1.5, TriangularKernel())


def test_threaded_pointwise_matches_serial():
    rng = np.random.default_rng(0)
    t = np.linspace(0.0, 5.0, 80)
    data = np.vstack([np.sin(t), np.cos(t)]) + rng.normal(scale=0.01, size=(2, t.size))

    serial = LocalPolynomialEngine(vectorized=False, n_jobs=1)
    threaded = LocalPolynomialEngine(vectorized=False, n_jobs=2, progress=True)
    d_s, s_s = serial.fit(t, data, t, 0.4, GaussianKernel())
    d_t, s_t = threaded.fit(t, data, t, 0.4, GaussianKernel())

    np.testing.assert_array_equal(s_s, s_t)
    np.testing.assert_array_equal(d_s, d_t)


def test_empty_query_grid_returns_empty_results():
    t = np.linspace(0.0, 1.0, 5)
    data = np.ones((2, 5), dtype=np.float32)
    derivative, smoothed = LocalPolynomialEngine().fit(t.astype(np.float32), data, np.array([], dtype=np.float32), np.float32(0.5), TriangularKernel())
    assert derivative.shape == (2, 0)
    assert smoothed.shape == (2, 0)
    assert smoothed.dtype == np.float32


@pytest.mark.parametrize("vectorized", [True, False])
def test_float32_stays_float32(vectorized):
    t = np.linspace(0.0, 1.0, 11, dtype=np.float32)
    data = np.vstack([t, 2 * t]).astype(np.float32)
    derivative, smoothed = LocalPolynomialEngine(vectorized=vectorized).fit(
        t, data, t, np.float32(0.25), EpanechnikovKernel()
    )
    assert derivative.dtype == np.float32
    assert smoothed.dtype == np.float32
    np.testing.assert_allclose(derivative[1], 2.0, rtol=1e-3)


def test_invalid_engine_arguments():
    with pytest.raises(ValueError):
        LocalPolynomialEngine(derivative_degree=3)
    with pytest.raises(ValueError):
        LocalPolynomialEngine(rtol=-1.0)


def test_strict_rtol_rejects_well_posed_window():
    t = np.linspace(0.0, 1.0, 11)
    data = t.reshape(1, -1)
    with pytest.raises(SingularRegressionError):
        LocalPolynomialEngine(rtol=1.0).fit(t, data, t, 0.3, EpanechnikovKernel())
