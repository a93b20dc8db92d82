import os
import sys

import mpmath
import numpy as np
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from collocation import collocate_data
from collocation.models.np_engines import LocalPolynomialEngine
from collocation.models.np_kernels import BOUNDED_KERNELS, UNBOUNDED_KERNELS, TriangularKernel

ALL_KERNELS = BOUNDED_KERNELS + UNBOUNDED_KERNELS


@pytest.fixture
def mp_samples():
    tpoints = np.array([mpmath.mpf(10) * k / 29 for k in range(30)], dtype=object)
    data = np.array([[mpmath.sin(t) for t in tpoints]], dtype=object)
    return tpoints, data


@pytest.mark.parametrize("kernel_class", ALL_KERNELS)
def test_mpmath_element_type_is_preserved(mp_samples, kernel_class):
    tpoints, data = mp_samples
    u_prime, u = collocate_data(data, tpoints, kernel_class(), mpmath.mpf("0.5"))

    assert u_prime.dtype == object
    assert u.dtype == object
    assert u.shape == (1, 30)
    assert all(isinstance(x, mpmath.mpf) for x in u.ravel())
    assert all(isinstance(x, mpmath.mpf) for x in u_prime.ravel())


def test_mpmath_results_carry_full_working_precision():
    with mpmath.workdps(50):
        third = mpmath.mpf(1) / 3
        tpoints = [k * third for k in range(12)]
        data = [[2 * t + third for t in tpoints]]
        u_prime, u = collocate_data(data, tpoints, TriangularKernel(), mpmath.mpf(1))

        tol = mpmath.mpf(10) ** -45
        for got, t in zip(u[0], tpoints):
            assert abs(got - (2 * t + third)) < tol
        for got in u_prime[0]:
            assert abs(got - 2) < tol


def test_float_bandwidth_with_mpmath_data(mp_samples):
    tpoints, data = mp_samples
    _, u = collocate_data(data, tpoints, "gaussian", 0.5)
    assert all(isinstance(x, mpmath.mpf) for x in u.ravel())


def test_default_bandwidth_with_mpmath_data(mp_samples):
    tpoints, data = mp_samples
    du, u = collocate_data(data, tpoints)
    assert all(isinstance(x, mpmath.mpf) for x in du.ravel())


@pytest.mark.parametrize("kernel_class", ALL_KERNELS)
def test_longdouble_is_preserved(kernel_class):
    tpoints = np.linspace(0.0, 10.0, 30).astype(np.longdouble)
    data = np.sin(tpoints).reshape(1, -1)
    u_prime, u = collocate_data(data, tpoints, kernel_class(), np.longdouble(0.5))

    assert u_prime.dtype == np.longdouble
    assert u.dtype == np.longdouble


@pytest.mark.parametrize("vectorized", [True, False])
def test_float32_is_preserved(vectorized):
    tpoints = np.linspace(0.0, 1.0, 20, dtype=np.float32)
    data = np.vstack([tpoints, tpoints**2])
    u_prime, u = collocate_data(
        data, tpoints, TriangularKernel(), 0.2, local_engine=LocalPolynomialEngine(vectorized=vectorized)
    )
    assert u_prime.dtype == np.float32
    assert u.dtype == np.float32


def test_float32_timestamps_follow_float64_data():
    tpoints = np.linspace(0.0, 1.0, 20, dtype=np.float32)
    data = np.sin(tpoints.astype(np.float64)).reshape(1, -1)
    _, u = collocate_data(data, tpoints, TriangularKernel(), 0.2)
    assert u.dtype == np.float64


def test_integer_data_is_promoted():
    du, u = collocate_data([[0, 2, 4, 6, 8]], [0, 1, 2, 3, 4], TriangularKernel(), 1.5)
    assert u.dtype == np.float64
    np.testing.assert_allclose(du[0], 2.0, atol=1e-12)
