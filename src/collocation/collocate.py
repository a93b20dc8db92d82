"""
Functional entry points.

    derivative, smoothed = collocate_data(data, tpoints)
    derivative, smoothed = collocate_data(data, tpoints, TriangularKernel(), 0.5)
    derivative, smoothed = collocate_data(data, tpoints, "gaussian", 0.5, query_times=grid)
    derivative, smoothed = collocate_interpolated(data, tpoints, grid, "cubic")

`data` is (channels, samples) or a single 1-D channel. Results have shape
(channels, len(query_times)), or 1-D for 1-D data, and keep the element type
of `data`.
"""
from typing import Any, Callable, Optional, Tuple

import numpy as np

from .models.interp_collocator import InterpolationCollocator
from .models.np_base import BaseKernel, BaseLocalEngine
from .models.np_collocator import KernelCollocator
from .models.np_engines import LocalPolynomialEngine


def collocate_data(
    data: Any,
    tpoints: Any,
    kernel: "BaseKernel | str | None" = None,
    bandwidth: Any = None,
    *,
    query_times: Any = None,
    local_engine: Optional[BaseLocalEngine] = None,
    derivative_degree: int = 1,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Estimate derivatives and smoothed values by kernel-weighted local regression.

    Args:
        data: Observations, shape (d, n), or a length-n vector.
        tpoints: Strictly increasing sample times, length n.
        kernel: Kernel instance or name; defaults to the configured kernel
            (triangular unless overridden).
        bandwidth: Strictly positive smoothing bandwidth. Selected from
            `tpoints` when omitted.
        query_times: Times to estimate at; defaults to `tpoints`.
        local_engine: Engine to use; a LocalPolynomialEngine is built from
            `derivative_degree` when omitted.
        derivative_degree: 1 for a single local linear fit, 2 to take the
            derivative from a local quadratic fit.

    Returns:
        (derivative, smoothed), each (d, m) in the element type of `data`.

    Raises:
        CapabilityError: `data`, `tpoints` or `query_times` is device-resident.
        ShapeMismatchError: inconsistent shapes or fewer than two samples.
        SingularRegressionError: the bandwidth is too small at some query time.
    """
    if local_engine is None:
        local_engine = LocalPolynomialEngine(derivative_degree=derivative_degree)
    collocator = KernelCollocator(kernel=kernel, local_engine=local_engine, bandwidth=bandwidth)
    return collocator.fit(data, tpoints).predict(query_times)


def collocate_interpolated(
    data: Any,
    tpoints: Any,
    query_times: Any,
    method: "str | Callable[..., Any]",
    *interp_args: Any,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Estimate derivatives and values from exact interpolants of noise-free data.

    `method(tpoints, channel, *interp_args)` builds one interpolant per
    channel; a scipy constructor name such as "linear" or "cubic" is also
    accepted. Failures inside the interpolation method are re-raised as
    InterpolationError naming the channel.
    """
    collocator = InterpolationCollocator(method, *interp_args)
    return collocator.fit(data, tpoints).predict(query_times)


__all__ = ["collocate_data", "collocate_interpolated"]
