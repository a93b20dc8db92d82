"""
Collocation through an externally supplied interpolation method.

Meant for (nearly) noise-free data: the interpolant passes through every
sample and its analytic derivative is used as the derivative estimate. The
interpolation itself is delegated entirely; this module only loops over
channels and assembles the outputs.
"""
import logging
from functools import partial
from typing import Any, Callable, Dict, List, Tuple

import numpy as np
from scipy import interpolate

from ..errors import InterpolationError
from ..utils.numeric import as_real_array, cast_like
from .base_model import BaseCollocator

logger = logging.getLogger(__name__)

INTERPOLATION_METHODS: Dict[str, Callable[..., Any]] = {
    "linear": partial(interpolate.make_interp_spline, k=1),
    "quadratic": partial(interpolate.make_interp_spline, k=2),
    "cubic": interpolate.CubicSpline,
    "akima": interpolate.Akima1DInterpolator,
    "pchip": interpolate.PchipInterpolator,
}


def resolve_interpolation_method(method: "str | Callable[..., Any]") -> Callable[..., Any]:
    """
    Accept either a constructor ``method(xs, ys, *args)`` or the name of one of
    the scipy constructors in INTERPOLATION_METHODS.
    """
    if isinstance(method, str):
        key = method.strip().lower()
        if key not in INTERPOLATION_METHODS:
            raise ValueError(
                f"Unknown interpolation method '{method}'. Available: {sorted(INTERPOLATION_METHODS)}"
            )
        return INTERPOLATION_METHODS[key]
    if not callable(method):
        raise TypeError(f"Interpolation method must be callable or a name, got {type(method).__name__}.")
    return method


class InterpolationCollocator(BaseCollocator):
    """
    Builds one interpolant per channel over (tpoints, channel) and evaluates it
    and its derivative at the query times.

    The interpolant must be callable on an array of times and expose a
    ``derivative()`` method returning another callable (the scipy convention).
    """

    def __init__(self, method: "str | Callable[..., Any]", *args: Any):
        super().__init__()
        self.method = method
        self.args = args
        self._constructor = resolve_interpolation_method(method)
        self.interpolants_: List[Any] = []

    def clone(self) -> "InterpolationCollocator":
        return self.__class__(self.method, *self.args)

    def fit(self, data: Any, tpoints: Any) -> "InterpolationCollocator":
        super().fit(data, tpoints)
        samples = self.samples
        self.interpolants_ = []
        for channel in range(samples.n_channels):
            try:
                interpolant = self._constructor(samples.tpoints, samples.data[channel], *self.args)
            except Exception as exc:
                raise InterpolationError(channel, "construction", exc) from exc
            self.interpolants_.append(interpolant)
        logger.debug("Built %d interpolant(s) with %r.", len(self.interpolants_), self.method)
        return self

    def predict(self, query_times: Any = None) -> Tuple[np.ndarray, np.ndarray]:
        if not self.is_fitted:
            raise RuntimeError("InterpolationCollocator must be fitted before calling predict().")

        samples = self.samples
        query = samples.query_grid(query_times)
        shape = (samples.n_channels, query.shape[0])
        smoothed = np.empty(shape, dtype=samples.dtype)
        derivative = np.empty(shape, dtype=samples.dtype)

        for channel, interpolant in enumerate(self.interpolants_):
            try:
                values = np.asarray(interpolant(query))
            except Exception as exc:
                raise InterpolationError(channel, "evaluation", exc) from exc
            try:
                slopes = np.asarray(interpolant.derivative()(query))
            except Exception as exc:
                raise InterpolationError(channel, "derivative evaluation", exc) from exc
            # scipy evaluates in float64; hand back the data's element type
            smoothed[channel, :] = cast_like(as_real_array(values), samples.data)
            derivative[channel, :] = cast_like(as_real_array(slopes), samples.data)

        return samples.shape_result(derivative, smoothed)


__all__ = ["INTERPOLATION_METHODS", "InterpolationCollocator", "resolve_interpolation_method"]
