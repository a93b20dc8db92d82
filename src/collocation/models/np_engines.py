import logging
from typing import Any, List, Optional, Sequence, Tuple

import numpy as np
import torch
from joblib import Parallel, delayed
from tqdm import tqdm

from ..config import settings
from ..errors import SingularRegressionError
from ..utils.numeric import is_arbitrary_precision, machine_epsilon
from .np_base import BaseKernel, BaseLocalEngine

logger = logging.getLogger(__name__)

_TORCH_DTYPES = (np.float32, np.float64)


def _weighted_powers(w, u, max_power: int) -> List[Any]:
    """[w, w*u, w*u^2, ..., w*u^max_power]"""
    terms = [w]
    for _ in range(max_power):
        terms.append(terms[-1] * u)
    return terms


def _linear_det(s: Sequence[Any]) -> Any:
    return s[0] * s[2] - s[1] * s[1]


def _solve_linear(s: Sequence[Any], r: Sequence[Any], det: Any) -> Tuple[Any, Any]:
    """Intercept and slope of [[s0, s1], [s1, s2]] b = [r0, r1]."""
    intercept = (s[2] * r[0] - s[1] * r[1]) / det
    slope = (s[0] * r[1] - s[1] * r[0]) / det
    return intercept, slope


def _quadratic_cofactors(s: Sequence[Any]) -> Tuple[Any, ...]:
    m00, m01, m02, m11, m12, m22 = s[0], s[1], s[2], s[2], s[3], s[4]
    c00 = m11 * m22 - m12 * m12
    c01 = m02 * m12 - m01 * m22
    c02 = m01 * m12 - m11 * m02
    c11 = m00 * m22 - m02 * m02
    c12 = m01 * m02 - m00 * m12
    det = m00 * c00 + m01 * c01 + m02 * c02
    return det, c01, c11, c12


class LocalPolynomialEngine(BaseLocalEngine):
    """
    Local polynomial regression engine for collocation.

    At every query time t* the samples are weighted with K((t - t*) / h) and a
    local linear model is fitted by weighted least squares. The intercept is
    the smoothed value and the slope the derivative. With
    ``derivative_degree=2`` the derivative is taken from a local quadratic fit
    instead, while the value still comes from the local linear fit.

    The normal equations only depend on t*, so they are formed and inverted
    once per query point and applied to every channel at the same time.

    float32 / float64 data is solved as one batch with torch when
    ``vectorized`` is true. Other element types (longdouble, mpmath objects)
    go through an element-type generic path that never leaves the input's
    precision.
    """

    def __init__(
        self,
        derivative_degree: int = 1,
        vectorized: Optional[bool] = None,
        rtol: Optional[float] = None,
        n_jobs: Optional[int] = None,
        progress: bool = False,
    ):
        if derivative_degree not in [1, 2]:
            raise ValueError("derivative_degree must be 1 or 2.")
        if rtol is not None and not rtol >= 0:
            raise ValueError("rtol must be non-negative.")
        self.derivative_degree = derivative_degree
        self.vectorized = settings.vectorized if vectorized is None else vectorized
        self.rtol = rtol
        self.n_jobs = settings.n_jobs if n_jobs is None else n_jobs
        self.progress = progress

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(derivative_degree={self.derivative_degree}, "
            f"vectorized={self.vectorized}, rtol={self.rtol}, n_jobs={self.n_jobs})"
        )

    def _resolve_rtol(self, like: np.ndarray) -> Any:
        rtol = self.rtol if self.rtol is not None else settings.singular_rtol
        if rtol is None:
            return machine_epsilon(like) ** 0.5
        return rtol

    def fit(
        self,
        tpoints: np.ndarray,
        data: np.ndarray,
        query_times: np.ndarray,
        h: Any,
        kernel: BaseKernel,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Fits the local model at each query time and returns (derivative, smoothed),
        both of shape (d, m) and in the element type of `data`.
        """
        d = data.shape[0]
        m = query_times.shape[0]
        if m == 0:
            empty = np.empty((d, 0), dtype=data.dtype)
            return empty, empty.copy()

        use_torch = self.vectorized and data.dtype.type in _TORCH_DTYPES
        if self.vectorized and not use_torch:
            logger.debug("Element type %s is not supported by torch, using the element-wise path.", data.dtype)
        logger.debug(
            "Local regression: %d query points, %d channels, %d samples, h=%s, kernel=%r, path=%s",
            m, d, data.shape[1], h, kernel, "torch" if use_torch else "element-wise",
        )

        if use_torch:
            derivative, smoothed = self._fit_batched(tpoints, data, query_times, h, kernel)
        else:
            derivative, smoothed = self._fit_pointwise(tpoints, data, query_times, h, kernel)

        if not is_arbitrary_precision(data):
            derivative = derivative.astype(data.dtype, copy=False)
            smoothed = smoothed.astype(data.dtype, copy=False)
        return derivative, smoothed

    # ------------------------------------------------------------------
    # Element-wise path (any element type)
    # ------------------------------------------------------------------

    def _fit_pointwise(self, tpoints, data, query_times, h, kernel):
        eps = machine_epsilon(data)
        rtol = self._resolve_rtol(data)
        iterator = tqdm(query_times, desc="Local regression", disable=not self.progress)

        if self.n_jobs == 1:
            results = [self._fit_point(t, tpoints, data, h, kernel, eps, rtol) for t in iterator]
        else:
            results = Parallel(n_jobs=self.n_jobs, prefer="threads")(
                delayed(self._fit_point)(t, tpoints, data, h, kernel, eps, rtol) for t in iterator
            )

        derivative = np.stack([r[0] for r in results], axis=1)
        smoothed = np.stack([r[1] for r in results], axis=1)
        return derivative, smoothed

    def _check_system(self, t_star, h, det, abs_moments, w_abs, eps, rtol, degree: int) -> None:
        n_coef = degree + 1
        w_max = np.max(w_abs)
        n_eff = int(np.count_nonzero(w_abs > eps * w_max)) if w_max > 0 else 0
        if n_eff < n_coef:
            raise SingularRegressionError(
                t_star, h, f"{n_eff} sample(s) with non-negligible weight, at least {n_coef} needed"
            )
        # Hadamard ratio det(M) / prod(diag(M)), taken against |w| so that
        # kernels with negative lobes are measured on the same scale.
        reference = abs_moments[0]
        for k in range(1, n_coef):
            reference = reference * abs_moments[2 * k]
        if not abs(det) > rtol * reference:
            raise SingularRegressionError(t_star, h, "ill-conditioned weighted design")

    def _fit_point(self, t_star, tpoints, data, h, kernel, eps, rtol) -> Tuple[np.ndarray, np.ndarray]:
        degree = self.derivative_degree
        u = (tpoints - t_star) / h
        w = np.asarray(kernel.weight(u))
        w_abs = np.abs(w)

        terms = _weighted_powers(w, u, 2 * degree)
        s = [np.sum(term) for term in terms]
        r = [np.dot(data, term) for term in terms[: degree + 1]]
        abs_moments = [np.sum(term) for term in _weighted_powers(w_abs, u, 2 * degree)]

        det = _linear_det(s)
        self._check_system(t_star, h, det, abs_moments, w_abs, eps, rtol, degree=1)
        value, slope = _solve_linear(s, r, det)

        if degree == 2:
            det, c01, c11, c12 = _quadratic_cofactors(s)
            self._check_system(t_star, h, det, abs_moments, w_abs, eps, rtol, degree=2)
            slope = (c01 * r[0] + c11 * r[1] + c12 * r[2]) / det

        # u is t / h, so the fitted slope is in units of h
        return np.asarray(slope / h), np.asarray(value)

    # ------------------------------------------------------------------
    # Batched torch path (float32 / float64)
    # ------------------------------------------------------------------

    def _fit_batched(self, tpoints, data, query_times, h, kernel):
        degree = self.derivative_degree
        rtol = float(self._resolve_rtol(data))

        # u has shape (m, n): one row of scaled distances per query point
        u_np = (tpoints[np.newaxis, :] - query_times[:, np.newaxis]) / h
        w_np = np.asarray(kernel.weight(u_np))

        U = torch.from_numpy(np.ascontiguousarray(u_np))
        W = torch.from_numpy(np.ascontiguousarray(w_np))
        Y = torch.tensor(data)
        eps = torch.finfo(U.dtype).eps

        W_abs = W.abs()
        w_max = W_abs.amax(dim=1, keepdim=True)
        n_eff = (W_abs > eps * w_max).sum(dim=1)

        terms = _weighted_powers(W, U, 2 * degree)
        moments = torch.stack([t.sum(dim=1) for t in terms], dim=1)  # (m, 2*degree+1)
        abs_moments = torch.stack([t.sum(dim=1) for t in _weighted_powers(W_abs, U, 2 * degree)], dim=1)
        projections = torch.stack([t @ Y.T for t in terms[: degree + 1]], dim=1)  # (m, degree+1, d)

        beta = self._solve_batch(moments, abs_moments, projections, n_eff, 1, rtol, query_times, h)
        smoothed = beta[:, 0, :]
        slope = beta[:, 1, :]
        if degree == 2:
            beta = self._solve_batch(moments, abs_moments, projections, n_eff, 2, rtol, query_times, h)
            slope = beta[:, 1, :]

        derivative = (slope / float(h)).T.contiguous().numpy()
        return derivative, smoothed.T.contiguous().numpy()

    def _solve_batch(self, moments, abs_moments, projections, n_eff, degree, rtol, query_times, h):
        n_coef = degree + 1
        idx = torch.arange(n_coef)
        M = moments[:, idx[:, None] + idx[None, :]]  # (m, n_coef, n_coef) Hankel systems
        reference = abs_moments[:, 2 * idx].prod(dim=1)
        det = torch.linalg.det(M)

        too_few = n_eff < n_coef
        ill_conditioned = ~(det.abs() > rtol * reference)
        bad = too_few | ill_conditioned
        if torch.any(bad):
            i = int(torch.nonzero(bad)[0, 0])
            if bool(too_few[i]):
                reason = f"{int(n_eff[i])} sample(s) with non-negligible weight, at least {n_coef} needed"
            else:
                reason = "ill-conditioned weighted design"
            raise SingularRegressionError(query_times[i], h, reason)

        return torch.linalg.solve(M, projections[:, :n_coef, :])


__all__ = ["LocalPolynomialEngine"]
