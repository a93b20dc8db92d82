"""
Kernel weighting functions.

Every kernel maps a scaled distance u = (t_sample - t_query) / h to a weight.
The arithmetic follows the element type of u, so extended or arbitrary
precision input is never downcast.
"""
from typing import Dict, Tuple, Type

import numpy as np

from ..utils import numeric as nm
from .np_base import BaseKernel


class EpanechnikovKernel(BaseKernel):
    """
    Epanechnikov kernel: K(u) = 0.75 * (1 - u^2) for |u| <= 1.
    This kernel is optimal in a statistical sense (minimizes AMISE).
    """

    __slots__ = ()
    name = "epanechnikov"
    bounded = True

    def profile(self, u: np.ndarray) -> np.ndarray:
        return nm.scalar(u, 3, 4) * (1 - u * u)


class UniformKernel(BaseKernel):
    """Uniform (boxcar) kernel: K(u) = 1/2 for |u| <= 1."""

    __slots__ = ()
    name = "uniform"
    bounded = True

    def profile(self, u: np.ndarray) -> np.ndarray:
        return np.full(u.shape, nm.scalar(u, 1, 2), dtype=u.dtype)


class TriangularKernel(BaseKernel):
    """Triangular kernel: K(u) = 1 - |u| for |u| <= 1."""

    __slots__ = ()
    name = "triangular"
    bounded = True

    def profile(self, u: np.ndarray) -> np.ndarray:
        return 1 - np.abs(u)


class QuarticKernel(BaseKernel):
    """Quartic (biweight) kernel: K(u) = 15/16 * (1 - u^2)^2 for |u| <= 1."""

    __slots__ = ()
    name = "quartic"
    bounded = True

    def profile(self, u: np.ndarray) -> np.ndarray:
        return nm.scalar(u, 15, 16) * (1 - u * u) ** 2


class TriweightKernel(BaseKernel):
    """Triweight kernel: K(u) = 35/32 * (1 - u^2)^3 for |u| <= 1."""

    __slots__ = ()
    name = "triweight"
    bounded = True

    def profile(self, u: np.ndarray) -> np.ndarray:
        return nm.scalar(u, 35, 32) * (1 - u * u) ** 3


class TricubeKernel(BaseKernel):
    """Tricube kernel: K(u) = 70/81 * (1 - |u|^3)^3 for |u| <= 1."""

    __slots__ = ()
    name = "tricube"
    bounded = True

    def profile(self, u: np.ndarray) -> np.ndarray:
        return nm.scalar(u, 70, 81) * (1 - np.abs(u) ** 3) ** 3


class CosineKernel(BaseKernel):
    """Cosine kernel: K(u) = pi/4 * cos(pi * u / 2) for |u| <= 1."""

    __slots__ = ()
    name = "cosine"
    bounded = True

    def profile(self, u: np.ndarray) -> np.ndarray:
        pi = nm.pi(u)
        return pi / 4 * nm.cos(pi / 2 * u)


class GaussianKernel(BaseKernel):
    """Gaussian kernel: K(u) = (1/sqrt(2*pi)) * exp(-u^2 / 2)."""

    __slots__ = ()
    name = "gaussian"

    def profile(self, u: np.ndarray) -> np.ndarray:
        norm = 1 / nm.sqrt(2 * nm.pi(u))
        return norm * nm.exp(-(u * u) / 2)


class LogisticKernel(BaseKernel):
    """Logistic kernel: K(u) = 1 / (exp(u) + 2 + exp(-u))."""

    __slots__ = ()
    name = "logistic"

    def profile(self, u: np.ndarray) -> np.ndarray:
        # exp(-|u|) / (1 + exp(-|u|))^2, the same function without overflow
        e = nm.exp(-np.abs(u))
        return e / (1 + e) ** 2


class SigmoidKernel(BaseKernel):
    """Sigmoid kernel: K(u) = 2 / (pi * (exp(u) + exp(-u)))."""

    __slots__ = ()
    name = "sigmoid"

    def profile(self, u: np.ndarray) -> np.ndarray:
        e = nm.exp(-np.abs(u))
        return 2 / nm.pi(u) * e / (1 + e * e)


class SilvermanKernel(BaseKernel):
    """
    Silverman kernel: K(u) = 1/2 * exp(-|u|/sqrt(2)) * sin(|u|/sqrt(2) + pi/4).

    A fourth-order kernel: its second moment vanishes and it takes negative
    values in the tails.
    """

    __slots__ = ()
    name = "silverman"

    def profile(self, u: np.ndarray) -> np.ndarray:
        a = np.abs(u) / nm.sqrt(nm.scalar(u, 2))
        return nm.exp(-a) * nm.sin(a + nm.pi(u) / 4) / 2


BOUNDED_KERNELS: Tuple[Type[BaseKernel], ...] = (
    EpanechnikovKernel,
    UniformKernel,
    TriangularKernel,
    QuarticKernel,
    TriweightKernel,
    TricubeKernel,
    CosineKernel,
)

UNBOUNDED_KERNELS: Tuple[Type[BaseKernel], ...] = (
    GaussianKernel,
    LogisticKernel,
    SigmoidKernel,
    SilvermanKernel,
)

KERNELS: Dict[str, Type[BaseKernel]] = {k.name: k for k in BOUNDED_KERNELS + UNBOUNDED_KERNELS}


def get_kernel(kernel: "str | BaseKernel | Type[BaseKernel]") -> BaseKernel:
    """Resolve a kernel instance, kernel class or registry name to an instance."""
    if isinstance(kernel, BaseKernel):
        return kernel
    if isinstance(kernel, type) and issubclass(kernel, BaseKernel):
        return kernel()
    if isinstance(kernel, str):
        key = kernel.strip().lower()
        if key.endswith("kernel"):
            key = key[: -len("kernel")]
        if key not in KERNELS:
            raise ValueError(f"Unknown kernel '{kernel}'. Available: {sorted(KERNELS)}")
        return KERNELS[key]()
    raise TypeError(f"Expected a kernel name or BaseKernel, got {type(kernel).__name__}.")
