from abc import ABC, abstractmethod
from typing import Any, Tuple

import numpy as np

from ..utils.numeric import as_real_array, scalar


class BaseKernel(ABC):
    """
    Base class for univariate kernels.

    Kernels are stateless: two instances of the same class are interchangeable
    and may be shared freely between threads. Bounded kernels have support
    exactly [-1, 1]; the closed form is still evaluated at |u| == 1.
    """

    __slots__ = ()

    name: str = ""
    bounded: bool = False

    @abstractmethod
    def profile(self, u: np.ndarray) -> np.ndarray:
        """Closed-form kernel value, evaluated in the element type of u."""
        ...

    def weight(self, u: Any) -> Any:
        """Computes the kernel weight for a given scaled distance u."""
        arr = as_real_array(u)
        w = np.asarray(self.profile(arr))
        if self.bounded:
            w = np.where(np.abs(arr) <= 1, w, scalar(arr, 0))
        if w.dtype != arr.dtype:
            w = w.astype(arr.dtype)
        return w[()] if w.ndim == 0 else w

    def __call__(self, u: Any) -> Any:
        return self.weight(u)

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class BaseLocalEngine(ABC):
    """Base class for local polynomial regression engines."""

    @abstractmethod
    def fit(
        self,
        tpoints: np.ndarray,
        data: np.ndarray,
        query_times: np.ndarray,
        h: Any,
        kernel: BaseKernel,
    ) -> Tuple[np.ndarray, np.ndarray]:
        """
        Fits the local model at every query time.

        `data` is (d, n), `tpoints` (n,) and `query_times` (m,), all in the same
        element type. Returns the (d, m) arrays (derivative, smoothed).
        """
        ...
