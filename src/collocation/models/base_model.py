from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

import numpy as np

from .data_types import SampleSet


# ============================================================
# Abstract base collocator
# ============================================================

class BaseCollocator(ABC):
    """
    Abstract base class for all collocation estimators.
    The interface is intentionally minimal: fit on samples, predict at query times.
    """

    def __init__(self) -> None:
        self.hyperparams: Dict[str, Any] = {}
        self._is_fitted: bool = False
        self._samples: Optional[SampleSet] = None

    def fit(self, data: Any, tpoints: Any) -> "BaseCollocator":
        """Validate and store the sample set; subclasses extend this."""
        self._samples = SampleSet.from_arrays(data, tpoints)
        self._is_fitted = True
        return self

    @abstractmethod
    def predict(self, query_times: Any = None) -> Tuple[np.ndarray, np.ndarray]:
        """Return (derivative, smoothed) at `query_times` (default: the sample times)."""
        ...

    @property
    def is_fitted(self) -> bool:
        return self._is_fitted

    @property
    def samples(self) -> SampleSet:
        if self._samples is None:
            raise RuntimeError(f"{type(self).__name__} must be fitted before accessing its samples.")
        return self._samples

    def clone(self) -> "BaseCollocator":
        """Return a fresh, unfitted copy with the same hyperparameters."""
        return self.__class__(**self.hyperparams)
