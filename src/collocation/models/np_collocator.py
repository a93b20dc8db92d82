import logging
from typing import Any, Optional, Tuple

import numpy as np

from ..config import settings
from ..utils.numeric import as_real_array, cast_like
from .bandwidth import select_bandwidth
from .base_model import BaseCollocator
from .np_base import BaseKernel, BaseLocalEngine
from .np_engines import LocalPolynomialEngine
from .np_kernels import get_kernel

logger = logging.getLogger(__name__)


class KernelCollocator(BaseCollocator):
    """
    Kernel-weighted local regression collocator.

    It is "fitted" by storing the validated samples and fixing the bandwidth
    (selected from the time grid when none is given). Estimates at query
    times are computed on demand by the local engine.
    """

    def __init__(
        self,
        kernel: "BaseKernel | str | None" = None,
        local_engine: Optional[BaseLocalEngine] = None,
        bandwidth: Any = None,
    ):
        super().__init__()
        if bandwidth is not None and not bandwidth > 0:
            raise ValueError(f"bandwidth must be strictly positive, got {bandwidth}.")

        self.kernel = get_kernel(kernel if kernel is not None else settings.default_kernel)
        self.local_engine = local_engine if local_engine is not None else LocalPolynomialEngine()
        self.bandwidth = bandwidth
        self.hyperparams = {
            "kernel": self.kernel,
            "local_engine": self.local_engine,
            "bandwidth": self.bandwidth,
        }
        self.h_: Any = None

    def fit(self, data: Any, tpoints: Any) -> "KernelCollocator":
        """Store the samples and resolve the bandwidth in the data's element type."""
        super().fit(data, tpoints)
        samples = self.samples
        if self.bandwidth is None:
            self.h_ = select_bandwidth(samples.tpoints)
            logger.debug("No bandwidth supplied, selected h=%s from %d samples.", self.h_, samples.n_samples)
        else:
            self.h_ = cast_like(as_real_array(self.bandwidth), samples.data)[()]
        return self

    def predict(self, query_times: Any = None) -> Tuple[np.ndarray, np.ndarray]:
        if not self.is_fitted or self.h_ is None:
            raise RuntimeError("KernelCollocator must be fitted before calling predict().")

        samples = self.samples
        query = samples.query_grid(query_times)
        derivative, smoothed = self.local_engine.fit(samples.tpoints, samples.data, query, self.h_, self.kernel)
        return samples.shape_result(derivative, smoothed)
