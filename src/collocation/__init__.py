"""
Kernel-regression collocation: smoothed values and first derivatives of
sampled time series, estimated directly from the data.
Provides convenient access to the entry points, kernels and global settings.
"""

from .config import settings
from .errors import (
    CapabilityError,
    CollocationError,
    InterpolationError,
    ShapeMismatchError,
    SingularRegressionError,
)
from .models import (
    BOUNDED_KERNELS,
    KERNELS,
    UNBOUNDED_KERNELS,
    CosineKernel,
    EpanechnikovKernel,
    GaussianKernel,
    InterpolationCollocator,
    KernelCollocator,
    LocalPolynomialEngine,
    LogisticKernel,
    QuarticKernel,
    SigmoidKernel,
    SilvermanKernel,
    TriangularKernel,
    TricubeKernel,
    TriweightKernel,
    UniformKernel,
    get_kernel,
    select_bandwidth,
)
from .collocate import collocate_data, collocate_interpolated
from .data import collocate_frame

__all__ = [
    "settings",
    "collocate_data",
    "collocate_interpolated",
    "collocate_frame",
    "KernelCollocator",
    "InterpolationCollocator",
    "LocalPolynomialEngine",
    "select_bandwidth",
    "get_kernel",
    "KERNELS",
    "BOUNDED_KERNELS",
    "UNBOUNDED_KERNELS",
    "EpanechnikovKernel",
    "UniformKernel",
    "TriangularKernel",
    "QuarticKernel",
    "TriweightKernel",
    "TricubeKernel",
    "CosineKernel",
    "GaussianKernel",
    "LogisticKernel",
    "SigmoidKernel",
    "SilvermanKernel",
    "CollocationError",
    "ShapeMismatchError",
    "CapabilityError",
    "SingularRegressionError",
    "InterpolationError",
]
