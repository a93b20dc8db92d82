from .base_model import BaseCollocator
from .data_types import SampleSet
from .np_base import BaseKernel, BaseLocalEngine
from .np_kernels import (
    BOUNDED_KERNELS,
    KERNELS,
    UNBOUNDED_KERNELS,
    CosineKernel,
    EpanechnikovKernel,
    GaussianKernel,
    LogisticKernel,
    QuarticKernel,
    SigmoidKernel,
    SilvermanKernel,
    TriangularKernel,
    TricubeKernel,
    TriweightKernel,
    UniformKernel,
    get_kernel,
)
from .bandwidth import select_bandwidth
from .np_engines import LocalPolynomialEngine
from .np_collocator import KernelCollocator
from .interp_collocator import INTERPOLATION_METHODS, InterpolationCollocator, resolve_interpolation_method
