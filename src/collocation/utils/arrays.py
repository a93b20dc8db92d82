"""
Storage capability checks and host-array conversion.

The regression engines read individual elements of the data and timestamp
containers. Device-resident storage (CUDA tensors, CuPy arrays, torch ``meta``
tensors, ...) only supports bulk operations, so it is rejected up front with a
message naming the offending argument.
"""
import numbers
from collections.abc import Mapping

import numpy as np
import pandas as pd
import torch

from ..errors import CapabilityError
from .numeric import as_real_array

# DLPack device codes for host-accessible memory: kDLCPU, kDLCUDAHost
_HOST_DLPACK_DEVICES = (1, 3)


def supports_scalar_indexing(obj) -> bool:
    """Whether ``obj`` allows direct, arbitrary-order scalar element reads."""
    if isinstance(obj, torch.Tensor):
        return obj.device.type == "cpu"
    if isinstance(obj, (np.ndarray, np.generic, pd.Series, pd.DataFrame, pd.Index)):
        return True
    if isinstance(obj, numbers.Real):
        return True
    if hasattr(obj, "__cuda_array_interface__"):
        return False
    dlpack_device = getattr(obj, "__dlpack_device__", None)
    if dlpack_device is not None:
        try:
            device_type, _ = dlpack_device()
        except (TypeError, ValueError, RuntimeError, BufferError):
            return False
        return int(device_type) in _HOST_DLPACK_DEVICES
    return hasattr(obj, "__getitem__") and hasattr(obj, "__len__")


def require_scalar_indexing(obj, name: str) -> None:
    if not supports_scalar_indexing(obj):
        raise CapabilityError(
            name,
            f"`{name}` of type {type(obj).__module__}.{type(obj).__qualname__} does not support "
            "fast scalar indexing (e.g. GPU or other device-resident storage). "
            f"Move `{name}` to host memory, for example with `numpy.asarray` or `tensor.cpu()`, "
            "before calling collocate_data.",
        )


def as_host_array(obj, name: str) -> np.ndarray:
    """Convert a capability-checked container into a real-valued numpy array."""
    require_scalar_indexing(obj, name)
    if isinstance(obj, Mapping):
        raise TypeError(f"`{name}` must be an array or a sequence, got {type(obj).__name__}.")
    if isinstance(obj, torch.Tensor):
        arr = obj.detach().numpy()
    elif isinstance(obj, (pd.Series, pd.DataFrame, pd.Index)):
        arr = obj.to_numpy()
    else:
        arr = np.asarray(obj)
    try:
        return as_real_array(arr)
    except (TypeError, ValueError) as exc:
        raise TypeError(f"`{name}`: {exc}") from exc


__all__ = ["supports_scalar_indexing", "require_scalar_indexing", "as_host_array"]
