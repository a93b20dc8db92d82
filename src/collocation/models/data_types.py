from dataclasses import dataclass
from typing import Any, Optional, Tuple

import numpy as np

from ..errors import ShapeMismatchError
from ..utils.arrays import as_host_array, require_scalar_indexing
from ..utils.numeric import cast_like


@dataclass(frozen=True)
class SampleSet:
    """
    Validated observations for collocation.

    `data` is always stored as a (d, n) array; `tpoints` is the (n,) strictly
    increasing timestamp vector cast to the element type of `data`.
    `vector_input` remembers whether the caller passed a single 1-D channel so
    results can be returned in the same shape.
    """

    data: np.ndarray
    tpoints: np.ndarray
    vector_input: bool = False

    @property
    def n_channels(self) -> int:
        return self.data.shape[0]

    @property
    def n_samples(self) -> int:
        return self.data.shape[1]

    @property
    def dtype(self) -> np.dtype:
        return self.data.dtype

    @classmethod
    def from_arrays(cls, data: Any, tpoints: Any) -> "SampleSet":
        """Check storage capabilities, convert to host arrays and validate shapes."""
        # Both arguments are checked before either is converted.
        require_scalar_indexing(data, "data")
        require_scalar_indexing(tpoints, "tpoints")

        data_arr = as_host_array(data, "data")
        t_arr = as_host_array(tpoints, "tpoints")

        if data_arr.ndim == 1:
            vector_input = True
            data_arr = data_arr.reshape(1, -1)
        elif data_arr.ndim == 2:
            vector_input = False
        else:
            raise ShapeMismatchError(
                f"data must be a vector or a (channels, samples) matrix, got {data_arr.ndim} dimensions."
            )
        if t_arr.ndim != 1:
            raise ShapeMismatchError(f"tpoints must be one-dimensional, got shape {t_arr.shape}.")
        if t_arr.shape[0] != data_arr.shape[1]:
            raise ShapeMismatchError(
                f"tpoints has {t_arr.shape[0]} entries but data has {data_arr.shape[1]} samples (columns)."
            )
        if t_arr.shape[0] < 2:
            raise ShapeMismatchError("At least two samples are required for collocation.")

        t_arr = cast_like(t_arr, data_arr)
        if not np.all(np.diff(t_arr) > 0):
            raise ValueError("tpoints must be strictly increasing.")

        return cls(data=data_arr, tpoints=t_arr, vector_input=vector_input)

    def query_grid(self, query_times: Optional[Any] = None) -> np.ndarray:
        """The query times in the element type of the data; defaults to `tpoints`."""
        if query_times is None:
            return self.tpoints
        q = as_host_array(query_times, "query_times")
        if q.ndim == 0:
            q = q.reshape(1)
        if q.ndim != 1:
            raise ShapeMismatchError(f"query_times must be one-dimensional, got shape {q.shape}.")
        return cast_like(q, self.data)

    def shape_result(self, derivative: np.ndarray, smoothed: np.ndarray) -> Tuple[np.ndarray, np.ndarray]:
        if self.vector_input:
            return derivative[0], smoothed[0]
        return derivative, smoothed
