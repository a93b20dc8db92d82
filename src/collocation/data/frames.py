from typing import Any, Optional, Tuple

import numpy as np
import pandas as pd

from ..collocate import collocate_data


def _as_seconds(values: Any, origin: pd.Timestamp) -> np.ndarray:
    """Datetime-like values as float seconds since `origin`."""
    delta = pd.DatetimeIndex(pd.to_datetime(values)) - origin
    return np.asarray(delta / pd.Timedelta(seconds=1), dtype=np.float64)


def collocate_frame(
    frame: pd.DataFrame,
    query_times: Any = None,
    kernel: Any = None,
    bandwidth: Any = None,
    time_column: Optional[str] = None,
    **kwargs: Any,
) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """
    Collocate a wide DataFrame: one row per sample, one column per channel.

    Timestamps come from `time_column` or, by default, the index. Rows are
    sorted by time first. Datetime timestamps are measured in seconds from the
    first sample, so derivatives are per second and a numeric `bandwidth` is
    in seconds.

    Returns:
        (derivative, smoothed) DataFrames indexed by the query times (the
        sample times by default) with the original column labels.
    """
    if time_column is not None:
        frame = frame.sort_values(time_column)
        times = pd.Index(frame[time_column])
        values = frame.drop(columns=[time_column])
    else:
        frame = frame.sort_index()
        times = frame.index
        values = frame

    if values.shape[1] == 0:
        raise ValueError("DataFrame has no data columns to collocate.")

    is_datetime = pd.api.types.is_datetime64_any_dtype(times)
    if is_datetime:
        origin = pd.Timestamp(times[0])
        t = _as_seconds(times, origin)
    else:
        t = times.to_numpy()

    if query_times is None:
        index = times
        query = None
    else:
        index = pd.Index(query_times)
        query = _as_seconds(index, origin) if is_datetime else index.to_numpy()

    derivative, smoothed = collocate_data(
        values.to_numpy().T, t, kernel, bandwidth, query_times=query, **kwargs
    )
    return (
        pd.DataFrame(derivative.T, index=index, columns=values.columns),
        pd.DataFrame(smoothed.T, index=index, columns=values.columns),
    )


__all__ = ["collocate_frame"]
