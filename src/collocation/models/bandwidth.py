"""
Default bandwidth selection for kernel collocation.
"""
import logging
from typing import Any

import numpy as np

from ..utils.numeric import as_real_array, scalar

logger = logging.getLogger(__name__)


def _median(sorted_values: np.ndarray) -> Any:
    """Median of an already sorted 1-D array, in its element type."""
    k = sorted_values.shape[0] // 2
    if sorted_values.shape[0] % 2:
        return sorted_values[k]
    return (sorted_values[k - 1] + sorted_values[k]) / 2


def select_bandwidth(tpoints: Any, C: float = 1.0) -> Any:
    """
    Rule-of-thumb bandwidth for local linear collocation over a time grid.

    The window is measured in typical sample spacings so that it stays local:
    h_0 = C * g * n^(1/5), where g is the median gap between consecutive
    timestamps. On an even grid this is C * span * n^(-4/5) up to a factor
    n / (n - 1), i.e. roughly n^(1/5) samples on each side of a query point.
    h_0 is capped at half the span and floored at 2 * g, so a typical bounded
    kernel window holds a neighbour on each side. Isolated samples far from
    the rest of the grid do not widen the window; regressions around them
    fail as singular instead.

    Args:
        tpoints: Sorted sample timestamps (length n >= 2).
        C (float): A constant of order 1 scaling the baseline. Defaults to 1.0.

    Returns:
        A strictly positive scalar in the element type of `tpoints`.
    """
    t = as_real_array(tpoints)
    if t.ndim != 1:
        raise ValueError("tpoints must be one-dimensional.")
    n = t.shape[0]
    if n < 2:
        raise ValueError("At least two timestamps are needed to select a bandwidth.")
    if not C > 0:
        raise ValueError("Constant C must be positive.")

    span = t[-1] - t[0]
    gap = _median(np.sort(np.abs(np.diff(t))))
    h0 = C * gap * scalar(t, n) ** scalar(t, 1, 5)
    # with two samples the floor exceeds the cap: one line through both
    h = max(min(h0, span / 2), 2 * gap)
    if not h > 0:
        raise ValueError("tpoints must span a positive time range.")
    logger.debug("Selected bandwidth h=%s (baseline %s, median gap %s, n=%d)", h, h0, gap, n)
    return h


__all__ = ["select_bandwidth"]
