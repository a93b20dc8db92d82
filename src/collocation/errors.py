"""Exception hierarchy raised by the collocation routines."""

import numpy as np


class CollocationError(Exception):
    """Base class for every error raised by this package."""


class ShapeMismatchError(CollocationError, ValueError):
    """Data and timestamps do not describe a valid sample set."""


class CapabilityError(CollocationError, TypeError):
    """An input container does not support direct scalar element access."""

    def __init__(self, argument: str, message: str):
        super().__init__(message)
        self.argument = argument


class SingularRegressionError(CollocationError, np.linalg.LinAlgError):
    """
    The weighted normal equations are singular at a query point.

    This almost always means the bandwidth is too small for the local sample
    spacing, so fewer samples than coefficients carry any weight.
    """

    def __init__(self, query_time, bandwidth, reason: str = "singular weighted design"):
        super().__init__(
            f"Collocation failed at t={query_time} with bandwidth {bandwidth} ({reason}). "
            "Please choose a higher bandwidth."
        )
        self.query_time = query_time
        self.bandwidth = bandwidth


class InterpolationError(CollocationError, RuntimeError):
    """The external interpolation method failed for one data channel."""

    def __init__(self, channel: int, stage: str, original: BaseException):
        super().__init__(
            f"Interpolation {stage} failed for channel {channel}: "
            f"{type(original).__name__}: {original}"
        )
        self.channel = channel
        self.stage = stage


__all__ = [
    "CollocationError",
    "ShapeMismatchError",
    "CapabilityError",
    "SingularRegressionError",
    "InterpolationError",
]
