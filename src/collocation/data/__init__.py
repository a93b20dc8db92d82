"""pandas front-end: collocate wide DataFrames indexed by time."""

from .frames import collocate_frame

__all__ = ["collocate_frame"]
