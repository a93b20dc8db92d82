"""Array capability checks and element-type helpers shared across modules."""

from .arrays import as_host_array, require_scalar_indexing, supports_scalar_indexing
from .numeric import as_real_array, cast_like, machine_epsilon

__all__ = [
    "as_host_array",
    "require_scalar_indexing",
    "supports_scalar_indexing",
    "as_real_array",
    "cast_like",
    "machine_epsilon",
]
