"""
Element-type aware arithmetic helpers.

Kernel weights and regression coefficients are computed in the element type of
their input: ``float32`` stays ``float32``, ``longdouble`` stays
``longdouble`` and object arrays carry :class:`mpmath.mpf` values at the
current ``mpmath.mp`` precision. numpy ufuncs cover the fixed-width types;
object arrays are mapped element-wise through the matching mpmath function.
"""
import numpy as np
import mpmath


def _scalar_to_mpf(value) -> mpmath.mpf:
    if isinstance(value, (mpmath.mpf, int, float, str)):
        return mpmath.mpf(value)
    # np.longdouble and friends: go through the shortest round-tripping repr
    return mpmath.mpf(str(value))


_to_mpf_ufunc = np.frompyfunc(_scalar_to_mpf, 1, 1)


def to_mpf(arr: np.ndarray) -> np.ndarray:
    """Return an object array whose elements are all ``mpmath.mpf``."""
    out = _to_mpf_ufunc(arr)
    return np.asarray(out, dtype=object)


def is_arbitrary_precision(arr: np.ndarray) -> bool:
    return arr.dtype == object


def as_real_array(x) -> np.ndarray:
    """
    Convert ``x`` to a real-valued numpy array without losing precision.

    Integer and boolean input is promoted to ``float64``; object input is
    normalised to ``mpmath.mpf`` elements; complex and non-numeric input is
    rejected.
    """
    arr = np.asarray(x)
    if arr.dtype.kind in "biu":
        return arr.astype(np.float64)
    if arr.dtype == object:
        return to_mpf(arr)
    if arr.dtype.kind != "f":
        raise TypeError(f"Unsupported element type {arr.dtype}; expected real numbers.")
    return arr


def cast_like(arr: np.ndarray, like: np.ndarray) -> np.ndarray:
    """Cast ``arr`` to the element type of ``like``."""
    if is_arbitrary_precision(like):
        return arr if is_arbitrary_precision(arr) else to_mpf(arr.astype(object))
    if arr.dtype == like.dtype:
        return arr
    return arr.astype(like.dtype)


def scalar(like: np.ndarray, numerator, denominator=1):
    """The rational constant ``numerator / denominator`` in the element type of ``like``."""
    if is_arbitrary_precision(like):
        return mpmath.mpf(numerator) / denominator
    kind = like.dtype.type
    return kind(numerator) / kind(denominator)


def pi(like: np.ndarray):
    if is_arbitrary_precision(like):
        return +mpmath.pi
    return np.arccos(like.dtype.type(-1))


def machine_epsilon(like: np.ndarray):
    if is_arbitrary_precision(like):
        return mpmath.mpf(2) ** (1 - mpmath.mp.prec)
    return np.finfo(like.dtype).eps


def _elementwise(np_func, mp_func):
    mp_ufunc = np.frompyfunc(mp_func, 1, 1)

    def apply(x):
        x = np.asarray(x)
        if x.dtype == object:
            return np.asarray(mp_ufunc(x), dtype=object)
        return np_func(x)

    apply.__name__ = np_func.__name__
    return apply


exp = _elementwise(np.exp, mpmath.exp)
sin = _elementwise(np.sin, mpmath.sin)
cos = _elementwise(np.cos, mpmath.cos)
sqrt = _elementwise(np.sqrt, mpmath.sqrt)


__all__ = [
    "as_real_array",
    "cast_like",
    "cos",
    "exp",
    "is_arbitrary_precision",
    "machine_epsilon",
    "pi",
    "scalar",
    "sin",
    "sqrt",
    "to_mpf",
]
