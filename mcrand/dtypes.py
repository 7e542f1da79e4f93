from typing import Any

import numpy
from numpy.typing import DTypeLike

_WORD_DTYPES = {32: numpy.dtype("uint32"), 64: numpy.dtype("uint64")}


def normalize_type(dtype: DTypeLike) -> numpy.dtype[Any]:
    """
    Function for wrapping all dtypes coming from the user.
    ``numpy`` uses two different classes to represent dtypes,
    and one of them does not have some important attributes.
    """
    return numpy.dtype(dtype)


def is_integer(dtype: DTypeLike) -> bool:
    """Returns ``True`` if ``dtype`` is an integer."""
    return numpy.issubdtype(normalize_type(dtype), numpy.integer)


def word_dtype(bits: int) -> numpy.dtype[Any]:
    """Returns the unsigned integer dtype with ``bits`` bits (32 or 64)."""
    if bits not in _WORD_DTYPES:
        raise ValueError(f"Unsupported word size: {bits} (must be 32 or 64)")
    return _WORD_DTYPES[bits]


def real_dtype(dtype: DTypeLike) -> numpy.dtype[Any]:
    """
    Checks that ``dtype`` is ``float32`` or ``float64`` and returns it normalized.
    """
    dtype = normalize_type(dtype)
    if dtype not in (numpy.float32, numpy.float64):
        raise ValueError(f"Unsupported floating point type: {dtype}")
    return dtype
