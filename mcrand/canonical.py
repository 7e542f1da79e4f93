"""
Conversion of the integer output of engines to uniformly distributed numbers.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

import numpy
from numpy.typing import DTypeLike, NDArray

from .dtypes import is_integer, normalize_type, real_dtype
from .engines.base import Engine
from .helpers import product, wrap_in_tuple


def _below_one(dtype: numpy.dtype[Any]) -> numpy.generic:
    return numpy.nextafter(dtype.type(1), dtype.type(0))


def _above_zero(dtype: numpy.dtype[Any]) -> numpy.generic:
    return numpy.nextafter(dtype.type(0), dtype.type(1))


def uniformco(engine: Engine, dtype: DTypeLike = numpy.float64) -> numpy.floating[Any]:
    """
    Returns a number uniformly distributed in the half-open interval :math:`[0, 1)`,
    :math:`(g - g_{\\mathrm{min}}) / (g_{\\mathrm{max}} - g_{\\mathrm{min}} + 1)`.
    """
    dtype = real_dtype(dtype)
    # Division of Python integers is correctly rounded
    x = dtype.type((engine.next() - engine.min) / (engine.max - engine.min + 1))
    if x >= 1:
        x = _below_one(dtype)
    return x


def uniformoo(engine: Engine, dtype: DTypeLike = numpy.float64) -> numpy.floating[Any]:
    """
    Returns a number uniformly distributed in the open interval :math:`(0, 1)`,
    :math:`(g - g_{\\mathrm{min}} + 1) / (g_{\\mathrm{max}} - g_{\\mathrm{min}} + 2)`.
    """
    dtype = real_dtype(dtype)
    x = dtype.type((engine.next() - engine.min + 1) / (engine.max - engine.min + 2))
    if x >= 1:
        x = _below_one(dtype)
    elif x <= 0:
        x = _above_zero(dtype)
    return x


def generate_canonical(engine: Engine, dtype: DTypeLike = numpy.float64) -> numpy.generic:
    """
    Returns a uniformly distributed number of type ``dtype``.
    For floating point types the result lies in :math:`(0, 1)` (see :py:func:`uniformoo`).
    For integer types the result is :math:`\\lfloor u (g_{\\mathrm{max}} - g_{\\mathrm{min}} + 1) \\rfloor`,
    where ``u`` is given by :py:func:`uniformco`;
    if the engine range exceeds the range of ``dtype``, the value wraps around.
    """
    dtype = normalize_type(dtype)
    if not is_integer(dtype):
        return uniformoo(engine, dtype)

    u = uniformco(engine, numpy.float64)
    value = int(float(u) * (engine.max - engine.min + 1))

    bits = dtype.itemsize * 8
    value &= (1 << bits) - 1
    if dtype.kind == "i" and value >= 1 << (bits - 1):
        value -= 1 << bits
    return dtype.type(value)


_INTERVALS: dict[str, Callable[[Engine, DTypeLike], numpy.floating[Any]]] = {
    "co": uniformco,
    "oo": uniformoo,
}


def uniform_array(
    engine: Engine,
    shape: int | Sequence[int] | None = None,
    dtype: DTypeLike = numpy.float64,
    interval: str = "co",
) -> NDArray[Any]:
    """
    Returns an array of uniformly distributed numbers,
    filled in row-major order by consecutive draws from ``engine``.

    :param interval: ``"co"`` for :math:`[0, 1)` (:py:func:`uniformco`),
        or ``"oo"`` for :math:`(0, 1)` (:py:func:`uniformoo`).
    """
    if interval not in _INTERVALS:
        raise ValueError(f"Unknown interval type: {interval!r} (must be 'co' or 'oo')")
    func = _INTERVALS[interval]
    dtype = real_dtype(dtype)
    shape = wrap_in_tuple(shape)
    count = product(shape)
    result = numpy.fromiter((func(engine, dtype) for _ in range(count)), dtype, count=count)
    return result.reshape(shape)
