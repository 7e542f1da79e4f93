from __future__ import annotations

from typing import NamedTuple

import numpy

from ..helpers import MASK64, inverse_mod
from ..textio import TextReader
from .base import Engine, format_int_tuple, read_int_tuple

_MODULUS = 2**64


class LCG64ShiftParameter(NamedTuple):
    """The parameter block of :py:class:`LCG64Shift`: the multiplier ``a`` and the increment ``b``."""

    a: int
    b: int


def _geometric_sum(a: int, n: int) -> int:
    """Returns :math:`\\sum_{i=0}^{n-1} a^i \\bmod 2^{64}`."""
    # Processing the bits of ``n`` from the most significant one:
    # s(2k) = s(k) (1 + a^k), s(2k + 1) = 1 + a s(2k).
    result = 0
    power = 1  # a^k for the prefix k of n processed so far
    for bit in bin(n)[2:]:
        result = (result * (1 + power)) & MASK64
        power = (power * power) & MASK64
        if bit == "1":
            result = (1 + a * result) & MASK64
            power = (power * a) & MASK64
    return result


class LCG64Shift(Engine):
    """
    A 64-bit linear congruential generator, :math:`r_{i} = a r_{i-1} + b \\bmod 2^{64}`,
    with its output whitened by a sequence of xor-shifts
    (the low bits of a power-of-two modulus LCG are notoriously poor otherwise).

    Supports jumping ahead in :math:`O(\\log n)` and splitting into
    non-overlapping leapfrog streams, see :py:meth:`split`.

    :param seed: ``None`` to keep the default status (``0``), or an integer.
    :param parameter: a :py:class:`LCG64ShiftParameter` object, :py:attr:`Default` by default.

    .. py:attribute:: Default
    .. py:attribute:: LEcuyer1
    .. py:attribute:: LEcuyer2
    .. py:attribute:: LEcuyer3

        Named parameter sets.
    """

    name = "lcg64_shift"

    min = 0
    max = MASK64
    word_dtype = numpy.dtype("uint64")

    Default = LCG64ShiftParameter(18145460002477866997, 1)
    LEcuyer1 = LCG64ShiftParameter(2862933555777941757, 1)
    LEcuyer2 = LCG64ShiftParameter(3202034522624059733, 1)
    LEcuyer3 = LCG64ShiftParameter(3935559000370003845, 1)

    def __init__(self, seed: int | None = None, parameter: LCG64ShiftParameter | None = None):
        if parameter is None:
            parameter = self.Default
        self.parameter = _check_parameter(LCG64ShiftParameter(*parameter))
        self.r = 0
        if seed is not None:
            self.seed(seed)

    def seed(self, s: int | None = None) -> None:  # type: ignore[override]
        """
        Without arguments, resets both the parameter and the status to their defaults.
        Otherwise, sets the status to ``s`` (modulo :math:`2^{64}`).
        """
        if s is None:
            self.parameter = self.Default
            self.r = 0
        else:
            self.r = s & MASK64

    def _step(self) -> None:
        self.r = (self.parameter.a * self.r + self.parameter.b) & MASK64

    def next(self) -> int:
        t = self.r = (self.parameter.a * self.r + self.parameter.b) & MASK64
        t ^= t >> 17
        t ^= (t << 31) & MASK64
        t ^= t >> 8
        return t

    # Parallel streams

    def jump(self, n: int) -> None:
        """Advances the engine by ``n`` steps in :math:`O(\\log n)` operations."""
        if n < 0:
            raise ValueError("Cannot jump a negative number of steps")
        a, b = self.parameter
        self.r = (pow(a, n, _MODULUS) * self.r + _geometric_sum(a, n) * b) & MASK64

    def jump2(self, s: int) -> None:
        """Advances the engine by :math:`2^s` steps."""
        self.jump(1 << s)

    def discard(self, n: int) -> None:
        self.jump(n)

    def backward(self) -> None:
        """Reverts the engine by one step."""
        a, b = self.parameter
        self.r = ((self.r - b) * inverse_mod(a, _MODULUS)) & MASK64

    def split(self, s: int, n: int) -> None:
        """
        Turns the engine into the ``n``-th of ``s`` leapfrog streams:
        afterwards it produces the elements ``n``, ``n + s``, ``n + 2s``, ...
        of the original sequence.
        Each of ``s`` engines split with ``n = 0 .. s-1`` from the same state
        produces a disjoint subsequence.
        """
        if s < 1 or not 0 <= n < s:
            raise ValueError(f"Invalid arguments for split(): s={s}, n={n}")
        if s == 1:
            return

        a, b = self.parameter
        parameter = LCG64ShiftParameter(pow(a, s, _MODULUS), (b * _geometric_sum(a, s)) & MASK64)
        # Raises for an even multiplier, before the engine is modified
        a_inv = inverse_mod(parameter.a, _MODULUS)

        self.jump(n + 1)
        self.parameter = parameter
        self.r = ((self.r - parameter.b) * a_inv) & MASK64

    # Equality and text representation

    def _key(self) -> tuple[int, ...]:
        return (*self.parameter, self.r)

    def _state_text(self) -> str:
        return format_int_tuple(self.parameter) + " " + format_int_tuple([self.r])

    def _read_state(self, reader: TextReader) -> tuple[LCG64ShiftParameter, int] | None:
        first = read_int_tuple(reader, bound=_MODULUS)
        if reader.peek(" ("):
            reader.delim(" ")
            status = read_int_tuple(reader, 1, bound=_MODULUS)
            if reader and len(first) != 2:  # type: ignore[arg-type]
                reader.fail("a parameter block (a b)")
            if not reader:
                return None
            return LCG64ShiftParameter(*first), status[0]  # type: ignore[index,misc]

        # The status-only form keeps the current parameter
        if reader and len(first) != 1:  # type: ignore[arg-type]
            reader.fail("a status block (r)")
        if not reader:
            return None
        return self.parameter, first[0]  # type: ignore[index]

    def _set_state(self, state: tuple[LCG64ShiftParameter, int]) -> None:
        self.parameter, self.r = state


def _check_parameter(parameter: LCG64ShiftParameter) -> LCG64ShiftParameter:
    if not all(0 <= x < _MODULUS for x in parameter):
        raise ValueError(f"LCG64Shift parameters must be in [0, 2**64), got {parameter}")
    return parameter
