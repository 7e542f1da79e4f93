from __future__ import annotations

import numpy

from ..textio import TextReader
from .base import Engine, format_int_tuple, read_int_tuple


class Minstd(Engine):
    """
    The "minimal standard" multiplicative congruential generator of Park and Miller,
    :math:`x_{i} = 16807 x_{i-1} \\bmod (2^{31} - 1)`.
    Its statistical properties are modest; it is used to expand a single integer seed
    into the larger states of other engines.

    :param seed: ``None`` to keep the default status (``1``), or an integer.
    """

    name = "minstd"

    a = 16807
    modulus = 2**31 - 1

    min = 1
    max = modulus - 1
    word_dtype = numpy.dtype("uint32")

    def __init__(self, seed: int | None = None):
        self.r = 1
        if seed is not None:
            self.seed(seed)

    def seed(self, s: int | None = None) -> None:  # type: ignore[override]
        """
        Without arguments, resets the engine to its default status.
        Otherwise, uses ``s`` reduced modulo :math:`2^{31} - 1`, with ``0`` mapped to ``1``.
        """
        if s is None:
            self.r = 1
            return
        t = s % self.modulus
        self.r = t if t != 0 else 1

    def _step(self) -> None:
        self.r = (self.a * self.r) % self.modulus

    def next(self) -> int:
        self.r = (self.a * self.r) % self.modulus
        return self.r

    def discard(self, n: int) -> None:
        if n < 0:
            raise ValueError("Cannot discard a negative number of values")
        self.r = (pow(self.a, n, self.modulus) * self.r) % self.modulus

    def _key(self) -> tuple[int, ...]:
        return (self.r,)

    def _state_text(self) -> str:
        return format_int_tuple([self.r])

    def _read_state(self, reader: TextReader) -> list[int] | None:
        state = read_int_tuple(reader, 1)
        if state is not None and not 1 <= state[0] < self.modulus:
            reader.fail(f"a status in [1, {self.modulus})")
        return state

    def _set_state(self, state: list[int]) -> None:
        (self.r,) = state
