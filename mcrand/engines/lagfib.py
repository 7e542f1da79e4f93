"""
Lagged Fibonacci generators with two or four taps.

The ring buffer has a power-of-two length so that wrapping around is a mask.
Unlike :py:class:`~mcrand.engines.LCG64Shift` and :py:class:`~mcrand.engines.MRG5s`,
these engines have no closed-form jump-ahead; use independent seeds for parallel streams.
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Sequence
from typing import Any

import numpy
from numpy.typing import NDArray

from ..dtypes import word_dtype
from ..errors import ParseError
from ..helpers import ceil_pow2
from ..textio import TextReader
from .base import Engine, fill_bits, format_int_tuple
from .minstd import Minstd

# The largest accepted lag; the largest preset (19937) fits a ring of this size
MAX_LAG = 2**15


class LaggedFibonacci(Engine):
    """
    The base class for lagged Fibonacci engines.

    :param word_bits: the width of the output words, 32 or 64.
    :param taps: the lags of the recurrence, strictly increasing positive integers
        not larger than :py:data:`MAX_LAG`.
    :param seed: an integer, or an engine to draw the initial ring from.
        ``None`` is the same as ``0``.

    .. py:attribute:: kind

        The name of the engine family, the prefix of :py:attr:`name`.

    .. py:attribute:: taps

        The tuple of the lags, the largest one last.

    .. py:attribute:: ring_size

        The length of the ring buffer, the smallest power of 2
        not less than the largest lag.
    """

    kind: str
    num_taps: int

    def __init__(self, word_bits: int, *taps: int, seed: int | Engine | None = None):
        self._setup(word_bits, taps)
        self.seed(seed)

    def _setup(self, word_bits: int, taps: Sequence[int]) -> None:
        if word_bits not in (32, 64):
            raise ValueError(f"Word width must be 32 or 64, got {word_bits}")
        taps = tuple(taps)
        if len(taps) != self.num_taps:
            raise ValueError(f"{type(self).__name__} requires {self.num_taps} taps, got {taps}")
        if taps[0] < 1 or any(t1 >= t2 for t1, t2 in zip(taps[:-1], taps[1:])):
            raise ValueError(f"Taps must be strictly increasing positive integers, got {taps}")
        if taps[-1] > MAX_LAG:
            raise ValueError(f"Taps must not exceed {MAX_LAG}, got {taps}")

        self.word_bits = word_bits
        self.word_dtype = word_dtype(word_bits)
        self.max = 2**word_bits - 1
        self.taps = taps
        self.tap_max = taps[-1]
        self.ring_size = ceil_pow2(self.tap_max)
        self.mask = self.ring_size - 1
        self.name = "_".join([self.kind, str(word_bits)] + [str(t) for t in taps])

        self.index = 0
        self.ring = [0] * self.ring_size

    def seed(self, s: int | Engine | None = None) -> None:  # type: ignore[override]
        """
        Fills the first ``tap_max`` words of the ring bit by bit from the engine ``s``
        (or from a :py:class:`~mcrand.engines.Minstd` seeded with ``s`` if it is an integer).
        """
        if s is None:
            s = 0
        g = Minstd(int(s)) if isinstance(s, (int, numpy.integer)) else s
        self.ring[: self.tap_max] = fill_bits(g, self.tap_max, self.word_bits)
        self.index = self.tap_max - 1

    def _step(self) -> None:
        self.next()

    @property
    def status(self) -> tuple[int, NDArray[Any]]:
        """The current index and a copy of the ring buffer as a ``numpy`` array."""
        return self.index, numpy.array(self.ring, self.word_dtype)

    def set_status(self, index: int, ring: Sequence[int] | NDArray[Any]) -> None:
        """
        Replaces the index and the contents of the ring buffer.
        Raises ``ValueError`` if the ring has a wrong length or the values are out of range.
        """
        ring = [int(x) for x in ring]
        if len(ring) != self.ring_size:
            raise ValueError(f"Expected a ring of length {self.ring_size}, got {len(ring)}")
        if not 0 <= index < self.ring_size:
            raise ValueError(f"Index must be in [0, {self.ring_size}), got {index}")
        if not all(0 <= x <= self.max for x in ring):
            raise ValueError(f"Ring values must fit into {self.word_bits} bits")
        self.index = index
        self.ring = ring

    # Equality and text representation

    def _key(self) -> tuple[Any, ...]:
        return (self.index, *self.ring)

    def _state_text(self) -> str:
        return format_int_tuple([self.index] + self.ring)

    def _read_state(self, reader: TextReader) -> tuple[int, list[int]] | None:
        reader.delim("(")
        index = reader.unsigned()
        ring = []
        for _ in range(self.ring_size):
            if not reader:
                break
            reader.delim(" ")
            ring.append(reader.unsigned())
        reader.delim(")")

        if reader and index >= self.ring_size:  # type: ignore[operator]
            reader.fail(f"an index smaller than {self.ring_size}")
        if reader and any(x > self.max for x in ring):  # type: ignore[operator]
            reader.fail(f"{self.word_bits}-bit words")
        return None if reader.failed else (index, ring)  # type: ignore[return-value]

    def _set_state(self, state: tuple[int, list[int]]) -> None:
        self.index, self.ring = state

    @classmethod
    def from_name(cls, name: str) -> LaggedFibonacci:
        """
        Creates an unseeded engine (all-zero ring) from a name like ``lagfib2xor_64_168_521``.
        Raises ``ValueError`` if the name does not describe a lagged Fibonacci engine.
        """
        kind, _, rest = name.partition("_")
        engine_cls = _ENGINE_KINDS.get(kind)
        if engine_cls is None or (cls is not LaggedFibonacci and engine_cls is not cls):
            raise ValueError(f"{name!r} is not a {cls.__name__} name")
        try:
            numbers = [int(x) for x in rest.split("_")]
        except ValueError as exc:
            raise ValueError(f"Invalid lagged Fibonacci engine name: {name!r}") from exc
        if len(numbers) < 2:
            raise ValueError(f"Invalid lagged Fibonacci engine name: {name!r}")

        engine = engine_cls.__new__(engine_cls)
        engine._setup(numbers[0], numbers[1:])
        return engine

    @classmethod
    def from_text(cls, text: str) -> LaggedFibonacci:  # type: ignore[override]
        """Creates an engine from its text representation; the taps are taken from the name."""
        reader = TextReader(text)
        name = reader.ignore_spaces().delim("[").name()
        try:
            engine = cls.from_name(name if name is not None else "")
        except ValueError as exc:
            raise ParseError(f"Could not parse {cls.__name__} from {text!r}") from exc
        engine.load(text)
        return engine


class LagFib2Plus(LaggedFibonacci):
    """
    Two-tap additive lagged Fibonacci engine,
    :math:`r_i = r_{i-A} + r_{i-B} \\bmod 2^w`.
    """

    kind = "lagfib2plus"
    num_taps = 2

    def next(self) -> int:
        ring = self.ring
        mask = self.mask
        a, b = self.taps
        index = self.index = (self.index + 1) & mask
        r = ring[index] = (ring[(index - a) & mask] + ring[(index - b) & mask]) & self.max
        return r


class LagFib2Xor(LaggedFibonacci):
    """
    Two-tap lagged Fibonacci engine with exclusive or,
    :math:`r_i = r_{i-A} \\oplus r_{i-B}`.
    """

    kind = "lagfib2xor"
    num_taps = 2

    def next(self) -> int:
        ring = self.ring
        mask = self.mask
        a, b = self.taps
        index = self.index = (self.index + 1) & mask
        r = ring[index] = ring[(index - a) & mask] ^ ring[(index - b) & mask]
        return r


class LagFib4Xor(LaggedFibonacci):
    """
    Four-tap lagged Fibonacci engine with exclusive or,
    :math:`r_i = r_{i-A} \\oplus r_{i-B} \\oplus r_{i-C} \\oplus r_{i-D}`.
    """

    kind = "lagfib4xor"
    num_taps = 4

    def next(self) -> int:
        ring = self.ring
        mask = self.mask
        a, b, c, d = self.taps
        index = self.index = (self.index + 1) & mask
        r = ring[index] = (
            ring[(index - a) & mask]
            ^ ring[(index - b) & mask]
            ^ ring[(index - c) & mask]
            ^ ring[(index - d) & mask]
        )
        return r


_ENGINE_KINDS: dict[str, type[LaggedFibonacci]] = {
    cls.kind: cls for cls in (LagFib2Plus, LagFib2Xor, LagFib4Xor)
}


_TWO_TAPS = [
    (521, (168, 521)),
    (607, (273, 607)),
    (1279, (418, 1279)),
    (2281, (1029, 2281)),
    (3217, (576, 3217)),
    (4423, (2098, 4423)),
    (9689, (4187, 9689)),
    (19937, (9842, 19937)),
]

_FOUR_TAPS = [
    (521, (168, 205, 242, 521)),
    (607, (147, 239, 515, 607)),
    (1279, (418, 705, 992, 1279)),
    (2281, (305, 610, 915, 2281)),
    (3217, (576, 871, 1461, 3217)),
    (4423, (1419, 1736, 2053, 4423)),
    (9689, (471, 2032, 4064, 9689)),
    (19937, (3860, 7083, 11580, 19937)),
]


def _build_presets() -> dict[str, Callable[..., LaggedFibonacci]]:
    presets: dict[str, Callable[..., LaggedFibonacci]] = {}
    for bits in (32, 64):
        presets[f"r250_{bits}"] = functools.partial(LagFib2Xor, bits, 103, 250)
        presets[f"Ziff_{bits}"] = functools.partial(LagFib4Xor, bits, 471, 1586, 6988, 9689)
        for period, taps in _TWO_TAPS:
            presets[f"lagfib2plus_{period}_{bits}"] = functools.partial(LagFib2Plus, bits, *taps)
            presets[f"lagfib2xor_{period}_{bits}"] = functools.partial(LagFib2Xor, bits, *taps)
        for period, taps in _FOUR_TAPS:
            presets[f"lagfib4xor_{period}_{bits}"] = functools.partial(LagFib4Xor, bits, *taps)
    return presets


PRESETS = _build_presets()
"""
Factories of the commonly used engines, keyed by names like ``lagfib2xor_521_64``
(the period exponent, then the word width), ``r250_32`` or ``Ziff_64``.
"""


def make_engine(name: str, seed: int | Engine | None = None) -> LaggedFibonacci:
    """
    Creates a preset engine from :py:data:`PRESETS`.
    Raises ``KeyError`` for an unknown name.
    """
    if name not in PRESETS:
        raise KeyError(f"Unknown lagged Fibonacci preset: {name!r}; available: {', '.join(sorted(PRESETS))}")
    return PRESETS[name](seed=seed)
