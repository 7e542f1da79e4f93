from __future__ import annotations

import copy
from collections.abc import Iterator, Sequence
from typing import Any, TypeVar

import numpy
from numpy.typing import NDArray

from .. import textio
from ..helpers import product, wrap_in_tuple
from ..textio import TextReader

EngineT = TypeVar("EngineT", bound="Engine")


class Engine:
    """
    The base class for random number engines.

    An engine is a deterministic state machine producing integers
    uniformly distributed in ``[min, max]``.
    The state consists of a parameter block (fixed coefficients of the recurrence)
    and a status block (updated on every step).
    Engines are plain values: they are not synchronized, and each thread should use its own.

    .. py:attribute:: name

        The name of the engine used in its text representation.

    .. py:attribute:: min

        The smallest value the engine can produce.

    .. py:attribute:: max

        The largest value the engine can produce.

    .. py:attribute:: word_dtype

        The unsigned ``numpy`` integer type able to hold the output values.
    """

    name: str
    min: int = 0
    max: int
    word_dtype: numpy.dtype[Any]

    def _step(self) -> None:
        raise NotImplementedError

    def next(self) -> int:
        """Advances the engine by one step and returns the produced value."""
        raise NotImplementedError

    def seed(self, *args: Any) -> None:
        raise NotImplementedError

    def __next__(self) -> int:
        return self.next()

    def __iter__(self) -> Iterator[int]:
        return self

    def __call__(self, x: int | None = None) -> int:
        """
        Without arguments, same as :py:meth:`next`.
        If ``x`` is given, returns an integer uniformly distributed in ``[0, x)``.
        """
        if x is None:
            return self.next()

        # Avoiding the circular import; ``canonical`` only relies on the engine protocol.
        from ..canonical import uniformco

        return min(int(uniformco(self) * x), x - 1)

    def discard(self, n: int) -> None:
        """Advances the engine by ``n`` steps."""
        if n < 0:
            raise ValueError("Cannot discard a negative number of values")
        for _ in range(n):
            self._step()

    def random_raw(self, size: int | Sequence[int] | None = None) -> NDArray[Any]:
        """
        Returns an array of shape ``size`` filled with consecutive outputs of the engine,
        in row-major order.
        """
        shape = wrap_in_tuple(size)
        count = product(shape)
        result = numpy.fromiter((self.next() for _ in range(count)), self.word_dtype, count=count)
        return result.reshape(shape)

    def copy(self: EngineT) -> EngineT:
        """Returns an independent copy of this engine."""
        return copy.deepcopy(self)

    # Equality and text representation

    def _key(self) -> tuple[Any, ...]:
        raise NotImplementedError

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self.name == other.name and self._key() == other._key()  # type: ignore[attr-defined]

    # Engines are mutable
    __hash__ = None  # type: ignore[assignment]

    def _state_text(self) -> str:
        raise NotImplementedError

    def _read_state(self, reader: TextReader) -> Any:
        raise NotImplementedError

    def _set_state(self, state: Any) -> None:
        raise NotImplementedError

    def to_text(self) -> str:
        """Returns the text representation of the engine, ``[<name> <state>]``."""
        return "[" + self.name + " " + self._state_text() + "]"

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.name}>"

    def _read(self, reader: TextReader) -> Any:
        reader.ignore_spaces().delim("[").delim(self.name).delim(" ")
        state = self._read_state(reader)
        reader.delim("]")
        return state

    def read(self, reader: TextReader) -> TextReader:
        """
        Reads the state of the engine from ``reader``.
        If reading fails, ``reader.failed`` is set and the engine is left unchanged.
        """
        state = self._read(reader)
        if reader:
            self._set_state(state)
        return reader

    def load(self, text: str) -> None:
        """
        Replaces the state of the engine with the one from its text representation ``text``.
        Raises :py:class:`~mcrand.errors.ParseError` if ``text`` cannot be parsed,
        in which case the engine is left unchanged.
        """
        self._set_state(textio.parse(text, self._read, self.name))

    @classmethod
    def _blank(cls: type[EngineT]) -> EngineT:
        return cls()

    @classmethod
    def from_text(cls: type[EngineT], text: str) -> EngineT:
        """Creates an engine from its text representation."""
        engine = cls._blank()
        engine.load(text)
        return engine


def read_int_tuple(reader: TextReader, count: int | None = None, bound: int | None = None) -> list[int] | None:
    """
    Reads ``(<x1> <x2> ... <xN>)`` of unsigned integers.
    If ``count`` is given, exactly ``count`` elements are expected;
    if ``bound`` is given, all elements must be smaller than it.
    Returns ``None`` on failure.
    """
    values = []
    reader.delim("(")
    values.append(reader.unsigned())
    while reader and (len(values) < count if count is not None else reader.peek(" ")):
        reader.delim(" ")
        values.append(reader.unsigned())
    reader.delim(")")

    if reader and bound is not None and any(x >= bound for x in values):  # type: ignore[operator]
        reader.fail(f"values smaller than {bound}")

    return None if reader.failed else values  # type: ignore[return-value]


def format_int_tuple(values: Sequence[int]) -> str:
    return textio.format_tuple([str(int(x)) for x in values])


def fill_bits(g: Engine, words: int, bits: int) -> list[int]:
    """
    Builds ``words`` integers of ``bits`` bits from the engine ``g``,
    most significant bit first, setting a bit iff the draw lies above the midpoint.
    """
    threshold = g.max // 2
    g_min = g.min
    result = []
    for _ in range(words):
        r = 0
        for _ in range(bits):
            r <<= 1
            if g.next() - g_min > threshold:
                r += 1
        result.append(r)
    return result
