from __future__ import annotations

from typing import NamedTuple

import numpy

from ..helpers import inverse_mod, matrix_mul_mod, matrix_vector_mod, solve_mod
from ..textio import TextReader
from .base import Engine, format_int_tuple, read_int_tuple

MODULUS = 2**31 - 21069


class MRG5sParameter(NamedTuple):
    """The parameter block of :py:class:`MRG5s`, the coefficients ``a1`` to ``a5``."""

    a1: int
    a2: int
    a3: int
    a4: int
    a5: int


class MRG5sStatus(NamedTuple):
    """The status block of :py:class:`MRG5s`, the last five values ``r1`` (the most recent) to ``r5``."""

    r1: int
    r2: int
    r3: int
    r4: int
    r5: int


class MRG5s(Engine):
    """
    A multiple recursive generator of order 5,

    .. math::
      r_i = (a_1 r_{i-1} + a_2 r_{i-2} + a_3 r_{i-3} + a_4 r_{i-4} + a_5 r_{i-5}) \\bmod m,

    with the prime modulus :math:`m = 2^{31} - 21069`.

    Supports jumping ahead in :math:`O(\\log n)` and splitting into
    non-overlapping leapfrog streams, see :py:meth:`split`.

    :param seed: ``None`` to keep the default status ``(0, 1, 1, 1, 1)``,
        an integer, or a sequence of five integers.
    :param parameter: a :py:class:`MRG5sParameter` object, :py:attr:`trng0` by default.

    .. py:attribute:: trng0
    .. py:attribute:: trng1

        Named parameter sets.
    """

    name = "mrg5s"

    modulus = MODULUS
    min = 0
    max = MODULUS - 1
    word_dtype = numpy.dtype("uint32")

    trng0 = MRG5sParameter(1053223373, 1530818118, 1612122482, 133497989, 573245311)
    trng1 = MRG5sParameter(2068619238, 2138332912, 671754166, 1442240992, 1526958817)

    _default_status = MRG5sStatus(0, 1, 1, 1, 1)

    def __init__(
        self,
        seed: int | tuple[int, int, int, int, int] | None = None,
        parameter: MRG5sParameter | None = None,
        status: MRG5sStatus | None = None,
    ):
        if parameter is None:
            parameter = self.trng0
        self.parameter = _check_block(MRG5sParameter(*parameter), "coefficients")
        self.status = _check_block(
            MRG5sStatus(*(self._default_status if status is None else status)), "status"
        )

        if seed is not None:
            if isinstance(seed, int):
                self.seed(seed)
            else:
                self.seed(*seed)

    def seed(self, *args: int) -> None:  # type: ignore[override]
        """
        ``seed()`` resets both the parameter and the status to their defaults;
        ``seed(s)`` sets the status to ``(s mod m, 1, 1, 1, 1)``;
        ``seed(s1, s2, s3, s4, s5)`` sets the status to ``(s1 mod m, ..., s5 mod m)``.
        """
        m = self.modulus
        if len(args) == 0:
            self.parameter = self.trng0
            self.status = self._default_status
        elif len(args) == 1:
            self.status = MRG5sStatus(args[0] % m, 1, 1, 1, 1)
        elif len(args) == 5:
            self.status = MRG5sStatus(*(s % m for s in args))
        else:
            raise TypeError(f"seed() takes 0, 1 or 5 arguments ({len(args)} given)")

    def _step(self) -> None:
        a1, a2, a3, a4, a5 = self.parameter
        r1, r2, r3, r4, r5 = self.status
        t = (a1 * r1 + a2 * r2 + a3 * r3 + a4 * r4 + a5 * r5) % self.modulus
        self.status = MRG5sStatus(t, r1, r2, r3, r4)

    def next(self) -> int:
        self._step()
        return self.status.r1

    # Parallel streams

    def _companion_matrix(self) -> list[list[int]]:
        return [
            list(self.parameter),
            [1, 0, 0, 0, 0],
            [0, 1, 0, 0, 0],
            [0, 0, 1, 0, 0],
            [0, 0, 0, 1, 0],
        ]

    def jump(self, n: int) -> None:
        """
        Advances the engine by ``n`` steps in :math:`O(\\log n)` operations
        (binary exponentiation of the companion matrix of the recurrence).
        """
        if n < 0:
            raise ValueError("Cannot jump a negative number of steps")
        m = self.modulus
        status = list(self.status)
        power = self._companion_matrix()
        while n > 0:
            if n & 1:
                status = matrix_vector_mod(power, status, m)
            n >>= 1
            if n > 0:
                power = matrix_mul_mod(power, power, m)
        self.status = MRG5sStatus(*status)

    def jump2(self, s: int) -> None:
        """Advances the engine by :math:`2^s` steps."""
        self.jump(1 << s)

    def discard(self, n: int) -> None:
        self.jump(n)

    def backward(self) -> None:
        """Reverts the engine by one step."""
        a1, a2, a3, a4, a5 = self.parameter
        r1, r2, r3, r4, r5 = self.status
        m = self.modulus
        r0 = (r1 - a1 * r2 - a2 * r3 - a3 * r4 - a4 * r5) * inverse_mod(a5, m) % m
        self.status = MRG5sStatus(r2, r3, r4, r5, r0)

    def split(self, s: int, n: int) -> None:
        """
        Turns the engine into the ``n``-th of ``s`` leapfrog streams:
        afterwards it produces the elements ``n``, ``n + s``, ``n + 2s``, ...
        of the original sequence.

        A decimated sequence of an order 5 linear recurrence is itself an order 5
        linear recurrence; its coefficients are found from ten of its elements.
        """
        if s < 1 or not 0 <= n < s:
            raise ValueError(f"Invalid arguments for split(): s={s}, n={n}")
        if s == 1:
            return

        # Computed on a copy: solve_mod() and backward() may raise, leaving the engine unchanged
        engine = self.copy()
        engine.jump(n + 1)
        q = [engine.status.r1]
        for _ in range(9):
            engine.jump(s)
            q.append(engine.status.r1)

        # q[k + 5] = b1 q[k + 4] + b2 q[k + 3] + ... + b5 q[k]
        matrix = [[q[k + 4], q[k + 3], q[k + 2], q[k + 1], q[k]] for k in range(5)]
        coeffs = solve_mod(matrix, [q[k + 5] for k in range(5)], self.modulus)

        engine.parameter = MRG5sParameter(*coeffs)
        engine.status = MRG5sStatus(q[4], q[3], q[2], q[1], q[0])
        for _ in range(5):
            engine.backward()

        self.parameter = engine.parameter
        self.status = engine.status

    # Equality and text representation

    def _key(self) -> tuple[int, ...]:
        return (*self.parameter, *self.status)

    def _state_text(self) -> str:
        return format_int_tuple(self.parameter) + " " + format_int_tuple(self.status)

    def _read_state(self, reader: TextReader) -> tuple[MRG5sParameter, MRG5sStatus] | None:
        first = read_int_tuple(reader, 5, bound=self.modulus)
        if reader.peek(" ("):
            reader.delim(" ")
            second = read_int_tuple(reader, 5, bound=self.modulus)
            if not reader:
                return None
            return MRG5sParameter(*first), MRG5sStatus(*second)  # type: ignore[misc]

        # The status-only form keeps the current parameter
        if not reader:
            return None
        return self.parameter, MRG5sStatus(*first)  # type: ignore[misc]

    def _set_state(self, state: tuple[MRG5sParameter, MRG5sStatus]) -> None:
        self.parameter, self.status = state


def _check_block(block: tuple[int, ...], what: str) -> tuple[int, ...]:
    if not all(0 <= x < MODULUS for x in block):
        raise ValueError(f"MRG5s {what} must be in [0, {MODULUS}), got {tuple(block)}")
    return block
