"""
Text representation of engines and distributions.

Every engine and distribution has a canonical printable form,
e.g. ``[lcg64_shift (18145460002477866997 1) (0)]`` or ``[normal (0.0 1.0)]``,
which can be parsed back into an equal object.
The grammar consists of the delimiters ``[``, ``]``, ``(``, ``)``, single spaces,
names and decimal numbers.
Integers are printed in decimal notation, floating point numbers
are printed with enough digits for the round-trip to be bit-exact.

Parsing is done with a :py:class:`TextReader`, a cursor over a string
with a sticky failure flag, analogous to ``failbit`` of a C++ input stream:
after the first mismatch all subsequent operations do nothing,
and objects being read are left unchanged.
"""

from __future__ import annotations

import math
import re
from collections.abc import Callable
from logging import getLogger
from typing import TypeVar

from .errors import ParseError

logger = getLogger(__name__)

T = TypeVar("T")

_SPACES = re.compile(r"\s*")
_UNSIGNED = re.compile(r"\d+")
_INTEGER = re.compile(r"[+-]?\d+")
_NAME = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
_REAL = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan)", re.IGNORECASE
)


class TextReader:
    """
    A cursor over ``text`` recognizing delimiters and decimal numbers.

    .. py:attribute:: failed

        ``True`` if any of the previous operations failed to match.
    """

    def __init__(self, text: str, pos: int = 0):
        self.text = text
        self.pos = pos
        self.failed = False

    def __bool__(self) -> bool:
        return not self.failed

    def fail(self, expected: str) -> None:
        if not self.failed:
            logger.debug(
                "Text parsing failed at position %d: expected %s, got %r",
                self.pos,
                expected,
                self.text[self.pos : self.pos + 16],
            )
        self.failed = True

    def ignore_spaces(self) -> TextReader:
        if not self.failed:
            match = _SPACES.match(self.text, self.pos)
            if match is not None:
                self.pos = match.end()
        return self

    def delim(self, token: str) -> TextReader:
        """Consumes exactly ``token`` (no whitespace skipping)."""
        if not self.failed:
            if self.text.startswith(token, self.pos):
                self.pos += len(token)
            else:
                self.fail(repr(token))
        return self

    def peek(self, token: str) -> bool:
        """Returns ``True`` if the text at the cursor starts with ``token``."""
        return not self.failed and self.text.startswith(token, self.pos)

    def _number(self, pattern: re.Pattern[str], expected: str) -> str | None:
        if self.failed:
            return None
        # Numbers skip leading whitespace, same as formatted stream input.
        self.ignore_spaces()
        match = pattern.match(self.text, self.pos)
        if match is None:
            self.fail(expected)
            return None
        self.pos = match.end()
        return match.group()

    def unsigned(self) -> int | None:
        token = self._number(_UNSIGNED, "an unsigned integer")
        return None if token is None else int(token)

    def integer(self) -> int | None:
        token = self._number(_INTEGER, "an integer")
        return None if token is None else int(token)

    def real(self) -> float | None:
        token = self._number(_REAL, "a real number")
        return None if token is None else float(token)

    def number(self) -> int | float | None:
        """Reads a real number, returning an ``int`` if it is written as an integer."""
        token = self._number(_REAL, "a number")
        if token is None:
            return None
        return int(token) if _INTEGER.fullmatch(token) else float(token)

    def name(self) -> str | None:
        """Reads an identifier (letters, digits and underscores)."""
        if self.failed:
            return None
        match = _NAME.match(self.text, self.pos)
        if match is None:
            self.fail("a name")
            return None
        self.pos = match.end()
        return match.group()

    def at_end(self) -> bool:
        return self.pos == len(self.text)


def format_real(x: float) -> str:
    """Formats a floating point number so that reading it back gives the same value."""
    x = float(x)
    if math.isnan(x):
        return "nan"
    return repr(x)


def format_tuple(items: list[str]) -> str:
    return "(" + " ".join(items) + ")"


def parse(text: str, obj_reader: Callable[[TextReader], T], what: str) -> T:
    """
    Runs ``obj_reader`` on a :py:class:`TextReader` for ``text`` (after leading whitespace),
    requiring that the whole text (save for trailing whitespace) is consumed.
    Raises :py:class:`~mcrand.errors.ParseError` on failure.
    """
    reader = TextReader(text)
    result = obj_reader(reader.ignore_spaces())
    reader.ignore_spaces()
    if reader.failed or not reader.at_end():
        raise ParseError(f"Could not parse {what} from {text!r}")
    return result
