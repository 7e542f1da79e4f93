from __future__ import annotations

from ..errors import ParseError
from ..textio import TextReader
from .base import Engine
from .lagfib import MAX_LAG, PRESETS, LagFib2Plus, LagFib2Xor, LagFib4Xor, LaggedFibonacci, make_engine
from .lcg64_shift import LCG64Shift, LCG64ShiftParameter
from .minstd import Minstd
from .mrg5s import MRG5s, MRG5sParameter, MRG5sStatus

ENGINES: dict[str, type[Engine]] = {cls.name: cls for cls in (Minstd, LCG64Shift, MRG5s)}


def from_text(text: str) -> Engine:
    """
    Creates an engine of any of the supported types from its text representation,
    dispatching on the name.
    Raises :py:class:`~mcrand.errors.ParseError` on failure.
    """
    reader = TextReader(text)
    name = reader.ignore_spaces().delim("[").name()
    if name in ENGINES:
        return ENGINES[name].from_text(text)
    if name is not None and name.startswith("lagfib"):
        return LaggedFibonacci.from_text(text)
    raise ParseError(f"Could not parse an engine from {text!r}")
