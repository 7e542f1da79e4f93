"""
Error reporting.

Three kinds of failures are distinguished:

* domain errors in distribution functions (e.g. ``icdf()`` of a value outside ``[0, 1]``)
  do not raise; the function returns NaN and sets a thread-local error indicator
  which can be inspected with :py:func:`get_errno` (the value is ``errno.EDOM``);
* text parsing failures are signalled by the ``failed`` flag of
  :py:class:`~mcrand.textio.TextReader`, or by :py:class:`ParseError`
  raised from ``from_text()`` constructors;
* invalid construction parameters raise ``ValueError``.
"""

import errno
import threading
from logging import getLogger

logger = getLogger(__name__)

EDOM = errno.EDOM


class ParseError(ValueError):
    """Raised when a textual representation of an engine or a distribution cannot be parsed."""


class _ErrorIndicator(threading.local):
    def __init__(self) -> None:
        self.value = 0


_indicator = _ErrorIndicator()


def get_errno() -> int:
    """Returns the error indicator of the current thread (``0`` if no error occurred)."""
    return _indicator.value


def set_errno(value: int) -> None:
    _indicator.value = value


def clear_errno() -> None:
    """Resets the error indicator of the current thread."""
    _indicator.value = 0


def domain_error(func_name: str, arg: float) -> float:
    """
    Marks a domain error in the current thread and returns NaN,
    to be used as ``return domain_error(...)``.
    """
    logger.debug("%s: argument %r is outside of the domain", func_name, arg)
    set_errno(EDOM)
    return float("nan")
