"""
Pseudo-random number engines and distributions for Monte Carlo simulations.

An engine is a deterministic state machine producing uniformly distributed integers
in ``[engine.min, engine.max]``.
The available engines are:

* :py:class:`~mcrand.engines.LCG64Shift`, a 64-bit linear congruential generator
  with a xor-shift output transformation;
* :py:class:`~mcrand.engines.MRG5s`, a multiple recursive generator of order 5
  modulo a 31-bit prime;
* :py:class:`~mcrand.engines.LagFib2Plus`, :py:class:`~mcrand.engines.LagFib2Xor`
  and :py:class:`~mcrand.engines.LagFib4Xor`, lagged Fibonacci generators with
  arbitrary taps (see :py:data:`~mcrand.engines.PRESETS` for the well-tested ones);
* :py:class:`~mcrand.engines.Minstd`, the "minimal standard" generator,
  mostly used to expand integer seeds.

The first two support jumping ahead and splitting into non-overlapping substreams,
which is the recommended way to give each worker of a parallel simulation its own engine:

::

    base = LCG64Shift(seed=12345)
    engines = [base.copy() for _ in range(workers)]
    for i, engine in enumerate(engines):
        engine.split(workers, i)

Engines are not synchronized; each thread must use its own engine.

The integer output is converted to floating point numbers by
:py:func:`uniformco` (the interval :math:`[0, 1)`), :py:func:`uniformoo` (:math:`(0, 1)`)
and :py:func:`generate_canonical`, and to samples of common distributions by
the classes in :py:mod:`mcrand.distributions`.

Every engine and distribution has a text representation (``str(obj)``),
which can be parsed back with ``from_text()``, giving an object equal to the original one.


.. automodule:: mcrand.engines
    :members:

.. automodule:: mcrand.distributions
    :members:

.. automodule:: mcrand.errors
    :members:
"""

from .canonical import generate_canonical, uniform_array, uniformco, uniformoo
from .distributions import Bernoulli, Beta, Normal, StudentT
from .engines import LagFib2Plus, LagFib2Xor, LagFib4Xor, LCG64Shift, Minstd, MRG5s, make_engine
from .errors import ParseError, clear_errno, get_errno
from .version import VERSION
