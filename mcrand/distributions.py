"""
Probability distributions transforming the output of engines.

Continuous distributions sample by the inverse transform of an open-interval
uniform number (:py:func:`~mcrand.uniformoo`), so the singular endpoints of the inverse CDF
are never hit.
Out-of-domain arguments of ``pdf()``, ``cdf()`` and ``icdf()`` do not raise:
the functions return NaN and set the thread-local error indicator
(see :py:mod:`mcrand.errors`).

Every distribution has a parameter block, a ``NamedTuple`` available as :py:attr:`Distribution.param`.
Assigning to ``param`` (or to one of the per-field properties) replaces the whole block
and recomputes the cached values depending on it.
"""

from __future__ import annotations

import math
import numbers
import operator
from collections.abc import Callable, Sequence
from typing import Any, NamedTuple, TypeVar

import numpy
from numpy.typing import DTypeLike, NDArray

from . import special, textio
from .canonical import uniformco, uniformoo
from .dtypes import real_dtype
from .engines.base import Engine
from .errors import ParseError, domain_error
from .helpers import product, wrap_in_tuple
from .textio import TextReader

DistributionT = TypeVar("DistributionT", bound="Distribution")


class Distribution:
    """
    The base class for distributions.

    .. py:attribute:: kind

        The name of the distribution used in its text representation.

    .. py:attribute:: dtype

        The ``numpy`` type of the samples and of the values of the distribution functions.
    """

    kind: str
    param_type: type[Any]

    # For each parameter field: the method of TextReader reading it and the converter applied on assignment
    _fields: tuple[tuple[str, Callable[[Any], Any]], ...]

    def __init__(self, param: Any, dtype: DTypeLike = numpy.float64):
        self.dtype = real_dtype(dtype)
        self.param = param

    @property
    def param(self) -> Any:
        """The parameter block of the distribution."""
        return self._param

    @param.setter
    def param(self, new_param: Any) -> None:
        new_param = self._convert(new_param)
        self._check_param(new_param)
        self._param = new_param
        self._update_cache()

    def _replace(self, **kwds: Any) -> None:
        self.param = self._param._replace(**kwds)

    def _convert(self, values: Sequence[Any]) -> Any:
        values = tuple(values)
        if len(values) != len(self._fields):
            raise TypeError(f"{self.param_type.__name__} has {len(self._fields)} fields, got {values}")
        return self.param_type(*(convert(value) for (_, convert), value in zip(self._fields, values)))

    def _check_param(self, param: Any) -> None:
        pass

    def _update_cache(self) -> None:
        pass

    def _value(self, x: float) -> Any:
        return self.dtype.type(x)

    def _domain_error(self, func_name: str, x: float) -> Any:
        return self._value(domain_error(f"{self.kind}.{func_name}", x))

    def __call__(self, engine: Engine) -> Any:
        """Returns one sample drawn using ``engine``."""
        return self.icdf(uniformoo(engine, self.dtype))

    def sample(self, engine: Engine, size: int | Sequence[int] | None = None) -> NDArray[Any]:
        """Returns an array of shape ``size`` filled with consecutive samples."""
        shape = wrap_in_tuple(size)
        count = product(shape)
        result = numpy.fromiter((self(engine) for _ in range(count)), self.dtype, count=count)
        return result.reshape(shape)

    def pdf(self, x: float) -> Any:
        raise NotImplementedError

    def cdf(self, x: float) -> Any:
        raise NotImplementedError

    def icdf(self, u: float) -> Any:
        raise NotImplementedError

    @property
    def min(self) -> Any:
        """The lower bound of the support."""
        raise NotImplementedError

    @property
    def max(self) -> Any:
        """The upper bound of the support."""
        raise NotImplementedError

    # Equality and text representation

    def __eq__(self, other: object) -> bool:
        if type(self) is not type(other):
            return NotImplemented
        return self._param == other._param  # type: ignore[attr-defined]

    # Distributions are mutable
    __hash__ = None  # type: ignore[assignment]

    def to_text(self) -> str:
        """Returns the text representation of the distribution, ``[<kind> (<fields>)]``."""
        fields = [_format_field(x) for x in self._param]
        return "[" + self.kind + " " + textio.format_tuple(fields) + "]"

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        args = ", ".join(f"{name}={value!r}" for name, value in self._param._asdict().items())
        return f"{type(self).__name__}({args})"

    def _read(self, reader: TextReader) -> Any:
        reader.ignore_spaces().delim("[").delim(self.kind).delim(" ").delim("(")
        values = []
        for i, (method, _) in enumerate(self._fields):
            if i > 0:
                reader.delim(" ")
            values.append(getattr(reader, method)())
        reader.delim(")").delim("]")
        if reader.failed:
            return None

        try:
            param = self._convert(values)
            self._check_param(param)
        except (TypeError, ValueError) as exc:
            reader.fail(str(exc))
            return None
        return param

    def read(self, reader: TextReader) -> TextReader:
        """
        Reads the parameters of the distribution from ``reader``.
        If reading fails, ``reader.failed`` is set and the distribution is left unchanged.
        """
        param = self._read(reader)
        if reader:
            self.param = param
        return reader

    def load(self, text: str) -> None:
        """
        Replaces the parameters with the ones from the text representation ``text``.
        Raises :py:class:`~mcrand.errors.ParseError` if ``text`` cannot be parsed,
        in which case the distribution is left unchanged.
        """
        self.param = textio.parse(text, self._read, self.kind)

    @classmethod
    def from_text(cls: type[DistributionT], text: str, dtype: DTypeLike = numpy.float64) -> DistributionT:
        """Creates a distribution from its text representation."""
        dist = cls(dtype=dtype)
        dist.load(text)
        return dist


def _format_field(x: Any) -> str:
    if isinstance(x, numbers.Integral):
        return str(int(x))
    if isinstance(x, numbers.Real):
        return textio.format_real(x)
    raise TypeError(f"Only numeric parameters have a text representation, got {x!r}")


def _as_is(x: Any) -> Any:
    return x


class BernoulliParameter(NamedTuple):
    p: float
    head: Any
    tail: Any


class Bernoulli(Distribution):
    """
    A two-point distribution: ``head`` with probability ``p``, ``tail`` otherwise.

    ``head`` and ``tail`` can be any values comparable for equality,
    but only a distribution with numeric ones has a text representation
    (``str()`` raises ``TypeError`` otherwise).
    ``pdf()`` and ``cdf()`` return ``float`` probabilities,
    samples are ``head`` or ``tail`` themselves.
    """

    kind = "bernoulli"
    param_type = BernoulliParameter
    _fields = (("real", float), ("number", _as_is), ("number", _as_is))

    def __init__(self, p: float = 0.5, head: Any = 1, tail: Any = 0, dtype: DTypeLike = numpy.float64):
        super().__init__(BernoulliParameter(p, head, tail), dtype=dtype)

    def _check_param(self, param: BernoulliParameter) -> None:
        if not 0 <= param.p <= 1:
            raise ValueError(f"Probability must be in [0, 1], got {param.p}")

    @property
    def p(self) -> float:
        return self._param.p

    @p.setter
    def p(self, value: float) -> None:
        self._replace(p=value)

    @property
    def head(self) -> Any:
        return self._param.head

    @head.setter
    def head(self, value: Any) -> None:
        self._replace(head=value)

    @property
    def tail(self) -> Any:
        return self._param.tail

    @tail.setter
    def tail(self, value: Any) -> None:
        self._replace(tail=value)

    def __call__(self, engine: Engine) -> Any:
        return self._param.head if uniformco(engine, numpy.float64) < self._param.p else self._param.tail

    def sample(self, engine: Engine, size: int | Sequence[int] | None = None) -> NDArray[Any]:
        shape = wrap_in_tuple(size)
        values = [self(engine) for _ in range(product(shape))]
        return numpy.array(values).reshape(shape)

    def pdf(self, x: Any) -> float:
        if x == self._param.head:
            return self._param.p
        if x == self._param.tail:
            return 1.0 - self._param.p
        return 0.0

    def cdf(self, x: Any) -> float:
        if x == self._param.head:
            return self._param.p
        if x == self._param.tail:
            return 1.0
        return 0.0

    @property
    def min(self) -> Any:
        return self._param.head

    @property
    def max(self) -> Any:
        return self._param.tail


class BetaParameter(NamedTuple):
    alpha: float
    beta: float


class Beta(Distribution):
    """
    The beta distribution on :math:`[0, 1]`,

    .. math::
      f(x) = \\frac{x^{\\alpha - 1} (1 - x)^{\\beta - 1}}{B(\\alpha, \\beta)}.
    """

    kind = "beta"
    param_type = BetaParameter
    _fields = (("real", float), ("real", float))

    def __init__(self, alpha: float = 1.0, beta: float = 1.0, dtype: DTypeLike = numpy.float64):
        super().__init__(BetaParameter(alpha, beta), dtype=dtype)

    def _check_param(self, param: BetaParameter) -> None:
        if not (param.alpha > 0 and param.beta > 0):
            raise ValueError(f"Beta distribution parameters must be positive, got {tuple(param)}")

    def _update_cache(self) -> None:
        self._norm = special.Beta(self._param.alpha, self._param.beta)

    @property
    def alpha(self) -> float:
        return self._param.alpha

    @alpha.setter
    def alpha(self, value: float) -> None:
        self._replace(alpha=value)

    @property
    def beta(self) -> float:
        return self._param.beta

    @beta.setter
    def beta(self, value: float) -> None:
        self._replace(beta=value)

    def pdf(self, x: float) -> Any:
        alpha, beta = self._param
        if x < 0 or x > 1:
            return self._value(0)
        if (x == 0 and alpha < 1) or (x == 1 and beta < 1):
            return self._domain_error("pdf", x)
        return self._value(x ** (alpha - 1) * (1 - x) ** (beta - 1) / self._norm)

    def cdf(self, x: float) -> Any:
        if x <= 0:
            return self._value(0)
        if x >= 1:
            return self._value(1)
        return self._value(special.Beta_I(x, *self._param))

    def icdf(self, u: float) -> Any:
        if not 0 <= u <= 1:
            return self._domain_error("icdf", u)
        if u == 0:
            return self._value(0)
        if u == 1:
            return self._value(1)
        return self._value(special.inv_Beta_I(u, *self._param))

    @property
    def min(self) -> Any:
        return self._value(0)

    @property
    def max(self) -> Any:
        return self._value(1)


class NormalParameter(NamedTuple):
    mu: float
    sigma: float


class Normal(Distribution):
    """The normal distribution with the mean ``mu`` and the standard deviation ``sigma``."""

    kind = "normal"
    param_type = NormalParameter
    _fields = (("real", float), ("real", float))

    def __init__(self, mu: float = 0.0, sigma: float = 1.0, dtype: DTypeLike = numpy.float64):
        super().__init__(NormalParameter(mu, sigma), dtype=dtype)

    def _check_param(self, param: NormalParameter) -> None:
        if not param.sigma > 0:
            raise ValueError(f"Standard deviation must be positive, got {param.sigma}")

    @property
    def mu(self) -> float:
        return self._param.mu

    @mu.setter
    def mu(self, value: float) -> None:
        self._replace(mu=value)

    @property
    def sigma(self) -> float:
        return self._param.sigma

    @sigma.setter
    def sigma(self, value: float) -> None:
        self._replace(sigma=value)

    def pdf(self, x: float) -> Any:
        mu, sigma = self._param
        t = x - mu
        return self._value(math.exp(-t * t / (2 * sigma * sigma)) / (sigma * math.sqrt(2 * math.pi)))

    def cdf(self, x: float) -> Any:
        mu, sigma = self._param
        return self._value(special.Phi((x - mu) / sigma))

    def icdf(self, u: float) -> Any:
        if not 0 <= u <= 1:
            return self._domain_error("icdf", u)
        if u == 0:
            return self._value(-math.inf)
        if u == 1:
            return self._value(math.inf)
        mu, sigma = self._param
        return self._value(special.inv_Phi(u) * sigma + mu)

    @property
    def min(self) -> Any:
        return self._value(-math.inf)

    @property
    def max(self) -> Any:
        return self._value(math.inf)


class StudentTParameter(NamedTuple):
    nu: int


class StudentT(Distribution):
    """Student's t-distribution with ``nu`` degrees of freedom."""

    kind = "student_t"
    param_type = StudentTParameter
    _fields = (("integer", operator.index),)

    def __init__(self, nu: int = 1, dtype: DTypeLike = numpy.float64):
        super().__init__(StudentTParameter(nu), dtype=dtype)

    def _check_param(self, param: StudentTParameter) -> None:
        if not (isinstance(param.nu, (int, numpy.integer)) and param.nu >= 1):
            raise ValueError(f"The number of degrees of freedom must be a positive integer, got {param.nu}")

    def _update_cache(self) -> None:
        nu = self._param.nu
        self._norm = math.exp(special.ln_Gamma((nu + 1) / 2) - special.ln_Gamma(nu / 2)) / math.sqrt(
            math.pi * nu
        )

    @property
    def nu(self) -> int:
        return self._param.nu

    @nu.setter
    def nu(self, value: int) -> None:
        self._replace(nu=value)

    def pdf(self, x: float) -> Any:
        nu = self._param.nu
        return self._value(self._norm * (1 + x * x / nu) ** (-(nu + 1) / 2))

    def cdf(self, x: float) -> Any:
        nu = self._param.nu
        if math.isinf(x):
            return self._value(0 if x < 0 else 1)
        t1 = math.hypot(x, math.sqrt(nu))
        t2 = (x / t1 + 1) / 2
        return self._value(special.Beta_I(t2, nu / 2, nu / 2))

    def icdf(self, u: float) -> Any:
        if not 0 <= u <= 1:
            return self._domain_error("icdf", u)
        if u == 0:
            return self._value(-math.inf)
        if u == 1:
            return self._value(math.inf)
        nu = self._param.nu
        t = special.inv_Beta_I(u, nu / 2, nu / 2)
        # The incomplete beta inverse saturates for u within an ulp of the endpoints
        if t <= 0:
            return self._value(-math.inf)
        if t >= 1:
            return self._value(math.inf)
        return self._value(math.sqrt(nu / (t * (1 - t))) * (t - 0.5))

    @property
    def min(self) -> Any:
        return self._value(-math.inf)

    @property
    def max(self) -> Any:
        return self._value(math.inf)


DISTRIBUTIONS: dict[str, type[Distribution]] = {
    cls.kind: cls for cls in (Bernoulli, Beta, Normal, StudentT)
}


def from_text(text: str, dtype: DTypeLike = numpy.float64) -> Distribution:
    """
    Creates a distribution of any of the supported kinds from its text representation.
    Raises :py:class:`~mcrand.errors.ParseError` on failure.
    """
    reader = TextReader(text)
    kind = reader.ignore_spaces().delim("[").name()
    if kind not in DISTRIBUTIONS:
        raise ParseError(f"Could not parse a distribution from {text!r}")
    return DISTRIBUTIONS[kind].from_text(text, dtype=dtype)
