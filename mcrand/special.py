"""
Special functions consumed by the distributions.
These are thin wrappers over ``scipy.special`` with the argument order
used throughout the library.
"""

import scipy.special


def ln_Gamma(x: float) -> float:  # noqa: N802
    """Logarithm of the absolute value of the gamma function."""
    return float(scipy.special.gammaln(x))


def Beta(a: float, b: float) -> float:  # noqa: N802
    """The complete beta function :math:`B(a, b)`."""
    return float(scipy.special.beta(a, b))


def Beta_I(x: float, a: float, b: float) -> float:  # noqa: N802
    """The regularized incomplete beta function :math:`I_x(a, b)`."""
    return float(scipy.special.betainc(a, b, x))


def inv_Beta_I(u: float, a: float, b: float) -> float:  # noqa: N802
    """Inverse of :py:func:`Beta_I` with respect to ``x``."""
    return float(scipy.special.betaincinv(a, b, u))


def Phi(x: float) -> float:  # noqa: N802
    """The cumulative distribution function of the standard normal distribution."""
    return float(scipy.special.ndtr(x))


def inv_Phi(u: float) -> float:  # noqa: N802
    """Inverse of :py:func:`Phi`; returns ``-inf`` and ``inf`` for ``0`` and ``1``."""
    return float(scipy.special.ndtri(u))
