"""Integer and modular arithmetic utilities used throughout the library."""

from collections.abc import Iterable, Sequence

import numpy

MASK64 = 2**64 - 1


def product(seq: Iterable[int]) -> int:
    """Returns the product of elements in the iterable ``seq``."""
    result = 1
    for x in seq:
        result *= x
    return result


def wrap_in_tuple(seq_or_elem: None | int | Iterable[int]) -> tuple[int, ...]:
    """
    If ``seq_or_elem`` is a sequence, converts it to a ``tuple``,
    otherwise returns a tuple with a single element ``seq_or_elem``.
    """
    if seq_or_elem is None:
        return tuple()
    if isinstance(seq_or_elem, int):
        return (seq_or_elem,)
    return tuple(seq_or_elem)


def log2(num: int) -> int:
    """
    Integer-valued logarithm with base 2.
    If ``num`` is not a power of 2, the result is rounded to the smallest number.
    """
    if num < 1:
        raise ValueError("log2() is only defined for positive integers")
    return num.bit_length() - 1


def ceil_pow2(num: int) -> int:
    """Returns the minimal number of the form ``2**m`` such that it is greater or equal to ``num``."""
    if num == 1:
        return 1
    return 2 ** (log2(num - 1) + 1)


def inverse_mod(a: int, m: int) -> int:
    """
    Returns the multiplicative inverse of ``a`` modulo ``m``.
    Raises ``ValueError`` if ``a`` is not invertible.
    """
    try:
        return pow(a, -1, m)
    except ValueError as exc:
        raise ValueError(f"{a} is not invertible modulo {m}") from exc


def matrix_mul_mod(x: Sequence[Sequence[int]], y: Sequence[Sequence[int]], m: int) -> list[list[int]]:
    """Multiplies two square matrices (lists of rows) modulo ``m``."""
    size = len(x)
    return [
        [sum(x[i][k] * y[k][j] for k in range(size)) % m for j in range(size)]
        for i in range(size)
    ]


def matrix_vector_mod(x: Sequence[Sequence[int]], v: Sequence[int], m: int) -> list[int]:
    return [sum(row[k] * v[k] for k in range(len(v))) % m for row in x]


def solve_mod(matrix: Sequence[Sequence[int]], rhs: Sequence[int], m: int) -> list[int]:
    """
    Solves the linear system ``matrix * x = rhs`` over the field of integers modulo
    the prime ``m`` using Gaussian elimination.
    Raises ``ValueError`` if the system is singular.
    """
    size = len(rhs)
    aug = [[c % m for c in row] + [r % m] for row, r in zip(matrix, rhs, strict=True)]

    for col in range(size):
        pivot = next((row for row in range(col, size) if aug[row][col] != 0), None)
        if pivot is None:
            raise ValueError("Singular linear system")
        aug[col], aug[pivot] = aug[pivot], aug[col]

        inv = inverse_mod(aug[col][col], m)
        aug[col] = [c * inv % m for c in aug[col]]

        for row in range(size):
            if row != col and aug[row][col] != 0:
                factor = aug[row][col]
                aug[row] = [(c - factor * p) % m for c, p in zip(aug[row], aug[col], strict=True)]

    return [aug[row][size] for row in range(size)]


class IgnoreIntegerOverflow:
    """Context manager for ignoring integer overflow in numpy operations on scalars."""

    def __enter__(self) -> None:
        self._settings = numpy.seterr(over="ignore")

    def __exit__(self, *args: object, **kwds: object) -> None:
        numpy.seterr(**self._settings)
