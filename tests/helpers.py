import numpy

from mcrand.engines import LagFib2Plus, LagFib2Xor, LagFib4Xor, LCG64Shift, Minstd, MRG5s

# Default tolerances for numpy.allclose().
SINGLE_RTOL = 1e-5
SINGLE_ATOL = 1e-8

DOUBLE_RTOL = 1e-11
DOUBLE_ATOL = 1e-11


class EngineHelper:
    """
    A named factory of seeded engines, used to parametrize the tests
    common for all the engines.
    """

    def __init__(self, name, factory):
        self.name = name
        self._factory = factory

    def __call__(self, seed=1):
        return self._factory(seed)

    def __str__(self):
        return self.name


ENGINE_HELPERS = [
    EngineHelper("minstd", lambda seed: Minstd(seed)),
    EngineHelper("lcg64_shift", lambda seed: LCG64Shift(seed)),
    EngineHelper("lcg64_shift-lecuyer3", lambda seed: LCG64Shift(seed, parameter=LCG64Shift.LEcuyer3)),
    EngineHelper("mrg5s", lambda seed: MRG5s(seed)),
    EngineHelper("mrg5s-trng1", lambda seed: MRG5s(seed, parameter=MRG5s.trng1)),
    EngineHelper("lagfib2plus-32", lambda seed: LagFib2Plus(32, 24, 55, seed=seed)),
    EngineHelper("lagfib2xor-64", lambda seed: LagFib2Xor(64, 103, 250, seed=seed)),
    EngineHelper("lagfib4xor-32", lambda seed: LagFib4Xor(32, 168, 205, 242, 521, seed=seed)),
]


def uniform_discrete_mean_and_std(min, max):
    return (min + max) / 2.0, numpy.sqrt(((max - min + 1) ** 2 - 1.0) / 12)


def uniform_mean_and_std(min, max):
    return (min + max) / 2.0, (max - min) / numpy.sqrt(12)


def check_distribution(arr, extent=None, mean=None, std=None):
    arr = numpy.asarray(arr, numpy.float64)

    if extent is not None:
        assert arr.min() >= extent[0]
        assert arr.max() <= extent[1]

    if mean is not None and std is not None:
        # expected mean and std of the mean of the sample array
        m_std = std / numpy.sqrt(arr.size)

        diff = abs(arr.mean() - mean)
        assert diff < 5 * m_std  # about 1e-6 chance of fail

    if std is not None:
        # expected mean and std of the variance of the sample array
        v_mean = std**2
        v_std = numpy.sqrt(2.0 * std**4 / (arr.size - 1))

        diff = abs(arr.var() - v_mean)
        assert diff < 5 * v_std  # about 1e-6 chance of fail


def take(engine, count):
    return [engine.next() for _ in range(count)]
