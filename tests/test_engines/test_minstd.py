import pytest

from helpers import *
from mcrand.engines import Minstd

from . import engines_ref


def test_known_answer():
    # The check value from Park and Miller (1988)
    engine = Minstd(1)
    engine.discard(9999)
    assert engine.next() == 1043618065


def test_reference():
    engine = Minstd(12345)
    assert take(engine, 1000) == engines_ref.minstd(12345, 1000).tolist()


def test_bounds():
    assert Minstd.min == 1
    assert Minstd.max == 2**31 - 2


@pytest.mark.parametrize(
    ("seed", "status"),
    [(1, 1), (0, 1), (2**31 - 1, 1), (2**31, 1), (-1, 2**31 - 2), (10**20, 10**20 % (2**31 - 1))],
)
def test_seed(seed, status):
    engine = Minstd(seed)
    assert engine.r == status


def test_seed_reset():
    engine = Minstd(100)
    engine.seed()
    assert engine == Minstd()
    assert engine.r == 1


def test_text():
    engine = Minstd(5)
    assert str(engine) == "[minstd (5)]"
    assert Minstd.from_text(" [minstd (16807)]") == Minstd(16807)


@pytest.mark.parametrize("text", ["[minstd (0)]", "[minstd (2147483647)]", "[minstd (1 2)]", "[minstd (-1)]"])
def test_text_out_of_range(text):
    engine = Minstd(5)
    with pytest.raises(ValueError):
        engine.load(text)
    assert engine == Minstd(5)
