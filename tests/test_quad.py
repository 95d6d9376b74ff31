from fractions import Fraction

import numpy as np
import pytest

from pibound import reference
from pibound.interval import FloatInterval as FI
from pibound.quad import make_intervals, pi_from_quadrant, quarter_circle, riemann_sum


def test_make_intervals():
    cells = make_intervals(0, 2, 20)
    assert len(cells) == 20
    assert cells[0].inf == 0.0
    assert cells[-1].sup == 2.0

    for i, x in enumerate(cells):
        assert x.inf <= Fraction(i, 10)
        assert x.sup >= Fraction(i + 1, 10)
        assert x.diam() < 0.11

    for x, y in zip(cells, cells[1:]):
        assert x.sup >= y.inf


def test_make_intervals_from_intervals():
    cells = make_intervals(FI("0.1"), FI(1), 3)
    assert all(isinstance(x, FI) for x in cells)
    assert cells[0].inf <= Fraction(1, 10)
    assert cells[1].inf <= Fraction(4, 10) <= cells[1].sup


def test_make_intervals_invalid():
    with pytest.raises(ValueError):
        make_intervals(0, 2, 0)

    with pytest.raises(ValueError):
        make_intervals(2, 0, 5)

    with pytest.raises(ValueError):
        make_intervals(1, 1, 5)

    with pytest.raises(ValueError, match="must be an int"):
        make_intervals(0, 2, 2.5)

    with pytest.raises(ValueError):
        make_intervals(0, 2, True)

    with pytest.raises(ValueError):
        riemann_sum(lambda x: x, 0, 1, 2.5)

    assert make_intervals(0, 2, np.int64(4)) == make_intervals(0, 2, 4)


def test_riemann_sum():
    s = riemann_sum(lambda x: x**2, 0, 1, 100)
    assert Fraction(1, 3) in s
    assert s.diam() < 0.011

    with pytest.raises(ValueError):
        riemann_sum(lambda x: x, 0, 1, 0)


def test_quarter_circle():
    assert quarter_circle(FI(0)) == FI(2)
    assert quarter_circle(FI(2)) == FI(0)
    assert quarter_circle(FI(0, 2)) == FI(0, 2)
    assert quarter_circle(FI(3), radius=5) == FI(4)


@pytest.mark.parametrize("n, width", [(20, 0.21), (100, 0.05)])
def test_pi_from_quadrant(n, width):
    x = pi_from_quadrant(n)
    pi = reference.pi()
    assert x.inf < pi < x.sup
    assert x.diam() < width


def test_pi_from_quadrant_radius():
    assert reference.pi() in pi_from_quadrant(50, radius=1)
    assert reference.pi() in pi_from_quadrant(50, radius="0.5")

    with pytest.raises(ValueError):
        pi_from_quadrant(10, radius=0)

    with pytest.raises(ValueError):
        pi_from_quadrant(10, radius=-1)


def test_quadrant_converges():
    widths = [pi_from_quadrant(n).diam() for n in (10, 20, 40, 80)]
    assert widths == sorted(widths, reverse=True)

    for w0, w1 in zip(widths, widths[1:]):
        assert 1.9 < w0 / w1 < 2.1
