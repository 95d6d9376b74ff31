import math
import threading
from fractions import Fraction

import gmpy2
import pytest

from pibound import rounding as rnd
from pibound.rounding import (
    ROUND_CEILING,
    ROUND_FLOOR,
    ROUND_NEAREST,
    UnsupportedRoundingError,
    getrounding,
    localrounding,
)


def test_directed_arithmetic():
    third = Fraction(1, 3)
    lo = rnd.div(1.0, 3.0, ROUND_FLOOR)
    hi = rnd.div(1.0, 3.0, ROUND_CEILING)
    assert lo < third < hi
    assert hi == math.nextafter(lo, math.inf)
    assert rnd.div(1.0, 3.0, ROUND_NEAREST) == 1 / 3

    assert rnd.add(1.0, 2.0**-60, ROUND_FLOOR) == 1.0
    assert rnd.add(1.0, 2.0**-60, ROUND_CEILING) == math.nextafter(1.0, 2.0)
    assert rnd.sub(1.0, 2.0**-60, ROUND_CEILING) == 1.0
    assert rnd.sub(1.0, 2.0**-60, ROUND_FLOOR) == math.nextafter(1.0, 0.0)
    assert rnd.mul(0.1, 3.0, ROUND_FLOOR) < Fraction(0.1) * 3 < rnd.mul(
        0.1, 3.0, ROUND_CEILING
    )
    assert rnd.sqrt(2.0, ROUND_FLOOR) ** 2 < 2 < rnd.sqrt(2.0, ROUND_CEILING) ** 2
    assert rnd.sqrt(4.0, ROUND_FLOOR) == rnd.sqrt(4.0, ROUND_CEILING) == 2.0


def test_overflow_and_subnormal():
    big = 1.7976931348623157e308
    assert rnd.add(big, big, ROUND_FLOOR) == big
    assert rnd.add(big, big, ROUND_CEILING) == math.inf

    tiny = 5e-324
    assert rnd.div(tiny, 2.0, ROUND_FLOOR) == 0.0
    assert rnd.div(tiny, 2.0, ROUND_CEILING) == tiny


def test_domain_errors():
    with pytest.raises(ValueError):
        rnd.sqrt(-1.0, ROUND_FLOOR)

    with pytest.raises(ZeroDivisionError):
        rnd.div(1.0, 0.0, ROUND_CEILING)


def test_fromfraction():
    tenth = Fraction(1, 10)
    assert rnd.fromfraction(tenth, ROUND_FLOOR) < tenth < rnd.fromfraction(
        tenth, ROUND_CEILING
    )
    assert rnd.fromfraction(tenth, ROUND_CEILING) == 0.1
    assert rnd.fromfraction(Fraction(3, 4), ROUND_FLOOR) == 0.75
    assert rnd.fromfraction(2**53 + 1, ROUND_FLOOR) == 2.0**53
    assert rnd.fromfraction(2**53 + 1, ROUND_CEILING) == 2.0**53 + 2
    assert rnd.fromfraction(gmpy2.mpq(1, 10), ROUND_CEILING) == 0.1
    assert rnd.fromfraction(Fraction(gmpy2.mpz(3), 4), ROUND_FLOOR) == 0.75


def test_ambient_mode():
    assert getrounding() is ROUND_NEAREST

    with localrounding(ROUND_FLOOR):
        assert getrounding() is ROUND_FLOOR
        assert rnd.div(1.0, 10.0) < Fraction(1, 10)

        with localrounding(ROUND_CEILING):
            assert rnd.div(1.0, 10.0) > Fraction(1, 10)

        assert getrounding() is ROUND_FLOOR

    assert getrounding() is ROUND_NEAREST
    assert rnd.div(1.0, 10.0) == 0.1


def test_ambient_mode_restored_on_error():
    with pytest.raises(RuntimeError):
        with localrounding(ROUND_CEILING):
            raise RuntimeError

    assert getrounding() is ROUND_NEAREST


def test_ambient_mode_rejects_other_types():
    with pytest.raises(TypeError):
        with localrounding("down"):
            pass

    assert getrounding() is ROUND_NEAREST


def test_ambient_mode_is_thread_local():
    barrier = threading.Barrier(2)
    seen = {}

    def worker(mode):
        with localrounding(mode):
            barrier.wait()
            seen[mode] = (getrounding(), rnd.div(1.0, 3.0))
            barrier.wait()

    threads = [
        threading.Thread(target=worker, args=(mode,))
        for mode in (ROUND_FLOOR, ROUND_CEILING)
    ]

    for thread in threads:
        thread.start()

    for thread in threads:
        thread.join()

    assert seen[ROUND_FLOOR] == (ROUND_FLOOR, rnd.div(1.0, 3.0, ROUND_FLOOR))
    assert seen[ROUND_CEILING] == (ROUND_CEILING, rnd.div(1.0, 3.0, ROUND_CEILING))
    assert getrounding() is ROUND_NEAREST


def test_probe_rejects_nearest_only_contexts():
    nearest = gmpy2.ieee(64)
    contexts = {mode: nearest for mode in (ROUND_CEILING, ROUND_FLOOR, ROUND_NEAREST)}

    with pytest.raises(UnsupportedRoundingError):
        rnd.probe(contexts)

    with pytest.raises(UnsupportedRoundingError):
        rnd.probe({ROUND_NEAREST: nearest})
