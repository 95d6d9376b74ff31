r"""
#####################################
Series bounds (:mod:`pibound.series`)
#####################################

.. currentmodule:: pibound.series

This module encloses π with the Basel problem, ``sum(1 / n**2) == pi**2 / 6``.

The partial sum is evaluated twice in binary64, once rounding every operation
towards negative infinity and once towards positive infinity. The discarded tail
is bounded by integral comparison,

.. math::

    \frac{1}{N + 1} \le \sum_{n = N + 1}^{\infty} \frac{1}{n^2} \le \frac{1}{N},

and the resulting bounds on ``pi**2 / 6`` are mapped to bounds on π by
``sqrt(6 * x)`` with the same directed rounding.

.. autosummary::
    :toctree: generated/

    Order
    directed_sum
    basel_term
    tail_bounds
    basel_bounds
    bounds_from_series
    series_enclosure

"""

import enum
import fractions
import logging
import numbers
from collections.abc import Callable

from pibound import rounding as rnd
from pibound.interval import FloatInterval
from pibound.rounding import ROUND_CEILING, ROUND_FLOOR, RoundingMode

logger = logging.getLogger(__name__)


class Order(enum.StrEnum):
    """Order of summation.

    Attributes
    ----------
    FORWARD
        ``n = 1, 2, ..., N``.
    REVERSE
        ``n = N, N - 1, ..., 1``. Small terms are accumulated first, which usually
        loses less to rounding.
    """

    FORWARD = "forward"
    REVERSE = "reverse"


def _check_terms(n: int) -> int:
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise ValueError(f"number of terms must be an int, got {type(n).__name__}")

    if n <= 0:
        raise ValueError(f"number of terms must be positive, got {n}")

    return int(n)


def _indices(n: int, order: Order | str) -> range:
    match order:
        case Order.FORWARD:
            return range(1, n + 1)

        case Order.REVERSE:
            return range(n, 0, -1)

    raise ValueError(f"unknown summation order: {order!r}")


def basel_term(k: int) -> float:
    """Return ``1 / k**2`` rounded in the ambient rounding mode."""
    return rnd.fromfraction(fractions.Fraction(1, k * k))


def directed_sum(
    n: int,
    order: Order | str = Order.FORWARD,
    rounding: RoundingMode = ROUND_FLOOR,
    term: Callable[[int], float] = basel_term,
) -> float:
    """Sum ``term(k)`` over ``k = 1, ..., n`` with every operation rounded in the
    given direction.

    Parameters
    ----------
    n : int
        Number of terms.
    order : Order | str, default=Order.FORWARD
        Order of summation.
    rounding : RoundingMode, default=ROUND_FLOOR
        Rounding mode of every operation, including those made by `term`.
    term : Callable[[int], float], default=basel_term
        Term of the series. `term` is evaluated while `rounding` is the ambient
        rounding mode, so it must use :mod:`pibound.rounding` arithmetic.

    Returns
    -------
    float
        A lower bound of the partial sum if `rounding` is ``ROUND_FLOOR`` and an
        upper bound if `rounding` is ``ROUND_CEILING``.

    Raises
    ------
    ValueError
        If `n` is not a positive integer or `order` is unknown.
    UnsupportedRoundingError
        If directed rounding is not available.

    Notes
    -----
    The ambient rounding mode is restored on return, whether `term` succeeds or
    raises.

    Examples
    --------
    >>> lo = directed_sum(10, "reverse", ROUND_FLOOR)
    >>> hi = directed_sum(10, "reverse", ROUND_CEILING)
    >>> lo < hi
    True
    """
    n = _check_terms(n)
    indices = _indices(n, order)

    with rnd.localrounding(rounding):
        total = 0.0

        for k in indices:
            total = rnd.add(total, term(k))

    logger.debug(f"directed_sum(n={n}, order={order}, {rounding!r}) = {total!r}")
    return total


def tail_bounds(n: int) -> tuple[float, float]:
    """Return bounds of ``sum(1 / k**2 for k > n)``.

    The lower bound is ``1 / (n + 1)`` rounded down and the upper bound is ``1 / n``
    rounded up.

    Raises
    ------
    ValueError
        If `n` is not a positive integer.
    """
    n = _check_terms(n)
    lower = rnd.fromfraction(fractions.Fraction(1, n + 1), ROUND_FLOOR)
    upper = rnd.fromfraction(fractions.Fraction(1, n), ROUND_CEILING)
    return lower, upper


def basel_bounds(n: int, order: Order | str = Order.FORWARD) -> tuple[float, float]:
    """Return bounds of ``pi**2 / 6`` from `n` terms of the Basel series.

    Raises
    ------
    ValueError
        If `n` is not a positive integer or `order` is unknown.
    """
    tail_lower, tail_upper = tail_bounds(n)

    with rnd.localrounding(ROUND_FLOOR):
        lower = rnd.add(directed_sum(n, order, ROUND_FLOOR), tail_lower)

    with rnd.localrounding(ROUND_CEILING):
        upper = rnd.add(directed_sum(n, order, ROUND_CEILING), tail_upper)

    return lower, upper


def bounds_from_series(
    n: int, order: Order | str = Order.FORWARD
) -> tuple[float, float]:
    """Return bounds of π from `n` terms of the Basel series.

    Parameters
    ----------
    n : int
        Number of terms.
    order : Order | str, default=Order.FORWARD
        Order of summation.

    Returns
    -------
    tuple[float, float]
        ``(lower, upper)`` with ``lower <= pi <= upper``.

    Raises
    ------
    ValueError
        If `n` is not a positive integer or `order` is unknown.
    UnsupportedRoundingError
        If directed rounding is not available.

    Examples
    --------
    >>> lower, upper = bounds_from_series(1000, "reverse")
    >>> lower < 3.14159265 < upper
    True
    """
    basel_lower, basel_upper = basel_bounds(n, order)

    with rnd.localrounding(ROUND_FLOOR):
        lower = rnd.sqrt(rnd.mul(6.0, basel_lower))

    with rnd.localrounding(ROUND_CEILING):
        upper = rnd.sqrt(rnd.mul(6.0, basel_upper))

    logger.debug(f"bounds_from_series(n={n}, order={order}) = ({lower!r}, {upper!r})")
    return lower, upper


def series_enclosure(n: int, order: Order | str = Order.FORWARD) -> FloatInterval:
    """Return :func:`bounds_from_series` as an interval."""
    return FloatInterval(*bounds_from_series(n, order))
