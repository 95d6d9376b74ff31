r"""
################################
Quadrature (:mod:`pibound.quad`)
################################

.. currentmodule:: pibound.quad

This module encloses integrals by interval Riemann sums.

Evaluating an expression at an interval ``X`` with interval operations encloses the
range of the expression over ``X``. Hence, if ``[a, b]`` is covered by cells
``X_1, ..., X_N`` of width ``h``,

.. math::

    \int_a^b f(x) \, dx \in h \sum_{i = 1}^{N} f(X_i).

.. autosummary::
    :toctree: generated/

    make_intervals
    riemann_sum
    quarter_circle
    pi_from_quadrant

"""

import logging
import numbers
from collections.abc import Callable
from typing import Any

from pibound import function as pbf
from pibound.interval import FloatInterval, Interval

logger = logging.getLogger(__name__)


def _check_cells(n: int) -> int:
    if isinstance(n, bool) or not isinstance(n, numbers.Integral):
        raise ValueError(f"number of cells must be an int, got {type(n).__name__}")

    if n <= 0:
        raise ValueError(f"number of cells must be positive, got {n}")

    return int(n)


def _endpoints[T: Interval](a: Any, b: Any, intvl: type[T]) -> tuple[T, T]:
    if isinstance(a, Interval):
        intvl = type(a)

    a = intvl.ensure(a)
    b = intvl.ensure(b)

    if a.sup >= b.inf:
        raise ValueError("lower limit must be less than upper limit")

    return a, b


def make_intervals[T: Interval](
    a: Any, b: Any, n: int, intvl: type[T] = FloatInterval
) -> list[T]:
    """Partition ``[a, b]`` into `n` cells of equal width.

    Parameters
    ----------
    a : Interval | float | int | str | Fraction
        Lower limit.
    b : Interval | float | int | str | Fraction
        Upper limit.
    n : int
        Number of cells.
    intvl : type[Interval], default=FloatInterval
        Interval type used if neither `a` nor `b` is an interval.

    Returns
    -------
    list[Interval]
        Cells ``X_1, ..., X_n``. The i-th cell contains the exact subinterval
        ``[a + (i - 1) * h, a + i * h]``, where ``h = (b - a) / n``.

    Raises
    ------
    ValueError
        If `n` is not a positive integer or ``a >= b``.

    Examples
    --------
    >>> cells = make_intervals(0, 2, 20)
    >>> len(cells)
    20
    >>> 0.05 in cells[0] and 1.95 in cells[-1]
    True
    """
    n = _check_cells(n)
    a, b = _endpoints(a, b, intvl)
    h = (b - a) / n
    mesh = [a + h * i for i in range(n)] + [b]
    return [x | y for x, y in zip(mesh, mesh[1:])]


def riemann_sum[T: Interval](
    fun: Callable, a: Any, b: Any, n: int, intvl: type[T] = FloatInterval
) -> T:
    """Enclose the integral of `fun` over ``[a, b]`` by a Riemann sum over `n` cells.

    Parameters
    ----------
    fun : Callable
        Integrand. `fun` must be an univariate scalar-valued function built from
        interval operations and :mod:`pibound.function`.
    a : Interval | float | int | str | Fraction
        Lower limit of integration.
    b : Interval | float | int | str | Fraction
        Upper limit of integration.
    n : int
        Number of cells.
    intvl : type[Interval], default=FloatInterval
        Interval type used if neither `a` nor `b` is an interval.

    Warnings
    --------
    `fun` must be defined on the whole of ``[a, b]``; the enclosure width shrinks
    only linearly in ``1 / n``.

    Examples
    --------
    >>> s = riemann_sum(lambda x: x**2, 0, 1, 1000)
    >>> 1 / 3 in s
    True
    """
    n = _check_cells(n)
    a, b = _endpoints(a, b, intvl)
    cells = make_intervals(a, b, n)
    h = (b - a) / n
    result = h * sum(fun(x) for x in cells)
    logger.debug(f"riemann_sum(n={n}) = {result!r}")
    return result


def quarter_circle[T: Interval](x: T, radius: Any = 2) -> T:
    """Upper half of the circle of radius `radius`, ``sqrt(radius**2 - x**2)``."""
    r = type(x).ensure(radius) if isinstance(x, Interval) else radius
    return pbf.sqrt(r**2 - x**2)


def pi_from_quadrant(n: int, radius: Any = 2) -> FloatInterval:
    """Enclose π by the area of a quadrant of radius `radius` split into `n` cells.

    The area ``pi * radius**2 / 4`` is enclosed by :func:`riemann_sum` of
    :func:`quarter_circle` over ``[0, radius]`` and rescaled by ``4 / radius**2``.

    Raises
    ------
    ValueError
        If `n` or `radius` is not positive.

    Examples
    --------
    >>> x = pi_from_quadrant(100)
    >>> x.inf < 3.14159265 < x.sup and x.diam() < 0.05
    True
    """
    r = FloatInterval.ensure(radius)

    if not r > 0:
        raise ValueError(f"radius must be positive, got {radius!r}")

    area = riemann_sum(lambda x: quarter_circle(x, r), 0, r, n)
    return area * 4 / r**2
