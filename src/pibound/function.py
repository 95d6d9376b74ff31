"""
################################################
Mathematical functions (:mod:`pibound.function`)
################################################

.. currentmodule:: pibound.function

This module provides mathematical functions that dispatch on the type of their
argument, so that one expression can be evaluated at floats, at multiprecision
numbers, and at intervals.

.. autosummary::
    :toctree: generated/

    pi
    sqrt

Notes
-----
A type takes part in the dispatch by defining ``_pibound_overload_(fun, *args)``,
which returns the result of `fun` or ``NotImplemented``.
"""

import math
from typing import Any, overload

import mpmath
import mpmath.ctx_mp_python

from pibound.interval.interval import Interval

_pi: Any = None
_sqrt: Any = None


@overload
def pi[T: Interval](x: T, /) -> T: ...


@overload
def pi(x: float | int, /) -> float: ...


@overload
def pi(x: Any, /) -> Any: ...


def pi(x, /):
    """Pi in the type of `x`.

    Examples
    --------
    >>> from pibound import FloatInterval as FI
    >>> print(format(pi(1.0), ".6f"))
    3.141593
    >>> print(pi(FI()))
    [3.1415926535897931, 3.1415926535897936]
    """
    if fun := getattr(type(x), "_pibound_overload_", None):
        if (res := fun(x, _pi, x)) is not NotImplemented:
            return res

        raise TypeError

    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return +mpmath.pi

        case float() | int():
            return math.pi

        case _:
            raise TypeError


@overload
def sqrt[T: Interval](x: T, /) -> T: ...


@overload
def sqrt(x: float | int, /) -> float: ...


@overload
def sqrt(x: Any, /) -> Any: ...


def sqrt(x, /):
    """Square root.

    Examples
    --------
    >>> from pibound import FloatInterval as FI
    >>> print(format(sqrt(2.0), ".6f"))
    1.414214
    >>> print(sqrt(FI(2)))
    [1.4142135623730949, 1.4142135623730952]
    """
    if fun := getattr(type(x), "_pibound_overload_", None):
        if (res := fun(x, _sqrt, x)) is not NotImplemented:
            return res

        raise TypeError

    match x:
        case mpmath.ctx_mp_python.mpnumeric():
            return mpmath.sqrt(x)

        case float() | int():
            return math.sqrt(x)

        case _:
            raise TypeError


_pi = pi
_sqrt = sqrt
