"""
###########################################
Directed rounding (:mod:`pibound.rounding`)
###########################################

.. currentmodule:: pibound.rounding

This module provides binary64 arithmetic with directed rounding and a scoped
rounding-mode environment.

Rounding modes
==============

.. autosummary::
    :toctree: generated/

    RoundingMode
    getrounding
    localrounding

Arithmetic
==========

.. autosummary::
    :toctree: generated/

    add
    sub
    mul
    div
    sqrt
    fromfraction

Notes
-----
The ambient rounding mode is stored in a :class:`contextvars.ContextVar`, so it is
local to the active thread (and to the active task under :mod:`asyncio`). Threads
overriding the mode concurrently never observe each other's overrides.

Every operation is evaluated by MPFR in an IEEE 754 binary64 context, so the result
is the correctly rounded binary64 value in the requested direction, subnormals and
overflow included.
"""

import contextlib
import contextvars
import enum
import fractions
import functools
import logging
import math
import sys
from collections.abc import Iterator, Mapping
from typing import Final

import gmpy2

logger = logging.getLogger(__name__)


class RoundingMode(enum.Enum):
    """Rounding mode specifier.

    Attributes
    ----------
    ROUND_CEILING
        Round towards positive infinity.
    ROUND_FLOOR
        Round towards negative infinity.
    ROUND_NEAREST
        Round to nearest, ties to even. This is the ambient default.
    """

    ROUND_CEILING = enum.auto()
    ROUND_FLOOR = enum.auto()
    ROUND_NEAREST = enum.auto()

    def __repr__(self):
        return f"<{self.__class__.__name__}.{self.name}>"


ROUND_CEILING: Final = RoundingMode.ROUND_CEILING
ROUND_FLOOR: Final = RoundingMode.ROUND_FLOOR
ROUND_NEAREST: Final = RoundingMode.ROUND_NEAREST


class UnsupportedRoundingError(RuntimeError):
    """Raised if directed rounding is not available in the running interpreter."""


_var: contextvars.ContextVar[RoundingMode] = contextvars.ContextVar(
    "rounding", default=ROUND_NEAREST
)


def getrounding() -> RoundingMode:
    """Return the current rounding mode for the active thread."""
    return _var.get()


@contextlib.contextmanager
def localrounding(rounding: RoundingMode) -> Iterator[RoundingMode]:
    """Return a context manager that will set the rounding mode for the active thread
    to `rounding` on entry to the with-statement and restore the previous mode when
    exiting the with-statement.

    Raises
    ------
    UnsupportedRoundingError
        If directed rounding is not available.

    Examples
    --------
    >>> with localrounding(ROUND_FLOOR):
    ...     print(div(1.0, 10.0) < 0.1)
    True
    >>> getrounding()
    <RoundingMode.ROUND_NEAREST>
    """
    if not isinstance(rounding, RoundingMode):
        raise TypeError(f"expected RoundingMode, got {type(rounding).__name__}")

    _contexts()
    token = _var.set(rounding)

    try:
        yield rounding
    finally:
        _var.reset(token)


def _binary64(round_) -> gmpy2.context:
    ctx = gmpy2.ieee(64)
    ctx.round = round_
    return ctx


def probe(contexts: Mapping[RoundingMode, gmpy2.context]) -> None:
    """Check that `contexts` round binary64 values in their labelled direction.

    Raises
    ------
    UnsupportedRoundingError
        If floats are not IEEE 754 binary64 or some context does not round as
        labelled.
    """
    if sys.float_info.radix != 2 or sys.float_info.mant_dig != 53:
        raise UnsupportedRoundingError("float is not an IEEE 754 binary64 type")

    tiny = 2.0**-60
    above = math.nextafter(1.0, math.inf)
    expected = {
        ROUND_CEILING: (above, -1.0),
        ROUND_FLOOR: (1.0, -above),
        ROUND_NEAREST: (1.0, -1.0),
    }

    for rounding, (upper, lower) in expected.items():
        if rounding not in contexts:
            raise UnsupportedRoundingError(f"no context for {rounding!r}")

        ctx = contexts[rounding]

        if float(ctx.add(1.0, tiny)) != upper or float(ctx.sub(-1.0, tiny)) != lower:
            raise UnsupportedRoundingError(f"{rounding!r} is not honoured")


@functools.cache
def _contexts() -> dict[RoundingMode, gmpy2.context]:
    contexts = {
        ROUND_CEILING: _binary64(gmpy2.RoundUp),
        ROUND_FLOOR: _binary64(gmpy2.RoundDown),
        ROUND_NEAREST: _binary64(gmpy2.RoundToNearest),
    }
    probe(contexts)
    logger.debug("binary64 directed rounding available (gmpy2 %s)", gmpy2.version())
    return contexts


def _context(rounding: RoundingMode | None) -> gmpy2.context:
    return _contexts()[_var.get() if rounding is None else rounding]


def add(lhs: float, rhs: float, rounding: RoundingMode | None = None) -> float:
    """Add with the given (or the ambient) rounding mode."""
    return float(_context(rounding).add(lhs, rhs))


def sub(lhs: float, rhs: float, rounding: RoundingMode | None = None) -> float:
    """Subtract with the given (or the ambient) rounding mode."""
    return float(_context(rounding).sub(lhs, rhs))


def mul(lhs: float, rhs: float, rounding: RoundingMode | None = None) -> float:
    """Multiply with the given (or the ambient) rounding mode."""
    return float(_context(rounding).mul(lhs, rhs))


def div(lhs: float, rhs: float, rounding: RoundingMode | None = None) -> float:
    """Divide with the given (or the ambient) rounding mode.

    Raises
    ------
    ZeroDivisionError
        If `rhs` is zero.
    """
    if rhs == 0:
        raise ZeroDivisionError("float division by zero")

    return float(_context(rounding).div(lhs, rhs))


def sqrt(value: float, rounding: RoundingMode | None = None) -> float:
    """Square root with the given (or the ambient) rounding mode.

    Raises
    ------
    ValueError
        If `value` is negative.
    """
    if value < 0:
        raise ValueError("math domain error")

    return float(_context(rounding).sqrt(value))


def fromfraction(
    value: fractions.Fraction | int, rounding: RoundingMode | None = None
) -> float:
    """Round the rational number to a float in the given (or the ambient) direction.

    Examples
    --------
    >>> from fractions import Fraction
    >>> fromfraction(Fraction(1, 10), ROUND_FLOOR) < 0.1 == fromfraction(
    ...     Fraction(1, 10), ROUND_NEAREST
    ... )
    True
    """
    # mantissas from mpmath may be gmpy2.mpz
    exact = gmpy2.mpq(int(value.numerator), int(value.denominator))
    return float(gmpy2.mpfr(exact, 0, _context(rounding)))
