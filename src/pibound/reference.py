"""
###########################################
Reference values (:mod:`pibound.reference`)
###########################################

.. currentmodule:: pibound.reference

This module provides high-precision reference values computed with :mod:`mpmath`.
They serve as an oracle for checking binary64 enclosures and are never used to
compute one.

.. autosummary::
    :toctree: generated/

    pi
    basel_partial_sum
    basel_tail

"""

import fractions

import mpmath

DEFAULT_PRECISION = 256

# partial sums with at most this many terms are summed exactly
_EXACT_TERMS = 1000


def pi(prec: int = DEFAULT_PRECISION) -> mpmath.mpf:
    """Return π rounded to `prec` bits."""
    with mpmath.workprec(prec):
        return +mpmath.pi


def basel_partial_sum(n: int, prec: int = DEFAULT_PRECISION) -> mpmath.mpf:
    """Return ``sum(1 / k**2 for k in range(1, n + 1))`` rounded to about `prec`
    bits.

    Short sums are summed exactly in rational arithmetic, so an exactly
    representable sum is returned exactly. Longer sums are evaluated as
    ``zeta(2) - zeta(2, n + 1)``, so the cost does not grow with `n`.
    """
    if n < 0:
        raise ValueError(f"number of terms must be non-negative, got {n}")

    if n <= _EXACT_TERMS:
        terms = (fractions.Fraction(1, k * k) for k in range(1, n + 1))
        exact = sum(terms, start=fractions.Fraction(0))

        with mpmath.workprec(prec):
            return mpmath.mpf(exact.numerator) / exact.denominator

    with mpmath.workprec(prec + 32):
        result = mpmath.zeta(2) - mpmath.zeta(2, n + 1)

    with mpmath.workprec(prec):
        return +result


def basel_tail(n: int, prec: int = DEFAULT_PRECISION) -> mpmath.mpf:
    """Return ``sum(1 / k**2 for k > n)``, the Hurwitz zeta value ``zeta(2, n + 1)``,
    rounded to `prec` bits."""
    if n < 0:
        raise ValueError(f"number of terms must be non-negative, got {n}")

    with mpmath.workprec(prec):
        return mpmath.zeta(2, n + 1)
