"""
#############################################
Interval arithmetic (:mod:`pibound.interval`)
#############################################

.. currentmodule:: pibound.interval

This module provides basic interval arithmetic with outward rounding.

Intervals
=========

.. autosummary::
    :toctree: generated/

    Interval
    FloatInterval

Miscellaneous
=============

.. autosummary::
    :toctree: generated/

    Converter
    Operator

"""

from .floatinterval import FloatInterval
from .interval import Converter, Interval, Operator

__all__ = [
    "FloatInterval",
    "Converter",
    "Interval",
    "Operator",
]
