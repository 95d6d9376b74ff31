"""
##################################
Convergence (:mod:`pibound.study`)
##################################

.. currentmodule:: pibound.study

This module tabulates how the width of an enclosure of π shrinks with the number of
terms or cells.

.. autosummary::
    :toctree: generated/

    series_widths
    quadrant_widths
    convergence_order

"""

import logging
from collections.abc import Sequence

import numpy as np
import numpy.typing as npt

from pibound import rounding as rnd
from pibound.quad import pi_from_quadrant
from pibound.rounding import ROUND_CEILING
from pibound.series import Order, bounds_from_series

logger = logging.getLogger(__name__)


def series_widths(
    ns: Sequence[int], order: Order | str = Order.REVERSE
) -> npt.NDArray[np.float64]:
    """Return the widths of :func:`~pibound.series.bounds_from_series` for each
    number of terms in `ns`."""
    widths = np.empty(len(ns), dtype=np.float64)

    for i, n in enumerate(ns):
        lower, upper = bounds_from_series(n, order)
        widths[i] = rnd.sub(upper, lower, ROUND_CEILING)

    return widths


def quadrant_widths(
    ns: Sequence[int], radius: float | int = 2
) -> npt.NDArray[np.float64]:
    """Return the diameters of :func:`~pibound.quad.pi_from_quadrant` for each number
    of cells in `ns`."""
    return np.array([pi_from_quadrant(n, radius).diam() for n in ns], dtype=np.float64)


def convergence_order(ns: Sequence[int], widths: npt.ArrayLike) -> float:
    """Estimate ``p`` in ``width ~ C * n**-p`` by a least-squares fit in log-log
    scale.

    Raises
    ------
    ValueError
        If fewer than two points are given or a width is not positive.

    Examples
    --------
    >>> round(convergence_order([10, 100, 1000], [1e-1, 1e-2, 1e-3]), 6)
    1.0
    """
    x = np.log(np.asarray(ns, dtype=np.float64))
    y = np.asarray(widths, dtype=np.float64)

    if x.shape != y.shape or x.size < 2:
        raise ValueError("at least two (n, width) pairs are required")

    if not np.all(y > 0):
        raise ValueError("widths must be positive")

    slope, _ = np.polyfit(x, np.log(y), 1)
    logger.debug(f"convergence_order: slope={slope}")
    return float(-slope)
