from .function import pi, sqrt
from .interval import FloatInterval, Interval
from .quad import make_intervals, pi_from_quadrant, riemann_sum
from .rounding import (
    ROUND_CEILING,
    ROUND_FLOOR,
    ROUND_NEAREST,
    RoundingMode,
    UnsupportedRoundingError,
    getrounding,
    localrounding,
)
from .series import Order, bounds_from_series, directed_sum, series_enclosure

__all__ = [
    "pi",
    "sqrt",
    "Interval",
    "FloatInterval",
    "make_intervals",
    "pi_from_quadrant",
    "riemann_sum",
    "ROUND_CEILING",
    "ROUND_FLOOR",
    "ROUND_NEAREST",
    "RoundingMode",
    "UnsupportedRoundingError",
    "getrounding",
    "localrounding",
    "Order",
    "bounds_from_series",
    "directed_sum",
    "series_enclosure",
]
