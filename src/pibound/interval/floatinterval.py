import decimal
import math

from pibound import function as pbf
from pibound import rounding as rnd
from pibound.interval.interval import Converter, Interval, Operator
from pibound.rounding import ROUND_CEILING, ROUND_FLOOR, RoundingMode

_DIGITS = 17


class FloatConverter(Converter[float]):
    __slots__ = ()

    def fromfloat(self, value):
        if math.isnan(value):
            raise ValueError("interval endpoint must not be NaN")

        return value

    def fromfraction(self, value, rounding):
        return rnd.fromfraction(value, rounding)

    def fromint(self, value, rounding) -> float:
        if abs(value) <= 0x1FFFFFFFFFFFFF:
            return float(value)

        return rnd.fromfraction(value, rounding)

    def tostr(self, value, rounding):
        if value == 0.0 or not math.isfinite(value):
            return repr(value)

        context = decimal.Context(
            prec=_DIGITS,
            rounding=(
                decimal.ROUND_CEILING
                if rounding == ROUND_CEILING
                else decimal.ROUND_FLOOR
            ),
            Emin=decimal.MIN_EMIN,
            Emax=decimal.MAX_EMAX,
        )
        digits = context.create_decimal(value).normalize(context)

        if -6 <= digits.adjusted() < _DIGITS:
            return format(digits, "f")

        return format(digits, "e")

    def repr(self, value):
        if not math.isfinite(value):
            return repr(value)

        return f"<{value.hex()}>"


class FloatOperator(Operator[float]):
    __slots__ = ()
    ZERO = 0.0
    ONE = 1.0
    INFINITY = math.inf

    def cadd(self, lhs, rhs):
        return rnd.add(lhs, rhs, ROUND_CEILING)

    def fadd(self, lhs, rhs):
        return rnd.add(lhs, rhs, ROUND_FLOOR)

    def csub(self, lhs, rhs):
        return rnd.sub(lhs, rhs, ROUND_CEILING)

    def fsub(self, lhs, rhs):
        return rnd.sub(lhs, rhs, ROUND_FLOOR)

    def cmul(self, lhs, rhs):
        # 0 * inf is 0 for interval endpoints
        if lhs == 0.0 or rhs == 0.0:
            return 0.0

        return rnd.mul(lhs, rhs, ROUND_CEILING)

    def fmul(self, lhs, rhs):
        if lhs == 0.0 or rhs == 0.0:
            return 0.0

        return rnd.mul(lhs, rhs, ROUND_FLOOR)

    def cdiv(self, lhs, rhs):
        return rnd.div(lhs, rhs, ROUND_CEILING)

    def fdiv(self, lhs, rhs):
        return rnd.div(lhs, rhs, ROUND_FLOOR)

    def csqr(self, value):
        return rnd.sqrt(value, ROUND_CEILING)

    def fsqr(self, value):
        return rnd.sqrt(value, ROUND_FLOOR)


class FloatInterval(Interval[float]):
    """Double-precision inf-sup type interval.

    Parameters
    ----------
    inf : float | int | str | Fraction | mpf | None, optional
        Infimum of the interval.
    sup : float | int | str | Fraction | mpf | None, optional
        Supremum of the interval.

    Attributes
    ----------
    inf : float
        Infimum of the interval.
    sup : float
        Supremum of the interval.
    converter : Converter
    endtype : type[float]
    operator : Operator

    Examples
    --------
    >>> x = FloatInterval("0.1")
    >>> x.inf < 0.1 == x.sup
    True
    >>> y = FloatInterval(1, 2) * FloatInterval(-3, 4)
    >>> y.inf, y.sup
    (-6.0, 8.0)
    >>> 0.25 in (FloatInterval(1) / 4)
    True
    """

    __slots__ = ()
    converter = FloatConverter()
    operator = FloatOperator()
    endtype = float

    def mid(self) -> float:
        ZERO = self.operator.ZERO
        INFINITY = self.operator.INFINITY

        if self.inf == -INFINITY:
            return ZERO if self.sup == INFINITY else self.sup

        if self.sup == INFINITY:
            return self.inf

        if abs(self.inf) >= 1 and abs(self.sup) >= 1:
            return self.inf / 2 + self.sup / 2

        return (self.inf + self.sup) / 2

    def _pibound_overload_(self, fun, *args, **kwargs):
        if fun is pbf.pi:
            PI_INF = float.fromhex("0x1.921fb54442d18p+1")
            PI_SUP = float.fromhex("0x1.921fb54442d19p+1")
            return self.__class__(PI_INF, PI_SUP)

        return super()._pibound_overload_(fun, *args, **kwargs)
