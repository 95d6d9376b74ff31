import fractions
import re
from abc import ABC, abstractmethod
from typing import Any, Literal, Self

import mpmath

from pibound import function as pbf
from pibound.rounding import ROUND_CEILING, ROUND_FLOOR, RoundingMode
from pibound.typing import Scalar, SignedComparable

_INFINITY_PATTERN = re.compile("[-+]?inf(?:inity)?", re.I)


class Converter[T: SignedComparable](ABC):
    """Provides numeric/numeric and numeric/string conversions."""

    __slots__ = ()

    @abstractmethod
    def fromfloat(self, value: float) -> T:
        """Convert the float to a number without loss.

        Raises
        ------
        ValueError
            If `value` is NaN or cannot be converted without loss.
        """
        raise NotImplementedError

    @abstractmethod
    def fromfraction(self, value: fractions.Fraction, rounding: RoundingMode) -> T:
        """Convert the rational number to a number with rounding taken into account."""
        raise NotImplementedError

    def fromint(self, value: int, rounding: RoundingMode) -> T:
        """Convert the integer to a number with rounding taken into account.

        This method is defined as ``fromfraction(Fraction(value), rounding)`` if not
        overloaded.
        """
        return self.fromfraction(fractions.Fraction(value), rounding)

    def frommpf(self, value: mpmath.mpf, rounding: RoundingMode) -> T:
        """Convert the multiprecision float to a number with rounding taken into
        account."""
        if not mpmath.isfinite(value):
            return self.fromfloat(float(value))

        man, exp = value.man_exp
        exact = fractions.Fraction(int(man)) * fractions.Fraction(2) ** exp
        return self.fromfraction(exact, rounding)

    def fromstr(self, value: str, rounding: RoundingMode) -> T:
        """Convert the string to a number with rounding taken into account.

        Raises
        ------
        ValueError
            If `value` does not represent a number.
        """
        if _INFINITY_PATTERN.fullmatch(value.strip()) is not None:
            return self.fromfloat(float(value))

        try:
            frac = fractions.Fraction(value)
        except ValueError:
            raise ValueError(f"could not convert string to number: '{value}'")

        return self.fromfraction(frac, rounding)

    def tostr(
        self,
        value: T,
        rounding: Literal[RoundingMode.ROUND_CEILING, RoundingMode.ROUND_FLOOR],
    ) -> str:
        """Convert the number to a string with rounding taken into account."""
        raise NotImplementedError

    def repr(self, value: T) -> str:
        raise NotImplementedError


class Operator[T: SignedComparable](ABC):
    """Provides arithmetic with directed rounding and basic constants.

    Notes
    -----
    Classes that inherit from this must define the class constants `ZERO`, `ONE`, and
    `INFINITY`.
    """

    __slots__ = ()
    ZERO: T
    ONE: T
    INFINITY: T

    @abstractmethod
    def cadd(self, lhs: T, rhs: T) -> T:
        """Add and round towards positive infinity."""
        raise NotImplementedError

    def fadd(self, lhs: T, rhs: T) -> T:
        """Add and round towards negative infinity.

        This method is defined as ``-cadd(-lhs, -rhs)`` if not overloaded.
        """
        return -self.cadd(-lhs, -rhs)

    def csub(self, lhs: T, rhs: T) -> T:
        """Subtract and round towards positive infinity.

        This method is defined as ``cadd(lhs, -rhs)`` if not overloaded.
        """
        return self.cadd(lhs, -rhs)

    def fsub(self, lhs: T, rhs: T) -> T:
        """Subtract and round towards negative infinity.

        This method is defined as ``-cadd(-lhs, rhs)`` if not overloaded.
        """
        return -self.cadd(-lhs, rhs)

    @abstractmethod
    def cmul(self, lhs: T, rhs: T) -> T:
        """Multiply and round towards positive infinity."""
        raise NotImplementedError

    def fmul(self, lhs: T, rhs: T) -> T:
        """Multiply and round towards negative infinity.

        This method is defined as ``-cmul(-lhs, rhs)`` if not overloaded.
        """
        return -self.cmul(-lhs, rhs)

    @abstractmethod
    def cdiv(self, lhs: T, rhs: T) -> T:
        """Divide and round towards positive infinity."""
        raise NotImplementedError

    def fdiv(self, lhs: T, rhs: T) -> T:
        """Divide and round towards negative infinity.

        This method is defined as ``-cdiv(-lhs, rhs)`` if not overloaded.
        """
        return -self.cdiv(-lhs, rhs)

    @abstractmethod
    def csqr(self, value: T) -> T:
        """Calculate the square root and round towards positive infinity."""
        raise NotImplementedError

    @abstractmethod
    def fsqr(self, value: T) -> T:
        """Calculate the square root and round towards negative infinity."""
        raise NotImplementedError


class Interval[T: SignedComparable](Scalar, ABC):
    """Abstract base class for inf-sup type intervals.

    Parameters
    ----------
    inf : endtype | float | int | str | Fraction | mpf | None, optional
        Infimum of the interval. Rounded towards negative infinity.
    sup : endtype | float | int | str | Fraction | mpf | None, optional
        Supremum of the interval. Rounded towards positive infinity. Defaults to
        `inf`, so that ``Interval(r)`` is the tightest enclosure of `r`.

    Attributes
    ----------
    inf : endtype
        Infimum of the interval.
    sup : endtype
        Supremum of the interval.
    converter : Converter
    endtype : type[endtype]
    operator : Operator

    Raises
    ------
    ValueError
        If ``inf > sup`` or an endpoint is NaN.

    Notes
    -----
    Intervals are immutable; every operation returns a new interval. The named
    methods :meth:`add`, :meth:`sub`, :meth:`mul`, :meth:`div`, and :meth:`sqrt`
    carry the semantics, and the arithmetic operators delegate to them after
    promoting scalar operands with :meth:`fromscalar`.

    Classes that inherit from this must define class constants `converter`,
    `operator`, and `endtype`, where `endtype` is a type of endpoints.
    """

    __slots__ = ("inf", "sup")
    inf: T
    sup: T
    converter: Converter[T]
    endtype: type[T]
    operator: Operator[T]

    def __init__(self, inf: Any = None, sup: Any = None):
        if inf is None:
            if sup is None:
                inf = sup = self.operator.ZERO
            else:
                inf = sup
        elif sup is None:
            sup = inf

        object.__setattr__(self, "inf", self._endpoint(inf, ROUND_FLOOR))
        object.__setattr__(self, "sup", self._endpoint(sup, ROUND_CEILING))

        if not self.inf <= self.sup:
            raise ValueError(f"invalid interval bounds: inf={inf!r}, sup={sup!r}")

    @classmethod
    def _endpoint(cls, value: Any, rounding: RoundingMode) -> T:
        match value:
            case cls.endtype():
                return value

            case str():
                return cls.converter.fromstr(value, rounding)

            case int():
                return cls.converter.fromint(value, rounding)

            case float():
                return cls.converter.fromfloat(value)

            case fractions.Fraction():
                return cls.converter.fromfraction(value, rounding)

            case mpmath.mpf():
                return cls.converter.frommpf(value, rounding)

        raise TypeError(f"unsupported endpoint type: {type(value).__name__}")

    @classmethod
    def fromscalar(cls, value: Any) -> Self:
        """Return the tightest interval that is guaranteed to contain `value`.

        The infimum is `value` rounded towards negative infinity and the supremum is
        `value` rounded towards positive infinity, so a real number that is not
        representable is never excluded.

        Raises
        ------
        TypeError
            If `value` is not a supported scalar.

        Examples
        --------
        >>> from pibound import FloatInterval as FI
        >>> x = FI.fromscalar("0.1")
        >>> x.inf < x.sup
        True
        >>> FI.fromscalar(0.5) == FI(0.5, 0.5)
        True
        """
        return cls(value, value)

    @classmethod
    def ensure(cls, value: Any) -> Self:
        """Return `value` if it is an interval, otherwise promote it to one."""
        return value if isinstance(value, cls) else cls.fromscalar(value)

    def _promote(self, value: Any) -> Self | None:
        match value:
            case self.__class__():
                return value

            case self.endtype() | int() | float() | fractions.Fraction() | mpmath.mpf():
                return self.fromscalar(value)

        return None

    def _operand(self, value: Any) -> Self:
        if (result := self._promote(value)) is None:
            raise TypeError(f"unsupported operand type: {type(value).__name__}")

        return result

    def add(self, rhs: Any) -> Self:
        """Return an enclosure of ``{x + y | x in self, y in rhs}``."""
        rhs = self._operand(rhs)
        inf = self.operator.fadd(self.inf, rhs.inf)
        sup = self.operator.cadd(self.sup, rhs.sup)
        return self.__class__(inf, sup)

    def sub(self, rhs: Any) -> Self:
        """Return an enclosure of ``{x - y | x in self, y in rhs}``."""
        rhs = self._operand(rhs)
        inf = self.operator.fsub(self.inf, rhs.sup)
        sup = self.operator.csub(self.sup, rhs.inf)
        return self.__class__(inf, sup)

    def mul(self, rhs: Any) -> Self:
        """Return an enclosure of ``{x * y | x in self, y in rhs}``.

        The bounds are the extreme cross products of the endpoints, selected by the
        signs of the operands.
        """
        rhs = self._operand(rhs)
        ZERO = self.operator.ZERO
        cmul = self.operator.cmul
        fmul = self.operator.fmul

        if self.sup <= ZERO:
            if rhs.sup <= ZERO:
                inf = fmul(self.sup, rhs.sup)
                sup = cmul(self.inf, rhs.inf)
            elif rhs.inf >= ZERO:
                inf = fmul(self.inf, rhs.sup)
                sup = cmul(self.sup, rhs.inf)
            else:
                inf = fmul(self.inf, rhs.sup)
                sup = cmul(self.inf, rhs.inf)

            return self.__class__(inf, sup)

        if self.inf >= ZERO:
            if rhs.sup <= ZERO:
                inf = fmul(self.sup, rhs.inf)
                sup = cmul(self.inf, rhs.sup)
            elif rhs.inf >= ZERO:
                inf = fmul(self.inf, rhs.inf)
                sup = cmul(self.sup, rhs.sup)
            else:
                inf = fmul(self.sup, rhs.inf)
                sup = cmul(self.sup, rhs.sup)

            return self.__class__(inf, sup)

        if rhs.sup <= ZERO:
            inf = fmul(self.sup, rhs.inf)
            sup = cmul(self.inf, rhs.inf)
        elif rhs.inf >= ZERO:
            inf = fmul(self.inf, rhs.sup)
            sup = cmul(self.sup, rhs.sup)
        else:
            inf = min(fmul(self.inf, rhs.sup), fmul(self.sup, rhs.inf))
            sup = max(cmul(self.inf, rhs.inf), cmul(self.sup, rhs.sup))

        return self.__class__(inf, sup)

    def div(self, rhs: Any) -> Self:
        """Return an enclosure of ``{x / y | x in self, y in rhs}``.

        Raises
        ------
        ZeroDivisionError
            If `rhs` contains zero.
        """
        rhs = self._operand(rhs)
        ZERO = self.operator.ZERO
        cdiv = self.operator.cdiv
        fdiv = self.operator.fdiv

        if rhs.inf <= ZERO <= rhs.sup:
            raise ZeroDivisionError("division by an interval containing zero")

        if rhs.sup < ZERO:
            if self.sup < ZERO:
                inf = fdiv(self.sup, rhs.inf)
                sup = cdiv(self.inf, rhs.sup)
            elif self.inf > ZERO:
                inf = fdiv(self.sup, rhs.sup)
                sup = cdiv(self.inf, rhs.inf)
            else:
                inf = fdiv(self.sup, rhs.sup)
                sup = cdiv(self.inf, rhs.sup)

            return self.__class__(inf, sup)

        if self.sup < ZERO:
            inf = fdiv(self.inf, rhs.inf)
            sup = cdiv(self.sup, rhs.sup)
        elif self.inf > ZERO:
            inf = fdiv(self.inf, rhs.sup)
            sup = cdiv(self.sup, rhs.inf)
        else:
            inf = fdiv(self.inf, rhs.inf)
            sup = cdiv(self.sup, rhs.inf)

        return self.__class__(inf, sup)

    def sqrt(self) -> Self:
        """Return an enclosure of ``{sqrt(x) | x in self, x >= 0}``.

        Raises
        ------
        ValueError
            If every element of the interval is negative.
        """
        ZERO = self.operator.ZERO

        if self.sup < ZERO:
            raise ValueError("math domain error")

        inf = self.operator.fsqr(max(self.inf, ZERO))
        sup = self.operator.csqr(self.sup)
        return self.__class__(inf, sup)

    def contains(self, item: Any) -> bool:
        """Return ``True`` if `item` lies in the interval.

        Scalars are compared exactly, so a high-precision reference value such as an
        :class:`mpmath.mpf` can be tested against a binary64 enclosure. An interval is
        contained if it is a subset.
        """
        match item:
            case self.__class__():
                return item.issubset(self)

            case self.endtype() | int() | float() | fractions.Fraction() | mpmath.mpf():
                INFINITY = self.operator.INFINITY

                if item != item or abs(item) == INFINITY:
                    return False

                return self.inf <= item <= self.sup

        raise TypeError(f"unsupported item type: {type(item).__name__}")

    def diam(self) -> T:
        """Return an upper bound of the diameter.

        Warning
        -------
        ``x.diam()`` might not be finite even if `x` is bounded.

        Examples
        --------
        >>> from pibound import FloatInterval
        >>> x = FloatInterval(-1, 1)
        >>> x.diam()
        2.0
        >>> y = 1e+308 * x
        >>> y.isbounded()
        True
        >>> y.diam()  # results in a positive infinity due to overflow.
        inf
        """
        return self.operator.csub(self.sup, self.inf)

    def hull(self, *args: Any) -> Self:
        """Return an interval hull."""
        result = self

        for arg in args:
            result |= arg

        return result

    def isbounded(self) -> bool:
        """Return ``True`` if both `inf` and `sup` are finite."""
        return self.mag() < self.operator.INFINITY

    def issubset(self, other: Self) -> bool:
        """Test whether every element in the interval is in `other`."""
        if type(self) is not type(other):
            return False

        return self.inf >= other.inf and self.sup <= other.sup

    def issuperset(self, other: Self) -> bool:
        """Test whether every element in `other` is in the interval."""
        if type(self) is not type(other):
            return False

        return self.inf <= other.inf and self.sup >= other.sup

    def mag(self) -> T:
        """Return a magnitude of the interval.

        The magnitude of `x` is defined as ``max(abs(x.inf), abs(x.sup))``.
        """
        return max(abs(self.inf), abs(self.sup))

    @abstractmethod
    def mid(self) -> T:
        """Return an approximation of the midpoint.

        ``x.mid() in x`` is guaranteed to be ``True`` for any `x`.
        """
        raise NotImplementedError

    def rad(self) -> T:
        """Return an upper bound of the radius."""
        return (self - self.mid()).mag()

    def width(self) -> T:
        """Alias of :meth:`diam`."""
        return self.diam()

    def _pibound_overload_(self, fun, *args, **kwargs):
        if fun is pbf.sqrt:
            return self.sqrt()

        return NotImplemented

    def __setattr__(self, name, value):
        raise AttributeError(f"'{type(self).__name__}' object is immutable")

    def __delattr__(self, name):
        raise AttributeError(f"'{type(self).__name__}' object is immutable")

    def __repr__(self) -> str:
        try:
            inf = self.converter.repr(self.inf)
            sup = self.converter.repr(self.sup)
            return f"{type(self).__name__}(inf={inf}, sup={sup})"
        except NotImplementedError:
            return super().__repr__()

    def __str__(self) -> str:
        try:
            inf = self.converter.tostr(self.inf, ROUND_FLOOR)
            sup = self.converter.tostr(self.sup, ROUND_CEILING)
            return f"[{inf}, {sup}]"
        except NotImplementedError:
            return self.__repr__()

    def __eq__(self, other) -> bool:
        if type(other) is not type(self):
            return NotImplemented

        return other.inf == self.inf and other.sup == self.sup

    def __hash__(self) -> int:
        return hash((type(self), self.inf, self.sup))

    def __lt__(self, rhs: Any) -> bool:
        if (rhs := self._promote(rhs)) is None:
            return NotImplemented

        return self.sup < rhs.inf

    def __le__(self, rhs: Any) -> bool:
        if (rhs := self._promote(rhs)) is None:
            return NotImplemented

        return self.sup <= rhs.inf

    def __gt__(self, rhs: Any) -> bool:
        if (rhs := self._promote(rhs)) is None:
            return NotImplemented

        return self.inf > rhs.sup

    def __ge__(self, rhs: Any) -> bool:
        if (rhs := self._promote(rhs)) is None:
            return NotImplemented

        return self.inf >= rhs.sup

    def __contains__(self, item) -> bool:
        return self.contains(item)

    def __add__(self, rhs: Any) -> Self:
        if (rhs := self._promote(rhs)) is None:
            return NotImplemented

        return self.add(rhs)

    def __sub__(self, rhs: Any) -> Self:
        if (rhs := self._promote(rhs)) is None:
            return NotImplemented

        return self.sub(rhs)

    def __mul__(self, rhs: Any) -> Self:
        if (rhs := self._promote(rhs)) is None:
            return NotImplemented

        return self.mul(rhs)

    def __truediv__(self, rhs: Any) -> Self:
        if (rhs := self._promote(rhs)) is None:
            return NotImplemented

        return self.div(rhs)

    def __pow__(self, rhs: int) -> Self:
        ONE = self.operator.ONE

        if not isinstance(rhs, int):
            return NotImplemented

        if rhs < 0:
            return self.__pow__(-rhs).__rtruediv__(ONE)

        # even powers of a sign-changing interval are tight on its absolute value
        tmp = abs(self) if rhs % 2 == 0 else self
        result = self.__class__(ONE)

        while rhs != 0:
            if rhs % 2 != 0:
                result *= tmp

            rhs //= 2

            if rhs != 0:
                tmp *= tmp

        return result

    def __and__(self, rhs: Any) -> Self:
        if (rhs := self._promote(rhs)) is None:
            return NotImplemented

        inf = max(self.inf, rhs.inf)
        sup = min(self.sup, rhs.sup)

        if inf > sup:
            raise ValueError("intervals are disjoint")

        return self.__class__(inf, sup)

    def __or__(self, rhs: Any) -> Self:
        if (rhs := self._promote(rhs)) is None:
            return NotImplemented

        return self.__class__(min(self.inf, rhs.inf), max(self.sup, rhs.sup))

    def __radd__(self, lhs: Any) -> Self:
        return self.__add__(lhs)

    def __rsub__(self, lhs: Any) -> Self:
        if (lhs := self._promote(lhs)) is None:
            return NotImplemented

        return lhs.sub(self)

    def __rmul__(self, lhs: Any) -> Self:
        return self.__mul__(lhs)

    def __rtruediv__(self, lhs: Any) -> Self:
        if (lhs := self._promote(lhs)) is None:
            return NotImplemented

        return lhs.div(self)

    def __rand__(self, lhs: Any) -> Self:
        return self.__and__(lhs)

    def __ror__(self, lhs: Any) -> Self:
        return self.__or__(lhs)

    def __neg__(self) -> Self:
        return self.__class__(-self.sup, -self.inf)

    def __pos__(self) -> Self:
        return self

    def __abs__(self) -> Self:
        ZERO = self.operator.ZERO

        if self.inf >= ZERO:
            return self

        if self.sup <= ZERO:
            return -self

        return self.__class__(ZERO, max(-self.inf, self.sup))

    def __copy__(self) -> Self:
        return self

    def __deepcopy__(self, memo) -> Self:
        return self

    def __reduce__(self):
        return (self.__class__, (self.inf, self.sup))
