# rational3d/domain/core/numbers.py
"""Exact scalar layer.

Geometry is computed with ``fractions.Fraction`` throughout. The only
values that cannot be held exactly are square roots (and the sines and
cosines used by rotation); those are represented symbolically by
``RationalSqrt`` and only turned into a ``decimal.Decimal`` when a caller
asks for one, to a given order of magnitude (OOM) and rounding mode.

An OOM of ``-3`` means "round to the nearest 10**-3", i.e. three decimal
places; an OOM of ``2`` rounds to hundreds.
"""
import decimal
import math
from decimal import Decimal, localcontext
from enum import Enum
from fractions import Fraction
from typing import Annotated, Any, Dict, Optional, Tuple, Union

from pydantic import Field, PlainValidator, PrivateAttr, field_validator

from rational3d.utils.base_model import ImmutableModel

RationalLike = Union[Fraction, int, str, Decimal, float]

_HALF = Fraction(1, 2)


class RoundingMode(str, Enum):
    """Rounding policies, one for each ``decimal`` rounding constant."""
    CEILING = decimal.ROUND_CEILING
    DOWN = decimal.ROUND_DOWN
    FLOOR = decimal.ROUND_FLOOR
    HALF_DOWN = decimal.ROUND_HALF_DOWN
    HALF_EVEN = decimal.ROUND_HALF_EVEN
    HALF_UP = decimal.ROUND_HALF_UP
    UP = decimal.ROUND_UP
    UP_05 = decimal.ROUND_05UP


def to_rational(value: Any) -> Fraction:
    """
    Convert a number to an exact Fraction.

    Accepts Fraction, int, Decimal, finite float and strings such as "1/3" or "0.25".
    Floats are converted exactly (their binary value), so prefer strings for
    decimal literals.

    Raises:
        ValueError: If the value is not a finite number
    """
    if isinstance(value, Fraction):
        return value
    if isinstance(value, bool):
        raise ValueError(f"Expected a number, got {value!r}")
    if isinstance(value, int):
        return Fraction(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"Coordinate must be a finite number, got {value}")
        return Fraction(value)
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Coordinate must be a finite number, got {value}")
        return Fraction(value)
    if isinstance(value, str):
        try:
            return Fraction(value.strip())
        except (ValueError, ZeroDivisionError) as e:
            raise ValueError(f"Cannot interpret {value!r} as a rational number") from e
    raise ValueError(f"Cannot interpret {value!r} as a rational number")


# Field type for exact scalar fields on models
Rational = Annotated[Fraction, PlainValidator(to_rational)]


def sign(value: Fraction) -> int:
    """Return -1, 0 or 1."""
    return (value > 0) - (value < 0)


def exact_sqrt(value: Fraction) -> Optional[Fraction]:
    """Return the rational square root of a non-negative rational, or None if it is irrational."""
    if value < 0:
        raise ValueError(f"Cannot take the square root of a negative number: {value}")
    numerator_root = math.isqrt(value.numerator)
    denominator_root = math.isqrt(value.denominator)
    if (numerator_root * numerator_root == value.numerator
            and denominator_root * denominator_root == value.denominator):
        return Fraction(numerator_root, denominator_root)
    return None


def _round_scaled(scaled: Fraction, rounding: RoundingMode) -> int:
    """Round a rational to an integer following a decimal rounding mode."""
    floor = scaled.numerator // scaled.denominator
    remainder = scaled - floor
    if remainder == 0:
        return floor
    ceiling = floor + 1
    negative = scaled < 0
    toward_zero = ceiling if negative else floor
    away_from_zero = floor if negative else ceiling

    if rounding is RoundingMode.FLOOR:
        return floor
    if rounding is RoundingMode.CEILING:
        return ceiling
    if rounding is RoundingMode.DOWN:
        return toward_zero
    if rounding is RoundingMode.UP:
        return away_from_zero
    if rounding is RoundingMode.UP_05:
        return away_from_zero if abs(toward_zero) % 10 in (0, 5) else toward_zero

    if remainder < _HALF:
        return floor
    if remainder > _HALF:
        return ceiling
    # Exactly half way
    if rounding is RoundingMode.HALF_UP:
        return away_from_zero
    if rounding is RoundingMode.HALF_DOWN:
        return toward_zero
    return floor if floor % 2 == 0 else ceiling


def _to_decimal(units: int, oom: int) -> Decimal:
    # String construction is exact; Decimal.scaleb would round to the context precision
    return Decimal(f"{units}E{oom}")


def round_rational(value: RationalLike, oom: int, rounding: RoundingMode) -> Decimal:
    """
    Round an exact rational to a multiple of 10**oom.

    Args:
        value: The value to round
        oom: Order of magnitude of the last retained digit
        rounding: Rounding mode

    Returns:
        The rounded value, with exponent ``oom``
    """
    value = to_rational(value)
    scaled = value / Fraction(10) ** oom
    return _to_decimal(_round_scaled(scaled, RoundingMode(rounding)), oom)


def round_sqrt(square: RationalLike, oom: int, rounding: RoundingMode,
               negative: bool = False) -> Decimal:
    """
    Round the square root of a non-negative rational to a multiple of 10**oom.

    The result is correct to the last digit for every rounding mode: the
    comparison against the rounding boundary is done on squares, never on an
    approximation of the root.

    Args:
        square: The value whose square root is wanted
        oom: Order of magnitude of the last retained digit
        rounding: Rounding mode
        negative: Round the negated root instead

    Returns:
        The rounded (possibly negated) root, with exponent ``oom``
    """
    square = to_rational(square)
    rounding = RoundingMode(rounding)
    root = exact_sqrt(square)
    if root is not None:
        return round_rational(-root if negative else root, oom, rounding)

    scaled = square / Fraction(100) ** oom
    # floor(sqrt(a/b)) == isqrt(a*b) // b
    floor = math.isqrt(scaled.numerator * scaled.denominator) // scaled.denominator
    # The root is irrational, so it is never exactly on a boundary. Any rational
    # strictly between the same boundaries rounds identically.
    boundary = (floor + _HALF) ** 2
    stand_in = floor + (Fraction(3, 4) if scaled > boundary else Fraction(1, 4))
    if negative:
        stand_in = -stand_in
    return _to_decimal(_round_scaled(stand_in, rounding), oom)


class RationalSqrt(ImmutableModel):
    """
    The non-negative square root of a non-negative rational.

    Comparisons are made on the squares, so they are exact. Decimal
    approximations are cached per (oom, rounding) pair.
    """
    square: Rational = Field(description="The value under the square root")

    _decimals: Dict[Tuple[int, RoundingMode], Decimal] = PrivateAttr(default_factory=dict)

    @field_validator("square")
    @classmethod
    def validate_square(cls, value: Fraction) -> Fraction:
        """Validate that the square is non-negative."""
        if value < 0:
            raise ValueError(f"Square must be non-negative, got {value}")
        return value

    @property
    def exact(self) -> Optional[Fraction]:
        """The root as a Fraction if it is rational, otherwise None."""
        return exact_sqrt(self.square)

    def is_zero(self) -> bool:
        return self.square == 0

    def to_decimal(self, oom: Optional[int] = None,
                   rounding: Optional[RoundingMode] = None) -> Decimal:
        """Return the root rounded to a multiple of 10**oom."""
        from rational3d.domain.core.settings import resolve_precision

        oom, rounding = resolve_precision(oom, rounding)
        key = (oom, rounding)
        cached = self._decimals.get(key)
        if cached is None:
            cached = round_sqrt(self.square, oom, rounding)
            # Racing writers store the same value
            self._decimals[key] = cached
        return cached

    def __eq__(self, other: object) -> bool:
        if isinstance(other, RationalSqrt):
            return self.square == other.square
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.square)

    def __lt__(self, other: "RationalSqrt") -> bool:
        return self.square < other.square

    def __le__(self, other: "RationalSqrt") -> bool:
        return self.square <= other.square

    def __gt__(self, other: "RationalSqrt") -> bool:
        return self.square > other.square

    def __ge__(self, other: "RationalSqrt") -> bool:
        return self.square >= other.square

    def __str__(self) -> str:
        root = self.exact
        return str(root) if root is not None else f"sqrt({self.square})"


def decimal_pi(digits: int) -> Decimal:
    """Compute pi to the given number of significant digits."""
    with localcontext() as ctx:
        ctx.prec = digits + 2
        three = Decimal(3)
        lasts, t, s, n, na, d, da = 0, three, 3, 1, 0, 0, 24
        while s != lasts:
            lasts = s
            n, na = n + na, na + 8
            d, da = d + da, da + 32
            t = (t * n) / d
            s += t
        ctx.prec = digits
        return +s


def _reduce_angle(angle: Fraction, digits: int) -> Decimal:
    """Convert an angle to a Decimal in [-pi, pi]."""
    magnitude_digits = len(str(abs(angle.numerator // angle.denominator)))
    with localcontext() as ctx:
        ctx.prec = digits + magnitude_digits + 2
        x = Decimal(angle.numerator) / Decimal(angle.denominator)
        two_pi = 2 * decimal_pi(ctx.prec)
        turns = (x / two_pi).to_integral_value(rounding=decimal.ROUND_HALF_EVEN)
        return x - turns * two_pi


def decimal_cos(angle: RationalLike, digits: int) -> Decimal:
    """Compute cos(angle) in radians to the given number of significant digits."""
    angle = to_rational(angle)
    if angle == 0:
        return Decimal(1)
    x = _reduce_angle(angle, digits)
    with localcontext() as ctx:
        ctx.prec = digits + 2
        i, lasts, s, fact, num, term_sign = 0, 0, Decimal(1), 1, Decimal(1), 1
        while s != lasts:
            lasts = s
            i += 2
            fact *= i * (i - 1)
            num *= x * x
            term_sign *= -1
            s += num / fact * term_sign
        ctx.prec = digits
        return +s


def decimal_sin(angle: RationalLike, digits: int) -> Decimal:
    """Compute sin(angle) in radians to the given number of significant digits."""
    angle = to_rational(angle)
    if angle == 0:
        return Decimal(0)
    x = _reduce_angle(angle, digits)
    with localcontext() as ctx:
        ctx.prec = digits + 2
        i, lasts, s, fact, num, term_sign = 1, 0, x, 1, x, 1
        while s != lasts:
            lasts = s
            i += 2
            fact *= i * (i - 1)
            num *= x * x
            term_sign *= -1
            s += num / fact * term_sign
        ctx.prec = digits
        return +s


def decimal_atan(value: RationalLike, digits: int) -> Decimal:
    """Compute atan(value) in radians to the given number of significant digits."""
    x = to_rational(value)
    if x == 0:
        return Decimal(0)
    if x < 0:
        return -decimal_atan(-x, digits)
    with localcontext() as ctx:
        ctx.prec = digits + 5
        if x > 1:
            # atan(x) = pi/2 - atan(1/x)
            s = decimal_pi(ctx.prec) / 2 - decimal_atan(1 / x, ctx.prec)
        else:
            y = Decimal(x.numerator) / Decimal(x.denominator)
            # Two half-angle steps bring y below tan(pi/16)
            for _ in range(2):
                y = y / (1 + (1 + y * y).sqrt())
            i, lasts, s, num, term_sign = 1, 0, y, y, 1
            while s != lasts:
                lasts = s
                i += 2
                num *= y * y
                term_sign *= -1
                s += num / i * term_sign
            s *= 4
        ctx.prec = digits
        return +s


def round_sqrt_sum(squares, oom: int, rounding: RoundingMode,
                   guard_digits: int = 5) -> Decimal:
    """
    Round a sum of square roots to a multiple of 10**oom.

    Rational roots are summed exactly. Irrational roots are each rounded
    with guard_digits extra digits (plus one per decade of terms) before
    the total is rounded to oom, so the result is exact unless the true
    sum lies within the guard error of a rounding boundary.

    Args:
        squares: The non-negative values whose roots are summed
        oom: Order of magnitude of the last retained digit
        rounding: Rounding mode
        guard_digits: Extra digits carried by each irrational term

    Returns:
        The rounded sum, with exponent ``oom``
    """
    total = Fraction(0)
    irrational = []
    for square in squares:
        square = to_rational(square)
        root = exact_sqrt(square)
        if root is None:
            irrational.append(square)
        else:
            total += root
    if irrational:
        working_oom = oom - guard_digits - len(str(len(irrational)))
        total += sum(to_rational(round_sqrt(square, working_oom, RoundingMode.HALF_EVEN))
                     for square in irrational)
    return round_rational(total, oom, rounding)
