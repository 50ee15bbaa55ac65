# tests/domain/core/test_numbers.py
import pytest
from decimal import Decimal, localcontext
from fractions import Fraction

from rational3d.domain.core.numbers import (
    RationalSqrt,
    RoundingMode,
    decimal_atan,
    decimal_cos,
    decimal_pi,
    decimal_sin,
    exact_sqrt,
    round_rational,
    round_sqrt,
    round_sqrt_sum,
    sign,
    to_rational,
)

VALUES = ["2.5", "-2.5", "1.25", "-0.0051", "7.49", "15.5", "0.05", "-3"]


def high_precision_sqrt(value: Fraction) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = 60
        return (Decimal(value.numerator) / Decimal(value.denominator)).sqrt()


class TestToRational:
    """Test cases for scalar conversion."""

    def test_accepted_inputs(self):
        assert to_rational(3) == Fraction(3)
        assert to_rational("1/3") == Fraction(1, 3)
        assert to_rational("0.25") == Fraction(1, 4)
        assert to_rational(Decimal("0.1")) == Fraction(1, 10)
        assert to_rational(0.5) == Fraction(1, 2)

    def test_fraction_is_returned_unchanged(self):
        value = Fraction(2, 7)
        assert to_rational(value) is value

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), Decimal("NaN"), "abc", True, None])
    def test_rejected_inputs(self, value):
        with pytest.raises(ValueError):
            to_rational(value)

    def test_sign(self):
        assert sign(Fraction(-2, 3)) == -1
        assert sign(Fraction(0)) == 0
        assert sign(Fraction(1, 9)) == 1


class TestRoundRational:
    """Rounding agrees with decimal quantisation for every mode."""

    @pytest.mark.parametrize("mode", list(RoundingMode))
    @pytest.mark.parametrize("value", VALUES)
    @pytest.mark.parametrize("oom", [0, -1, -2])
    def test_matches_decimal_quantize(self, value, oom, mode):
        expected = Decimal(value).quantize(Decimal(f"1E{oom}"), rounding=mode.value)
        result = round_rational(Fraction(value), oom, mode)

        assert result == expected
        assert result.as_tuple().exponent == oom

    def test_positive_oom(self):
        assert round_rational(1250, 2, RoundingMode.HALF_EVEN) == Decimal("1.2E3")
        assert round_rational(1250, 2, RoundingMode.HALF_UP) == Decimal("1.3E3")

    def test_non_terminating_fraction(self):
        assert round_rational(Fraction(2, 3), -3, RoundingMode.HALF_UP) == Decimal("0.667")
        assert round_rational(Fraction(-2, 3), -3, RoundingMode.DOWN) == Decimal("-0.666")


class TestRoundSqrt:
    """Square roots are rounded correctly to the last digit."""

    @pytest.mark.parametrize("mode", list(RoundingMode))
    @pytest.mark.parametrize("square", [Fraction(2), Fraction(3), Fraction(1, 3), Fraction(10), Fraction(7, 2)])
    def test_matches_high_precision_root(self, square, mode):
        expected = high_precision_sqrt(square).quantize(Decimal("1E-6"), rounding=mode.value)
        assert round_sqrt(square, -6, mode) == expected

    def test_perfect_squares_are_exact(self):
        assert round_sqrt(Fraction(9, 4), -3, RoundingMode.HALF_UP) == Decimal("1.500")
        assert round_sqrt(16, 0, RoundingMode.UP) == Decimal("4")

    def test_negative_root(self):
        assert round_sqrt(2, -3, RoundingMode.FLOOR, negative=True) == Decimal("-1.415")
        assert round_sqrt(2, -3, RoundingMode.CEILING, negative=True) == Decimal("-1.414")

    def test_exact_sqrt(self):
        assert exact_sqrt(Fraction(9, 4)) == Fraction(3, 2)
        assert exact_sqrt(Fraction(2)) is None
        with pytest.raises(ValueError):
            exact_sqrt(Fraction(-1))


class TestRationalSqrt:
    """Test cases for the symbolic square root."""

    def test_exact_root(self):
        assert RationalSqrt(square=Fraction(25, 9)).exact == Fraction(5, 3)
        assert RationalSqrt(square=2).exact is None

    def test_comparisons_use_squares(self):
        root2 = RationalSqrt(square=2)
        root3 = RationalSqrt(square=3)

        assert root2 < root3
        assert root3 >= root2
        assert root2 == RationalSqrt(square="2")
        assert hash(root2) == hash(RationalSqrt(square=2))

    def test_to_decimal(self):
        root2 = RationalSqrt(square=2)
        assert root2.to_decimal(-3, RoundingMode.HALF_UP) == Decimal("1.414")
        assert root2.to_decimal(-3, RoundingMode.UP) == Decimal("1.415")

    def test_to_decimal_is_cached(self):
        root2 = RationalSqrt(square=2)
        assert root2.to_decimal(-4) is root2.to_decimal(-4)

    def test_negative_square_rejected(self):
        with pytest.raises(ValueError):
            RationalSqrt(square=-1)

    def test_str(self):
        assert str(RationalSqrt(square=4)) == "2"
        assert str(RationalSqrt(square=2)) == "sqrt(2)"


class TestTrigonometry:
    """Series evaluation of pi, sine and cosine."""

    def test_pi(self):
        assert str(decimal_pi(10)) == "3.141592654"

    def test_zero_angle(self):
        assert decimal_cos(0, 10) == 1
        assert decimal_sin(0, 10) == 0

    def test_sin_and_cos_of_one(self):
        assert abs(decimal_sin(1, 20) - Decimal("0.84147098480789650665")) < Decimal("1E-19")
        assert abs(decimal_cos(1, 20) - Decimal("0.54030230586813971740")) < Decimal("1E-19")

    def test_angle_reduction(self):
        # 7 radians is one turn plus 0.7168...
        assert abs(decimal_sin(7, 15) - Decimal("0.656986598718789")) < Decimal("1E-14")

    def test_half_pi(self):
        half_pi = Fraction(decimal_pi(40)) / 2
        assert abs(decimal_sin(half_pi, 20) - 1) < Decimal("1E-18")
        assert abs(decimal_cos(half_pi, 20)) < Decimal("1E-18")

    def test_atan(self):
        with localcontext() as ctx:
            ctx.prec = 40
            quarter_pi = decimal_pi(40) / 4
            assert abs(decimal_atan(1, 30) - quarter_pi) < Decimal("1E-29")
        assert decimal_atan(0, 10) == 0

    def test_atan_large_and_negative_arguments(self):
        # atan(sqrt(3)) = pi/3 and atan(-1/sqrt(3)) = -pi/6
        pi = decimal_pi(40)
        with localcontext() as ctx:
            ctx.prec = 40
            root_three = Decimal(3).sqrt()
            assert abs(decimal_atan(root_three, 25) - pi / 3) < Decimal("1E-24")
            assert abs(decimal_atan(-1 / root_three, 25) + pi / 6) < Decimal("1E-24")


class TestRoundSqrtSum:
    """Sums of square roots are rounded once at the requested magnitude."""

    def test_rational_roots_are_summed_exactly(self):
        assert round_sqrt_sum([4, Fraction(9, 4)], -1, RoundingMode.HALF_UP) == Decimal("3.5")
        assert round_sqrt_sum([Fraction(1, 4), Fraction(1, 4)], 0, RoundingMode.HALF_EVEN) == Decimal("1")

    def test_irrational_roots(self):
        # sqrt(2) + sqrt(8) = 3 sqrt(2) = 4.2426406871...
        assert round_sqrt_sum([2, 8], -5, RoundingMode.HALF_UP) == Decimal("4.24264")
        assert round_sqrt_sum([2, 8], -5, RoundingMode.UP) == Decimal("4.24265")

    def test_mixed_roots(self):
        # 1 + sqrt(3) = 2.7320508...
        assert round_sqrt_sum([1, 3], -3, RoundingMode.HALF_UP) == Decimal("2.732")

    def test_empty_sum(self):
        assert round_sqrt_sum([], -2, RoundingMode.HALF_UP) == Decimal("0.00")
