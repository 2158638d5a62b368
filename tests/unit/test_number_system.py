"""
Тесты для модуля Number System

Проверяет:
1. narrow() без потери точности
2. Правила приведения типов (float заражает, Decimal + Fraction → Fraction)
3. Точную Decimal арифметику (без округления контекста)
4. Domain ошибки (деление на 0, 0^0, log(x <= 0))
5. Целочисленное деление с остатком
6. exp/log/to_decimal с конфигурируемой точностью
"""

from decimal import Decimal
from fractions import Fraction

import pytest

from src.core.math.number_system import (
    DECIMAL128_PRECISION,
    MAX_NARROW_DIGITS,
    NumberDomainError,
    NumberSystem,
    NumberSystemConfig,
    check_number,
    rational,
)


@pytest.fixture
def ns() -> NumberSystem:
    return NumberSystem()


# =============================================================================
# CONFIG & HELPERS
# =============================================================================


class TestNumberSystemConfig:
    """Тесты для NumberSystemConfig"""

    def test_defaults(self) -> None:
        config = NumberSystemConfig()
        assert config.decimal_precision == DECIMAL128_PRECISION == 34
        assert config.pi_digits == 34

    def test_non_positive_precision_rejected(self) -> None:
        with pytest.raises(ValueError, match="decimal_precision"):
            NumberSystemConfig(decimal_precision=0)
        with pytest.raises(ValueError, match="pi_digits"):
            NumberSystemConfig(pi_digits=-1)

    def test_current_is_shared_default(self) -> None:
        assert NumberSystem.current() is NumberSystem.current()
        assert NumberSystem.current().config == NumberSystemConfig()


class TestRational:
    """Тесты для rational()"""

    def test_reduced_form(self) -> None:
        assert rational(2, 4) == rational(1, 2)
        assert rational(1, -2) == Fraction(-1, 2)

    def test_zero_divisor(self) -> None:
        with pytest.raises(NumberDomainError):
            rational(1, 0)


class TestCheckNumber:
    """Тесты для check_number()"""

    @pytest.mark.parametrize("value", [1, Fraction(1, 3), Decimal("2.5"), 0.5])
    def test_members_accepted(self, value) -> None:
        assert check_number(value) is value

    @pytest.mark.parametrize("value", [None, "1", 1j, [1]])
    def test_non_numbers_rejected(self, value) -> None:
        with pytest.raises(ValueError):
            check_number(value)

    def test_non_finite_decimal_is_domain_error(self) -> None:
        with pytest.raises(NumberDomainError):
            check_number(Decimal("NaN"))
        with pytest.raises(NumberDomainError):
            check_number(Decimal("Infinity"))


# =============================================================================
# NARROWING
# =============================================================================


class TestNarrow:
    """Тесты для narrow()"""

    def test_whole_fraction_becomes_int(self, ns: NumberSystem) -> None:
        result = ns.narrow(Fraction(4, 2))
        assert result == 2
        assert type(result) is int

    def test_integral_decimal_becomes_int(self, ns: NumberSystem) -> None:
        result = ns.narrow(Decimal("3.00"))
        assert result == 3
        assert type(result) is int

    def test_bool_becomes_int(self, ns: NumberSystem) -> None:
        assert type(ns.narrow(True)) is int

    def test_non_integral_values_unchanged(self, ns: NumberSystem) -> None:
        assert ns.narrow(Decimal("2.5")) == Decimal("2.5")
        assert ns.narrow(Fraction(1, 3)) == Fraction(1, 3)
        assert ns.narrow(2.0) == 2.0
        assert type(ns.narrow(2.0)) is float

    def test_big_integer_unchanged(self, ns: NumberSystem) -> None:
        big = 10**40 + 1
        assert ns.narrow(Fraction(big, 1)) == big

    def test_decimal_with_huge_exponent_stays_decimal(self, ns: NumberSystem) -> None:
        """Целое с сотней миллионов цифр не разворачивается в int"""
        huge = Decimal("1E+100000000")
        result = ns.narrow(huge)
        assert type(result) is Decimal
        assert result == huge

    def test_decimal_at_digit_limit_becomes_int(self, ns: NumberSystem) -> None:
        result = ns.narrow(Decimal(f"1E+{MAX_NARROW_DIGITS - 1}"))
        assert result == 10 ** (MAX_NARROW_DIGITS - 1)
        assert type(result) is int
        assert type(ns.narrow(Decimal(f"1E+{MAX_NARROW_DIGITS}"))) is Decimal


# =============================================================================
# ARITHMETIC
# =============================================================================


class TestArithmetic:
    """Тесты бинарных операций"""

    def test_decimal_addition_is_exact(self, ns: NumberSystem) -> None:
        assert ns.add(Decimal("0.1"), Decimal("0.2")) == Decimal("0.3")

    def test_decimal_addition_never_rounds(self, ns: NumberSystem) -> None:
        """Сумма с 61 значащей цифрой сохраняется без округления"""
        total = ns.add(Decimal("1e-30"), Decimal(10**30))
        assert ns.subtract(total, Decimal(10**30)) == Decimal("1e-30")

    def test_decimal_multiplication_is_exact(self, ns: NumberSystem) -> None:
        assert ns.multiply(Decimal("0.1"), 3) == Decimal("0.3")

    def test_fraction_with_decimal_yields_fraction(self, ns: NumberSystem) -> None:
        result = ns.add(Fraction(1, 3), Decimal("0.5"))
        assert result == Fraction(5, 6)
        assert isinstance(result, Fraction)

    def test_float_is_contagious(self, ns: NumberSystem) -> None:
        result = ns.add(Decimal("0.5"), 0.25)
        assert result == 0.75
        assert isinstance(result, float)
        assert isinstance(ns.multiply(Fraction(1, 2), 2.0), float)

    def test_exact_division_yields_fraction(self, ns: NumberSystem) -> None:
        assert ns.divide(1, 3) == Fraction(1, 3)
        assert ns.divide(Decimal("1"), Decimal("4")) == Fraction(1, 4)

    def test_division_narrows(self, ns: NumberSystem) -> None:
        result = ns.divide(Decimal("7.5"), Fraction(5, 2))
        assert result == 3
        assert type(result) is int

    def test_division_by_zero(self, ns: NumberSystem) -> None:
        with pytest.raises(NumberDomainError):
            ns.divide(1, 0)
        with pytest.raises(NumberDomainError):
            ns.divide(1.0, Decimal("0"))

    def test_power_exact(self, ns: NumberSystem) -> None:
        assert ns.power(2, 10) == 1024
        assert ns.power(2, -2) == Fraction(1, 4)
        assert ns.power(Decimal("1.5"), 2) == Decimal("2.25")
        assert ns.power(Decimal("1.5"), -1) == Fraction(2, 3)

    def test_power_of_zero(self, ns: NumberSystem) -> None:
        assert ns.power(0, 3) == 0
        with pytest.raises(NumberDomainError):
            ns.power(0, 0)
        with pytest.raises(NumberDomainError):
            ns.power(0, -1)

    def test_power_requires_integer_exponent(self, ns: NumberSystem) -> None:
        with pytest.raises(ValueError):
            ns.power(2, 0.5)

    def test_reciprocal(self, ns: NumberSystem) -> None:
        assert ns.reciprocal(Decimal("0.25")) == 4
        with pytest.raises(NumberDomainError):
            ns.reciprocal(0)

    def test_negate_and_abs(self, ns: NumberSystem) -> None:
        assert ns.negate(Decimal("273.15")) == Decimal("-273.15")
        assert ns.negate(Fraction(1, 3)) == Fraction(-1, 3)
        assert ns.abs(Decimal("-1.5")) == Decimal("1.5")
        assert ns.abs(-7) == 7

    def test_signum(self, ns: NumberSystem) -> None:
        assert ns.signum(Fraction(-1, 2)) == -1
        assert ns.signum(0) == 0
        assert ns.signum(Decimal("0.001")) == 1


class TestDivideAndRemainder:
    """Тесты для divide_and_remainder()"""

    def test_towards_zero(self, ns: NumberSystem) -> None:
        assert ns.divide_and_remainder(-7, 2) == (-3, -1)

    def test_floor(self, ns: NumberSystem) -> None:
        assert ns.divide_and_remainder(-7, 2, round_remainder_towards_zero=False) == (-4, 1)

    def test_decimal_remainder(self, ns: NumberSystem) -> None:
        quotient, remainder = ns.divide_and_remainder(Decimal("7.5"), 2)
        assert quotient == 3
        assert remainder == Decimal("1.5")


# =============================================================================
# TRANSCENDENTAL
# =============================================================================


class TestExpLog:
    """Тесты для exp() / log()"""

    def test_exact_identities(self, ns: NumberSystem) -> None:
        assert ns.exp(0) == 1
        assert ns.log(1) == 0

    def test_exp_precision(self, ns: NumberSystem) -> None:
        assert str(ns.exp(1)).startswith("2.71828182845904523536028747135266")

    def test_configured_precision(self) -> None:
        ns = NumberSystem(NumberSystemConfig(decimal_precision=10))
        assert ns.exp(1) == Decimal("2.718281828")

    def test_float_path(self, ns: NumberSystem) -> None:
        assert ns.log(100.0) == pytest.approx(4.605170185988092)
        assert isinstance(ns.exp(1.0), float)

    @pytest.mark.parametrize("value", [0, -1, Decimal("-0.5"), 0.0])
    def test_log_of_non_positive(self, ns: NumberSystem, value) -> None:
        with pytest.raises(NumberDomainError):
            ns.log(value)


class TestToDecimal:
    """Тесты для to_decimal()"""

    def test_rounds_fraction(self) -> None:
        ns = NumberSystem(NumberSystemConfig(decimal_precision=5))
        assert ns.to_decimal(Fraction(1, 3)) == Decimal("0.33333")

    def test_default_precision(self, ns: NumberSystem) -> None:
        assert str(ns.to_decimal(Fraction(1, 3))) == "0." + "3" * 34

    def test_int_and_float_unchanged(self, ns: NumberSystem) -> None:
        assert ns.to_decimal(10**40) == 10**40
        assert ns.to_decimal(0.1) == 0.1


# =============================================================================
# PREDICATES
# =============================================================================


class TestPredicates:
    """Тесты предикатов и сравнения"""

    def test_compare_across_types(self, ns: NumberSystem) -> None:
        assert ns.compare(Fraction(1, 3), Decimal("0.3")) == 1
        assert ns.compare(Decimal("0.5"), Fraction(1, 2)) == 0
        assert ns.compare(1, 1.5) == -1

    def test_is_zero_is_one(self, ns: NumberSystem) -> None:
        assert ns.is_zero(Decimal("0.000"))
        assert ns.is_one(Fraction(2, 2))
        assert not ns.is_one(Decimal("1.0001"))

    def test_is_less_than_one(self, ns: NumberSystem) -> None:
        assert ns.is_less_than_one(Fraction(1, 2))
        assert ns.is_less_than_one(-5)
        assert not ns.is_less_than_one(1)

    def test_is_integer(self, ns: NumberSystem) -> None:
        assert ns.is_integer(Decimal("4.0"))
        assert ns.is_integer(Fraction(6, 3))
        assert ns.is_integer(3.0)
        assert not ns.is_integer(Fraction(1, 2))
