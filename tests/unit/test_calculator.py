"""
Тесты для модуля Calculator

Проверяет fluent-цепочки операций, сужение результата и валидацию аргументов.
"""

from decimal import Decimal
from fractions import Fraction

import pytest

from src.core.math.calculator import Calculator
from src.core.math.number_system import NumberDomainError, NumberSystem, NumberSystemConfig


class TestCalculatorChains:
    """Тесты цепочек операций"""

    def test_multiply_narrows_to_int(self) -> None:
        result = Calculator.of(Fraction(1, 3)).multiply(3).peek()
        assert result == 1
        assert type(result) is int

    def test_mixed_chain(self) -> None:
        """10 / 4 * 0.4 == 1 (Fraction и Decimal)"""
        assert Calculator.of(10).divide(4).multiply(Decimal("0.4")).peek() == 1

    def test_add_subtract(self) -> None:
        result = Calculator.of(Fraction(3, 2)).subtract(Fraction(1, 2)).add(Decimal("0.5")).peek()
        assert result == Decimal("1.5")

    def test_power_and_reciprocal(self) -> None:
        assert Calculator.of(2).power(-1).peek() == Fraction(1, 2)
        assert Calculator.of(Decimal("0.25")).reciprocal().peek() == 4

    def test_negate_abs(self) -> None:
        assert Calculator.of(-3).abs().negate().peek() == -3

    def test_exp_log(self) -> None:
        assert Calculator.of(1).log().peek() == 0
        assert Calculator.of(0).exp().peek() == 1

    def test_custom_number_system(self) -> None:
        ns = NumberSystem(NumberSystemConfig(decimal_precision=5))
        assert Calculator.of(1, ns).exp().peek() == Decimal("2.7183")

    def test_is_less_than_one(self) -> None:
        assert Calculator.of(Fraction(1, 2)).is_less_than_one()
        assert not Calculator.of(3).divide(3).is_less_than_one()


class TestCalculatorValidation:
    """Тесты валидации аргументов"""

    def test_none_initial_value(self) -> None:
        with pytest.raises(ValueError):
            Calculator.of(None)

    def test_none_operand(self) -> None:
        with pytest.raises(ValueError):
            Calculator.of(1).add(None)

    def test_domain_error_propagates(self) -> None:
        with pytest.raises(NumberDomainError):
            Calculator.of(1).divide(0)
