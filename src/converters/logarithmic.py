"""
Logarithmic — конвертеры log_base(x) и base^x

Оба варианта нелинейны и никогда не являются identity. Сливаются только
друг с другом при одинаковом основании: log_b(b^x) == b^(log_b(x)) == x.

В общем случае точного представления результата нет, поэтому значения
округляются до NumberSystemConfig.decimal_precision значащих цифр
(для float операндов используется math.log / math.exp). Исключение:
Exponential с точным основанием и целым аргументом считает base^n точно.
"""

import math
from dataclasses import dataclass
from typing import Final

from src.converters.base import IDENTITY, AbstractConverter, merge_rule
from src.core.math.calculator import Calculator
from src.core.math.number_system import Number, NumberSystem, check_number

# Число Эйлера
E: Final[float] = math.e


def _check_base(base: Number) -> Number:
    ns = NumberSystem.current()
    base = ns.narrow(check_number(base, "base"))
    if base <= 0 or ns.is_one(base):
        raise ValueError(f"base must be positive and different from 1, got {base}")
    return base


@dataclass(frozen=True)
class Logarithm(AbstractConverter):
    """Конвертер x -> log_base(x)."""

    base: Number

    def __post_init__(self) -> None:
        object.__setattr__(self, "base", _check_base(self.base))

    def is_identity(self) -> bool:
        return False

    def is_linear(self) -> bool:
        return False

    @property
    def log_of_base(self) -> Number:
        return Calculator.of(self.base).log().peek()

    def _convert(self, value: Number) -> Number:
        result = Calculator.of(value).log().divide(self.log_of_base).peek()
        return NumberSystem.current().to_decimal(result)

    def _inverse(self) -> "Exponential":
        return Exponential(self.base)

    def normal_form_key(self) -> tuple:
        return (self.base,)

    def _transformation_literal(self) -> str:
        if self.base == E:
            return "x -> ln(x)"
        return f"x -> log(base={self.base}, x)"


@dataclass(frozen=True)
class Exponential(AbstractConverter):
    """Конвертер x -> base^x."""

    base: Number

    def __post_init__(self) -> None:
        object.__setattr__(self, "base", _check_base(self.base))

    def is_identity(self) -> bool:
        return False

    def is_linear(self) -> bool:
        return False

    @property
    def log_of_base(self) -> Number:
        return Calculator.of(self.base).log().peek()

    def _convert(self, value: Number) -> Number:
        ns = NumberSystem.current()
        exponent = ns.narrow(value)
        # точное основание в целой степени: base^n без exp/log
        if not isinstance(self.base, float) and isinstance(exponent, int):
            return ns.power(self.base, exponent)
        return Calculator.of(self.log_of_base).multiply(value).exp().peek()

    def _inverse(self) -> Logarithm:
        return Logarithm(self.base)

    def normal_form_key(self) -> tuple:
        return (self.base,)

    def _transformation_literal(self) -> str:
        if self.base == E:
            return "x -> e^x"
        return f"x -> {self.base}^x"


def logarithm(base: Number = E) -> Logarithm:
    """
    Конвертер x -> log_base(x) (натуральный логарифм по умолчанию).

    Raises:
        ValueError: Если base <= 0 или base == 1
    """
    return Logarithm(base)


def exponential(base: Number = E) -> Exponential:
    """
    Конвертер x -> base^x (e^x по умолчанию).

    Raises:
        ValueError: Если base <= 0 или base == 1
    """
    return Exponential(base)


def _same_base(left: AbstractConverter, right: AbstractConverter) -> bool:
    return left.base == right.base


@merge_rule(Logarithm, Exponential, guard=_same_base)
def _merge_log_with_exp(left: Logarithm, right: Exponential) -> AbstractConverter:
    return IDENTITY


@merge_rule(Exponential, Logarithm, guard=_same_base)
def _merge_exp_with_log(left: Exponential, right: Logarithm) -> AbstractConverter:
    return IDENTITY
