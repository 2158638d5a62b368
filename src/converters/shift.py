"""
Shift — аффинный сдвиг x -> x + offset

Нелинейный конвертер (кроме offset == 0): f(u + v) != f(u) + f(v).
Производная постоянна и равна 1, поэтому linear_factor() == 1 и
RELATIVE (дельта) величины конвертируются без учёта смещения.
"""

from dataclasses import dataclass

from src.converters.base import IDENTITY, AbstractConverter, merge_rule
from src.core.math.calculator import Calculator
from src.core.math.number_system import Number, NumberSystem, check_number


@dataclass(frozen=True)
class Shift(AbstractConverter):
    """Конвертер, добавляющий постоянное смещение."""

    offset: Number

    def __post_init__(self) -> None:
        offset = NumberSystem.current().narrow(check_number(self.offset, "offset"))
        object.__setattr__(self, "offset", offset)

    def is_identity(self) -> bool:
        return NumberSystem.current().is_zero(self.offset)

    def is_linear(self) -> bool:
        return self.is_identity()

    def linear_factor(self) -> Number:
        return 1

    def _convert(self, value: Number) -> Number:
        return Calculator.of(self.offset).add(value).peek()

    def _inverse(self) -> "Shift":
        return Shift(NumberSystem.current().negate(self.offset))

    def normal_form_key(self) -> tuple:
        return (self.offset,)

    def _transformation_literal(self) -> str:
        ns = NumberSystem.current()
        sign = "-" if ns.signum(self.offset) < 0 else "+"
        return f"x -> x {sign} {ns.abs(self.offset)}"


def shift(offset: Number) -> AbstractConverter:
    """
    Конвертер x -> x + offset.

    Returns:
        IDENTITY для offset == 0, иначе Shift
    """
    converter = Shift(offset)
    return IDENTITY if converter.is_identity() else converter


@merge_rule(Shift, Shift)
def _merge_shifts(left: Shift, right: Shift) -> AbstractConverter:
    return shift(Calculator.of(left.offset).add(right.offset).peek())
