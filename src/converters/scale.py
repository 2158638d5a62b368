"""
Scale — линейные конвертеры x -> x * factor

Варианты:
- RationalScale: точная дробь (Fraction)
- PowerOfBase: base^exponent, целые base и exponent
- PowerOfPi: π^exponent (множитель вычисляется лениво, write-once)
- FloatScale: IEEE float множитель

Все варианты линейны, linear_factor() == собственный множитель.

Слияния:
- одинаковые типы сливаются (PowerOfBase с равным основанием складывает
  показатели)
- PowerOfBase + RationalScale (в любом порядке) и PowerOfBase с разными
  основаниями: PowerOfBase деградирует в RationalScale, затем дроби
  перемножаются. Обратного направления нет: RationalScale никогда не
  превращается в PowerOfBase.

Равенство точных множителей: RationalScale и PowerOfBase сравниваются
и хэшируются по значению множителя, поэтому power_of_ten(2) ==
rational_scale(100) и power_of_base(2, 3) == power_of_base(8, 1). Любой
участок точных множителей сливается в один шаг, и результат композиции
не зависит от порядка, даже если часть множителей сократилась до IDENTITY.

Фабрики никогда не возвращают scale с множителем 1 — вместо него IDENTITY.
"""

import math
from dataclasses import dataclass, field
from decimal import Decimal
from fractions import Fraction

from src.converters.base import IDENTITY, AbstractConverter, merge_rule
from src.core.math.calculator import Calculator
from src.core.math.number_system import Number, NumberSystem, check_number, rational
from src.core.math.pi import pi_of_digits


def _require_int(value: object, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be an int, got {value!r}")
    return value


def _exact_factor(converter: AbstractConverter) -> Fraction | None:
    if isinstance(converter, RationalScale):
        return converter.factor
    if isinstance(converter, PowerOfBase):
        return Fraction(converter.rational_factor)
    return None


# =============================================================================
# RATIONAL SCALE
# =============================================================================


@dataclass(frozen=True)
class RationalScale(AbstractConverter):
    """
    Умножение на точную дробь dividend/divisor.

    Дробь хранится в несократимом виде, поэтому RationalScale(2/4) ==
    RationalScale(1/2).
    """

    factor: Fraction

    def __post_init__(self) -> None:
        factor = check_number(self.factor, "factor")
        if isinstance(factor, float):
            raise ValueError(f"RationalScale requires an exact factor, got float {factor}")
        factor = Fraction(factor)
        if factor == 0:
            raise ValueError("Scale factor cannot be zero")
        object.__setattr__(self, "factor", factor)

    @property
    def dividend(self) -> int:
        return self.factor.numerator

    @property
    def divisor(self) -> int:
        return self.factor.denominator

    def is_identity(self) -> bool:
        return self.factor == 1

    def is_linear(self) -> bool:
        return True

    def linear_factor(self) -> Number:
        return NumberSystem.current().narrow(self.factor)

    def _convert(self, value: Number) -> Number:
        return Calculator.of(self.factor).multiply(value).peek()

    def _inverse(self) -> "RationalScale":
        return RationalScale(1 / self.factor)

    def __eq__(self, other: object) -> bool:
        other_factor = _exact_factor(other)
        if other_factor is None:
            return NotImplemented
        return self.factor == other_factor

    def __hash__(self) -> int:
        return hash(self.factor)

    def normal_form_key(self) -> tuple:
        return (self.factor,)

    def _transformation_literal(self) -> str:
        return f"x -> x * {self.factor}"


# =============================================================================
# POWER OF BASE
# =============================================================================


@dataclass(frozen=True)
class PowerOfBase(AbstractConverter):
    """Умножение на base^exponent (например, 10^3 для приставки kilo)."""

    base: int
    exponent: int
    _rational_factor: Number | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _require_int(self.base, "base")
        _require_int(self.exponent, "exponent")
        if self.base == 0:
            raise ValueError("base cannot be zero (because 0^0 is undefined)")
        object.__setattr__(
            self, "_rational_factor", Calculator.of(self.base).power(self.exponent).peek()
        )

    def is_identity(self) -> bool:
        # 1^x == 1, x^0 == 1 для любого x != 0
        return self.base == 1 or self.exponent == 0

    def is_linear(self) -> bool:
        return True

    @property
    def rational_factor(self) -> Number:
        """base^exponent как точное значение (int или Fraction), вычисляется один раз."""
        return self._rational_factor

    def linear_factor(self) -> Number:
        return self.rational_factor

    def to_rational_scale(self) -> RationalScale:
        return RationalScale(Fraction(self.rational_factor))

    def _convert(self, value: Number) -> Number:
        return Calculator.of(self._rational_factor).multiply(value).peek()

    def _inverse(self) -> "PowerOfBase":
        return PowerOfBase(self.base, -self.exponent)

    def __eq__(self, other: object) -> bool:
        other_factor = _exact_factor(other)
        if other_factor is None:
            return NotImplemented
        return Fraction(self._rational_factor) == other_factor

    def __hash__(self) -> int:
        return hash(Fraction(self._rational_factor))

    def normal_form_key(self) -> tuple:
        return (self.base, self.exponent)

    def _transformation_literal(self) -> str:
        if self.base < 0:
            return f"x -> x * ({self.base})^{self.exponent}"
        return f"x -> x * {self.base}^{self.exponent}"


# =============================================================================
# POWER OF PI
# =============================================================================


@dataclass(frozen=True)
class PowerOfPi(AbstractConverter):
    """
    Умножение на π^exponent.

    Множитель вычисляется при первом обращении с точностью
    NumberSystemConfig.pi_digits и больше не пересчитывается.
    """

    exponent: int
    _factor: Number | None = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        _require_int(self.exponent, "exponent")

    def is_identity(self) -> bool:
        return self.exponent == 0

    def is_linear(self) -> bool:
        return True

    @property
    def factor(self) -> Number:
        if self._factor is None:
            ns = NumberSystem.current()
            pi = pi_of_digits(ns.config.pi_digits)
            value = ns.to_decimal(Calculator.of(pi).power(self.exponent).peek())
            object.__setattr__(self, "_factor", value)
        return self._factor

    def linear_factor(self) -> Number:
        return self.factor

    def _convert(self, value: Number) -> Number:
        return Calculator.of(self.factor).multiply(value).peek()

    def _inverse(self) -> "PowerOfPi":
        return PowerOfPi(-self.exponent)

    def normal_form_key(self) -> tuple:
        return (self.exponent,)

    def _transformation_literal(self) -> str:
        return f"x -> x * π^{self.exponent}"


# =============================================================================
# FLOAT SCALE
# =============================================================================


@dataclass(frozen=True)
class FloatScale(AbstractConverter):
    """
    Умножение на IEEE float множитель.

    Единственный неточный scale: результат конвертации всегда float.
    """

    factor: float

    def __post_init__(self) -> None:
        factor = check_number(self.factor, "factor")
        if not isinstance(factor, float):
            factor = float(factor)
        if not math.isfinite(factor):
            raise ValueError(f"Scale factor must be finite, got {factor}")
        if factor == 0.0:
            raise ValueError("Scale factor cannot be zero")
        object.__setattr__(self, "factor", factor)

    def is_identity(self) -> bool:
        return self.factor == 1.0

    def is_linear(self) -> bool:
        return True

    def linear_factor(self) -> float:
        return self.factor

    def _convert(self, value: Number) -> Number:
        return Calculator.of(self.factor).multiply(value).peek()

    def _inverse(self) -> "FloatScale":
        return FloatScale(1.0 / self.factor)

    def normal_form_key(self) -> tuple:
        return (self.factor,)

    def _transformation_literal(self) -> str:
        return f"x -> x * {self.factor}"


# =============================================================================
# FACTORIES
# =============================================================================


def rational_scale(dividend: int, divisor: int = 1) -> AbstractConverter:
    """
    Конвертер x -> x * dividend / divisor.

    Raises:
        NumberDomainError: Если divisor == 0
        ValueError: Если dividend == 0
    """
    converter = RationalScale(rational(dividend, divisor))
    return IDENTITY if converter.is_identity() else converter


def scale(factor: Number) -> AbstractConverter:
    """
    Конвертер x -> x * factor с точным множителем.

    int, Fraction и Decimal сохраняются точно. float переводится в дробь по
    его кратчайшему десятичному представлению (0.1 → 1/10); для сохранения
    IEEE семантики используйте float_scale().

    Returns:
        IDENTITY для factor == 1, иначе RationalScale
    """
    ns = NumberSystem.current()
    check_number(factor, "factor")
    if ns.is_one(factor):
        return IDENTITY
    narrowed = ns.narrow(factor)
    if isinstance(narrowed, float):
        narrowed = Fraction(Decimal(repr(narrowed)))
    return RationalScale(Fraction(narrowed))


def float_scale(factor: float) -> AbstractConverter:
    converter = FloatScale(factor)
    return IDENTITY if converter.is_identity() else converter


def power_of_base(base: int, exponent: int) -> AbstractConverter:
    """
    Конвертер x -> x * base^exponent.

    Raises:
        ValueError: Если base == 0
    """
    converter = PowerOfBase(base, exponent)
    return IDENTITY if converter.is_identity() else converter


def power_of_ten(exponent: int) -> AbstractConverter:
    return power_of_base(10, exponent)


def power_of_pi(exponent: int) -> AbstractConverter:
    converter = PowerOfPi(exponent)
    return IDENTITY if converter.is_identity() else converter


# =============================================================================
# MERGE RULES
# =============================================================================


def _rational_product(left: Fraction, right: Fraction) -> AbstractConverter:
    product = left * right
    return IDENTITY if product == 1 else RationalScale(product)


@merge_rule(RationalScale, RationalScale)
def _merge_rationals(left: RationalScale, right: RationalScale) -> AbstractConverter:
    return _rational_product(left.factor, right.factor)


@merge_rule(RationalScale, PowerOfBase)
def _merge_rational_with_power(left: RationalScale, right: PowerOfBase) -> AbstractConverter:
    return _rational_product(left.factor, right.to_rational_scale().factor)


@merge_rule(PowerOfBase, RationalScale)
def _merge_power_with_rational(left: PowerOfBase, right: RationalScale) -> AbstractConverter:
    return _rational_product(left.to_rational_scale().factor, right.factor)


@merge_rule(PowerOfBase, PowerOfBase)
def _merge_powers_of_base(left: PowerOfBase, right: PowerOfBase) -> AbstractConverter:
    if left.base == right.base:
        return power_of_base(left.base, left.exponent + right.exponent)
    return _rational_product(left.to_rational_scale().factor, right.to_rational_scale().factor)


@merge_rule(PowerOfPi, PowerOfPi)
def _merge_powers_of_pi(left: PowerOfPi, right: PowerOfPi) -> AbstractConverter:
    return power_of_pi(left.exponent + right.exponent)


@merge_rule(FloatScale, FloatScale)
def _merge_floats(left: FloatScale, right: FloatScale) -> AbstractConverter:
    return float_scale(left.factor * right.factor)
