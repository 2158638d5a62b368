"""
Converter Descriptors — сериализуемое описание цепочки конвертеров

Immutable Pydantic модели шагов и цепочки. Соответствует схеме
converter_chain (src/core/contracts/schema/converter_chain.json).

Формат:
    {"steps": [{"kind": "rational_scale", "dividend": 1, "divisor": 6},
               {"kind": "shift", "offset": "273.15"}]}

Шаги перечислены в порядке conversion_steps(): первый шаг применяется
последним. Точные числа кодируются строками ("5", "1/3", "273.15"),
float — JSON числами.
"""

import re
from decimal import Decimal
from fractions import Fraction
from functools import reduce
from typing import Annotated, Any, Callable, Dict, List, Literal, Union

from pydantic import BaseModel, Field

from src.converters.base import (
    IDENTITY,
    AbstractConverter,
    Identity,
    UnitConverter,
    UnsupportedTransformError,
)
from src.converters.logarithmic import Exponential, Logarithm
from src.converters.scale import FloatScale, PowerOfBase, PowerOfPi, RationalScale
from src.converters.shift import Shift
from src.core.contracts.validators import validate_converter_chain
from src.core.math.number_system import Number, NumberSystem, rational

EXACT_NUMBER_PATTERN = r"^-?(\d+/\d+|\d+(\.\d+)?([eE][-+]?\d+)?)$"
_EXACT_NUMBER_RE = re.compile(EXACT_NUMBER_PATTERN)


# =============================================================================
# NUMBER ENCODING
# =============================================================================


def format_number(value: Number) -> Union[str, float]:
    """
    Кодирование числа для descriptor.

    int, Fraction и Decimal → строка ("5", "1/3", "273.15"); float → float.
    """
    if isinstance(value, float):
        return value
    return str(NumberSystem.current().narrow(value))


def parse_number(value: Union[str, int, float]) -> Number:
    """
    Декодирование числа из descriptor.

    Raises:
        ValueError: Если строка не является точным числом
        NumberDomainError: Если знаменатель дроби равен 0
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a number: {value!r}")
    if isinstance(value, (int, float)):
        return value
    if not _EXACT_NUMBER_RE.match(value):
        raise ValueError(f"Not an exact number: {value!r}")
    if "/" in value:
        dividend, divisor = value.split("/")
        return NumberSystem.current().narrow(rational(int(dividend), int(divisor)))
    if any(marker in value for marker in ".eE"):
        return NumberSystem.current().narrow(Decimal(value))
    return int(value)


NumberField = Union[str, float]


# =============================================================================
# STEP MODELS
# =============================================================================


class IdentityStep(BaseModel):
    kind: Literal["identity"] = "identity"

    model_config = {"frozen": True, "extra": "forbid"}

    def to_converter(self) -> AbstractConverter:
        return IDENTITY


class ShiftStep(BaseModel):
    kind: Literal["shift"] = "shift"
    offset: NumberField = Field(..., description="Смещение x -> x + offset")

    model_config = {"frozen": True, "extra": "forbid"}

    def to_converter(self) -> AbstractConverter:
        return Shift(parse_number(self.offset))


class RationalScaleStep(BaseModel):
    kind: Literal["rational_scale"] = "rational_scale"
    dividend: int = Field(..., description="Числитель множителя")
    divisor: int = Field(1, gt=0, description="Знаменатель множителя")

    model_config = {"frozen": True, "extra": "forbid"}

    def to_converter(self) -> AbstractConverter:
        return RationalScale(Fraction(self.dividend, self.divisor))


class PowerOfBaseStep(BaseModel):
    kind: Literal["power_of_base"] = "power_of_base"
    base: int = Field(..., description="Целое основание (не 0)")
    exponent: int = Field(..., description="Целый показатель")

    model_config = {"frozen": True, "extra": "forbid"}

    def to_converter(self) -> AbstractConverter:
        return PowerOfBase(self.base, self.exponent)


class PowerOfPiStep(BaseModel):
    kind: Literal["power_of_pi"] = "power_of_pi"
    exponent: int = Field(..., description="Показатель степени π")

    model_config = {"frozen": True, "extra": "forbid"}

    def to_converter(self) -> AbstractConverter:
        return PowerOfPi(self.exponent)


class FloatScaleStep(BaseModel):
    kind: Literal["float_scale"] = "float_scale"
    factor: float = Field(..., description="IEEE float множитель")

    model_config = {"frozen": True, "extra": "forbid"}

    def to_converter(self) -> AbstractConverter:
        return FloatScale(self.factor)


class LogarithmStep(BaseModel):
    kind: Literal["logarithm"] = "logarithm"
    base: NumberField = Field(..., description="Основание логарифма")

    model_config = {"frozen": True, "extra": "forbid"}

    def to_converter(self) -> AbstractConverter:
        return Logarithm(parse_number(self.base))


class ExponentialStep(BaseModel):
    kind: Literal["exponential"] = "exponential"
    base: NumberField = Field(..., description="Основание степени")

    model_config = {"frozen": True, "extra": "forbid"}

    def to_converter(self) -> AbstractConverter:
        return Exponential(parse_number(self.base))


ConverterStep = Annotated[
    Union[
        IdentityStep,
        ShiftStep,
        RationalScaleStep,
        PowerOfBaseStep,
        PowerOfPiStep,
        FloatScaleStep,
        LogarithmStep,
        ExponentialStep,
    ],
    Field(discriminator="kind"),
]


class ConverterDescriptor(BaseModel):
    """
    Описание цепочки конвертеров.

    Immutable модель (frozen=True). steps — в порядке conversion_steps().
    """

    steps: List[ConverterStep] = Field(..., min_length=1, description="Шаги цепочки")

    model_config = {"frozen": True, "extra": "forbid"}

    def to_converter(self) -> AbstractConverter:
        """Свёртка шагов через concatenate (результат в canonical form)."""
        converters = [step.to_converter() for step in self.steps]
        return reduce(lambda left, right: left.concatenate(right), converters)


# =============================================================================
# DESCRIBE / BUILD
# =============================================================================

_DESCRIBERS: Dict[type, Callable[[Any], BaseModel]] = {
    Identity: lambda c: IdentityStep(),
    Shift: lambda c: ShiftStep(offset=format_number(c.offset)),
    RationalScale: lambda c: RationalScaleStep(dividend=c.dividend, divisor=c.divisor),
    PowerOfBase: lambda c: PowerOfBaseStep(base=c.base, exponent=c.exponent),
    PowerOfPi: lambda c: PowerOfPiStep(exponent=c.exponent),
    FloatScale: lambda c: FloatScaleStep(factor=c.factor),
    Logarithm: lambda c: LogarithmStep(base=format_number(c.base)),
    Exponential: lambda c: ExponentialStep(base=format_number(c.base)),
}


def to_descriptor(converter: UnitConverter) -> ConverterDescriptor:
    """
    Raises:
        ValueError: Если converter равен None
        UnsupportedTransformError: Если шаг не может быть описан
    """
    if converter is None:
        raise ValueError("Cannot describe converter that is None")
    steps = []
    for step in converter.conversion_steps():
        describer = _DESCRIBERS.get(type(step))
        if describer is None:
            raise UnsupportedTransformError(f"{type(step).__name__} cannot be described")
        steps.append(describer(step))
    return ConverterDescriptor(steps=steps)


def describe(converter: UnitConverter) -> Dict[str, Any]:
    """
    JSON-совместимое описание конвертера.

    Example:
        >>> describe(shift(273.15))
        {'steps': [{'kind': 'shift', 'offset': 273.15}]}
    """
    return to_descriptor(converter).model_dump()


def build(data: Dict[str, Any]) -> AbstractConverter:
    """
    Построение конвертера из описания.

    Порядок: JSON Schema контракт → Pydantic модель → concatenate шагов.

    Raises:
        jsonschema.ValidationError: Если данные не соответствуют контракту
        pydantic.ValidationError: Если данные не проходят валидацию модели
        ValueError / NumberDomainError: Если параметры шага недопустимы
    """
    validate_converter_chain(data)
    return ConverterDescriptor.model_validate(data).to_converter()
