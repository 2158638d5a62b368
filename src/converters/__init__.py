"""
Converters — типизированные числовые преобразования и их композиция

Конвертер — неизменяемое преобразование Number → Number. Композиция
через concatenate() всегда приводится к canonical form (см. src.simplify).

Example:
    >>> celsius_to_kelvin = shift(Decimal("273.15"))
    >>> kelvin_to_millikelvin = power_of_ten(3)
    >>> kelvin_to_millikelvin.concatenate(celsius_to_kelvin).convert(0)
    273150
"""

from src.converters.base import (
    IDENTITY,
    AbstractConverter,
    Identity,
    Pair,
    ReductionInvariantError,
    UnitConverter,
    UnsupportedTransformError,
    identity,
)
from src.converters.descriptors import ConverterDescriptor, build, describe
from src.converters.logarithmic import E, Exponential, Logarithm, exponential, logarithm
from src.converters.prefixes import BinaryPrefix, MetricPrefix, prefix_scale
from src.converters.scale import (
    FloatScale,
    PowerOfBase,
    PowerOfPi,
    RationalScale,
    float_scale,
    power_of_base,
    power_of_pi,
    power_of_ten,
    rational_scale,
    scale,
)
from src.converters.shift import Shift, shift

__all__ = [
    # Contract
    "UnitConverter",
    "AbstractConverter",
    # Exceptions
    "UnsupportedTransformError",
    "ReductionInvariantError",
    # Variants
    "Identity",
    "Shift",
    "RationalScale",
    "PowerOfBase",
    "PowerOfPi",
    "FloatScale",
    "Logarithm",
    "Exponential",
    "Pair",
    # Constants
    "IDENTITY",
    "E",
    # Factories
    "identity",
    "shift",
    "scale",
    "rational_scale",
    "float_scale",
    "power_of_base",
    "power_of_ten",
    "power_of_pi",
    "logarithm",
    "exponential",
    # Prefixes
    "MetricPrefix",
    "BinaryPrefix",
    "prefix_scale",
    # Descriptors
    "ConverterDescriptor",
    "describe",
    "build",
]
