"""
Core math modules

Числовая башня, fluent-калькулятор и цифры π.
"""

# Number System
from src.core.math.number_system import (
    DECIMAL128_PRECISION,
    EXACT_CONTEXT,
    Number,
    NumberDomainError,
    NumberSystem,
    NumberSystemConfig,
    check_number,
    rational,
)

# Calculator
from src.core.math.calculator import Calculator

# Pi
from src.core.math.pi import PI_GUARD_DIGITS, pi_of_digits

__all__ = [
    # Number System — Constants
    "DECIMAL128_PRECISION",
    "EXACT_CONTEXT",
    # Number System — Types
    "Number",
    "NumberSystem",
    "NumberSystemConfig",
    # Number System — Exceptions
    "NumberDomainError",
    # Number System — Functions
    "check_number",
    "rational",
    # Calculator
    "Calculator",
    # Pi
    "PI_GUARD_DIGITS",
    "pi_of_digits",
]
