"""
Contract Validation Module

Модуль для валидации JSON контрактов (описаний цепочек конвертеров).
"""

from .validators import (
    ContractValidator,
    ConverterChainValidator,
    SchemaLoader,
    validate_converter_chain,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "ConverterChainValidator",
    # Functions
    "validate_converter_chain",
]
