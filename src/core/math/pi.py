"""
Pi — цифры π произвольной точности

π берётся из mpmath (mpmath.mp.pi) при рабочей точности
num_digits + PI_GUARD_DIGITS десятичных знаков, затем усекается до
запрошенного числа знаков после запятой.

Кэш значений общий для процесса и безопасен для одновременного заполнения
из нескольких потоков: вычисление выполняется вне блокировки, первое
записанное значение для ключа побеждает, читатели никогда не видят
частично построенных значений.
"""

import logging
import threading
from decimal import Decimal
from typing import Final

import mpmath

from src.core.math.number_system import EXACT_CONTEXT, NumberDomainError

logger = logging.getLogger(__name__)

# Запас точности для промежуточных вычислений
PI_GUARD_DIGITS: Final[int] = 10

_PI_CACHE: dict[int, Decimal] = {}
_PI_CACHE_LOCK: Final[threading.Lock] = threading.Lock()


def pi_of_digits(num_digits: int) -> Decimal:
    """
    π с num_digits знаками после запятой (усечение, не округление).

    Args:
        num_digits: число знаков после запятой (> 0)

    Returns:
        Decimal значение π

    Raises:
        NumberDomainError: Если num_digits <= 0

    Examples:
        >>> pi_of_digits(10)
        Decimal('3.1415926535')
    """
    if num_digits <= 0:
        raise NumberDomainError(f"num_digits must be greater than zero, got {num_digits}")

    cached = _PI_CACHE.get(num_digits)
    if cached is not None:
        return cached

    logger.debug("Computing pi with %d digits", num_digits)
    value = _calculate_pi(num_digits)

    with _PI_CACHE_LOCK:
        # compute-if-absent: первое записанное значение побеждает
        return _PI_CACHE.setdefault(num_digits, value)


def _calculate_pi(num_digits: int) -> Decimal:
    with mpmath.workdps(num_digits + PI_GUARD_DIGITS):
        truncated = int(mpmath.floor(mpmath.mp.pi * mpmath.mpf(10) ** num_digits))
    return Decimal(truncated).scaleb(-num_digits, context=EXACT_CONTEXT)
