"""
Prefixes — десятичные (SI) и двоичные (IEC) приставки

Приставка описывается основанием и показателем: kilo = 10^3, kibi = 1024^1.
prefix_scale() строит соответствующий PowerOfBase конвертер.
"""

from enum import Enum
from typing import Protocol

from src.converters.base import IDENTITY, AbstractConverter
from src.converters.scale import power_of_base


class Prefix(Protocol):
    """Любая приставка: символ, основание и показатель."""

    @property
    def symbol(self) -> str: ...

    @property
    def base(self) -> int: ...

    @property
    def exponent(self) -> int: ...


class MetricPrefix(Enum):
    """SI приставки (основание 10)."""

    YOTTA = ("Y", 24)
    ZETTA = ("Z", 21)
    EXA = ("E", 18)
    PETA = ("P", 15)
    TERA = ("T", 12)
    GIGA = ("G", 9)
    MEGA = ("M", 6)
    KILO = ("k", 3)
    HECTO = ("h", 2)
    DEKA = ("da", 1)
    DECI = ("d", -1)
    CENTI = ("c", -2)
    MILLI = ("m", -3)
    MICRO = ("µ", -6)
    NANO = ("n", -9)
    PICO = ("p", -12)
    FEMTO = ("f", -15)
    ATTO = ("a", -18)
    ZEPTO = ("z", -21)
    YOCTO = ("y", -24)

    def __init__(self, symbol: str, exponent: int):
        self.symbol = symbol
        self.exponent = exponent

    @property
    def base(self) -> int:
        return 10


class BinaryPrefix(Enum):
    """IEC приставки (основание 1024)."""

    KIBI = ("Ki", 1)
    MEBI = ("Mi", 2)
    GIBI = ("Gi", 3)
    TEBI = ("Ti", 4)
    PEBI = ("Pi", 5)
    EXBI = ("Ei", 6)
    ZEBI = ("Zi", 7)
    YOBI = ("Yi", 8)

    def __init__(self, symbol: str, exponent: int):
        self.symbol = symbol
        self.exponent = exponent

    @property
    def base(self) -> int:
        return 1024


def prefix_scale(prefix: Prefix | None) -> AbstractConverter:
    """
    Конвертер, соответствующий приставке: x -> x * base^exponent.

    Returns:
        IDENTITY для None, иначе PowerOfBase
    """
    if prefix is None:
        return IDENTITY
    return power_of_base(prefix.base, prefix.exponent)
