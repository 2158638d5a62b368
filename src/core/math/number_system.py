"""
Number System — замкнутая точная арифметика

Модуль реализует "числовую башню" для конвертеров единиц:
- int (покрывает и машинные, и произвольно длинные целые)
- Fraction (точная рациональная дробь, всегда несократимая)
- Decimal (десятичное число произвольной точности, только finite)
- float (единственный неточный член башни, заражает результат)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Любая операция над членами башни возвращает член башни
2. narrow() никогда не теряет точность
3. Decimal арифметика (add/subtract/multiply) выполняется без округления
4. Деление точных значений выполняется во Fraction
5. Domain ошибки (деление на 0, log(x <= 0), 0^e при e <= 0) → NumberDomainError
"""

import math
from dataclasses import dataclass
from decimal import MAX_EMAX, MAX_PREC, MIN_EMIN, Context, Decimal, localcontext
from fractions import Fraction
from typing import Final, Union

Number = Union[int, Fraction, Decimal, float]

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Точность IEEE decimal128 (34 значащие цифры): точность exp/log и π по умолчанию
DECIMAL128_PRECISION: Final[int] = 34

# Контекст для точной Decimal арифметики: результат никогда не округляется
EXACT_CONTEXT: Final[Context] = Context(prec=MAX_PREC, Emax=MAX_EMAX, Emin=MIN_EMIN)

# Целые Decimal с большим числом цифр не сужаются до int
MAX_NARROW_DIGITS: Final[int] = 4300

_NUMBER_TYPES: Final[tuple[type, ...]] = (int, Fraction, Decimal, float)


# =============================================================================
# EXCEPTIONS
# =============================================================================


class NumberDomainError(ArithmeticError):
    """
    Нарушение области определения арифметической операции.

    Примеры: деление на ноль, 0 в неположительной степени,
    логарифм неположительного числа, запрос π с точностью <= 0.
    """

    pass


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class NumberSystemConfig:
    """Конфигурация числовой башни.

    Точность используется только там, где точного представления не существует
    (exp, log, степени π).
    """

    decimal_precision: int = DECIMAL128_PRECISION
    pi_digits: int = DECIMAL128_PRECISION

    def __post_init__(self) -> None:
        if self.decimal_precision <= 0:
            raise ValueError(
                f"decimal_precision must be positive, got {self.decimal_precision}"
            )
        if self.pi_digits <= 0:
            raise ValueError(f"pi_digits must be positive, got {self.pi_digits}")


# =============================================================================
# HELPERS
# =============================================================================


def rational(dividend: int, divisor: int = 1) -> Fraction:
    """
    Точная дробь dividend/divisor в несократимом виде.

    Знаменатель всегда положительный: rational(1, -2) == Fraction(-1, 2).

    Raises:
        NumberDomainError: Если divisor == 0
    """
    if divisor == 0:
        raise NumberDomainError(f"Divisor cannot be zero: {dividend}/{divisor}")
    return Fraction(dividend, divisor)


def check_number(value: object, name: str = "value") -> Number:
    """
    Проверка, что значение принадлежит числовой башне.

    Raises:
        ValueError: Если значение None или не число
        NumberDomainError: Если Decimal не finite (NaN/Infinity)
    """
    if value is None:
        raise ValueError(f"{name} cannot be None")
    if not isinstance(value, _NUMBER_TYPES):
        raise ValueError(
            f"{name} must be int, Fraction, Decimal or float, got {type(value).__name__}"
        )
    if isinstance(value, Decimal) and not value.is_finite():
        raise NumberDomainError(f"{name} must be a finite Decimal, got {value}")
    return value


def _is_exact(value: Number) -> bool:
    return not isinstance(value, float)


def _to_fraction(value: Number) -> Fraction:
    # Decimal и int конвертируются во Fraction без потерь
    return value if isinstance(value, Fraction) else Fraction(value)


# =============================================================================
# NUMBER SYSTEM
# =============================================================================


class NumberSystem:
    """
    Арифметика над членами числовой башни.

    Правила приведения типов:
    - float + что угодно → float
    - Decimal + Fraction → Fraction
    - Decimal + int → Decimal (точно)
    - int + Fraction → Fraction

    Экземпляр не имеет изменяемого состояния и может разделяться между потоками.
    """

    def __init__(self, config: NumberSystemConfig | None = None):
        """
        Args:
            config: конфигурация точности (опционально, используется default)
        """
        self.config = config or NumberSystemConfig()

    @staticmethod
    def current() -> "NumberSystem":
        """Числовая башня процесса по умолчанию."""
        return _DEFAULT_NUMBER_SYSTEM

    # -------------------------------------------------------------------------
    # Narrowing
    # -------------------------------------------------------------------------

    def narrow(self, number: Number) -> Number:
        """
        Наиболее компактное представление без потери точности.

        - bool → int
        - Fraction с знаменателем 1 → int
        - целый finite Decimal → int, если в нём не больше MAX_NARROW_DIGITS
          цифр (Decimal("1E+100000000") остаётся Decimal)
        - float и нецелые значения не меняются

        Examples:
            >>> NumberSystem().narrow(Fraction(4, 2))
            2
            >>> NumberSystem().narrow(Decimal("3.00"))
            3
            >>> NumberSystem().narrow(Decimal("2.5"))
            Decimal('2.5')
        """
        check_number(number, "number")
        if isinstance(number, bool):
            return int(number)
        if isinstance(number, Fraction):
            return number.numerator if number.denominator == 1 else number
        if isinstance(number, Decimal):
            if number.adjusted() < MAX_NARROW_DIGITS and number == number.to_integral_value():
                return int(number)
            return number
        return number

    # -------------------------------------------------------------------------
    # Binary operations
    # -------------------------------------------------------------------------

    def add(self, x: Number, y: Number) -> Number:
        x, y = self._coerce(x, y)
        if isinstance(x, Decimal):
            with localcontext(EXACT_CONTEXT):
                return self.narrow(x + y)
        return self.narrow(x + y)

    def subtract(self, x: Number, y: Number) -> Number:
        return self.add(x, self.negate(y))

    def multiply(self, x: Number, y: Number) -> Number:
        x, y = self._coerce(x, y)
        if isinstance(x, Decimal):
            with localcontext(EXACT_CONTEXT):
                return self.narrow(x * y)
        return self.narrow(x * y)

    def divide(self, x: Number, y: Number) -> Number:
        """
        Деление x / y.

        Для точных операндов результат точный (Fraction, затем narrow).

        Raises:
            NumberDomainError: Если y == 0
        """
        x, y = self._coerce(x, y)
        if self.is_zero(y):
            raise NumberDomainError(f"Division by zero: {x} / {y}")
        if isinstance(x, float):
            return x / y
        return self.narrow(_to_fraction(x) / _to_fraction(y))

    def divide_and_remainder(
        self,
        x: Number,
        y: Number,
        round_remainder_towards_zero: bool = True,
    ) -> tuple[Number, Number]:
        """
        Целочисленное деление с остатком: x == quotient * y + remainder.

        Args:
            x: делимое
            y: делитель
            round_remainder_towards_zero: True — частное усекается к нулю
                (остаток имеет знак x), False — floor деление (остаток имеет знак y)

        Returns:
            (quotient, remainder), quotient всегда целое

        Raises:
            NumberDomainError: Если y == 0
        """
        ratio = self.divide(x, y)
        if round_remainder_towards_zero:
            quotient = math.trunc(ratio)
        else:
            quotient = math.floor(ratio)
        remainder = self.subtract(x, self.multiply(quotient, y))
        return quotient, remainder

    def power(self, number: Number, exponent: int) -> Number:
        """
        Целая степень числа.

        Отрицательная степень точного значения даёт точную дробь.

        Raises:
            ValueError: Если exponent не целое
            NumberDomainError: Если number == 0 и exponent <= 0
        """
        check_number(number, "number")
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise ValueError(f"exponent must be an int, got {exponent!r}")
        if self.is_zero(number) and exponent <= 0:
            raise NumberDomainError(f"Zero cannot be raised to a non-positive power: {exponent}")
        if isinstance(number, float):
            return number**exponent
        if exponent < 0:
            return self.reciprocal(self.power(number, -exponent))
        if isinstance(number, Decimal):
            with localcontext(EXACT_CONTEXT):
                return self.narrow(number**exponent)
        return self.narrow(number**exponent)

    # -------------------------------------------------------------------------
    # Unary operations
    # -------------------------------------------------------------------------

    def reciprocal(self, number: Number) -> Number:
        return self.divide(1, number)

    def negate(self, number: Number) -> Number:
        check_number(number, "number")
        if isinstance(number, Decimal):
            # copy_negate не применяет округление контекста
            return self.narrow(number.copy_negate())
        return self.narrow(-number)

    def abs(self, number: Number) -> Number:
        check_number(number, "number")
        if isinstance(number, Decimal):
            return self.narrow(number.copy_abs())
        return self.narrow(abs(number))

    def signum(self, number: Number) -> int:
        check_number(number, "number")
        return (number > 0) - (number < 0)

    def exp(self, number: Number) -> Number:
        """
        Экспонента e^number.

        Для float используется math.exp, для точных значений — Decimal.exp()
        с точностью config.decimal_precision.
        """
        check_number(number, "number")
        if isinstance(number, float):
            return math.exp(number)
        with localcontext() as ctx:
            ctx.prec = self.config.decimal_precision
            return self.narrow(self._as_decimal(number).exp())

    def log(self, number: Number) -> Number:
        """
        Натуральный логарифм.

        Raises:
            NumberDomainError: Если number <= 0
        """
        check_number(number, "number")
        if number <= 0:
            raise NumberDomainError(f"Logarithm of non-positive value: {number}")
        if isinstance(number, float):
            return math.log(number)
        with localcontext() as ctx:
            ctx.prec = self.config.decimal_precision
            return self.narrow(self._as_decimal(number).ln())

    def to_decimal(self, number: Number) -> Number:
        """
        Округление значения до config.decimal_precision значащих цифр.

        Операция намеренно с потерей точности: используется только для
        значений, уже полученных из иррациональных констант (степени π).
        Целые значения и float возвращаются без изменений.
        """
        check_number(number, "number")
        if isinstance(number, (int, float)):
            return number
        with localcontext() as ctx:
            ctx.prec = self.config.decimal_precision
            return self.narrow(self._as_decimal(number))

    # -------------------------------------------------------------------------
    # Predicates & comparison
    # -------------------------------------------------------------------------

    def compare(self, x: Number, y: Number) -> int:
        """-1 если x < y, 0 если x == y, +1 если x > y (точное сравнение)."""
        check_number(x, "x")
        check_number(y, "y")
        return (x > y) - (x < y)

    def is_zero(self, number: Number) -> bool:
        return check_number(number, "number") == 0

    def is_one(self, number: Number) -> bool:
        return check_number(number, "number") == 1

    def is_less_than_one(self, number: Number) -> bool:
        return check_number(number, "number") < 1

    def is_integer(self, number: Number) -> bool:
        check_number(number, "number")
        if isinstance(number, int):
            return True
        if isinstance(number, Fraction):
            return number.denominator == 1
        if isinstance(number, Decimal):
            return number == number.to_integral_value()
        return number.is_integer()

    # -------------------------------------------------------------------------
    # Internal
    # -------------------------------------------------------------------------

    def _coerce(self, x: Number, y: Number) -> tuple[Number, Number]:
        check_number(x, "x")
        check_number(y, "y")
        if not _is_exact(x) or not _is_exact(y):
            return float(x), float(y)
        if isinstance(x, Decimal) or isinstance(y, Decimal):
            if isinstance(x, Fraction) or isinstance(y, Fraction):
                return _to_fraction(x), _to_fraction(y)
            return Decimal(x), Decimal(y)
        return x, y

    @staticmethod
    def _as_decimal(number: Number) -> Decimal:
        # Вызывается внутри localcontext с нужной точностью
        if isinstance(number, Fraction):
            return Decimal(number.numerator) / Decimal(number.denominator)
        return +Decimal(number)


_DEFAULT_NUMBER_SYSTEM: Final[NumberSystem] = NumberSystem()
