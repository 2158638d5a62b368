"""
Calculator — fluent-аккумулятор поверх NumberSystem

Короткоживущий объект для цепочек операций:

    Calculator.of(factor).multiply(value).peek()

Каждая операция сужает (narrow) аргумент, применяет операцию NumberSystem
и сохраняет суженный результат.

ВНИМАНИЕ: экземпляр хранит изменяемое состояние и НЕ должен разделяться
между потоками или переиспользоваться между вычислениями. Для каждого
вычисления создаётся новый экземпляр через Calculator.of().
"""

from src.core.math.number_system import Number, NumberSystem, check_number


class Calculator:
    """Fluent-калькулятор с одним аккумулятором."""

    def __init__(self, number_system: NumberSystem):
        self._ns = number_system
        self._acc: Number = 0

    @classmethod
    def of(cls, number: Number, number_system: NumberSystem | None = None) -> "Calculator":
        """
        Новый калькулятор с начальным значением аккумулятора.

        Args:
            number: начальное значение
            number_system: числовая башня (default: NumberSystem.current())

        Raises:
            ValueError: Если number равно None или не число
        """
        calculator = cls(number_system or NumberSystem.current())
        return calculator._load(number)

    def _load(self, number: Number) -> "Calculator":
        self._acc = self._ns.narrow(check_number(number, "number"))
        return self

    def _operand(self, number: Number) -> Number:
        return self._ns.narrow(check_number(number, "operand"))

    # -- OPERATIONS

    def add(self, number: Number) -> "Calculator":
        self._acc = self._ns.add(self._acc, self._operand(number))
        return self

    def subtract(self, number: Number) -> "Calculator":
        self._acc = self._ns.subtract(self._acc, self._operand(number))
        return self

    def multiply(self, number: Number) -> "Calculator":
        self._acc = self._ns.multiply(self._acc, self._operand(number))
        return self

    def divide(self, number: Number) -> "Calculator":
        self._acc = self._ns.divide(self._acc, self._operand(number))
        return self

    def power(self, exponent: int) -> "Calculator":
        self._acc = self._ns.power(self._acc, exponent)
        return self

    def reciprocal(self) -> "Calculator":
        self._acc = self._ns.reciprocal(self._acc)
        return self

    def negate(self) -> "Calculator":
        self._acc = self._ns.negate(self._acc)
        return self

    def abs(self) -> "Calculator":
        self._acc = self._ns.abs(self._acc)
        return self

    def exp(self) -> "Calculator":
        self._acc = self._ns.exp(self._acc)
        return self

    def log(self) -> "Calculator":
        self._acc = self._ns.log(self._acc)
        return self

    # -- TERMINALS

    def peek(self) -> Number:
        """Текущее (суженное) значение аккумулятора."""
        return self._ns.narrow(self._acc)

    def is_less_than_one(self) -> bool:
        return self._ns.is_less_than_one(self._acc)
