"""
Converter Base — контракт конвертера, Identity и Pair

Конвертер — неизменяемое преобразование Number → Number.

Модуль содержит:
- UnitConverter: публичный контракт (в т.ч. для "чужих" реализаций)
- AbstractConverter: общая логика convert/inverse/concatenate для наших вариантов
- Таблицу правил слияния, индексированную парой типов (left, right)
- Identity: тождественный конвертер (явный вариант, singleton IDENTITY)
- Pair: упорядоченная композиция двух конвертеров

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Pair(left, right).convert(x) == left.convert(right.convert(x))
2. Identity никогда не попадает в non-identity hooks (_convert/_inverse)
3. Кэш шагов Pair записывается один раз и больше не меняется
4. merge_with() для пары типов без правила → ReductionInvariantError
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, Final, NamedTuple

from src.core.math.calculator import Calculator
from src.core.math.number_system import Number, check_number

if TYPE_CHECKING:
    from src.simplify.handler import CompositionHandler


# =============================================================================
# EXCEPTIONS
# =============================================================================


class UnsupportedTransformError(Exception):
    """
    Преобразование не поддерживает запрошенную операцию.

    Например, у логарифмического конвертера нет постоянной первой производной,
    поэтому его нельзя применить к RELATIVE (дельта) величинам.
    """

    pass


class ReductionInvariantError(RuntimeError):
    """
    Внутреннее нарушение инварианта при редукции.

    Возникает, если merge_with() вызван для пары типов, для которой нет
    правила слияния (недостижимо при проверке can_merge_with()).
    """

    pass


# =============================================================================
# UNIT CONVERTER CONTRACT
# =============================================================================


class UnitConverter(ABC):
    """
    Публичный контракт конвертера.

    Реализации вне этого пакета ("чужие" конвертеры) могут реализовать этот
    контракт напрямую. Для них canonical form не гарантируется: композиция
    с ними строит Pair без упрощения.
    """

    @abstractmethod
    def is_identity(self) -> bool: ...

    @abstractmethod
    def is_linear(self) -> bool:
        """
        True, если f(u + v) == f(u) + f(v) и f(r * u) == r * f(u).

        Композиция двух линейных конвертеров коммутативна.
        """

    @abstractmethod
    def convert(self, value: Number) -> Number: ...

    @abstractmethod
    def inverse(self) -> "UnitConverter": ...

    @abstractmethod
    def concatenate(self, other: "UnitConverter") -> "UnitConverter":
        """Композиция self ○ other: сначала other, затем self."""

    @abstractmethod
    def conversion_steps(self) -> tuple["UnitConverter", ...]: ...


# =============================================================================
# MERGE RULES
# =============================================================================

MergeGuard = Callable[[Any, Any], bool]
MergeFunction = Callable[[Any, Any], "AbstractConverter"]


class MergeRule(NamedTuple):
    """Правило слияния двух соседних шагов."""

    guard: MergeGuard
    merge: MergeFunction


_MERGE_RULES: dict[tuple[type, type], MergeRule] = {}


def _always(left: Any, right: Any) -> bool:
    return True


def merge_rule(
    left_type: type,
    right_type: type,
    guard: MergeGuard = _always,
) -> Callable[[MergeFunction], MergeFunction]:
    """
    Декоратор регистрации правила слияния для пары типов (left, right).

    Args:
        left_type: тип левого (применяемого последним) шага
        right_type: тип правого шага
        guard: дополнительное условие (например, совпадение основания)

    Example:
        @merge_rule(Shift, Shift)
        def _merge_shifts(left, right):
            return shift(left.offset + right.offset)
    """

    def register(merge: MergeFunction) -> MergeFunction:
        _MERGE_RULES[(left_type, right_type)] = MergeRule(guard=guard, merge=merge)
        return merge

    return register


# =============================================================================
# ABSTRACT CONVERTER
# =============================================================================


class AbstractConverter(UnitConverter):
    """
    Базовый класс вариантов конвертеров этого пакета.

    Варианты реализуют:
    - is_identity(), is_linear()
    - _convert(value): преобразование, вызывается только если не identity
    - _inverse(): обратный конвертер, вызывается только если не identity
    - normal_form_key(): собственный порядок внутри типа (для canonical form)
    - _transformation_literal(): описание для __str__
    """

    def convert(self, value: Number) -> Number:
        """
        Преобразование значения.

        Identity возвращает значение без изменений и без валидации.

        Raises:
            ValueError: Если value равно None или не число
        """
        if self.is_identity():
            return value
        return self._convert(check_number(value, "value"))

    def inverse(self) -> "AbstractConverter":
        if self.is_identity():
            return self
        return self._inverse()

    def concatenate(
        self,
        other: UnitConverter,
        handler: "CompositionHandler | None" = None,
    ) -> UnitConverter:
        """
        Композиция self ○ other, приведённая к canonical form.

        Args:
            other: конвертер, применяемый первым
            handler: стратегия композиции (default: NORMAL_FORM_HANDLER)

        Returns:
            self, other, слитый конвертер или Pair

        Raises:
            ValueError: Если other равно None
        """
        if other is None:
            raise ValueError("Cannot compose with converter that is None")

        if isinstance(other, AbstractConverter):
            if handler is None:
                from src.simplify.handler import NORMAL_FORM_HANDLER

                handler = NORMAL_FORM_HANDLER
            return handler.compose(self, other)

        # "чужой" конвертер: структура непрозрачна, canonical form невозможна
        if other.is_identity():
            return self
        if self.is_identity():
            return other
        return Pair(self, other)

    def conversion_steps(self) -> tuple[UnitConverter, ...]:
        return (self,)

    # -------------------------------------------------------------------------
    # Linear factor (RELATIVE scale support)
    # -------------------------------------------------------------------------

    def linear_factor(self) -> Number | None:
        """
        Постоянный множитель первой производной преобразования.

        Нужен для конвертации RELATIVE (дельта) величин, например Δ2°C → Δ°F.

        Returns:
            Множитель или None, если производная не постоянна
        """
        return None

    def require_linear_factor(self) -> Number:
        """
        Raises:
            UnsupportedTransformError: Если линейного множителя нет
        """
        factor = self.linear_factor()
        if factor is None:
            raise UnsupportedTransformError(
                f"{self} has no constant first derivative, "
                f"RELATIVE scale conversion is not supported"
            )
        return factor

    def convert_relative(self, delta: Number) -> Number:
        """
        Конвертация дельты (RELATIVE scale): delta * linear_factor.

        Raises:
            UnsupportedTransformError: Если линейного множителя нет
            ValueError: Если delta равно None или не число
        """
        factor = self.require_linear_factor()
        return Calculator.of(factor).multiply(check_number(delta, "delta")).peek()

    # -------------------------------------------------------------------------
    # Merging (используется только CompositionHandler / CompositionTask)
    # -------------------------------------------------------------------------

    def can_merge_with(self, other: "AbstractConverter") -> bool:
        """True, если self ○ other выражается одним шагом."""
        rule = _MERGE_RULES.get((type(self), type(other)))
        return rule is not None and rule.guard(self, other)

    def merge_with(self, other: "AbstractConverter") -> "AbstractConverter":
        """
        Слияние self ○ other в один шаг (или IDENTITY).

        Raises:
            ReductionInvariantError: Если правила для пары типов нет
        """
        rule = _MERGE_RULES.get((type(self), type(other)))
        if rule is None or not rule.guard(self, other):
            raise ReductionInvariantError(f"{self}.merge_with() not handled for converter {other}")
        return rule.merge(self, other)

    def normal_form_key(self) -> tuple:
        """Порядок внутри одного типа: основание, множитель, смещение..."""
        return ()

    # -------------------------------------------------------------------------
    # Formatting
    # -------------------------------------------------------------------------

    def _transformation_literal(self) -> str | None:
        return None

    def __str__(self) -> str:
        name = type(self).__name__
        if self.is_identity():
            return f"{name}(IDENTITY)"
        literal = self._transformation_literal()
        if not literal:
            return name
        return f"{name}({literal})"


# =============================================================================
# IDENTITY
# =============================================================================


@dataclass(frozen=True)
class Identity(AbstractConverter):
    """Тождественный конвертер: x -> x."""

    def is_identity(self) -> bool:
        return True

    def is_linear(self) -> bool:
        return True

    def convert(self, value: Number) -> Number:
        return value

    def inverse(self) -> "Identity":
        return self

    def linear_factor(self) -> Number:
        return 1


IDENTITY: Final[Identity] = Identity()


def identity() -> Identity:
    return IDENTITY


# =============================================================================
# PAIR
# =============================================================================


@dataclass(frozen=True)
class Pair(AbstractConverter):
    """
    Композиция двух конвертеров (в матричной записи [pair] = [left] x [right]).

    right применяется первым, left — последним. Pair существует только тогда,
    когда дальнейшее структурное упрощение невозможно.
    """

    left: UnitConverter
    right: UnitConverter
    _steps: tuple[UnitConverter, ...] | None = field(
        default=None, init=False, repr=False, compare=False
    )

    def __post_init__(self) -> None:
        if self.left is None or self.right is None:
            raise ValueError("Converters cannot be None")

    def is_identity(self) -> bool:
        return False

    def is_linear(self) -> bool:
        return self.left.is_linear() and self.right.is_linear()

    def linear_factor(self) -> Number | None:
        """Произведение множителей обоих шагов, если оба определены."""
        if not isinstance(self.left, AbstractConverter) or not isinstance(
            self.right, AbstractConverter
        ):
            return None
        left_factor = self.left.linear_factor()
        right_factor = self.right.linear_factor()
        if left_factor is None or right_factor is None:
            return None
        return Calculator.of(left_factor).multiply(right_factor).peek()

    def conversion_steps(self) -> tuple[UnitConverter, ...]:
        """Шаги left, затем шаги right (write-once кэш)."""
        if self._steps is None:
            steps = tuple(self.left.conversion_steps()) + tuple(self.right.conversion_steps())
            object.__setattr__(self, "_steps", steps)
        return self._steps

    def _convert(self, value: Number) -> Number:
        return self.left.convert(self.right.convert(value))

    def _inverse(self) -> "Pair":
        return Pair(self.right.inverse(), self.left.inverse())

    def normal_form_key(self) -> tuple:
        return (str(self),)

    def _transformation_literal(self) -> str:
        return " ○ ".join(str(step) for step in self.conversion_steps())
