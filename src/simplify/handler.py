"""
Composition Handler — точка входа композиции конвертеров

compose(left, right) строит left ○ right (сначала right, затем left) в
canonical form: две цепочки, задающие одно и то же преобразование через
одни и те же шаги, дают структурно равные результаты.

Порядок normal form задаётся таблицей rank по типу шага и внедряется через
конструктор. NORMAL_FORM_HANDLER — неизменяемый экземпляр по умолчанию.
"""

from types import MappingProxyType
from typing import Final, Mapping, Optional

from src.converters.base import (
    AbstractConverter,
    Identity,
    Pair,
    ReductionInvariantError,
)
from src.converters.logarithmic import Exponential, Logarithm
from src.converters.scale import FloatScale, PowerOfBase, PowerOfPi, RationalScale
from src.converters.shift import Shift
from src.simplify.task import CompositionTask

DEFAULT_NORMAL_FORM_ORDER: Final[Mapping[type, int]] = MappingProxyType(
    {
        Identity: 0,
        PowerOfBase: 1,
        RationalScale: 2,
        PowerOfPi: 3,
        FloatScale: 4,
        Shift: 5,
        Logarithm: 6,
        Exponential: 7,
        Pair: 99,
    }
)


class CompositionHandler:
    """
    Композиция двух конвертеров с приведением к normal form.

    Args:
        normal_form_order: rank по типу шага (default: DEFAULT_NORMAL_FORM_ORDER)
    """

    def __init__(self, normal_form_order: Optional[Mapping[type, int]] = None):
        order = DEFAULT_NORMAL_FORM_ORDER if normal_form_order is None else normal_form_order
        self._order: Mapping[type, int] = MappingProxyType(dict(order))
        self._task = CompositionTask(self.normal_form_key)

    @property
    def normal_form_order(self) -> Mapping[type, int]:
        return self._order

    def rank(self, converter: AbstractConverter) -> int:
        """
        Raises:
            ReductionInvariantError: Если тип шага отсутствует в таблице
        """
        try:
            return self._order[type(converter)]
        except KeyError:
            raise ReductionInvariantError(
                f"{type(converter).__name__} has no normal form rank"
            ) from None

    def normal_form_key(self, converter: AbstractConverter) -> tuple:
        return (self.rank(converter), converter.normal_form_key())

    def compose(self, left: AbstractConverter, right: AbstractConverter) -> AbstractConverter:
        """
        left ○ right в canonical form.

        1. identity: возвращается другой операнд (оба identity → меньший rank)
        2. прямое слияние, если для пары есть правило
        3. оба линейны → порядок по ключу normal form
        4. полная редукция плоского списка шагов
        """
        if left.is_identity() and right.is_identity():
            return left if self.rank(left) <= self.rank(right) else right
        if right.is_identity():
            return left
        if left.is_identity():
            return right

        if left.can_merge_with(right):
            return left.merge_with(right)

        if left.is_linear() and right.is_linear():
            if self.normal_form_key(right) < self.normal_form_key(left):
                left, right = right, left

        pair = Pair(left, right)
        steps = pair.conversion_steps()
        # шаги "чужих" реализаций не упорядочиваются и не сливаются
        if not all(isinstance(step, AbstractConverter) for step in steps):
            return pair
        return self._task.reduce_to_normal_form(steps)


NORMAL_FORM_HANDLER: Final[CompositionHandler] = CompositionHandler()
