"""
Composition Task — редукция плоского списка шагов к normal form

Алгоритм (до фиксированной точки):
1. удалить identity шаги
2. отсортировать каждый участок линейных шагов по ключу normal form
3. слить соседние пары, для которых есть правило слияния
4. уплотнить; повторять, пока происходят слияния

Результат сворачивается в left-leaning дерево Pair:
[a, b, c] → Pair(Pair(a, b), c). Пустой список → IDENTITY, один шаг → он сам.
"""

import logging
from typing import Callable, Optional, Sequence

from src.converters.base import IDENTITY, AbstractConverter, Pair
from src.simplify.array_adapter import ArrayAdapter
from src.simplify.bit_scanner import linear_runs

logger = logging.getLogger(__name__)

NormalFormKey = Callable[[AbstractConverter], tuple]


class CompositionTask:
    """
    Одна стратегия редукции, параметризованная ключом normal form.

    Args:
        normal_form_key: ключ сортировки линейных шагов, обычно
            (rank типа, собственный ключ шага)
    """

    def __init__(self, normal_form_key: NormalFormKey):
        self._normal_form_key = normal_form_key

    def reduce_to_normal_form(self, steps: Sequence[AbstractConverter]) -> AbstractConverter:
        items = [step for step in steps if not step.is_identity()]
        passes = 0
        while True:
            passes += 1
            items = self._sort_linear_runs(items)
            adapter = ArrayAdapter(items)
            merges = adapter.visit_sequential_pairs_and_simplify(self._merge)
            if merges == 0:
                break
            items = [step for step in adapter.remove_nulls(merges) if not step.is_identity()]

        logger.debug(
            "Reduced %d steps to %d in %d passes", len(steps), len(items), passes
        )
        return self.fold(items)

    @staticmethod
    def fold(items: Sequence[AbstractConverter]) -> AbstractConverter:
        if not items:
            return IDENTITY
        result = items[0]
        for step in items[1:]:
            result = Pair(result, step)
        return result

    def _sort_linear_runs(self, items: list[AbstractConverter]) -> list[AbstractConverter]:
        for start, stop in linear_runs(items):
            if stop - start > 1:
                items[start:stop] = sorted(items[start:stop], key=self._normal_form_key)
        return items

    @staticmethod
    def _merge(left: AbstractConverter, right: AbstractConverter) -> Optional[AbstractConverter]:
        if left.can_merge_with(right):
            return left.merge_with(right)
        return None
