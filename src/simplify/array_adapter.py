"""
Array Adapter — попарный проход по шагам со слиянием соседей

Слитые шаги заменяются на None ("дырка"), уплотнение выполняется отдельно
через remove_nulls().
"""

from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")

# visitor(left, right) -> результат слияния или None, если слить нельзя
PairVisitor = Callable[[T, T], Optional[T]]


class ArrayAdapter(Generic[T]):
    """Изменяемое окно над списком шагов."""

    def __init__(self, items: list[T]):
        self._items: list[Optional[T]] = list(items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> list[Optional[T]]:
        return list(self._items)

    def visit_sequential_pairs_and_simplify(self, visitor: PairVisitor) -> int:
        """
        Проход по соседним (не-None) парам слева направо.

        Если visitor вернул результат, он занимает левую позицию, правая
        становится None, а результат сравнивается со следующим соседом.

        Returns:
            Количество выполненных слияний (== количество новых None)
        """
        merges = 0
        left_index = self._next_present(0)
        while left_index != -1:
            right_index = self._next_present(left_index + 1)
            if right_index == -1:
                break
            merged = visitor(self._items[left_index], self._items[right_index])
            if merged is None:
                left_index = right_index
                continue
            self._items[left_index] = merged
            self._items[right_index] = None
            merges += 1
        return merges

    def remove_nulls(self, null_count: int) -> list[T]:
        """
        Уплотнение: удаление None позиций.

        Args:
            null_count: ожидаемое количество None

        Raises:
            ValueError: Если фактическое количество None не совпадает
        """
        compacted = [item for item in self._items if item is not None]
        if len(self._items) - len(compacted) != null_count:
            raise ValueError(
                f"Expected {null_count} null slots, found {len(self._items) - len(compacted)}"
            )
        self._items = list(compacted)
        return compacted

    def _next_present(self, from_index: int) -> int:
        for index in range(from_index, len(self._items)):
            if self._items[index] is not None:
                return index
        return -1
