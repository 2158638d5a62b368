"""
Bit Scanner — участки линейных шагов

Линейные шаги коммутируют между собой, поэтому внутри каждого максимального
непрерывного участка линейных шагов их можно переставлять. Флаги линейности
упаковываются в битовую маску (бит i == шаг i линеен).
"""

from typing import Iterator, Sequence

from src.converters.base import UnitConverter


def linear_mask(steps: Sequence[UnitConverter]) -> int:
    mask = 0
    for index, step in enumerate(steps):
        if step.is_linear():
            mask |= 1 << index
    return mask


def next_set_bit(mask: int, from_index: int) -> int:
    """Индекс первого установленного бита >= from_index, или -1."""
    remaining = mask >> from_index
    if remaining == 0:
        return -1
    return from_index + ((remaining & -remaining).bit_length() - 1)


def next_clear_bit(mask: int, from_index: int) -> int:
    """Индекс первого сброшенного бита >= from_index."""
    return next_set_bit(~mask, from_index)


def linear_runs(steps: Sequence[UnitConverter]) -> Iterator[tuple[int, int]]:
    """
    Максимальные участки линейных шагов.

    Yields:
        (start, stop) — полуинтервалы steps[start:stop], все шаги которых линейны

    Example:
        >>> list(linear_runs([scale(2), shift(1), scale(3), power_of_ten(2)]))
        [(0, 1), (2, 4)]
    """
    mask = linear_mask(steps)
    start = next_set_bit(mask, 0)
    while start != -1:
        stop = next_clear_bit(mask, start)
        yield start, stop
        start = next_set_bit(mask, stop)
