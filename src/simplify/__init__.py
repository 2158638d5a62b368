"""
Simplify — приведение композиции конвертеров к canonical form

- handler: CompositionHandler (точка входа, порядок normal form)
- task: CompositionTask (редукция плоского списка шагов до фиксированной точки)
- bit_scanner: поиск непрерывных участков линейных шагов
- array_adapter: попарный проход со слиянием соседей и уплотнение
"""

from src.simplify.handler import (
    DEFAULT_NORMAL_FORM_ORDER,
    NORMAL_FORM_HANDLER,
    CompositionHandler,
)
from src.simplify.task import CompositionTask

__all__ = [
    "DEFAULT_NORMAL_FORM_ORDER",
    "NORMAL_FORM_HANDLER",
    "CompositionHandler",
    "CompositionTask",
]
