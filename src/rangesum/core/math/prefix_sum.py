"""
Prefix Sum — построение таблицы и range-sum запросы

Общий контракт для всех вариантов хранения (fixed / owned / borrowed):
- build_prefix_table: один проход вперёд, O(N)
- range_sum: сумма на отрезке [start, end] за O(1)
- range_sum_positive: то же для start >= 1, всегда через вычитание

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. table[0] == source[0]; table[i] == table[i-1] + source[i]
2. Таблица вычисляется один раз и больше не изменяется
3. Нарушение контракта запроса → RangeContractViolation (никогда не clamp,
   никогда не sentinel)
4. Индексация 0-based, отрезок включает обе границы

ФОРМУЛЫ:
    range_sum(start, end) = table[end]                      если start == 0
    range_sum(start, end) = table[end] - table[start - 1]   иначе

Переполнение не контролируется: int в Python не ограничен, float следует
IEEE-754, numpy-скаляры фиксированной ширины переполняются по своим правилам.
Выбор типа элементов с достаточным диапазоном — ответственность вызывающего.
"""

import logging
from typing import Any, Iterable, Iterator, Protocol, Sequence, TypeVar, runtime_checkable

from rangesum.core.math.numerical_safeguards import is_index

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# EXCEPTIONS
# =============================================================================


class RangeContractViolation(AssertionError):
    """
    Нарушение контракта range-запроса: ошибка программиста, не входных данных.

    Возникает при end < start, отрицательном индексе, индексе за пределами
    [0, N-1] или нецелом индексе. Библиотека не перехватывает это исключение
    и не превращает его в значение: вызывающий код обязан проверять индексы
    заранее (например, через RangeQuery.within).

    Наследуется от AssertionError, но бросается явно, поэтому не отключается
    флагом python -O.
    """
    pass


# =============================================================================
# CAPABILITY CONTRACT
# =============================================================================


@runtime_checkable
class SumQuery(Protocol[T]):
    """Контракт range-sum структуры, общий для всех вариантов хранения."""

    def __len__(self) -> int: ...

    def query(self, start: int, end: int) -> T: ...

    def query_positive(self, start: int, end: int) -> T: ...

    def decompose(self) -> tuple[Sequence[T], Sequence[T]]: ...


# =============================================================================
# ПОСТРОЕНИЕ ТАБЛИЦЫ
# =============================================================================


def build_prefix_table(source: Iterable[T]) -> list[T]:
    """
    Построение prefix-sum таблицы за один проход.

    Args:
        source: Упорядоченная последовательность чисел (не изменяется)

    Returns:
        Новый список той же длины, table[i] = sum(source[0..=i])

    Examples:
        >>> build_prefix_table([1, 3, 4, 8])
        [1, 4, 8, 16]
        >>> build_prefix_table([])
        []
    """
    table: list[T] = []
    running: Any = None

    for idx, value in enumerate(source):
        running = value if idx == 0 else running + value
        table.append(running)

    return table


def iter_prefix_sums(source: Sequence[T]) -> Iterator[T]:
    """
    Генератор частичных сумм по явному индексу.

    Позволяет собрать таблицу в неизменяемый контейнер (tuple) за один
    проход, без промежуточного списка.

    Examples:
        >>> tuple(iter_prefix_sums((1, 3, 4)))
        (1, 4, 8)
    """
    running: Any = None

    for idx in range(len(source)):
        running = source[idx] if idx == 0 else running + source[idx]
        yield running


def fill_prefix_table(source: Sequence[T], table: list[Any]) -> None:
    """
    Заполнение заранее выделенной таблицы по явному индексу.

    Используется вариантами, которые выделяют таблицу целиком до прохода
    (owned). len(table) должен совпадать с len(source).
    """
    for idx in range(len(source)):
        if idx == 0:
            table[idx] = source[idx]
        else:
            table[idx] = table[idx - 1] + source[idx]


# =============================================================================
# ПРОВЕРКА КОНТРАКТА
# =============================================================================


def _violation(message: str) -> RangeContractViolation:
    logger.debug("Range contract violation: %s", message)
    return RangeContractViolation(message)


def check_query_range(length: int, start: Any, end: Any) -> None:
    """
    Проверка контракта запроса [start, end] для последовательности длины length.

    Raises:
        RangeContractViolation: Если индексы нецелые, отрицательные,
            end < start или end >= length
    """
    if not is_index(start) or not is_index(end):
        raise _violation(
            f"indices must be integers, got start={start!r}, end={end!r}"
        )

    if start < 0:
        raise _violation(f"negative start index {start} is not supported")

    if end < start:
        raise _violation(f"end must be >= start, got start={start}, end={end}")

    if end >= length:
        raise _violation(f"end index {end} out of range for length {length}")


# =============================================================================
# RANGE QUERIES
# =============================================================================


def range_sum(table: Sequence[T], start: int, end: int) -> T:
    """
    Сумма элементов исходной последовательности на отрезке [start, end].

    Две выборки из таблицы и одно вычитание вместо O(N) суммирования.

    Args:
        table: Prefix-sum таблица (результат build_prefix_table)
        start: Начало отрезка (включительно), 0 <= start <= end
        end: Конец отрезка (включительно), end < len(table)

    Returns:
        sum(source[start..=end])

    Raises:
        RangeContractViolation: При нарушении контракта индексов

    Examples:
        >>> table = build_prefix_table([1, 3, 4, 8, 6, 1, 4, 2])
        >>> range_sum(table, 3, 6)
        19
        >>> range_sum(table, 0, 7)
        29
    """
    check_query_range(len(table), start, end)

    if start == 0:
        return table[end]

    return table[end] - table[start - 1]


def range_sum_positive(table: Sequence[T], start: int, end: int) -> T:
    """
    Вариант range_sum для start >= 1: всегда ветка с вычитанием.

    Для вызывающего кода, который гарантирует, что отрезок не начинается
    с нулевого индекса. Числовой результат совпадает с range_sum.

    Raises:
        RangeContractViolation: Если start == 0 или нарушен общий контракт
    """
    check_query_range(len(table), start, end)

    if start == 0:
        raise _violation("start must be >= 1 for the positive-index query")

    return table[end] - table[start - 1]
