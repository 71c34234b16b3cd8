"""
PrefixSumIndex — range-sum индекс с тремя вариантами хранения

Один тип, параметризованный тегом StorageKind:
- FIXED: исходные данные и таблица копируются в tuple фиксированной длины
- OWNED: исходные данные материализуются в list, таблица — list
- BORROWED: исходные данные не копируются, индекс владеет только таблицей

Семантика query / query_positive / decompose одинакова для всех вариантов
и реализована один раз в rangesum.core.math.prefix_sum.

Все варианты суммируют сами элементы источника, без преобразования типа:
numpy int8 остаётся int8 (с его переполнением), complex остаётся complex.

Borrowed вариант после построения читает только table. Если вызывающий
изменит заимствованную последовательность, source разойдётся с table,
но результаты query останутся результатами для данных на момент построения.
Для источников с buffer protocol (array.array, bytearray, numpy) индекс
держит memoryview, который запрещает изменение их размера, пока индекс жив.

Сравнение и хэш учитывают storage и table (source однозначно
восстанавливается по table). Порядок — лексикографический по (storage, table).
"""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Final, Generic, TypeVar

from rangesum.core.domain.range_query import RangeQuery
from rangesum.core.math.numerical_safeguards import (
    validate_finite_elements,
    validate_numeric_elements,
)
from rangesum.core.math.prefix_sum import (
    build_prefix_table,
    fill_prefix_table,
    iter_prefix_sums,
    range_sum,
    range_sum_positive,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Размерность, которую допускает borrowed вариант для buffer-источников
BORROWED_BUFFER_NDIM: Final[int] = 1


# =============================================================================
# ENUMS
# =============================================================================


class StorageKind(str, Enum):
    """Вариант хранения исходных данных и таблицы"""

    FIXED = "fixed"
    OWNED = "owned"
    BORROWED = "borrowed"


# =============================================================================
# CONFIG
# =============================================================================


@dataclass(frozen=True)
class PrefixSumConfig:
    """Конфигурация построения индекса.

    Проверки выполняются один раз при построении и бросают
    TypeError / ValueError (восстановимые ошибки входных данных).
    """

    # Каждый элемент обязан быть numbers.Number (bool отвергается)
    require_numeric: bool = True

    # Отвергать NaN / ±Inf элементы
    reject_non_finite: bool = False


def _validate_source(source: Iterable[Any], config: PrefixSumConfig) -> None:
    if config.require_numeric:
        validate_numeric_elements(source)
    if config.reject_non_finite:
        validate_finite_elements(source)


def _pin(source: Any) -> memoryview | None:
    """memoryview, удерживающий buffer-источник от изменения размера.

    Элементы через него не читаются: индексация memoryview приводит
    numpy-скаляры к int/float и не поддерживает часть форматов (complex).

    Returns:
        memoryview для buffer-источника, None для обычной последовательности

    Raises:
        TypeError: Если source не последовательность и не buffer
        ValueError: Если buffer не одномерный
    """
    try:
        view = memoryview(source)
    except TypeError:
        if not isinstance(source, Sequence):
            raise TypeError(
                f"borrowed source must be a sequence or expose the buffer protocol, "
                f"got {type(source).__name__}"
            ) from None
        return None

    if view.ndim != BORROWED_BUFFER_NDIM:
        ndim = view.ndim
        view.release()
        raise ValueError(f"borrowed buffer must be one-dimensional, got ndim={ndim}")

    return view


# =============================================================================
# PREFIX SUM INDEX
# =============================================================================


@dataclass(frozen=True, order=True)
class PrefixSumIndex(Generic[T]):
    """
    Range-sum индекс над упорядоченной последовательностью.

    Создаётся через fixed() / owned() / borrowed(); прямой вызов конструктора
    не пересчитывает таблицу и предназначен только для этих фабрик.

    Immutable после построения: безопасен для конкурентного чтения.
    Хэшируется только fixed вариант (tuple-таблица); owned и borrowed
    бросают TypeError, как list.
    """

    storage: StorageKind
    _table: Sequence[T]
    _source: Sequence[T] = field(compare=False)
    _buffer: memoryview | None = field(default=None, compare=False, repr=False)

    # -------------------------------------------------------------------------
    # Construction
    # -------------------------------------------------------------------------

    @classmethod
    def fixed(
        cls,
        source: Iterable[T],
        size: int | None = None,
        config: PrefixSumConfig | None = None,
    ) -> "PrefixSumIndex[T]":
        """Fixed вариант: tuple фиксированной длины для данных и таблицы.

        Таблица собирается в tuple напрямую из генератора частичных сумм,
        без промежуточного списка.

        Args:
            source: Исходная последовательность (копируется)
            size: Ожидаемая длина; если задана, обязана совпасть с len(source)
            config: Параметры проверки элементов

        Raises:
            ValueError: Если длина не совпадает с size
        """
        config = config or PrefixSumConfig()
        data = tuple(source)

        if size is not None and len(data) != size:
            raise ValueError(f"fixed source must have exactly {size} elements, got {len(data)}")

        _validate_source(data, config)

        return cls._built(StorageKind.FIXED, data, tuple(iter_prefix_sums(data)))

    @classmethod
    def owned(
        cls,
        source: Iterable[T],
        config: PrefixSumConfig | None = None,
    ) -> "PrefixSumIndex[T]":
        """Owned вариант: list для данных и заранее выделенная list-таблица."""
        config = config or PrefixSumConfig()
        data = list(source)
        _validate_source(data, config)

        table: list[Any] = [None] * len(data)
        fill_prefix_table(data, table)

        return cls._built(StorageKind.OWNED, data, table)

    @classmethod
    def borrowed(
        cls,
        source: Sequence[T],
        config: PrefixSumConfig | None = None,
    ) -> "PrefixSumIndex[T]":
        """Borrowed вариант: данные не копируются, таблица своя.

        Таблица строится обходом самого source, поэтому тип элементов
        и арифметика совпадают с fixed и owned вариантами.

        Raises:
            TypeError: Если source не последовательность и не buffer
            ValueError: Если buffer не одномерный
        """
        config = config or PrefixSumConfig()
        buffer = _pin(source)
        try:
            _validate_source(source, config)
            table = build_prefix_table(source)
        except Exception:
            if buffer is not None:
                buffer.release()
            raise

        return cls._built(StorageKind.BORROWED, source, table, buffer)

    @classmethod
    def _built(
        cls,
        storage: StorageKind,
        source: Sequence[T],
        table: Sequence[T],
        buffer: memoryview | None = None,
    ) -> "PrefixSumIndex[T]":
        logger.debug("Built prefix-sum index: storage=%s length=%d", storage.value, len(table))
        return cls(storage, table, source, buffer)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def query(self, start: int, end: int) -> T:
        """Сумма элементов на отрезке [start, end] (включительно), O(1).

        Raises:
            RangeContractViolation: Если end < start или индекс вне [0, N-1]
        """
        return range_sum(self._table, start, end)

    def query_positive(self, start: int, end: int) -> T:
        """query для 1 <= start <= end, результат всегда через вычитание."""
        return range_sum_positive(self._table, start, end)

    def query_range(self, request: RangeQuery) -> T:
        return range_sum(self._table, request.start, request.end)

    def validate_range(self, start: int, end: int) -> RangeQuery:
        """Восстановимая проверка отрезка против длины индекса.

        Raises:
            ValidationError: Если индексы отрицательные или end < start
            ValueError: Если end >= len(self) (validate_index)
        """
        return RangeQuery.within(len(self), start, end)

    def total(self) -> Any:
        """Сумма всей последовательности (0 для пустого индекса)."""
        if not self._table:
            return 0
        return self._table[-1]

    # -------------------------------------------------------------------------
    # Accessors
    # -------------------------------------------------------------------------

    @property
    def source(self) -> Sequence[T]:
        return self._source

    @property
    def table(self) -> Sequence[T]:
        return self._table

    def decompose(self) -> tuple[Sequence[T], Sequence[T]]:
        """Возвращает (source, table) без копирования.

        Для borrowed варианта source — объект вызывающего кода.
        """
        return self._source, self._table

    def release(self) -> None:
        """Завершение заимствования buffer-источника.

        После release() владелец буфера снова может менять его размер;
        query продолжает работать по собственной таблице.
        Для источников без buffer protocol — no-op.
        """
        if self._buffer is not None:
            self._buffer.release()

    def __len__(self) -> int:
        return len(self._table)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def prefix_sum_fixed(
    source: Iterable[T], size: int | None = None, config: PrefixSumConfig | None = None
) -> PrefixSumIndex[T]:
    """Построение fixed индекса."""
    return PrefixSumIndex.fixed(source, size=size, config=config)


def prefix_sum_owned(
    source: Iterable[T], config: PrefixSumConfig | None = None
) -> PrefixSumIndex[T]:
    """Построение owned индекса."""
    return PrefixSumIndex.owned(source, config=config)


def prefix_sum_borrowed(
    source: Sequence[T], config: PrefixSumConfig | None = None
) -> PrefixSumIndex[T]:
    """Построение borrowed индекса."""
    return PrefixSumIndex.borrowed(source, config=config)
