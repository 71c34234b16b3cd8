"""
Тесты для Prefix Sum — построение таблицы и range-sum запросы

Проверяемые инварианты:
1. table[0] == source[0]; table[i] == table[i-1] + source[i]
2. range_sum совпадает с наивным суммированием на всех валидных отрезках
3. range_sum(i, i) == source[i]; range_sum(0, N-1) == sum(source)
4. Нарушение контракта → RangeContractViolation, никогда не значение
5. range_sum_positive совпадает с range_sum при start >= 1
"""

from decimal import Decimal
from fractions import Fraction

import pytest

from rangesum.core.math.prefix_sum import (
    RangeContractViolation,
    build_prefix_table,
    check_query_range,
    fill_prefix_table,
    iter_prefix_sums,
    range_sum,
    range_sum_positive,
)

SOURCE = [1, 3, 4, 8, 6, 1, 4, 2]
EXPECTED_TABLE = [1, 4, 8, 16, 22, 23, 27, 29]
EXPECTED_QUERIES = [
    ((3, 6), 19),
    ((0, 7), 29),
    ((0, 6), 27),
    ((1, 6), 26),
    ((2, 7), 25),
    ((5, 6), 5),
    ((6, 6), 4),
]


# =============================================================================
# ТЕСТЫ: Построение таблицы
# =============================================================================


class TestBuildPrefixTable:
    """Тесты build_prefix_table: один проход вперёд."""

    def test_reference_scenario(self) -> None:
        assert build_prefix_table(SOURCE) == EXPECTED_TABLE

    def test_empty(self) -> None:
        """Пустая последовательность → пустая таблица."""
        assert build_prefix_table([]) == []

    def test_single_element(self) -> None:
        assert build_prefix_table([5]) == [5]

    def test_recurrence(self) -> None:
        """table[i] == table[i-1] + source[i] для всех i."""
        source = [7, -3, 0, 12, -9, 4]
        table = build_prefix_table(source)

        assert table[0] == source[0]
        for i in range(1, len(source)):
            assert table[i] == table[i - 1] + source[i]

    def test_accepts_generator(self) -> None:
        assert build_prefix_table(x for x in SOURCE) == EXPECTED_TABLE

    def test_source_not_mutated(self) -> None:
        source = list(SOURCE)
        build_prefix_table(source)
        assert source == SOURCE

    def test_fraction_elements(self) -> None:
        table = build_prefix_table([Fraction(1, 2), Fraction(1, 3), Fraction(1, 6)])
        assert table == [Fraction(1, 2), Fraction(5, 6), Fraction(1)]


class TestFillPrefixTable:
    """Тесты fill_prefix_table: заполнение заранее выделенной таблицы."""

    def test_matches_build(self) -> None:
        table = [None] * len(SOURCE)
        fill_prefix_table(SOURCE, table)
        assert table == EXPECTED_TABLE

    def test_empty(self) -> None:
        table: list = []
        fill_prefix_table([], table)
        assert table == []


class TestIterPrefixSums:
    """Тесты iter_prefix_sums: генератор для сборки tuple-таблицы."""

    def test_matches_build(self) -> None:
        assert tuple(iter_prefix_sums(tuple(SOURCE))) == tuple(EXPECTED_TABLE)

    def test_is_lazy(self) -> None:
        """Суммы выдаются по одной, без промежуточного списка."""
        sums = iter_prefix_sums(SOURCE)
        assert next(sums) == 1
        assert next(sums) == 4

    def test_empty(self) -> None:
        assert tuple(iter_prefix_sums(())) == ()


# =============================================================================
# ТЕСТЫ: Range Sum
# =============================================================================


class TestRangeSum:
    """Тесты range_sum: две выборки и одно вычитание."""

    @pytest.fixture
    def table(self) -> list[int]:
        return build_prefix_table(SOURCE)

    @pytest.mark.parametrize("bounds, expected", EXPECTED_QUERIES)
    def test_reference_queries(self, table, bounds, expected) -> None:
        assert range_sum(table, *bounds) == expected

    def test_matches_naive_sum(self, table) -> None:
        """Каждый валидный отрезок совпадает с прямым суммированием."""
        n = len(SOURCE)
        for start in range(n):
            for end in range(start, n):
                assert range_sum(table, start, end) == sum(SOURCE[start : end + 1])

    def test_single_element_range(self, table) -> None:
        """range_sum(i, i) == source[i]."""
        for i, value in enumerate(SOURCE):
            assert range_sum(table, i, i) == value

    def test_full_range(self, table) -> None:
        assert range_sum(table, 0, len(SOURCE) - 1) == sum(SOURCE)

    def test_float_elements_exact(self) -> None:
        """Все частичные суммы точно представимы → точное равенство."""
        table = build_prefix_table([float(x) for x in SOURCE])
        for (start, end), expected in EXPECTED_QUERIES:
            assert range_sum(table, start, end) == float(expected)

    def test_decimal_elements(self) -> None:
        source = [Decimal("0.1"), Decimal("0.2"), Decimal("0.3")]
        table = build_prefix_table(source)
        assert range_sum(table, 1, 2) == Decimal("0.5")
        assert range_sum(table, 0, 2) == Decimal("0.6")

    def test_negative_elements(self) -> None:
        source = [-5, 10, -3, 8]
        table = build_prefix_table(source)
        assert range_sum(table, 1, 2) == 7
        assert range_sum(table, 0, 3) == 10


class TestRangeSumContract:
    """Тесты контракта: нарушение → RangeContractViolation."""

    @pytest.fixture
    def table(self) -> list[int]:
        return build_prefix_table(SOURCE)

    def test_reversed_range(self, table) -> None:
        with pytest.raises(RangeContractViolation, match="end must be >= start"):
            range_sum(table, 6, 3)

    def test_end_out_of_bounds(self, table) -> None:
        with pytest.raises(RangeContractViolation, match="out of range"):
            range_sum(table, 0, 8)

    def test_negative_start(self, table) -> None:
        """Отрицательные индексы не интерпретируются с конца."""
        with pytest.raises(RangeContractViolation, match="negative"):
            range_sum(table, -1, 3)

    def test_non_integer_index(self, table) -> None:
        with pytest.raises(RangeContractViolation, match="integers"):
            range_sum(table, 1.0, 3)

        with pytest.raises(RangeContractViolation, match="integers"):
            range_sum(table, 0, True)

    def test_empty_table_has_no_valid_range(self) -> None:
        with pytest.raises(RangeContractViolation):
            range_sum([], 0, 0)

    def test_is_assertion_error(self, table) -> None:
        """Нарушение контракта — ошибка программиста, не ValueError."""
        with pytest.raises(AssertionError):
            range_sum(table, 5, 4)

        assert not issubclass(RangeContractViolation, ValueError)

    def test_check_query_range_accepts_valid(self) -> None:
        check_query_range(8, 0, 7)
        check_query_range(8, 7, 7)
        check_query_range(1, 0, 0)


class TestRangeSumPositive:
    """Тесты range_sum_positive: только start >= 1."""

    @pytest.fixture
    def table(self) -> list[int]:
        return build_prefix_table(SOURCE)

    def test_matches_range_sum(self, table) -> None:
        n = len(SOURCE)
        for start in range(1, n):
            for end in range(start, n):
                assert range_sum_positive(table, start, end) == range_sum(table, start, end)

    def test_reference_values(self, table) -> None:
        assert range_sum_positive(table, 3, 6) == 19
        assert range_sum_positive(table, 1, 6) == 26
        assert range_sum_positive(table, 6, 6) == 4

    def test_zero_start_rejected(self, table) -> None:
        with pytest.raises(RangeContractViolation, match="start must be >= 1"):
            range_sum_positive(table, 0, 3)

    def test_reversed_range_rejected(self, table) -> None:
        with pytest.raises(RangeContractViolation):
            range_sum_positive(table, 4, 2)
