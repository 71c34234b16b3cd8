"""
Numerical Safeguards — проверки элементов и индексов

Модуль содержит восстановимые (recoverable) проверки входных данных:
- Проверка, что элемент последовательности является числом
- NaN/Inf детекция для float-подобных элементов
- Проверка индексов (целое, неотрицательное, в пределах длины)

Все функции здесь бросают ValueError/TypeError и предназначены для
валидации недоверенного ввода ДО построения индекса или запроса.
Нарушение контракта самого запроса (см. prefix_sum.RangeContractViolation)
сюда не относится.
"""

import math
import numbers
from typing import Any, Iterable


# =============================================================================
# ПРОВЕРКА ЭЛЕМЕНТОВ
# =============================================================================


def is_numeric_element(value: Any) -> bool:
    """
    Проверка, что значение может быть элементом prefix-sum таблицы.

    bool формально является int, но как элемент суммы почти всегда
    означает ошибку вызывающего кода, поэтому отвергается.

    Examples:
        >>> is_numeric_element(3)
        True
        >>> is_numeric_element(Fraction(1, 3))
        True
        >>> is_numeric_element(True)
        False
        >>> is_numeric_element("3")
        False
    """
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def is_valid_float(value: Any) -> bool:
    """
    Проверка, что число конечно (не NaN, не Inf).

    Для типов без понятия бесконечности (int, Fraction) всегда True.
    Decimal и numpy-скаляры обрабатываются через math.isfinite.

    Args:
        value: Проверяемое значение

    Returns:
        True если значение конечно, False если NaN или Inf
    """
    if isinstance(value, numbers.Rational):
        return True
    if isinstance(value, numbers.Complex) and not isinstance(value, numbers.Real):
        # complex (в т.ч. numpy complex): проверяем обе компоненты
        return math.isfinite(value.real) and math.isfinite(value.imag)
    return math.isfinite(value)


def validate_numeric_elements(values: Iterable[Any], name: str = "source") -> None:
    """
    Валидация, что все элементы являются числами.

    Raises:
        TypeError: Если хотя бы один элемент не число (или bool)
    """
    for idx, value in enumerate(values):
        if not is_numeric_element(value):
            raise TypeError(
                f"{name}[{idx}] must be a number, got {type(value).__name__}: {value!r}"
            )


def validate_finite_elements(values: Iterable[Any], name: str = "source") -> None:
    """
    Валидация, что все элементы конечны.

    Raises:
        ValueError: Если хотя бы один элемент NaN или Inf
    """
    for idx, value in enumerate(values):
        if not is_valid_float(value):
            raise ValueError(f"{name}[{idx}] must be finite (not NaN/Inf), got {value}")


# =============================================================================
# ПРОВЕРКА ИНДЕКСОВ
# =============================================================================


def is_index(value: Any) -> bool:
    """
    Проверка, что значение является целочисленным индексом.

    Принимает int и любые объекты с __index__ (например, numpy.int64),
    но не bool.
    """
    if isinstance(value, bool):
        return False
    return isinstance(value, numbers.Integral)


def validate_index(value: Any, name: str, length: int) -> None:
    """
    Валидация индекса относительно известной длины последовательности.

    Args:
        value: Проверяемый индекс
        name: Имя параметра (для сообщения об ошибке)
        length: Длина последовательности

    Raises:
        TypeError: Если индекс не целое число
        ValueError: Если индекс отрицательный или >= length
    """
    if not is_index(value):
        raise TypeError(f"{name} must be an integer index, got {type(value).__name__}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")

    if value >= length:
        raise ValueError(f"{name} must be < {length}, got {value}")
