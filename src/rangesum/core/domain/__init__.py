"""
Domain модели rangesum

Immutable range-sum индекс и модель запроса отрезка.
"""

from .range_query import RangeQuery
from .sum_query import (
    PrefixSumConfig,
    PrefixSumIndex,
    StorageKind,
    prefix_sum_borrowed,
    prefix_sum_fixed,
    prefix_sum_owned,
)

__all__ = [
    # Models
    "PrefixSumIndex",
    "RangeQuery",
    # Enums
    "StorageKind",
    # Config
    "PrefixSumConfig",
    # Functions
    "prefix_sum_borrowed",
    "prefix_sum_fixed",
    "prefix_sum_owned",
]
