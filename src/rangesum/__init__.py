"""
rangesum — range-sum запросы за O(1) после O(N) предобработки.

Example:
    >>> from rangesum import PrefixSumIndex
    >>> index = PrefixSumIndex.owned([1, 3, 4, 8, 6, 1, 4, 2])
    >>> index.query(3, 6)
    19
"""

from rangesum.core.domain import (
    PrefixSumConfig,
    PrefixSumIndex,
    RangeQuery,
    StorageKind,
    prefix_sum_borrowed,
    prefix_sum_fixed,
    prefix_sum_owned,
)
from rangesum.core.math import (
    RangeContractViolation,
    SumQuery,
    build_prefix_table,
    range_sum,
    range_sum_positive,
)

__version__ = "0.1.0"

__all__ = [
    "PrefixSumConfig",
    "PrefixSumIndex",
    "RangeContractViolation",
    "RangeQuery",
    "StorageKind",
    "SumQuery",
    "build_prefix_table",
    "prefix_sum_borrowed",
    "prefix_sum_fixed",
    "prefix_sum_owned",
    "range_sum",
    "range_sum_positive",
]
