"""
Core math modules для rangesum

Prefix-sum таблица, range-sum запросы и проверки входных данных.
"""

# Numerical Safeguards
from rangesum.core.math.numerical_safeguards import (
    is_index,
    is_numeric_element,
    is_valid_float,
    validate_finite_elements,
    validate_index,
    validate_numeric_elements,
)

# Prefix Sum
from rangesum.core.math.prefix_sum import (
    RangeContractViolation,
    SumQuery,
    build_prefix_table,
    check_query_range,
    fill_prefix_table,
    iter_prefix_sums,
    range_sum,
    range_sum_positive,
)

__all__ = [
    # Numerical Safeguards
    "is_index",
    "is_numeric_element",
    "is_valid_float",
    "validate_finite_elements",
    "validate_index",
    "validate_numeric_elements",
    # Prefix Sum — Exceptions
    "RangeContractViolation",
    # Prefix Sum — Contract
    "SumQuery",
    # Prefix Sum — Functions
    "build_prefix_table",
    "check_query_range",
    "fill_prefix_table",
    "iter_prefix_sums",
    "range_sum",
    "range_sum_positive",
]
