"""
Filtering Module.

Builds the query parameters applied to list operations:
- Filter conditions (field, operation, value).
- Paging.
- Sorting.
"""

from reportportal_client.filtering.filter_option import (
    FilterCondition,
    FilterOperation,
    FilterOption,
    Paging,
    SortDirection,
    Sorting,
    conditions_from_expressions,
    parse_condition,
)

__all__ = [
    "FilterCondition",
    "FilterOperation",
    "FilterOption",
    "Paging",
    "SortDirection",
    "Sorting",
    "conditions_from_expressions",
    "parse_condition",
]
