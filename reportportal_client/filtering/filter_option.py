"""
Filter Options for List Operations.

Renders filter criteria, paging and sorting into the query parameters
understood by the ReportPortal API:

    filter.eq.name=Nightly        (one per FilterCondition)
    filter.in.tags=smoke,ui       (list values joined with ",")
    page.page=2                   (Paging.number)
    page.size=50                  (Paging.size)
    page.sort=start_time,DESC     (Sorting fields followed by direction)

Datetime values are sent as epoch milliseconds.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence


class FilterOperation(Enum):
    """Comparison applied by a filter condition."""

    EQUALS = "eq"
    NOT_EQUALS = "ne"
    CONTAINS = "cnt"
    NOT_CONTAINS = "!cnt"
    BETWEEN = "btw"
    IN = "in"
    HAS = "has"
    NOT_HAS = "!has"
    GREATER_THAN = "gt"
    GREATER_THAN_OR_EQUALS = "gte"
    LOWER_THAN = "lt"
    LOWER_THAN_OR_EQUALS = "lte"
    EXISTS = "ex"


class SortDirection(Enum):
    """Sort order for list operations."""

    ASCENDING = "ASC"
    DESCENDING = "DESC"


def _render_value(value: Any) -> str:
    """Render a single filter value as a query string fragment."""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return str(int(value.timestamp() * 1000))
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, (list, tuple, set)):
        return ",".join(_render_value(v) for v in value)
    return str(value)


@dataclass
class FilterCondition:
    """
    A single filter criterion.

    Attributes:
        operation: Comparison to apply.
        field: Name of the filtered field (e.g., "name", "tags", "start_time").
        value: Value or values to compare against.
    """

    operation: FilterOperation
    field: str
    value: Any

    @property
    def key(self) -> str:
        return f"filter.{self.operation.value}.{self.field}"

    def render(self) -> str:
        return _render_value(self.value)


@dataclass
class Paging:
    """Page selection (1-based page number)."""

    number: int = 1
    size: int = 20

    def __post_init__(self) -> None:
        if self.number < 1:
            raise ValueError(f"Page number must be >= 1, got {self.number}")
        if self.size < 1:
            raise ValueError(f"Page size must be >= 1, got {self.size}")


@dataclass
class Sorting:
    """Sort fields and direction."""

    fields: List[str]
    direction: SortDirection = SortDirection.ASCENDING

    def render(self) -> str:
        return ",".join([*self.fields, self.direction.value])


@dataclass
class FilterOption:
    """
    Query criteria applied to list operations.

    Usage::

        option = FilterOption(
            conditions=[FilterCondition(FilterOperation.EQUALS, "name", "Nightly")],
            paging=Paging(number=1, size=50),
            sorting=Sorting(["start_time"], SortDirection.DESCENDING),
        )
        option.to_params()
        # {"filter.eq.name": "Nightly", "page.page": "1",
        #  "page.size": "50", "page.sort": "start_time,DESC"}
    """

    conditions: List[FilterCondition] = field(default_factory=list)
    paging: Optional[Paging] = None
    sorting: Optional[Sorting] = None

    def add(
        self,
        operation: FilterOperation,
        field_name: str,
        value: Any,
    ) -> FilterOption:
        """Append a condition and return self for chaining."""
        self.conditions.append(FilterCondition(operation, field_name, value))
        return self

    def to_params(self) -> Dict[str, str]:
        """
        Render all criteria as query parameters.

        Conditions sharing the same operation and field collapse to one
        parameter; the last one wins.

        Returns:
            Mapping of query parameter name to value.
        """
        params: Dict[str, str] = {}
        for condition in self.conditions:
            params[condition.key] = condition.render()

        if self.paging is not None:
            params["page.page"] = str(self.paging.number)
            params["page.size"] = str(self.paging.size)

        if self.sorting is not None and self.sorting.fields:
            params["page.sort"] = self.sorting.render()

        return params


def parse_condition(expression: str) -> FilterCondition:
    """
    Parse a ``[operation.]field=value`` expression into a condition.

    The operation defaults to ``eq``. Used by the command-line interface.

    Examples:
        "name=Nightly" -> filter.eq.name=Nightly
        "cnt.description=smoke" -> filter.cnt.description=smoke

    Raises:
        ValueError: If the expression has no "=" or an unknown operation.
    """
    if "=" not in expression:
        raise ValueError(f"Filter expression must look like [op.]field=value: {expression!r}")

    lhs, value = expression.split("=", 1)
    operation = FilterOperation.EQUALS
    field_name = lhs
    if "." in lhs:
        op_text, field_name = lhs.split(".", 1)
        operation = FilterOperation(op_text)

    if not field_name:
        raise ValueError(f"Filter expression has an empty field name: {expression!r}")
    return FilterCondition(operation, field_name, value)


def conditions_from_expressions(expressions: Sequence[str]) -> List[FilterCondition]:
    return [parse_condition(expr) for expr in expressions]
