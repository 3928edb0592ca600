"""
View Filter Builder

Builds WHERE / ORDER BY fragments for view queries from an allow-list of
columns and a fixed set of operators. Values are never rendered into the
SQL text: every value becomes a ``?`` placeholder bound at execution time.
"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, List, Optional, Tuple

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


class Operator(str, Enum):
    """Comparison operators a filter may use"""

    eq = "="
    ne = "<>"
    lt = "<"
    le = "<="
    gt = ">"
    ge = ">="
    like = "LIKE"


@dataclass(frozen=True)
class CompiledFilter:
    where_clause: Optional[str]
    order_by: Optional[str]
    params: Tuple[Any, ...]


class ViewFilter:
    """
    Allow-listed filter for ``Database.query_view``.

    Example:
        ViewFilter(["UserID", "LastActivityAt"])
            .where("UserID", Operator.eq, 42)
            .order_by("LastActivityAt", descending=True)
    """

    def __init__(self, allowed_columns: Iterable[str]):
        self._allowed = {column.lower(): column for column in allowed_columns}
        for column in self._allowed.values():
            if not _IDENTIFIER.match(column):
                raise ValueError(f"Invalid column name in allow-list: {column!r}")
        self._conditions: List[Tuple[str, Operator, Any]] = []
        self._ordering: List[Tuple[str, bool]] = []

    def _column(self, column: str) -> str:
        try:
            return self._allowed[column.lower()]
        except KeyError:
            raise ValueError(f"Column {column!r} is not allowed in this filter") from None

    def where(self, column: str, operator: Operator, value: Any) -> "ViewFilter":
        """Add a condition; conditions are combined with AND."""
        self._conditions.append((self._column(column), Operator(operator), value))
        return self

    def order_by(self, column: str, descending: bool = False) -> "ViewFilter":
        self._ordering.append((self._column(column), descending))
        return self

    def compile(self) -> CompiledFilter:
        where_clause = None
        if self._conditions:
            where_clause = " AND ".join(
                f"{column} {operator.value} ?" for column, operator, _ in self._conditions
            )

        order_by = None
        if self._ordering:
            order_by = ", ".join(
                f"{column} DESC" if descending else column
                for column, descending in self._ordering
            )

        params = tuple(value for _, _, value in self._conditions)
        return CompiledFilter(where_clause=where_clause, order_by=order_by, params=params)
