"""
Database Execution Engine Contract

Application-layer view of the backing store. Callers describe one call
(procedure or query name, ordered parameters, row mapper) and get back a
result shaped by the call pattern they picked. Implementations own the
connection for exactly one call and never keep state between calls.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, TypeVar

from src.app.services.errors import DatabaseError
from src.app.services.view_filter import ViewFilter

T = TypeVar("T")

# Mappers receive a src.adapter.services.record.Record positioned on one row
RowMapper = Callable[[Any], T]

DEFAULT_COMPLETION_MESSAGE = "Operation completed."


class ParameterDirection(str, Enum):
    input = "input"
    output = "output"
    input_output = "input_output"


@dataclass
class ProcedureParameter:
    """
    One stored-procedure argument.

    ``sql_type``/``size`` are only needed for output slots, where the store
    has to know the variable type up front (e.g. ``NVARCHAR``, 200).
    """

    name: str
    value: Any = None
    direction: ParameterDirection = ParameterDirection.input
    sql_type: Optional[str] = None
    size: Optional[int] = None

    def __post_init__(self):
        self.name = self.name.lstrip("@")
        if self.direction != ParameterDirection.input and not self.sql_type:
            raise ValueError(f"Output parameter '{self.name}' requires a sql_type")

    @property
    def is_output(self) -> bool:
        return self.direction in (ParameterDirection.output, ParameterDirection.input_output)


def param(name: str, value: Any) -> ProcedureParameter:
    """Input parameter; ``None`` is sent as SQL NULL."""
    return ProcedureParameter(name=name, value=value)


def output_param(name: str, sql_type: str, size: Optional[int] = None) -> ProcedureParameter:
    """Output slot populated by the store during execution."""
    return ProcedureParameter(
        name=name,
        direction=ParameterDirection.output,
        sql_type=sql_type,
        size=size,
    )


@dataclass
class ProcedureOutput:
    """
    Outcome of ``call_with_output_params``.

    ``outputs`` maps parameter names (without ``@``) to their values, NULL
    mapped to None. ``failure`` keeps the classified exception so callers can
    distinguish a store rejection from a transport failure.
    """

    ok: bool
    error_message: Optional[str] = None
    outputs: Dict[str, Any] = field(default_factory=dict)
    failure: Optional[DatabaseError] = None


class Database(ABC):
    """Execution engine interface - application layer"""

    @abstractmethod
    async def call_for_optional_row(
        self,
        name: str,
        params: Optional[Sequence[ProcedureParameter]],
        map_row: RowMapper[T],
    ) -> Optional[T]:
        """Execute a procedure and map only its first row, None if empty"""
        pass

    @abstractmethod
    async def call_for_row_list(
        self,
        name: str,
        params: Optional[Sequence[ProcedureParameter]],
        map_row: RowMapper[T],
    ) -> List[T]:
        """Execute a procedure and map every row of its result set"""
        pass

    @abstractmethod
    async def call_with_output_params(
        self, name: str, params: Sequence[ProcedureParameter]
    ) -> ProcedureOutput:
        """Execute a procedure and collect its output parameters. Never raises."""
        pass

    @abstractmethod
    async def call_for_result_sets(
        self,
        name: str,
        params: Optional[Sequence[ProcedureParameter]],
        mappers: Sequence[RowMapper[Any]],
    ) -> List[List[Any]]:
        """Execute a procedure and map each result set with the mapper at its index"""
        pass

    @abstractmethod
    async def call_non_query(
        self, name: str, params: Optional[Sequence[ProcedureParameter]]
    ) -> int:
        """Execute a procedure that returns no rows. Returns rows affected."""
        pass

    @abstractmethod
    async def query_view(
        self,
        table: str,
        map_row: RowMapper[T],
        where_clause: Optional[str] = None,
        order_by: Optional[str] = None,
        top: Optional[int] = None,
        params: Optional[Sequence[Any]] = None,
    ) -> List[T]:
        """
        SELECT [TOP n] * FROM table [WHERE ...] [ORDER BY ...]

        ``where_clause`` and ``order_by`` are concatenated as-is. Only pass
        constants or fragments compiled by ViewFilter; never user input.
        """
        pass

    @abstractmethod
    async def query_raw(
        self,
        sql_text: str,
        map_row: RowMapper[T],
        params: Optional[Sequence[Any]] = None,
    ) -> List[T]:
        """Execute parameterized SQL text and map every row"""
        pass

    @abstractmethod
    async def exists(
        self,
        table: str,
        where_clause: str,
        params: Optional[Sequence[Any]] = None,
    ) -> bool:
        """True if any row of ``table`` matches; same trust contract as query_view"""
        pass

    async def query_filtered(
        self,
        table: str,
        map_row: RowMapper[T],
        view_filter: ViewFilter,
        top: Optional[int] = None,
    ) -> List[T]:
        compiled = view_filter.compile()
        return await self.query_view(
            table,
            map_row,
            where_clause=compiled.where_clause,
            order_by=compiled.order_by,
            top=top,
            params=compiled.params,
        )

    async def for_message(
        self, name: str, params: Optional[Sequence[ProcedureParameter]]
    ) -> str:
        """Execute a procedure and return the Message column of its first row"""
        message = await self.call_for_optional_row(
            name, params, lambda record: record.get_string("Message")
        )
        return message or DEFAULT_COMPLETION_MESSAGE
