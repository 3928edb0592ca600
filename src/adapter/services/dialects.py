"""
SQL Dialects

Render engine calls into SQL text plus positional (qmark) arguments for the
DBAPI driver behind the SQLAlchemy engine.
"""

import re
from typing import Any, List, Optional, Sequence, Tuple

from src.app.services.database import ParameterDirection, ProcedureParameter

_OBJECT_NAME = re.compile(r"^[A-Za-z_\[][\w\[\]]*(\.[A-Za-z_\[][\w\[\]]*)*$")


def _check_object_name(name: str) -> str:
    if not _OBJECT_NAME.match(name):
        raise ValueError(f"Invalid database object name: {name!r}")
    return name


class SqlDialect:
    name = "generic"

    def render_procedure(
        self,
        procedure: str,
        params: Sequence[ProcedureParameter],
        capture_outputs: bool = False,
        count_rows: bool = False,
    ) -> Tuple[str, List[Any]]:
        raise NotImplementedError(f"{self.name} does not support stored procedures")

    def render_view(
        self,
        table: str,
        where_clause: Optional[str] = None,
        order_by: Optional[str] = None,
        top: Optional[int] = None,
    ) -> str:
        query = f"SELECT * FROM {_check_object_name(table)}"
        if where_clause and where_clause.strip():
            query += f" WHERE {where_clause}"
        if order_by and order_by.strip():
            query += f" ORDER BY {order_by}"
        if top is not None:
            query += f" LIMIT {int(top)}"
        return query

    def render_exists(self, table: str, where_clause: str) -> str:
        return (
            f"SELECT CASE WHEN EXISTS(SELECT 1 FROM {_check_object_name(table)} "
            f"WHERE {where_clause}) THEN 1 ELSE 0 END"
        )


class SqliteDialect(SqlDialect):
    name = "sqlite"


class MssqlDialect(SqlDialect):
    """
    SQL Server rendering.

    Procedures are sent as a T-SQL batch. Output slots are declared as local
    variables, passed with OUTPUT and selected back as the last result set,
    aliased with their parameter names (``[@Message]``).
    """

    name = "mssql"

    @staticmethod
    def _declared_type(parameter: ProcedureParameter) -> str:
        if parameter.size is not None:
            return f"{parameter.sql_type}({parameter.size})"
        return parameter.sql_type

    def render_procedure(
        self,
        procedure: str,
        params: Sequence[ProcedureParameter],
        capture_outputs: bool = False,
        count_rows: bool = False,
    ) -> Tuple[str, List[Any]]:
        statements: List[str] = []
        args: List[Any] = []

        # Row counts must stay on for non-queries so cursor.rowcount is meaningful
        if not count_rows:
            statements.append("SET NOCOUNT ON;")

        outputs = [p for p in params if p.is_output] if capture_outputs else []
        for parameter in outputs:
            declaration = f"DECLARE @{parameter.name} {self._declared_type(parameter)}"
            if parameter.direction == ParameterDirection.input_output:
                declaration += " = ?"
                args.append(parameter.value)
            statements.append(declaration + ";")

        assignments: List[str] = []
        for parameter in params:
            if parameter.is_output and capture_outputs:
                assignments.append(f"@{parameter.name} = @{parameter.name} OUTPUT")
            elif parameter.direction == ParameterDirection.output:
                # Output slot the caller does not want back
                assignments.append(f"@{parameter.name} = NULL")
            else:
                assignments.append(f"@{parameter.name} = ?")
                args.append(parameter.value)

        call = f"EXEC {_check_object_name(procedure)}"
        if assignments:
            call += " " + ", ".join(assignments)
        statements.append(call + ";")

        if outputs:
            selected = ", ".join(f"@{p.name} AS [@{p.name}]" for p in outputs)
            statements.append(f"SELECT {selected};")

        return "\n".join(statements), args

    def render_view(
        self,
        table: str,
        where_clause: Optional[str] = None,
        order_by: Optional[str] = None,
        top: Optional[int] = None,
    ) -> str:
        head = f"SELECT TOP {int(top)} *" if top is not None else "SELECT *"
        query = f"{head} FROM {_check_object_name(table)}"
        if where_clause and where_clause.strip():
            query += f" WHERE {where_clause}"
        if order_by and order_by.strip():
            query += f" ORDER BY {order_by}"
        return query


_DIALECTS = {
    MssqlDialect.name: MssqlDialect,
    SqliteDialect.name: SqliteDialect,
}


def dialect_for(engine_dialect_name: str) -> SqlDialect:
    """Pick the rendering dialect matching a SQLAlchemy dialect name."""
    return _DIALECTS.get(engine_dialect_name, SqlDialect)()
