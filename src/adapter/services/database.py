"""
SQLAlchemy Execution Engine

Runs every call on its own connection from an AsyncEngine: begin, execute
one command on a DBAPI cursor inside ``run_sync``, drain results, close the
cursor, commit (or roll back on failure). No state survives between calls.
"""

import asyncio
import logging
import re
from typing import Any, Callable, List, Optional, Sequence, TypeVar

from sqlalchemy.ext.asyncio import AsyncEngine

from src.adapter.services.dialects import SqlDialect, dialect_for
from src.adapter.services.record import Record
from src.app.services.database import (
    Database,
    ProcedureOutput,
    ProcedureParameter,
    RowMapper,
)
from src.app.services.errors import BackingStoreError, DatabaseError, TransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_COMMAND_TIMEOUT_SECONDS = 60

GENERIC_FAILURE_MESSAGE = "Unexpected database error. Please try again later."

_DRIVER_PREFIX = re.compile(r"^(\[[^\]]*\]\s*)+")
_DRIVER_SUFFIX = re.compile(r"(\s*\(\d+\))?(\s*\(SQL\w+\))?\s*$")


def store_message(exc: Exception) -> str:
    """
    Extract the store-authored text from a DBAPI error.

    pyodbc reports ``('42000', '[42000] [Microsoft]...[SQL Server]Account
    locked. (50001) (SQLExecDirectW)')``; only ``Account locked.`` is kept.
    """
    texts = [arg for arg in exc.args if isinstance(arg, str)]
    text = texts[-1] if texts else str(exc)
    text = _DRIVER_SUFFIX.sub("", _DRIVER_PREFIX.sub("", text)).strip()
    return text or "The database rejected the request."


def _execute(cursor, sql: str, args: Sequence[Any]) -> None:
    if args:
        cursor.execute(sql, list(args))
    else:
        cursor.execute(sql)


def _next_result_set(cursor) -> bool:
    """
    Move to the next result set that has columns. False once the batch is
    exhausted.

    SQLAlchemy's async cursor adapters return None from ``nextset()`` even
    when another set follows, so only an explicit bool is trusted; otherwise
    a missing description marks the end. Batches run under SET NOCOUNT ON.
    """
    while True:
        advanced = cursor.nextset()
        if advanced is False:
            return False
        if cursor.description is not None:
            return True
        if advanced is not True:
            return False


def _skip_to_rows(cursor) -> bool:
    """Position on the first result set with columns. False if there is none."""
    if cursor.description is not None:
        return True
    return _next_result_set(cursor)


def _map_all(cursor, map_row: RowMapper[T]) -> List[T]:
    columns = Record.column_index(cursor.description)
    return [map_row(Record(columns, row)) for row in cursor.fetchall()]


class SqlAlchemyDatabase(Database):
    """Execution engine over a SQLAlchemy AsyncEngine"""

    def __init__(
        self,
        engine: AsyncEngine,
        command_timeout: float = DEFAULT_COMMAND_TIMEOUT_SECONDS,
        dialect: Optional[SqlDialect] = None,
    ):
        self.engine = engine
        self.command_timeout = command_timeout
        self.dialect = dialect or dialect_for(engine.dialect.name)

    async def _run(self, work: Callable[[Any], T]) -> T:
        try:
            async with self.engine.begin() as connection:
                return await asyncio.wait_for(
                    connection.run_sync(self._on_cursor, work),
                    timeout=self.command_timeout,
                )
        except DatabaseError:
            raise
        except asyncio.TimeoutError as exc:
            logger.error(f"Database command exceeded {self.command_timeout}s timeout")
            raise TransportError("The database did not respond in time") from exc
        except Exception as exc:
            logger.error(f"Unexpected database failure: {exc!r}")
            raise TransportError(GENERIC_FAILURE_MESSAGE) from exc

    @staticmethod
    def _on_cursor(sync_connection, work: Callable[[Any], T]) -> T:
        dbapi = sync_connection.dialect.loaded_dbapi
        cursor = sync_connection.connection.cursor()
        try:
            return work(cursor)
        except DatabaseError:
            raise
        except (dbapi.OperationalError, dbapi.InterfaceError) as exc:
            logger.error(f"Database transport failure: {exc!r}")
            raise TransportError("Database connection failure") from exc
        except dbapi.Error as exc:
            raise BackingStoreError(store_message(exc)) from exc
        finally:
            cursor.close()

    async def call_for_optional_row(
        self,
        name: str,
        params: Optional[Sequence[ProcedureParameter]],
        map_row: RowMapper[T],
    ) -> Optional[T]:
        def work(cursor):
            sql, args = self.dialect.render_procedure(name, params or ())
            _execute(cursor, sql, args)
            if not _skip_to_rows(cursor):
                return None
            row = cursor.fetchone()
            if row is None:
                return None
            return map_row(Record(Record.column_index(cursor.description), row))

        return await self._run(work)

    async def call_for_row_list(
        self,
        name: str,
        params: Optional[Sequence[ProcedureParameter]],
        map_row: RowMapper[T],
    ) -> List[T]:
        def work(cursor):
            sql, args = self.dialect.render_procedure(name, params or ())
            _execute(cursor, sql, args)
            if not _skip_to_rows(cursor):
                return []
            return _map_all(cursor, map_row)

        return await self._run(work)

    async def call_with_output_params(
        self, name: str, params: Sequence[ProcedureParameter]
    ) -> ProcedureOutput:
        def work(cursor):
            sql, args = self.dialect.render_procedure(name, params, capture_outputs=True)
            _execute(cursor, sql, args)

            # Output values come back as the last result set of the batch
            last = None
            has_rows = _skip_to_rows(cursor)
            while has_rows:
                rows = cursor.fetchall()
                if rows:
                    last = Record(Record.column_index(cursor.description), rows[-1])
                has_rows = _next_result_set(cursor)

            outputs = {}
            for parameter in params:
                if parameter.is_output:
                    outputs[parameter.name] = (
                        last.get_value(f"@{parameter.name}") if last is not None else None
                    )
            return outputs

        try:
            outputs = await self._run(work)
        except BackingStoreError as exc:
            return ProcedureOutput(ok=False, error_message=exc.message, failure=exc)
        except DatabaseError as exc:
            return ProcedureOutput(ok=False, error_message=GENERIC_FAILURE_MESSAGE, failure=exc)

        return ProcedureOutput(ok=True, outputs=outputs)

    async def call_for_result_sets(
        self,
        name: str,
        params: Optional[Sequence[ProcedureParameter]],
        mappers: Sequence[RowMapper[Any]],
    ) -> List[List[Any]]:
        def work(cursor):
            sql, args = self.dialect.render_procedure(name, params or ())
            _execute(cursor, sql, args)

            results: List[List[Any]] = []
            has_rows = _skip_to_rows(cursor)
            while has_rows:
                index = len(results)
                if index < len(mappers):
                    results.append(_map_all(cursor, mappers[index]))
                else:
                    cursor.fetchall()
                    results.append([])
                has_rows = _next_result_set(cursor)

            if len(results) != len(mappers):
                logger.warning(
                    f"{name} returned {len(results)} result set(s) "
                    f"but {len(mappers)} mapper(s) were supplied"
                )
            return results

        return await self._run(work)

    async def call_non_query(
        self, name: str, params: Optional[Sequence[ProcedureParameter]]
    ) -> int:
        def work(cursor):
            sql, args = self.dialect.render_procedure(name, params or (), count_rows=True)
            _execute(cursor, sql, args)
            return cursor.rowcount

        return await self._run(work)

    async def query_view(
        self,
        table: str,
        map_row: RowMapper[T],
        where_clause: Optional[str] = None,
        order_by: Optional[str] = None,
        top: Optional[int] = None,
        params: Optional[Sequence[Any]] = None,
    ) -> List[T]:
        def work(cursor):
            sql = self.dialect.render_view(table, where_clause, order_by, top)
            _execute(cursor, sql, params or ())
            return _map_all(cursor, map_row)

        return await self._run(work)

    async def query_raw(
        self,
        sql_text: str,
        map_row: RowMapper[T],
        params: Optional[Sequence[Any]] = None,
    ) -> List[T]:
        def work(cursor):
            _execute(cursor, sql_text, params or ())
            if cursor.description is None:
                return []
            return _map_all(cursor, map_row)

        return await self._run(work)

    async def exists(
        self,
        table: str,
        where_clause: str,
        params: Optional[Sequence[Any]] = None,
    ) -> bool:
        def work(cursor):
            _execute(cursor, self.dialect.render_exists(table, where_clause), params or ())
            row = cursor.fetchone()
            return row is not None and int(row[0]) == 1

        return await self._run(work)
