"""
Scripted DBAPI stand-ins for engine tests.

FakeEngine mimics the slice of sqlalchemy's AsyncEngine the execution engine
touches: ``dialect.name``, ``begin()`` and ``run_sync`` handing a sync
connection whose ``connection.cursor()`` is a ScriptedCursor. Errors use the
sqlite3 exception hierarchy as the loaded DBAPI.
"""

import asyncio
import sqlite3
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from types import SimpleNamespace
from typing import Any, Callable, List, Optional, Sequence, Tuple


@dataclass
class ResultSet:
    columns: Sequence[str]
    rows: List[Tuple[Any, ...]] = field(default_factory=list)


# (sql, args) -> (result sets, rowcount); a None entry is a set without columns
Handler = Callable[[str, List[Any]], Tuple[List[Optional[ResultSet]], int]]


def scripted(*result_sets: Optional[ResultSet], rowcount: int = -1) -> Handler:
    def handler(sql, args):
        return list(result_sets), rowcount

    return handler


def raising(exc: Exception) -> Handler:
    def handler(sql, args):
        raise exc

    return handler


class ScriptedCursor:
    """
    ``adapter_nextset`` mimics SQLAlchemy's async cursor adapters, whose
    ``nextset()`` always returns None; otherwise it behaves like pyodbc.
    """

    def __init__(self, handler: Handler, adapter_nextset: bool = False):
        self._handler = handler
        self._adapter_nextset = adapter_nextset
        self._sets: List[Optional[ResultSet]] = []
        self._index = 0
        self._position = 0
        self.rowcount = -1
        self.executed: List[Tuple[str, List[Any]]] = []
        self.closed = False

    def _current(self) -> Optional[ResultSet]:
        if self._index < len(self._sets):
            return self._sets[self._index]
        return None

    @property
    def description(self):
        current = self._current()
        if current is None:
            return None
        return [(name, None, None, None, None, None, None) for name in current.columns]

    def execute(self, sql, args=None):
        args = list(args or [])
        self.executed.append((sql, args))
        self._sets, self.rowcount = self._handler(sql, args)
        self._index = 0
        self._position = 0

    def fetchone(self):
        current = self._current()
        if current is None or self._position >= len(current.rows):
            return None
        row = current.rows[self._position]
        self._position += 1
        return row

    def fetchall(self):
        current = self._current()
        if current is None:
            return []
        rows = current.rows[self._position:]
        self._position = len(current.rows)
        return list(rows)

    def nextset(self):
        self._index += 1
        self._position = 0
        if self._adapter_nextset:
            return None
        return self._index < len(self._sets)

    def close(self):
        self.closed = True


class FakeEngine:
    def __init__(
        self,
        handler: Handler,
        dialect_name: str = "mssql",
        delay: float = 0,
        adapter_nextset: bool = False,
    ):
        self.handler = handler
        self.adapter_nextset = adapter_nextset
        self.delay = delay
        self.dialect = SimpleNamespace(name=dialect_name)
        self.cursors: List[ScriptedCursor] = []
        self.commits = 0
        self.rollbacks = 0

    def cursor(self) -> ScriptedCursor:
        cursor = ScriptedCursor(self.handler, self.adapter_nextset)
        self.cursors.append(cursor)
        return cursor

    @property
    def last_cursor(self) -> ScriptedCursor:
        return self.cursors[-1]

    @asynccontextmanager
    async def begin(self):
        try:
            yield _FakeAsyncConnection(self)
        except BaseException:
            self.rollbacks += 1
            raise
        else:
            self.commits += 1


class _FakeAsyncConnection:
    def __init__(self, engine: FakeEngine):
        self._engine = engine
        self._sync = SimpleNamespace(
            dialect=SimpleNamespace(loaded_dbapi=sqlite3),
            connection=SimpleNamespace(cursor=engine.cursor),
        )

    async def run_sync(self, fn, *args):
        if self._engine.delay:
            await asyncio.sleep(self._engine.delay)
        return fn(self._sync, *args)
