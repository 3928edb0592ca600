import logging
import sqlite3

import pytest

from src.adapter.services.database import (
    GENERIC_FAILURE_MESSAGE,
    SqlAlchemyDatabase,
    store_message,
)
from src.app.services.database import DEFAULT_COMPLETION_MESSAGE, output_param, param
from src.app.services.errors import BackingStoreError, MappingError, TransportError
from src.app.services.view_filter import Operator, ViewFilter
from tests.fixtures.fake_dbapi import FakeEngine, ResultSet, raising, scripted


def read_name(record):
    return record.get_string("Name")


def read_id(record):
    return record.get_int32("Id")


PEOPLE = ResultSet(["Id", "Name"], [(1, "Ann"), (2, "Bob"), (3, "Cy")])


@pytest.mark.asyncio
async def test_optional_row_maps_only_first_row():
    calls = []
    engine = FakeEngine(scripted(PEOPLE))
    db = SqlAlchemyDatabase(engine)

    result = await db.call_for_optional_row(
        "app.sp_People", None, lambda record: calls.append(record) or read_name(record)
    )

    assert result == "Ann"
    assert len(calls) == 1
    assert engine.last_cursor.closed
    assert engine.commits == 1


@pytest.mark.asyncio
async def test_optional_row_is_none_without_rows():
    db = SqlAlchemyDatabase(FakeEngine(scripted(ResultSet(["Id"], []))))

    assert await db.call_for_optional_row("app.sp_People", [], read_id) is None


@pytest.mark.asyncio
async def test_optional_row_is_none_without_result_set():
    db = SqlAlchemyDatabase(FakeEngine(scripted()))

    assert await db.call_for_optional_row("app.sp_People", [], read_id) is None


@pytest.mark.asyncio
async def test_row_list_maps_every_row():
    engine = FakeEngine(scripted(PEOPLE))
    db = SqlAlchemyDatabase(engine)

    names = await db.call_for_row_list("app.sp_People", [param("LeagueID", 9)], read_name)

    assert names == ["Ann", "Bob", "Cy"]
    sql, args = engine.last_cursor.executed[0]
    assert "EXEC app.sp_People @LeagueID = ?" in sql
    assert args == [9]


@pytest.mark.asyncio
async def test_output_params_success():
    engine = FakeEngine(
        scripted(ResultSet(["@SessionID", "@Message"], [("ABC", "Session started.")]))
    )
    db = SqlAlchemyDatabase(engine)

    output = await db.call_with_output_params(
        "app.sp_Login",
        [
            param("Email", "a@b.com"),
            output_param("SessionID", "UNIQUEIDENTIFIER"),
            output_param("@Message", "NVARCHAR", 200),
        ],
    )

    assert output.ok is True
    assert output.error_message is None
    assert output.outputs == {"SessionID": "ABC", "Message": "Session started."}


@pytest.mark.asyncio
async def test_output_params_null_values_map_to_none():
    db = SqlAlchemyDatabase(FakeEngine(scripted(ResultSet(["@Token"], [(None,)]))))

    output = await db.call_with_output_params(
        "app.sp_RequestPasswordReset", [output_param("Token", "NVARCHAR", 100)]
    )

    assert output.ok is True
    assert output.outputs == {"Token": None}


@pytest.mark.asyncio
async def test_output_params_store_error_is_not_raised():
    engine = FakeEngine(raising(sqlite3.DatabaseError("Account is locked.")))
    db = SqlAlchemyDatabase(engine)

    output = await db.call_with_output_params(
        "app.sp_Login", [output_param("Message", "NVARCHAR", 200)]
    )

    assert output.ok is False
    assert output.error_message == "Account is locked."
    assert isinstance(output.failure, BackingStoreError)
    assert output.outputs == {}
    assert engine.rollbacks == 1


@pytest.mark.asyncio
async def test_output_params_transport_error_gets_generic_message():
    db = SqlAlchemyDatabase(FakeEngine(raising(sqlite3.OperationalError("link failure"))))

    output = await db.call_with_output_params(
        "app.sp_Login", [output_param("Message", "NVARCHAR", 200)]
    )

    assert output.ok is False
    assert output.error_message == GENERIC_FAILURE_MESSAGE
    assert isinstance(output.failure, TransportError)


@pytest.mark.asyncio
async def test_result_sets_use_mapper_per_set():
    db = SqlAlchemyDatabase(
        FakeEngine(scripted(ResultSet(["Id"], [(1,), (2,)]), ResultSet(["Name"], [("Ann",)])))
    )

    sets = await db.call_for_result_sets("app.sp_Profile", [], [read_id, read_name])

    assert sets == [[1, 2], ["Ann"]]


@pytest.mark.asyncio
async def test_extra_result_sets_are_empty_lists(caplog):
    db = SqlAlchemyDatabase(
        FakeEngine(
            scripted(
                ResultSet(["Id"], [(1,)]),
                ResultSet(["Name"], [("Ann",)]),
                ResultSet(["Name"], [("Bob",)]),
            )
        )
    )

    with caplog.at_level(logging.WARNING):
        sets = await db.call_for_result_sets("app.sp_Profile", [], [read_id])

    assert sets == [[1], [], []]
    assert "3 result set(s)" in caplog.text


@pytest.mark.asyncio
async def test_fewer_result_sets_than_mappers_is_logged(caplog):
    db = SqlAlchemyDatabase(FakeEngine(scripted(ResultSet(["Id"], [(1,)]))))

    with caplog.at_level(logging.WARNING):
        sets = await db.call_for_result_sets("app.sp_Profile", [], [read_id, read_name])

    assert sets == [[1]]
    assert "2 mapper(s)" in caplog.text


@pytest.mark.asyncio
async def test_no_result_sets_returns_empty_list():
    db = SqlAlchemyDatabase(FakeEngine(scripted()))

    assert await db.call_for_result_sets("app.sp_Profile", [], [read_id]) == []


@pytest.mark.asyncio
async def test_result_sets_with_async_adapter_cursor():
    """SQLAlchemy's async adapters return None from nextset() between sets"""
    engine = FakeEngine(
        scripted(
            ResultSet(["Id"], [(1,)]), ResultSet(["Id"], [(2,)]), ResultSet(["Id"], [(3,)])
        ),
        adapter_nextset=True,
    )

    result = await SqlAlchemyDatabase(engine).call_for_result_sets(
        "app.sp_Triple", [], [read_id, read_id, read_id]
    )

    assert result == [[1], [2], [3]]


@pytest.mark.asyncio
async def test_output_params_after_procedure_rows_with_async_adapter_cursor():
    engine = FakeEngine(
        scripted(
            PEOPLE,
            ResultSet(["@SessionID", "@Message"], [("3F2B8A4E-0C1D-4E5F-9A6B-7C8D9E0F1A2B", "Hi")]),
        ),
        adapter_nextset=True,
    )

    output = await SqlAlchemyDatabase(engine).call_with_output_params(
        "app.sp_Login",
        [output_param("SessionID", "UNIQUEIDENTIFIER"), output_param("Message", "NVARCHAR", 200)],
    )

    assert output.outputs == {
        "SessionID": "3F2B8A4E-0C1D-4E5F-9A6B-7C8D9E0F1A2B",
        "Message": "Hi",
    }


@pytest.mark.asyncio
async def test_row_list_skips_column_less_set_when_driver_reports_more():
    db = SqlAlchemyDatabase(FakeEngine(scripted(None, PEOPLE)))

    assert await db.call_for_row_list("app.sp_People", [], read_id) == [1, 2, 3]

@pytest.mark.asyncio
async def test_non_query_returns_rowcount():
    engine = FakeEngine(scripted(rowcount=3))
    db = SqlAlchemyDatabase(engine)

    assert await db.call_non_query("app.sp_Touch", [param("Id", 1)]) == 3
    sql, _ = engine.last_cursor.executed[0]
    assert "NOCOUNT" not in sql


@pytest.mark.asyncio
async def test_store_error_raises_backing_store_error():
    db = SqlAlchemyDatabase(
        FakeEngine(raising(sqlite3.IntegrityError("Email is already registered.")))
    )

    with pytest.raises(BackingStoreError) as exc_info:
        await db.call_non_query("app.sp_RegisterUser", [])

    assert exc_info.value.message == "Email is already registered."
    assert isinstance(exc_info.value.__cause__, sqlite3.IntegrityError)


@pytest.mark.asyncio
async def test_transport_errors_are_generic():
    db = SqlAlchemyDatabase(FakeEngine(raising(sqlite3.InterfaceError("closed"))))

    with pytest.raises(TransportError) as exc_info:
        await db.call_for_row_list("app.sp_People", [], read_id)

    assert "closed" not in exc_info.value.message


@pytest.mark.asyncio
async def test_unexpected_errors_become_transport_errors():
    db = SqlAlchemyDatabase(FakeEngine(raising(RuntimeError("boom"))))

    with pytest.raises(TransportError) as exc_info:
        await db.call_for_row_list("app.sp_People", [], read_id)

    assert exc_info.value.message == GENERIC_FAILURE_MESSAGE
    assert isinstance(exc_info.value.__cause__, RuntimeError)


@pytest.mark.asyncio
async def test_mapping_errors_pass_through():
    db = SqlAlchemyDatabase(FakeEngine(scripted(ResultSet(["Name"], [("Ann",)]))))

    with pytest.raises(MappingError):
        await db.call_for_row_list("app.sp_People", [], read_id)


@pytest.mark.asyncio
async def test_command_timeout():
    db = SqlAlchemyDatabase(FakeEngine(scripted(PEOPLE), delay=0.5), command_timeout=0.01)

    with pytest.raises(TransportError):
        await db.call_for_row_list("app.sp_People", [], read_id)


@pytest.mark.asyncio
async def test_for_message_returns_message_column():
    db = SqlAlchemyDatabase(FakeEngine(scripted(ResultSet(["Message"], [("Session closed.",)]))))

    assert await db.for_message("app.sp_Logout", []) == "Session closed."


@pytest.mark.asyncio
async def test_for_message_default_without_rows():
    db = SqlAlchemyDatabase(FakeEngine(scripted()))

    assert await db.for_message("app.sp_Logout", []) == DEFAULT_COMPLETION_MESSAGE


@pytest.mark.asyncio
async def test_query_filtered_binds_filter_values():
    engine = FakeEngine(scripted(PEOPLE))
    db = SqlAlchemyDatabase(engine)

    rows = await db.query_filtered(
        "vw_People",
        read_id,
        ViewFilter(["Id", "Name"]).where("Name", Operator.eq, "Ann").order_by("Id"),
        top=2,
    )

    assert rows == [1, 2, 3]
    sql, args = engine.last_cursor.executed[0]
    assert sql == "SELECT TOP 2 * FROM vw_People WHERE Name = ? ORDER BY Id"
    assert args == ["Ann"]


@pytest.mark.asyncio
async def test_query_raw_without_result_set_is_empty():
    db = SqlAlchemyDatabase(FakeEngine(scripted()))

    assert await db.query_raw("UPDATE People SET Name = ?", read_id, ["x"]) == []


@pytest.mark.asyncio
async def test_exists():
    engine = FakeEngine(scripted(ResultSet(["Found"], [(1,)])))
    db = SqlAlchemyDatabase(engine)

    assert await db.exists("vw_People", "Id = ?", [1]) is True
    sql, args = engine.last_cursor.executed[0]
    assert sql.startswith("SELECT CASE WHEN EXISTS(SELECT 1 FROM vw_People WHERE Id = ?)")
    assert args == [1]


def test_store_message_strips_driver_noise():
    exc = Exception(
        "42000",
        "[42000] [Microsoft][ODBC Driver 18 for SQL Server][SQL Server]"
        "Account is locked. (50001) (SQLExecDirectW)",
    )

    assert store_message(exc) == "Account is locked."
