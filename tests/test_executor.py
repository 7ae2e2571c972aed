"""Executor: positional binding, arity before execution, empty vs failed results."""

from __future__ import annotations

import pytest

from tests.fakes import FIXTURE_SCRIPT, RecordingEngine
from workshop_db.core.errors import ArityError, ExecutionError
from workshop_db.executor import execute
from workshop_db.queries import QueryTemplate, lookup
from workshop_db.store import resolve

ENIAC = {"workshopId": 2, "workshopName": "ENIAC Programming", "workshopDuration": 150}


@pytest.fixture
def engine():
    return RecordingEngine()


@pytest.fixture
def handle(engine):
    h = resolve("direct", FIXTURE_SCRIPT, engine)
    yield h
    h.close()


def test_get_all_in_engine_order(handle):
    rows = execute(handle, lookup("get_all"), [])
    assert [r["workshopId"] for r in rows] == [1, 2]
    assert rows[1] == ENIAC


def test_records_keep_column_order(handle):
    (row,) = execute(handle, lookup("get_one"), [2])
    assert list(row) == ["workshopId", "workshopName", "workshopDuration"]


def test_empty_result_is_not_an_error(handle):
    assert execute(handle, lookup("get_one"), [99]) == []


def test_arity_checked_before_store(handle, engine):
    with pytest.raises(ArityError):
        execute(handle, lookup("get_one"), [])
    with pytest.raises(ArityError):
        execute(handle, lookup("get_one"), [1, 2])
    assert engine.query_calls() == []


def test_parameters_are_bound_not_formatted(handle, engine):
    assert execute(handle, lookup("get_one"), ["1 OR 1=1"]) == []
    assert engine.query_calls() == [("run_query", ("1 OR 1=1",))]


def test_range_is_inclusive(handle):
    rows = execute(handle, lookup("get_range"), [60, 150])
    assert [r["workshopId"] for r in rows] == [1, 2]
    assert execute(handle, lookup("get_range"), [61, 149]) == []


def test_slice_binds_start_then_count(handle):
    assert [r["workshopId"] for r in execute(handle, lookup("get_slice"), [1, 5])] == [2]
    assert [r["workshopId"] for r in execute(handle, lookup("get_slice"), [0, 1])] == [1]
    assert execute(handle, lookup("get_slice"), [5, 1]) == []


def test_stats(handle):
    (stats,) = execute(handle, lookup("get_stats"), [])
    assert stats == {"workshopCount": 2, "minDuration": 60, "maxDuration": 150, "meanDuration": 105.0}


def test_malformed_query_is_execution_error(handle):
    broken = QueryTemplate(name="broken", sql="SELECT nope FROM Missing", fields=("nope",))
    with pytest.raises(ExecutionError, match="broken") as ei:
        execute(handle, broken, [])
    assert ei.value.__cause__ is not None


def test_closed_handle_is_execution_error(handle):
    handle.close()
    with pytest.raises(ExecutionError, match="closed"):
        execute(handle, lookup("get_all"), [])


def test_out_of_range_integer_is_execution_error(handle):
    with pytest.raises(ExecutionError, match="get_one") as ei:
        execute(handle, lookup("get_one"), [2**70])
    assert isinstance(ei.value.__cause__, OverflowError)
