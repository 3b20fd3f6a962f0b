from __future__ import annotations

from datetime import datetime

import mysql.connector
import pytest

from src.shift_tracker.shift_tracker.core.exceptions import StoreNotFoundError, StoreReadError, StoreWriteError
from src.shift_tracker.shift_tracker.shifts.mysql_record_store import MySQLRecordStore
from src.shift_tracker.shift_tracker.shifts.repository import SERVER_TIME


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.lastrowid = conn.lastrowid
        self.rowcount = conn.rowcount

    def execute(self, sql, params=()):
        if self._conn.error is not None:
            raise self._conn.error
        self._conn.executed.append((" ".join(sql.split()), tuple(params)))

    def fetchone(self):
        return self._conn.row

    def close(self):
        pass


class FakeConnection:
    def __init__(self, *, lastrowid=1, rowcount=1, row=None, error=None):
        self.lastrowid = lastrowid
        self.rowcount = rowcount
        self.row = row
        self.error = error
        self.executed = []
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=True):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class FakeConnFactory:
    def __init__(self, conn):
        self.conn = conn

    def connect(self):
        return self.conn


def test_create_uses_database_clock():
    conn = FakeConnection(lastrowid=42)

    record_id = MySQLRecordStore(FakeConnFactory(conn)).create(
        "attendance", {"userId": "u", "startTime": SERVER_TIME, "location": "Loc A"}
    )

    assert record_id == "42"
    assert conn.executed == [
        (
            "INSERT INTO attendance_records(user_id, start_time, location) VALUES(%s, CURRENT_TIMESTAMP(6), %s)",
            ("u", "Loc A"),
        )
    ]
    assert conn.committed


def test_update_uses_database_clock():
    conn = FakeConnection(rowcount=1)

    MySQLRecordStore(FakeConnFactory(conn)).update("attendance", "42", {"endTime": SERVER_TIME})

    assert conn.executed == [
        ("UPDATE attendance_records SET end_time=CURRENT_TIMESTAMP(6) WHERE record_id=%s AND end_time IS NULL", ("42",))
    ]


def test_update_closed_or_unknown_record():
    conn = FakeConnection(rowcount=0)

    with pytest.raises(StoreNotFoundError):
        MySQLRecordStore(FakeConnFactory(conn)).update("attendance", "99", {"endTime": SERVER_TIME})


def test_driver_error_becomes_store_write_error():
    conn = FakeConnection(error=mysql.connector.errors.OperationalError("lost connection"))

    with pytest.raises(StoreWriteError) as info:
        MySQLRecordStore(FakeConnFactory(conn)).create("attendance", {"userId": "u"})
    assert isinstance(info.value.__cause__, mysql.connector.Error)
    assert conn.rolled_back


def test_unknown_field_is_rejected_before_any_sql():
    conn = FakeConnection()

    with pytest.raises(StoreWriteError):
        MySQLRecordStore(FakeConnFactory(conn)).create("attendance", {"startTimeClient": "2026-01-01"})
    assert conn.executed == []


def test_find_open_row():
    row = {
        "record_id": 7,
        "user_id": "u",
        "start_time": datetime(2026, 2, 1, 8, 0),
        "end_time": None,
        "location": "Loc A",
    }
    conn = FakeConnection(row=row)

    record = MySQLRecordStore(FakeConnFactory(conn)).find_open("attendance", "u")

    assert record is not None
    assert record.record_id == "7"
    assert record.is_open
    assert conn.executed[0][1] == ("u",)
    assert "end_time IS NULL" in conn.executed[0][0]


def test_find_open_nothing():
    assert MySQLRecordStore(FakeConnFactory(FakeConnection(row=None))).find_open("attendance", "u") is None


def test_find_open_driver_error():
    conn = FakeConnection(error=mysql.connector.errors.InterfaceError("refused"))

    with pytest.raises(StoreReadError):
        MySQLRecordStore(FakeConnFactory(conn)).find_open("attendance", "u")


def test_update_without_end_time_does_not_require_open_record():
    conn = FakeConnection(rowcount=1)

    MySQLRecordStore(FakeConnFactory(conn)).update("attendance", "42", {"location": "Loc B"})

    assert conn.executed == [("UPDATE attendance_records SET location=%s WHERE record_id=%s", ("Loc B", "42"))]
