from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional, Tuple

import mysql.connector

from ..core.constants import ATTENDANCE_COLLECTION, FIELD_END_TIME, FIELD_LOCATION, FIELD_START_TIME, FIELD_USER_ID
from ..core.exceptions import StoreNotFoundError, StoreReadError, StoreWriteError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import ShiftRecord
from .repository import SERVER_TIME, RecordStore

log = logging.getLogger(__name__)

TABLES = {ATTENDANCE_COLLECTION: "attendance_records"}

COLUMNS = {
    FIELD_USER_ID: "user_id",
    FIELD_START_TIME: "start_time",
    FIELD_END_TIME: "end_time",
    FIELD_LOCATION: "location",
}

# Evaluated by the MySQL server, never by this process.
SERVER_NOW_SQL = "CURRENT_TIMESTAMP(6)"


def _table(collection: str) -> str:
    try:
        return TABLES[collection]
    except KeyError:
        raise StoreWriteError(f"Unknown collection: {collection}") from None


def _assignments(fields: Mapping[str, Any]) -> Tuple[List[str], List[str], List[Any]]:
    """Split fields into column names, SQL value expressions and bound params."""
    columns: List[str] = []
    exprs: List[str] = []
    params: List[Any] = []
    for name, value in fields.items():
        if name not in COLUMNS:
            raise StoreWriteError(f"Unknown field: {name}")
        columns.append(COLUMNS[name])
        if value is SERVER_TIME:
            exprs.append(SERVER_NOW_SQL)
        else:
            exprs.append("%s")
            params.append(value)
    return columns, exprs, params


def _row_to_record(r: Dict[str, Any]) -> ShiftRecord:
    return ShiftRecord(
        record_id=str(r["record_id"]),
        user_id=str(r["user_id"]),
        start_time=r.get("start_time"),
        end_time=r.get("end_time"),
        location=r.get("location") or "",
    )


class MySQLRecordStore(RecordStore):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, collection: str, fields: Mapping[str, Any]) -> str:
        table = _table(collection)
        columns, exprs, params = _assignments(fields)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"INSERT INTO {table}({', '.join(columns)}) VALUES({', '.join(exprs)})",
                    tuple(params),
                )
                return str(cur.lastrowid)
        except mysql.connector.Error as exc:
            log.warning("INSERT into %s failed: %s", table, exc)
            raise StoreWriteError(f"Could not create record in {collection}") from exc

    def update(self, collection: str, record_id: str, fields: Mapping[str, Any]) -> None:
        table = _table(collection)
        columns, exprs, params = _assignments(fields)
        sets = ", ".join(f"{c}={e}" for c, e in zip(columns, exprs))
        where = "record_id=%s"
        if FIELD_END_TIME in fields:
            where += " AND end_time IS NULL"
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"UPDATE {table} SET {sets} WHERE {where}",
                    (*params, record_id),
                )
                updated = cur.rowcount > 0
        except mysql.connector.Error as exc:
            log.warning("UPDATE of %s/%s failed: %s", table, record_id, exc)
            raise StoreWriteError(f"Could not update record {collection}/{record_id}") from exc

        if not updated:
            raise StoreNotFoundError(f"Record {collection}/{record_id} does not exist or is already closed")

    def find_open(self, collection: str, user_id: str) -> Optional[ShiftRecord]:
        table = _table(collection)
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    f"""
                    SELECT record_id, user_id, start_time, end_time, location
                    FROM {table}
                    WHERE user_id=%s AND end_time IS NULL
                    ORDER BY start_time DESC, record_id DESC
                    LIMIT 1
                    """,
                    (user_id,),
                )
                r = fetchone(cur)
        except mysql.connector.Error as exc:
            log.warning("SELECT on %s failed: %s", table, exc)
            raise StoreReadError(f"Could not read records from {collection}") from exc

        return _row_to_record(r) if r else None
