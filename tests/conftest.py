from __future__ import annotations

from datetime import datetime, timedelta
from typing import Optional

import pytest

from src.shift_tracker.shift_tracker.container import Container
from src.shift_tracker.shift_tracker.core.constants import FIELD_END_TIME, FIELD_START_TIME, FIELD_USER_ID
from src.shift_tracker.shift_tracker.core.exceptions import AuthenticationError, StoreNotFoundError
from src.shift_tracker.shift_tracker.shifts.model import ShiftRecord
from src.shift_tracker.shift_tracker.shifts.registry import SessionRegistry
from src.shift_tracker.shift_tracker.shifts.repository import SERVER_TIME


class InMemoryRecordStore:
    """Record store fake with its own "server" clock.

    Each write that carries SERVER_TIME gets the next tick of the fake clock,
    so store-assigned timestamps are strictly increasing.
    """

    def __init__(self, *, clock_start: datetime = datetime(2026, 2, 1, 8, 0, 0)):
        self.docs: dict[str, dict[str, dict]] = {}
        self.calls: list[tuple] = []
        self.fail_create: Optional[Exception] = None
        self.fail_update: Optional[Exception] = None
        self._next_id = 0
        self._now = clock_start

    def _server_now(self) -> datetime:
        self._now += timedelta(minutes=1)
        return self._now

    def _resolve(self, fields) -> dict:
        return {k: (self._server_now() if v is SERVER_TIME else v) for k, v in fields.items()}

    def create(self, collection, fields):
        self.calls.append(("create", collection, dict(fields)))
        if self.fail_create is not None:
            raise self.fail_create
        self._next_id += 1
        record_id = f"r{self._next_id}"
        self.docs.setdefault(collection, {})[record_id] = self._resolve(fields)
        return record_id

    def update(self, collection, record_id, fields):
        self.calls.append(("update", collection, record_id, dict(fields)))
        if self.fail_update is not None:
            raise self.fail_update
        doc = self.docs.get(collection, {}).get(record_id)
        if doc is None:
            raise StoreNotFoundError(f"{collection}/{record_id}")
        if FIELD_END_TIME in fields and doc.get(FIELD_END_TIME) is not None:
            raise StoreNotFoundError(f"{collection}/{record_id} is already closed")
        doc.update(self._resolve(fields))

    def find_open(self, collection, user_id):
        self.calls.append(("find_open", collection, user_id))
        open_records = [
            r for r in self.records(collection) if r.user_id == user_id and r.is_open
        ]
        if not open_records:
            return None
        return max(open_records, key=lambda r: r.start_time)

    def records(self, collection="attendance"):
        return [ShiftRecord.from_document(rid, doc) for rid, doc in self.docs.get(collection, {}).items()]

    def seed_open(self, user_id: str, location: str = "Old site") -> str:
        self._next_id += 1
        record_id = f"r{self._next_id}"
        self.docs.setdefault("attendance", {})[record_id] = {
            FIELD_USER_ID: user_id,
            FIELD_START_TIME: self._server_now(),
            "location": location,
        }
        return record_id


class FakeIdentity:
    def __init__(self, tokens: dict[str, str]):
        self._tokens = tokens

    def resolve_user_id(self, id_token):
        uid = self._tokens.get(id_token or "")
        if not uid:
            raise AuthenticationError("Invalid or expired identity token")
        return uid


@pytest.fixture
def store():
    return InMemoryRecordStore()


@pytest.fixture
def container(store):
    return Container(
        record_store=store,
        identity=FakeIdentity({"token-user1": "user1", "token-user2": "user2"}),
        sessions=SessionRegistry(store, resume_open_shift=True),
    )


@pytest.fixture
def app(container, monkeypatch):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.shift_tracker.shift_tracker.main import create_app

    return create_app(container)


@pytest.fixture
def client(app):
    return app.test_client()

