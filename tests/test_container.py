from __future__ import annotations

from unittest import mock

import pytest

from src.shift_tracker.shift_tracker import container as container_module
from src.shift_tracker.shift_tracker.core.exceptions import ValidationError
from src.shift_tracker.shift_tracker.database.connection import DatabaseConnection
from src.shift_tracker.shift_tracker.shifts.firestore_record_store import FirestoreRecordStore
from src.shift_tracker.shift_tracker.shifts.mysql_record_store import MySQLRecordStore

DB_CONFIG = {"host": "db", "port": 3306, "user": "app", "password": "pw", "database": "shift_tracker_test"}


@pytest.fixture
def firebase():
    with mock.patch.object(container_module, "FirebaseConnection") as conn_cls:
        yield conn_cls.get_instance.return_value


def test_unknown_backend():
    with pytest.raises(ValidationError):
        container_module.build_container(backend="sqlite", firebase_config={})


def test_firestore_backend(firebase):
    c = container_module.build_container(backend="firestore", firebase_config={"project_id": "p"})

    assert isinstance(c.record_store, FirestoreRecordStore)
    assert c.db_conn is None
    firebase.client.assert_called_once_with()


def test_mysql_backend(firebase, monkeypatch):
    monkeypatch.setattr(DatabaseConnection, "_instance", None)

    c = container_module.build_container(backend="MySQL", firebase_config={}, db_config=DB_CONFIG)

    assert isinstance(c.record_store, MySQLRecordStore)
    assert c.db_conn.config.database == "shift_tracker_test"
    firebase.client.assert_not_called()


def test_mysql_backend_requires_db_config(firebase):
    with pytest.raises(ValidationError):
        container_module.build_container(backend="mysql", firebase_config={})
