from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .core.enums import RecordStoreBackend
from .core.exceptions import ValidationError
from .database.connection import DBConfig, DatabaseConnection
from .database.firebase import FirebaseConfig, FirebaseConnection
from .identity.provider import FirebaseIdentityProvider, IdentityProvider
from .shifts.firestore_record_store import FirestoreRecordStore
from .shifts.mysql_record_store import MySQLRecordStore
from .shifts.registry import SessionRegistry
from .shifts.repository import RecordStore


@dataclass(frozen=True)
class Container:
    record_store: RecordStore
    identity: IdentityProvider
    sessions: SessionRegistry
    db_conn: Optional[DatabaseConnection] = None


def build_container(
    *,
    backend: str,
    firebase_config: dict,
    db_config: Optional[dict] = None,
    resume_open_shift: bool = True,
) -> Container:
    try:
        kind = RecordStoreBackend(str(backend).lower())
    except ValueError:
        raise ValidationError(f"Unsupported RECORD_STORE: {backend!r}") from None

    firebase = FirebaseConnection.get_instance(FirebaseConfig.from_dict(firebase_config))
    identity = FirebaseIdentityProvider(firebase.app)

    db_conn = None
    if kind is RecordStoreBackend.MYSQL:
        if not db_config:
            raise ValidationError("DB_CONFIG is required for the mysql record store")
        db_conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))
        record_store: RecordStore = MySQLRecordStore(db_conn)
    else:
        record_store = FirestoreRecordStore(firebase.client())

    sessions = SessionRegistry(record_store, resume_open_shift=resume_open_shift)

    return Container(
        record_store=record_store,
        identity=identity,
        sessions=sessions,
        db_conn=db_conn,
    )
