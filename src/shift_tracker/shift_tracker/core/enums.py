from __future__ import annotations

from enum import Enum


class ShiftState(str, Enum):
    """Lifecycle state of the client-local shift session."""

    CLOSED = "CLOSED"
    STARTING = "STARTING"
    OPEN = "OPEN"
    ENDING = "ENDING"


class RecordStoreBackend(str, Enum):
    FIRESTORE = "firestore"
    MYSQL = "mysql"
