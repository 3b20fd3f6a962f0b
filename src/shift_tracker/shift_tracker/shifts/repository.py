from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from .model import ShiftRecord


class _ServerTime:
    """Sentinel: the store fills in its own clock at write time."""

    def __repr__(self) -> str:
        return "SERVER_TIME"


SERVER_TIME = _ServerTime()


class RecordStore(Protocol):
    """Remote document store holding one record per shift.

    Implementations translate ``SERVER_TIME`` values in ``fields`` into the
    backend's server-side timestamp and raise ``StoreError`` subclasses only.
    """

    def create(self, collection: str, fields: Mapping[str, Any]) -> str:
        raise NotImplementedError

    def update(self, collection: str, record_id: str, fields: Mapping[str, Any]) -> None:
        raise NotImplementedError

    def find_open(self, collection: str, user_id: str) -> Optional[ShiftRecord]:
        """Most recent record of ``user_id`` that has no end time yet."""

        raise NotImplementedError
