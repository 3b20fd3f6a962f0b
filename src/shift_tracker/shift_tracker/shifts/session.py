from __future__ import annotations

import threading
from typing import Optional

from ..core.constants import (
    ATTENDANCE_COLLECTION,
    FIELD_END_TIME,
    FIELD_LOCATION,
    FIELD_START_TIME,
    FIELD_USER_ID,
    LOCATION_PLACEHOLDER,
)
from ..core.enums import ShiftState
from ..core.exceptions import (
    AlreadyStartedError,
    EndFailedError,
    NoUserError,
    NotStartedError,
    StartFailedError,
    StoreError,
    ValidationError,
)
from .model import SessionSnapshot
from .repository import SERVER_TIME, RecordStore


class ShiftSessionManager:
    """Owns the shift lifecycle of one authenticated session.

    CLOSED -> STARTING -> OPEN -> ENDING -> CLOSED. The transitional states
    double as the in-flight lock: while a store write is pending, every other
    start/end request is rejected instead of queued. Timestamps are never taken
    from the local clock; the store assigns them (``SERVER_TIME``).
    """

    def __init__(
        self,
        store: RecordStore,
        *,
        collection: str = ATTENDANCE_COLLECTION,
        location_placeholder: str = LOCATION_PLACEHOLDER,
    ):
        self._store = store
        self._collection = collection
        self._placeholder = location_placeholder
        self._lock = threading.Lock()
        self._state = ShiftState.CLOSED
        self._open_record_id: Optional[str] = None

    def start_shift(self, user_id: Optional[str], location_label: Optional[str] = None) -> str:
        if not user_id:
            raise NoUserError("No authenticated user")
        if location_label is not None and not isinstance(location_label, str):
            raise ValidationError("location must be a string")
        label = (location_label or "").strip() or self._placeholder

        with self._lock:
            if self._state is not ShiftState.CLOSED:
                raise AlreadyStartedError("Shift already started")
            self._state = ShiftState.STARTING

        try:
            record_id = self._store.create(
                self._collection,
                {
                    FIELD_USER_ID: user_id,
                    FIELD_START_TIME: SERVER_TIME,
                    FIELD_LOCATION: label,
                },
            )
        except StoreError as exc:
            self._set(ShiftState.CLOSED, None)
            raise StartFailedError(exc) from exc
        except Exception:
            self._set(ShiftState.CLOSED, None)
            raise

        self._set(ShiftState.OPEN, record_id)
        return record_id

    def end_shift(self) -> None:
        with self._lock:
            if self._state is not ShiftState.OPEN:
                raise NotStartedError("Shift has not started yet")
            self._state = ShiftState.ENDING
            record_id = self._open_record_id

        try:
            self._store.update(self._collection, record_id, {FIELD_END_TIME: SERVER_TIME})
        except StoreError as exc:
            self._set(ShiftState.OPEN, record_id)
            raise EndFailedError(exc) from exc
        except Exception:
            self._set(ShiftState.OPEN, record_id)
            raise

        self._set(ShiftState.CLOSED, None)

    def adopt_open_record(self, record_id: str) -> None:
        """Track a record that is already open in the store (e.g. after reinstall)."""
        with self._lock:
            if self._state is not ShiftState.CLOSED:
                raise AlreadyStartedError("Shift already started")
            self._state = ShiftState.OPEN
            self._open_record_id = record_id

    def current_state(self) -> SessionSnapshot:
        with self._lock:
            return SessionSnapshot(state=self._state, record_id=self._open_record_id)

    def _set(self, state: ShiftState, record_id: Optional[str]) -> None:
        with self._lock:
            self._state = state
            self._open_record_id = record_id
