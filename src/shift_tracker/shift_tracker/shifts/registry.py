from __future__ import annotations

import threading
from typing import Dict, Optional

from ..core.constants import ATTENDANCE_COLLECTION
from ..core.exceptions import NoUserError
from .repository import RecordStore
from .session import ShiftSessionManager


class SessionRegistry:
    """Use case: one ShiftSessionManager per authenticated user session.

    A manager is created when the user opens a session (login) and dropped on
    logout. With ``resume_open_shift`` the store is asked once, at session open,
    whether the user still has an open record; if so the new manager adopts it
    so the shift can be ended from this session.
    """

    def __init__(
        self,
        store: RecordStore,
        *,
        collection: str = ATTENDANCE_COLLECTION,
        resume_open_shift: bool = True,
    ):
        self._store = store
        self._collection = collection
        self._resume = bool(resume_open_shift)
        self._lock = threading.Lock()
        self._managers: Dict[str, ShiftSessionManager] = {}

    def open_session(self, user_id: Optional[str]) -> ShiftSessionManager:
        if not user_id:
            raise NoUserError("No authenticated user")

        with self._lock:
            existing = self._managers.get(user_id)
        if existing is not None:
            return existing

        manager = ShiftSessionManager(self._store, collection=self._collection)
        if self._resume:
            record = self._store.find_open(self._collection, user_id)
            if record is not None:
                manager.adopt_open_record(record.record_id)

        with self._lock:
            return self._managers.setdefault(user_id, manager)

    def get(self, user_id: Optional[str]) -> ShiftSessionManager:
        if not user_id:
            raise NoUserError("No authenticated user")
        with self._lock:
            manager = self._managers.get(user_id)
        if manager is None:
            raise NoUserError("No active session for this user")
        return manager

    def close_session(self, user_id: Optional[str]) -> bool:
        if not user_id:
            return False
        with self._lock:
            return self._managers.pop(user_id, None) is not None

    def __contains__(self, user_id: object) -> bool:
        with self._lock:
            return user_id in self._managers
