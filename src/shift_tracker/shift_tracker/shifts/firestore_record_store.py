from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from firebase_admin import firestore
from google.api_core import exceptions as google_exceptions
from google.auth import exceptions as google_auth_exceptions

from ..core.constants import FIELD_END_TIME, FIELD_USER_ID
from ..core.exceptions import StoreNotFoundError, StoreReadError, StoreWriteError
from .model import ShiftRecord
from .repository import SERVER_TIME, RecordStore

log = logging.getLogger(__name__)

# API errors (incl. exhausted retries) plus credential/transport failures.
FIRESTORE_FAILURES = (google_exceptions.GoogleAPIError, google_auth_exceptions.GoogleAuthError)


def _to_document(fields: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: (firestore.SERVER_TIMESTAMP if v is SERVER_TIME else v) for k, v in fields.items()}


class FirestoreRecordStore(RecordStore):
    def __init__(self, client):
        self._client = client

    def create(self, collection: str, fields: Mapping[str, Any]) -> str:
        try:
            _, ref = self._client.collection(collection).add(_to_document(fields))
        except FIRESTORE_FAILURES as exc:
            log.warning("Firestore add to %s failed: %s", collection, exc)
            raise StoreWriteError(f"Could not create record in {collection}") from exc
        return ref.id

    def update(self, collection: str, record_id: str, fields: Mapping[str, Any]) -> None:
        """Update a record; a record that is already closed is never closed again.

        The write is conditioned on the snapshot's update time, so a close that
        lands elsewhere between the read and the write fails the precondition.
        """
        ref = self._client.collection(collection).document(record_id)
        try:
            snap = ref.get()
            if not snap.exists:
                raise StoreNotFoundError(f"Record {collection}/{record_id} does not exist")
            if FIELD_END_TIME in fields and (snap.to_dict() or {}).get(FIELD_END_TIME) is not None:
                raise StoreNotFoundError(f"Record {collection}/{record_id} is already closed")
            ref.update(
                _to_document(fields),
                option=self._client.write_option(last_update_time=snap.update_time),
            )
        except google_exceptions.NotFound as exc:
            raise StoreNotFoundError(f"Record {collection}/{record_id} does not exist") from exc
        except FIRESTORE_FAILURES as exc:
            log.warning("Firestore update of %s/%s failed: %s", collection, record_id, exc)
            raise StoreWriteError(f"Could not update record {collection}/{record_id}") from exc

    def find_open(self, collection: str, user_id: str) -> Optional[ShiftRecord]:
        # Open records have no endTime field at all, which Firestore cannot
        # filter on; narrow by user and check the rest here.
        query = self._client.collection(collection).where(
            filter=firestore.FieldFilter(FIELD_USER_ID, "==", user_id)
        )
        try:
            records = [ShiftRecord.from_document(snap.id, snap.to_dict() or {}) for snap in query.stream()]
        except FIRESTORE_FAILURES as exc:
            log.warning("Firestore query on %s failed: %s", collection, exc)
            raise StoreReadError(f"Could not read records from {collection}") from exc

        open_records = [r for r in records if r.is_open]
        if not open_records:
            return None
        return max(open_records, key=lambda r: r.start_time.timestamp() if r.start_time else 0.0)
