from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Mapping, Optional

from ..core.constants import FIELD_END_TIME, FIELD_LOCATION, FIELD_START_TIME, FIELD_USER_ID
from ..core.enums import ShiftState


@dataclass(frozen=True)
class ShiftRecord:
    """Domain entity: one attendance period (one shift)."""

    record_id: str
    user_id: str
    start_time: Optional[datetime]
    end_time: Optional[datetime]
    location: str

    @property
    def is_open(self) -> bool:
        return self.end_time is None

    @classmethod
    def from_document(cls, record_id: Any, data: Mapping[str, Any]) -> "ShiftRecord":
        return cls(
            record_id=str(record_id),
            user_id=str(data.get(FIELD_USER_ID) or ""),
            start_time=data.get(FIELD_START_TIME),
            end_time=data.get(FIELD_END_TIME),
            location=str(data.get(FIELD_LOCATION) or ""),
        )


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of the session state handed to the presentation layer."""

    state: ShiftState
    record_id: Optional[str]

    @property
    def is_open(self) -> bool:
        return self.state is ShiftState.OPEN

    def to_dict(self) -> dict:
        return {
            "state": self.state.value,
            "is_open": self.is_open,
            "record_id": self.record_id,
        }
