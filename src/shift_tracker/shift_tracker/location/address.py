from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.constants import ADDRESS_UNAVAILABLE

ADDRESS_PARTS = ("name", "street", "city", "region")


def format_address(place: Optional[Mapping[str, Any]]) -> str:
    """Human-readable label from reverse-geocoded components.

    ``{"name": "HQ", "street": "123 Main St", "city": "Springfield", "region": "IL"}``
    becomes ``"HQ, 123 Main St, Springfield, IL"``. Missing parts are skipped.
    """
    if not place:
        return ADDRESS_UNAVAILABLE

    parts = []
    for key in ADDRESS_PARTS:
        value = place.get(key)
        if value is None:
            continue
        value = str(value).strip()
        if value:
            parts.append(value)

    return ", ".join(parts) if parts else ADDRESS_UNAVAILABLE
