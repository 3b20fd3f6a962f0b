from __future__ import annotations

from typing import Any, Optional

from ..core.exceptions import ValidationError


def optional_text(value: Any, field_name: str, *, max_len: int) -> Optional[str]:
    """Strip a free-text field; blank becomes None."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError(f"{field_name} must be a string")
    value = value.strip()
    if not value:
        return None
    if len(value) > max_len:
        raise ValidationError(f"{field_name} must be at most {max_len} characters")
    return value
