from __future__ import annotations

from typing import Optional

from ..core.exceptions import ValidationError


def require_non_empty(value: Optional[str], field_name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"{field_name} không hợp lệ")
    return value.strip()


def require_min_length(value: Optional[str], field_name: str, min_len: int) -> str:
    if not isinstance(value, str) or len(value) < min_len:
        raise ValidationError(f"{field_name} tối thiểu {min_len} ký tự")
    return value


def optional_text(value: Optional[str]) -> Optional[str]:
    """Strip free text; blank input becomes None."""
    if value is None:
        return None
    if not isinstance(value, str):
        raise ValidationError("Dữ liệu không hợp lệ")
    value = value.strip()
    return value or None
