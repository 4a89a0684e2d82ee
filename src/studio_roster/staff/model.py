from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional


@dataclass(frozen=True)
class Staff:
    """Thực thể miền (domain): Nhân viên."""

    staff_id: str
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    avatar_url: Optional[str] = None
    is_active: bool = True
    user_id: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class StaffRemoval(str, Enum):
    """Kết quả khi xóa nhân viên."""

    DELETED = "deleted"
    # Still referenced by work sessions, so the record is kept inactive.
    DEACTIVATED = "deactivated"
