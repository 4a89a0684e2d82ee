from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class Account:
    """Thực thể miền (domain): tài khoản đăng nhập.

    Lưu ý: Đây là đối tượng dữ liệu thuần (không chứa code truy cập DB).
    """

    account_id: str
    email: str
    password_hash: str
    display_name: str
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class Actor:
    """Người đang thao tác, truyền tường minh vào service để kiểm tra quyền."""

    account_id: str
    email: str
    display_name: str
    role: Role
    staff_id: Optional[str] = None

    @property
    def can_manage(self) -> bool:
        return self.role.can_manage

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN
