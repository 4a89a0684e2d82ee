from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Vai trò tài khoản dùng cho phân quyền."""

    STAFF = "staff"
    MANAGER = "manager"
    ADMIN = "admin"

    @property
    def label(self) -> str:
        return ROLE_LABELS[self]

    @property
    def can_manage(self) -> bool:
        return self in (Role.MANAGER, Role.ADMIN)


class SessionType(str, Enum):
    """Loại công việc của một phiên."""

    LIVESTREAM = "livestream"
    VIDEO = "video"
    EVENT = "event"

    @property
    def label(self) -> str:
        return SESSION_TYPE_LABELS[self]


class TimeSlot(str, Enum):
    """Buổi làm việc trong ngày, khai báo theo thứ tự sáng -> tối."""

    MORNING = "sáng"
    AFTERNOON = "chiều"
    EVENING = "tối"

    @property
    def label(self) -> str:
        return TIME_SLOT_LABELS[self]

    @property
    def order(self) -> int:
        return _TIME_SLOT_ORDER[self]


ROLE_LABELS: dict[Role, str] = {
    Role.ADMIN: "Admin",
    Role.MANAGER: "Quản lý",
    Role.STAFF: "Nhân viên",
}

SESSION_TYPE_LABELS: dict[SessionType, str] = {
    SessionType.LIVESTREAM: "Livestream",
    SessionType.VIDEO: "Quay video",
    SessionType.EVENT: "Sự kiện",
}

TIME_SLOT_LABELS: dict[TimeSlot, str] = {
    TimeSlot.MORNING: "Sáng",
    TimeSlot.AFTERNOON: "Chiều",
    TimeSlot.EVENING: "Tối",
}

_TIME_SLOT_ORDER: dict[TimeSlot, int] = {slot: idx for idx, slot in enumerate(TimeSlot)}
