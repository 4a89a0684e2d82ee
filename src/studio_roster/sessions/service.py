from __future__ import annotations

import logging
import math
from datetime import date, datetime
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..common.validators import optional_text, require_non_empty
from ..core.enums import SessionType, TimeSlot
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..staff.repository import StaffRepository
from ..users.model import Actor
from .filters import TaskFilter, filter_sessions
from .model import NewWorkSession, WorkSession
from .repository import WorkSessionRepository

logger = logging.getLogger(__name__)


class WorkSessionService:
    """Use case: assign daily tasks (session type, product, staff, notes, duration)."""

    def __init__(self, sessions: WorkSessionRepository, staff: StaffRepository):
        self._sessions = sessions
        self._staff = staff

    def list_sessions(self, task_filter: Optional[TaskFilter] = None) -> list[WorkSession]:
        """Newest date first, then morning -> evening."""

        items = sorted(self._sessions.list_all(), key=lambda s: s.time_slot.order)
        items.sort(key=lambda s: s.date, reverse=True)
        if task_filter is None:
            return items
        return filter_sessions(items, task_filter)

    def get(self, session_id: str) -> WorkSession:
        session = self._sessions.get_by_id(session_id)
        if not session:
            raise NotFoundError("Task không tồn tại")
        return session

    def create(self, *, actor: Actor, **fields: Any) -> WorkSession:
        self._require_manager(actor)
        draft = self.prepare(**fields)
        created = self._sessions.create(draft, created_by=actor.account_id)
        logger.info("Session %s created by %s", created.session_id, actor.email)
        return created

    def create_many(self, *, actor: Actor, tasks: Sequence[Mapping[str, Any]]) -> list[WorkSession]:
        """Multi-task submission: every task is validated before any is stored."""

        self._require_manager(actor)
        if not tasks:
            raise ValidationError("Chưa có task nào để lưu")

        drafts: list[NewWorkSession] = []
        for idx, fields in enumerate(tasks, start=1):
            try:
                drafts.append(self.prepare(**fields))
            except ValidationError as e:
                raise ValidationError(f"Task {idx}: {e}")

        created = self._sessions.create_many(drafts, created_by=actor.account_id)
        logger.info("%d sessions created by %s", len(created), actor.email)
        return created

    def update(self, *, actor: Actor, session_id: str, **fields: Any) -> WorkSession:
        self._require_manager(actor)
        current = self.get(session_id)
        # Staff already on the task may stay even if deactivated since.
        draft = self.prepare(allowed_inactive=current.staff_ids, **fields)

        updated = self._sessions.update(session_id, draft)
        if not updated:
            raise NotFoundError("Task không tồn tại")
        return updated

    def delete(self, *, actor: Actor, session_id: str) -> None:
        self._require_manager(actor)
        if not self._sessions.delete(session_id):
            raise NotFoundError("Task không tồn tại")
        logger.info("Session %s deleted by %s", session_id, actor.email)

    def prepare(
        self,
        *,
        date: date | str,
        time_slot: TimeSlot | str,
        product_category: str,
        session_type: SessionType | str,
        staff_ids: Iterable[str],
        notes: Optional[str] = None,
        duration_hours: Optional[float | str] = None,
        allowed_inactive: Iterable[str] = (),
    ) -> NewWorkSession:
        session_type = self._parse_session_type(session_type)
        return NewWorkSession(
            date=self._parse_date(date),
            time_slot=self._parse_time_slot(time_slot),
            product_category=require_non_empty(product_category, "Sản phẩm"),
            session_type=session_type,
            staff_ids=self._check_staff(staff_ids, allowed_inactive=set(allowed_inactive)),
            notes=optional_text(notes),
            duration_hours=self._parse_duration(duration_hours, session_type),
        )

    def _check_staff(self, staff_ids: Iterable[str], *, allowed_inactive: set[str]) -> tuple[str, ...]:
        if isinstance(staff_ids, str):
            raise ValidationError("Danh sách nhân viên không hợp lệ")
        staff_ids = list(staff_ids or ())
        if any(not isinstance(s, str) for s in staff_ids):
            raise ValidationError("Danh sách nhân viên không hợp lệ")
        unique = tuple(dict.fromkeys(s for s in staff_ids if s))
        if not unique:
            raise ValidationError("Vui lòng chọn ít nhất một nhân viên")

        for staff_id in unique:
            staff = self._staff.get_by_id(staff_id)
            if not staff:
                raise ValidationError("Nhân viên không tồn tại")
            if not staff.is_active and staff_id not in allowed_inactive:
                raise ValidationError(f"Nhân viên {staff.name} đã nghỉ việc")
        return unique

    @staticmethod
    def _parse_date(value: date | str) -> date:
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        if isinstance(value, str):
            return parse_iso_date(value)
        raise ValidationError("Ngày không hợp lệ")

    @staticmethod
    def _parse_time_slot(value: TimeSlot | str) -> TimeSlot:
        try:
            return TimeSlot(value)
        except ValueError:
            raise ValidationError("Buổi không hợp lệ")

    @staticmethod
    def _parse_session_type(value: SessionType | str) -> SessionType:
        try:
            return SessionType(value)
        except ValueError:
            raise ValidationError("Loại phiên không hợp lệ")

    @staticmethod
    def _parse_duration(value: Optional[float | str], session_type: SessionType) -> Optional[float]:
        # Duration is only tracked for livestreams.
        if session_type != SessionType.LIVESTREAM:
            return None
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        if isinstance(value, bool):
            raise ValidationError("Số giờ không hợp lệ")
        try:
            hours = float(value)
        except (TypeError, ValueError):
            raise ValidationError("Số giờ không hợp lệ")
        if not math.isfinite(hours):
            raise ValidationError("Số giờ không hợp lệ")
        if hours <= 0:
            raise ValidationError("Số giờ phải lớn hơn 0")
        return hours

    @staticmethod
    def _require_manager(actor: Actor) -> None:
        if not actor.can_manage:
            raise AuthorizationError("Bạn không có quyền")
