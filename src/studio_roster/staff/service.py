from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from ..common.validators import optional_text
from ..core.exceptions import AuthorizationError, NotFoundError, ValidationError
from ..users.model import Actor
from .model import Staff, StaffRemoval
from .repository import StaffRepository

logger = logging.getLogger(__name__)

_UNSET: Any = object()


class StaffService:
    """Use case: manage staff records (managers and admins write, everyone reads)."""

    def __init__(self, staff: StaffRepository):
        self._staff = staff

    def list_staff(self) -> Sequence[Staff]:
        return self._staff.list_all()

    def list_active(self) -> list[Staff]:
        return [s for s in self._staff.list_all() if s.is_active]

    def get(self, staff_id: str) -> Staff:
        staff = self._staff.get_by_id(staff_id)
        if not staff:
            raise NotFoundError("Nhân viên không tồn tại")
        return staff

    def add(self, *, actor: Actor, name: str, email: Optional[str] = None, phone: Optional[str] = None) -> Staff:
        self._require_manager(actor)
        name = self._clean_name(name)

        staff = self._staff.create(name=name, email=optional_text(email), phone=optional_text(phone))
        logger.info("Staff added: %s (%s)", staff.name, staff.staff_id)
        return staff

    def patch(
        self,
        *,
        actor: Actor,
        staff_id: str,
        name: Optional[str] = None,
        email: Any = _UNSET,
        phone: Any = _UNSET,
        avatar_url: Any = _UNSET,
        is_active: Any = _UNSET,
        user_id: Any = _UNSET,
    ) -> Staff:
        """Partial update written in one go.

        Omitted fields stay; optional contact fields may be cleared with ''/None.
        Every field is checked before anything is stored.
        """

        self._require_manager(actor)

        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = self._clean_name(name)
        if email is not _UNSET:
            changes["email"] = optional_text(email)
        if phone is not _UNSET:
            changes["phone"] = optional_text(phone)
        if avatar_url is not _UNSET:
            changes["avatar_url"] = optional_text(avatar_url)
        if is_active is not _UNSET:
            if not isinstance(is_active, bool):
                raise ValidationError("Trạng thái không hợp lệ")
            changes["is_active"] = is_active
        if user_id is not _UNSET:
            user_id = optional_text(user_id)
            if user_id:
                linked = self._staff.get_by_user_id(user_id)
                if linked and linked.staff_id != staff_id:
                    raise ValidationError(f"Tài khoản đã được liên kết với {linked.name}")
            changes["user_id"] = user_id

        if not changes:
            return self.get(staff_id)
        return self._apply(staff_id, changes)

    def update(
        self,
        *,
        actor: Actor,
        staff_id: str,
        name: Optional[str] = None,
        email: Any = _UNSET,
        phone: Any = _UNSET,
        avatar_url: Any = _UNSET,
    ) -> Staff:
        return self.patch(actor=actor, staff_id=staff_id, name=name, email=email, phone=phone, avatar_url=avatar_url)

    def set_active(self, *, actor: Actor, staff_id: str, is_active: bool) -> Staff:
        return self.patch(actor=actor, staff_id=staff_id, is_active=bool(is_active))

    def link_account(self, *, actor: Actor, staff_id: str, user_id: Optional[str]) -> Staff:
        return self.patch(actor=actor, staff_id=staff_id, user_id=user_id)

    def remove(self, *, actor: Actor, staff_id: str) -> StaffRemoval:
        self._require_manager(actor)
        self.get(staff_id)

        if self._staff.is_referenced(staff_id):
            self._staff.update(staff_id, {"is_active": False})
            logger.info("Staff %s is assigned to sessions; deactivated instead of deleted", staff_id)
            return StaffRemoval.DEACTIVATED

        if not self._staff.delete(staff_id):
            raise ValidationError("Xóa nhân viên thất bại")
        logger.info("Staff deleted: %s", staff_id)
        return StaffRemoval.DELETED

    def _apply(self, staff_id: str, changes: dict[str, Any]) -> Staff:
        updated = self._staff.update(staff_id, changes)
        if not updated:
            raise NotFoundError("Nhân viên không tồn tại")
        return updated

    @staticmethod
    def _clean_name(name: Optional[str]) -> str:
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Vui lòng nhập tên nhân viên")
        return name.strip()

    @staticmethod
    def _require_manager(actor: Actor) -> None:
        if not actor.can_manage:
            raise AuthorizationError("Bạn không có quyền")
