from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import AuthenticationError, AuthorizationError, NotFoundError, ValidationError
from ..staff.repository import StaffRepository
from .model import Account, Actor
from .repository import AccountRepository, RoleRepository

logger = logging.getLogger(__name__)


class RoleService:
    """Use case: resolve and assign account roles."""

    def __init__(self, roles: RoleRepository):
        self._roles = roles

    def role_for(self, account_id: str) -> Role:
        # Accounts without a role row are plain staff.
        return self._roles.get_role(account_id) or Role.STAFF

    def assign(self, *, actor: Actor, account_id: str, role: Role) -> None:
        if not actor.is_admin:
            raise AuthorizationError("Bạn không có quyền")
        self._roles.set_role(account_id, role)
        logger.info("Account %s now has role %s", account_id, role.value)


class AuthService:
    """Use case: sign up / log in and build the Actor for a request."""

    def __init__(self, accounts: AccountRepository, roles: RoleService, staff: StaffRepository):
        self._accounts = accounts
        self._roles = roles
        self._staff = staff

    def sign_up(self, *, email: str, password: str, display_name: str) -> Actor:
        email = require_non_empty(email, "Email").lower()
        display_name = require_non_empty(display_name, "Họ tên")
        require_min_length(password, "Mật khẩu", MIN_PASSWORD_LENGTH)

        if self._accounts.get_by_email(email):
            raise ValidationError("Email đã được đăng ký")

        account = self._accounts.create(
            email=email,
            password_hash=generate_password_hash(password),
            display_name=display_name,
        )
        logger.info("Account created: %s", account.email)
        return self._to_actor(account)

    def authenticate(self, email: str, password: str) -> Actor:
        if not isinstance(email, str) or not isinstance(password, str):
            raise AuthenticationError("Sai email hoặc mật khẩu")
        account = self._accounts.get_by_email((email or "").strip().lower())
        if not account:
            raise AuthenticationError("Sai email hoặc mật khẩu")

        try:
            ok = check_password_hash(account.password_hash, password or "")
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            raise AuthenticationError("Sai email hoặc mật khẩu")

        return self._to_actor(account)

    def actor_for(self, account_id: str) -> Actor:
        account = self._accounts.get_by_id(account_id)
        if not account:
            raise NotFoundError("Tài khoản không tồn tại")
        return self._to_actor(account)

    def _to_actor(self, account: Account) -> Actor:
        linked = self._staff.get_by_user_id(account.account_id)
        staff_id: Optional[str] = linked.staff_id if linked else None
        return Actor(
            account_id=account.account_id,
            email=account.email,
            display_name=account.display_name,
            role=self._roles.role_for(account.account_id),
            staff_id=staff_id,
        )
