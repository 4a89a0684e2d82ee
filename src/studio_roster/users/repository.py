from __future__ import annotations

from typing import Optional, Protocol

from ..core.enums import Role
from .model import Account


class AccountRepository(Protocol):
    """Giao diện repository cho Account.

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp DB cụ thể.
    """

    def get_by_id(self, account_id: str) -> Optional[Account]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Account]:
        raise NotImplementedError

    def create(self, *, email: str, password_hash: str, display_name: str) -> Account:
        raise NotImplementedError


class RoleRepository(Protocol):
    def get_role(self, account_id: str) -> Optional[Role]:
        raise NotImplementedError

    def set_role(self, account_id: str, role: Role) -> None:
        raise NotImplementedError
