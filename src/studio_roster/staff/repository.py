from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Staff


class StaffRepository(Protocol):
    def list_all(self) -> Sequence[Staff]:
        """All staff ordered by name."""

        raise NotImplementedError

    def get_by_id(self, staff_id: str) -> Optional[Staff]:
        raise NotImplementedError

    def get_by_user_id(self, user_id: str) -> Optional[Staff]:
        raise NotImplementedError

    def create(self, *, name: str, email: Optional[str], phone: Optional[str]) -> Staff:
        raise NotImplementedError

    def update(self, staff_id: str, changes: Mapping[str, Any]) -> Optional[Staff]:
        """Apply column changes and return the stored row (None when missing)."""

        raise NotImplementedError

    def delete(self, staff_id: str) -> bool:
        raise NotImplementedError

    def is_referenced(self, staff_id: str) -> bool:
        """True when any work session is assigned to this staff member."""

        raise NotImplementedError
