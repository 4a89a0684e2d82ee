from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import NewWorkSession, WorkSession


class WorkSessionRepository(Protocol):
    def list_all(self) -> Sequence[WorkSession]:
        raise NotImplementedError

    def get_by_id(self, session_id: str) -> Optional[WorkSession]:
        raise NotImplementedError

    def create(self, draft: NewWorkSession, *, created_by: Optional[str]) -> WorkSession:
        raise NotImplementedError

    def create_many(self, drafts: Sequence[NewWorkSession], *, created_by: Optional[str]) -> list[WorkSession]:
        """Persist every draft or none of them."""

        raise NotImplementedError

    def update(self, session_id: str, draft: NewWorkSession) -> Optional[WorkSession]:
        """Replace fields and staff assignments; None when the session is missing."""

        raise NotImplementedError

    def delete(self, session_id: str) -> bool:
        raise NotImplementedError
