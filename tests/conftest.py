from __future__ import annotations

import pytest

from fakes import build_fake_container
from studio_roster.core.enums import Role
from studio_roster.main import create_app


@pytest.fixture
def container():
    return build_fake_container()


@pytest.fixture
def app(container):
    return create_app(container, settings_module="config.testing")


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client, container):
    """Create an account with the given role and put it in the client session."""

    def _login(role: Role = Role.STAFF, *, email: str = "user@studio.local", staff_name: str | None = None):
        actor = container.auth_service.sign_up(email=email, password="123456", display_name=email.split("@")[0])
        container.roles_repo.set_role(actor.account_id, role)
        if staff_name:
            container.staff_repo.add(staff_name, user_id=actor.account_id)
        with client.session_transaction() as sess:
            sess["account_id"] = actor.account_id
        return container.auth_service.actor_for(actor.account_id)

    return _login
