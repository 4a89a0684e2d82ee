from __future__ import annotations

import pytest

from fakes import InMemoryAccounts, InMemoryRoles, InMemoryStaff, make_actor
from studio_roster.core.enums import Role
from studio_roster.core.exceptions import AuthenticationError, AuthorizationError, ValidationError
from studio_roster.users.service import AuthService, RoleService


@pytest.fixture
def roles():
    return InMemoryRoles()


@pytest.fixture
def staff():
    return InMemoryStaff()


@pytest.fixture
def auth(roles, staff):
    return AuthService(InMemoryAccounts(), RoleService(roles), staff)


def test_sign_up_then_authenticate(auth):
    created = auth.sign_up(email="An@Studio.local", password="secret1", display_name="An")

    actor = auth.authenticate("an@studio.local", "secret1")

    assert actor.account_id == created.account_id
    assert actor.email == "an@studio.local"
    assert actor.role == Role.STAFF
    assert not actor.can_manage


def test_sign_up_rejects_short_password_and_duplicate_email(auth):
    with pytest.raises(ValidationError):
        auth.sign_up(email="a@studio.local", password="123", display_name="A")

    auth.sign_up(email="a@studio.local", password="123456", display_name="A")
    with pytest.raises(ValidationError, match="Email đã được đăng ký"):
        auth.sign_up(email="A@studio.local", password="123456", display_name="A")


@pytest.mark.parametrize("email, password", [("a@studio.local", "wrong-pass"), ("nobody@studio.local", "123456")])
def test_bad_credentials(auth, email, password):
    auth.sign_up(email="a@studio.local", password="123456", display_name="A")

    with pytest.raises(AuthenticationError):
        auth.authenticate(email, password)


def test_actor_carries_role_and_linked_staff(auth, roles, staff):
    account = auth.sign_up(email="m@studio.local", password="123456", display_name="M")
    roles.set_role(account.account_id, Role.MANAGER)
    linked = staff.add("Chi", user_id=account.account_id)

    actor = auth.actor_for(account.account_id)

    assert actor.role == Role.MANAGER
    assert actor.can_manage and not actor.is_admin
    assert actor.staff_id == linked.staff_id


def test_only_admin_assigns_roles(roles):
    service = RoleService(roles)

    with pytest.raises(AuthorizationError):
        service.assign(actor=make_actor(Role.MANAGER), account_id="acc-2", role=Role.ADMIN)

    service.assign(actor=make_actor(Role.ADMIN), account_id="acc-2", role=Role.MANAGER)
    assert service.role_for("acc-2") == Role.MANAGER
    assert service.role_for("acc-unknown") == Role.STAFF
