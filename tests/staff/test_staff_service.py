from __future__ import annotations

import pytest

from fakes import InMemoryStaff, make_actor
from studio_roster.core.enums import Role
from studio_roster.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from studio_roster.staff.model import StaffRemoval
from studio_roster.staff.service import StaffService

MANAGER = make_actor(Role.MANAGER)


@pytest.fixture
def repo():
    return InMemoryStaff()


@pytest.fixture
def service(repo):
    return StaffService(repo)


def test_add_strips_name_and_blank_contacts(service):
    staff = service.add(actor=MANAGER, name="  Ngân Hà ", email=" ", phone="0901 ")

    assert staff.name == "Ngân Hà"
    assert staff.email is None
    assert staff.phone == "0901"
    assert staff.is_active


def test_add_requires_name(service):
    with pytest.raises(ValidationError):
        service.add(actor=MANAGER, name="   ")


def test_staff_role_cannot_write(service, repo):
    an = repo.add("An")

    with pytest.raises(AuthorizationError):
        service.add(actor=make_actor(Role.STAFF), name="Chi")
    with pytest.raises(AuthorizationError):
        service.remove(actor=make_actor(Role.STAFF), staff_id=an.staff_id)


def test_partial_update_keeps_omitted_fields(service, repo):
    an = service.add(actor=MANAGER, name="An", email="an@studio.local", phone="0901")

    updated = service.update(actor=MANAGER, staff_id=an.staff_id, phone="")

    assert updated.name == "An"
    assert updated.email == "an@studio.local"
    assert updated.phone is None


def test_set_active(service, repo):
    an = repo.add("An")

    assert service.set_active(actor=MANAGER, staff_id=an.staff_id, is_active=False).is_active is False
    assert [s.name for s in service.list_active()] == []
    assert [s.name for s in service.list_staff()] == ["An"]


def test_remove_unreferenced_staff_deletes(service, repo):
    an = repo.add("An")

    assert service.remove(actor=MANAGER, staff_id=an.staff_id) == StaffRemoval.DELETED
    assert repo.get_by_id(an.staff_id) is None


def test_remove_referenced_staff_deactivates(service, repo):
    an = repo.add("An")
    repo.referenced.add(an.staff_id)

    assert service.remove(actor=MANAGER, staff_id=an.staff_id) == StaffRemoval.DEACTIVATED
    assert repo.get_by_id(an.staff_id).is_active is False


def test_remove_unknown(service):
    with pytest.raises(NotFoundError):
        service.remove(actor=MANAGER, staff_id="missing")


def test_link_account_rejects_account_linked_elsewhere(service, repo):
    repo.add("An", user_id="acc-9")
    chi = repo.add("Chi")

    with pytest.raises(ValidationError, match="An"):
        service.link_account(actor=MANAGER, staff_id=chi.staff_id, user_id="acc-9")

    assert service.link_account(actor=MANAGER, staff_id=chi.staff_id, user_id="acc-10").user_id == "acc-10"
    assert service.link_account(actor=MANAGER, staff_id=chi.staff_id, user_id=None).user_id is None


def test_empty_name_message(service, repo):
    an = repo.add("An")

    with pytest.raises(ValidationError, match="Vui lòng nhập tên nhân viên"):
        service.add(actor=MANAGER, name="")
    with pytest.raises(ValidationError, match="Vui lòng nhập tên nhân viên"):
        service.update(actor=MANAGER, staff_id=an.staff_id, name="  ")


def test_patch_writes_nothing_when_link_is_rejected(service, repo):
    repo.add("An", user_id="acc-an")
    binh = repo.add("Bình")

    with pytest.raises(ValidationError, match="đã được liên kết"):
        service.patch(actor=MANAGER, staff_id=binh.staff_id, name="Bình Mới", is_active=False, user_id="acc-an")

    assert repo.get_by_id(binh.staff_id) == binh


def test_patch_applies_all_fields_together(service, repo):
    binh = repo.add("Bình")

    updated = service.patch(actor=MANAGER, staff_id=binh.staff_id, name="Bình Mới", is_active=False, user_id="acc-b")

    assert (updated.name, updated.is_active, updated.user_id) == ("Bình Mới", False, "acc-b")


def test_patch_rejects_non_bool_active_flag(service, repo):
    binh = repo.add("Bình")

    with pytest.raises(ValidationError):
        service.patch(actor=MANAGER, staff_id=binh.staff_id, name="Bình Mới", is_active="no")

    assert repo.get_by_id(binh.staff_id).name == "Bình"
