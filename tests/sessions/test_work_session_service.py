from __future__ import annotations

from datetime import date

import pytest

from fakes import InMemorySessions, InMemoryStaff, make_actor
from studio_roster.core.enums import Role, SessionType, TimeSlot
from studio_roster.core.exceptions import AuthorizationError, NotFoundError, ValidationError
from studio_roster.sessions.filters import TaskFilter
from studio_roster.sessions.service import WorkSessionService

MANAGER = make_actor(Role.MANAGER)


@pytest.fixture
def staff():
    return InMemoryStaff()


@pytest.fixture
def sessions(staff):
    return InMemorySessions(staff)


@pytest.fixture
def service(sessions, staff):
    return WorkSessionService(sessions, staff)


def _task(staff_ids, **overrides):
    task = {
        "date": "2025-11-03",
        "time_slot": "chiều",
        "product_category": "Rong biển",
        "session_type": "livestream",
        "staff_ids": staff_ids,
    }
    task.update(overrides)
    return task


def test_create_livestream(service, staff):
    an = staff.add("An")

    created = service.create(actor=MANAGER, **_task([an.staff_id], duration_hours="2.5", notes="  mở màn "))

    assert created.date == date(2025, 11, 3)
    assert created.time_slot == TimeSlot.AFTERNOON
    assert created.session_type == SessionType.LIVESTREAM
    assert created.duration_hours == 2.5
    assert created.notes == "mở màn"
    assert created.staff_names == ["An"]
    assert created.created_by == MANAGER.account_id


def test_duration_dropped_for_non_livestream(service, staff):
    an = staff.add("An")

    created = service.create(actor=MANAGER, **_task([an.staff_id], session_type="video", duration_hours=3))

    assert created.duration_hours is None


def test_blank_notes_become_none(service, staff):
    an = staff.add("An")

    assert service.create(actor=MANAGER, **_task([an.staff_id], notes="   ")).notes is None


def test_duplicate_staff_ids_are_collapsed(service, staff):
    an = staff.add("An")

    created = service.create(actor=MANAGER, **_task([an.staff_id, an.staff_id]))

    assert created.staff_ids == [an.staff_id]


@pytest.mark.parametrize(
    "overrides",
    [
        {"time_slot": "đêm"},
        {"session_type": "podcast"},
        {"date": "2025-13-01"},
        {"product_category": "  "},
        {"duration_hours": "abc"},
        {"duration_hours": 0},
    ],
)
def test_invalid_fields_rejected(service, staff, overrides):
    an = staff.add("An")

    with pytest.raises(ValidationError):
        service.create(actor=MANAGER, **_task([an.staff_id], **overrides))


def test_requires_at_least_one_staff(service):
    with pytest.raises(ValidationError, match="ít nhất một nhân viên"):
        service.create(actor=MANAGER, **_task([]))


def test_unknown_or_inactive_staff_rejected(service, staff):
    gone = staff.add("Trà My", is_active=False)

    with pytest.raises(ValidationError, match="không tồn tại"):
        service.create(actor=MANAGER, **_task(["missing"]))
    with pytest.raises(ValidationError, match="đã nghỉ việc"):
        service.create(actor=MANAGER, **_task([gone.staff_id]))


def test_staff_role_cannot_write(service, staff):
    an = staff.add("An")

    with pytest.raises(AuthorizationError):
        service.create(actor=make_actor(Role.STAFF), **_task([an.staff_id]))


def test_create_many_is_all_or_nothing(service, sessions, staff):
    an = staff.add("An")

    with pytest.raises(ValidationError, match="Task 2"):
        service.create_many(actor=MANAGER, tasks=[_task([an.staff_id]), _task([])])

    assert sessions.list_all() == []


def test_create_many_stores_every_task(service, staff):
    an = staff.add("An")
    chi = staff.add("Chi")

    created = service.create_many(
        actor=MANAGER,
        tasks=[_task([an.staff_id]), _task([chi.staff_id], session_type="event", time_slot="tối")],
    )

    assert len(created) == 2
    assert created[1].session_type == SessionType.EVENT


def test_create_many_with_no_tasks(service):
    with pytest.raises(ValidationError):
        service.create_many(actor=MANAGER, tasks=[])


def test_update_keeps_staff_deactivated_after_assignment(service, staff):
    an = staff.add("An")
    created = service.create(actor=MANAGER, **_task([an.staff_id]))
    staff.update(an.staff_id, {"is_active": False})

    updated = service.update(actor=MANAGER, session_id=created.session_id, **_task([an.staff_id], product_category="Mỹ phẩm"))

    assert updated.session_id == created.session_id
    assert updated.product_category == "Mỹ phẩm"


def test_update_and_delete_unknown_session(service, staff):
    an = staff.add("An")

    with pytest.raises(NotFoundError):
        service.update(actor=MANAGER, session_id="nope", **_task([an.staff_id]))
    with pytest.raises(NotFoundError):
        service.delete(actor=MANAGER, session_id="nope")


def test_list_orders_newest_first_then_slot(service, staff):
    an = staff.add("An")
    service.create(actor=MANAGER, **_task([an.staff_id], date="2025-11-01"))
    service.create(actor=MANAGER, **_task([an.staff_id], date="2025-11-02", time_slot="tối"))
    service.create(actor=MANAGER, **_task([an.staff_id], date="2025-11-02", time_slot="sáng"))

    listed = service.list_sessions()

    assert [(s.date.day, s.time_slot) for s in listed] == [
        (2, TimeSlot.MORNING),
        (2, TimeSlot.EVENING),
        (1, TimeSlot.AFTERNOON),
    ]
    assert len(service.list_sessions(TaskFilter(date_from="2025-11-02"))) == 2


def test_delete_removes_session(service, sessions, staff):
    an = staff.add("An")
    created = service.create(actor=MANAGER, **_task([an.staff_id]))

    service.delete(actor=MANAGER, session_id=created.session_id)

    assert sessions.get_by_id(created.session_id) is None


@pytest.mark.parametrize("value", [20251118, ["2025-11-18"], None])
def test_non_string_date_rejected(service, staff, value):
    an = staff.add("An")

    with pytest.raises(ValidationError, match="Ngày không hợp lệ"):
        service.create(actor=MANAGER, **_task([an.staff_id], date=value))


def test_date_object_accepted(service, staff):
    an = staff.add("An")

    assert service.create(actor=MANAGER, **_task([an.staff_id], date=date(2025, 11, 18))).date == date(2025, 11, 18)


@pytest.mark.parametrize("value", ["nan", "inf", float("-inf"), True])
def test_non_finite_or_bool_duration_rejected(service, sessions, staff, value):
    an = staff.add("An")

    with pytest.raises(ValidationError, match="Số giờ không hợp lệ"):
        service.create(actor=MANAGER, **_task([an.staff_id], duration_hours=value))

    assert sessions.list_all() == []


@pytest.mark.parametrize("value", ["staff-1", [1, 2], [{"id": "x"}]])
def test_malformed_staff_ids_rejected(service, value):
    with pytest.raises(ValidationError, match="Danh sách nhân viên không hợp lệ"):
        service.create(actor=MANAGER, **_task(value))
