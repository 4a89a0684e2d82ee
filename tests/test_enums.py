from studio_roster.core.enums import ROLE_LABELS, SESSION_TYPE_LABELS, TIME_SLOT_LABELS, Role, SessionType, TimeSlot


def test_every_member_has_a_label():
    assert set(ROLE_LABELS) == set(Role)
    assert set(SESSION_TYPE_LABELS) == set(SessionType)
    assert set(TIME_SLOT_LABELS) == set(TimeSlot)


def test_time_slot_order():
    assert [s.order for s in (TimeSlot.MORNING, TimeSlot.AFTERNOON, TimeSlot.EVENING)] == [0, 1, 2]
    assert TimeSlot("chiều").label == "Chiều"
