from __future__ import annotations

from mysql.connector import Error as MySQLError

from studio_roster.core.enums import Role


def test_requires_login(client):
    resp = client.get("/sessions")

    assert resp.status_code == 401
    assert resp.get_json() == {"success": False, "message": "Vui lòng đăng nhập để tiếp tục!"}


def test_signup_login_me(client):
    resp = client.post("/auth/signup", json={"email": "an@studio.local", "password": "123456", "display_name": "An"})
    assert resp.status_code == 201

    client.post("/auth/logout")
    assert client.get("/auth/me").status_code == 401

    resp = client.post("/auth/login", json={"email": "an@studio.local", "password": "123456"})
    assert resp.status_code == 200

    me = client.get("/auth/me").get_json()["account"]
    assert me["role"] == "staff"
    assert me["role_label"] == "Nhân viên"


def test_login_with_wrong_password(client):
    client.post("/auth/signup", json={"email": "an@studio.local", "password": "123456", "display_name": "An"})

    resp = client.post("/auth/login", json={"email": "an@studio.local", "password": "654321"})

    assert resp.status_code == 401
    assert resp.get_json()["success"] is False


def test_staff_cannot_manage(client, login):
    login(Role.STAFF)

    assert client.post("/staff", json={"name": "Chi"}).status_code == 403
    assert client.post("/products", json={"name": "Khác"}).status_code == 403


def test_manager_assigns_and_board_groups(client, login, container):
    login(Role.MANAGER)
    an = client.post("/staff", json={"name": "An"}).get_json()["staff"]
    chi = client.post("/staff", json={"name": "Chi"}).get_json()["staff"]

    resp = client.post(
        "/sessions",
        json={
            "date": "2025-11-03",
            "time_slot": "chiều",
            "product_category": "Rong biển",
            "session_type": "livestream",
            "staff_ids": [an["id"], chi["id"]],
            "duration_hours": 2,
        },
    )
    assert resp.status_code == 201
    assert resp.get_json()["session"]["staff_names"] == ["An", "Chi"]

    board = client.get("/sessions").get_json()
    assert board["filter_active"] is False
    assert board["stats"]["total_sessions"] == 1
    assert board["stats"]["staff_count"] == 2
    assert [g["staff_name"] for g in board["groups"]] == ["An", "Chi"]
    assert board["groups"][0]["rows"][0]["show_name"] is True

    filtered = client.get("/sessions", query_string={"search": "chi", "session_type": "video"}).get_json()
    assert filtered["filter_active"] is True
    assert filtered["sessions"] == []


def test_multi_task_submission_rolls_back_on_error(client, login, container):
    login(Role.MANAGER)
    an = container.staff_repo.add("An")
    good = {
        "date": "2025-11-03",
        "time_slot": "sáng",
        "product_category": "Mỹ phẩm",
        "session_type": "video",
        "staff_ids": [an.staff_id],
    }

    resp = client.post("/sessions", json={"tasks": [good, {**good, "staff_ids": []}]})

    assert resp.status_code == 400
    assert resp.get_json()["message"].startswith("Task 2")
    assert container.sessions_repo.list_all() == []


def test_missing_task_fields(client, login):
    login(Role.MANAGER)

    resp = client.post("/sessions", json={"date": "2025-11-03"})

    assert resp.status_code == 400
    assert "Thiếu thông tin" in resp.get_json()["message"]


def test_availability_toggle_endpoint(client, login):
    actor = login(Role.STAFF, staff_name="An")
    payload = {"staff_id": actor.staff_id, "day_of_week": 1, "time_slot": "sáng"}

    first = client.post("/availability/toggle", json=payload).get_json()
    assert first == {"success": True, "changed": True, "available": True}

    grid = client.get("/availability").get_json()
    assert grid["current_staff"]["slots"]["1"]["sáng"] is True

    today = client.get("/availability/today", query_string={"date": "2025-11-03"}).get_json()
    assert today["slots"][0]["staff_names"] == ["An"]

    second = client.post("/availability/toggle", json=payload).get_json()
    assert second["available"] is False


def test_toggle_other_staff_is_ignored(client, login, container):
    login(Role.STAFF, staff_name="An")
    chi = container.staff_repo.add("Chi")

    resp = client.post("/availability/toggle", json={"staff_id": chi.staff_id, "day_of_week": 2, "time_slot": "tối"})

    assert resp.get_json() == {"success": True, "changed": False, "available": None}


def test_attendance_report_and_csv(client, login, container):
    manager = login(Role.MANAGER)
    an = container.staff_repo.add("An")
    container.work_session_service.create(
        actor=manager,
        date="2025-11-03",
        time_slot="chiều",
        product_category="Rong biển",
        session_type="livestream",
        staff_ids=[an.staff_id],
        duration_hours=2,
    )

    report = client.get("/reports/attendance", query_string={"start": "2025-11-01", "end": "2025-11-30"}).get_json()
    assert report["rows"][0]["livestream_hours"] == 2
    assert report["totals"]["total"] == 1

    resp = client.get("/reports/attendance.csv", query_string={"start": "2025-11-01", "end": "2025-11-30"})
    assert resp.mimetype == "text/csv"
    assert "attendance_20251101_20251130.csv" in resp.headers["Content-Disposition"]


def test_bad_report_range(client, login):
    login(Role.STAFF)

    resp = client.get("/reports/attendance", query_string={"start": "2025-11-30", "end": "2025-11-01"})

    assert resp.status_code == 400


def _livestream(staff_id: str, **overrides) -> dict:
    task = {
        "date": "2025-11-18",
        "time_slot": "chiều",
        "product_category": "Rong biển",
        "session_type": "livestream",
        "staff_ids": [staff_id],
        "duration_hours": 2,
    }
    task.update(overrides)
    return task


def test_numeric_date_rejected_and_reports_still_work(client, login, container):
    login(Role.MANAGER)
    an = container.staff_repo.add("An")

    resp = client.post("/sessions", json=_livestream(an.staff_id, date=20251118))

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Ngày không hợp lệ"
    assert container.sessions_repo.list_all() == []
    assert client.get("/reports/attendance", query_string={"start": "2025-11-01", "end": "2025-11-30"}).status_code == 200


def test_nan_duration_rejected(client, login, container):
    login(Role.MANAGER)
    an = container.staff_repo.add("An")

    resp = client.post("/sessions", json=_livestream(an.staff_id, duration_hours="nan"))

    assert resp.status_code == 400
    assert container.sessions_repo.list_all() == []


def test_non_object_task_rejected(client, login, container):
    login(Role.MANAGER)
    an = container.staff_repo.add("An")

    resp = client.post("/sessions", json={"tasks": [_livestream(an.staff_id), "oops"]})

    assert resp.status_code == 400
    assert resp.get_json()["message"].startswith("Task 2")


def test_non_object_body_rejected(client, login):
    login(Role.MANAGER)

    assert client.post("/sessions", json=["2025-11-18"]).status_code == 400


def test_staff_patch_is_all_or_nothing(client, login, container):
    login(Role.MANAGER)
    container.staff_repo.add("An", user_id="acc-an")
    binh = container.staff_repo.add("Bình")

    resp = client.patch(
        f"/staff/{binh.staff_id}",
        json={"name": "Bình Mới", "is_active": False, "user_id": "acc-an"},
    )

    assert resp.status_code == 400
    stored = container.staff_repo.get_by_id(binh.staff_id)
    assert (stored.name, stored.is_active, stored.user_id) == ("Bình", True, None)


def test_repository_failure_is_json_500(client, login, container, monkeypatch, caplog):
    login(Role.STAFF)

    def broken():
        raise MySQLError(msg="connection lost")

    monkeypatch.setattr(container.staff_repo, "list_all", broken)

    resp = client.get("/staff")

    assert resp.status_code == 500
    assert resp.get_json() == {"success": False, "message": "Lỗi hệ thống, vui lòng thử lại"}
    assert "Unhandled error in /staff" in caplog.text


def test_failure_while_loading_actor_is_json_500(client, login, container, monkeypatch):
    login(Role.ADMIN)

    def broken(account_id):
        raise MySQLError(msg="connection lost")

    monkeypatch.setattr(container.accounts_repo, "get_by_id", broken)

    for path in ("/products", "/availability", "/auth/me"):
        resp = client.get(path)
        assert resp.status_code == 500
        assert resp.get_json()["success"] is False
