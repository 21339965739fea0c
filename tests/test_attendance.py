from datetime import date

from app.models.schedule import Schedule
from app.utils.timeslots import school_year_of
from conftest import auth_headers, seed


def add_schedules():
    seed(
        Schedule(id="BSIT-S1", course_id="BSIT", subject_id="S1", room="R1", teacher_id="T1",
                 days=["Monday", "Wednesday"], time_start="10:00", time_end="11:00"),
        Schedule(id="BSIT-S2", course_id="BSIT", subject_id="S2", room="R2", teacher_id="T2",
                 days=["Monday"], time_start="08:00", time_end="09:00"),
        Schedule(id="BSIT-S3", course_id="BSIT", subject_id="S3", room="R1", teacher_id="T1",
                 days=["Tuesday"], time_start="08:00", time_end="09:00"),
    )


def test_teacher_sees_only_own_classes_for_the_day(client, school) -> None:
    add_schedules()
    r = client.get("/attendance/today", params={"weekday": "Monday"}, headers=auth_headers("ana"))
    assert r.status_code == 200
    rows = r.json()
    assert [x["id"] for x in rows] == ["BSIT-S1"]
    assert rows[0]["subject_code"] == "IT101"
    assert rows[0]["year_level"] == "1st Year"


def test_admin_sees_every_class_for_the_day_in_time_order(client, school) -> None:
    add_schedules()
    r = client.get("/attendance/today", params={"weekday": "Monday"}, headers=auth_headers("admin"))
    assert [x["id"] for x in r.json()] == ["BSIT-S2", "BSIT-S1"]


def test_staff_without_classes_sees_nothing(client, school) -> None:
    add_schedules()
    r = client.get("/attendance/today", params={"weekday": "Tuesday"}, headers=auth_headers("cora"))
    assert r.status_code == 200
    assert r.json() == []


def test_get_schedule_by_id(client, school) -> None:
    add_schedules()
    r = client.get("/attendance/BSIT-S3", headers=auth_headers("ana"))
    assert r.status_code == 200
    assert r.json()["days"] == ["Tuesday"]
    assert client.get("/attendance/BSIT-S9", headers=auth_headers("ana")).status_code == 404


def test_qr_payload_points_at_mark_page(client, school) -> None:
    add_schedules()
    r = client.get("/attendance/BSIT-S1/qr", headers=auth_headers("ana"))
    assert r.status_code == 200
    data = r.json()
    assert data["schedule_id"] == "BSIT-S1"
    assert data["school_year"] == school_year_of(date.today())
    assert data["qr_value"].endswith(f"/attendance/mark/BSIT-S1?schoolYear={data['school_year']}")
