from datetime import date

from app.utils.timeslots import school_year_of
from conftest import auth_headers


def person(**overrides):
    body = {
        "first_name": "Dina",
        "last_name": "Santos",
        "gender": "Female",
        "address": "Quezon City",
        "mobile_number": "09170000000",
        "position": "Teacher",
        "department": "Non-Board Courses",
        "course": "BSIT",
    }
    body.update(overrides)
    return body


def subject(**overrides):
    body = {
        "subject_code": "IT-301",
        "description": "Networking 1",
        "units": 3,
        "semester": "1st Sem",
        "year_level": "3rd Year",
    }
    body.update(overrides)
    return body


# --- courses & subjects ---

def test_courses_grouped_by_department(client, school) -> None:
    r = client.get("/admin/courses", headers=auth_headers("admin"))
    assert r.status_code == 200
    depts = r.json()["departments"]
    assert sorted(depts) == ["Board Courses", "Non-Board Courses"]
    assert [c["id"] for c in depts["Board Courses"]] == ["BSN"]
    assert [c["id"] for c in depts["Non-Board Courses"]] == ["BSIT"]


def test_create_course(client, school) -> None:
    h = auth_headers("admin")
    r = client.post("/admin/courses", json={"id": "BSCS", "name": "BS Computer Science"}, headers=h)
    assert r.status_code == 200, r.text
    assert r.json()["department"] == "Non-Board Courses"

    assert client.get("/admin/courses/BSCS", headers=h).status_code == 200
    r = client.post("/admin/courses", json={"id": "BSCS", "name": "again"}, headers=h)
    assert r.status_code == 400


def test_course_id_with_dash_is_rejected(client, school) -> None:
    r = client.post("/admin/courses", json={"id": "BS-CS", "name": "Dashed"}, headers=auth_headers("admin"))
    assert r.status_code == 422


def test_add_subject_derives_id_from_code(client, school) -> None:
    h = auth_headers("admin")
    r = client.post("/admin/courses/BSIT/subjects", json=subject(), headers=h)
    assert r.status_code == 200, r.text
    assert r.json()["id"] == "BSIT_IT301"

    # same code again updates in place
    r = client.post("/admin/courses/BSIT/subjects", json=subject(units=4), headers=h)
    assert r.status_code == 200
    assert r.json()["id"] == "BSIT_IT301"
    assert r.json()["units"] == 4

    # a different code that reduces to the same id
    r = client.post("/admin/courses/BSIT/subjects", json=subject(subject_code="IT301"), headers=h)
    assert r.status_code == 400

    r = client.get("/admin/courses/BSIT/subjects", params={"semester": "1st Sem", "year_level": "3rd Year"}, headers=h)
    assert [s["subject_code"] for s in r.json()] == ["IT-301"]


def test_added_subject_can_be_scheduled(client, school) -> None:
    h = auth_headers("admin")
    client.post("/admin/courses/BSIT/subjects", json=subject(), headers=h)
    body = {"room": "R1", "teacher": "T1", "days": ["Tuesday"], "time_start": "13:00", "time_end": "14:00"}
    r = client.put("/admin/schedules/BSIT/BSIT_IT301", json=body, headers=h)
    assert r.status_code == 200, r.text
    assert r.json()["id"] == "BSIT-BSIT_IT301"


def test_add_subject_validation(client, school) -> None:
    h = auth_headers("admin")
    assert client.post("/admin/courses/NOPE/subjects", json=subject(), headers=h).status_code == 404
    assert client.post("/admin/courses/BSIT/subjects", json=subject(units=0), headers=h).status_code == 422
    assert client.post("/admin/courses/BSIT/subjects", json=subject(semester="Winter"), headers=h).status_code == 422
    assert client.post("/admin/courses/BSIT/subjects", json=subject(subject_code="---"), headers=h).status_code == 422


# --- staff ---

def test_staff_ids_are_sequential(client, school) -> None:
    h = auth_headers("admin")
    assert client.get("/admin/staff/next-id", headers=h).json() == {"next_id": "2008-00001"}

    first = client.post("/admin/staff", json=person(), headers=h)
    assert first.status_code == 200, first.text
    assert first.json()["id"] == "2008-00001"

    second = client.post("/admin/staff", json=person(first_name="Eli", position="Staff"), headers=h)
    assert second.json()["id"] == "2008-00002"

    r = client.get("/admin/staff", params={"position": "Staff"}, headers=h)
    assert [s["id"] for s in r.json()] == ["2008-00002", "C1"]


def test_update_and_delete_staff(client, school) -> None:
    h = auth_headers("admin")
    sid = client.post("/admin/staff", json=person(), headers=h).json()["id"]

    r = client.put(f"/admin/staff/{sid}", json={"mobile_number": "09998887777"}, headers=h)
    assert r.status_code == 200
    assert r.json()["mobile_number"] == "09998887777"
    assert r.json()["first_name"] == "Dina"

    assert client.put(f"/admin/staff/{sid}", json={"salary": 1}, headers=h).status_code == 422
    assert client.put("/admin/staff/2008-09999", json={"gender": "Male"}, headers=h).status_code == 404

    assert client.delete(f"/admin/staff/{sid}", headers=h).status_code == 200
    assert client.get(f"/admin/staff/{sid}", headers=h).status_code == 404


def test_scheduled_teacher_cannot_be_removed_or_demoted(client, school) -> None:
    h = auth_headers("admin")
    body = {"room": "R1", "teacher": "T2", "days": ["Monday"], "time_start": "09:00", "time_end": "10:00"}
    assert client.put("/admin/schedules/BSIT/S1", json=body, headers=h).status_code == 200

    assert client.delete("/admin/staff/T2", headers=h).status_code == 400
    assert client.put("/admin/staff/T2", json={"position": "Staff"}, headers=h).status_code == 400
    # staying a teacher is fine
    assert client.put("/admin/staff/T2", json={"position": "Teacher"}, headers=h).status_code == 200


def test_staff_with_login_cannot_be_deleted(client, school) -> None:
    assert client.delete("/admin/staff/C1", headers=auth_headers("admin")).status_code == 400


def test_staff_admin_requires_admin(client, school) -> None:
    assert client.post("/admin/staff", json=person(), headers=auth_headers("ana")).status_code == 403
    assert client.get("/admin/staff").status_code == 401


# --- students ---

def test_student_ids_follow_school_year(client, school) -> None:
    h = auth_headers("admin")
    sy = school_year_of(date.today())
    prefix = sy.split("-")[0]

    assert client.get("/admin/students/next-id", headers=h).json() == {"next_id": f"{prefix}-00001"}

    a = client.post("/admin/students", json={"first_name": "Gab", "last_name": "Uy", "course": "BSIT"}, headers=h)
    assert a.status_code == 200, a.text
    assert a.json()["student_id"] == f"{prefix}-00001"
    assert a.json()["school_year"] == sy

    b = client.post("/admin/students", json={"first_name": "Ivy", "last_name": "Go"}, headers=h)
    assert b.json()["student_id"] == f"{prefix}-00002"


def test_list_students_filters_and_pages(client, school) -> None:
    h = auth_headers("admin")
    for first in ("Ana", "Ben", "Carl"):
        client.post("/admin/students", json={"first_name": first, "last_name": "Dela Cruz"}, headers=h)

    r = client.get("/admin/students", params={"page": 2, "page_size": 2}, headers=h)
    data = r.json()
    assert data["total"] == 3
    assert [s["first_name"] for s in data["items"]] == ["Carl"]

    r = client.get("/admin/students", params={"keyword": "ben"}, headers=h)
    assert [s["first_name"] for s in r.json()["items"]] == ["Ben"]

    r = client.get("/admin/students", params={"school_year": "1999-2000"}, headers=h)
    assert r.json()["total"] == 0


def test_update_and_delete_student(client, school) -> None:
    h = auth_headers("admin")
    created = client.post("/admin/students", json={"first_name": "Gab", "last_name": "Uy"}, headers=h).json()
    pk = created["id"]

    r = client.put(f"/admin/students/{pk}", json={"year_level": "2nd Year"}, headers=h)
    assert r.status_code == 200
    assert r.json()["year_level"] == "2nd Year"
    assert r.json()["student_id"] == created["student_id"]

    # the generated number is not editable
    assert client.put(f"/admin/students/{pk}", json={"student_id": "X"}, headers=h).status_code == 422

    assert client.delete(f"/admin/students/{pk}", headers=h).status_code == 200
    assert client.delete(f"/admin/students/{pk}", headers=h).status_code == 404
