import os

# must be set before app.config is imported
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from app.database import Base, SessionLocal, engine
from app.main import app
from app.models.course import Course
from app.models.staff import Staff
from app.models.subject import Subject
from app.models.user import User
from app.utils.auth import create_access_token


@pytest.fixture(autouse=True)
def fresh_db():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


def seed(*objs):
    db = SessionLocal()
    try:
        db.add_all(objs)
        db.commit()
    finally:
        db.close()


def auth_headers(username: str) -> dict:
    return {"Authorization": f"Bearer {create_access_token({'sub': username})}"}


@pytest.fixture
def school():
    """One course with three first-semester subjects, two teachers and a few users."""
    seed(
        Course(id="BSIT", name="BS Information Technology", department="Non-Board Courses"),
        Course(id="BSN", name="BS Nursing", department="Board Courses"),
        Staff(id="T1", first_name="Ana", last_name="Reyes", position="Teacher", course="BSIT"),
        Staff(id="T2", first_name="Ben", last_name="Cruz", position="Dean", course="BSIT"),
        Staff(id="C1", first_name="Cora", last_name="Lim", position="Staff"),
    )
    seed(
        Subject(id="S1", course_id="BSIT", subject_code="IT101", description="Intro to Computing",
                units=3, semester="1st Sem", year_level="1st Year"),
        Subject(id="S2", course_id="BSIT", subject_code="IT102", description="Programming 1",
                units=3, semester="1st Sem", year_level="1st Year"),
        Subject(id="S3", course_id="BSIT", subject_code="IT201", description="Data Structures",
                units=3, semester="1st Sem", year_level="2nd Year"),
        Subject(id="S4", course_id="BSIT", subject_code="IT103", description="Discrete Math",
                units=3, semester="2nd Sem", year_level="1st Year"),
        Subject(id="N1", course_id="BSN", subject_code="NCM100", description="Anatomy",
                units=5, semester="1st Sem", year_level="1st Year"),
    )
    seed(
        User(username="admin", password_hash="x", role="Admin"),
        User(username="ana", password_hash="x", role="Teacher", staff_id="T1"),
        User(username="cora", password_hash="x", role="Staff", staff_id="C1"),
    )
