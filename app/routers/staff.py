from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.database import get_db
from app.models.staff import Staff, TEACHING_POSITIONS
from app.schemas.staff import TeacherOptionOut
from app.utils.auth import get_current_user

router = APIRouter(prefix="/staff", tags=["Staff"])


def teacher_label(s: Staff) -> str:
    if s.course:
        return f"{s.full_name} ({s.course})"
    return s.full_name


@router.get("/teachers", response_model=List[TeacherOptionOut])
def list_teachers(db: Session = Depends(get_db), user=Depends(get_current_user)):
    rows = (
        db.query(Staff)
        .filter(Staff.position.in_(TEACHING_POSITIONS))
        .order_by(Staff.last_name.asc(), Staff.first_name.asc())
        .all()
    )
    return [
        TeacherOptionOut(
            id=s.id,
            first_name=s.first_name,
            last_name=s.last_name,
            position=s.position,
            course=s.course,
            label=teacher_label(s),
        )
        for s in rows
    ]
