from datetime import date
from typing import List, Optional
from urllib.parse import quote

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from app.config import settings
from app.database import get_db
from app.models.schedule import Schedule
from app.models.subject import Subject
from app.models.user import User
from app.schemas.schedule import AttendanceQrOut, ScheduleOut, TodayScheduleOut
from app.utils.auth import get_current_user
from app.utils.timeslots import Weekday, weekday_of, school_year_of

router = APIRouter(prefix="/attendance", tags=["Attendance"])


def get_schedule_or_404(db: Session, schedule_id: str) -> Schedule:
    row = db.get(Schedule, schedule_id)
    if not row:
        raise HTTPException(status_code=404, detail="Schedule not found")
    return row


@router.get("/today", response_model=List[TodayScheduleOut])
def list_today_schedules(
    weekday: Optional[Weekday] = Query(None, description="defaults to today"),
    db: Session = Depends(get_db),
    user: User = Depends(get_current_user),
):
    day = weekday or weekday_of(date.today())
    if day is None:
        # Sunday
        return []

    q = db.query(Schedule, Subject).join(Subject, Subject.id == Schedule.subject_id)
    if user.role != "Admin":
        if not user.staff_id:
            return []
        q = q.filter(Schedule.teacher_id == user.staff_id)

    rows = q.order_by(Schedule.time_start.asc(), Schedule.id.asc()).all()

    out = []
    for sched, subj in rows:
        # JSON array membership is filtered here to stay dialect-neutral
        if day.value not in (sched.days or []):
            continue
        out.append(
            TodayScheduleOut(
                id=sched.id,
                course_id=sched.course_id,
                subject_id=sched.subject_id,
                room=sched.room,
                teacher_id=sched.teacher_id,
                days=sched.days,
                time_start=sched.time_start,
                time_end=sched.time_end,
                subject_code=subj.subject_code,
                description=subj.description,
                semester=subj.semester,
                year_level=subj.year_level,
            )
        )
    return out


@router.get("/{schedule_id}", response_model=ScheduleOut)
def get_schedule(schedule_id: str, db: Session = Depends(get_db), user=Depends(get_current_user)):
    return ScheduleOut.model_validate(get_schedule_or_404(db, schedule_id))


@router.get("/{schedule_id}/qr", response_model=AttendanceQrOut)
def get_attendance_qr(schedule_id: str, db: Session = Depends(get_db), user=Depends(get_current_user)):
    row = get_schedule_or_404(db, schedule_id)
    school_year = school_year_of(date.today())
    base = settings.FRONTEND_BASE_URL.rstrip("/")
    return AttendanceQrOut(
        schedule_id=row.id,
        school_year=school_year,
        qr_value=f"{base}/attendance/mark/{quote(row.id)}?schoolYear={school_year}",
    )
