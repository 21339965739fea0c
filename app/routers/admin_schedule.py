from typing import Dict, List

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.responses import StreamingResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.database import get_db
from app.utils.auth import require_admin

from app.models.course import Course
from app.models.schedule import Schedule
from app.models.staff import Staff, TEACHING_POSITIONS
from app.models.subject import Subject

from app.schemas.schedule import (
    Assignment, ConflictReason, ConflictResult, Semester,
    ScheduleIn, ScheduleCheckIn, ScheduleOut, ScheduleConflictOut,
    ScheduleBoardOut, SubjectScheduleOut,
)
from app.utils.conflict import check_conflict, InvalidAssignment
from app.utils.excel_export import schedule_board_to_xlsx_bytes, make_filename
from app.utils.timeslots import parse_clock, format_clock

import logging
logger = logging.getLogger("app.schedule")


router = APIRouter(prefix="/admin/schedules", tags=["Admin - Schedules"])

CONFLICT_MESSAGES = {
    ConflictReason.ROOM: "The selected room is already booked during this time.",
    ConflictReason.TEACHER: "The selected teacher is already booked during this time.",
    ConflictReason.BOTH: "The selected room and teacher are already booked during this time.",
}


def row_to_assignment(r: Schedule) -> Assignment:
    return Assignment(
        course_id=r.course_id,
        subject_id=r.subject_id,
        room=r.room,
        teacher=r.teacher_id,
        days=r.days or [],
        time_start=parse_clock(r.time_start),
        time_end=parse_clock(r.time_end),
    )


def build_candidate(course_id: str, subject_id: str, body: ScheduleIn) -> Assignment:
    return Assignment(
        course_id=course_id,
        subject_id=subject_id,
        room=body.room,
        teacher=body.teacher,
        days=body.days,
        time_start=body.time_start,
        time_end=body.time_end,
    )


def load_course_assignments(db: Session, course_id: str) -> List[Assignment]:
    # stable order: first conflicting record wins
    rows = (
        db.query(Schedule)
        .filter(Schedule.course_id == course_id)
        .order_by(Schedule.id.asc())
        .all()
    )
    return [row_to_assignment(r) for r in rows]


def get_course_or_404(db: Session, course_id: str, lock: bool = False) -> Course:
    q = db.query(Course).filter(Course.id == course_id)
    if lock:
        # serialises read-check-write per course
        q = q.with_for_update()
    c = q.first()
    if not c:
        raise HTTPException(status_code=404, detail="Course not found")
    return c


def ensure_key_parts(course_id: str, subject_id: str):
    for label, value in (("course_id", course_id), ("subject_id", subject_id)):
        if Schedule.ID_SEPARATOR in value:
            raise HTTPException(
                status_code=422,
                detail=f"{label} must not contain '{Schedule.ID_SEPARATOR}': {value}",
            )


def get_subject_or_404(db: Session, course_id: str, subject_id: str) -> Subject:
    s = (
        db.query(Subject)
        .filter(Subject.id == subject_id, Subject.course_id == course_id)
        .first()
    )
    if not s:
        raise HTTPException(status_code=404, detail="Subject not found in this course")
    return s


def ensure_teacher(db: Session, teacher_id: str | None):
    if not teacher_id:
        return
    s = db.query(Staff).filter(Staff.id == teacher_id).first()
    if not s:
        raise HTTPException(status_code=400, detail="teacher not found")
    if s.position not in TEACHING_POSITIONS:
        raise HTTPException(status_code=400, detail=f"{s.full_name} ({s.position}) cannot be assigned to teach")


def run_check(candidate: Assignment, existing: List[Assignment]) -> ConflictResult:
    try:
        return check_conflict(candidate, existing)
    except InvalidAssignment as e:
        raise HTTPException(status_code=422, detail=str(e))


def build_board(db: Session, course_id: str, semester: str) -> Dict[str, List[SubjectScheduleOut]]:
    subjects = (
        db.query(Subject)
        .filter(Subject.course_id == course_id, Subject.semester == semester)
        .order_by(Subject.year_level.asc(), Subject.subject_code.asc())
        .all()
    )
    if not subjects:
        return {}

    schedules = (
        db.query(Schedule)
        .filter(Schedule.course_id == course_id, Schedule.subject_id.in_([s.id for s in subjects]))
        .all()
    )
    schedule_map = {r.subject_id: r for r in schedules}

    teacher_ids = {r.teacher_id for r in schedules if r.teacher_id}
    teacher_map = {}
    if teacher_ids:
        for s in db.query(Staff).filter(Staff.id.in_(teacher_ids)).all():
            teacher_map[s.id] = s.full_name

    grouped: Dict[str, List[SubjectScheduleOut]] = {}
    for subj in subjects:
        fields = dict(
            subject_id=subj.id,
            subject_code=subj.subject_code,
            description=subj.description,
            units=subj.units,
            year_level=subj.year_level,
        )
        r = schedule_map.get(subj.id)
        if r is not None:
            fields.update(
                schedule_id=r.id,
                room=r.room,
                teacher_id=r.teacher_id,
                teacher_name=teacher_map.get(r.teacher_id, ""),
                days=r.days or [],
                time_start=r.time_start,
                time_end=r.time_end,
            )
        grouped.setdefault(subj.year_level, []).append(SubjectScheduleOut(**fields))
    return grouped


@router.get("/{course_id}", response_model=ScheduleBoardOut)
def get_schedule_board(
    course_id: str,
    semester: Semester = Query(..., description="1st Sem / 2nd Sem / Summer"),
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    get_course_or_404(db, course_id)
    return ScheduleBoardOut(
        course_id=course_id,
        semester=semester,
        year_levels=build_board(db, course_id, semester),
    )


@router.post("/{course_id}/check", response_model=ConflictResult)
def check_schedule(
    course_id: str,
    body: ScheduleCheckIn,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    ensure_key_parts(course_id, body.subject_id)
    get_course_or_404(db, course_id)
    get_subject_or_404(db, course_id, body.subject_id)
    candidate = build_candidate(course_id, body.subject_id, body)
    return run_check(candidate, load_course_assignments(db, course_id))


@router.put(
    "/{course_id}/{subject_id}",
    response_model=ScheduleOut,
    responses={409: {"model": ScheduleConflictOut}},
)
def save_schedule(
    course_id: str,
    subject_id: str,
    body: ScheduleIn,
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    ensure_key_parts(course_id, subject_id)
    get_course_or_404(db, course_id, lock=True)
    get_subject_or_404(db, course_id, subject_id)

    ensure_teacher(db, body.teacher)

    candidate = build_candidate(course_id, subject_id, body)
    result = run_check(candidate, load_course_assignments(db, course_id))
    if result.conflict:
        db.rollback()
        logger.info(
            "schedule rejected course=%s subject=%s conflict_with=%s reason=%s",
            course_id, subject_id, result.with_subject_id, result.reason.value,
        )
        raise HTTPException(
            status_code=409,
            detail=ScheduleConflictOut(
                message=CONFLICT_MESSAGES[result.reason],
                conflict_subject_id=result.with_subject_id,
                reason=result.reason,
            ).model_dump(mode="json"),
        )

    row = (
        db.query(Schedule)
        .filter(Schedule.course_id == course_id, Schedule.subject_id == subject_id)
        .first()
    )
    if row is None:
        row = Schedule(id=Schedule.make_id(course_id, subject_id), course_id=course_id, subject_id=subject_id)
        db.add(row)

    row.room = candidate.room
    row.teacher_id = candidate.teacher
    row.days = [d.value for d in candidate.days]
    row.time_start = format_clock(candidate.time_start)
    row.time_end = format_clock(candidate.time_end)

    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e.orig))

    db.refresh(row)
    logger.info("schedule saved id=%s room=%s teacher=%s", row.id, row.room, row.teacher_id)
    return ScheduleOut.model_validate(row)


@router.get("/{course_id}/export")
def export_schedule_board(
    course_id: str,
    semester: Semester = Query(...),
    db: Session = Depends(get_db),
    admin=Depends(require_admin),
):
    get_course_or_404(db, course_id)
    board = build_board(db, course_id, semester)
    rows = {level: [item.model_dump() for item in items] for level, items in board.items()}

    xlsx_bytes = schedule_board_to_xlsx_bytes(rows)
    filename = make_filename(f"schedule_{course_id}")

    return StreamingResponse(
        iter([xlsx_bytes]),
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
