# app/utils/conflict.py
from typing import Sequence

from app.schemas.schedule import Assignment, ConflictReason, ConflictResult


class InvalidAssignment(ValueError):
    pass


def validate_assignment(a: Assignment) -> None:
    if not (a.course_id or "").strip():
        raise InvalidAssignment("course_id is required")
    if not (a.subject_id or "").strip():
        raise InvalidAssignment("subject_id is required")
    if not a.days:
        raise InvalidAssignment("at least one day is required")
    if a.time_start >= a.time_end:
        raise InvalidAssignment(
            f"time_start must be before time_end ({a.time_start:%H:%M} >= {a.time_end:%H:%M})"
        )


def _same_resource(mine, theirs) -> bool:
    # unset never matches, not even another unset
    return bool(mine) and mine == theirs


def _overlaps(a: Assignment, b: Assignment) -> bool:
    # half-open [start, end): touching endpoints are not an overlap
    return a.time_start < b.time_end and a.time_end > b.time_start


def check_conflict(candidate: Assignment, existing: Sequence[Assignment]) -> ConflictResult:
    """
    candidate: the assignment about to be saved
    existing: every assignment on record for the same course, in caller order

    Conflict when all three hold:
    1. same room or same teacher
    2. at least one shared day
    3. time intervals overlap

    The candidate's own prior record (same subject_id) is ignored.
    The first conflicting record in `existing` wins.
    """
    validate_assignment(candidate)

    for e in existing:
        if e.subject_id == candidate.subject_id:
            continue

        same_room = _same_resource(candidate.room, e.room)
        same_teacher = _same_resource(candidate.teacher, e.teacher)
        if not (same_room or same_teacher):
            continue

        if set(candidate.days).isdisjoint(e.days):
            continue

        if not _overlaps(candidate, e):
            continue

        if same_room and same_teacher:
            reason = ConflictReason.BOTH
        elif same_room:
            reason = ConflictReason.ROOM
        else:
            reason = ConflictReason.TEACHER
        return ConflictResult.found(e.subject_id, reason)

    return ConflictResult.none()
