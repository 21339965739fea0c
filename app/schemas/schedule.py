from datetime import time
from enum import Enum
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.utils.timeslots import Weekday, normalize_days, parse_clock


Semester = Literal["1st Sem", "2nd Sem", "Summer"]


class ConflictReason(str, Enum):
    ROOM = "room"
    TEACHER = "teacher"
    BOTH = "both"


def _blank_to_none(v):
    if v is None:
        return None
    v = str(v).strip()
    return v or None


def _strict_clock(v):
    # wall-clock minutes only: no seconds, no timezone
    if isinstance(v, str):
        return parse_clock(v)
    if isinstance(v, time):
        if v.tzinfo is not None:
            raise ValueError("time must not carry a timezone")
        if v.second or v.microsecond:
            raise ValueError("time must be whole minutes (HH:MM)")
        return v
    raise ValueError("time must be an HH:MM string")


class Assignment(BaseModel):
    """
    One subject's slot inside a course: room + teacher + days + [start, end).
    Cross-field rules (start < end, non-empty days) are enforced by
    check_conflict, not here.
    """
    model_config = ConfigDict(frozen=True)

    course_id: str
    subject_id: str
    room: Optional[str] = None
    teacher: Optional[str] = None
    days: List[Weekday] = Field(default_factory=list)
    time_start: time
    time_end: time

    @field_validator("room", "teacher", mode="before")
    @classmethod
    def _strip(cls, v):
        return _blank_to_none(v)

    @field_validator("days", mode="before")
    @classmethod
    def _dedupe_days(cls, v):
        return normalize_days(v or [])

    @field_validator("time_start", "time_end", mode="before")
    @classmethod
    def _clock(cls, v):
        return _strict_clock(v)


class ConflictResult(BaseModel):
    conflict: bool = False
    with_subject_id: Optional[str] = None
    reason: Optional[ConflictReason] = None

    @classmethod
    def none(cls) -> "ConflictResult":
        return cls()

    @classmethod
    def found(cls, subject_id: str, reason: ConflictReason) -> "ConflictResult":
        return cls(conflict=True, with_subject_id=subject_id, reason=reason)


class ScheduleIn(BaseModel):
    """Form body for one subject's schedule row."""
    room: Optional[str] = None
    teacher: Optional[str] = Field(default=None, description="staff id")
    days: List[Weekday] = Field(default_factory=list)
    time_start: time = Field(description="HH:MM")
    time_end: time = Field(description="HH:MM")

    @field_validator("room", "teacher", mode="before")
    @classmethod
    def _strip(cls, v):
        return _blank_to_none(v)

    @field_validator("days", mode="before")
    @classmethod
    def _dedupe_days(cls, v):
        return normalize_days(v or [])

    @field_validator("time_start", "time_end", mode="before")
    @classmethod
    def _clock(cls, v):
        return _strict_clock(v)


class ScheduleCheckIn(ScheduleIn):
    subject_id: str


class ScheduleOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    course_id: str
    subject_id: str
    room: Optional[str] = None
    teacher_id: Optional[str] = None
    days: List[Weekday] = []
    time_start: str
    time_end: str


class ScheduleConflictOut(BaseModel):
    message: str
    conflict_subject_id: str
    reason: ConflictReason


class SubjectScheduleOut(BaseModel):
    subject_id: str
    subject_code: str
    description: Optional[str] = None
    units: Optional[int] = None
    year_level: str
    schedule_id: Optional[str] = None
    room: Optional[str] = None
    teacher_id: Optional[str] = None
    teacher_name: str = ""
    days: List[Weekday] = []
    time_start: Optional[str] = None
    time_end: Optional[str] = None


class ScheduleBoardOut(BaseModel):
    course_id: str
    semester: str
    year_levels: Dict[str, List[SubjectScheduleOut]]  # "1st Year" ...


class TodayScheduleOut(ScheduleOut):
    subject_code: Optional[str] = None
    description: Optional[str] = None
    semester: Optional[str] = None
    year_level: Optional[str] = None


class AttendanceQrOut(BaseModel):
    schedule_id: str
    school_year: str
    qr_value: str
