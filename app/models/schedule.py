from sqlalchemy import Column, String, DateTime, ForeignKey, JSON, UniqueConstraint
from sqlalchemy.sql import func
from app.database import Base

class Schedule(Base):
    __tablename__ = "schedules"
    __table_args__ = (UniqueConstraint("course_id", "subject_id", name="uq_schedule_course_subject"),)

    # "{course_id}-{subject_id}"
    id = Column(String(80), primary_key=True)
    course_id = Column(String(20), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)
    subject_id = Column(String(40), ForeignKey("subjects.id", ondelete="CASCADE"), nullable=False)

    room = Column(String(50), nullable=True)
    teacher_id = Column(String(40), ForeignKey("staff.id"), nullable=True, index=True)

    # ["Monday", "Wednesday"]
    days = Column(JSON, nullable=False, default=list)
    # "HH:MM"
    time_start = Column(String(5), nullable=False)
    time_end = Column(String(5), nullable=False)

    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # course and subject ids never contain the separator, so the id splits one way
    ID_SEPARATOR = "-"

    @staticmethod
    def make_id(course_id: str, subject_id: str) -> str:
        return f"{course_id}{Schedule.ID_SEPARATOR}{subject_id}"
