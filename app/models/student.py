from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.sql import func
from app.database import Base

class Student(Base):
    __tablename__ = "students"

    id = Column(Integer, primary_key=True, index=True)
    # "2026-00001", numbered per school year
    student_id = Column(String(20), unique=True, nullable=False)
    school_year = Column(String(9), nullable=False, index=True)

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    gender = Column(String(20))
    address = Column(Text)
    mobile_number = Column(String(30))
    department = Column(String(50))
    course = Column(String(20))
    year_level = Column(String(20))

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
