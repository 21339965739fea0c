from sqlalchemy import Column, String
from sqlalchemy.orm import relationship
from app.database import Base

class Course(Base):
    __tablename__ = "courses"

    id = Column(String(20), primary_key=True)
    name = Column(String(255), nullable=False)
    # "Board Courses" / "Non-Board Courses"
    department = Column(String(50))

    subjects = relationship("Subject", back_populates="course")
