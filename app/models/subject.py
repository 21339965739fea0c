from sqlalchemy import Column, Integer, String, Text, ForeignKey
from sqlalchemy.orm import relationship
from app.database import Base

class Subject(Base):
    __tablename__ = "subjects"

    id = Column(String(40), primary_key=True)
    course_id = Column(String(20), ForeignKey("courses.id", ondelete="CASCADE"), nullable=False, index=True)

    subject_code = Column(String(20), nullable=False)
    description = Column(Text)
    units = Column(Integer)

    # "1st Sem" / "2nd Sem" / "Summer"
    semester = Column(String(10), nullable=False)
    # "1st Year" ...
    year_level = Column(String(20), nullable=False)

    course = relationship("Course", back_populates="subjects")
