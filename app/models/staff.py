from sqlalchemy import Column, String, Text
from app.database import Base

TEACHING_POSITIONS = ("Teacher", "Dean")

class Staff(Base):
    __tablename__ = "staff"

    # "2008-00001"
    id = Column(String(40), primary_key=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    gender = Column(String(20))
    address = Column(Text)
    mobile_number = Column(String(30))
    # Admin / Dean / Teacher / Staff
    position = Column(String(20), nullable=False)
    department = Column(String(50))
    course = Column(String(20))

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"
