from sqlalchemy import Column, Integer, String, TIMESTAMP
from datetime import datetime
from app.database import Base
from sqlalchemy import ForeignKey
class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(50), unique=True, nullable=False)
    password_hash = Column(String, nullable=False)
    # Admin / Dean / Teacher / Staff
    role = Column(String(20), nullable=False)
    created_at = Column(TIMESTAMP, default=datetime.utcnow)
    staff_id = Column(String(40), ForeignKey("staff.id"), nullable=True)
