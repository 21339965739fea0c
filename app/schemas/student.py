from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field


class StudentBase(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    gender: Optional[str] = None
    address: Optional[str] = None
    mobile_number: Optional[str] = None
    department: Optional[str] = None
    course: Optional[str] = None
    year_level: Optional[str] = None


class StudentCreate(StudentBase):
    pass


class StudentUpdate(BaseModel):
    # student_id / school_year are assigned on create and never edited
    model_config = ConfigDict(extra="forbid")

    first_name: Optional[str] = Field(default=None, min_length=1)
    last_name: Optional[str] = Field(default=None, min_length=1)
    gender: Optional[str] = None
    address: Optional[str] = None
    mobile_number: Optional[str] = None
    department: Optional[str] = None
    course: Optional[str] = None
    year_level: Optional[str] = None


class StudentOut(StudentBase):
    model_config = ConfigDict(from_attributes=True)

    id: int
    student_id: str
    school_year: str


class StudentListOut(BaseModel):
    items: List[StudentOut]
    total: int
    page: int
    page_size: int
