from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field


class TeacherOptionOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    first_name: str
    last_name: str
    position: str
    course: Optional[str] = None
    # "First Last (COURSE)", shown in the teacher picker
    label: str


Position = Literal["Admin", "Dean", "Teacher", "Staff"]


class StaffBase(BaseModel):
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    gender: Optional[str] = None
    address: Optional[str] = None
    mobile_number: Optional[str] = None
    position: Position
    department: Optional[str] = None
    course: Optional[str] = None


class StaffCreate(StaffBase):
    pass


class StaffUpdate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    first_name: Optional[str] = Field(default=None, min_length=1)
    last_name: Optional[str] = Field(default=None, min_length=1)
    gender: Optional[str] = None
    address: Optional[str] = None
    mobile_number: Optional[str] = None
    position: Optional[Position] = None
    department: Optional[str] = None
    course: Optional[str] = None


class StaffOut(StaffBase):
    model_config = ConfigDict(from_attributes=True)

    id: str


class NextIdOut(BaseModel):
    next_id: str
